"""HTTP plumbing shared by the source adapters."""

from __future__ import annotations

import time
from typing import Callable
from urllib.parse import quote

import httpx

from config.config import get_config
from utils.logger import get_logger

logger = get_logger(__name__)

ClientFactory = Callable[[], httpx.AsyncClient]


class UpstreamStatusError(Exception):
    """Upstream answered with a non-success HTTP status."""

    def __init__(self, url: str, status_code: int):
        super().__init__(f"{url} returned HTTP {status_code}")
        self.url = url
        self.status_code = status_code


def build_client() -> httpx.AsyncClient:
    """Fresh client for a single adapter invocation."""
    config = get_config()
    return httpx.AsyncClient(
        timeout=config.REQUEST_TIMEOUT_S,
        follow_redirects=True,
        headers={
            "User-Agent": config.USER_AGENT,
            "Accept-Language": "tr-TR,tr;q=0.9,en-US;q=0.8,en;q=0.7",
        },
    )


def elapsed_ms(start_time: float) -> int:
    return int((time.monotonic() - start_time) * 1000)


async def fetch_text(client: httpx.AsyncClient, url: str, source: str) -> str:
    """
    GET ``url`` and return the body text.

    Raises:
        UpstreamStatusError: for any non-2xx status
        httpx.HTTPError: for transport failures
    """
    start_time = time.monotonic()
    response = await client.get(url)
    logger.info(
        "Upstream fetch",
        extra={
            "extra_fields": {
                "source": source,
                "url": url,
                "status_code": response.status_code,
                "latency_ms": elapsed_ms(start_time),
            }
        },
    )
    if not response.is_success:
        raise UpstreamStatusError(url, response.status_code)
    return response.text


def url_key(word: str) -> str:
    """Percent-encode ``word`` as a single path or query component ("/" included)."""
    return quote(word, safe="")
