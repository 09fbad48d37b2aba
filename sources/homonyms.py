"""
Homonym fan-out for the scraping sources.

Upstreams publish one page per sense of a spelled-alike word. All variant
pages are requested in parallel; a page that fails is simply absent. Results
keep the order in which the variants were declared, not arrival order.
"""

from __future__ import annotations

import asyncio
from typing import Callable, Optional, TypeVar

import httpx

from sources.http import UpstreamStatusError, fetch_text
from utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

HOMONYM_DIVIDER = '<hr class="homonym-divider">'
MIN_FRAGMENT_CHARS = 10


def variant_keys(base: str, count: int, separator: str = "-") -> list[str]:
    """``kir`` -> ``["kir", "kir-1", "kir-2", "kir-3"]`` for count=3."""
    return [base] + [f"{base}{separator}{n}" for n in range(1, count + 1)]


async def _fetch_variant(client: httpx.AsyncClient, url: str, source: str) -> Optional[str]:
    try:
        return await fetch_text(client, url, source)
    except UpstreamStatusError as e:
        logger.debug(f"Variant absent: {e}", extra={"extra_fields": {"source": source, "url": url}})
        return None
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.warning(
            f"Variant fetch failed: {e}",
            extra={"extra_fields": {"source": source, "url": url, "error_type": type(e).__name__}},
        )
        return None


async def fetch_variants(client: httpx.AsyncClient, urls: list[str], source: str) -> list[Optional[str]]:
    """Fetch every variant page concurrently; failed pages come back as None."""
    return list(await asyncio.gather(*(_fetch_variant(client, url, source) for url in urls)))


def is_meaningful(fragment: str | None) -> bool:
    return bool(fragment) and len(fragment.strip()) >= MIN_FRAGMENT_CHARS


def collect(pages: list[Optional[str]], extract: Callable[[str], Optional[T]]) -> list[T]:
    """Run ``extract`` on every fetched page, dropping absent pages and empty extractions."""
    extracted: list[T] = []
    for page in pages:
        if page is None:
            continue
        item = extract(page)
        if item is not None:
            extracted.append(item)
    return extracted


def merge_fragments(fragments: list[str]) -> str:
    """Join homonym senses with a thematic break, skipping noise-length fragments."""
    return HOMONYM_DIVIDER.join(f for f in fragments if is_meaningful(f))
