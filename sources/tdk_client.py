"""Plain dictionary source (TDK Güncel Türkçe Sözlük JSON lookup)."""

from __future__ import annotations

import json
import time
from typing import Any

import httpx

from config.config import SourceId, get_config
from models.etymology import PlainPayload
from models.source_result import SourceResult
from sources.http import UpstreamStatusError, elapsed_ms, fetch_text, url_key
from utils.logger import get_logger

logger = get_logger(__name__)

SOURCE = SourceId.PLAIN
MAX_EXAMPLES = 3


def _first_headword(data: Any) -> dict[str, Any] | None:
    # A miss comes back as {"error": "Sonuç bulunamadı"} instead of a list
    if not isinstance(data, list):
        return None
    for item in data:
        if isinstance(item, dict) and item.get("madde"):
            return item
    return None


def _meanings(entry: dict[str, Any]) -> list[dict[str, Any]]:
    meanings = entry.get("anlamlarListe") or []
    return [m for m in meanings if isinstance(m, dict)]


def _word_type(meaning: dict[str, Any] | None) -> str:
    if not meaning:
        return ""
    properties = meaning.get("ozelliklerListe") or []
    names = [p.get("tam_adi", "").strip() for p in properties if isinstance(p, dict)]
    return ", ".join(n for n in names if n)


def _examples(meanings: list[dict[str, Any]], limit: int = MAX_EXAMPLES) -> tuple[str, ...]:
    examples: list[str] = []
    for meaning in meanings:
        for example in meaning.get("orneklerListe") or []:
            text = example.get("ornek", "").strip() if isinstance(example, dict) else ""
            if text:
                examples.append(text)
            if len(examples) >= limit:
                return tuple(examples)
    return tuple(examples)


def parse_response(data: Any) -> PlainPayload | None:
    """Map the upstream's response shape to a PlainPayload; None when there is no headword."""
    entry = _first_headword(data)
    if entry is None:
        return None

    meanings = _meanings(entry)
    primary = meanings[0] if meanings else None
    return PlainPayload(
        definition=(primary or {}).get("anlam", "").strip(),
        type=_word_type(primary),
        etymology=(entry.get("lisan") or "").strip(),
        examples=_examples(meanings),
    )


async def lookup(word: str, client: httpx.AsyncClient) -> SourceResult:
    """
    Look ``word`` up in the official dictionary.

    IMPORTANT: Never raises exceptions - returns a not-found or upstream-error result instead
    """
    start_time = time.monotonic()
    url = get_config().build_url(SOURCE, url_key(word))

    try:
        body = await fetch_text(client, url, SOURCE.value)
        data = json.loads(body)
    except UpstreamStatusError as e:
        return SourceResult.upstream_error(
            SOURCE,
            word,
            code="http_status",
            message=str(e),
            latency_ms=elapsed_ms(start_time),
            details={"status_code": e.status_code},
        )
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.error(
            f"Plain dictionary fetch failed: {e}",
            extra={"extra_fields": {"word": word, "error_type": type(e).__name__}},
        )
        return SourceResult.upstream_error(
            SOURCE, word, code="transport", message=str(e) or type(e).__name__,
            latency_ms=elapsed_ms(start_time),
        )
    except ValueError as e:
        logger.error(
            f"Plain dictionary returned malformed JSON: {e}",
            extra={"extra_fields": {"word": word}},
        )
        return SourceResult.upstream_error(
            SOURCE, word, code="malformed", message="Malformed response body",
            latency_ms=elapsed_ms(start_time),
        )

    try:
        payload = parse_response(data)
    except (AttributeError, TypeError) as e:
        logger.error(
            f"Plain dictionary response has an unexpected shape: {e}",
            extra={"extra_fields": {"word": word}},
            exc_info=True,
        )
        payload = None

    if payload is None:
        return SourceResult.not_found(SOURCE, word, latency_ms=elapsed_ms(start_time))

    return SourceResult.found(SOURCE, word, payload, latency_ms=elapsed_ms(start_time))
