"""
Origin-note scraping source (Etimoloji Türkçe).

The upstream accepts native Turkish letters in its path and numbers homonym
pages as ``<word>1``, ``<word>2``, ... next to the bare word.
"""

from __future__ import annotations

import html
import re
import time
from typing import NamedTuple

import httpx
from bs4 import BeautifulSoup

from config.config import SourceId, get_config
from models.etymology import OriginNotePayload
from models.source_result import SourceResult
from sources.homonyms import collect, fetch_variants, is_meaningful, merge_fragments, variant_keys
from sources.http import elapsed_ms, url_key
from utils.logger import get_logger
from utils.text_normalizer import normalize_fragment, split_html_into_paragraphs

logger = get_logger(__name__)

SOURCE = SourceId.SCRAPE_B
ORIGIN_HEADING = "Kelime Kökeni"
OLDEST_SOURCE_HEADING = "Tarihte En Eski Kaynak"
FALLBACK_SELECTOR = "article p, .content p, main p"
FALLBACK_CHAR_BUDGET = 500
FALLBACK_MIN_PARAGRAPH = 20

_BODY_ORIGIN_RE = re.compile(ORIGIN_HEADING + r"[:\s]+([^.]+\.)", re.IGNORECASE)


class PageSections(NamedTuple):
    origin: str
    oldest_source: str


def variant_urls(word: str, variants: int | None = None) -> list[str]:
    config = get_config()
    count = config.HOMONYM_VARIANTS if variants is None else variants
    slug = url_key(word.strip().lower())
    return [config.build_url(SOURCE, key) for key in variant_keys(slug, count, separator="")]


def _text_fragment(text: str) -> str:
    return normalize_fragment(html.escape(text, quote=False))


def _section_after(heading) -> str:
    sibling = heading.find_next_sibling()
    if sibling is None or sibling.name != "p":
        return ""
    return normalize_fragment(sibling.decode_contents())


def extract_sections(page: str) -> PageSections | None:
    """Pull the origin and oldest-source sections out of one page."""
    soup = BeautifulSoup(page, "html.parser")
    origin = ""
    oldest_source = ""

    for heading in soup.find_all("h3"):
        title = heading.get_text(" ", strip=True)
        if ORIGIN_HEADING in title and not origin:
            origin = _section_after(heading)
        elif OLDEST_SOURCE_HEADING in title and not oldest_source:
            oldest_source = _section_after(heading)

    if not origin:
        texts = [p.get_text(" ", strip=True) for p in soup.select(FALLBACK_SELECTOR)]
        joined = " ".join(t for t in texts if len(t) > FALLBACK_MIN_PARAGRAPH)
        origin = _text_fragment(joined[:FALLBACK_CHAR_BUDGET])

    if not origin and not oldest_source:
        body = soup.body or soup
        match = _BODY_ORIGIN_RE.search(body.get_text(" "))
        if match:
            origin = _text_fragment(match.group(1).strip())

    origin = origin if is_meaningful(origin) else ""
    oldest_source = oldest_source if is_meaningful(oldest_source) else ""
    if not origin and not oldest_source:
        return None
    return PageSections(origin=origin, oldest_source=oldest_source)


async def lookup(word: str, client: httpx.AsyncClient) -> SourceResult:
    """
    Fetch every homonym page of ``word`` and merge their origin notes.

    IMPORTANT: Never raises exceptions - returns a not-found result instead
    """
    start_time = time.monotonic()
    pages = await fetch_variants(client, variant_urls(word), SOURCE.value)

    try:
        sections = collect(pages, extract_sections)
    except Exception as e:
        logger.error(
            f"Origin note extraction failed: {e}",
            extra={"extra_fields": {"word": word, "error_type": type(e).__name__}},
            exc_info=True,
        )
        sections = []

    if not sections:
        return SourceResult.not_found(
            SOURCE, word, message="No etymology content found", latency_ms=elapsed_ms(start_time)
        )

    payload = OriginNotePayload(
        origin=merge_fragments([s.origin for s in sections]),
        oldest_source=merge_fragments([s.oldest_source for s in sections]),
        paragraphs=tuple(
            tuple(split_html_into_paragraphs(s.origin or s.oldest_source)) for s in sections
        ),
    )
    logger.info(
        "Origin note lookup successful",
        extra={"extra_fields": {"word": word, "senses": len(sections)}},
    )
    return SourceResult.found(SOURCE, word, payload, latency_ms=elapsed_ms(start_time))
