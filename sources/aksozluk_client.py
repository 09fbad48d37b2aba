"""
Article-scraping source (Aksözlük).

Pages live under an ASCII-folded slug; homonyms are published as
``<slug>-1``, ``<slug>-2``, ... next to the bare slug.
"""

from __future__ import annotations

import html
import time

import httpx
from bs4 import BeautifulSoup

from config.config import SourceId, get_config
from models.etymology import ScrapedPayload
from models.source_result import SourceResult
from sources.homonyms import collect, fetch_variants, is_meaningful, merge_fragments, variant_keys
from sources.http import elapsed_ms, url_key
from utils.logger import get_logger
from utils.text_normalizer import normalize_fragment, split_html_into_paragraphs

logger = get_logger(__name__)

SOURCE = SourceId.SCRAPE_A
FALLBACK_CHAR_BUDGET = 800

_TURKISH_TO_ASCII = str.maketrans("çÇğĞıİöÖşŞüÜâÂîÎûÛ", "cCgGiIoOsSuUaAiIuU")


def turkish_to_ascii(word: str) -> str:
    """``Çığlık`` -> ``ciglik``, ``hâlâ`` -> ``hala``"""
    return word.translate(_TURKISH_TO_ASCII).lower()


def variant_urls(word: str, variants: int | None = None) -> list[str]:
    config = get_config()
    count = config.HOMONYM_VARIANTS if variants is None else variants
    slug = url_key(turkish_to_ascii(word.strip()))
    return [config.build_url(SOURCE, key) for key in variant_keys(slug, count, separator="-")]


def extract_article(page: str) -> str | None:
    """Normalized article HTML of one page, or None when it holds nothing usable."""
    soup = BeautifulSoup(page, "html.parser")

    paragraphs = [p.decode_contents().strip() for p in soup.select("article p")]
    content = " ".join(p for p in paragraphs if p)

    if not content:
        texts = [p.get_text(" ", strip=True) for p in soup.find_all("p")]
        content = html.escape(" ".join(t for t in texts if t)[:FALLBACK_CHAR_BUDGET], quote=False)

    content = normalize_fragment(content)
    return content if is_meaningful(content) else None


async def lookup(word: str, client: httpx.AsyncClient) -> SourceResult:
    """
    Fetch every homonym page of ``word`` and merge their articles.

    IMPORTANT: Never raises exceptions - returns a not-found result instead
    """
    start_time = time.monotonic()
    pages = await fetch_variants(client, variant_urls(word), SOURCE.value)

    try:
        fragments = collect(pages, extract_article)
    except Exception as e:
        logger.error(
            f"Article extraction failed: {e}",
            extra={"extra_fields": {"word": word, "error_type": type(e).__name__}},
            exc_info=True,
        )
        fragments = []

    if not fragments:
        return SourceResult.not_found(
            SOURCE, word, message="No etymology content found", latency_ms=elapsed_ms(start_time)
        )

    logger.info(
        "Article lookup successful",
        extra={
            "extra_fields": {
                "word": word,
                "pages_fetched": sum(1 for p in pages if p is not None),
                "senses": len(fragments),
            }
        },
    )
    payload = ScrapedPayload(
        content=merge_fragments(fragments),
        paragraphs=tuple(tuple(split_html_into_paragraphs(f)) for f in fragments),
    )
    return SourceResult.found(SOURCE, word, payload, latency_ms=elapsed_ms(start_time))
