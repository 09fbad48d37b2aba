"""
Structured dictionary source (Nişanyan Sözlük).

The upstream serves its word pages as index-graph JSON; every homonym entry
is kept as a separate EtymologyEntry with its own synthesized sentence.
"""

from __future__ import annotations

import re
import time
from typing import Any, Iterable

import httpx

from config.config import SourceId, get_config
from models.etymology import EtymologyEntry, EtymologyStep, Language, Relation, StructuredPayload
from models.source_result import SourceResult
from sources.http import UpstreamStatusError, elapsed_ms, fetch_text, url_key
from sources.index_graph import (
    locate_data_chunk,
    resolve,
    resolve_list,
    resolve_object,
    resolve_text,
    root_object,
)
from utils.logger import get_logger

logger = get_logger(__name__)

SOURCE = SourceId.STRUCTURED

# Upstream writes "a.a." when a step keeps the meaning of the previous one
SAME_SENSE_SENTINEL = "a.a."
SAME_SENSE_PHRASE = "aynı anlamda"

_FORMAT_CODE_RE = re.compile(r"%[biu]")
_WHITESPACE_RE = re.compile(r"\s+")
_PAREN_OPEN_RE = re.compile(r"\(\s+")
_PAREN_CLOSE_RE = re.compile(r"\s+\)")

_PARENTHESIS_MARKERS = {"(": "open", ")": "close"}


def strip_format_codes(text: str) -> str:
    """Remove the upstream's %b / %i / %u inline formatting codes."""
    return _FORMAT_CODE_RE.sub("", text or "").strip()


def _as_object(store: list[Any], ref: Any) -> dict[str, Any]:
    return ref if isinstance(ref, dict) else resolve_object(store, ref)


def _parse_language(store: list[Any], ref: Any) -> Language | None:
    obj = _as_object(store, ref)
    name = resolve_text(store, obj.get("name"))
    if not name:
        return None
    return Language(name=name, abbreviation=resolve_text(store, obj.get("abbreviation")))


def _parse_step(store: list[Any], ref: Any) -> EtymologyStep:
    obj = _as_object(store, ref)
    relation = resolve_object(store, obj.get("relation"))
    languages = tuple(
        lang
        for lang in (_parse_language(store, r) for r in resolve_list(store, obj.get("languages")))
        if lang is not None
    )
    return EtymologyStep(
        languages=languages,
        original_text=strip_format_codes(resolve_text(store, obj.get("originalText"))),
        romanized_text=strip_format_codes(resolve_text(store, obj.get("romanizedText"))),
        definition=strip_format_codes(resolve_text(store, obj.get("definition"))),
        relation=Relation(
            text=strip_format_codes(resolve_text(store, relation.get("text"))),
            name=resolve_text(store, relation.get("name")),
            abbreviation=resolve_text(store, relation.get("abbreviation")),
        ),
        parenthesis=_PARENTHESIS_MARKERS.get(resolve_text(store, obj.get("paranthesis"))),
    )


def build_sentence(steps: Iterable[EtymologyStep]) -> str:
    """Flatten a chain of steps into one readable sentence."""
    parts: list[str] = []
    for step in steps:
        if step.parenthesis == "open":
            parts.append("(")
        parts.append(", ".join(lang.name for lang in step.languages))
        parts.append(step.form)
        if step.definition == SAME_SENSE_SENTINEL:
            parts.append(SAME_SENSE_PHRASE)
        elif step.definition:
            parts.append(f'"{step.definition}"')
        parts.append(step.relation.text)
        if step.parenthesis == "close":
            parts.append(")")

    sentence = _WHITESPACE_RE.sub(" ", " ".join(p for p in parts if p)).strip()
    sentence = _PAREN_OPEN_RE.sub("(", sentence)
    return _PAREN_CLOSE_RE.sub(")", sentence)


def _related_words(store: list[Any], ref: Any) -> tuple[str, ...]:
    words = []
    for item in resolve_list(store, ref):
        value = resolve(store, item)
        if isinstance(value, dict):
            value = resolve_text(store, value.get("name"))
        if isinstance(value, str) and value:
            words.append(value)
    return tuple(words)


def _parse_entry(store: list[Any], obj: dict[str, Any], fallback_name: str) -> EtymologyEntry | None:
    steps = tuple(_parse_step(store, ref) for ref in resolve_list(store, obj.get("etymologies")))
    if not steps:
        return None
    sentence = build_sentence(steps)
    if not sentence:
        return None
    return EtymologyEntry(
        name=resolve_text(store, obj.get("name")) or fallback_name,
        steps=steps,
        sentence=sentence,
        note=strip_format_codes(resolve_text(store, obj.get("note"))),
        related_words=_related_words(store, obj.get("relatedWords")),
    )


def parse_entries(lines: Iterable[str], word: str = "") -> list[EtymologyEntry]:
    """
    Decode all homonym entries from the upstream's line-delimited records.

    The root slot either is a word object itself or holds a ``words`` list
    pointing at one object per homonym.
    """
    store = locate_data_chunk(lines)
    if store is None:
        return []

    root = root_object(store)
    if "words" in root:
        word_objects = [_as_object(store, ref) for ref in resolve_list(store, root.get("words"))]
    else:
        word_objects = [root]

    entries = []
    for obj in word_objects:
        entry = _parse_entry(store, obj, word)
        if entry is not None:
            entries.append(entry)
    return entries


async def lookup(word: str, client: httpx.AsyncClient) -> SourceResult:
    """
    Look ``word`` up in the structured dictionary.

    IMPORTANT: Never raises exceptions - returns a not-found or upstream-error result instead
    """
    start_time = time.monotonic()
    url = get_config().build_url(SOURCE, url_key(word))

    try:
        body = await fetch_text(client, url, SOURCE.value)
    except UpstreamStatusError as e:
        if e.status_code == 404:
            return SourceResult.not_found(SOURCE, word, latency_ms=elapsed_ms(start_time))
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
            f"Structured dictionary fetch failed: {e}",
            extra={"extra_fields": {"word": word, "error_type": type(e).__name__}},
        )
        return SourceResult.upstream_error(
            SOURCE, word, code="transport", message=str(e) or type(e).__name__,
            latency_ms=elapsed_ms(start_time),
        )

    try:
        entries = parse_entries(body.splitlines(), word)
    except Exception as e:
        # Upstream markup is not ours; unexpected shapes degrade to not-found
        logger.error(
            f"Structured dictionary parse failed: {e}",
            extra={"extra_fields": {"word": word, "error_type": type(e).__name__}},
            exc_info=True,
        )
        entries = []

    if not entries:
        return SourceResult.not_found(SOURCE, word, latency_ms=elapsed_ms(start_time))

    logger.info(
        "Structured dictionary lookup successful",
        extra={"extra_fields": {"word": word, "entries": len(entries)}},
    )
    return SourceResult.found(
        SOURCE, word, StructuredPayload(words=tuple(entries)), latency_ms=elapsed_ms(start_time)
    )
