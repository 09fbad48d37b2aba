"""
Per-source payloads carried by a found SourceResult.

Each payload renders itself to the JSON shape served by the matching
``/lookup/<source>`` endpoint through ``to_dict()``.
"""

from dataclasses import dataclass, field
from typing import Any, Literal, Optional

ParenthesisMarker = Optional[Literal["open", "close"]]


@dataclass(frozen=True)
class Language:
    name: str
    abbreviation: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "abbreviation": self.abbreviation}


@dataclass(frozen=True)
class Relation:
    text: str = ""
    name: str = ""
    abbreviation: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "abbreviation": self.abbreviation, "text": self.text}


@dataclass(frozen=True)
class EtymologyStep:
    """One link of an etymology chain, e.g. Arapça kalima "söz" sözcüğünden alıntıdır."""

    languages: tuple[Language, ...] = ()
    original_text: str = ""
    romanized_text: str = ""
    definition: str = ""
    relation: Relation = field(default_factory=Relation)
    parenthesis: ParenthesisMarker = None

    @property
    def form(self) -> str:
        return self.romanized_text or self.original_text

    def to_dict(self) -> dict[str, Any]:
        return {
            "languages": [lang.to_dict() for lang in self.languages],
            "originalText": self.original_text,
            "romanizedText": self.romanized_text,
            "definition": self.definition,
            "relation": self.relation.to_dict(),
            "paranthesis": self.parenthesis,
        }


@dataclass(frozen=True)
class EtymologyEntry:
    """A single homonym / sense of the queried word."""

    name: str
    steps: tuple[EtymologyStep, ...]
    sentence: str
    note: str = ""
    related_words: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "etymologies": [step.to_dict() for step in self.steps],
            "sentence": self.sentence,
            "note": self.note,
        }
        if self.related_words:
            data["relatedWords"] = list(self.related_words)
        return data


@dataclass(frozen=True)
class StructuredPayload:
    words: tuple[EtymologyEntry, ...]

    @property
    def origin_language(self) -> Language | None:
        for entry in self.words:
            for step in entry.steps:
                if step.languages:
                    return step.languages[0]
            break
        return None

    def to_dict(self) -> dict[str, Any]:
        origin = self.origin_language
        return {
            "words": [entry.to_dict() for entry in self.words],
            "originLanguage": origin.to_dict() if origin else None,
        }


@dataclass(frozen=True)
class PlainPayload:
    definition: str = ""
    type: str = ""
    etymology: str = ""
    examples: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "definition": self.definition,
            "type": self.type,
            "etymology": self.etymology,
            "examples": list(self.examples),
        }


@dataclass(frozen=True)
class ScrapedPayload:
    """Merged homonym content from the article-scraping source."""

    content: str
    paragraphs: tuple[tuple[str, ...], ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"content": self.content, "paragraphs": [list(p) for p in self.paragraphs]}


@dataclass(frozen=True)
class OriginNotePayload:
    """Merged 'word origin' / 'oldest historical source' sections."""

    origin: str = ""
    oldest_source: str = ""
    paragraphs: tuple[tuple[str, ...], ...] = ()

    @property
    def content(self) -> str:
        return self.origin or self.oldest_source

    def to_dict(self) -> dict[str, Any]:
        return {
            "origin": self.origin,
            "oldestSource": self.oldest_source,
            "content": self.content,
            "paragraphs": [list(p) for p in self.paragraphs],
        }
