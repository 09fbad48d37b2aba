"""
Models package for per-source lookup results.
"""

from .etymology import (
    EtymologyEntry,
    EtymologyStep,
    Language,
    OriginNotePayload,
    PlainPayload,
    Relation,
    ScrapedPayload,
    StructuredPayload,
)
from .lookup_session import LookupSession, StateTransitionError
from .source_result import SourceError, SourceResult, SourceStatus

__all__ = [
    "EtymologyEntry",
    "EtymologyStep",
    "Language",
    "LookupSession",
    "OriginNotePayload",
    "PlainPayload",
    "Relation",
    "ScrapedPayload",
    "SourceError",
    "SourceResult",
    "SourceStatus",
    "StateTransitionError",
    "StructuredPayload",
]
