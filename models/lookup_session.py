"""
LookupSession - per-query state of every source.

Each source owns one slot. A slot starts pending and is resolved exactly once
to a terminal SourceResult; later writes are rejected.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable

from config.config import SourceId
from models.source_result import SourceResult, SourceStatus


class StateTransitionError(RuntimeError):
    """Raised when a source slot that already reached a terminal state is written again."""


@dataclass
class LookupSession:
    """
    State container for one submitted word.

    A new word gets a new session; results carrying another word are rejected
    so that late responses from an abandoned query cannot leak in.
    """

    word: str
    sources: tuple[SourceId, ...] = tuple(SourceId)
    _slots: dict[SourceId, SourceResult] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self):
        for source in self.sources:
            self._slots[source] = SourceResult.pending(source, self.word)

    def accepts(self, result: SourceResult) -> bool:
        return result.word == self.word and result.source in self._slots

    def resolve(self, result: SourceResult) -> None:
        if not result.is_terminal:
            raise StateTransitionError(f"{result.source.value}: cannot resolve to {result.status.value}")
        if not self.accepts(result):
            raise StateTransitionError(
                f"{result.source.value}: result for '{result.word}' does not belong to '{self.word}'"
            )
        current = self._slots[result.source]
        if current.is_terminal:
            raise StateTransitionError(
                f"{result.source.value}: already {current.view_state}, cannot move to {result.view_state}"
            )
        self._slots[result.source] = result

    def get(self, source: SourceId) -> SourceResult:
        return self._slots[source]

    def results(self) -> Iterable[SourceResult]:
        return (self._slots[source] for source in self.sources)

    @property
    def found_count(self) -> int:
        return sum(1 for r in self.results() if r.is_found)

    @property
    def error_count(self) -> int:
        return sum(1 for r in self.results() if r.is_error)

    @property
    def pending_count(self) -> int:
        return sum(1 for r in self.results() if r.status == SourceStatus.PENDING)

    @property
    def is_complete(self) -> bool:
        return self.pending_count == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "word": self.word,
            "results": {r.source.value: r.to_dict() for r in self.results()},
            "found_count": self.found_count,
            "error_count": self.error_count,
            "pending_count": self.pending_count,
        }
