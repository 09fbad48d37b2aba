from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from config.config import SourceId


class SourceStatus(str, Enum):
    PENDING = "pending"
    FOUND = "found"
    NOT_FOUND = "not-found"
    UPSTREAM_ERROR = "upstream-error"


TERMINAL_STATUSES = {SourceStatus.FOUND, SourceStatus.NOT_FOUND, SourceStatus.UPSTREAM_ERROR}


@dataclass(frozen=True)
class SourceError:
    code: str
    message: str
    source: str
    details: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        valid_codes = {"not_found", "timeout", "http_status", "transport", "malformed", "unknown"}
        if self.code not in valid_codes:
            object.__setattr__(self, "code", "unknown")


@dataclass(frozen=True)
class SourceResult:
    source: SourceId
    word: str
    status: SourceStatus
    payload: Any = None
    error: SourceError | None = None
    latency_ms: int = 0

    def __post_init__(self):
        if self.payload is not None and self.status != SourceStatus.FOUND:
            raise ValueError(f"payload is only allowed on found results, got {self.status.value}")
        if self.status == SourceStatus.FOUND and self.payload is None:
            raise ValueError("found results must carry a payload")

    @classmethod
    def pending(cls, source: SourceId, word: str) -> "SourceResult":
        return cls(source=source, word=word, status=SourceStatus.PENDING)

    @classmethod
    def found(cls, source: SourceId, word: str, payload: Any, latency_ms: int = 0) -> "SourceResult":
        return cls(
            source=source, word=word, status=SourceStatus.FOUND, payload=payload, latency_ms=latency_ms
        )

    @classmethod
    def not_found(
        cls, source: SourceId, word: str, message: str = "Word not found", latency_ms: int = 0
    ) -> "SourceResult":
        return cls(
            source=source,
            word=word,
            status=SourceStatus.NOT_FOUND,
            error=SourceError(code="not_found", message=message, source=source.value),
            latency_ms=latency_ms,
        )

    @classmethod
    def upstream_error(
        cls,
        source: SourceId,
        word: str,
        code: str,
        message: str,
        latency_ms: int = 0,
        details: dict[str, Any] | None = None,
    ) -> "SourceResult":
        return cls(
            source=source,
            word=word,
            status=SourceStatus.UPSTREAM_ERROR,
            error=SourceError(code=code, message=message, source=source.value, details=details or {}),
            latency_ms=latency_ms,
        )

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @property
    def is_found(self) -> bool:
        return self.status == SourceStatus.FOUND

    @property
    def is_error(self) -> bool:
        return self.status in {SourceStatus.NOT_FOUND, SourceStatus.UPSTREAM_ERROR}

    @property
    def view_state(self) -> str:
        """Three-valued state shown per source tab: pending, found or error."""
        if self.status == SourceStatus.PENDING:
            return "pending"
        return "found" if self.is_found else "error"

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source.value,
            "word": self.word,
            "state": self.view_state,
            "status": self.status.value,
            "data": self.payload.to_dict() if self.payload is not None else None,
            "error": (
                {"code": self.error.code, "message": self.error.message}
                if self.error
                else None
            ),
            "latency_ms": self.latency_ms,
        }
