"""Pydantic response models (DTOs) for FastAPI endpoints."""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponseDTO(BaseModel):
    error: str
    success: bool = False
    source: str | None = None
    word: str | None = None


class SourceLookupResponseDTO(BaseModel):
    source: str
    word: str
    success: bool = True
    data: dict[str, Any]
    latency_ms: int = 0

    @classmethod
    def from_source_result(cls, result):
        """Convert a found SourceResult to DTO."""
        return cls(
            source=result.source.value,
            word=result.word,
            data=result.payload.to_dict(),
            latency_ms=result.latency_ms,
        )


class SourceStateDTO(BaseModel):
    state: str
    status: str
    data: dict[str, Any] | None = None
    error: str | None = None
    latency_ms: int = 0

    @classmethod
    def from_source_result(cls, result):
        return cls(
            state=result.view_state,
            status=result.status.value,
            data=result.payload.to_dict() if result.payload is not None else None,
            error=result.error.message if result.error else None,
            latency_ms=result.latency_ms,
        )


class LookupResponseDTO(BaseModel):
    word: str
    results: dict[str, SourceStateDTO]
    found_count: int
    error_count: int

    @classmethod
    def from_session(cls, session):
        """Convert a completed LookupSession to DTO."""
        return cls(
            word=session.word,
            results={
                r.source.value: SourceStateDTO.from_source_result(r) for r in session.results()
            },
            found_count=session.found_count,
            error_count=session.error_count,
        )


class SourceInfoDTO(BaseModel):
    id: str
    name: str
    url: str | None = None


class SourceCatalogDTO(BaseModel):
    sources: list[SourceInfoDTO] = Field(default_factory=list)


class HealthResponseDTO(BaseModel):
    status: str
    timestamp: str
    version: str = "1.0.0"
