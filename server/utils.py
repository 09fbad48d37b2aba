"""Shared utilities for FastAPI routes."""

from fastapi import status
from fastapi.responses import JSONResponse

from models.source_result import SourceResult, SourceStatus
from server.schemas.responses import ErrorResponseDTO

MAX_WORD_CHARS = 64

STATUS_CODES = {
    SourceStatus.FOUND: status.HTTP_200_OK,
    SourceStatus.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    SourceStatus.UPSTREAM_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_response(status_code: int, message: str, source: str | None = None, word: str | None = None):
    body = ErrorResponseDTO(error=message, source=source, word=word)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def validate_word(word: str | None) -> str | None:
    """Return an error message for an unusable word, None when it is fine."""
    cleaned = (word or "").strip()
    if not cleaned:
        return "Word parameter is required"
    if len(cleaned) > MAX_WORD_CHARS:
        return f"Word exceeds {MAX_WORD_CHARS} characters"
    return None


def failure_response(result: SourceResult):
    """Map a not-found / upstream-error result to its HTTP error response."""
    if result.status == SourceStatus.NOT_FOUND:
        message = result.error.message if result.error else "Word not found"
    else:
        message = f"Failed to fetch data from {result.source.value}"
    return error_response(
        STATUS_CODES.get(result.status, status.HTTP_500_INTERNAL_SERVER_ERROR),
        message,
        source=result.source.value,
        word=result.word,
    )
