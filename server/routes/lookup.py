"""Lookup endpoints: aggregate, streaming and per-source."""

import json

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import StreamingResponse

from config.config import SourceId
from orchestrator.lookup_orchestrator import LookupOrchestrator
from server.dependencies import get_orchestrator
from server.schemas.responses import LookupResponseDTO, SourceLookupResponseDTO, SourceStateDTO
from server.utils import error_response, failure_response, validate_word
from utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/lookup", tags=["Lookup"])


def _to_ndjson(event: dict) -> str:
    return json.dumps(event, ensure_ascii=False) + "\n"


@router.get("", response_model=LookupResponseDTO)
async def lookup_all(
    word: str | None = Query(None),
    orchestrator: LookupOrchestrator = Depends(get_orchestrator),
):
    """Query every source and answer once all of them reached a terminal state."""
    problem = validate_word(word)
    if problem:
        return error_response(status.HTTP_400_BAD_REQUEST, problem)

    session = await orchestrator.lookup(word)
    return LookupResponseDTO.from_session(session)


@router.get("/stream")
async def lookup_stream(
    word: str | None = Query(None),
    orchestrator: LookupOrchestrator = Depends(get_orchestrator),
):
    """Stream one NDJSON event per source as soon as that source resolves."""
    problem = validate_word(word)
    if problem:
        return error_response(status.HTTP_400_BAD_REQUEST, problem)

    word = word.strip()
    sources = orchestrator.sources

    async def event_stream():
        yield _to_ndjson({"type": "start", "word": word, "sources": [s.value for s in sources]})

        found_count = 0
        error_count = 0
        try:
            async for result in orchestrator.iter_results(word, sources):
                if result.is_found:
                    found_count += 1
                else:
                    error_count += 1
                yield _to_ndjson({
                    "type": "result",
                    "source": result.source.value,
                    "result": SourceStateDTO.from_source_result(result).model_dump(),
                })

            yield _to_ndjson({
                "type": "done",
                "word": word,
                "found_count": found_count,
                "error_count": error_count,
            })
        except Exception as exc:
            logger.error(
                f"Lookup stream failed: {exc}",
                extra={"extra_fields": {"word": word, "error_type": type(exc).__name__}},
                exc_info=True,
            )
            yield _to_ndjson({"type": "error", "message": str(exc)})

    return StreamingResponse(
        event_stream(),
        media_type="application/x-ndjson",
        headers={
            "Cache-Control": "no-cache",
            "X-Accel-Buffering": "no",
        },
    )


@router.get("/{source}", response_model=SourceLookupResponseDTO)
async def lookup_one(
    source: SourceId,
    word: str | None = Query(None),
    orchestrator: LookupOrchestrator = Depends(get_orchestrator),
):
    """Query a single source: 200 with data, 404 when the word is unknown, 500 on upstream failure."""
    problem = validate_word(word)
    if problem:
        return error_response(status.HTTP_400_BAD_REQUEST, problem, source=source.value)

    result = await orchestrator.lookup_source(source, word)
    if not result.is_found:
        return failure_response(result)
    return SourceLookupResponseDTO.from_source_result(result)
