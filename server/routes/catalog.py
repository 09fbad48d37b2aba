"""Static metadata about every source."""

from fastapi import APIRouter, Query

from config.config import SOURCE_INFO, SourceId
from server.schemas.responses import SourceCatalogDTO, SourceInfoDTO
from sources.http import url_key

router = APIRouter(tags=["Sources"])


@router.get("/sources", response_model=SourceCatalogDTO)
async def list_sources(word: str | None = Query(None)):
    """Display name of every source, plus its public page for ``word`` when given."""
    cleaned = (word or "").strip()
    return SourceCatalogDTO(
        sources=[
            SourceInfoDTO(
                id=source.value,
                name=SOURCE_INFO[source]["name"],
                url=SOURCE_INFO[source]["page_url"].replace("{word}", url_key(cleaned)) if cleaned else None,
            )
            for source in SourceId
        ]
    )
