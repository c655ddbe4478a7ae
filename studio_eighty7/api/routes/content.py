"""
Content read endpoints.

Endpoints:
- GET /api/content/{resource} - tracks, albums, services or about

Always 200: when the content source is unusable the bundled dataset is
served and `provenance` says so.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from studio_eighty7.api.deps import get_content_source
from studio_eighty7.components.content import ContentSourcePort
from studio_eighty7.domain.entities import ContentResource, Provenance

router = APIRouter()


class ContentResponse(BaseModel):
    data: list[dict[str, Any]]
    provenance: Provenance


@router.get("/{resource}", response_model=ContentResponse)
async def read_content(
    resource: ContentResource,
    source: ContentSourcePort = Depends(get_content_source),
) -> ContentResponse:
    batch = await source.fetch(resource)
    return ContentResponse(
        data=[item.model_dump(by_alias=True) for item in batch.items],
        provenance=batch.provenance,
    )
