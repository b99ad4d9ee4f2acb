"""Paste Routes — create, fetch raw, fetch detailed, and sprite lookup.

Invariants:
    - Routes never contain parsing or codec logic (delegate to core/services)
    - Unknown ids -> 404 RESOURCE_NOT_FOUND via the global PokebinError handler
    - Detailed view re-parses the stored text on every request (no cache)
    - Paths match the frontend's existing URLs (/create, /{id}/json, /detailed/{id})

Design Decisions:
    - Plain integer ids in URLs; id obfuscation belongs to a fronting layer
    - Integer path ids: a non-numeric id fails validation (400) before any
      database access
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from pokebin.api.dependencies import get_image_resolver, get_set_builder
from pokebin.core.repository_protocols import ImageResolver
from pokebin.core.set_builder import SetBuilder
from pokebin.infrastructure.database import get_db
from pokebin.schemas.paste import (
    DetailedPasteResponse, ImageResponse, PasteCreate, PasteCreated, PasteResponse,
)
from pokebin.services import paste_store

logger = logging.getLogger(__name__)
router = APIRouter(tags=["pastes"])


@router.post(
    "/create", response_model=PasteCreated,
    status_code=status.HTTP_201_CREATED,
)
async def create_paste(
    body: PasteCreate, db: AsyncSession = Depends(get_db),
):
    """Store a new paste and return its id."""
    paste_id = await paste_store.create_paste(db, body.to_record())
    return PasteCreated(id=paste_id)


@router.get("/{paste_id}/json", response_model=PasteResponse)
async def get_paste_json(
    paste_id: int, db: AsyncSession = Depends(get_db),
):
    """Raw stored fields."""
    paste = await paste_store.get_paste(db, paste_id)
    return PasteResponse.from_domain(paste)


@router.get("/detailed/{paste_id}", response_model=DetailedPasteResponse)
async def get_paste_detailed(
    paste_id: int,
    db: AsyncSession = Depends(get_db),
    builder: SetBuilder = Depends(get_set_builder),
):
    """Stored fields plus the team text broken down into sets and free text."""
    paste = await paste_store.get_paste(db, paste_id)
    contents = builder.build(paste.text("paste"))
    logger.debug(
        "Built detailed view",
        extra={"paste_id": paste_id, "block_count": len(contents)},
    )
    return DetailedPasteResponse.from_domain(paste, contents)


@router.get("/get-img/{mon}/{shiny}/{female}", response_model=ImageResponse)
async def get_image(
    mon: str,
    shiny: bool,
    female: bool,
    images: ImageResolver = Depends(get_image_resolver),
):
    """Public sprite path for a species search key."""
    return ImageResponse(img=images.get_image(mon, shiny, female))
