"""Paste Store — "insert blob -> receive id" and "fetch blob by id" over the async DB.

Invariants:
    - Records are stored with id=0 inside the blob; the row id is authoritative
    - Stored rows are never updated: a paste is immutable once created
    - get_paste always decodes fresh (no cache); corrupt blobs raise
      MalformedRecordError, missing rows raise ResourceNotFoundError

Design Decisions:
    - Functions taking an AsyncSession over a repository class: two operations,
      the route layer already owns the session via get_db
"""

import logging
from dataclasses import replace

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pokebin.core import record_codec
from pokebin.core.errors import ErrorContext, MalformedRecordError, ResourceNotFoundError
from pokebin.core.record_codec import Paste
from pokebin.models.paste_blob import PasteBlob

logger = logging.getLogger(__name__)


async def create_paste(db: AsyncSession, paste: Paste) -> int:
    """Encode and insert a new paste. Returns the id assigned by the database."""
    blob = record_codec.encode(replace(paste, id=0))
    row = PasteBlob(data=blob)
    db.add(row)
    await db.commit()
    await db.refresh(row)
    logger.info("Paste created", extra={"paste_id": row.id})
    return row.id


async def get_paste(db: AsyncSession, paste_id: int) -> Paste:
    """Fetch and decode a paste by id."""
    result = await db.execute(
        select(PasteBlob.data).where(PasteBlob.id == paste_id),
    )
    data = result.scalar_one_or_none()
    if data is None:
        raise ResourceNotFoundError(
            "Paste", str(paste_id), ErrorContext(paste_id=paste_id),
        )
    try:
        paste = record_codec.decode(data)
    except MalformedRecordError as e:
        e.context.paste_id = paste_id
        logger.error(
            f"Stored paste is corrupt: {e.message}",
            extra={"paste_id": paste_id, "error_code": e.code},
        )
        raise
    return paste.with_id(paste_id)
