"""Paste store tests — insert/fetch over a real (SQLite) async session.

Invariants:
    - create_paste returns the database-assigned id; the blob keeps id=0
    - get_paste returns the decoded record with the row id substituted
    - Missing rows -> ResourceNotFoundError; corrupt blobs -> MalformedRecordError
"""

import pytest
from sqlalchemy import select

from pokebin.core import record_codec
from pokebin.core.errors import MalformedRecordError, RentalTooLongError, ResourceNotFoundError
from pokebin.core.record_codec import Paste
from pokebin.models.paste_blob import PasteBlob
from pokebin.services import paste_store


async def test_create_then_get_round_trip(test_db):
    paste = Paste.from_text(title="Sun", rental="R1", paste="Garchomp", format="gen9ou")
    paste_id = await paste_store.create_paste(test_db, paste)

    fetched = await paste_store.get_paste(test_db, paste_id)
    assert fetched == paste.with_id(paste_id)


async def test_ids_are_assigned_in_order(test_db):
    first = await paste_store.create_paste(test_db, Paste.from_text(title="a"))
    second = await paste_store.create_paste(test_db, Paste.from_text(title="b"))
    assert second > first > 0


async def test_stored_blob_keeps_unassigned_id(test_db):
    paste_id = await paste_store.create_paste(test_db, Paste(id=99, title=b"x"))
    result = await test_db.execute(select(PasteBlob.data).where(PasteBlob.id == paste_id))
    assert record_codec.decode(result.scalar_one()).id == 0


async def test_missing_paste_raises_not_found(test_db):
    with pytest.raises(ResourceNotFoundError) as exc_info:
        await paste_store.get_paste(test_db, 12345)
    assert exc_info.value.context.paste_id == 12345


async def test_corrupt_blob_raises_malformed(test_db):
    row = PasteBlob(data=b"\x01\x02\x03")
    test_db.add(row)
    await test_db.commit()
    await test_db.refresh(row)

    with pytest.raises(MalformedRecordError) as exc_info:
        await paste_store.get_paste(test_db, row.id)
    assert exc_info.value.context.paste_id == row.id


async def test_oversized_rental_is_not_stored(test_db):
    with pytest.raises(RentalTooLongError):
        await paste_store.create_paste(test_db, Paste(rental=b"r" * 256))
    result = await test_db.execute(select(PasteBlob))
    assert result.scalars().all() == []
