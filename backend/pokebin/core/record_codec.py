"""Record Codec — packs a Paste into the opaque blob stored per row, and back.

Layout (little-endian, fields in this order):
    id          u64
    title       u64 length + bytes
    author      u64 length + bytes
    notes       u64 length + bytes
    rental      u8  length + bytes
    paste       u64 length + bytes
    format      u64 length + bytes

Invariants:
    - decode(encode(p)) == p for every byte string, including empty fields
    - Every length prefix equals the byte length that follows it
    - rental longer than 255 bytes raises RentalTooLongError, never truncates
    - decode consumes the whole buffer: short buffers and trailing bytes both
      raise MalformedRecordError

Design Decisions:
    - struct over a declarative binary library: seven fixed fields, two widths
    - Field table drives both directions so encode and decode cannot drift apart
"""

import struct
from dataclasses import dataclass, fields, replace

from pokebin.core.errors import (
    ErrorContext, MalformedRecordError, RentalTooLongError,
)

_ID = struct.Struct("<Q")
_WIDE_LEN = struct.Struct("<Q")
_NARROW_LEN = struct.Struct("<B")

RENTAL_MAX_BYTES = 0xFF
_ID_MAX = 0xFFFF_FFFF_FFFF_FFFF

# (field name, length prefix) in wire order, after id
_FIELD_LAYOUT: tuple[tuple[str, struct.Struct], ...] = (
    ("title", _WIDE_LEN),
    ("author", _WIDE_LEN),
    ("notes", _WIDE_LEN),
    ("rental", _NARROW_LEN),
    ("paste", _WIDE_LEN),
    ("format", _WIDE_LEN),
)


@dataclass(frozen=True)
class Paste:
    """A stored paste. Text fields are raw bytes, kept exactly as submitted."""
    id: int = 0
    title: bytes = b""
    author: bytes = b""
    notes: bytes = b""
    rental: bytes = b""
    paste: bytes = b""
    format: bytes = b""

    @classmethod
    def from_text(
        cls,
        title: str = "",
        author: str = "",
        notes: str = "",
        rental: str = "",
        paste: str = "",
        format: str = "",
    ) -> "Paste":
        """Build an unassigned (id=0) record from submitted text."""
        return cls(
            id=0,
            title=title.encode("utf-8"),
            author=author.encode("utf-8"),
            notes=notes.encode("utf-8"),
            rental=rental.encode("utf-8"),
            paste=paste.encode("utf-8"),
            format=format.encode("utf-8"),
        )

    def text(self, name: str) -> str:
        """Decode a byte field for display. Invalid UTF-8 is replaced, never raised."""
        if name not in _TEXT_FIELDS:
            raise KeyError(name)
        return getattr(self, name).decode("utf-8", errors="replace")

    def with_id(self, paste_id: int) -> "Paste":
        return replace(self, id=paste_id)


_TEXT_FIELDS = frozenset(f.name for f in fields(Paste) if f.name != "id")


def encode(paste: Paste) -> bytes:
    """Serialize a Paste to its blob form."""
    if not 0 <= paste.id <= _ID_MAX:
        raise MalformedRecordError(
            f"id {paste.id} does not fit an unsigned 64-bit integer",
            ErrorContext(field_name="id"),
        )
    if len(paste.rental) > RENTAL_MAX_BYTES:
        raise RentalTooLongError(
            len(paste.rental), RENTAL_MAX_BYTES,
            ErrorContext(paste_id=paste.id or None, field_name="rental"),
        )

    parts = [_ID.pack(paste.id)]
    for name, prefix in _FIELD_LAYOUT:
        value: bytes = getattr(paste, name)
        parts.append(prefix.pack(len(value)))
        parts.append(value)
    return b"".join(parts)


def decode(data: bytes) -> Paste:
    """Deserialize a blob produced by encode().

    Raises MalformedRecordError when a prefix or a declared field runs past the
    end of the buffer, or when bytes remain after the final field.
    """
    view = memoryview(data)
    paste_id = _read_prefix(view, 0, _ID, "id")
    offset = _ID.size
    values: dict[str, bytes] = {}

    for name, prefix in _FIELD_LAYOUT:
        length = _read_prefix(view, offset, prefix, name)
        offset += prefix.size
        end = offset + length
        if end > len(view):
            raise MalformedRecordError(
                f"field '{name}' declares {length} bytes but only "
                f"{len(view) - offset} remain",
                ErrorContext(field_name=name, offset=offset),
            )
        values[name] = bytes(view[offset:end])
        offset = end

    if offset != len(view):
        raise MalformedRecordError(
            f"{len(view) - offset} trailing bytes after the final field",
            ErrorContext(offset=offset),
        )
    return Paste(id=paste_id, **values)


def _read_prefix(view: memoryview, offset: int, prefix: struct.Struct, name: str) -> int:
    if offset + prefix.size > len(view):
        raise MalformedRecordError(
            f"buffer ends before the '{name}' prefix is complete",
            ErrorContext(field_name=name, offset=offset),
        )
    (value,) = prefix.unpack_from(view, offset)
    return value
