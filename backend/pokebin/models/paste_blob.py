"""PasteBlob ORM — one opaque record-codec blob per paste.

Invariants:
    - id is a BIGINT autoincrement primary key, assigned by the database
    - data is the exact output of record_codec.encode(); never parsed in SQL

Design Decisions:
    - Single blob column over one column per field: the record layout is the
      storage contract, the table only provides "insert -> id" and "fetch by id"
    - BigInteger with an Integer variant on SQLite: SQLite only autoincrements
      an INTEGER PRIMARY KEY
"""

from sqlalchemy import BigInteger, Integer, LargeBinary
from sqlalchemy.orm import Mapped, mapped_column

from pokebin.db.base import Base


class PasteBlob(Base):
    __tablename__ = "pastes_comp"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True, autoincrement=True,
    )
    data: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
