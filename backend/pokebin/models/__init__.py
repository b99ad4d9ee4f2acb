"""ORM Models — SQLAlchemy declarative models.

Invariants:
    - All models inherit from Base (db/base.py)
    - All models imported here so Base.metadata is complete for create_all/Alembic
"""

from pokebin.models.paste_blob import PasteBlob  # noqa: F401
