"""Boundary Protocols — contracts between the pure core and its collaborators.

Invariants:
    - Core NEVER imports from infrastructure/, services/ or api/
    - Lookup tables are read-only after startup; no method mutates them
    - Image paths returned by ImageResolver are already public (prefix rewriting
      is the resolver's job, not the core's)

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Sync methods: lookups are in-memory dict reads, no IO at request time
"""

from typing import Protocol

from pokebin.core.domain_types import CanonicalEntry


class LookupTable(Protocol):
    """Species, move or item table keyed by normalized name."""
    def find_by_key(self, key: str) -> CanonicalEntry | None: ...


class ImageResolver(Protocol):
    """Maps a species search key and variant flags to an image path."""
    def get_image(self, search_key: str, shiny: bool, female: bool) -> str: ...
