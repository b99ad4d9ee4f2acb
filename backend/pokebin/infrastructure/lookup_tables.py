"""Lookup Tables — species, move and item tables loaded from JSON at startup.

Invariants:
    - Tables are loaded and verified once, then never mutated (shared read-only)
    - find_by_key: exact key first, then the shortest "<key>-..." form variant
    - Invalid entries are dropped with a warning; an unreadable file aborts startup
    - Image paths handed out are public paths: the storage dir prefix is rewritten

Design Decisions:
    - Plain dicts behind a small class: lookups are O(1) for exact keys, and the
      form-variant scan only runs on a miss
    - Variant image fallback is most-specific-first so missing art degrades to
      the default sprite rather than the placeholder
"""

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from pokebin.core.domain_types import CanonicalEntry
from pokebin.core.errors import LookupTableError

logger = logging.getLogger(__name__)


class JsonLookupTable:
    """Read-only table of CanonicalEntry keyed by normalized name."""

    def __init__(self, name: str, entries: Mapping[str, CanonicalEntry]):
        self.name = name
        self._entries = MappingProxyType(dict(entries))

    def __len__(self) -> int:
        return len(self._entries)

    def find_by_key(self, key: str) -> CanonicalEntry | None:
        if not key:
            return None
        entry = self._entries.get(key)
        if entry is not None:
            return entry
        prefix = key + "-"
        variants = [k for k in self._entries if k.startswith(prefix)]
        if not variants:
            return None
        return self._entries[min(variants, key=lambda k: (len(k), k))]


class TableImageResolver:
    """Picks a species sprite variant and maps it to its public path."""

    def __init__(
        self,
        images: Mapping[str, Mapping[str, str]],
        placeholder: str,
        storage_dir: str = "home",
        public_dir: str = "imgs",
    ):
        self._images = MappingProxyType(dict(images))
        self._placeholder = placeholder
        self._storage_dir = storage_dir
        self._public_dir = public_dir

    def get_image(self, search_key: str, shiny: bool, female: bool) -> str:
        variants = self._images.get(search_key)
        if not variants:
            return self.to_public_path(self._placeholder)

        if shiny and female:
            order = ("shiny_female", "shiny", "female", "default")
        elif shiny:
            order = ("shiny", "default")
        elif female:
            order = ("female", "default")
        else:
            order = ("default",)
        for variant in order:
            path = variants.get(variant)
            if path:
                return self.to_public_path(path)
        return self.to_public_path(self._placeholder)

    def to_public_path(self, path: str) -> str:
        """'home/garchomp.png' -> 'imgs/garchomp.png'. Only the leading segment is swapped."""
        head, sep, rest = path.lstrip("/").partition("/")
        if head == self._storage_dir and sep:
            return f"{self._public_dir}/{rest}"
        return path


# ─── Loading ─────────────────────────────────────────────────────

def read_table_file(path: str | Path, table: str) -> dict[str, Any]:
    """Read a JSON object file; anything else is a startup failure."""
    try:
        with open(path, encoding="utf-8") as fh:
            raw = json.load(fh)
    except (OSError, json.JSONDecodeError) as e:
        raise LookupTableError(table, str(e))
    if not isinstance(raw, dict):
        raise LookupTableError(table, "top-level JSON value must be an object")
    return raw


def verify_entries(raw: Mapping[str, Any], table: str) -> dict[str, dict]:
    """Keep entries that are objects with a non-empty 'name'."""
    valid: dict[str, dict] = {}
    for key, entry in raw.items():
        if not isinstance(entry, dict) or not entry.get("name"):
            logger.warning(
                f"Dropping invalid {table} entry '{key}'",
                extra={"table": table},
            )
            continue
        valid[key] = entry
    return valid


def build_species_table(raw: Mapping[str, Any]) -> tuple[JsonLookupTable, dict]:
    """Species table plus the image-variant map consumed by TableImageResolver."""
    entries = verify_entries(raw, "species")
    table = JsonLookupTable("species", {
        key: CanonicalEntry(
            key=key,
            display_name=e["name"],
            type=e.get("type1", ""),
            image_path=(e.get("images") or {}).get("default", ""),
        )
        for key, e in entries.items()
    })
    images = {
        key: {k: v for k, v in (e.get("images") or {}).items() if isinstance(v, str)}
        for key, e in entries.items()
    }
    return table, images


def build_move_table(raw: Mapping[str, Any]) -> JsonLookupTable:
    entries = verify_entries(raw, "moves")
    return JsonLookupTable("moves", {
        key: CanonicalEntry(key=key, display_name=e["name"], type=e.get("type1", ""))
        for key, e in entries.items()
    })


def build_item_table(raw: Mapping[str, Any]) -> JsonLookupTable:
    entries = verify_entries(raw, "items")
    return JsonLookupTable("items", {
        key: CanonicalEntry(
            key=key, display_name=e["name"], image_path=e.get("image", ""),
        )
        for key, e in entries.items()
    })


class LookupBundle:
    """Everything the set builder needs, loaded together at startup."""

    def __init__(
        self,
        species: JsonLookupTable,
        moves: JsonLookupTable,
        items: JsonLookupTable,
        images: TableImageResolver,
    ):
        self.species = species
        self.moves = moves
        self.items = items
        self.images = images


def load_lookup_bundle(
    species_path: str | Path,
    moves_path: str | Path,
    items_path: str | Path,
    placeholder: str,
    storage_dir: str = "home",
    public_dir: str = "imgs",
) -> LookupBundle:
    """Load and verify all three tables. Raises LookupTableError on unusable files."""
    species, images = build_species_table(read_table_file(species_path, "species"))
    moves = build_move_table(read_table_file(moves_path, "moves"))
    items = build_item_table(read_table_file(items_path, "items"))
    for table in (species, moves, items):
        logger.info(
            f"Loaded {table.name} table",
            extra={"table": table.name, "entries": len(table)},
        )
    return LookupBundle(
        species=species,
        moves=moves,
        items=items,
        images=TableImageResolver(images, placeholder, storage_dir, public_dir),
    )
