"""Set Builder — turns parsed blocks into display Content using the lookup tables.

Invariants:
    - Output order == block order of the paste body
    - FreeText blocks pass through unchanged
    - Unresolved species/moves/items keep their captured names with empty
      search key, type and image fields (never an error)
    - Effort values default to 0, individual values to None (set by the grammar)

Design Decisions:
    - Collaborators injected at construction (Protocols): the builder holds no
      domain data of its own and is trivially faked in tests
    - Pure apart from the read-only lookups: safe to share across requests
"""

from pokebin.core.domain_types import Content, FreeText, Gender, Move, TeamSet
from pokebin.core.paste_grammar import (
    ParsedSet, ParsedText, PasteGrammar, item_key, move_key, species_key,
)
from pokebin.core.repository_protocols import ImageResolver, LookupTable


class SetBuilder:
    """Parses a paste body and resolves every set against the lookup tables."""

    def __init__(
        self,
        grammar: PasteGrammar,
        species: LookupTable,
        moves: LookupTable,
        items: LookupTable,
        images: ImageResolver,
    ):
        self._grammar = grammar
        self._species = species
        self._moves = moves
        self._items = items
        self._images = images

    def build(self, paste_text: str) -> list[Content]:
        """Parse and resolve a whole paste body."""
        contents: list[Content] = []
        for block in self._grammar.parse(paste_text):
            if isinstance(block, ParsedText):
                contents.append(FreeText(block.text))
            else:
                contents.append(self.build_set(block))
        return contents

    def build_set(self, parsed: ParsedSet) -> TeamSet:
        header = parsed.header
        team_set = TeamSet(
            name=header.species,
            gender=header.gender,
            evs=parsed.evs,
            ivs=parsed.ivs,
            other=list(parsed.other),
        )

        species = self._species.find_by_key(species_key(header.species))
        if species is not None:
            team_set.search_name = species.key
            team_set.type1 = species.type

        if header.item is not None:
            team_set.item = header.item
            item = self._items.find_by_key(item_key(header.item))
            team_set.item_img = item.image_path if item is not None else ""

        team_set.image = self._images.get_image(
            team_set.search_name, parsed.shiny, header.gender is Gender.FEMALE,
        )
        team_set.moves = [self._resolve_move(m.name) for m in parsed.moves]
        return team_set

    def _resolve_move(self, name: str) -> Move:
        entry = self._moves.find_by_key(move_key(name))
        return Move(name=name, type1=entry.type if entry is not None else "")
