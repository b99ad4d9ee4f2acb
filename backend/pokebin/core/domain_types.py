"""Domain Types — value objects shared by the grammar, the set builder and the API.

Invariants:
    - Content is exactly one of FreeText or TeamSet (tagged union)
    - Effort values default to 0; individual values default to None ("not specified")
    - Move.id is reserved and always 0
    - Gender values serialize to the short flags the frontend expects ("m", "f", "")

Design Decisions:
    - Dataclasses over Pydantic here: core stays free of validation/IO concerns,
      schemas/ converts at the API boundary
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Union


# ─── Enums ───────────────────────────────────────────────────────

class Gender(str, Enum):
    """Gender flag from the header line's (M)/(F) marker."""
    MALE = "m"
    FEMALE = "f"
    NEUTRAL = ""


class StatName(str, Enum):
    """The six stats, in canonical paste order."""
    HP = "hp"
    ATK = "atk"
    DEF = "def"
    SPA = "spa"
    SPD = "spd"
    SPE = "spe"


# Abbreviation used in "EVs: " / "IVs: " lines, in canonical order
STAT_ABBREVIATIONS: dict[StatName, str] = {
    StatName.HP: "HP",
    StatName.ATK: "Atk",
    StatName.DEF: "Def",
    StatName.SPA: "SpA",
    StatName.SPD: "SpD",
    StatName.SPE: "Spe",
}


# ─── Stat Spreads ────────────────────────────────────────────────

@dataclass
class EffortValues:
    hp: int = 0
    atk: int = 0
    def_: int = 0
    spa: int = 0
    spd: int = 0
    spe: int = 0

    def set(self, stat: StatName, value: int) -> None:
        setattr(self, _attr(stat), value)

    def get(self, stat: StatName) -> int:
        return getattr(self, _attr(stat))


@dataclass
class IndividualValues:
    hp: int | None = None
    atk: int | None = None
    def_: int | None = None
    spa: int | None = None
    spd: int | None = None
    spe: int | None = None

    def set(self, stat: StatName, value: int) -> None:
        setattr(self, _attr(stat), value)

    def get(self, stat: StatName) -> int | None:
        return getattr(self, _attr(stat))


def _attr(stat: StatName) -> str:
    # "def" is a keyword
    return "def_" if stat is StatName.DEF else stat.value


# ─── Lookup Results ──────────────────────────────────────────────

@dataclass(frozen=True)
class CanonicalEntry:
    """A resolved lookup-table row."""
    key: str
    display_name: str
    type: str = ""
    image_path: str = ""


# ─── Content ─────────────────────────────────────────────────────

@dataclass
class Move:
    name: str
    type1: str = ""
    id: int = 0


@dataclass
class TeamSet:
    """One roster member parsed from a paste block."""
    name: str
    search_name: str = ""
    image: str = ""
    item: str = ""
    item_img: str = ""
    type1: str = ""
    gender: Gender = Gender.NEUTRAL
    moves: list[Move] = field(default_factory=list)
    other: list[str] = field(default_factory=list)
    evs: EffortValues = field(default_factory=EffortValues)
    ivs: IndividualValues = field(default_factory=IndividualValues)


@dataclass(frozen=True)
class FreeText:
    """A block that did not start with a recognizable header, kept verbatim."""
    text: str


Content = Union[FreeText, TeamSet]
