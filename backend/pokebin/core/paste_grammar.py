"""Paste Grammar — splits team text into blocks and classifies each block's lines.

Invariants:
    - Blocks are separated by two or more consecutive line breaks; whitespace-only
      blocks are dropped; order is preserved
    - Only the first line of a block is tried against the header grammar; a miss
      makes the whole block FreeText, with no line-level processing
    - Lines 2..N are classified independently, in order, with no backtracking:
      move line, "EVs: " line, "IVs: " line, otherwise "other"
    - A line that carries a move/EVs/IVs prefix but fails its grammar goes to "other"
    - Never raises on user text: failures degrade to FreeText or "other"
    - No name lookups here: the grammar only computes normalized search keys

Design Decisions:
    - Patterns compiled once per PasteGrammar instance and never mutated; the
      instance is shared read-only between requests
    - fullmatch over ^...$ anchors: "$" would also accept a trailing newline
"""

import logging
import re
from dataclasses import dataclass, field

from pokebin.core.domain_types import (
    EffortValues, Gender, IndividualValues, StatName, STAT_ABBREVIATIONS,
)
from pokebin.core.errors import StatValueError

logger = logging.getLogger(__name__)

EV_PREFIX = "EVs: "
IV_PREFIX = "IVs: "
MOVE_PREFIX = "- "
SHINY_MARKER = "Shiny: Yes"

_STAT_MAX = 0xFFFF_FFFF
_STAT_MAX_DIGITS = len(str(_STAT_MAX))

# Species words are capitalized; lowercase may only follow a hyphen ("Kommo-o"),
# and each word may end in a period ("Mr. Mime"). Moves allow lowercase
# words ("Light of Ruin")
_SPECIES_NAME = r"[A-Z][a-z0-9:']+\.?(?:(?: [A-Z]|-[A-Za-z])[a-z0-9:']*\.?)*"
_ITEM_NAME = r"[A-Z][a-z0-9:']*(?:[- ][A-Z][a-z0-9:']*)*"
_MOVE_NAME = r"[A-Z][a-z']*(?:[- ][A-Za-z][a-z']*)*"


# ─── Parsed Structures ───────────────────────────────────────────

@dataclass(frozen=True)
class ParsedHeader:
    species: str
    nickname: str | None = None
    gender: Gender = Gender.NEUTRAL
    item: str | None = None


@dataclass(frozen=True)
class ParsedMove:
    name: str
    qualifier: str | None = None


@dataclass
class ParsedSet:
    """A block whose first line matched the header grammar."""
    header: ParsedHeader
    shiny: bool = False
    moves: list[ParsedMove] = field(default_factory=list)
    evs: EffortValues = field(default_factory=EffortValues)
    ivs: IndividualValues = field(default_factory=IndividualValues)
    other: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ParsedText:
    """A block kept verbatim."""
    text: str


ParsedBlock = ParsedSet | ParsedText


# ─── Search Keys ─────────────────────────────────────────────────

def species_key(name: str) -> str:
    """'Iron Valiant' -> 'iron-valiant'."""
    return name.lower().replace(" ", "-")


def move_key(name: str) -> str:
    """'Stealth Rock' -> 'stealth-rock'."""
    return name.lower().replace(" ", "-")


def item_key(name: str) -> str:
    """'Rocky Helmet' -> 'rockyhelmet'."""
    return name.replace(" ", "").lower()


# ─── Grammar ─────────────────────────────────────────────────────

class PasteGrammar:
    """Compiled header/move/stat grammars plus the block classifier.

    Usage:
        grammar = PasteGrammar()
        blocks = grammar.parse(paste_text)
    """

    def __init__(self) -> None:
        self._block_separator = re.compile(r"(?:\r?\n){2,}")
        self._line_break = re.compile(r"\r?\n")
        self._header = re.compile(
            rf"(?:(?P<nickname>.*) \((?P<nicked>{_SPECIES_NAME})\)"
            rf"|(?P<species>{_SPECIES_NAME}))"
            r"(?: \((?P<gender>[MF])\))?"
            rf"(?: @ (?P<item>{_ITEM_NAME}))?"
            r" *"
        )
        self._move = re.compile(
            rf"- (?P<name>{_MOVE_NAME})"
            r"(?: \[(?P<qualifier>[A-Z][a-z]+)\])?"
            rf"(?: / {_MOVE_NAME})*"
            r" *"
        )
        terms = "(?: / )?".join(
            rf"(?:(?P<stat_{stat.value}>[0-9]+) {abbrev})?"
            for stat, abbrev in STAT_ABBREVIATIONS.items()
        )
        self._stats = re.compile(terms + r" *")

    # ── blocks ──

    def split_blocks(self, text: str) -> list[str]:
        """Split on 2+ line breaks, trim each block, drop empty ones."""
        blocks = (b.strip() for b in self._block_separator.split(text))
        return [b for b in blocks if b]

    def parse(self, text: str) -> list[ParsedBlock]:
        """Classify every block of a paste body, preserving order."""
        parsed = [self.parse_block(block) for block in self.split_blocks(text)]
        logger.debug(
            "Parsed paste body",
            extra={"block_count": len(parsed)},
        )
        return parsed

    def parse_block(self, block: str) -> ParsedBlock:
        """Header on line 1 decides the block; remaining lines are classified in order."""
        lines = self._line_break.split(block)
        header = self.parse_header(lines[0]) if lines else None
        if header is None:
            return ParsedText(block)

        parsed = ParsedSet(header=header, shiny=SHINY_MARKER in block)
        for line in lines[1:]:
            self._classify_line(line, parsed)
        return parsed

    def _classify_line(self, line: str, parsed: ParsedSet) -> None:
        move = self.parse_move(line)
        if move is not None:
            parsed.moves.append(move)
            return

        if line.startswith(EV_PREFIX):
            stats = self.parse_stats(line[len(EV_PREFIX):])
            if stats is not None:
                for stat, value in stats.items():
                    parsed.evs.set(stat, value)
                return
        elif line.startswith(IV_PREFIX):
            stats = self.parse_stats(line[len(IV_PREFIX):])
            if stats is not None:
                for stat, value in stats.items():
                    parsed.ivs.set(stat, value)
                return

        parsed.other.append(line)

    # ── line grammars ──

    def parse_header(self, line: str) -> ParsedHeader | None:
        m = self._header.fullmatch(line)
        if m is None:
            return None
        if m.group("nicked") is not None:
            species, nickname = m.group("nicked"), m.group("nickname")
        else:
            species, nickname = m.group("species"), None
        gender = {"M": Gender.MALE, "F": Gender.FEMALE}.get(
            m.group("gender"), Gender.NEUTRAL,
        )
        return ParsedHeader(
            species=species, nickname=nickname,
            gender=gender, item=m.group("item"),
        )

    def parse_move(self, line: str) -> ParsedMove | None:
        """'- Hidden Power [Fire] / Protect' -> ParsedMove('Hidden Power', 'Fire')."""
        if not line.startswith(MOVE_PREFIX):
            return None
        m = self._move.fullmatch(line)
        if m is None:
            return None
        return ParsedMove(name=m.group("name"), qualifier=m.group("qualifier"))

    def parse_stats(self, remainder: str) -> dict[StatName, int] | None:
        """Parse '252 HP / 4 Def / 252 Spe'. Only present terms are returned.

        Returns None when the text does not follow the stat grammar or a value
        does not fit 32 bits.
        """
        m = self._stats.fullmatch(remainder)
        if m is None:
            return None
        try:
            return {
                stat: _stat_value(m.group(f"stat_{stat.value}"))
                for stat in STAT_ABBREVIATIONS
                if m.group(f"stat_{stat.value}") is not None
            }
        except StatValueError as e:
            logger.debug(f"Ignoring stat line: {e}")
            return None


def _stat_value(digits: str) -> int:
    # Width is checked on the text first: int() refuses very long digit strings
    significant = digits.lstrip("0")
    if len(significant) > _STAT_MAX_DIGITS:
        raise StatValueError(digits)
    value = int(significant or "0")
    if value > _STAT_MAX:
        raise StatValueError(digits)
    return value
