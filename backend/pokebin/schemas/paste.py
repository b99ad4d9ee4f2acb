"""Paste Schemas — Pydantic models for the paste API boundary.

Invariants:
    - PasteCreate: every field optional (missing -> ""), all but rental stripped
    - Rental byte length is NOT validated here: the record codec is the single
      authority and raises RentalTooLongError (400)
    - ContentOut has exactly one of text / mon set
    - Response field names match the JSON the frontend already consumes
      (type1, search_name, item_img, hp_iv, ...)

Design Decisions:
    - Explicit from_domain() converters: core dataclasses stay free of Pydantic
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pokebin.core.domain_types import Content, FreeText, Move, TeamSet
from pokebin.core.record_codec import Paste


class PasteCreate(BaseModel):
    """Paste submission; missing fields default to empty strings."""
    title: str = ""
    author: str = ""
    notes: str = ""
    rental: str = ""
    paste: str = ""
    format: str = ""

    @field_validator("title", "author", "notes", "paste", "format")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()

    def to_record(self) -> Paste:
        return Paste.from_text(
            title=self.title, author=self.author, notes=self.notes,
            rental=self.rental, paste=self.paste, format=self.format,
        )


class PasteCreated(BaseModel):
    id: int


class PasteResponse(BaseModel):
    """Raw paste fields as stored."""
    title: str
    author: str
    notes: str
    rental: str
    paste: str

    @classmethod
    def from_domain(cls, paste: Paste) -> "PasteResponse":
        return cls(
            title=paste.text("title"),
            author=paste.text("author"),
            notes=paste.text("notes"),
            rental=paste.text("rental"),
            paste=paste.text("paste"),
        )


class MoveOut(BaseModel):
    name: str
    type1: str
    id: int

    @classmethod
    def from_domain(cls, move: Move) -> "MoveOut":
        return cls(name=move.name, type1=move.type1, id=move.id)


class SetOut(BaseModel):
    name: str
    search_name: str
    image: str
    item: str
    item_img: str
    moves: list[MoveOut]
    type1: str
    gender: str
    other: list[str]
    hp: int
    atk: int
    def_: int = Field(alias="def")
    spa: int
    spd: int
    spe: int
    hp_iv: int | None
    atk_iv: int | None
    def_iv: int | None
    spa_iv: int | None
    spd_iv: int | None
    spe_iv: int | None

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_domain(cls, team_set: TeamSet) -> "SetOut":
        evs, ivs = team_set.evs, team_set.ivs
        return cls(
            name=team_set.name,
            search_name=team_set.search_name,
            image=team_set.image,
            item=team_set.item,
            item_img=team_set.item_img,
            moves=[MoveOut.from_domain(m) for m in team_set.moves],
            type1=team_set.type1,
            gender=team_set.gender.value,
            other=list(team_set.other),
            hp=evs.hp, atk=evs.atk, def_=evs.def_,
            spa=evs.spa, spd=evs.spd, spe=evs.spe,
            hp_iv=ivs.hp, atk_iv=ivs.atk, def_iv=ivs.def_,
            spa_iv=ivs.spa, spd_iv=ivs.spd, spe_iv=ivs.spe,
        )


class ContentOut(BaseModel):
    text: str | None = None
    mon: SetOut | None = None

    @classmethod
    def from_domain(cls, content: Content) -> "ContentOut":
        if isinstance(content, FreeText):
            return cls(text=content.text)
        return cls(mon=SetOut.from_domain(content))


class DetailedPasteResponse(BaseModel):
    title: str
    author: str
    notes: str
    rental: str
    sets: list[ContentOut]

    @classmethod
    def from_domain(
        cls, paste: Paste, contents: list[Content],
    ) -> "DetailedPasteResponse":
        return cls(
            title=paste.text("title"),
            author=paste.text("author"),
            notes=paste.text("notes"),
            rental=paste.text("rental"),
            sets=[ContentOut.from_domain(c) for c in contents],
        )


class ImageResponse(BaseModel):
    img: str
