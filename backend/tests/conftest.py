"""Root conftest — shared test configuration and in-memory lookup fakes."""

import os

import pytest

# Never point tests at a real database or real data files
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "text")

from pokebin.core.domain_types import CanonicalEntry  # noqa: E402
from pokebin.core.paste_grammar import PasteGrammar  # noqa: E402
from pokebin.core.set_builder import SetBuilder  # noqa: E402
from pokebin.infrastructure.lookup_tables import (  # noqa: E402
    JsonLookupTable, TableImageResolver,
)


@pytest.fixture
def grammar():
    return PasteGrammar()


@pytest.fixture
def species_table():
    return JsonLookupTable("species", {
        "garchomp": CanonicalEntry("garchomp", "Garchomp", "dragon", "home/garchomp.png"),
        "chansey": CanonicalEntry("chansey", "Chansey", "normal", "home/chansey.png"),
        "urshifu-single-strike": CanonicalEntry(
            "urshifu-single-strike", "Urshifu", "fighting", "home/urshifu.png",
        ),
        "mr.-mime": CanonicalEntry("mr.-mime", "Mr. Mime", "psychic"),
    })


@pytest.fixture
def move_table():
    return JsonLookupTable("moves", {
        "earthquake": CanonicalEntry("earthquake", "Earthquake", "ground"),
        "stealth-rock": CanonicalEntry("stealth-rock", "Stealth Rock", "rock"),
        "soft-boiled": CanonicalEntry("soft-boiled", "Soft-Boiled", "normal"),
    })


@pytest.fixture
def item_table():
    return JsonLookupTable("items", {
        "rockyhelmet": CanonicalEntry(
            "rockyhelmet", "Rocky Helmet", image_path="items/rockyhelmet.png",
        ),
        "eviolite": CanonicalEntry("eviolite", "Eviolite", image_path="items/eviolite.png"),
    })


@pytest.fixture
def image_resolver():
    return TableImageResolver(
        {
            "garchomp": {
                "default": "home/garchomp.png",
                "shiny": "home/shiny/garchomp.png",
                "female": "home/female/garchomp.png",
                "shiny_female": "home/shiny/female/garchomp.png",
            },
            "chansey": {
                "default": "home/chansey.png",
                "shiny": "home/shiny/chansey.png",
            },
        },
        placeholder="home/0.png",
    )


@pytest.fixture
def set_builder(grammar, species_table, move_table, item_table, image_resolver):
    return SetBuilder(grammar, species_table, move_table, item_table, image_resolver)
