"""Lookup table tests — JSON loading, verification, key matching, image variants."""

import json

import pytest

from pokebin.core.errors import LookupTableError
from pokebin.infrastructure.lookup_tables import (
    TableImageResolver, build_item_table, build_move_table, build_species_table,
    load_lookup_bundle, read_table_file,
)

_SPECIES = {
    "garchomp": {
        "name": "Garchomp",
        "type1": "dragon",
        "images": {"default": "home/garchomp.png", "shiny": "home/shiny/garchomp.png"},
    },
    "urshifu-rapid-strike": {"name": "Urshifu-Rapid-Strike", "type1": "fighting"},
    "urshifu-single-strike": {"name": "Urshifu", "type1": "fighting"},
    "broken": "not an object",
    "nameless": {"type1": "normal"},
}


def _write(tmp_path, name, payload):
    path = tmp_path / name
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


# --- Loading ------------------------------------------------------------------

def test_read_table_file_missing_raises(tmp_path):
    with pytest.raises(LookupTableError) as exc_info:
        read_table_file(tmp_path / "nope.json", "species")
    assert exc_info.value.table == "species"


def test_read_table_file_invalid_json_raises(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(LookupTableError):
        read_table_file(path, "moves")


def test_read_table_file_non_object_raises(tmp_path):
    path = _write(tmp_path, "list.json", ["garchomp"])
    with pytest.raises(LookupTableError):
        read_table_file(path, "items")


def test_invalid_entries_are_dropped():
    table, images = build_species_table(_SPECIES)
    assert len(table) == 3
    assert table.find_by_key("broken") is None
    assert table.find_by_key("nameless") is None
    assert "broken" not in images


def test_load_lookup_bundle(tmp_path):
    bundle = load_lookup_bundle(
        _write(tmp_path, "pokemon.json", _SPECIES),
        _write(tmp_path, "moves.json", {"earthquake": {"name": "Earthquake", "type1": "ground"}}),
        _write(tmp_path, "items.json", {"eviolite": {"name": "Eviolite", "image": "items/e.png"}}),
        placeholder="home/0.png",
    )
    assert bundle.species.find_by_key("garchomp").type == "dragon"
    assert bundle.moves.find_by_key("earthquake").type == "ground"
    assert bundle.items.find_by_key("eviolite").image_path == "items/e.png"
    assert bundle.images.get_image("garchomp", True, False) == "imgs/shiny/garchomp.png"


# --- find_by_key --------------------------------------------------------------

def test_exact_key_wins():
    table, _ = build_species_table(_SPECIES)
    entry = table.find_by_key("garchomp")
    assert entry.key == "garchomp"
    assert entry.display_name == "Garchomp"
    assert entry.image_path == "home/garchomp.png"


def test_form_variant_prefers_shortest_key():
    table, _ = build_species_table(_SPECIES)
    assert table.find_by_key("urshifu").key == "urshifu-rapid-strike"


def test_prefix_without_hyphen_boundary_does_not_match():
    table = build_move_table({"earthquake": {"name": "Earthquake"}})
    assert table.find_by_key("earth") is None


def test_empty_key_never_matches():
    table = build_item_table({"eviolite": {"name": "Eviolite"}})
    assert table.find_by_key("") is None


def test_missing_type_defaults_to_empty():
    table = build_move_table({"struggle": {"name": "Struggle"}})
    assert table.find_by_key("struggle").type == ""


# --- Image resolver -----------------------------------------------------------

@pytest.fixture
def resolver():
    return TableImageResolver(
        {
            "pikachu": {
                "default": "home/pikachu.png",
                "female": "home/female/pikachu.png",
                "shiny": "home/shiny/pikachu.png",
                "shiny_female": "home/shiny/female/pikachu.png",
            },
            "ditto": {"default": "home/ditto.png"},
            "ghost": {},
        },
        placeholder="home/0.png",
    )


@pytest.mark.parametrize("shiny,female,expected", [
    (False, False, "imgs/pikachu.png"),
    (False, True, "imgs/female/pikachu.png"),
    (True, False, "imgs/shiny/pikachu.png"),
    (True, True, "imgs/shiny/female/pikachu.png"),
])
def test_variant_selection(resolver, shiny, female, expected):
    assert resolver.get_image("pikachu", shiny, female) == expected


def test_missing_variant_falls_back_to_default(resolver):
    assert resolver.get_image("ditto", True, True) == "imgs/ditto.png"


def test_unknown_or_imageless_species_gets_placeholder(resolver):
    assert resolver.get_image("", False, False) == "imgs/0.png"
    assert resolver.get_image("ghost", False, False) == "imgs/0.png"


def test_public_path_only_rewrites_leading_segment(resolver):
    assert resolver.to_public_path("home/a/home/b.png") == "imgs/a/home/b.png"
    assert resolver.to_public_path("other/home.png") == "other/home.png"
    assert resolver.to_public_path("/home/x.png") == "imgs/x.png"
