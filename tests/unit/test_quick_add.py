"""Tests for quick-add parsing."""

import pytest

from jdfind.core.edit.editor import DuplicateIdError, NodeNotFoundError
from jdfind.core.edit.quick_add import (
    ItemPattern,
    build_item_id,
    extract_hashtags,
    extract_system_prefix,
    parse_item_pattern,
    quick_add,
)
from jdfind.models.hierarchy import System


def test_extract_system_prefix() -> None:
    assert extract_system_prefix("d1-Prive") == "d1"
    assert extract_system_prefix("Work") == ""


def test_parse_item_pattern() -> None:
    assert parse_item_pattern("  Savings account [3] ") == ItemPattern(
        name="Savings account", number="3"
    )
    assert parse_item_pattern("Taxes[12]") == ItemPattern(name="Taxes", number="12")
    assert parse_item_pattern("no brackets") is None
    assert parse_item_pattern("[12]") is None


def test_build_item_id_pads_number() -> None:
    assert build_item_id("", "11", "3") == "11.03"
    assert build_item_id("d1", "11", "12") == "d1.11.12"


def test_extract_hashtags() -> None:
    tags, rest = extract_hashtags("rainy day fund #Savings #bank #savings")
    assert tags == ["savings", "bank"]
    assert rest == "rainy day fund"


def test_quick_add_on_category_adds_item_tags_and_note(home_system: System) -> None:
    result = quick_add(
        home_system,
        area_id="10-19",
        category_id="11",
        text="Savings account [3]\nfor the rainy days #Savings #bank",
    )
    banking = home_system.areas[0].categories[0]
    assert [i.id for i in result.items_added] == ["d1.11.03"]
    assert banking.items is not None
    assert banking.items[-1].name == "Savings account"
    assert result.tags_added == ("savings",)  # "bank" was already there
    assert banking.tags == ["bank", "savings"]
    assert banking.description == "Accounts and cards\nfor the rainy days"
    assert result.description == banking.description


def test_quick_add_on_area_adds_category(home_system: System) -> None:
    result = quick_add(home_system, area_id="20-29", text="Utilities [3]")
    (category,) = result.categories_added
    assert (category.id, category.name, category.items) == ("03", "Utilities", [])
    assert home_system.areas[1].categories[-1] is category
    assert result.description == "Everything about the house"


def test_quick_add_errors(home_system: System) -> None:
    with pytest.raises(DuplicateIdError):
        quick_add(home_system, area_id="10-19", category_id="11", text="Checking [1]")
    with pytest.raises(NodeNotFoundError):
        quick_add(home_system, area_id="10-19", category_id="99", text="note")


def test_quick_add_duplicate_leaves_system_unchanged(home_system: System) -> None:
    before = repr(home_system)
    with pytest.raises(DuplicateIdError, match="d1.11.01"):
        quick_add(
            home_system,
            area_id="10-19",
            category_id="11",
            text="Savings [3]\nChecking [1]\n#bank-ish note",
        )
    assert repr(home_system) == before


def test_quick_add_rejects_repeated_number_in_one_text(home_system: System) -> None:
    with pytest.raises(DuplicateIdError):
        quick_add(home_system, area_id="20-29", text="Utilities [3]\nPool [3]")
    assert [c.id for c in home_system.areas[1].categories] == ["21", "22"]
