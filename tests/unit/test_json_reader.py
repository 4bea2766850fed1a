"""Tests for parsing and validating system JSON."""

import copy

import pytest

from jdfind.core.importer.json_reader import ValidationError, parse_payload, parse_system_data
from tests.unit.conftest import HOME_SYSTEM, WORK_SYSTEM


def test_parse_system_builds_hierarchy() -> None:
    system = parse_system_data(copy.deepcopy(WORK_SYSTEM))
    assert system.name == "Work"
    area = system.areas[0]
    assert (area.id, area.name, area.tags) == ("10-19", "Administration", ["hr"])
    category = area.categories[0]
    assert category.description == "Employee records"
    assert category.items is not None
    assert category.items[0].id == "11.01"


def test_parse_applies_defaults_for_optional_fields() -> None:
    system = parse_system_data(
        {
            "name": "Min",
            "areas": [{"id": "10-19", "name": "A", "categories": [{"id": "11", "name": "C"}]}],
        }
    )
    area = system.areas[0]
    assert area.description == ""
    assert area.tags == []
    assert area.categories[0].items is None


def test_parse_reports_location_of_first_error() -> None:
    data = copy.deepcopy(HOME_SYSTEM)
    data["areas"][1]["categories"][0]["name"] = ""
    expected = r"areas\[1\]\.categories\[0\]: Category name is required"
    with pytest.raises(ValidationError, match=expected):
        parse_system_data(data)


def test_parse_rejects_missing_item_id() -> None:
    data = copy.deepcopy(WORK_SYSTEM)
    data["areas"][0]["categories"][0]["items"] = [{"name": "No id"}]
    with pytest.raises(ValidationError, match="Item ID is required"):
        parse_system_data(data)


def test_parse_rejects_non_string_tags() -> None:
    data = copy.deepcopy(WORK_SYSTEM)
    data["areas"][0]["tags"] = ["ok", 3]
    expected = r"areas\[0\]\.tags\[1\]: Input should be a valid string"
    with pytest.raises(ValidationError, match=expected):
        parse_system_data(data)


def test_parse_rejects_wrong_field_types() -> None:
    data = copy.deepcopy(WORK_SYSTEM)
    data["areas"][0]["categories"][0]["items"] = "Contracts"
    with pytest.raises(ValidationError, match=r"areas\[0\]\.categories\[0\]\.items: "):
        parse_system_data(data)


def test_parse_reports_location_of_nested_item_error() -> None:
    data = copy.deepcopy(HOME_SYSTEM)
    data["areas"][0]["categories"][0]["items"][1]["name"] = ""
    expected = r"areas\[0\]\.categories\[0\]\.items\[1\]: Item name is required"
    with pytest.raises(ValidationError, match=expected):
        parse_system_data(data)


def test_parse_enforces_limits() -> None:
    with pytest.raises(ValidationError, match="under 100 characters"):
        parse_system_data({"name": "x" * 101, "areas": []})

    too_many = [{"id": str(i), "name": f"Area {i}"} for i in range(21)]
    with pytest.raises(ValidationError, match="Maximum 20 areas"):
        parse_system_data({"name": "Big", "areas": too_many})


def test_parse_payload_accepts_single_system_and_domains_wrapper() -> None:
    assert [s.name for s in parse_payload(copy.deepcopy(WORK_SYSTEM))] == ["Work"]
    wrapped = {"domains": [copy.deepcopy(HOME_SYSTEM), copy.deepcopy(WORK_SYSTEM)]}
    assert [s.name for s in parse_payload(wrapped)] == ["d1-Home", "Work"]


def test_parse_payload_rejects_unknown_shapes() -> None:
    with pytest.raises(ValidationError, match="Invalid format"):
        parse_payload({"something": "else"})
    with pytest.raises(ValidationError, match="Maximum 10 domains"):
        parse_payload({"domains": [copy.deepcopy(WORK_SYSTEM)] * 11})
    with pytest.raises(ValidationError, match=r"domains\[0\]: System name is required"):
        parse_payload({"domains": [{"name": "", "areas": []}]})
