"""Shared test fixtures."""

import copy
import json
from pathlib import Path
from typing import Any

import pytest

from jdfind.core.importer.json_reader import parse_system_data
from jdfind.core.store.json_store import SystemStore
from jdfind.models.hierarchy import System

WORK_SYSTEM: dict[str, Any] = {
    "name": "Work",
    "areas": [
        {
            "id": "10-19",
            "name": "Administration",
            "description": "",
            "tags": ["hr"],
            "categories": [
                {
                    "id": "11",
                    "name": "HR Documents",
                    "description": "Employee records",
                    "tags": ["employees"],
                    "items": [{"id": "11.01", "name": "Contracts"}],
                }
            ],
        }
    ],
}

HOME_SYSTEM: dict[str, Any] = {
    "name": "d1-Home",
    "areas": [
        {
            "id": "10-19",
            "name": "Finance",
            "description": "Money matters",
            "tags": ["legal", "money"],
            "categories": [
                {
                    "id": "11",
                    "name": "Banking",
                    "description": "Accounts and cards",
                    "tags": ["bank"],
                    "items": [
                        {"id": "d1.11.01", "name": "Checking account"},
                        {"id": "d1.11.02", "name": "Credit cards"},
                    ],
                },
                {
                    "id": "12",
                    "name": "Taxes",
                    "description": "Yearly returns",
                    "tags": ["irs"],
                },
            ],
        },
        {
            "id": "20-29",
            "name": "House",
            "description": "Everything about the house",
            "tags": ["home"],
            "categories": [
                {
                    "id": "21",
                    "name": "Documents",
                    "description": "Deeds and permits",
                    "tags": ["paperwork"],
                    "items": [],
                },
                {
                    "id": "22",
                    "name": "Garden",
                    "description": "",
                    "tags": [],
                },
            ],
        },
    ],
}


@pytest.fixture
def work_system() -> System:
    return parse_system_data(copy.deepcopy(WORK_SYSTEM))


@pytest.fixture
def home_system() -> System:
    return parse_system_data(copy.deepcopy(HOME_SYSTEM))


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Return a data directory with both systems stored."""
    data = tmp_path / "data"
    data.mkdir()
    (data / "systems.json").write_text(json.dumps({"domains": [HOME_SYSTEM, WORK_SYSTEM]}))
    return data


@pytest.fixture
def store(data_dir: Path) -> SystemStore:
    return SystemStore(data_dir)
