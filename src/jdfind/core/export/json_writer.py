"""Serialize systems back to the JSON import format."""

import json
from pathlib import Path
from typing import Any

from jdfind.models.hierarchy import Area, Category, System


def _category_to_dict(category: Category) -> dict[str, Any]:
    out: dict[str, Any] = {
        "id": category.id,
        "name": category.name,
        "description": category.description,
        "tags": list(category.tags),
    }
    if category.items is not None:
        out["items"] = [{"id": item.id, "name": item.name} for item in category.items]
    return out


def _area_to_dict(area: Area) -> dict[str, Any]:
    return {
        "id": area.id,
        "name": area.name,
        "description": area.description,
        "tags": list(area.tags),
        "categories": [_category_to_dict(c) for c in area.categories],
    }


def system_to_dict(system: System) -> dict[str, Any]:
    return {"name": system.name, "areas": [_area_to_dict(a) for a in system.areas]}


def dump_system(system: System) -> str:
    return json.dumps(system_to_dict(system), indent=2, ensure_ascii=False) + "\n"


def dump_systems(systems: list[System]) -> str:
    """Serialize several systems using the ``domains`` wrapper."""
    data = {"domains": [system_to_dict(s) for s in systems]}
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def export_system(system: System, directory: Path) -> Path:
    """Write ``<system name>.json`` into ``directory`` and return its path."""
    safe_name = system.name.replace("/", "-").replace("\\", "-")
    path = directory / f"{safe_name}.json"
    path.write_text(dump_system(system), encoding="utf-8")
    return path
