"""Parse and validate system JSON data into domain models."""

from collections.abc import Mapping
from typing import Any

import pydantic
from pydantic import BaseModel, Field

from jdfind.config import MAX_AREAS, MAX_DOMAINS, MAX_SYSTEM_NAME_LENGTH
from jdfind.models.hierarchy import Area, Category, Item, System


class ValidationError(ValueError):
    """Raised when imported data does not describe a valid system."""


class ItemSchema(BaseModel):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)

    def to_item(self) -> Item:
        return Item(id=self.id, name=self.name)


class CategorySchema(BaseModel):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    # None and [] differ: None means the category never had an items list.
    items: list[ItemSchema] | None = None

    def to_category(self) -> Category:
        return Category(
            id=self.id,
            name=self.name,
            description=self.description,
            tags=list(self.tags),
            items=None if self.items is None else [i.to_item() for i in self.items],
        )


class AreaSchema(BaseModel):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    categories: list[CategorySchema] = Field(default_factory=list)

    def to_area(self) -> Area:
        return Area(
            id=self.id,
            name=self.name,
            description=self.description,
            tags=list(self.tags),
            categories=[c.to_category() for c in self.categories],
        )


class SystemSchema(BaseModel):
    name: str = Field(min_length=1, max_length=MAX_SYSTEM_NAME_LENGTH)
    areas: list[AreaSchema] = Field(max_length=MAX_AREAS)

    def to_system(self) -> System:
        return System(name=self.name, areas=[a.to_area() for a in self.areas])


class DomainsSchema(BaseModel):
    domains: list[SystemSchema] = Field(max_length=MAX_DOMAINS)


_KINDS = {"areas": "Area", "categories": "Category", "items": "Item"}


def _location(loc: tuple[Any, ...]) -> str:
    """Format a pydantic error location as ``areas[1].categories[0]``."""
    out = ""
    for part in loc:
        if isinstance(part, int):
            out += f"[{part}]"
        else:
            out += f".{part}" if out else str(part)
    return out


def _message(error: Mapping[str, Any]) -> str:
    loc = tuple(error["loc"])
    field = loc[-1] if loc and isinstance(loc[-1], str) else None
    parent = loc[:-1] if field else loc
    kind = next((_KINDS[p] for p in reversed(parent) if p in _KINDS), "System")

    if field in ("id", "name") and error["type"] in ("missing", "string_too_short"):
        message = f"{kind} {'ID' if field == 'id' else 'name'} is required"
    elif field == "name" and error["type"] == "string_too_long":
        message = f"System name must be under {MAX_SYSTEM_NAME_LENGTH} characters"
    elif field == "areas" and error["type"] == "too_long":
        message = f"Maximum {MAX_AREAS} areas allowed"
    elif field == "domains" and error["type"] == "too_long":
        message = f"Maximum {MAX_DOMAINS} domains allowed"
    else:
        return f"{_location(loc)}: {error['msg']}" if loc else error["msg"]

    where = _location(parent)
    return f"{where}: {message}" if where else message


def _validate(schema: type[BaseModel], data: Any) -> Any:
    try:
        return schema.model_validate(data)
    except pydantic.ValidationError as e:
        raise ValidationError(_message(e.errors()[0])) from e


def parse_system_data(data: Any) -> System:
    """Parse a system dict, applying defaults for optional fields.

    Args:
        data: Raw system data (as loaded from JSON).

    Returns:
        The parsed System.

    Raises:
        ValidationError: With the location and reason of the first invalid field.
    """
    return _validate(SystemSchema, data).to_system()


def parse_payload(data: Any) -> list[System]:
    """Parse either a single system or a ``{"domains": [...]}`` wrapper."""
    if isinstance(data, dict) and isinstance(data.get("domains"), list):
        return [s.to_system() for s in _validate(DomainsSchema, data).domains]

    if isinstance(data, dict) and "name" in data and isinstance(data.get("areas"), list):
        return [parse_system_data(data)]

    msg = "Invalid format"
    raise ValidationError(msg)
