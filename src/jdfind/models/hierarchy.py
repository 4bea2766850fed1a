"""Domain models for a Johnny-Decimal filing system."""

from dataclasses import dataclass, field
from enum import Enum


@dataclass
class Item:
    """A single filed item inside a category."""

    id: str
    name: str


@dataclass
class Category:
    """A category inside an area. ``items`` is None when the category has no items list."""

    id: str
    name: str
    description: str = ""
    tags: list[str] = field(default_factory=list)
    items: list[Item] | None = None


@dataclass
class Area:
    """A top-level area of a system."""

    id: str
    name: str
    description: str = ""
    tags: list[str] = field(default_factory=list)
    categories: list[Category] = field(default_factory=list)


@dataclass
class System:
    """A named filing system (the hierarchy root)."""

    name: str
    areas: list[Area] = field(default_factory=list)

    def node_count(self) -> int:
        count = 0
        for area in self.areas:
            count += 1
            for category in area.categories:
                count += 1 + len(category.items or ())
        return count


class NodeKind(str, Enum):
    """Level of a hierarchy node."""

    AREA = "area"
    CATEGORY = "category"
    ITEM = "item"


@dataclass(frozen=True)
class Document:
    """A scorable text unit derived from one node plus its ancestors."""

    kind: NodeKind
    area: Area
    text: str
    category: Category | None = None
    item: Item | None = None


@dataclass(frozen=True)
class ScoredResult:
    """A search hit with its relevance score and the query terms it matched."""

    kind: NodeKind
    area: Area
    score: float
    matched_terms: tuple[str, ...]
    category: Category | None = None
    item: Item | None = None

    @property
    def node(self) -> Area | Category | Item:
        """The most specific record this result points at."""
        if self.item is not None:
            return self.item
        if self.category is not None:
            return self.category
        return self.area

    @property
    def node_id(self) -> str:
        return self.node.id

    @property
    def name(self) -> str:
        return self.node.name

    @property
    def path(self) -> str:
        """Id chain from the area down, e.g. ``10-19 › 11 › 11.01``."""
        parts = [self.area.id]
        if self.category is not None:
            parts.append(self.category.id)
        if self.item is not None:
            parts.append(self.item.id)
        return " › ".join(parts)
