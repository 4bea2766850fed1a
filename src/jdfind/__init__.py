"""Ranked search over Johnny-Decimal filing systems."""

from jdfind.core.search.ranker import search_system
from jdfind.core.store.json_store import SystemStore
from jdfind.models.hierarchy import Area, Category, Item, NodeKind, ScoredResult, System
from jdfind.protocols import SystemStoreProtocol

__all__ = [
    "Area",
    "Category",
    "Item",
    "NodeKind",
    "ScoredResult",
    "System",
    "SystemStore",
    "SystemStoreProtocol",
    "search_system",
]
