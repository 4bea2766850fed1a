"""Protocols for dependency injection in the CLI and MCP server."""

from typing import Protocol, runtime_checkable

from jdfind.models.hierarchy import System


@runtime_checkable
class SystemStoreProtocol(Protocol):
    """Protocol for stores that persist the user's systems."""

    def load(self) -> list[System]:
        """Return all stored systems, in stored order."""
        ...

    def save(self, systems: list[System]) -> bool:
        """Persist all systems. Return True if anything was written."""
        ...
