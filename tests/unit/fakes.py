"""Fake implementations for testing."""

import copy

from jdfind.models.hierarchy import System


class FakeStore:
    """In-memory fake for SystemStore.

    Keeps deep copies so callers cannot mutate the stored state without saving,
    and records every save for assertions.
    """

    def __init__(self, systems: list[System] | None = None) -> None:
        self.systems: list[System] = copy.deepcopy(systems or [])
        self.saves: list[list[System]] = []

    def load(self) -> list[System]:
        """Return a copy of the stored systems."""
        return copy.deepcopy(self.systems)

    def save(self, systems: list[System]) -> bool:
        """Store a copy of the systems and record the save."""
        changed = systems != self.systems
        self.systems = copy.deepcopy(systems)
        self.saves.append(copy.deepcopy(systems))
        return changed
