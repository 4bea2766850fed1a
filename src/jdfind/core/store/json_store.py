"""JSON file store holding all of a user's systems."""

import os
import tempfile
from pathlib import Path

from loguru import logger

from jdfind.config import STORE_FILENAME
from jdfind.core.export.json_writer import dump_systems
from jdfind.core.importer.loader import read_systems_file
from jdfind.models.hierarchy import System


class SystemStore:
    """Persist systems in ``<data_dir>/systems.json``.

    - The file uses the ``domains`` wrapper, so it can be imported elsewhere.
    - Do not rewrite the file if contents are the same.
    - Writes go through a temporary file in the same directory and a rename.
    """

    def __init__(self, data_dir: str | Path) -> None:
        self.data_dir = Path(data_dir)
        self.path = self.data_dir / STORE_FILENAME

    def load(self) -> list[System]:
        """Return all stored systems; an absent store file means no systems."""
        if not self.path.exists():
            logger.debug("No store at {}, starting empty", self.path)
            return []
        return read_systems_file(self.path)

    def get(self, name: str) -> System | None:
        return next((s for s in self.load() if s.name == name), None)

    def save(self, systems: list[System]) -> bool:
        """Write all systems. Returns False if the file already had this content."""
        contents = dump_systems(systems)
        if self.path.exists() and self.path.read_text(encoding="utf-8") == contents:
            logger.debug("Store unchanged: {}", self.path)
            return False

        self.data_dir.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=".systems-", suffix=".tmp", dir=self.data_dir)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(contents)
            Path(tmp_name).replace(self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.debug("Saved {} system(s) to {}", len(systems), self.path)
        return True
