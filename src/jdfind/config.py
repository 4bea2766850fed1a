"""Configuration constants for jdfind."""

import os
from pathlib import Path

# Environment variable that overrides the data directory.
DATA_DIR_ENV = "JDFIND_DATA_DIR"

# Directory with data. First directory which is found is used.
DATA_DIRECTORIES: list[Path] = [
    Path("~/.local/share/jdfind").expanduser(),
    Path("~/.config/jdfind").expanduser(),
    Path("~/.jdfind").expanduser(),
]

# All systems are stored in this file inside the data directory.
STORE_FILENAME = "systems.json"

# Import limits.
MAX_FILE_SIZE = 5 * 1024 * 1024  # 5MB
MAX_SYSTEM_NAME_LENGTH = 100
MAX_AREAS = 20
MAX_DOMAINS = 10


def resolve_data_directory() -> Path:
    """Return the data directory.

    The environment override wins, then the first existing candidate, then the first candidate.
    """
    env_dir = os.environ.get(DATA_DIR_ENV)
    if env_dir:
        return Path(env_dir).expanduser()
    for candidate in DATA_DIRECTORIES:
        if candidate.is_dir():
            return candidate
    return DATA_DIRECTORIES[0]
