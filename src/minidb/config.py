"""Global defaults for minidb and logging setup."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import dotenv_values

DOTENV_FILE = Path(".env")

_ENV = {**dotenv_values(DOTENV_FILE), **os.environ}

# File used by SAVE TO FILE / LOAD FROM FILE
DATABASE_FILE = Path(_ENV.get("MINIDB_DATABASE_FILE") or "database.txt")

LOG_LEVEL = (_ENV.get("MINIDB_LOG_LEVEL") or "WARNING").upper()

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

HISTORY_FILE = Path.home() / ".minidb_history"

# Width of every column in SELECT output
COLUMN_WIDTH = 15


def configure_logging(level: str | int | None = None) -> None:
    """Install a stderr handler on the root logger, once."""
    root = logging.getLogger()
    if root.handlers:
        if level is not None:
            root.setLevel(level)
        return

    logging.basicConfig(level=level or LOG_LEVEL, format=LOG_FORMAT)
