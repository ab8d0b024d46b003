"""Catalog of tables and whole-database persistence."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

from minidb.errors import FileOpenFailure, TableAlreadyExists, TableNotFound
from minidb.table import TABLE_PREFIX, Table

logger = logging.getLogger(__name__)


class Catalog:
    """Owns every table, keyed by its case-sensitive name."""

    def __init__(self) -> None:
        self._tables: dict[str, Table] = {}

    def __len__(self) -> int:
        return len(self._tables)

    def __iter__(self) -> Iterator[Table]:
        return iter(self._tables.values())

    def __contains__(self, name: object) -> bool:
        return name in self._tables

    def list_tables(self) -> list[str]:
        """Return table names in creation order."""
        return list(self._tables)

    def create_table(self, name: str) -> Table:
        """Create an empty table and register it.

        Raises:
            TableAlreadyExists: If a table with this name is already registered.
        """
        if name in self._tables:
            raise TableAlreadyExists(name)
        table = Table(name)
        self._tables[name] = table
        logger.info("Created table %s", name)
        return table

    def get_table(self, name: str) -> Table:
        """Look up a table by name.

        Raises:
            TableNotFound: If no table has this name.
        """
        table = self._tables.get(name)
        if table is None:
            raise TableNotFound(name)
        return table

    def clear(self) -> None:
        """Drop every table."""
        self._tables.clear()

    def save(self, path: Path | str) -> int:
        """Write every table to ``path``, replacing its contents.

        Returns the number of tables written.
        """
        try:
            f = open(path, "w", encoding="utf-8")
        except OSError as e:
            raise FileOpenFailure(path, "w", e.strerror or str(e)) from e

        with f:
            for table in self._tables.values():
                table.save(f)

        logger.info("Saved %d table(s) to %s", len(self._tables), path)
        return len(self._tables)

    def load(self, path: Path | str) -> list[Table]:
        """Replace the catalog with the tables stored in ``path``.

        The whole file is read and decoded before anything is dropped, so a
        missing, unreadable or non-UTF-8 file leaves the catalog as it was.
        Returns the loaded tables.
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                content = f.read()
        except OSError as e:
            raise FileOpenFailure(path, "r", e.strerror or str(e)) from e
        except UnicodeDecodeError as e:
            raise FileOpenFailure(path, "r", f"not valid UTF-8 at byte {e.start}") from e

        self.clear()
        loaded: list[Table] = []
        lines = iter(content.split("\n"))
        for line in lines:
            if not line.startswith(TABLE_PREFIX):
                continue
            table = Table(line[len(TABLE_PREFIX):].rstrip("\r\n"))
            skipped = table.load(lines)
            if table.name in self._tables:
                logger.warning("Ignored duplicate table %s in %s", table.name, path)
                continue
            self._tables[table.name] = table
            loaded.append(table)
            logger.info(
                "Loaded table %s: %d column(s), %d row(s), %d skipped",
                table.name,
                len(table.columns),
                table.row_count,
                skipped,
            )

        return loaded
