"""Exceptions raised by minidb operations.

Every error is local to the command that raised it: the engine reports it and
the session continues.
"""

from __future__ import annotations


class MiniDBError(Exception):
    """Base class for all minidb errors."""


class ConstraintViolation(MiniDBError):
    """A row was rejected by the table's schema."""

    def __init__(self, message: str, column: str | None = None, constraint: str | None = None) -> None:
        super().__init__(message)
        self.column = column
        self.constraint = constraint


class ColumnCountMismatch(ConstraintViolation):
    """Number of values differs from the number of columns."""

    def __init__(self, expected: int, got: int) -> None:
        super().__init__(f"Column count mismatch. Expected {expected}, got {got}")
        self.expected = expected
        self.got = got


class InvalidTypeValue(ConstraintViolation):
    """A value does not fit the column's declared type."""


class NullViolation(ConstraintViolation):
    """An empty value was given for a NOT NULL or PRIMARY KEY column."""


class UniqueViolation(ConstraintViolation):
    """A value duplicates an existing one in a UNIQUE or PRIMARY KEY column."""


class NoCurrentTable(MiniDBError):
    def __init__(self) -> None:
        super().__init__("No table selected. Create a table first.")


class TableNotFound(MiniDBError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Table {name} not found!")
        self.name = name


class TableAlreadyExists(MiniDBError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Table {name} already exists.")
        self.name = name


class UnknownCommand(MiniDBError):
    def __init__(self, command: str = "") -> None:
        super().__init__("Unknown command!")
        self.command = command


class InvalidInsertSyntax(MiniDBError):
    def __init__(self) -> None:
        super().__init__("Invalid INSERT syntax")


class FileOpenFailure(MiniDBError):
    """The database file could not be opened."""

    def __init__(self, path: object, mode: str, reason: str = "") -> None:
        purpose = "writing" if mode == "w" else "reading"
        message = f"Error opening file {path} for {purpose}!"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
        self.path = path
        self.mode = mode
