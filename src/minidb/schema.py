"""Column definitions, constraint flags and records."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag
from typing import Iterator

# Declared type that is checked on insert; any other type tag is stored as-is.
INT_TYPE = "int"


class Constraint(IntFlag):
    """Column constraints, stored on disk as the integer value of the set."""

    NONE = 0
    PRIMARY_KEY = 1
    NOT_NULL = 2
    UNIQUE = 4

    @classmethod
    def from_keyword(cls, keyword: str) -> Constraint:
        """Map an ADD COLUMN keyword to its flag (NONE if unrecognized)."""
        return _KEYWORD_FLAGS.get(keyword, cls.NONE)


_KEYWORD_FLAGS = {
    "PRIMARY": Constraint.PRIMARY_KEY,
    "NOTNULL": Constraint.NOT_NULL,
    "UNIQUE": Constraint.UNIQUE,
}

_FLAG_LABELS = (
    (Constraint.PRIMARY_KEY, "PRIMARY KEY"),
    (Constraint.NOT_NULL, "NOT NULL"),
    (Constraint.UNIQUE, "UNIQUE"),
)


@dataclass(frozen=True)
class Column:
    """A single column of a table schema.

    The three constraint bits are independent: PRIMARY_KEY does not set
    NOT_NULL or UNIQUE, the table enforces its semantics separately.
    """

    name: str
    type: str
    constraints: Constraint = Constraint.NONE

    def __post_init__(self) -> None:
        # Accept plain ints from the command parser and the database file.
        object.__setattr__(self, "constraints", Constraint(self.constraints))

    def has_constraint(self, flag: Constraint) -> bool:
        """Return True if ``flag`` is set on this column."""
        return bool(self.constraints & flag)

    def describe_constraints(self) -> str:
        """Return a readable rendering of the constraint set, or "0" for none."""
        if not self.constraints:
            return "0"
        return " ".join(label for flag, label in _FLAG_LABELS if self.has_constraint(flag))

    @property
    def is_integer(self) -> bool:
        return self.type == INT_TYPE


@dataclass(frozen=True)
class Record:
    """An inserted row; every field is kept as text."""

    fields: tuple[str, ...]

    def __len__(self) -> int:
        return len(self.fields)

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def __getitem__(self, index: int) -> str:
        return self.fields[index]
