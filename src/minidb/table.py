"""In-memory table with schema validation and text serialization."""

from __future__ import annotations

import logging
import re
from typing import Iterable, Iterator, Sequence, TextIO

from minidb.config import COLUMN_WIDTH
from minidb.errors import (
    ColumnCountMismatch,
    ConstraintViolation,
    InvalidTypeValue,
    NullViolation,
    UniqueViolation,
)
from minidb.schema import Column, Constraint, Record

logger = logging.getLogger(__name__)

DATA_MARKER = "DATA"
END_MARKER = "END"
TABLE_PREFIX = "TABLE "

NO_RECORDS = "No records found."

# Characters allowed in a value of an int column
INTEGER_CHARS = frozenset("0123456789-")

# Constraint bits are read from the leading digits of the third field
_BITS_PATTERN = re.compile(r"[0-9]+")


class TableView:
    """Text rendering of a table's contents.

    Lines are produced on iteration, so the view reflects the table at the
    time it is read and can be iterated any number of times.
    """

    def __init__(self, table: Table, width: int = COLUMN_WIDTH) -> None:
        self.table = table
        self.width = width

    def _format(self, values: Iterable[str]) -> str:
        return "".join(value.ljust(self.width) for value in values)

    def __iter__(self) -> Iterator[str]:
        if not self.table.records:
            yield NO_RECORDS
            return

        yield self._format(column.name for column in self.table.columns)
        yield "-" * (self.width * len(self.table.columns))
        for record in self.table.records:
            yield self._format(record)

    def __str__(self) -> str:
        return "\n".join(self)


class Table:
    """A named table: an ordered schema and the records inserted into it.

    Records are kept in insertion order and every constraint check is a
    linear scan over them.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self.columns: list[Column] = []
        self._records: list[Record] = []

    def __repr__(self) -> str:
        return f"Table({self.name!r}, columns={len(self.columns)}, rows={len(self._records)})"

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> tuple[Record, ...]:
        """Return the records in insertion order."""
        return tuple(self._records)

    @property
    def row_count(self) -> int:
        """Return the number of records in the table."""
        return len(self._records)

    def add_column(self, name: str, type_name: str, constraints: int = 0) -> Column:
        """Append a column to the schema.

        Existing rows are not re-validated, so columns are expected to be
        added before the first insert.
        """
        column = Column(name, type_name, Constraint(constraints))
        self.columns.append(column)
        logger.debug(
            "Added column %s %s (%s) to %s", name, type_name, column.describe_constraints(), self.name
        )
        return column

    def insert_row(self, values: Sequence[str]) -> Record:
        """Validate ``values`` against the schema and append them as a record.

        Raises:
            ColumnCountMismatch: If the number of values differs from the column count.
            InvalidTypeValue: If a value of an ``int`` column has a character
                other than a digit or ``-``.
            NullViolation: If a NOT NULL or PRIMARY KEY value is empty.
            UniqueViolation: If a UNIQUE or PRIMARY KEY value already exists.
        """
        if len(values) != len(self.columns):
            raise ColumnCountMismatch(len(self.columns), len(values))

        self._check_types(values)
        self._check_constraints(values)

        record = Record(tuple(values))
        self._records.append(record)
        logger.debug("Inserted row %d into %s", len(self._records), self.name)
        return record

    def _check_types(self, values: Sequence[str]) -> None:
        for column, value in zip(self.columns, values):
            if column.is_integer and not all(ch in INTEGER_CHARS for ch in value):
                raise InvalidTypeValue(
                    f"Invalid integer value for column {column.name}", column=column.name, constraint="type"
                )

    def _value_exists(self, index: int, value: str) -> bool:
        return any(record[index] == value for record in self._records)

    def _check_constraints(self, values: Sequence[str]) -> None:
        """Run the NOT NULL, UNIQUE and PRIMARY KEY passes in that order.

        A PRIMARY KEY column gets its own pass even if its NOT NULL and
        UNIQUE bits are also set; the first violation found is raised.
        """
        for column, value in zip(self.columns, values):
            if column.has_constraint(Constraint.NOT_NULL) and value == "":
                raise NullViolation(
                    f"Column {column.name} cannot be NULL", column=column.name, constraint="NOT NULL"
                )

        for i, (column, value) in enumerate(zip(self.columns, values)):
            if column.has_constraint(Constraint.UNIQUE) and self._value_exists(i, value):
                raise UniqueViolation(
                    f"Duplicate value in UNIQUE column {column.name}", column=column.name, constraint="UNIQUE"
                )

        for i, (column, value) in enumerate(zip(self.columns, values)):
            if not column.has_constraint(Constraint.PRIMARY_KEY):
                continue
            if value == "":
                raise NullViolation(
                    f"Primary key column {column.name} cannot be NULL",
                    column=column.name,
                    constraint="PRIMARY KEY",
                )
            if self._value_exists(i, value):
                raise UniqueViolation(
                    f"Duplicate primary key value in column {column.name}",
                    column=column.name,
                    constraint="PRIMARY KEY",
                )

    def select_all(self) -> TableView:
        """Return a view rendering the header and every record."""
        return TableView(self)

    # --- Serialization ---

    def save(self, sink: TextIO) -> None:
        """Write this table as a TABLE ... END block."""
        sink.write(f"{TABLE_PREFIX}{self.name}\n")
        for column in self.columns:
            sink.write(f"{column.name} {column.type} {int(column.constraints)}\n")
        sink.write(f"{DATA_MARKER}\n")
        for record in self._records:
            sink.write(" ".join(record) + "\n")
        sink.write(f"{END_MARKER}\n")

    def load(self, lines: Iterable[str]) -> int:
        """Read column and row lines following a TABLE header.

        Consumes ``lines`` up to and including the END marker. Rows are
        replayed through :meth:`insert_row`; rows that fail validation are
        skipped. Returns the number of skipped rows.
        """
        lines = iter(lines)
        for line in lines:
            line = line.rstrip("\r\n")
            if line == DATA_MARKER:
                break
            if not line.strip():
                continue
            self.add_column(*_parse_column_line(line))

        skipped = 0
        for line in lines:
            line = line.rstrip("\r\n")
            if line == END_MARKER:
                break
            values = line.split()
            if not values:
                continue
            try:
                self.insert_row(values)
            except ConstraintViolation as e:
                skipped += 1
                logger.warning("Skipped row %r while loading %s: %s", line, self.name, e)

        return skipped


def _parse_column_line(line: str) -> tuple[str, str, int]:
    """Split a ``<name> <type> <bits>`` line.

    Bits are taken from the leading digits of the third field, so ``3abc``
    reads as 3; a missing field or one without leading digits reads as 0.
    """
    parts = line.split()
    name = parts[0]
    type_name = parts[1] if len(parts) > 1 else ""
    match = _BITS_PATTERN.match(parts[2]) if len(parts) > 2 else None
    bits = int(match.group()) if match else 0
    return name, type_name, bits
