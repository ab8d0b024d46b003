"""minidb - A minimal in-process relational data store."""

from minidb.catalog import Catalog
from minidb.engine import CommandResult, Engine, Session
from minidb.errors import (
    ColumnCountMismatch,
    ConstraintViolation,
    FileOpenFailure,
    InvalidInsertSyntax,
    InvalidTypeValue,
    MiniDBError,
    NoCurrentTable,
    NullViolation,
    TableAlreadyExists,
    TableNotFound,
    UniqueViolation,
    UnknownCommand,
)
from minidb.schema import Column, Constraint, Record
from minidb.table import Table, TableView

__all__ = [
    # Main API
    "Engine",
    "Session",
    "CommandResult",
    # Data model
    "Catalog",
    "Table",
    "TableView",
    "Column",
    "Constraint",
    "Record",
    # Errors
    "MiniDBError",
    "ConstraintViolation",
    "ColumnCountMismatch",
    "InvalidTypeValue",
    "NullViolation",
    "UniqueViolation",
    "NoCurrentTable",
    "TableNotFound",
    "TableAlreadyExists",
    "UnknownCommand",
    "InvalidInsertSyntax",
    "FileOpenFailure",
]

__version__ = "0.1.0"
