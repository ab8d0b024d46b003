"""Parsing module for minidb commands and value lists."""

from minidb.parsing.command_parser import (
    AddColumnCommand,
    Command,
    CommandParser,
    CreateTableCommand,
    InsertCommand,
    LoadCommand,
    SaveCommand,
    SelectCommand,
)
from minidb.parsing.value_lexer import ValueLexer, split_values

__all__ = [
    "AddColumnCommand",
    "Command",
    "CommandParser",
    "CreateTableCommand",
    "InsertCommand",
    "LoadCommand",
    "SaveCommand",
    "SelectCommand",
    "ValueLexer",
    "split_values",
]
