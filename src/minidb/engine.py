"""Command execution for minidb."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from minidb.catalog import Catalog
from minidb.config import DATABASE_FILE
from minidb.errors import InvalidInsertSyntax, NoCurrentTable, UnknownCommand
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
from minidb.parsing.value_lexer import split_values
from minidb.schema import Column
from minidb.table import Table, TableView

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Result of a command execution."""

    messages: list[str] = field(default_factory=list)


@dataclass
class CreateTableResult(CommandResult):
    table: str = ""


@dataclass
class AddColumnResult(CommandResult):
    table: str = ""
    column: Column | None = None


@dataclass
class InsertResult(CommandResult):
    """Result of an INSERT; ``row_count`` is the table size after the insert."""

    table: str = ""
    values: list[str] = field(default_factory=list)
    row_count: int = 0


@dataclass
class SelectResult(CommandResult):
    """Result of SELECT * - the rendered view of one table."""

    table: str = ""
    view: TableView | None = None


@dataclass
class SaveResult(CommandResult):
    path: str = ""
    table_count: int = 0


@dataclass
class LoadResult(CommandResult):
    path: str = ""
    tables: list[str] = field(default_factory=list)


@dataclass
class Session:
    """Per-client state: the table targeted by ADD COLUMN and INSERT.

    ``current_table`` refers into the catalog and does not own the table.
    """

    current_table: Table | None = None

    def require_table(self) -> Table:
        if self.current_table is None:
            raise NoCurrentTable()
        return self.current_table


class Engine:
    """Parses command lines and runs them against a catalog."""

    def __init__(
        self,
        catalog: Catalog | None = None,
        database_file: Path | str = DATABASE_FILE,
        session: Session | None = None,
    ) -> None:
        self.catalog = catalog if catalog is not None else Catalog()
        self.database_file = Path(database_file)
        self.session = session if session is not None else Session()
        self.parser = CommandParser()

    def execute(self, line: str, session: Session | None = None) -> CommandResult:
        """Parse and run one command line.

        Raises:
            UnknownCommand: If the line is not a recognized command.
            MiniDBError: Any error raised by the command itself.
        """
        try:
            command = self.parser.parse(line)
        except SyntaxError as e:
            logger.debug("Could not parse %r: %s", line, e)
            raise UnknownCommand(line) from e

        if command is None:
            return CommandResult()
        return self.execute_command(command, session)

    def execute_command(self, command: Command, session: Session | None = None) -> CommandResult:
        """Run a parsed command."""
        session = session if session is not None else self.session
        if isinstance(command, CreateTableCommand):
            return self._execute_create_table(command, session)
        elif isinstance(command, AddColumnCommand):
            return self._execute_add_column(command, session)
        elif isinstance(command, InsertCommand):
            return self._execute_insert(command, session)
        elif isinstance(command, SelectCommand):
            return self._execute_select(command)
        elif isinstance(command, SaveCommand):
            return self._execute_save()
        elif isinstance(command, LoadCommand):
            return self._execute_load(session)
        else:
            raise ValueError(f"Unknown command type: {type(command)}")

    def _execute_create_table(self, command: CreateTableCommand, session: Session) -> CreateTableResult:
        table = self.catalog.create_table(command.name)
        session.current_table = table
        return CreateTableResult(
            messages=[f"Table {table.name} created successfully."],
            table=table.name,
        )

    def _execute_add_column(self, command: AddColumnCommand, session: Session) -> AddColumnResult:
        table = session.require_table()
        column = table.add_column(command.name, command.type_name, command.constraints)
        return AddColumnResult(
            messages=[f"Column {column.name} added successfully."],
            table=table.name,
            column=column,
        )

    def _execute_insert(self, command: InsertCommand, session: Session) -> InsertResult:
        # The table named in the command is not consulted: rows always go
        # to the session's current table.
        table = session.require_table()
        if command.values_text is None:
            raise InvalidInsertSyntax()
        if command.table is not None and command.table != table.name:
            logger.debug("INSERT names %s but targets current table %s", command.table, table.name)

        values = split_values(command.values_text)
        table.insert_row(values)
        return InsertResult(
            messages=["Record inserted."],
            table=table.name,
            values=values,
            row_count=table.row_count,
        )

    def _execute_select(self, command: SelectCommand) -> SelectResult:
        table = self.catalog.get_table(command.table)
        return SelectResult(table=table.name, view=table.select_all())

    def _execute_save(self) -> SaveResult:
        count = self.catalog.save(self.database_file)
        return SaveResult(
            messages=[f"Database saved to {self.database_file}"],
            path=str(self.database_file),
            table_count=count,
        )

    def _execute_load(self, session: Session) -> LoadResult:
        loaded = self.catalog.load(self.database_file)
        # The previous current table no longer exists in the catalog.
        session.current_table = None
        messages = [f"Table {table.name} loaded successfully." for table in loaded]
        messages.append(f"Database loaded from {self.database_file}")
        return LoadResult(
            messages=messages,
            path=str(self.database_file),
            tables=[table.name for table in loaded],
        )
