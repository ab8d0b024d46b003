"""Interactive REPL and command-line entry point for minidb."""

from __future__ import annotations

import argparse
import logging
import readline  # noqa: F401 - enables line editing in input()
import sys
from pathlib import Path

from minidb.config import DATABASE_FILE, HISTORY_FILE, configure_logging
from minidb.engine import CommandResult, Engine, SelectResult
from minidb.errors import MiniDBError

logger = logging.getLogger(__name__)

EXIT_COMMAND = "EXIT"

COMMANDS = """\
  CREATE TABLE <name>
  ADD COLUMN <name> <type> [PRIMARY] [NOTNULL] [UNIQUE]
  INSERT INTO <table> VALUES (val1, val2, ...)
  SELECT * FROM <table>
  SAVE TO FILE
  LOAD FROM FILE
  EXIT"""


def print_result(result: CommandResult) -> None:
    """Print a command result: table rows for SELECT, status lines otherwise."""
    if isinstance(result, SelectResult) and result.view is not None:
        for line in result.view:
            print(line)
        return

    for message in result.messages:
        print(message)


def print_help() -> None:
    """Print help information."""
    print(f"""
minidb - Mini Database Engine

COMMANDS:
{COMMANDS}

CONSTRAINTS:
  PRIMARY                  Value must be present and unique
  NOTNULL                  Value must not be empty
  UNIQUE                   Value must not repeat an existing one

TYPES:
  int                      Digits and '-' only
  any other name           Stored as text without checks

VALUES:
  Values are separated by commas. Wrap a value in single quotes to keep
  commas inside it: INSERT INTO t VALUES ('Smith, J', 42)

PERSISTENCE:
  SAVE TO FILE / LOAD FROM FILE use the database file (default database.txt).
  LOAD replaces every table in memory.
""")


def run_repl(engine: Engine) -> int:
    """Run the interactive REPL."""
    print("Mini Database Engine v1.0")
    print("Available commands:")
    print(COMMANDS)
    print("=" * 50)

    try:
        readline.read_history_file(HISTORY_FILE)
    except OSError:
        pass

    try:
        while True:
            try:
                line = input("> ")
            except EOFError:
                print()
                break

            if line == EXIT_COMMAND:
                break
            if line.strip().lower() == "help":
                print_help()
                continue

            try:
                print_result(engine.execute(line))
            except MiniDBError as e:
                print(f"Error: {e}")
            except Exception as e:
                logger.debug("Unexpected error running %r", line, exc_info=True)
                print(f"Error: {e}")

    finally:
        try:
            readline.set_history_length(1000)
            readline.write_history_file(HISTORY_FILE)
        except OSError:
            logger.debug("Could not write history file %s", HISTORY_FILE)

    return 0


def run_commands(engine: Engine, commands: list[str], verbose: bool = False) -> int:
    """Run commands in order, stopping at EXIT or at the first error.

    Returns:
        0 on success, 1 on error
    """
    for command in commands:
        if command == EXIT_COMMAND:
            break
        if verbose:
            print(f"> {command}")
        try:
            print_result(engine.execute(command))
        except MiniDBError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        except Exception as e:
            logger.debug("Unexpected error running %r", command, exc_info=True)
            print(f"Error: {e}", file=sys.stderr)
            return 1
    return 0


def run_file(file_path: Path, engine: Engine, verbose: bool = False) -> int:
    """Execute commands from a file, one per line.

    Blank lines and lines starting with ``--`` are skipped.

    Args:
        file_path: Path to the file containing commands
        engine: Engine to run the commands against
        verbose: If True, print each command before executing

    Returns:
        0 on success, 1 on error
    """
    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as e:
        print(f"Error reading file: {e}", file=sys.stderr)
        return 1

    commands = []
    for line in content.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("--"):
            continue
        commands.append(stripped)

    return run_commands(engine, commands, verbose=verbose)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    arg_parser = argparse.ArgumentParser(
        prog="minidb",
        description="Interactive shell for the mini database engine",
    )
    arg_parser.add_argument(
        "-d", "--database",
        type=Path,
        default=DATABASE_FILE,
        help=f"File used by SAVE TO FILE and LOAD FROM FILE (default: {DATABASE_FILE})",
    )
    arg_parser.add_argument(
        "-c", "--command",
        action="append",
        help="Execute a command and exit (may be given several times)",
    )
    arg_parser.add_argument(
        "-f", "--file",
        type=Path,
        help="Execute commands from a file and exit",
    )
    arg_parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Print each command before executing (for -c and -f)",
    )
    arg_parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: MINIDB_LOG_LEVEL or WARNING)",
    )

    args = arg_parser.parse_args(argv)
    configure_logging(args.log_level.upper() if args.log_level else None)

    engine = Engine(database_file=args.database)

    if args.file:
        if not args.file.exists():
            print(f"Error: File not found: {args.file}", file=sys.stderr)
            return 1
        return run_file(args.file, engine, verbose=args.verbose)

    if args.command:
        return run_commands(engine, args.command, verbose=args.verbose)

    return run_repl(engine)


if __name__ == "__main__":
    sys.exit(main())
