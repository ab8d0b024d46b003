"""Parser for minidb commands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import ply.yacc as yacc

from minidb.parsing.command_lexer import CommandLexer
from minidb.schema import Constraint


@dataclass
class CreateTableCommand:
    """CREATE TABLE <name>"""

    name: str


@dataclass
class AddColumnCommand:
    """ADD COLUMN <name> <type> [PRIMARY] [NOTNULL] [UNIQUE]"""

    name: str
    type_name: str
    constraints: Constraint = Constraint.NONE


@dataclass
class InsertCommand:
    """INSERT INTO <table> VALUES (...)

    ``values_text`` is everything after the VALUES keyword, re-joined with
    single spaces, or None when the keyword is missing.
    """

    table: str | None = None
    values_text: str | None = None


@dataclass
class SelectCommand:
    """SELECT * FROM <name>"""

    table: str


@dataclass
class SaveCommand:
    """SAVE TO FILE"""

    pass


@dataclass
class LoadCommand:
    """LOAD FROM FILE"""

    pass


Command = CreateTableCommand | AddColumnCommand | InsertCommand | SelectCommand | SaveCommand | LoadCommand


class CommandParser:
    """Parser for minidb command lines.

    Words after a complete command are accepted and ignored, and keywords
    may be used as table or column names.
    """

    tokens = CommandLexer.tokens

    def __init__(self) -> None:
        self.lexer = CommandLexer()
        self.lexer.build()
        self.parser: yacc.LRParser = None  # type: ignore

    def p_statement(self, p: yacc.YaccProduction) -> None:
        """statement : create_table
                     | add_column
                     | insert
                     | select
                     | save
                     | load"""
        p[0] = p[1]

    def p_create_table(self, p: yacc.YaccProduction) -> None:
        """create_table : CREATE TABLE word words"""
        p[0] = CreateTableCommand(name=p[3])

    def p_add_column(self, p: yacc.YaccProduction) -> None:
        """add_column : ADD COLUMN word word words"""
        constraints = Constraint.NONE
        for keyword in p[5]:
            constraints |= Constraint.from_keyword(keyword)
        p[0] = AddColumnCommand(name=p[3], type_name=p[4], constraints=constraints)

    def p_insert(self, p: yacc.YaccProduction) -> None:
        """insert : INSERT INTO words"""
        words = p[3]
        if "VALUES" not in words:
            p[0] = InsertCommand(table=words[0] if words else None)
            return
        pos = words.index("VALUES")
        p[0] = InsertCommand(
            table=words[0] if pos > 0 else None,
            values_text=" ".join(words[pos + 1:]),
        )

    def p_select(self, p: yacc.YaccProduction) -> None:
        """select : SELECT STAR FROM word words"""
        p[0] = SelectCommand(table=p[4])

    def p_save(self, p: yacc.YaccProduction) -> None:
        """save : SAVE TO FILE words"""
        p[0] = SaveCommand()

    def p_load(self, p: yacc.YaccProduction) -> None:
        """load : LOAD FROM FILE words"""
        p[0] = LoadCommand()

    def p_words_empty(self, p: yacc.YaccProduction) -> None:
        """words : """
        p[0] = []

    def p_words(self, p: yacc.YaccProduction) -> None:
        """words : words word"""
        p[0] = p[1] + [p[2]]

    def p_word(self, p: yacc.YaccProduction) -> None:
        """word : WORD
                | CREATE
                | TABLE
                | ADD
                | COLUMN
                | INSERT
                | INTO
                | VALUES
                | SELECT
                | STAR
                | FROM
                | SAVE
                | TO
                | FILE
                | LOAD"""
        p[0] = p[1]

    def p_error(self, p: yacc.YaccProduction) -> None:
        if p:
            raise SyntaxError(f"Syntax error at '{p.value}' (position {p.lexpos})")
        else:
            raise SyntaxError("Syntax error at end of input")

    def build(self, **kwargs: Any) -> None:
        """Build the parser."""
        self.parser = yacc.yacc(module=self, start="statement", **kwargs)

    def parse(self, data: str) -> Command | None:
        """Parse a command line. Returns None for a blank line."""
        if not data.strip():
            return None
        if self.parser is None:
            self.build(debug=False, write_tables=False)

        return self.parser.parse(data, lexer=self.lexer.lexer)
