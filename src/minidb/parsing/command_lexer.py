"""Lexer for minidb command lines."""

import ply.lex as lex


class CommandLexer:
    """Splits a command line into whitespace-separated words.

    Keywords are matched exactly (case-sensitive); every other word is a
    WORD token. Each token keeps its matched text as its value.
    """

    # Reserved keywords
    reserved = {
        "CREATE": "CREATE",
        "TABLE": "TABLE",
        "ADD": "ADD",
        "COLUMN": "COLUMN",
        "INSERT": "INSERT",
        "INTO": "INTO",
        "VALUES": "VALUES",
        "SELECT": "SELECT",
        "*": "STAR",
        "FROM": "FROM",
        "SAVE": "SAVE",
        "TO": "TO",
        "FILE": "FILE",
        "LOAD": "LOAD",
    }

    # Token list
    tokens = ["WORD"] + list(reserved.values())

    t_ignore = " \t\r\n"

    def __init__(self) -> None:
        self.lexer: lex.Lexer = None  # type: ignore

    def t_WORD(self, t: lex.LexToken) -> lex.LexToken:
        r"\S+"
        t.type = self.reserved.get(t.value, "WORD")
        return t

    def t_error(self, t: lex.LexToken) -> None:
        raise SyntaxError(f"Illegal character '{t.value[0]}' at position {t.lexpos}")

    def build(self, **kwargs) -> None:  # type: ignore
        """Build the lexer."""
        self.lexer = lex.lex(module=self, **kwargs)

    def input(self, data: str) -> None:
        """Set the input string to tokenize."""
        self.lexer.input(data)

    def token(self) -> lex.LexToken | None:
        """Return the next token."""
        return self.lexer.token()

    def tokenize(self, data: str) -> list[lex.LexToken]:
        """Tokenize the input and return all tokens."""
        self.input(data)
        tokens = []
        while True:
            tok = self.token()
            if tok is None:
                break
            tokens.append(tok)
        return tokens
