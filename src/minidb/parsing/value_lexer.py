"""Tokenizer for the value list of an INSERT command."""

import ply.lex as lex


class ValueLexer:
    """Lexer for a comma-separated value list with single-quoted strings.

    Inside quotes commas are plain text. Quote characters toggle the state
    and are dropped from the values. Whitespace is never stripped.
    """

    tokens = ["QUOTE", "COMMA", "TEXT"]

    # Quoted state: everything up to the closing quote is text
    states = (("quoted", "exclusive"),)

    t_ignore = ""
    t_COMMA = r","

    def __init__(self) -> None:
        self.lexer: lex.Lexer = None  # type: ignore

    def t_QUOTE(self, t: lex.LexToken) -> lex.LexToken:
        r"'"
        t.lexer.begin("quoted")
        return t

    def t_TEXT(self, t: lex.LexToken) -> lex.LexToken:
        r"[^',]+"
        return t

    def t_error(self, t: lex.LexToken) -> None:
        raise SyntaxError(f"Illegal character '{t.value[0]}' at position {t.lexpos}")

    # --- Exclusive quoted state tokens ---

    t_quoted_ignore = ""

    def t_quoted_QUOTE(self, t: lex.LexToken) -> lex.LexToken:
        r"'"
        t.lexer.begin("INITIAL")
        return t

    def t_quoted_TEXT(self, t: lex.LexToken) -> lex.LexToken:
        r"[^']+"
        return t

    def t_quoted_error(self, t: lex.LexToken) -> None:
        t.lexer.begin("INITIAL")
        raise SyntaxError(f"Illegal character '{t.value[0]}' in quoted value at position {t.lexpos}")

    # --- Lexer methods ---

    def build(self, **kwargs) -> None:  # type: ignore
        """Build the lexer."""
        self.lexer = lex.lex(module=self, **kwargs)

    def tokenize(self, data: str) -> list[lex.LexToken]:
        """Tokenize the input and return all tokens."""
        self.lexer.begin("INITIAL")
        self.lexer.input(data)
        tokens = []
        while True:
            tok = self.lexer.token()
            if tok is None:
                break
            tokens.append(tok)
        return tokens

    def split(self, data: str) -> list[str]:
        """Split a value list into fields.

        One leading ``(`` and one trailing ``)`` are removed first. Only
        non-empty fields are returned, so ``a,,b`` and ``a,'',b`` both give
        two fields. An unterminated quote runs to the end of the input.
        """
        if data.startswith("("):
            data = data[1:]
        if data.endswith(")"):
            data = data[:-1]

        values: list[str] = []
        current = ""
        for tok in self.tokenize(data):
            if tok.type == "TEXT":
                current += tok.value
            elif tok.type == "COMMA":
                if current:
                    values.append(current)
                current = ""
        if current:
            values.append(current)
        return values


_default_lexer: ValueLexer | None = None


def split_values(data: str) -> list[str]:
    """Split an INSERT value list using a shared :class:`ValueLexer`."""
    global _default_lexer
    if _default_lexer is None:
        _default_lexer = ValueLexer()
        _default_lexer.build()
    return _default_lexer.split(data)
