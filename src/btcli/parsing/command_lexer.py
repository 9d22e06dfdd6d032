"""Lexer for shell command lines."""

import ply.lex as lex


class CommandLexer:
    """Lexer for tokenizing a single command line.

    Only the first token can be a verb.  After it the lexer switches to the
    exclusive ``args`` state, where every token is either a ``name=value``
    option or a plain word, so tables and keys may share a verb's name.
    """

    # Verbs
    reserved = {
        "ls": "LS",
        "lookup": "LOOKUP",
        "read": "READ",
        "help": "HELP",
        "exit": "EXIT",
        "quit": "QUIT",
    }

    # Token list
    tokens = [
        "WORD",
        "OPTION",
    ] + list(reserved.values())

    states = (("args", "exclusive"),)

    t_ignore = " \t\r\n\f\v"
    t_args_ignore = " \t\r\n\f\v"

    def __init__(self) -> None:
        self.lexer: lex.Lexer = None  # type: ignore

    def t_WORD(self, t: lex.LexToken) -> lex.LexToken:
        r"[^\s]+"
        t.type = self.reserved.get(t.value, "WORD")
        t.lexer.begin("args")
        return t

    def t_error(self, t: lex.LexToken) -> None:
        raise SyntaxError(f"Illegal character '{t.value[0]}' at position {t.lexpos}")

    # --- Exclusive args state tokens ---

    def t_args_OPTION(self, t: lex.LexToken) -> lex.LexToken:
        r"[^\s=]+=[^\s]*"
        return t

    def t_args_WORD(self, t: lex.LexToken) -> lex.LexToken:
        r"[^\s]+"
        return t

    def t_args_error(self, t: lex.LexToken) -> None:
        raise SyntaxError(f"Illegal character '{t.value[0]}' at position {t.lexpos}")

    # --- Lexer methods ---

    def build(self, **kwargs) -> None:  # type: ignore
        """Build the lexer."""
        self.lexer = lex.lex(module=self, **kwargs)

    def input(self, data: str) -> None:
        """Set the input string to tokenize, starting from a verb."""
        self.lexer.begin("INITIAL")
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
