"""Parser for shell command lines."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import ply.yacc as yacc

from btcli.errors import ArgumentError
from btcli.parsing.command_lexer import CommandLexer


@dataclass
class Argument:
    """A word following the verb.  ``name``/``value`` are set for ``name=value`` words."""

    text: str
    name: str | None = None
    value: str | None = None

    @property
    def is_option(self) -> bool:
        return self.name is not None


@dataclass
class ListTablesCommand:
    """``ls``"""


@dataclass
class LookupCommand:
    """``lookup <table> <key>``"""

    table: str
    key: str


@dataclass
class ReadCommand:
    """``read <table> [name=value ...]``"""

    table: str
    options: dict[str, str] = field(default_factory=dict)


@dataclass
class HelpCommand:
    """``help``"""


@dataclass
class ExitCommand:
    """``exit`` or ``quit``"""


@dataclass
class UnknownCommand:
    """Any line whose first word is not a verb."""

    verb: str
    arguments: list[Argument] = field(default_factory=list)


Command = (
    ListTablesCommand
    | LookupCommand
    | ReadCommand
    | HelpCommand
    | ExitCommand
    | UnknownCommand
)


class CommandParser:
    """Parser for one command line."""

    tokens = CommandLexer.tokens

    def __init__(self) -> None:
        self.lexer = CommandLexer()
        self.lexer.build()
        self.parser: yacc.LRParser = None  # type: ignore

    def p_command_ls(self, p: yacc.YaccProduction) -> None:
        """command : LS arguments"""
        p[0] = ListTablesCommand()

    def p_command_lookup(self, p: yacc.YaccProduction) -> None:
        """command : LOOKUP arguments"""
        args = p[2]
        if len(args) < 2:
            raise ArgumentError("usage: lookup <table> <key>")
        p[0] = LookupCommand(table=args[0].text, key=args[1].text)

    def p_command_read(self, p: yacc.YaccProduction) -> None:
        """command : READ arguments"""
        args = p[2]
        if not args or args[0].is_option:
            raise ArgumentError("usage: read <table> [name=value ...]")
        options = {a.name: a.value for a in args[1:] if a.is_option}
        p[0] = ReadCommand(table=args[0].text, options=options)  # type: ignore[arg-type]

    def p_command_help(self, p: yacc.YaccProduction) -> None:
        """command : HELP arguments"""
        p[0] = HelpCommand()

    def p_command_exit(self, p: yacc.YaccProduction) -> None:
        """command : EXIT arguments
                   | QUIT arguments"""
        p[0] = ExitCommand()

    def p_command_unknown(self, p: yacc.YaccProduction) -> None:
        """command : WORD arguments"""
        p[0] = UnknownCommand(verb=p[1], arguments=p[2])

    def p_arguments_empty(self, p: yacc.YaccProduction) -> None:
        """arguments : """
        p[0] = []

    def p_arguments_append(self, p: yacc.YaccProduction) -> None:
        """arguments : arguments argument"""
        p[0] = p[1] + [p[2]]

    def p_argument_word(self, p: yacc.YaccProduction) -> None:
        """argument : WORD"""
        p[0] = Argument(text=p[1])

    def p_argument_option(self, p: yacc.YaccProduction) -> None:
        """argument : OPTION"""
        name, _, value = p[1].partition("=")
        p[0] = Argument(text=p[1], name=name, value=value)

    def p_error(self, p: yacc.YaccProduction) -> None:
        if p:
            raise SyntaxError(f"Syntax error at '{p.value}' (position {p.lexpos})")
        else:
            raise SyntaxError("Syntax error at end of input")

    def build(self, **kwargs: Any) -> None:
        """Build the parser."""
        self.parser = yacc.yacc(module=self, start="command", **kwargs)

    def parse(self, data: str) -> Command:
        """Parse a command line."""
        if self.parser is None:
            self.build(debug=False, write_tables=False)

        self.lexer.lexer.begin("INITIAL")
        return self.parser.parse(data, lexer=self.lexer.lexer)
