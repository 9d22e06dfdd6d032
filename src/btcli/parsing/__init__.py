"""Parsing of shell command lines."""

from btcli.parsing.command_parser import (
    Argument,
    Command,
    CommandParser,
    ExitCommand,
    HelpCommand,
    ListTablesCommand,
    LookupCommand,
    ReadCommand,
    UnknownCommand,
)

__all__ = [
    "Argument",
    "Command",
    "CommandParser",
    "ExitCommand",
    "HelpCommand",
    "ListTablesCommand",
    "LookupCommand",
    "ReadCommand",
    "UnknownCommand",
]
