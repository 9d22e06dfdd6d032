"""The commands understood by the shell, with their one-line descriptions."""

from __future__ import annotations

from typing import NamedTuple


class Suggestion(NamedTuple):
    text: str
    description: str


COMMANDS: tuple[Suggestion, ...] = (
    Suggestion("ls", "List tables"),
    Suggestion("lookup", "Read from a single row"),
    Suggestion("read", "Read from a multi rows"),
    Suggestion("help", "Show the available commands"),
    Suggestion("exit", "Exit this prompt"),
    Suggestion("quit", "Exit this prompt"),
)

# Verbs whose second word is a table name.
TABLE_VERBS = ("lookup", "read")
