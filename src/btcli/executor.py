"""Execution of shell commands against a row store."""

from __future__ import annotations

import sys
from typing import TextIO

from btcli.commands import COMMANDS
from btcli.errors import ArgumentError, StoreError
from btcli.formatting import write_row
from btcli.log import get_logger
from btcli.options import build_query
from btcli.parsing import (
    Command,
    CommandParser,
    ExitCommand,
    HelpCommand,
    ListTablesCommand,
    LookupCommand,
    ReadCommand,
    UnknownCommand,
)
from btcli.rows import ResultSet
from btcli.store import RowStore

logger = get_logger(__name__)


class CommandExecutor:
    """Runs one command line at a time.

    Output goes only to ``out`` and ``err``.  A failing command reports on
    ``err`` and leaves the executor ready for the next line.
    """

    def __init__(self, store: RowStore, out: TextIO | None = None, err: TextIO | None = None) -> None:
        self.store = store
        self.out = out if out is not None else sys.stdout
        self.err = err if err is not None else sys.stderr
        self.parser = CommandParser()
        self.failures = 0

    def execute(self, line: str) -> bool:
        """Execute a command line.

        Returns:
            False once the session should end, True otherwise.
        """
        if not line.strip():
            return True
        try:
            command = self.parser.parse(line)
            return self.dispatch(command)
        except SyntaxError as e:
            self.report(f"Syntax error: {e}")
        except ArgumentError as e:
            self.report(f"Invalid argument: {e}")
        except StoreError as e:
            self.report(f"Error: {e}")
        return True

    def report(self, message: str) -> None:
        """Write a failure message to the error sink and count it."""
        self.failures += 1
        self.err.write(message + "\n")

    def dispatch(self, command: Command) -> bool:
        logger.debug("executing command", command=type(command).__name__)
        if isinstance(command, ExitCommand):
            return False
        if isinstance(command, ListTablesCommand):
            self.list_tables()
        elif isinstance(command, LookupCommand):
            self.lookup(command)
        elif isinstance(command, ReadCommand):
            self.read(command)
        elif isinstance(command, HelpCommand):
            self.help()
        elif isinstance(command, UnknownCommand):
            logger.debug("ignoring unknown command", verb=command.verb)
        return True

    def list_tables(self) -> None:
        for name in self.store.list_tables():
            self.out.write(name + "\n")

    def lookup(self, command: LookupCommand) -> None:
        self.print_result(self.store.get_row(command.table, command.key))

    def read(self, command: ReadCommand) -> None:
        query = build_query(command.options)
        result = self.store.get_rows(command.table, query.row_range, *query.modifiers())
        self.print_result(result)

    def help(self) -> None:
        width = max(len(s.text) for s in COMMANDS)
        for suggestion in COMMANDS:
            self.out.write(f"  {suggestion.text.ljust(width)}  {suggestion.description}\n")

    def print_result(self, result: ResultSet) -> None:
        for row in result.rows:
            write_row(row, self.out)
