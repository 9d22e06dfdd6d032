"""Tab completion of commands and table names."""

from __future__ import annotations

import readline
from collections.abc import Callable, Sequence

from btcli.commands import COMMANDS, TABLE_VERBS, Suggestion
from btcli.errors import StoreError
from btcli.log import get_logger

logger = get_logger(__name__)


def filter_has_prefix(suggestions: Sequence[Suggestion], prefix: str) -> list[Suggestion]:
    """Return the suggestions starting with ``prefix``, ignoring case."""
    prefix = prefix.lower()
    return [s for s in suggestions if s.text.lower().startswith(prefix)]


class Completer:
    """Suggests commands for the first word and tables after ``lookup``/``read``.

    ``tables`` is either a fixed list of names or a callable asked for the
    names each time they are needed.
    """

    def __init__(self, tables: Sequence[str] | Callable[[], Sequence[str]] = ()) -> None:
        self._tables = tables
        self._matches: list[str] = []

    def table_suggestions(self) -> list[Suggestion]:
        if callable(self._tables):
            try:
                names = self._tables()
            except StoreError as e:
                logger.debug("table completion unavailable", error=str(e))
                return []
        else:
            names = self._tables
        return [Suggestion(name, name) for name in names]

    def suggest(self, text_before_cursor: str) -> list[Suggestion]:
        """Return the suggestions for the text typed so far."""
        if not text_before_cursor:
            return []
        args = text_before_cursor.split(" ")
        if len(args) <= 1:
            return filter_has_prefix(COMMANDS, args[0])
        if args[0] in TABLE_VERBS and len(args) == 2:
            return filter_has_prefix(self.table_suggestions(), args[1])
        return []

    def complete(self, text: str, state: int) -> str | None:
        """``readline`` completer entry point."""
        if state == 0:
            line = readline.get_line_buffer()[: readline.get_endidx()]
            self._matches = [s.text for s in self.suggest(line)]
        if state < len(self._matches):
            return self._matches[state]
        return None
