"""The row store capability the shell reads from."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from btcli.options import ReadModifier, RowRange
from btcli.rows import ResultSet


@runtime_checkable
class RowStore(Protocol):
    """Read access to the tables of a wide-column store.

    Implementations raise ``StoreError`` for any failure to answer.  A row
    that does not exist is not a failure: ``get_row`` returns an empty
    result set for it.
    """

    def list_tables(self) -> list[str]:
        """Return the names of all tables."""
        ...

    def get_row(self, table: str, key: str) -> ResultSet:
        """Return the row stored under ``key``, if any."""
        ...

    def get_rows(self, table: str, row_range: RowRange, *modifiers: ReadModifier) -> ResultSet:
        """Return the rows in ``row_range``, constrained by ``modifiers``."""
        ...
