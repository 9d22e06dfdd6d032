"""A row store held in memory."""

from __future__ import annotations

import copy
import re
from collections.abc import Iterable, Mapping

from btcli.errors import StoreError
from btcli.options import LatestVersions, LimitRows, ReadModifier, RowKeyFilter, RowRange
from btcli.rows import Column, ResultSet, Row


class MemoryStore:
    """In-memory ``RowStore``.

    Rows are kept sorted by key, as a real store returns them.  Within a row
    the columns keep the order they were given in; for ``LatestVersions``
    the cells of one qualifier are expected newest first.
    """

    def __init__(self, tables: Mapping[str, Iterable[Row]] | None = None) -> None:
        self._tables: dict[str, dict[str, Row]] = {}
        for name, rows in (tables or {}).items():
            self.add_table(name, rows)

    def add_table(self, name: str, rows: Iterable[Row] = ()) -> None:
        """Create (or replace) a table holding ``rows``."""
        self._tables[name] = {row.key: row for row in rows}

    def _table(self, name: str) -> dict[str, Row]:
        try:
            return self._tables[name]
        except KeyError:
            raise StoreError(f"table {name!r} not found") from None

    def list_tables(self) -> list[str]:
        return sorted(self._tables)

    def get_row(self, table: str, key: str) -> ResultSet:
        row = self._table(table).get(key)
        rows = [copy.deepcopy(row)] if row is not None else []
        return ResultSet(table=table, rows=rows)

    def get_rows(self, table: str, row_range: RowRange, *modifiers: ReadModifier) -> ResultSet:
        limit = 0
        key_pattern: re.Pattern[str] | None = None
        versions = 0
        for modifier in modifiers:
            if isinstance(modifier, LimitRows):
                limit = modifier.count
            elif isinstance(modifier, RowKeyFilter):
                key_pattern = re.compile(modifier.pattern)
            elif isinstance(modifier, LatestVersions):
                versions = modifier.count

        stored = self._table(table)
        rows: list[Row] = []
        for key in sorted(stored):
            if not row_range.contains(key):
                continue
            if key_pattern is not None and not key_pattern.fullmatch(key):
                continue
            row = copy.deepcopy(stored[key])
            if versions:
                row.columns = _latest(row.columns, versions)
            rows.append(row)
            if limit and len(rows) >= limit:
                break
        return ResultSet(table=table, rows=rows)


def _latest(columns: list[Column], count: int) -> list[Column]:
    """Keep the first ``count`` cells of each qualifier."""
    seen: dict[str, int] = {}
    kept = []
    for column in columns:
        seen[column.qualifier] = seen.get(column.qualifier, 0) + 1
        if seen[column.qualifier] <= count:
            kept.append(column)
    return kept
