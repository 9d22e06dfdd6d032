"""Row store backed by Cloud Bigtable (or its emulator).

The emulator is picked up by the client library when
``BIGTABLE_EMULATOR_HOST`` is set.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import GoogleAuthError
from google.cloud import bigtable
from google.cloud.bigtable import row_filters
from google.cloud.bigtable.row_data import PartialRowData

from btcli.errors import StoreError
from btcli.log import get_logger
from btcli.options import LatestVersions, LimitRows, ReadModifier, RowKeyFilter, RowRange
from btcli.rows import Column, ResultSet, Row

logger = get_logger(__name__)


def build_filter(modifiers: Sequence[ReadModifier]) -> row_filters.RowFilter | None:
    """Combine the filtering modifiers into a single Bigtable row filter."""
    filters: list[row_filters.RowFilter] = []
    for modifier in modifiers:
        if isinstance(modifier, RowKeyFilter):
            filters.append(row_filters.RowKeyRegexFilter(modifier.pattern.encode("utf-8")))
        elif isinstance(modifier, LatestVersions):
            filters.append(row_filters.CellsColumnLimitFilter(modifier.count))
    if not filters:
        return None
    if len(filters) == 1:
        return filters[0]
    return row_filters.RowFilterChain(filters=filters)


def row_limit(modifiers: Sequence[ReadModifier]) -> int | None:
    """Return the row cap requested by ``modifiers``, if any."""
    limit = None
    for modifier in modifiers:
        if isinstance(modifier, LimitRows) and modifier.count:
            limit = modifier.count
    return limit


def convert_row(data: PartialRowData) -> Row:
    """Flatten the cells of a Bigtable row into columns.

    Cells keep the client's order: family, then qualifier, then newest
    version first.
    """
    columns = []
    for family, qualifiers in data.cells.items():
        for qualifier, cells in qualifiers.items():
            name = f"{family}:{qualifier.decode('utf-8', errors='backslashreplace')}"
            for cell in cells:
                columns.append(
                    Column(family=family, qualifier=name, value=cell.value, version=cell.timestamp)
                )
    return Row(key=data.row_key.decode("utf-8", errors="backslashreplace"), columns=columns)


class BigtableStore:
    """``RowStore`` reading from one Bigtable instance."""

    def __init__(self, project: str, instance: str, client: Any = None) -> None:
        self.project = project
        self.instance_id = instance
        try:
            self._client = client or bigtable.Client(project=project, admin=True)
        except GoogleAuthError as e:
            raise StoreError(f"could not connect to project {project!r}: {e}") from e
        self._instance = self._client.instance(instance)

    def list_tables(self) -> list[str]:
        logger.debug("listing tables", instance=self.instance_id)
        try:
            return [table.table_id for table in self._instance.list_tables()]
        except (GoogleAPIError, GoogleAuthError) as e:
            raise StoreError(f"could not list tables: {e}") from e

    def get_row(self, table: str, key: str) -> ResultSet:
        logger.debug("reading row", table=table, key=key)
        try:
            data = self._instance.table(table).read_row(key.encode("utf-8"))
        except (GoogleAPIError, GoogleAuthError) as e:
            raise StoreError(f"could not read row {key!r} from {table!r}: {e}") from e
        rows = [convert_row(data)] if data is not None else []
        return ResultSet(table=table, rows=rows)

    def get_rows(self, table: str, row_range: RowRange, *modifiers: ReadModifier) -> ResultSet:
        logger.debug("reading rows", table=table, row_range=str(row_range), modifiers=modifiers)
        try:
            stream: Iterable[PartialRowData] = self._instance.table(table).read_rows(
                start_key=row_range.start.encode("utf-8") or None,
                end_key=row_range.end.encode("utf-8") or None,
                limit=row_limit(modifiers),
                filter_=build_filter(modifiers),
            )
            rows = [convert_row(data) for data in stream]
        except (GoogleAPIError, GoogleAuthError) as e:
            raise StoreError(f"could not read rows from {table!r}: {e}") from e
        return ResultSet(table=table, rows=rows)

    def close(self) -> None:
        """Release the client's channels."""
        self._client.close()
