"""Tests for the Bigtable row store adapter, against a fake client."""

from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from google.api_core.exceptions import NotFound
from google.cloud.bigtable import row_filters

from btcli.bigtable_store import BigtableStore, build_filter, convert_row, row_limit
from btcli.errors import StoreError
from btcli.options import LatestVersions, LimitRows, RowKeyFilter, RowRange

VERSION = datetime(2018, 1, 1, tzinfo=timezone.utc)


def row_data(key: bytes, cells: dict) -> SimpleNamespace:
    return SimpleNamespace(row_key=key, cells=cells)


def cell(value: bytes, timestamp: datetime = VERSION) -> SimpleNamespace:
    return SimpleNamespace(value=value, timestamp=timestamp)


class FakeTable:
    def __init__(self, rows: list, error: Exception | None = None) -> None:
        self.rows = rows
        self.error = error
        self.read_rows_kwargs: dict = {}

    def read_row(self, key: bytes):
        if self.error:
            raise self.error
        for data in self.rows:
            if data.row_key == key:
                return data
        return None

    def read_rows(self, **kwargs):
        if self.error:
            raise self.error
        self.read_rows_kwargs = kwargs
        return iter(self.rows)


class FakeInstance:
    def __init__(self, tables: dict) -> None:
        self.tables = tables

    def list_tables(self):
        return [SimpleNamespace(table_id=name) for name in self.tables]

    def table(self, name: str) -> FakeTable:
        return self.tables[name]


class FakeClient:
    def __init__(self, instance: FakeInstance) -> None:
        self._instance = instance
        self.closed = False

    def instance(self, instance_id: str) -> FakeInstance:
        return self._instance

    def close(self) -> None:
        self.closed = True


def make_store(**tables) -> BigtableStore:
    return BigtableStore("test-project", "test-instance", client=FakeClient(FakeInstance(tables)))


class TestBuildFilter:
    """Tests for translating read modifiers into row filters."""

    def test_no_filters(self):
        assert build_filter([LimitRows(3)]) is None

    def test_key_filter(self):
        assert build_filter([RowKeyFilter("a.*")]) == row_filters.RowKeyRegexFilter(b"a.*")

    def test_latest_versions(self):
        assert build_filter([LatestVersions(1)]) == row_filters.CellsColumnLimitFilter(1)

    def test_filters_chained(self):
        result = build_filter([RowKeyFilter("a"), LatestVersions(2)])

        assert result == row_filters.RowFilterChain(
            filters=[row_filters.RowKeyRegexFilter(b"a"), row_filters.CellsColumnLimitFilter(2)]
        )

    def test_row_limit(self):
        assert row_limit([LimitRows(5), LatestVersions(1)]) == 5
        assert row_limit([LimitRows(0)]) is None
        assert row_limit([]) is None


class TestConvertRow:
    """Tests for flattening Bigtable cells into columns."""

    def test_qualified_names(self):
        data = row_data(b"1##1", {"d": {b"content": [cell(b"c")], b"title": [cell(b"t")]}})

        row = convert_row(data)

        assert row.key == "1##1"
        assert [c.qualifier for c in row.columns] == ["d:content", "d:title"]
        assert [c.family for c in row.columns] == ["d", "d"]
        assert row.columns[0].version == VERSION

    def test_versions_kept_in_order(self):
        newer = datetime(2018, 1, 1, 1, tzinfo=timezone.utc)
        data = row_data(b"4", {"d": {b"row": [cell(b"anko", newer), cell(b"kyouko")]}})

        row = convert_row(data)

        assert [c.value for c in row.columns] == [b"anko", b"kyouko"]
        assert [c.version for c in row.columns] == [newer, VERSION]


class TestBigtableStore:
    """Tests for the store operations."""

    def test_list_tables(self):
        store = make_store(users=FakeTable([]), articles=FakeTable([]))

        assert store.list_tables() == ["users", "articles"]

    def test_get_row(self):
        store = make_store(users=FakeTable([row_data(b"1", {"d": {b"row": [cell(b"madoka")]}})]))

        result = store.get_row("users", "1")

        assert result.table == "users"
        assert result.rows[0].columns[0].value == b"madoka"

    def test_get_missing_row(self):
        assert make_store(users=FakeTable([])).get_row("users", "1").rows == []

    def test_get_rows_arguments(self):
        table = FakeTable([row_data(b"a", {})])
        store = make_store(t=table)

        result = store.get_rows("t", RowRange("a", "b"), LimitRows(2), LatestVersions(1))

        assert [r.key for r in result.rows] == ["a"]
        assert table.read_rows_kwargs == {
            "start_key": b"a",
            "end_key": b"b",
            "limit": 2,
            "filter_": row_filters.CellsColumnLimitFilter(1),
        }

    def test_get_rows_unbounded(self):
        table = FakeTable([])
        make_store(t=table).get_rows("t", RowRange())

        assert table.read_rows_kwargs["start_key"] is None
        assert table.read_rows_kwargs["end_key"] is None

    def test_api_error_wrapped(self):
        store = make_store(t=FakeTable([], error=NotFound("table t")))

        with pytest.raises(StoreError, match="table t"):
            store.get_rows("t", RowRange())
        with pytest.raises(StoreError):
            store.get_row("t", "k")

    def test_close(self):
        store = make_store()
        store.close()

        assert store._client.closed
