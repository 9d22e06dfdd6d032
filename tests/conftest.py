"""Shared fixtures for btcli tests."""

from __future__ import annotations

from datetime import datetime

import pytest

from btcli.errors import StoreError
from btcli.memory import MemoryStore
from btcli.options import ReadModifier, RowRange
from btcli.rows import Column, ResultSet, Row


class RecordingStore:
    """Row store double that replays canned answers and records every call."""

    def __init__(
        self,
        tables: list[str] | None = None,
        result: ResultSet | None = None,
        error: Exception | None = None,
    ) -> None:
        self.tables = tables or []
        self.result = result or ResultSet(table="")
        self.error = error
        self.calls: list[tuple] = []

    def _answer(self, answer):  # type: ignore[no-untyped-def]
        if self.error is not None:
            raise self.error
        return answer

    def list_tables(self) -> list[str]:
        self.calls.append(("list_tables",))
        return self._answer(self.tables)

    def get_row(self, table: str, key: str) -> ResultSet:
        self.calls.append(("get_row", table, key))
        return self._answer(self.result)

    def get_rows(self, table: str, row_range: RowRange, *modifiers: ReadModifier) -> ResultSet:
        self.calls.append(("get_rows", table, row_range, modifiers))
        return self._answer(self.result)


@pytest.fixture
def failing_store() -> RecordingStore:
    return RecordingStore(error=StoreError("connection refused"))


@pytest.fixture
def sample_store() -> MemoryStore:
    """Users and articles tables, articles keyed by ``<user>##<article>``."""
    ver = datetime(2018, 1, 1)
    users = [
        Row("1", [Column("d", "d:row", b"madoka", ver)]),
        Row("2", [Column("d", "d:row", b"homura", ver)]),
        Row("3", [Column("d", "d:row", b"sayaka", ver)]),
        Row(
            "4",
            [
                Column("d", "d:row", b"anko", datetime(2018, 1, 1, 1)),
                Column("d", "d:row", b"kyouko", ver),
            ],
        ),
    ]
    articles = [
        Row("1##1", [Column("d", "d:content", b"madoka_content", ver), Column("d", "d:title", b"madoka_title", ver)]),
        Row("2##1", [Column("d", "d:content", b"homura_content", ver), Column("d", "d:title", b"homura_title", ver)]),
        Row("2##2", [Column("d", "d:content", b"homuhomu_content", ver), Column("d", "d:title", b"homuhomu_title", ver)]),
    ]
    return MemoryStore({"users": users, "articles": articles})


@pytest.fixture
def recording_store() -> type[RecordingStore]:
    """The recording double itself, to be built with canned answers."""
    return RecordingStore
