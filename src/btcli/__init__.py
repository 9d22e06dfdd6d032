"""btcli - an interactive shell for reading the rows of a wide-column store."""

from btcli.errors import ArgumentError, BtcliError, ConfigError, StoreError
from btcli.executor import CommandExecutor
from btcli.formatting import format_row, write_row
from btcli.memory import MemoryStore
from btcli.options import (
    LatestVersions,
    LimitRows,
    QuerySpec,
    RowKeyFilter,
    RowRange,
    build_query,
    prefix_range,
)
from btcli.rows import Column, ResultSet, Row
from btcli.store import RowStore
from btcli.values import classify, format_value

__all__ = [
    # Main API
    "CommandExecutor",
    "RowStore",
    "MemoryStore",
    # Data model
    "Column",
    "Row",
    "ResultSet",
    # Queries
    "QuerySpec",
    "RowRange",
    "LimitRows",
    "RowKeyFilter",
    "LatestVersions",
    "build_query",
    "prefix_range",
    # Rendering
    "classify",
    "format_value",
    "format_row",
    "write_row",
    # Errors
    "BtcliError",
    "ArgumentError",
    "StoreError",
    "ConfigError",
]

__version__ = "0.1.0"
