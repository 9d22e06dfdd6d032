"""Rows, columns and result sets returned by a row store."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

# Version of a cell whose write timestamp is unknown.
ZERO_VERSION = datetime.min


@dataclass
class Column:
    """A single cell of a row."""

    family: str
    qualifier: str  # Fully qualified name, "family:name"
    value: bytes
    version: datetime = ZERO_VERSION


@dataclass
class Row:
    """A row key with its columns, in the order the store returned them."""

    key: str
    columns: list[Column] = field(default_factory=list)


@dataclass
class ResultSet:
    """The rows of one table returned by a single query."""

    table: str
    rows: list[Row] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)
