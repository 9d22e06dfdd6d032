"""Text rendering of rows.

The layout is parsed by downstream tooling, so it must stay byte-for-byte
stable::

    ----------------------------------------
    <row key>
      <qualifier, padded to 40>               @ YYYY/MM/DD-HH:MM:SS.ffffff
        <value>
"""

from __future__ import annotations

import io
from datetime import datetime
from typing import TextIO

from btcli.rows import Row
from btcli.values import format_value

SEPARATOR = "-" * 40
QUALIFIER_WIDTH = 40
VALUE_INDENT = " " * 4


def format_version(version: datetime) -> str:
    """Format a cell timestamp as ``YYYY/MM/DD-HH:MM:SS.ffffff``.

    Timezone-aware timestamps are shown in the local zone of the process.
    Naive ones are shown as they are.  ``strftime`` is avoided because it
    does not zero-pad years before 1000 on every platform.
    """
    if version.tzinfo is not None:
        version = version.astimezone()
    return (
        f"{version.year:04d}/{version.month:02d}/{version.day:02d}-"
        f"{version.hour:02d}:{version.minute:02d}:{version.second:02d}."
        f"{version.microsecond:06d}"
    )


def write_row(row: Row, out: TextIO) -> None:
    """Write a row to ``out``."""
    out.write(SEPARATOR + "\n")
    out.write(row.key + "\n")
    for column in row.columns:
        qualifier = column.qualifier.ljust(QUALIFIER_WIDTH)
        out.write(f"  {qualifier} @ {format_version(column.version)}\n")
        out.write(f"{VALUE_INDENT}{format_value(column.value)}\n")


def format_row(row: Row) -> str:
    """Return the rendered text of a row."""
    buf = io.StringIO()
    write_row(row, buf)
    return buf.getvalue()
