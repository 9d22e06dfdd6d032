"""Translation of ``name=value`` read arguments into a row store query."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass

from btcli.errors import ArgumentError
from btcli.log import get_logger

logger = get_logger(__name__)

RANGE_OPTIONS = ("prefix", "start", "end")
MODIFIER_OPTIONS = ("count", "regex", "version")
KNOWN_OPTIONS = RANGE_OPTIONS + MODIFIER_OPTIONS

# Largest code point; a prefix made only of these has no successor.
_MAX_CHAR = "\U0010ffff"


@dataclass(frozen=True)
class RowRange:
    """A half-open range of row keys, ``[start, end)``.

    An empty ``end`` leaves the range unbounded above, so ``RowRange()``
    matches every key.
    """

    start: str = ""
    end: str = ""

    def contains(self, key: str) -> bool:
        if key < self.start:
            return False
        return not self.end or key < self.end

    def __str__(self) -> str:
        end = repr(self.end) if self.end else "∞"
        return f"[{self.start!r}, {end})"


@dataclass(frozen=True)
class LimitRows:
    """Return at most ``count`` rows."""

    count: int


@dataclass(frozen=True)
class RowKeyFilter:
    """Return only rows whose whole key matches ``pattern``."""

    pattern: str


@dataclass(frozen=True)
class LatestVersions:
    """Return only the ``count`` most recent cells of each column."""

    count: int


ReadModifier = LimitRows | RowKeyFilter | LatestVersions


@dataclass(frozen=True)
class QuerySpec:
    """A fully validated multi-row read."""

    row_range: RowRange = RowRange()
    limit: int | None = None
    row_key_pattern: str | None = None
    version_limit: int | None = None

    def modifiers(self) -> tuple[ReadModifier, ...]:
        """Return the read modifiers in a fixed order."""
        result: list[ReadModifier] = []
        if self.limit:
            result.append(LimitRows(self.limit))
        if self.row_key_pattern is not None:
            result.append(RowKeyFilter(self.row_key_pattern))
        if self.version_limit is not None:
            result.append(LatestVersions(self.version_limit))
        return tuple(result)


def prefix_successor(prefix: str) -> str:
    """Return the smallest key greater than every key starting with ``prefix``.

    Returns ``""`` when no such key exists.
    """
    trimmed = prefix.rstrip(_MAX_CHAR)
    if not trimmed:
        return ""
    following = ord(trimmed[-1]) + 1
    if 0xD800 <= following <= 0xDFFF:
        # Surrogates cannot be encoded in a row key.
        following = 0xE000
    return trimmed[:-1] + chr(following)


def prefix_range(prefix: str) -> RowRange:
    """Return the range of all keys starting with ``prefix``."""
    return RowRange(prefix, prefix_successor(prefix))


def _parse_int(args: Mapping[str, str], name: str, minimum: int) -> int | None:
    raw = args.get(name)
    if raw is None:
        return None
    kind = "positive" if minimum > 0 else "non-negative"
    # Plain ASCII digits only: no sign, underscores, spaces or other scripts.
    if not (raw.isascii() and raw.isdigit()):
        raise ArgumentError(f"{name} must be a {kind} integer, got {raw!r}")
    number = int(raw)
    if number < minimum:
        raise ArgumentError(f"{name} must be a {kind} integer, got {raw!r}")
    return number


def row_range(args: Mapping[str, str]) -> RowRange:
    """Build the key range selected by ``prefix`` or ``start``/``end``.

    ``prefix`` wins when both forms are given.  Without either the range is
    unbounded.
    """
    if "prefix" in args:
        return prefix_range(args["prefix"])

    start = args.get("start", "")
    end = args.get("end", "")
    if start and end and start >= end:
        raise ArgumentError(f"start {start!r} must sort before end {end!r}")
    return RowRange(start, end)


def build_query(args: Mapping[str, str]) -> QuerySpec:
    """Validate read arguments and build the query they describe."""
    for name in args:
        if name not in KNOWN_OPTIONS:
            logger.debug("ignoring unknown read option", option=name)

    pattern = args.get("regex")
    if pattern is not None:
        try:
            re.compile(pattern)
        except re.error as e:
            raise ArgumentError(f"invalid regex {pattern!r}: {e}") from None

    return QuerySpec(
        row_range=row_range(args),
        limit=_parse_int(args, "count", 0),
        row_key_pattern=pattern,
        version_limit=_parse_int(args, "version", 1),
    )
