"""Display heuristics for raw cell values.

The row store keeps no schema, so a value is only a string of bytes.  Eight
byte values are the common encoding of both int64 counters and float64
measurements; which one was meant has to be guessed from the bit pattern.

The rule used here: read the bytes as a big-endian int64 ``i``.  When
``-2**52 <= i < 2**52`` the value is shown as an integer.  Read as a double,
every pattern in that range is zero, subnormal, ``-inf`` or a negative NaN,
none of which a writer plausibly stored on purpose.  Everything else is
shown as a double.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass

INTEGER_WIDTH = 8
INTEGER_LIMIT = 1 << 52

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
}


def quote(text: str) -> str:
    """Double-quote ``text``, escaping quotes, backslashes and control characters."""
    parts = []
    for ch in text:
        if ch in _ESCAPES:
            parts.append(_ESCAPES[ch])
        elif ord(ch) < 0x20 or ord(ch) == 0x7F:
            parts.append(f"\\x{ord(ch):02x}")
        elif 0xDC80 <= ord(ch) <= 0xDCFF:
            # Byte that was not valid UTF-8, see classify().
            parts.append(f"\\x{ord(ch) - 0xDC00:02x}")
        else:
            parts.append(ch)
    return '"' + "".join(parts) + '"'


@dataclass(frozen=True)
class IntegerValue:
    """An 8-byte value shown as a signed integer."""

    value: int

    def render(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class FloatValue:
    """An 8-byte value shown as an IEEE-754 double."""

    value: float

    def render(self) -> str:
        return f"{self.value:.6f}"


@dataclass(frozen=True)
class TextValue:
    """Any other value, shown as a quoted string."""

    value: str

    def render(self) -> str:
        return quote(self.value)


DecodedValue = IntegerValue | FloatValue | TextValue


def classify(raw: bytes) -> DecodedValue:
    """Decide how a raw cell value should be displayed."""
    if len(raw) != INTEGER_WIDTH:
        return TextValue(raw.decode("utf-8", errors="surrogateescape"))

    (number,) = struct.unpack(">q", raw)
    if -INTEGER_LIMIT <= number < INTEGER_LIMIT:
        return IntegerValue(number)

    (real,) = struct.unpack(">d", raw)
    return FloatValue(real)


def format_value(raw: bytes) -> str:
    """Render a raw cell value for display."""
    return classify(raw).render()
