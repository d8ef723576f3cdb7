"""Rendering of unsigned 64-bit integers in the supported numeral encodings."""

from __future__ import annotations

import base64
import logging
from dataclasses import dataclass
from enum import Enum

from range_set import U64_MAX

logger = logging.getLogger(__name__)


class NumeralBase(str, Enum):
    BINARY = "binary"
    DECIMAL = "decimal"
    HEXADECIMAL = "hexadecimal"
    BASE64 = "base64"

    @property
    def label(self) -> str:
        return self.value.capitalize()


def minimal_bytes(value: int) -> bytes:
    """Big-endian bytes of ``value`` without leading zero bytes.

    Zero is the single byte ``0x00``.
    """

    byte_count = max(1, (value.bit_length() + 7) // 8)
    return value.to_bytes(8, "big")[-byte_count:]


def _zero_fill(digits: str, pad: bool, pad_width: int) -> str:
    if pad:
        return digits.rjust(pad_width, "0")
    return digits


def format_value(value: int, base: NumeralBase, pad: bool = False, pad_width: int = 8) -> str:
    """Render ``value`` in ``base``.

    Binary and hexadecimal use the fewest digits, left-filled with ``0`` up to
    ``pad_width`` characters when ``pad`` is set; longer strings are never cut.
    Padding is ignored for decimal and Base64. Base64 encodes the minimal
    big-endian byte form of the value with standard ``=`` padding.

    Raises:
        ValueError: If ``value`` lies outside ``[0, 2**64 - 1]``.
    """

    if not 0 <= value <= U64_MAX:
        raise ValueError(f"value out of unsigned 64-bit range: {value}")

    base = NumeralBase(base)
    if base is NumeralBase.BINARY:
        text = _zero_fill(format(value, "b"), pad, pad_width)
    elif base is NumeralBase.DECIMAL:
        text = str(value)
    elif base is NumeralBase.HEXADECIMAL:
        text = _zero_fill(format(value, "x"), pad, pad_width)
    elif base is NumeralBase.BASE64:
        text = base64.b64encode(minimal_bytes(value)).decode("ascii")
    else:
        raise AssertionError(f"unhandled numeral base: {base!r}")

    logger.debug("formatted %d as %s: %s", value, base.value, text)
    return text


@dataclass(frozen=True)
class FormatRequest:
    value: int
    base: NumeralBase
    pad: bool = False
    pad_width: int = 8

    def render(self) -> str:
        return format_value(self.value, self.base, self.pad, self.pad_width)
