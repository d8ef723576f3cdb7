"""Parsing of textual number-set specifications.

A specification is a comma separated list of literals and inclusive ranges,
for example ``"1-5, 7, 10-15"``. Parsing yields a :class:`CandidateSet`, an
ordered sequence that keeps duplicates and remembers ranges as segments so a
range such as ``"0-18446744073709551615"`` never has to be expanded in memory.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)

U64_MAX = 2**64 - 1
_U64_DIGITS = len(str(U64_MAX))

_UNSIGNED_RE = re.compile(r"\+?[0-9]+")


class ParseError(ValueError):
    """Raised when a range specification is malformed."""


class InvalidNumber(ParseError):
    def __init__(self, token: str):
        super().__init__(f"Invalid number: {token}")
        self.token = token


class InvalidRangeFormat(ParseError):
    def __init__(self, token: str):
        super().__init__(f"Invalid range format: {token}")
        self.token = token


class InvalidRange(ParseError):
    def __init__(self, start: int, end: int):
        super().__init__(f"Invalid range: {start} > {end}")
        self.start = start
        self.end = end


class RangeTooLarge(ParseError):
    def __init__(self, size: int, limit: int):
        super().__init__(f"Range set too large: {size} values (limit {limit})")
        self.size = size
        self.limit = limit


class EmptyRangeSet(ValueError):
    """Raised when a syntactically valid specification holds no numbers."""

    def __init__(self) -> None:
        super().__init__("No valid numbers provided")


@dataclass(frozen=True)
class CandidateSet(Sequence):
    """Ordered, possibly duplicated integers stored as inclusive segments.

    ``len()`` is limited to ``sys.maxsize`` by Python and raises
    ``OverflowError`` for larger sets such as the full 64-bit range; use
    :attr:`size` for the exact count. ``index``, ``count`` and ``reversed()``
    work from the segments and are safe at any size.
    """

    segments: Tuple[Tuple[int, int], ...] = ()

    @property
    def size(self) -> int:
        return sum(end - start + 1 for start, end in self.segments)

    def __len__(self) -> int:
        return self.size

    def __bool__(self) -> bool:
        return bool(self.segments)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return [self[i] for i in range(*index.indices(self.size))]
        size = self.size
        if index < 0:
            index += size
        if not 0 <= index < size:
            raise IndexError("candidate index out of range")
        for start, end in self.segments:
            span = end - start + 1
            if index < span:
                return start + index
            index -= span
        raise IndexError("candidate index out of range")

    def __iter__(self) -> Iterator[int]:
        for start, end in self.segments:
            yield from range(start, end + 1)

    def __contains__(self, value) -> bool:
        if not isinstance(value, int):
            return False
        return any(start <= value <= end for start, end in self.segments)

    def __reversed__(self) -> Iterator[int]:
        for start, end in reversed(self.segments):
            yield from range(end, start - 1, -1)

    def index(self, value, start: int = 0, stop: Optional[int] = None) -> int:
        size = self.size
        start, stop, _ = slice(start, stop).indices(size)
        offset = 0
        for seg_start, seg_end in self.segments:
            if isinstance(value, int) and seg_start <= value <= seg_end:
                position = offset + value - seg_start
                if start <= position < stop:
                    return position
            offset += seg_end - seg_start + 1
        raise ValueError(f"{value!r} is not in candidate set")

    def count(self, value) -> int:
        if not isinstance(value, int):
            return 0
        return sum(1 for start, end in self.segments if start <= value <= end)

    def _runs(self) -> List[Tuple[int, int]]:
        # maximal ascending runs; two sets are equal sequences iff their runs match
        runs: List[Tuple[int, int]] = []
        for start, end in self.segments:
            if runs and runs[-1][1] + 1 == start:
                runs[-1] = (runs[-1][0], end)
            else:
                runs.append((start, end))
        return runs

    def __eq__(self, other) -> bool:
        if isinstance(other, CandidateSet):
            return self._runs() == other._runs()
        if isinstance(other, (list, tuple)):
            return self.size == len(other) and list(self) == list(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(tuple(self._runs()))

    def to_list(self) -> List[int]:
        return list(self)


def parse_unsigned(token: str) -> int:
    """Parse ``token`` as an unsigned 64-bit decimal integer.

    Raises:
        InvalidNumber: If the token holds anything but an optional ``+`` and
            ASCII digits, or if the value does not fit in 64 bits.
    """

    if not _UNSIGNED_RE.fullmatch(token):
        raise InvalidNumber(token)
    digits = token.lstrip("+").lstrip("0") or "0"
    if len(digits) > _U64_DIGITS:
        raise InvalidNumber(token)
    value = int(digits)
    if value > U64_MAX:
        raise InvalidNumber(token)
    return value


def _parse_range_token(token: str) -> Tuple[int, int]:
    parts = token.split("-")
    if len(parts) != 2:
        raise InvalidRangeFormat(token)

    # the error carries the unstripped part, as typed
    start_text, end_text = parts
    try:
        start = parse_unsigned(start_text.strip())
    except InvalidNumber:
        raise InvalidNumber(start_text) from None
    try:
        end = parse_unsigned(end_text.strip())
    except InvalidNumber:
        raise InvalidNumber(end_text) from None

    if start > end:
        raise InvalidRange(start, end)
    return start, end


def parse_range_set(text: str, limit: int | None = None) -> CandidateSet:
    """Parse a comma separated set specification into a :class:`CandidateSet`.

    Args:
        text: Literals and inclusive ``start-end`` ranges separated by commas.
            Whitespace around tokens and around range endpoints is ignored,
            and empty tokens are skipped.
        limit: Optional cap on the number of candidates.

    Returns:
        The candidates in input order, duplicates preserved. Blank input gives
        an empty set rather than an error.

    Raises:
        InvalidNumber: A literal or range endpoint is not an unsigned 64-bit
            decimal integer.
        InvalidRangeFormat: A range token does not have exactly one ``-``.
        InvalidRange: A range has its start above its end.
        RangeTooLarge: The set holds more than ``limit`` candidates.
    """

    tokens = [part.strip() for part in text.split(",")]
    segments: List[Tuple[int, int]] = []
    for token in tokens:
        if not token:
            continue
        if "-" in token:
            segments.append(_parse_range_token(token))
        else:
            value = parse_unsigned(token)
            segments.append((value, value))

    candidates = CandidateSet(tuple(segments))
    if limit is not None and candidates.size > limit:
        raise RangeTooLarge(candidates.size, limit)

    logger.debug("parsed %d token(s) into %d candidate(s)", len(segments), candidates.size)
    return candidates
