"""Assemble TLE records from raw multi-line text."""

from __future__ import annotations

import re
from typing import List, Optional, Sequence, Tuple

from ..logging import get_logger
from .errors import ChecksumError, FormatError, IncompleteInputError, InconsistentRecordError, TleError
from .fields import decode_line1, decode_line2
from .types import Line1Fields, Line2Fields, ParseResult, Rejection, TleRecord

logger = get_logger(__name__)

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_DATA_PREFIXES = ("1 ", "2 ")

NumberedLine = Tuple[int, str]


def split_lines(text: str) -> List[NumberedLine]:
    """Return ``(line_number, stripped_text)`` for every non-blank line.

    Line numbers are 1-based positions in the original text, so blank lines
    are skipped without shifting the numbers reported in diagnostics.
    """

    numbered: List[NumberedLine] = []
    for index, raw in enumerate(_LINE_BREAK.split(text), start=1):
        stripped = raw.strip()
        if stripped:
            numbered.append((index, stripped))
    return numbered


def _rank(error: TleError) -> int:
    if isinstance(error, FormatError):
        return 0
    if isinstance(error, ChecksumError):
        return 1
    return 2


def _decode_pair(name: str, line1: str, line2: str) -> TleRecord:
    first: Optional[Line1Fields] = None
    second: Optional[Line2Fields] = None
    errors: List[TleError] = []
    try:
        first = decode_line1(line1)
    except TleError as exc:
        errors.append(exc)
    try:
        second = decode_line2(line2)
    except TleError as exc:
        errors.append(exc)
    if errors:
        # sorted() is stable, so line 1 wins a tie.
        raise sorted(errors, key=_rank)[0]
    assert first is not None and second is not None
    if first.catalog_number != second.catalog_number:
        raise InconsistentRecordError(
            f"catalog number {first.catalog_number} on line 1 does not match {second.catalog_number} on line 2"
        )
    return TleRecord.from_fields(name, line1, line2, first, second)


def _reject(group: Sequence[NumberedLine], error: TleError) -> Rejection:
    numbers = tuple(number for number, _ in group)
    bound = error.at_lines(numbers)
    logger.debug(
        "record_rejected",
        extra={"lines": list(numbers), "kind": bound.kind, "reason": bound.message},
    )
    return Rejection(line_numbers=numbers, reason=bound.message, error=bound)


def parse(text: str) -> ParseResult:
    """Parse every TLE record contained in ``text``.

    Records may be bare line pairs or be preceded by a name line.  A record
    that fails to decode is reported in ``rejected`` and scanning continues
    after the lines it consumed, so one bad record never hides the others.
    Left-over lines that cannot complete a record are reported as an
    :class:`IncompleteInputError` rejection.
    """

    lines = split_lines(text)
    records: List[TleRecord] = []
    rejected: List[Rejection] = []

    index = 0
    while index < len(lines):
        remaining = len(lines) - index
        if lines[index][1].startswith(_DATA_PREFIXES):
            size, name = 2, ""
        else:
            size, name = 3, lines[index][1]
        if remaining < size:
            group = lines[index:]
            rejected.append(
                _reject(group, IncompleteInputError(f"{remaining} trailing line(s) do not form a complete record"))
            )
            break

        group = lines[index : index + size]
        line1, line2 = group[-2][1], group[-1][1]
        try:
            records.append(_decode_pair(name, line1, line2))
        except TleError as exc:
            rejected.append(_reject(group, exc))
        index += size

    logger.info(
        "parse_complete",
        extra={"accepted": len(records), "rejected": len(rejected), "lines": len(lines)},
    )
    return ParseResult(records=records, rejected=rejected)


__all__ = ["parse", "split_lines"]
