"""Fixed-column grammar and field decoding for TLE data lines.

Both data lines are described by a table of :class:`Column` entries using the
1-based, inclusive column ranges of the CelesTrak format description.  The
table is compiled into one regular expression per line so a line is accepted
or rejected by a single match; the same table drives the diagnostics that
explain which column range is at fault when the match fails.

References:
  - CelesTrak "NORAD Two-Line Element Set Format"
    https://celestrak.org/NORAD/documentation/tle-fmt.php
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Pattern, Sequence

from .checksum import checksum, compute_checksum
from .errors import ChecksumError, FormatError
from .types import Line1Fields, Line2Fields

LINE_LENGTH = 69


@dataclass(frozen=True)
class Column:
    """A named field occupying columns ``start``..``end`` (1-based, inclusive)."""

    name: str
    start: int
    end: int
    pattern: str
    label: str

    def extract(self, line: str) -> str:
        return line[self.start - 1 : self.end]


_ANGLE = r"[ 0-9]{2}[0-9]\.[0-9]{4}"
_IMPLIED_EXPONENT = r"[ +-][0-9]{5}[+-][0-9]"

LINE1_COLUMNS: Sequence[Column] = (
    Column("line_number", 1, 1, "1", "line number"),
    Column("catalog", 3, 7, r"[ 0-9]{4}[0-9]", "catalog number"),
    Column("classification", 8, 8, r"[UCS]", "classification"),
    Column("launch_year", 10, 11, r"[0-9]{2}", "launch year"),
    Column("launch_number", 12, 14, r"[ 0-9]{2}[0-9]", "launch number"),
    Column("launch_piece", 15, 17, r"[A-Z][A-Z ]{2}", "launch piece"),
    Column("epoch_year", 19, 20, r"[0-9]{2}", "epoch year"),
    Column("epoch_day", 21, 32, r"[ 0-9]{2}[0-9]\.[0-9]{8}", "epoch day"),
    Column("first_derivative", 34, 43, r"[ +-]\.[0-9]{8}", "first derivative of mean motion"),
    Column("second_derivative", 45, 52, _IMPLIED_EXPONENT, "second derivative of mean motion"),
    Column("drag_term", 54, 61, _IMPLIED_EXPONENT, "B* drag term"),
    Column("ephemeris_type", 63, 63, r"[ 0-9]", "ephemeris type"),
    Column("element_set", 65, 68, r"[ 0-9]{3}[0-9]", "element set number"),
    Column("checksum", 69, 69, r"[0-9]", "checksum"),
)

LINE2_COLUMNS: Sequence[Column] = (
    Column("line_number", 1, 1, "2", "line number"),
    Column("catalog", 3, 7, r"[ 0-9]{4}[0-9]", "catalog number"),
    Column("inclination", 9, 16, _ANGLE, "inclination"),
    Column("raan", 18, 25, _ANGLE, "right ascension of the ascending node"),
    Column("eccentricity", 27, 33, r"[0-9]{7}", "eccentricity"),
    Column("arg_perigee", 35, 42, _ANGLE, "argument of perigee"),
    Column("mean_anomaly", 44, 51, _ANGLE, "mean anomaly"),
    Column("mean_motion", 53, 63, r"[ 0-9][0-9]\.[0-9]{8}", "mean motion"),
    Column("revolution", 64, 68, r"[ 0-9]{4}[0-9]", "revolution number"),
    Column("checksum", 69, 69, r"[0-9]", "checksum"),
)


def _compile(columns: Sequence[Column]) -> Pattern[str]:
    parts = []
    position = 1
    for column in columns:
        # Unlisted columns between fields are single blank separators.
        parts.append(" " * (column.start - position))
        parts.append(f"(?P<{column.name}>{column.pattern})")
        position = column.end + 1
    if position != LINE_LENGTH + 1:
        raise ValueError("column table does not cover a full TLE line")
    return re.compile("".join(parts))


_GRAMMAR: Dict[int, Pattern[str]] = {1: _compile(LINE1_COLUMNS), 2: _compile(LINE2_COLUMNS)}
_COLUMNS: Dict[int, Sequence[Column]] = {1: LINE1_COLUMNS, 2: LINE2_COLUMNS}
_IMPLIED_EXPONENT_RE = re.compile(r"([+-]?)([0-9]+)([+-][0-9])")


def _diagnose(line: str, line_no: int) -> str:
    """Explain why ``line`` does not match the grammar for line ``line_no``."""

    if not line:
        return f"line {line_no} is empty"
    if not line.startswith(f"{line_no} "):
        return f"line {line_no} must start with '{line_no} ': {line[:10]!r}"
    if len(line) != LINE_LENGTH:
        return f"line {line_no} has {len(line)} columns, expected {LINE_LENGTH}"
    position = 1
    for column in _COLUMNS[line_no]:
        for blank in range(position, column.start):
            if line[blank - 1] != " ":
                return f"line {line_no} column {blank} must be blank, found {line[blank - 1]!r}"
        value = column.extract(line)
        if not re.fullmatch(column.pattern, value):
            return f"line {line_no} columns {column.start}-{column.end} ({column.label}) malformed: {value!r}"
        position = column.end + 1
    return f"line {line_no} does not match the TLE grammar"  # pragma: no cover - table and regex agree


def _match(text: str, line_no: int) -> Dict[str, str]:
    line = text.strip()
    match = _GRAMMAR[line_no].fullmatch(line)
    if match is None:
        raise FormatError(_diagnose(line, line_no))
    return match.groupdict()


def _verify_checksum(text: str, line_no: int) -> None:
    line = text.strip()
    if not checksum(line):
        raise ChecksumError(
            f"line {line_no} checksum mismatch: computed {compute_checksum(line)}, found {line[-1]}"
        )


def decode_implied_exponent(raw: str) -> float:
    """Decode an implied-decimal, implied-exponent field.

    ``"47654-4"`` means ``0.47654e-4``; a leading ``-`` applies to the
    mantissa, so ``"-11606-4"`` is ``-0.11606e-4``.
    """

    match = _IMPLIED_EXPONENT_RE.fullmatch(raw.strip())
    if match is None:
        raise FormatError(f"malformed implied-exponent value: {raw!r}")
    sign, mantissa, exponent = match.groups()
    return float(f"{sign}0.{mantissa}e{exponent}")


def decode_line1(text: str) -> Line1Fields:
    """Decode TLE line 1 into typed fields.

    Raises :class:`FormatError` when the line does not fit the grammar and
    :class:`ChecksumError` when it does but its checksum digit is wrong.
    """

    groups = _match(text, 1)
    fields = Line1Fields(
        catalog_number=int(groups["catalog"]),
        classification=groups["classification"],
        launch_year_suffix=int(groups["launch_year"]),
        launch_number=int(groups["launch_number"]),
        launch_piece=groups["launch_piece"].rstrip(),
        epoch_year_suffix=int(groups["epoch_year"]),
        epoch_day=float(groups["epoch_day"]),
        mean_motion_first_derivative=float(groups["first_derivative"]),
        mean_motion_second_derivative=decode_implied_exponent(groups["second_derivative"]),
        mean_motion_second_derivative_raw=groups["second_derivative"],
        drag_term=decode_implied_exponent(groups["drag_term"]),
        drag_term_raw=groups["drag_term"],
        ephemeris_type=int(groups["ephemeris_type"].strip() or 0),
        element_set_number=int(groups["element_set"]),
        checksum=int(groups["checksum"]),
    )
    _verify_checksum(text, 1)
    if fields.catalog_number < 1:
        raise FormatError("line 1 catalog number must be between 1 and 99999")
    if not 1.0 <= fields.epoch_day < 367.0:
        raise FormatError(f"line 1 epoch day out of range: {fields.epoch_day}")
    return fields


def decode_line2(text: str) -> Line2Fields:
    """Decode TLE line 2 into typed fields.

    The eccentricity columns carry an implied leading ``0.``.
    """

    groups = _match(text, 2)
    fields = Line2Fields(
        catalog_number=int(groups["catalog"]),
        inclination_deg=float(groups["inclination"]),
        raan_deg=float(groups["raan"]),
        eccentricity=float("0." + groups["eccentricity"]),
        arg_of_perigee_deg=float(groups["arg_perigee"]),
        mean_anomaly_deg=float(groups["mean_anomaly"]),
        mean_motion_rev_per_day=float(groups["mean_motion"]),
        revolution_number_at_epoch=int(groups["revolution"]),
        checksum=int(groups["checksum"]),
    )
    _verify_checksum(text, 2)
    if fields.catalog_number < 1:
        raise FormatError("line 2 catalog number must be between 1 and 99999")
    if fields.inclination_deg > 180.0:
        raise FormatError(f"line 2 inclination out of range: {fields.inclination_deg}")
    if fields.mean_motion_rev_per_day <= 0.0:
        raise FormatError("line 2 mean motion must be positive")
    return fields


__all__ = [
    "Column",
    "LINE1_COLUMNS",
    "LINE2_COLUMNS",
    "LINE_LENGTH",
    "decode_implied_exponent",
    "decode_line1",
    "decode_line2",
]
