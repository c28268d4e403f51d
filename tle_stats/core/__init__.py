"""Public API for the TLE decoding core."""

from .checksum import checksum, compute_checksum
from .epoch import epoch_datetime, expand_two_digit_year
from .errors import ChecksumError, FormatError, IncompleteInputError, InconsistentRecordError, TleError
from .fields import decode_implied_exponent, decode_line1, decode_line2
from .parser import parse, split_lines
from .types import Line1Fields, Line2Fields, ParseResult, Rejection, TleRecord

__all__ = [
    "ChecksumError",
    "FormatError",
    "IncompleteInputError",
    "InconsistentRecordError",
    "Line1Fields",
    "Line2Fields",
    "ParseResult",
    "Rejection",
    "TleError",
    "TleRecord",
    "checksum",
    "compute_checksum",
    "decode_implied_exponent",
    "decode_line1",
    "decode_line2",
    "epoch_datetime",
    "expand_two_digit_year",
    "parse",
    "split_lines",
]
