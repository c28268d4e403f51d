"""Parse Two-Line Element sets and summarise them.

``parse`` turns TLE text into validated :class:`TleRecord` values (plus a
list of rejected candidates) and ``compute`` derives :class:`Statistics`
from the accepted records.
"""

from __future__ import annotations

from .core import (
    ChecksumError,
    FormatError,
    IncompleteInputError,
    InconsistentRecordError,
    ParseResult,
    Rejection,
    TleError,
    TleRecord,
    checksum,
    decode_line1,
    decode_line2,
    parse,
)
from .stats import Statistics, compute

__version__ = "1.0.0"

__all__ = [
    "ChecksumError",
    "FormatError",
    "IncompleteInputError",
    "InconsistentRecordError",
    "ParseResult",
    "Rejection",
    "Statistics",
    "TleError",
    "TleRecord",
    "checksum",
    "compute",
    "decode_line1",
    "decode_line2",
    "parse",
]
