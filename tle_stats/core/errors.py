"""Error taxonomy for TLE decoding and record assembly."""

from __future__ import annotations

from typing import Iterable, Tuple


class TleError(ValueError):
    """Base class for every per-record decoding failure.

    ``line_numbers`` holds the 1-based input line numbers the failure refers
    to.  Single-line decoders leave it empty; the record assembler fills it in
    once it knows where the candidate came from.
    """

    kind = "error"

    def __init__(self, message: str, line_numbers: Iterable[int] = ()) -> None:
        super().__init__(message)
        self.message = message
        self.line_numbers: Tuple[int, ...] = tuple(line_numbers)

    def at_lines(self, line_numbers: Iterable[int]) -> "TleError":
        """Return a copy of this error bound to ``line_numbers``."""

        return type(self)(self.message, line_numbers)

    def __str__(self) -> str:
        if not self.line_numbers:
            return self.message
        joined = ", ".join(str(n) for n in self.line_numbers)
        return f"{self.message} (lines {joined})"


class FormatError(TleError):
    """A line does not match the fixed-column grammar for its position."""

    kind = "format"


class ChecksumError(TleError):
    """The grammar matched but the trailing mod-10 digit is wrong."""

    kind = "checksum"


class InconsistentRecordError(TleError):
    """Line 1 and line 2 of a record disagree on the catalog number."""

    kind = "inconsistent"


class IncompleteInputError(TleError):
    """Fewer lines remain than are needed to complete a record."""

    kind = "incomplete"


__all__ = [
    "ChecksumError",
    "FormatError",
    "IncompleteInputError",
    "InconsistentRecordError",
    "TleError",
]
