"""NORAD mod-10 line checksum."""

from __future__ import annotations

import string


def compute_checksum(line: str) -> int:
    """Return the mod-10 checksum of every character of ``line`` but the last.

    Digits count for their value, ``-`` counts as one and everything else
    (letters, ``+``, ``.``, blanks) counts as zero.
    """

    total = 0
    for ch in line.rstrip()[:-1]:
        if ch in string.digits:
            total += int(ch)
        elif ch == "-":
            total += 1
    return total % 10


def checksum(line: str) -> bool:
    """Return ``True`` when ``line`` satisfies the NORAD checksum rule."""

    line = line.rstrip()
    if not line or line[-1] not in string.digits:
        return False
    return compute_checksum(line) == int(line[-1])


__all__ = ["checksum", "compute_checksum"]
