"""Two-digit year expansion and epoch conversion."""

from __future__ import annotations

import datetime as dt

CENTURY_PIVOT = 57
"""Two-digit years below the pivot belong to the 2000s, the rest to the 1900s."""


def expand_two_digit_year(year2: int) -> int:
    """Expand a TLE two-digit year using the NORAD 1957 pivot."""

    if not 0 <= year2 <= 99:
        raise ValueError(f"two-digit year out of range: {year2}")
    return 2000 + year2 if year2 < CENTURY_PIVOT else 1900 + year2


def epoch_datetime(year2: int, epoch_day: float) -> dt.datetime:
    """Return the epoch as a timezone-aware UTC datetime.

    ``epoch_day`` is the 1-based day of the year with the fraction of the day
    elapsed since midnight UTC, e.g. ``275.52921296``.
    """

    year = expand_two_digit_year(year2)
    day_int = int(epoch_day)
    frac = epoch_day - day_int
    base = dt.datetime(year, 1, 1, tzinfo=dt.timezone.utc) + dt.timedelta(days=day_int - 1)
    return base + dt.timedelta(seconds=frac * 86400.0)


__all__ = ["CENTURY_PIVOT", "epoch_datetime", "expand_two_digit_year"]
