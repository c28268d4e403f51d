"""Aggregate statistics over a parsed record set."""

from __future__ import annotations

import datetime as dt
import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional

from .core.types import TleRecord


@dataclass(frozen=True)
class Statistics:
    """Derived view of a record set.

    ``oldest_epoch`` is ``None`` when there are no records.  Both histograms
    iterate in ascending key order.
    """

    record_count: int
    oldest_epoch: Optional[dt.datetime]
    launches_per_year: Dict[int, int] = field(default_factory=dict)
    inclination_bins: Dict[int, int] = field(default_factory=dict)

    def as_dict(self) -> Dict[str, object]:
        return {
            "record_count": self.record_count,
            "oldest_epoch": self.oldest_epoch.isoformat() if self.oldest_epoch else None,
            "launches_per_year": {str(year): count for year, count in self.launches_per_year.items()},
            "inclination_bins": {str(degree): count for degree, count in self.inclination_bins.items()},
        }


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero (``2.5 -> 3``)."""

    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _sorted_counts(counter: Counter) -> Dict[int, int]:
    return {key: counter[key] for key in sorted(counter)}


def compute(records: Iterable[TleRecord]) -> Statistics:
    """Compute :class:`Statistics` for ``records``; input order is irrelevant."""

    items = list(records)
    epochs = [record.epoch for record in items]
    launches = Counter(record.launch_year for record in items)
    inclinations = Counter(round_half_away(record.inclination_deg) for record in items)
    return Statistics(
        record_count=len(items),
        oldest_epoch=min(epochs) if epochs else None,
        launches_per_year=_sorted_counts(launches),
        inclination_bins=_sorted_counts(inclinations),
    )


__all__ = ["Statistics", "compute", "round_half_away"]
