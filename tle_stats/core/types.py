"""Shared dataclasses for decoded TLE lines, records and parse results."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import List, NamedTuple, Tuple

from .epoch import epoch_datetime, expand_two_digit_year
from .errors import TleError


@dataclass(frozen=True)
class Line1Fields:
    """Typed fields of a TLE line 1."""

    catalog_number: int
    classification: str
    launch_year_suffix: int
    launch_number: int
    launch_piece: str
    epoch_year_suffix: int
    epoch_day: float
    mean_motion_first_derivative: float
    mean_motion_second_derivative: float
    mean_motion_second_derivative_raw: str
    drag_term: float
    drag_term_raw: str
    ephemeris_type: int
    element_set_number: int
    checksum: int


@dataclass(frozen=True)
class Line2Fields:
    """Typed fields of a TLE line 2."""

    catalog_number: int
    inclination_deg: float
    raan_deg: float
    eccentricity: float
    arg_of_perigee_deg: float
    mean_anomaly_deg: float
    mean_motion_rev_per_day: float
    revolution_number_at_epoch: int
    checksum: int


@dataclass(frozen=True)
class TleRecord:
    """One validated orbital element set.

    ``line1`` and ``line2`` hold the data lines exactly as they were read so a
    record can be written back out or decoded again.  ``name`` is empty for
    bare two-line input.
    """

    name: str
    line1: str
    line2: str

    catalog_number: int
    classification: str
    launch_year_suffix: int
    launch_number: int
    launch_piece: str

    epoch_year_suffix: int
    epoch_day: float

    mean_motion_first_derivative: float
    mean_motion_second_derivative: float
    mean_motion_second_derivative_raw: str
    drag_term: float
    drag_term_raw: str
    ephemeris_type: int
    element_set_number: int
    checksum1: int

    inclination_deg: float
    raan_deg: float
    eccentricity: float
    arg_of_perigee_deg: float
    mean_anomaly_deg: float
    mean_motion_rev_per_day: float
    revolution_number_at_epoch: int
    checksum2: int

    @classmethod
    def from_fields(cls, name: str, line1: str, line2: str, first: Line1Fields, second: Line2Fields) -> "TleRecord":
        return cls(
            name=name,
            line1=line1,
            line2=line2,
            catalog_number=first.catalog_number,
            classification=first.classification,
            launch_year_suffix=first.launch_year_suffix,
            launch_number=first.launch_number,
            launch_piece=first.launch_piece,
            epoch_year_suffix=first.epoch_year_suffix,
            epoch_day=first.epoch_day,
            mean_motion_first_derivative=first.mean_motion_first_derivative,
            mean_motion_second_derivative=first.mean_motion_second_derivative,
            mean_motion_second_derivative_raw=first.mean_motion_second_derivative_raw,
            drag_term=first.drag_term,
            drag_term_raw=first.drag_term_raw,
            ephemeris_type=first.ephemeris_type,
            element_set_number=first.element_set_number,
            checksum1=first.checksum,
            inclination_deg=second.inclination_deg,
            raan_deg=second.raan_deg,
            eccentricity=second.eccentricity,
            arg_of_perigee_deg=second.arg_of_perigee_deg,
            mean_anomaly_deg=second.mean_anomaly_deg,
            mean_motion_rev_per_day=second.mean_motion_rev_per_day,
            revolution_number_at_epoch=second.revolution_number_at_epoch,
            checksum2=second.checksum,
        )

    @property
    def international_designator(self) -> str:
        return f"{self.launch_year_suffix:02d}{self.launch_number:03d}{self.launch_piece}"

    @property
    def launch_year(self) -> int:
        return expand_two_digit_year(self.launch_year_suffix)

    @property
    def epoch_year(self) -> int:
        return expand_two_digit_year(self.epoch_year_suffix)

    @property
    def epoch(self) -> dt.datetime:
        return epoch_datetime(self.epoch_year_suffix, self.epoch_day)

    def as_text(self, include_name: bool = True) -> str:
        if include_name and self.name:
            return f"{self.name}\n{self.line1}\n{self.line2}\n"
        return f"{self.line1}\n{self.line2}\n"


@dataclass(frozen=True)
class Rejection:
    """A candidate record that was dropped, with the reason why."""

    line_numbers: Tuple[int, ...]
    reason: str
    error: TleError

    @property
    def kind(self) -> str:
        return self.error.kind

    def as_dict(self) -> dict:
        return {"lines": list(self.line_numbers), "kind": self.kind, "reason": self.reason}


class ParseResult(NamedTuple):
    """Accepted records and rejections of one ``parse`` call, in input order."""

    records: List[TleRecord]
    rejected: List[Rejection]


__all__ = ["Line1Fields", "Line2Fields", "ParseResult", "Rejection", "TleRecord"]
