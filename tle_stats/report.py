"""Text and JSON summaries of a parsed record set."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List, Sequence

from .core.types import Rejection, TleRecord
from .stats import Statistics

EPOCH_FORMAT = "%Y-%m-%d %H:%M:%S UTC"


def format_summary(stats: Statistics) -> str:
    """Render ``stats`` as the plain-text results summary."""

    oldest = stats.oldest_epoch.strftime(EPOCH_FORMAT) if stats.oldest_epoch else "n/a"
    lines: List[str] = [
        f"Satellites: {stats.record_count}",
        f"Oldest epoch: {oldest}",
        "Launches per year:",
    ]
    lines.extend(f"{year}: {count}" for year, count in stats.launches_per_year.items())
    lines.append("Satellites per inclination:")
    lines.extend(f"{degree}\N{DEGREE SIGN}: {count}" for degree, count in stats.inclination_bins.items())
    return "\n".join(lines) + "\n"


def record_payload(record: TleRecord) -> Dict[str, object]:
    """Return the decoded fields of ``record`` as a JSON-ready mapping."""

    return {
        "name": record.name,
        "catalog_number": record.catalog_number,
        "classification": record.classification,
        "international_designator": record.international_designator,
        "epoch": record.epoch.isoformat(),
        "mean_motion_first_derivative": record.mean_motion_first_derivative,
        "mean_motion_second_derivative": record.mean_motion_second_derivative,
        "drag_term": record.drag_term,
        "drag_term_raw": record.drag_term_raw,
        "ephemeris_type": record.ephemeris_type,
        "element_set_number": record.element_set_number,
        "inclination_deg": record.inclination_deg,
        "raan_deg": record.raan_deg,
        "eccentricity": record.eccentricity,
        "arg_of_perigee_deg": record.arg_of_perigee_deg,
        "mean_anomaly_deg": record.mean_anomaly_deg,
        "mean_motion_rev_per_day": record.mean_motion_rev_per_day,
        "revolution_number_at_epoch": record.revolution_number_at_epoch,
        "line1": record.line1,
        "line2": record.line2,
    }


def summary_payload(stats: Statistics, rejected: Sequence[Rejection] = ()) -> Dict[str, object]:
    """Machine-readable summary: the statistics plus any rejections."""

    payload = stats.as_dict()
    payload["rejected"] = [rejection.as_dict() for rejection in rejected]
    return payload


def render_summary(stats: Statistics, rejected: Sequence[Rejection] = (), as_json: bool = False) -> str:
    if as_json:
        return json.dumps(summary_payload(stats, rejected), indent=2, ensure_ascii=False) + "\n"
    return format_summary(stats)


def write_summary(text: str, destination: str) -> Path:
    """Save a rendered summary to ``destination``, creating parent directories."""

    path = Path(destination).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


__all__ = [
    "EPOCH_FORMAT",
    "format_summary",
    "record_payload",
    "render_summary",
    "summary_payload",
    "write_summary",
]
