"""Common helpers for the tle-stats CLI."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from fetch.service import LoadResult, LoadSession
from fetch.sources import SourceUnavailableError, UrlSource, is_url

from .. import logging as json_logging
from ..config import AppConfig
from ..core.types import Rejection

LOG_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}


def add_shared_arguments(parser: argparse.ArgumentParser) -> None:
    """Register the options accepted before any subcommand."""

    parser.add_argument(
        "--log-level",
        default=None,
        choices=sorted(LOG_LEVELS),
        help="Logging verbosity (default: TLE_STATS_LOG_LEVEL or INFO).",
    )
    parser.add_argument("--log-json", action="store_true", help="Emit logs as JSON lines on stderr.")


def add_source_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("source", help="Path to a TLE file or an http(s) URL serving TLE text.")


def configure_logging(level_name: str, json_output: bool = False) -> None:
    """Configure :mod:`logging` according to the CLI flags."""

    level = LOG_LEVELS.get(level_name.upper(), logging.INFO)
    if json_output:
        json_logging.configure_logging(level, force=True)
        return
    package_logger = json_logging.get_logger()
    package_logger.handlers.clear()
    package_logger.propagate = True
    package_logger.setLevel(level)
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def load(source: str, config: AppConfig) -> Optional[LoadResult]:
    """Load and parse ``source``; print the error and return ``None`` on failure."""

    session = LoadSession(client=UrlSource.from_settings(config.http))
    try:
        if is_url(source):
            return session.load_url(source)
        return session.load_file(source)
    except SourceUnavailableError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return None


def report_rejections(rejected: Sequence[Rejection]) -> None:
    for rejection in rejected:
        lines = ",".join(str(number) for number in rejection.line_numbers)
        print(f"warning: lines {lines}: {rejection.kind}: {rejection.reason}", file=sys.stderr)
