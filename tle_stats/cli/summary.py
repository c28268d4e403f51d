"""``tle-stats stats``: summarise a record set."""

from __future__ import annotations

import argparse
import logging
import sys

from ..config import AppConfig
from ..report import render_summary, write_summary
from . import common

LOGGER = logging.getLogger("tle_stats.cli")


def configure_parser(subparsers) -> argparse.ArgumentParser:
    parser = subparsers.add_parser("stats", help="Summarise the TLE records found in SOURCE.")
    common.add_source_argument(parser)
    parser.add_argument("--json", action="store_true", help="Emit the summary as JSON.")
    parser.add_argument(
        "--output",
        "-o",
        default="-",
        help="Save the summary to this path instead of printing it ('-' for stdout).",
    )
    parser.set_defaults(handler=run)
    return parser


def run(ns: argparse.Namespace, config: AppConfig) -> int:
    result = common.load(ns.source, config)
    if result is None:
        return 2
    common.report_rejections(result.rejected)
    text = render_summary(result.statistics, result.rejected, as_json=ns.json)
    if ns.output == "-":
        sys.stdout.write(text)
    else:
        path = write_summary(text, ns.output)
        LOGGER.info("Saved -> %s", path)
    if not result.records:
        print("no TLE records found", file=sys.stderr)
        return 1
    return 0
