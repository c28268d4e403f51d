"""``tle-stats records``: list the accepted TLE records."""

from __future__ import annotations

import argparse
import json
import sys

from ..config import AppConfig
from ..report import record_payload
from . import common


def configure_parser(subparsers) -> argparse.ArgumentParser:
    parser = subparsers.add_parser("records", help="List the TLE records found in SOURCE.")
    common.add_source_argument(parser)
    parser.add_argument("--json", action="store_true", help="Emit one JSON object per record.")
    parser.add_argument("--no-name", action="store_true", help="Print records as 2-line TLEs (omit name line).")
    parser.set_defaults(handler=run)
    return parser


def run(ns: argparse.Namespace, config: AppConfig) -> int:
    result = common.load(ns.source, config)
    if result is None:
        return 2
    common.report_rejections(result.rejected)
    if not result.records:
        print("no TLE records found", file=sys.stderr)
        return 1
    for record in result.records:
        if ns.json:
            print(json.dumps(record_payload(record), ensure_ascii=False))
        else:
            sys.stdout.write(record.as_text(include_name=not ns.no_name))
    return 0
