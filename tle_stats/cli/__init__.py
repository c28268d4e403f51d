"""Command line interface for tle-stats."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from ..config import load_config
from . import common, records, summary


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tle-stats",
        description="Parse TLE files or URLs and summarise the element sets.",
    )
    common.add_shared_arguments(parser)
    subparsers = parser.add_subparsers(dest="command")
    records.configure_parser(subparsers)
    summary.configure_parser(subparsers)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    if not hasattr(ns, "handler"):
        parser.print_help()
        return 1
    config = load_config()
    common.configure_logging(ns.log_level or config.log_level, json_output=ns.log_json or config.log_json)
    return ns.handler(ns, config)


def entrypoint() -> None:
    sys.exit(main())
