#!/usr/bin/env python3
"""pmtrack CLI entrypoint."""

import sys
import argparse
import logging
from pathlib import Path

from pmtrack.core import AllocationFailure
from pmtrack.lib.config import load_config
from pmtrack.commands import session as cmd_session_module
from pmtrack.commands import report as cmd_report_module
from pmtrack.commands import check as cmd_check_module

logger = logging.getLogger("pmtrack")

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def setup_logging(level: str) -> None:
    logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT, stream=sys.stderr)
    logging.getLogger().setLevel(level)


def cmd_session(args, config):
    return cmd_session_module.cmd_session(args, config)


def cmd_report(args, config):
    return cmd_report_module.cmd_report(args, config)


def cmd_check(args, config):
    return cmd_check_module.cmd_check(args, config)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='pmt', description='Project tracking CLI')
    parser.add_argument('--config', '-c', type=Path, help='Config file (default: ./pmtrack.env if present)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')
    subparsers = parser.add_subparsers(dest='command', required=True)

    # pmt session
    p_session = subparsers.add_parser('session', help='Set up a project and track it interactively')
    p_session.add_argument('--plan', type=Path, help='Load the project from a plan file instead of prompting')
    p_session.set_defaults(func=cmd_session)

    # pmt report
    p_report = subparsers.add_parser('report', help='Print statistics for a plan file')
    p_report.add_argument('plan', type=Path, help='Plan file (YAML)')
    p_report.add_argument('--summary', '-s', action='store_true', help='Omit per-activity tables')
    p_report.set_defaults(func=cmd_report)

    # pmt check
    p_check = subparsers.add_parser('check', help='Validate a plan file')
    p_check.add_argument('plan', type=Path, help='Plan file (YAML)')
    p_check.set_defaults(func=cmd_check)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging("WARNING")
    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2
    setup_logging("DEBUG" if args.verbose else config.log_level)

    try:
        return args.func(args, config)
    except (AllocationFailure, MemoryError) as e:
        logger.critical(f"Out of memory: {e}")
        print(f"FATAL: {e}. Exiting.", file=sys.stderr)
        return 3
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130


if __name__ == '__main__':
    sys.exit(main())
