"""
pmt report - Print statistics for a plan file.
"""

import sys
from pathlib import Path

from rich.console import Console

from pmtrack.core import RecoverableError
from pmtrack.lib.config import TrackerConfig
from pmtrack.lib.plan import load_project
from pmtrack.lib.report import render_report
from pmtrack.lib.validate import ValidationError


def cmd_report(args, config: TrackerConfig, console: Console = None) -> int:
    """Build the project described by args.plan and render its report."""
    try:
        project = load_project(Path(args.plan), config.max_identifier)
    except (ValidationError, RecoverableError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    render_report(
        project.snapshot(),
        console or Console(),
        config.currency_symbol,
        show_activities=not getattr(args, "summary", False),
    )
    return 0
