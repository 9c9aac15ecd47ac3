"""
pmt check - Validate a plan file without reporting on it.

Schema checks alone miss duplicate identifiers, so the project is built
as well.
"""

import sys
from pathlib import Path

from pmtrack.core import RecoverableError
from pmtrack.lib.config import TrackerConfig
from pmtrack.lib.plan import load_project
from pmtrack.lib.validate import ValidationError


def cmd_check(args, config: TrackerConfig) -> int:
    plan_path = Path(args.plan)
    try:
        project = load_project(plan_path, config.max_identifier)
    except (ValidationError, RecoverableError) as e:
        print(f"ERROR: {plan_path}: {e}", file=sys.stderr)
        return 2

    activity_count = sum(len(m.activities) for m in project.milestones)
    print(
        f"OK: {plan_path} - project '{project.name}', "
        f"{len(project.milestones)} milestone(s), {activity_count} activity(ies)"
    )
    return 0
