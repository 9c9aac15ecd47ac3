"""
Plan files: build a project from a YAML document instead of the
interactive setup dialogue.

Example:

    project:
      name: Website Launch
      planned_cost: 800
      planned_duration: 3        # days
    milestones:
      - id: 1
        name: Design
        activities:
          - id: 10
            name: Wireframes
            planned_cost: 500
            planned_duration: 16  # hours
            actual_cost: 520      # optional, recorded progress
            actual_duration: 20
            completed: true

Plans are input only; nothing is written back.
"""

import logging
from pathlib import Path

from pmtrack.core import InvalidInput, Project
from pmtrack.lib.config import DEFAULT_MAX_IDENTIFIER
from pmtrack.lib.validate import validate, validate_yaml_file

logger = logging.getLogger(__name__)

PLAN_SCHEMA = "plan"


def load_plan(plan_path: Path) -> dict:
    """Read and validate a plan file.

    Raises:
        ValidationError: file missing, not YAML, or not a valid plan
    """
    return validate_yaml_file(Path(plan_path), PLAN_SCHEMA)


def build_project(data: dict, max_identifier: int = DEFAULT_MAX_IDENTIFIER) -> Project:
    """Construct a project from validated plan data.

    Identifiers go through the project's registry, so a plan that reuses an
    id raises DuplicateIdentifier. Ids above max_identifier are rejected so
    that every activity stays reachable from the update prompt. Recorded actuals are applied and every
    aggregate is recomputed before returning.

    Raises:
        ValidationError: data does not match the plan schema
        DuplicateIdentifier: an id appears twice
        InvalidInput: a value is rejected by the core, or an id is above
            max_identifier
    """
    validate(data, PLAN_SCHEMA)

    proj = data["project"]
    project = Project.create(
        proj["name"],
        proj["planned_cost"],
        int(proj["planned_duration"]),
    )

    for ms_data in data["milestones"]:
        milestone = project.add_milestone(_plan_id(ms_data, max_identifier), ms_data["name"])
        for act_data in ms_data["activities"]:
            activity = project.add_activity(
                milestone,
                _plan_id(act_data, max_identifier),
                act_data["name"],
                act_data["planned_cost"],
                int(act_data["planned_duration"]),
            )
            if _has_actuals(act_data):
                activity.update(
                    act_data.get("actual_cost", 0.0),
                    int(act_data.get("actual_duration", 0)),
                    act_data.get("completed", False),
                )

    project.recompute_all()
    logger.info(
        f"Built project '{project.name}' from plan: {len(project.milestones)} milestone(s), "
        f"{len(project.registry) - len(project.milestones)} activity(ies)"
    )
    return project


def _plan_id(item: dict, max_identifier: int) -> int:
    identifier = int(item["id"])
    if identifier > max_identifier:
        raise InvalidInput("id", identifier, f"must be between 1 and {max_identifier}")
    return identifier


def _has_actuals(act_data: dict) -> bool:
    return any(key in act_data for key in ("actual_cost", "actual_duration", "completed"))


def load_project(plan_path: Path, max_identifier: int = DEFAULT_MAX_IDENTIFIER) -> Project:
    """Read a plan file and build its project."""
    return build_project(load_plan(plan_path), max_identifier)
