"""
Tracking core for pmtrack.

Holds the three-level project hierarchy, the roll-up of activity actuals
into milestone and project totals, and the registry that keeps every
milestone and activity identifier unique within a project.
"""

from pmtrack.core.errors import (
    TrackerError,
    RecoverableError,
    DuplicateIdentifier,
    NotFound,
    InvalidInput,
    AllocationFailure,
)
from pmtrack.core.registry import IdentifierRegistry, check_identifier
from pmtrack.core.models import (
    HOURS_PER_DAY,
    hours_to_days,
    Activity,
    Milestone,
    Project,
    ProgressResult,
    ActivitySnapshot,
    MilestoneSnapshot,
    ProjectSnapshot,
)

__all__ = [
    # errors
    "TrackerError",
    "RecoverableError",
    "DuplicateIdentifier",
    "NotFound",
    "InvalidInput",
    "AllocationFailure",
    # registry
    "IdentifierRegistry",
    "check_identifier",
    # models
    "HOURS_PER_DAY",
    "hours_to_days",
    "Activity",
    "Milestone",
    "Project",
    "ProgressResult",
    "ActivitySnapshot",
    "MilestoneSnapshot",
    "ProjectSnapshot",
]
