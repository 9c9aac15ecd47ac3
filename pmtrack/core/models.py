"""
Project, milestone and activity models.

The hierarchy is fixed at three levels: a Project owns Milestones, a
Milestone owns Activities. Activities carry planned and actual values;
milestones and projects derive theirs from their children.

Aggregates are never maintained incrementally. After mutating an activity
the caller must run, in order:

    activity.update(...)
    milestone.recompute()
    project.recompute()

Project.record_progress() performs that sequence for one activity.

Units: activity durations are hours, milestone and project durations are
days (HOURS_PER_DAY hours each, fractional days dropped).
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Optional

from pmtrack.core.errors import AllocationFailure, InvalidInput, NotFound
from pmtrack.core.registry import IdentifierRegistry, check_identifier

logger = logging.getLogger(__name__)

HOURS_PER_DAY = 8


def hours_to_days(hours: int) -> int:
    """Whole working days in hours, truncated."""
    return hours // HOURS_PER_DAY


def _check_name(field_name: str, value) -> str:
    if not isinstance(value, str):
        raise InvalidInput(field_name, value, "must be text")
    name = value.strip()
    if not name:
        raise InvalidInput(field_name, value, "must not be empty")
    return name


def _check_cost(field_name: str, value):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInput(field_name, value, "must be a number")
    if not math.isfinite(value) or value < 0:
        raise InvalidInput(field_name, value, "must be a finite number >= 0")
    return value


def _check_duration(field_name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInput(field_name, value, "must be a whole number")
    if value < 0:
        raise InvalidInput(field_name, value, "must be >= 0")
    return value


@dataclass(frozen=True)
class ActivitySnapshot:
    """Read-only view of an activity. Durations in hours."""
    id: int
    name: str
    planned_cost: float
    actual_cost: float
    planned_duration: int
    actual_duration: int
    completed: bool


@dataclass(frozen=True)
class MilestoneSnapshot:
    """Read-only view of a milestone. Durations in days."""
    id: int
    name: str
    planned_cost: float
    actual_cost: float
    planned_duration: int
    actual_duration: int
    completed: bool
    activities: tuple[ActivitySnapshot, ...] = ()

    @property
    def completed_count(self) -> int:
        return sum(1 for a in self.activities if a.completed)


@dataclass(frozen=True)
class ProjectSnapshot:
    """Read-only view of a project. Durations in days."""
    name: str
    planned_cost: float
    actual_cost: float
    planned_duration: int
    actual_duration: int
    completed: bool
    milestones: tuple[MilestoneSnapshot, ...] = ()

    @property
    def completed_count(self) -> int:
        return sum(1 for m in self.milestones if m.completed)


@dataclass
class Activity:
    """Leaf unit of work.

    Created once during setup with planned values only. Actual values start
    at zero and are overwritten wholesale by update().
    """
    id: int
    name: str
    planned_cost: float
    planned_duration: int                      # hours
    actual_cost: float = 0.0
    actual_duration: int = 0                   # hours
    completed: bool = False

    def __post_init__(self) -> None:
        check_identifier(self.id)
        self.name = _check_name("activity name", self.name)
        _check_cost("planned cost", self.planned_cost)
        _check_duration("planned duration", self.planned_duration)
        _check_cost("actual cost", self.actual_cost)
        _check_duration("actual duration", self.actual_duration)

    @classmethod
    def create(cls, identifier: int, name: str, planned_cost: float, planned_duration: int) -> "Activity":
        """New activity with zero actuals, not completed."""
        return cls(id=identifier, name=name, planned_cost=planned_cost, planned_duration=planned_duration)

    def update(self, actual_cost: float, actual_duration: int, completed: bool) -> None:
        """Overwrite the actual cost, actual hours and completion flag.

        No transition rules apply: a completed activity may be updated again,
        including back to not completed.
        """
        _check_cost("actual cost", actual_cost)
        _check_duration("actual duration", actual_duration)
        self.actual_cost = actual_cost
        self.actual_duration = actual_duration
        self.completed = bool(completed)
        logger.debug(
            f"Activity {self.id} updated: cost={actual_cost} hours={actual_duration} "
            f"completed={self.completed}"
        )

    def snapshot(self) -> ActivitySnapshot:
        return ActivitySnapshot(
            id=self.id,
            name=self.name,
            planned_cost=self.planned_cost,
            actual_cost=self.actual_cost,
            planned_duration=self.planned_duration,
            actual_duration=self.actual_duration,
            completed=self.completed,
        )


@dataclass
class Milestone:
    """Named group of activities.

    Inside a project, milestones come only from Project.add_milestone() and
    their activities from Project.add_activity(), which issue identifiers.
    Passing activities directly builds a standalone aggregate outside any
    registry.

    completed, actual_cost and actual_duration are outputs of recompute()
    and are stale until it runs. Planned totals are derived on access since
    planned values never change after setup.
    """
    id: int
    name: str
    activities: list[Activity] = field(default_factory=list)
    completed: bool = False
    actual_cost: float = 0.0
    actual_duration: int = 0                   # days

    def __post_init__(self) -> None:
        check_identifier(self.id)
        self.name = _check_name("milestone name", self.name)

    @property
    def planned_cost(self) -> float:
        return sum((a.planned_cost for a in self.activities), 0.0)

    @property
    def planned_duration(self) -> int:
        """Planned days, from the summed planned hours."""
        return hours_to_days(sum(a.planned_duration for a in self.activities))

    @property
    def completed_count(self) -> int:
        return sum(1 for a in self.activities if a.completed)

    def recompute(self) -> None:
        """Re-derive completion and actual totals from the activities.

        A milestone without activities is not complete.
        """
        was_completed = self.completed
        self.completed = bool(self.activities) and all(a.completed for a in self.activities)
        self.actual_cost = sum((a.actual_cost for a in self.activities), 0.0)
        self.actual_duration = hours_to_days(sum(a.actual_duration for a in self.activities))

        if self.completed != was_completed:
            state = "complete" if self.completed else "incomplete"
            logger.info(f"Milestone {self.id} '{self.name}' is now {state}")
        logger.debug(
            f"Milestone {self.id} recomputed: cost={self.actual_cost} days={self.actual_duration} "
            f"({self.completed_count}/{len(self.activities)} activities complete)"
        )

    def find_activity(self, identifier: int) -> Optional[Activity]:
        for activity in self.activities:
            if activity.id == identifier:
                return activity
        return None

    def snapshot(self) -> MilestoneSnapshot:
        return MilestoneSnapshot(
            id=self.id,
            name=self.name,
            planned_cost=self.planned_cost,
            actual_cost=self.actual_cost,
            planned_duration=self.planned_duration,
            actual_duration=self.actual_duration,
            completed=self.completed,
            activities=tuple(a.snapshot() for a in self.activities),
        )


@dataclass
class ProgressResult:
    """Outcome of Project.record_progress().

    milestone_completed / project_completed are True only when this update
    is the one that completed them.
    """
    activity: Activity
    milestone: Milestone
    milestone_completed: bool = False
    project_completed: bool = False


@dataclass
class Project:
    """Top-level container of milestones and owner of the identifier registry.

    Identifiers are issued only through add_milestone() and add_activity(),
    which register the id before the object is built. Input is validated
    first so a rejected value never consumes an identifier.
    milestones is not a constructor argument.
    """
    name: str
    planned_cost: float
    planned_duration: int                      # days
    milestones: list[Milestone] = field(default_factory=list, init=False)
    completed: bool = False
    actual_cost: float = 0.0
    actual_duration: int = 0                   # days
    registry: IdentifierRegistry = field(default_factory=IdentifierRegistry, repr=False)

    def __post_init__(self) -> None:
        self.name = _check_name("project name", self.name)
        _check_cost("planned cost", self.planned_cost)
        _check_duration("planned duration", self.planned_duration)

    @classmethod
    def create(cls, name: str, planned_cost: float, planned_duration: int) -> "Project":
        """New project with no milestones and a fresh registry."""
        return cls(name=name, planned_cost=planned_cost, planned_duration=planned_duration)

    def is_id_available(self, identifier: int) -> bool:
        return not self.registry.contains(identifier)

    def allocate_id(self, identifier: int) -> int:
        """Register identifier in the project-wide namespace.

        Raises:
            DuplicateIdentifier: identifier already issued
            InvalidInput: identifier is not a non-negative int
        """
        return self.registry.register(identifier)

    def add_milestone(self, identifier: int, name: str) -> Milestone:
        """Issue identifier and append a new, empty milestone."""
        name = _check_name("milestone name", name)
        self.allocate_id(identifier)
        milestone = Milestone(id=identifier, name=name)
        try:
            self.milestones.append(milestone)
        except MemoryError as e:
            raise AllocationFailure(f"adding milestone {identifier}") from e
        logger.debug(f"Added milestone {identifier} '{name}' to project '{self.name}'")
        return milestone

    def add_activity(
        self,
        milestone: Milestone,
        identifier: int,
        name: str,
        planned_cost: float,
        planned_duration: int,
    ) -> Activity:
        """Issue identifier and append a new activity to milestone.

        Raises:
            InvalidInput: milestone does not belong to this project
        """
        if not any(m is milestone for m in self.milestones):
            raise InvalidInput("milestone", milestone.id, "does not belong to this project")
        name = _check_name("activity name", name)
        _check_cost("planned cost", planned_cost)
        _check_duration("planned duration", planned_duration)
        self.allocate_id(identifier)
        activity = Activity.create(identifier, name, planned_cost, planned_duration)
        try:
            milestone.activities.append(activity)
        except MemoryError as e:
            raise AllocationFailure(f"adding activity {identifier}") from e
        logger.debug(f"Added activity {identifier} '{name}' to milestone {milestone.id}")
        return activity

    def find_activity(self, identifier: int) -> tuple[Activity, Milestone]:
        """Locate an activity and its owning milestone by id.

        Linear scan over every milestone in order.

        Raises:
            NotFound: no activity carries this identifier
        """
        for milestone in self.milestones:
            activity = milestone.find_activity(identifier)
            if activity is not None:
                return activity, milestone
        raise NotFound(identifier)

    def incomplete_activities(self) -> list[tuple[Activity, Milestone]]:
        """All activities not yet completed, in setup order."""
        return [
            (activity, milestone)
            for milestone in self.milestones
            for activity in milestone.activities
            if not activity.completed
        ]

    def recompute(self) -> None:
        """Re-derive completion and actual totals from the milestones.

        Uses each milestone's current aggregates, so milestones must be
        recomputed first. Durations are summed in days. A project without
        milestones is not complete.
        """
        was_completed = self.completed
        self.completed = bool(self.milestones) and all(m.completed for m in self.milestones)
        self.actual_cost = sum((m.actual_cost for m in self.milestones), 0.0)
        self.actual_duration = sum(m.actual_duration for m in self.milestones)

        if self.completed != was_completed:
            state = "complete" if self.completed else "incomplete"
            logger.info(f"Project '{self.name}' is now {state}")
        logger.debug(f"Project '{self.name}' recomputed: cost={self.actual_cost} days={self.actual_duration}")

    def recompute_all(self) -> None:
        """Recompute every milestone, then the project."""
        for milestone in self.milestones:
            milestone.recompute()
        self.recompute()

    def record_progress(
        self,
        identifier: int,
        actual_cost: float,
        actual_duration: int,
        completed: bool,
    ) -> ProgressResult:
        """Update one activity and propagate to its milestone and the project.

        Raises:
            NotFound: identifier does not resolve to an activity
            InvalidInput: actual values are negative or of the wrong type
        """
        activity, milestone = self.find_activity(identifier)
        milestone_was_completed = milestone.completed
        project_was_completed = self.completed

        activity.update(actual_cost, actual_duration, completed)
        milestone.recompute()
        self.recompute()

        return ProgressResult(
            activity=activity,
            milestone=milestone,
            milestone_completed=milestone.completed and not milestone_was_completed,
            project_completed=self.completed and not project_was_completed,
        )

    def snapshot(self) -> ProjectSnapshot:
        return ProjectSnapshot(
            name=self.name,
            planned_cost=self.planned_cost,
            actual_cost=self.actual_cost,
            planned_duration=self.planned_duration,
            actual_duration=self.actual_duration,
            completed=self.completed,
            milestones=tuple(m.snapshot() for m in self.milestones),
        )
