"""
Statistics report for a project.

Works only on snapshots from the core. Variances (actual - planned) are
computed here and never stored. Variance is shown for an item only once
it is complete.
"""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from pmtrack.core import MilestoneSnapshot, Project, ProjectSnapshot


def variance(actual: float, planned: float) -> float:
    """Actual minus planned. Positive means over plan."""
    return actual - planned


def format_money(value: float, currency: str = "$") -> str:
    return f"{currency}{value:,.2f}"


def format_variance(value: float, currency: str = "$") -> str:
    """Signed amount, e.g. +$20.00 (over) or -$20.00 (under)."""
    sign = "-" if value < 0 else "+"
    return f"{sign}{currency}{abs(value):,.2f}"


def format_status(completed: bool) -> str:
    return "COMPLETE" if completed else "in progress"


def format_incomplete_activities(project: Project) -> list[str]:
    """One line per activity still open, for the update workflow."""
    pending = project.incomplete_activities()
    if not pending:
        return ["All activities are completed!"]
    return [
        f"ID: {activity.id} | {activity.name} (in milestone: {milestone.name})"
        for activity, milestone in pending
    ]


def project_summary_lines(snapshot: ProjectSnapshot, currency: str = "$") -> list[str]:
    """Format the project totals as list of lines for display."""
    lines = [
        f"  Project:          {snapshot.name}",
        f"  Status:           {format_status(snapshot.completed)}",
        f"  Milestones:       {snapshot.completed_count}/{len(snapshot.milestones)} complete",
        f"  Planned cost:     {format_money(snapshot.planned_cost, currency)}",
        f"  Actual cost:      {format_money(snapshot.actual_cost, currency)}",
        f"  Planned duration: {snapshot.planned_duration} day(s)",
        f"  Actual duration:  {snapshot.actual_duration} day(s)",
    ]
    if snapshot.completed:
        cost_var = variance(snapshot.actual_cost, snapshot.planned_cost)
        days_var = variance(snapshot.actual_duration, snapshot.planned_duration)
        lines.append(f"  Cost variance:    {format_variance(cost_var, currency)}")
        lines.append(f"  Schedule variance: {days_var:+d} day(s)")
    return lines


def build_milestone_table(snapshot: ProjectSnapshot, currency: str = "$") -> Table:
    table = Table(title="Milestones")
    table.add_column("ID", justify="right")
    table.add_column("Name")
    table.add_column("Status")
    table.add_column("Activities", justify="right")
    table.add_column("Planned cost", justify="right")
    table.add_column("Actual cost", justify="right")
    table.add_column("Planned days", justify="right")
    table.add_column("Actual days", justify="right")
    table.add_column("Cost variance", justify="right")

    for ms in snapshot.milestones:
        cost_var = ""
        if ms.completed:
            cost_var = format_variance(variance(ms.actual_cost, ms.planned_cost), currency)
        table.add_row(
            str(ms.id),
            escape(ms.name),
            format_status(ms.completed),
            f"{ms.completed_count}/{len(ms.activities)}",
            format_money(ms.planned_cost, currency),
            format_money(ms.actual_cost, currency),
            str(ms.planned_duration),
            str(ms.actual_duration),
            cost_var,
        )
    return table


def build_activity_table(milestone: MilestoneSnapshot, currency: str = "$") -> Table:
    table = Table(title=f"Activities in {escape(milestone.name)}")
    table.add_column("ID", justify="right")
    table.add_column("Name")
    table.add_column("Status")
    table.add_column("Planned cost", justify="right")
    table.add_column("Actual cost", justify="right")
    table.add_column("Planned hrs", justify="right")
    table.add_column("Actual hrs", justify="right")
    table.add_column("Cost variance", justify="right")
    table.add_column("Hours variance", justify="right")

    for act in milestone.activities:
        cost_var = hours_var = ""
        if act.completed:
            cost_var = format_variance(variance(act.actual_cost, act.planned_cost), currency)
            hours_var = f"{variance(act.actual_duration, act.planned_duration):+d}"
        table.add_row(
            str(act.id),
            escape(act.name),
            format_status(act.completed),
            format_money(act.planned_cost, currency),
            format_money(act.actual_cost, currency),
            str(act.planned_duration),
            str(act.actual_duration),
            cost_var,
            hours_var,
        )
    return table


def render_report(
    snapshot: ProjectSnapshot,
    console: Optional[Console] = None,
    currency: str = "$",
    show_activities: bool = True,
) -> None:
    """Print the full statistics report."""
    console = console or Console()
    console.print("\nPROJECT STATISTICS", style="bold")
    console.print("-" * 40)
    for line in project_summary_lines(snapshot, currency):
        console.print(line, markup=False, highlight=False)
    console.print()
    console.print(build_milestone_table(snapshot, currency))
    if show_activities:
        for milestone in snapshot.milestones:
            console.print(build_activity_table(milestone, currency))
