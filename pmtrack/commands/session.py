"""
pmt session - Interactive project setup and tracking.

Runs the setup dialogue (or loads a plan file), then loops over the main
menu: update an activity, print statistics, exit. Nothing is saved; the
project lives for the duration of the session.
"""

import logging
import sys
from typing import Optional

from rich.console import Console

from pmtrack.core import NotFound, Project, ProgressResult, RecoverableError
from pmtrack.lib.config import TrackerConfig
from pmtrack.lib.plan import load_project
from pmtrack.lib.prompts import (
    prompt_bool,
    prompt_cost,
    prompt_identifier,
    prompt_int,
    prompt_text,
    wait_for_enter,
)
from pmtrack.lib.report import format_incomplete_activities, render_report
from pmtrack.lib.validate import ValidationError

logger = logging.getLogger(__name__)

MENU_UPDATE = "1"
MENU_STATS = "2"
MENU_EXIT = "3"


def run_setup(config: TrackerConfig) -> Project:
    """Ask for the project, its milestones and their activities."""
    print("WELCOME TO THE PROJECT MANAGEMENT SYSTEM!")
    print("=" * 60)

    name = prompt_text("Enter project name")
    planned_cost = prompt_cost("Enter planned cost for the project")
    planned_duration = prompt_int("Enter planned duration for the project (days)")
    project = Project.create(name, planned_cost, planned_duration)
    print(f"\nProject '{project.name}' created successfully!")

    milestone_count = prompt_int("Enter number of milestones", minimum=1)
    print(f"\nSetting up {milestone_count} milestone(s)...")

    for i in range(1, milestone_count + 1):
        print(f"\nMILESTONE {i} SETUP")
        print("-" * 25)
        ms_id = prompt_identifier(f"Enter unique ID for milestone {i}", project, config.max_identifier)
        ms_name = prompt_text(f"Enter name for milestone {i}")
        milestone = project.add_milestone(ms_id, ms_name)

        activity_count = prompt_int(f"Enter number of activities for milestone '{milestone.name}'", minimum=1)
        for j in range(1, activity_count + 1):
            print(f"\n  Activity {j}/{activity_count}:")
            act_id = prompt_identifier(f"  Enter unique ID for activity {j}", project, config.max_identifier)
            act_name = prompt_text(f"  Enter name for activity {j}")
            act_cost = prompt_cost("  Enter planned cost")
            act_hours = prompt_int("  Enter planned duration (hours)")
            activity = project.add_activity(milestone, act_id, act_name, act_cost, act_hours)
            print(f"  Activity '{activity.name}' (ID: {activity.id}) created successfully!")

        print(f"\nMilestone '{milestone.name}' setup complete!")

    project.recompute_all()
    print("\nProject setup complete! Ready for activity tracking.")
    return project


def print_menu() -> None:
    print("\nMAIN MENU")
    print("-" * 25)
    print(f"  {MENU_UPDATE}. Update activity")
    print(f"  {MENU_STATS}. Print stats")
    print(f"  {MENU_EXIT}. Exit")


def update_activity(project: Project, config: TrackerConfig) -> Optional[ProgressResult]:
    """Update workflow for one activity.

    Returns the progress result, or None when nothing was updated.
    """
    print("\nUPDATE ACTIVITY WORKFLOW")
    print("=" * 35)
    print("\nINCOMPLETE ACTIVITIES:")
    print("-" * 40)
    for line in format_incomplete_activities(project):
        print(line)

    if not project.incomplete_activities():
        print("\nCongratulations! All activities are completed!")
        return None

    identifier = prompt_int(
        "\nEnter ID of activity to update (0 to cancel)", minimum=0, maximum=config.max_identifier
    )
    if identifier == 0:
        print("Update cancelled.")
        return None

    try:
        activity, _ = project.find_activity(identifier)
    except NotFound as e:
        print(f"{e}.")
        return None

    # The core allows re-updating; the menu does not.
    if activity.completed:
        print(f"Activity '{activity.name}' is already completed.")
        return None

    print(f"\nUpdating activity: {activity.name}")
    actual_hours = prompt_int("Enter actual duration (hours)")
    actual_cost = prompt_cost("Enter actual cost")
    completed = prompt_bool("Is the activity completed?")

    result = project.record_progress(identifier, actual_cost, actual_hours, completed)
    print("\nActivity and related milestones updated successfully!")
    if result.milestone_completed:
        print(f"Milestone '{result.milestone.name}' is now COMPLETE!")
    if result.project_completed:
        print(f"PROJECT '{project.name}' IS NOW COMPLETE!")
    return result


def run_menu(project: Project, config: TrackerConfig, console: Optional[Console] = None) -> None:
    """Main loop until the user exits."""
    console = console or Console()
    while True:
        print_menu()
        choice = input("Enter your choice: ").strip()

        if choice == MENU_UPDATE:
            update_activity(project, config)
        elif choice == MENU_STATS:
            render_report(project.snapshot(), console, config.currency_symbol)
        elif choice == MENU_EXIT:
            print("\nThank you for using the Project Management System!")
            return
        else:
            print(f"Invalid choice. Please select {MENU_UPDATE}, {MENU_STATS}, or {MENU_EXIT}.")

        if config.pause_after_action:
            wait_for_enter()


def cmd_session(args, config: TrackerConfig) -> int:
    """Run an interactive tracking session."""
    plan_path = getattr(args, "plan", None)
    try:
        if plan_path:
            project = load_project(plan_path, config.max_identifier)
            print(f"Loaded project '{project.name}' from {plan_path}")
        else:
            project = run_setup(config)
    except (ValidationError, RecoverableError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2
    except EOFError:
        print("\nInput closed during setup. Exiting.")
        return 1

    try:
        run_menu(project, config)
    except EOFError:
        print("\nInput closed. Exiting.")
        return 1

    logger.debug(f"Session for '{project.name}' ended")
    return 0
