"""
Console prompts that loop until the answer is valid.

Every helper re-asks on bad input and returns an already-validated value,
so callers can pass results straight to the core. EOFError from input() is
not caught here; the session treats closed stdin as the end of the run.
"""

import math
from typing import Optional

from pmtrack.core import Project


def prompt_text(message: str) -> str:
    """Prompt until a non-empty line is entered."""
    while True:
        value = input(f"{message}: ").strip()
        if value:
            return value
        print("Please enter a value")


def prompt_int(message: str, minimum: int = 0, maximum: Optional[int] = None) -> int:
    """Prompt for a whole number within [minimum, maximum]."""
    while True:
        raw = input(f"{message}: ").strip()
        try:
            value = int(raw)
        except ValueError:
            print("Please enter a whole number")
            continue
        if value < minimum or (maximum is not None and value > maximum):
            if maximum is None:
                print(f"Please enter a number >= {minimum}")
            else:
                print(f"Please enter a number between {minimum} and {maximum}")
            continue
        return value


def prompt_cost(message: str) -> float:
    """Prompt for a non-negative amount."""
    while True:
        raw = input(f"{message}: ").strip()
        try:
            value = float(raw)
        except ValueError:
            print("Please enter a number")
            continue
        if not math.isfinite(value) or value < 0:
            print("Please enter an amount >= 0")
            continue
        return value


def prompt_bool(message: str) -> bool:
    """Prompt for a yes/no answer. No default; empty input re-asks."""
    while True:
        value = input(f"{message} [y/n]: ").strip().lower()
        if value in ("y", "yes", "1", "true"):
            return True
        if value in ("n", "no", "0", "false"):
            return False
        print("Please answer y or n")


def prompt_identifier(message: str, project: Project, maximum: int) -> int:
    """Prompt for an identifier not yet issued in project.

    The returned id is not registered; the caller passes it to
    add_milestone/add_activity, which does.
    """
    while True:
        identifier = prompt_int(message, minimum=1, maximum=maximum)
        if project.is_id_available(identifier):
            return identifier
        print(f"ID {identifier} is already in use. Please enter a different ID.")


def wait_for_enter() -> None:
    input("\nPress Enter to continue...")
