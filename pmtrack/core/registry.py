"""
Identifier registry shared by milestones and activities.

One registry belongs to one project. Milestone and activity identifiers live
in the same namespace, so a milestone may never reuse an activity's id and
vice versa. Identifiers are never released.
"""

import logging

from pmtrack.core.errors import AllocationFailure, DuplicateIdentifier, InvalidInput

logger = logging.getLogger(__name__)


def check_identifier(identifier) -> int:
    """Return identifier unchanged if it is a non-negative int.

    Raises:
        InvalidInput: for bools, non-integers and negative values
    """
    if isinstance(identifier, bool) or not isinstance(identifier, int):
        raise InvalidInput("identifier", identifier, "must be an integer")
    if identifier < 0:
        raise InvalidInput("identifier", identifier, "must be >= 0")
    return identifier


class IdentifierRegistry:
    """Set of every identifier issued within a project."""

    def __init__(self):
        self._issued: set[int] = set()

    def __contains__(self, identifier) -> bool:
        return identifier in self._issued

    def __len__(self) -> int:
        return len(self._issued)

    def contains(self, identifier: int) -> bool:
        """True if identifier was previously registered."""
        return identifier in self._issued

    def register(self, identifier: int) -> int:
        """Record identifier as issued.

        Callers check contains() first; registering twice is a fault.

        Raises:
            InvalidInput: identifier is not a non-negative int
            DuplicateIdentifier: identifier was already registered
            AllocationFailure: the backing set could not grow
        """
        check_identifier(identifier)
        if identifier in self._issued:
            raise DuplicateIdentifier(identifier)
        try:
            self._issued.add(identifier)
        except MemoryError as e:
            raise AllocationFailure(f"registering identifier {identifier}") from e
        logger.debug(f"Registered identifier {identifier} ({len(self._issued)} issued)")
        return identifier

    def issued(self) -> list[int]:
        """All registered identifiers, ascending."""
        return sorted(self._issued)
