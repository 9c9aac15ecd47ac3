"""
Error types raised by the tracking core.

Recoverable errors (DuplicateIdentifier, NotFound, InvalidInput) are meant to
be caught at the command boundary and turned into a re-prompt or a message.
AllocationFailure is fatal and is only handled by cli.main.
"""


class TrackerError(Exception):
    """Base class for all tracking core errors."""


class RecoverableError(TrackerError):
    """Error the caller can report and continue past."""


class DuplicateIdentifier(RecoverableError):
    """Raised when registering an identifier that was already issued."""

    def __init__(self, identifier: int):
        self.identifier = identifier
        super().__init__(f"Identifier {identifier} is already in use")


class NotFound(RecoverableError):
    """Raised when an identifier does not resolve to any activity."""

    def __init__(self, identifier: int):
        self.identifier = identifier
        super().__init__(f"Activity with ID {identifier} not found")


class InvalidInput(RecoverableError):
    """Raised when a value handed to the core violates its constraints."""

    def __init__(self, field: str, value, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field} {value!r}: {reason}")


class AllocationFailure(TrackerError):
    """Raised when memory runs out while growing a collection."""

    def __init__(self, context: str):
        self.context = context
        super().__init__(f"Allocation failed while {context}")
