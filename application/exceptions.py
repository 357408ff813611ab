"""
Application-layer exceptions.

These exceptions are used across application and infrastructure layers.
Routers translate them into HTTP responses; nothing below the API layer
knows about status codes.
"""

from typing import Optional


class WorkoutSessionError(Exception):
    """Base class for workout session errors."""

    pass


class ValidationError(WorkoutSessionError):
    """Input was rejected before reaching storage.

    Attributes:
        field: Name of the offending input field, when known
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


class NotFoundError(WorkoutSessionError):
    """Workout or set does not exist, or is not owned by the caller.

    Both cases raise the same error so that callers cannot test for
    another user's ids.
    """

    pass


class InvalidTransitionError(WorkoutSessionError):
    """Status change not allowed from the workout's current status.

    Only raised when strict status transitions are enabled.
    """

    def __init__(self, action: str, current_status: str):
        super().__init__(f"Cannot {action} a workout that is {current_status}")
        self.action = action
        self.current_status = current_status


class PersistenceError(WorkoutSessionError):
    """Storage failure during a read or write.

    Multi-row writes are atomic, so when this is raised nothing from the
    failed operation was persisted.
    """

    pass


class UpstreamGenerationError(WorkoutSessionError):
    """The exercise generator failed or returned nothing usable."""

    pass
