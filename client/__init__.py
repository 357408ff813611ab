"""
Client for running a workout session against the API.

- api_client: httpx client for the workout endpoints
- timers: rest countdown and elapsed ticker
- controller: session state machine used by the UI
"""

from client.api_client import (
    WorkoutApiClient,
    WorkoutApiClientError,
    WorkoutApiError,
    WorkoutApiUnavailable,
)
from client.controller import (
    SessionControllerError,
    SessionRequestError,
    SessionStateError,
    SessionSummary,
    SetInputError,
    WorkoutSessionController,
)
from client.timers import ElapsedTicker, RestCountdown

__all__ = [
    "WorkoutApiClient",
    "WorkoutApiClientError",
    "WorkoutApiError",
    "WorkoutApiUnavailable",
    "SessionControllerError",
    "SessionRequestError",
    "SessionStateError",
    "SessionSummary",
    "SetInputError",
    "WorkoutSessionController",
    "ElapsedTicker",
    "RestCountdown",
]
