from __future__ import annotations


class TimeclockError(Exception):
    """Base exception for rejected timeclock operations.

    ``kind`` is a stable machine-readable identifier; ``message`` is meant for people.
    """

    kind = "error"
    status_code = 400
    default_message = "Request could not be completed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class AlreadyClockedIn(TimeclockError):
    kind = "already_clocked_in"
    status_code = 409
    default_message = "Already clocked in"


class NotClockedIn(TimeclockError):
    kind = "not_clocked_in"
    status_code = 409
    default_message = "Not clocked in"


class InvalidRange(TimeclockError):
    kind = "invalid_range"
    default_message = "Clock out must be after clock in"


class FutureTime(TimeclockError):
    kind = "future_time"
    default_message = "Times cannot be in the future"


class DurationTooLong(TimeclockError):
    kind = "duration_too_long"
    default_message = "Session cannot be longer than 24 hours"


class TooFarInPast(TimeclockError):
    kind = "too_far_in_past"
    default_message = "Clock in time cannot be more than 1 year in the past"


class NotFound(TimeclockError):
    kind = "not_found"
    status_code = 404
    default_message = "Not found"


class Conflict(TimeclockError):
    kind = "conflict"
    status_code = 409
    default_message = "Already exists"


class Forbidden(TimeclockError):
    kind = "forbidden"
    status_code = 403
    default_message = "Not allowed"


class InvalidInput(TimeclockError):
    kind = "invalid_input"
    default_message = "Invalid input"
