class CalendarError(ValueError):
    """Base exception for all calendar-related errors."""


class CalendarExhausted(CalendarError):
    """Raised when a calendar has no working day left to advance onto."""
