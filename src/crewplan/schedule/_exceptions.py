class ScheduleError(Exception):
    """Base exception for all scheduling errors."""


class InvalidPeriodConfiguration(ScheduleError, ValueError):
    """Periods are missing, too many, out of order, or carry invalid crew/duration values."""


class EmptyTaskSet(ScheduleError):
    """No task carries a sequence number greater than zero."""


class DuplicateSequenceNumber(ScheduleError, ValueError):
    """Two scheduled tasks share the same sequence number."""
