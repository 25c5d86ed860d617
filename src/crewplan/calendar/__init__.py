# src/crewplan/calendar/__init__.py
"""
crewplan.calendar
~~~~~~~~~~~~~~~~~

Working-day aware date arithmetic.  A CalendarPolicy decides which days are
worked (weekend flags plus a HolidayRegistry of exception dates); a
WorkingDayCalculator advances dates by whole working days under that policy.

Basic usage::

    from datetime import date
    from crewplan.calendar import CalendarPolicy, WorkingDayCalculator

    policy = CalendarPolicy()                        # Mon–Fri
    policy.holidays.add(date(2026, 4, 21), "Tiradentes")
    days = WorkingDayCalculator(policy)
    end = days.advance_working_days(date(2026, 4, 20), 1)   # → 2026-04-22

NumPy ``datetime64`` arrays are accepted everywhere a scalar date is::

    import numpy as np
    starts = np.array(["2026-03-23", "2026-03-27"], dtype="datetime64[D]")
    ends   = days.advance_working_days(starts, 1)

Display durations use a simpler Mon–Fri rule that ignores holidays::

    from crewplan.calendar import compute_duration
    compute_duration(date(2026, 3, 27), date(2026, 3, 30))   # Fri → Mon: 2

Public API
----------
CalendarPolicy         Working-day predicate.
HolidayRegistry        Mutable date → label exception set.
WorkingDayCalculator   Working-day advancement.
compute_duration       Inclusive display duration (calendar or Mon–Fri days).
parse_date             Normalise ISO / dd/mm/yyyy / datetime values to date.
CalendarError          Base exception for all calendar-related errors.
CalendarExhausted      A calendar with no working day at all.
"""

from __future__ import annotations

from crewplan.calendar._dates import parse_date
from crewplan.calendar._exceptions import CalendarError, CalendarExhausted
from crewplan.calendar.calendar import (
    CalendarPolicy,
    WorkingDayCalculator,
    compile_busdaycalendar,
)
from crewplan.calendar.duration import compute_duration
from crewplan.calendar.holidays import HolidayRegistry

__all__ = [
    "CalendarPolicy",
    "HolidayRegistry",
    "WorkingDayCalculator",
    "compile_busdaycalendar",
    "compute_duration",
    "parse_date",
    "CalendarError",
    "CalendarExhausted",
]
