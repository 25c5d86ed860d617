# src/crewplan/schedule/__init__.py
"""
crewplan.schedule
~~~~~~~~~~~~~~~~~

Multi-period, round-robin work calendar.  Sequenced tasks are consumed in
ascending order; each round gives every crew of the active period one task
starting on the same working day, and the next round starts on the first
working day after the round ends.  A later period takes over as soon as the
cursor reaches its start date.

Basic usage::

    from datetime import date
    from crewplan.calendar import CalendarPolicy
    from crewplan.schedule import Period, Task, compute_schedule

    tasks  = [Task(i, f"WTG-{i:02d}") for i in range(1, 5)]
    period = Period(date(2026, 3, 23), crew_count=2, task_duration_days=2)
    result = compute_schedule(tasks, [period], CalendarPolicy())
    [(e.crew_label, e.start_date, e.end_date) for e in result]
    # → T1/T2 on 23–24 Mar, T1/T2 again on 25–26 Mar

Unsequenced serials can be numbered in list order::

    from crewplan.schedule import auto_sequence
    tasks = auto_sequence([Task(0, "241269"), Task(0, "241270")])

Public API
----------
Task, Period, ScheduleEntry, ScheduleResult   Data model.
PeriodScheduler, compute_schedule             The scheduling engine.
auto_sequence                                 Consecutive sequence numbering.
ScheduleError                                 Base exception.
InvalidPeriodConfiguration, EmptyTaskSet,
DuplicateSequenceNumber                       Rejections raised before scheduling.
"""

from crewplan.schedule._exceptions import (
    DuplicateSequenceNumber,
    EmptyTaskSet,
    InvalidPeriodConfiguration,
    ScheduleError,
)
from crewplan.schedule.models import (
    Period,
    ScheduleEntry,
    ScheduleResult,
    Task,
    auto_sequence,
)
from crewplan.schedule.scheduler import (
    MAX_PERIODS,
    PeriodScheduler,
    compute_schedule,
    select_tasks,
    validate_periods,
)

__all__ = [
    "Task",
    "Period",
    "ScheduleEntry",
    "ScheduleResult",
    "auto_sequence",
    "PeriodScheduler",
    "compute_schedule",
    "select_tasks",
    "validate_periods",
    "MAX_PERIODS",
    "ScheduleError",
    "InvalidPeriodConfiguration",
    "EmptyTaskSet",
    "DuplicateSequenceNumber",
]
