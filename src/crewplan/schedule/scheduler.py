from __future__ import annotations

from datetime import date
from typing import Iterable, List, Sequence, Tuple, Union

from loguru import logger

from crewplan.calendar import CalendarPolicy, WorkingDayCalculator
from crewplan.crews import CrewRotor

from ._exceptions import DuplicateSequenceNumber, EmptyTaskSet, InvalidPeriodConfiguration
from .models import Period, ScheduleEntry, ScheduleResult, Task

MAX_PERIODS = 3


def validate_periods(periods: Union[Period, Sequence[Period]]) -> Tuple[Period, ...]:
    if isinstance(periods, Period):
        periods = (periods,)
    periods = tuple(periods)
    if not periods:
        raise InvalidPeriodConfiguration("At least one period is required.")
    if len(periods) > MAX_PERIODS:
        raise InvalidPeriodConfiguration(
            f"At most {MAX_PERIODS} periods are supported; got {len(periods)}."
        )
    for position, period in enumerate(periods):
        if period.crew_count < 1:
            raise InvalidPeriodConfiguration(
                f"Period {position}: crew_count must be >= 1; got {period.crew_count}."
            )
        if period.task_duration_days < 1:
            raise InvalidPeriodConfiguration(
                f"Period {position}: task_duration_days must be >= 1; "
                f"got {period.task_duration_days}."
            )
        if period.end_date is not None and period.end_date < period.start_date:
            raise InvalidPeriodConfiguration(
                f"Period {position} ends {period.end_date}, before it starts "
                f"({period.start_date})."
            )
        if period.index is not None and period.index != position:
            raise InvalidPeriodConfiguration(
                f"Period at position {position} declares index {period.index}."
            )
        if position and period.start_date <= periods[position - 1].start_date:
            raise InvalidPeriodConfiguration(
                f"Period {position} starts {period.start_date}, not after "
                f"period {position - 1} ({periods[position - 1].start_date})."
            )
    return periods


def select_tasks(tasks: Iterable[Task]) -> List[Task]:
    """Sequenced tasks in ascending sequence order."""
    selected = sorted((t for t in tasks if t.is_sequenced), key=lambda t: t.sequence_number)
    if not selected:
        raise EmptyTaskSet("No task has a sequence number greater than zero.")
    for previous, current in zip(selected, selected[1:]):
        if previous.sequence_number == current.sequence_number:
            raise DuplicateSequenceNumber(
                f"Sequence number {current.sequence_number} is used by "
                f"{previous.identity!r} and {current.identity!r}."
            )
    return selected


class PeriodScheduler:
    """
    Assigns sequenced tasks to crews, round by round, across up to three
    chronological periods.

    In each round every crew of the active period receives at most one task,
    all starting on the same cursor date.  The cursor then moves to the first
    working day after the round's end.  A round is only started while the
    cursor is before the next period's start date; once it is reached the
    scheduler cuts over and restarts the cursor at that period's start.
    A period with an ``end_date`` starts no round after it; tasks still
    pending when the last period closes are returned as ``unscheduled``.
    """

    def __init__(self, calendar: CalendarPolicy) -> None:
        self._calendar = calendar
        self._days = WorkingDayCalculator(calendar)

    @property
    def calendar(self) -> CalendarPolicy:
        return self._calendar

    def run(
        self,
        tasks: Iterable[Task],
        periods: Union[Period, Sequence[Period]],
    ) -> ScheduleResult:
        periods = validate_periods(periods)
        ordered = select_tasks(tasks)
        logger.info(
            "Scheduling {} tasks over {} period(s) with {}",
            len(ordered), len(periods), self._calendar,
        )

        entries: List[ScheduleEntry] = []
        pointer = 0
        for index, period in enumerate(periods):
            if pointer >= len(ordered):
                break
            cutover: date | None = (
                periods[index + 1].start_date if index + 1 < len(periods) else None
            )
            rotor = CrewRotor(period.crew_count)
            cursor = period.start_date

            while pointer < len(ordered):
                if cutover is not None and cursor >= cutover:
                    logger.debug(
                        "Period {} cut over at {} after {} task(s)",
                        index, cursor, rotor.consumed,
                    )
                    break
                if period.end_date is not None and cursor > period.end_date:
                    logger.debug("Period {} closed on {}", index, period.end_date)
                    break
                round_end = self._days.advance_working_days(
                    cursor, period.task_duration_days - 1
                )
                for _ in range(period.crew_count):
                    if pointer >= len(ordered):
                        break
                    task = ordered[pointer]
                    entries.append(
                        ScheduleEntry(
                            sequence_number=task.sequence_number,
                            task_identity=task.identity,
                            crew_label=rotor.next_label(),
                            start_date=cursor,
                            end_date=round_end,
                            task_label=task.label,
                            period_index=index,
                        )
                    )
                    pointer += 1
                logger.debug(
                    "Period {} round {}: {} → {}",
                    index, rotor.rounds_started, cursor, round_end,
                )
                cursor = self._days.next_working_day(round_end)

        result = ScheduleResult(entries=tuple(entries), unscheduled=tuple(ordered[pointer:]))
        if not result.is_complete:
            logger.warning(
                "Periods exhausted with {} task(s) unscheduled (first: seq {})",
                result.unscheduled_count, result.unscheduled[0].sequence_number,
            )
        logger.info("Scheduled {} of {} tasks", len(result), len(ordered))
        return result


def compute_schedule(
    tasks: Iterable[Task],
    periods: Union[Period, Sequence[Period]],
    calendar: CalendarPolicy,
) -> ScheduleResult:
    return PeriodScheduler(calendar).run(tasks, periods)
