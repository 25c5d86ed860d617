from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, Iterable, Iterator, List, Optional, Tuple

from crewplan.calendar import parse_date


@dataclass(frozen=True)
class Task:
    """A serial awaiting a slot; ``sequence_number`` 0 or None leaves it unscheduled."""

    sequence_number: Optional[int]
    identity: str
    label: str = ""

    @property
    def is_sequenced(self) -> bool:
        return self.sequence_number is not None and self.sequence_number > 0


@dataclass(frozen=True)
class Period:
    """
    A chronological slice of the campaign.  ``end_date``, when set, is the
    last date on which a new round may start in this period.
    """

    start_date: date
    crew_count: int = 1
    task_duration_days: int = 1
    index: Optional[int] = None
    end_date: Optional[date] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "start_date", parse_date(self.start_date))
        if self.end_date is not None:
            object.__setattr__(self, "end_date", parse_date(self.end_date))


@dataclass(frozen=True)
class ScheduleEntry:
    sequence_number: int
    task_identity: str
    crew_label: str
    start_date: date
    end_date: date
    task_label: str = ""
    period_index: int = 0


@dataclass(frozen=True)
class ScheduleResult:
    """
    Output of a scheduling run.

    ``entries`` are ordered by ascending sequence number.  ``unscheduled``
    holds the tasks left over when the periods ran out first; a non-empty
    tuple marks the schedule as incomplete, which is not an error.
    """

    entries: Tuple[ScheduleEntry, ...] = ()
    unscheduled: Tuple[Task, ...] = field(default=())

    @property
    def unscheduled_count(self) -> int:
        return len(self.unscheduled)

    @property
    def is_complete(self) -> bool:
        return not self.unscheduled

    def to_records(self, date_format: Optional[str] = None) -> List[dict[str, Any]]:
        """Plain dicts for render/export collaborators; dates formatted when ``date_format`` is given."""

        def _fmt(d: date) -> Any:
            return d.strftime(date_format) if date_format else d

        return [
            {
                "sequence_number": e.sequence_number,
                "task_identity": e.task_identity,
                "task_label": e.task_label,
                "crew_label": e.crew_label,
                "start_date": _fmt(e.start_date),
                "end_date": _fmt(e.end_date),
                "period_index": e.period_index,
            }
            for e in self.entries
        ]

    def __iter__(self) -> Iterator[ScheduleEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


def auto_sequence(tasks: Iterable[Task], start: int = 1) -> List[Task]:
    """Number tasks consecutively in the order given, replacing any existing sequence."""
    if start < 1:
        raise ValueError(f"Sequence numbers start at 1 or above; got {start}.")
    return [
        replace(task, sequence_number=start + offset)
        for offset, task in enumerate(tasks)
    ]
