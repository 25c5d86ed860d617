from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Union

import numpy as np

from ._dates import DateArrayLike, DateLike, as_datetime64, to_date
from ._exceptions import CalendarError, CalendarExhausted
from .holidays import HolidayRegistry, HolidaySource

CountLike = Union[int, "np.ndarray"]

_MON_TO_FRI = "11111"


def compile_busdaycalendar(
    weekmask: str, holidays: Iterable[DateLike] | np.ndarray = ()
) -> np.busdaycalendar:
    """Wrap ``np.busdaycalendar``.

    An all-off weekmask raises CalendarExhausted; any other mask NumPy
    rejects raises CalendarError.
    """
    days = np.asarray(holidays, dtype="datetime64[D]")
    if "1" not in weekmask:
        raise CalendarExhausted(
            f"Weekmask {weekmask!r} leaves no working day; advancement can never finish."
        )
    try:
        return np.busdaycalendar(weekmask=weekmask, holidays=days)
    except ValueError as exc:
        raise CalendarError(f"Invalid weekmask {weekmask!r}.") from exc


class CalendarPolicy:
    """
    Decides whether a date is a working day.

    Monday to Friday always work.  Saturdays, Sundays and registered
    holidays are excluded unless the matching ``work_*`` flag is set.  The
    policy compiles itself to a NumPy ``busdaycalendar`` and recompiles
    whenever a flag or the holiday registry changes.
    """

    def __init__(
        self,
        work_saturdays: bool = False,
        work_sundays: bool = False,
        work_holidays: bool = False,
        holidays: Optional[Union[HolidayRegistry, HolidaySource]] = None,
    ) -> None:
        self.work_saturdays = bool(work_saturdays)
        self.work_sundays = bool(work_sundays)
        self.work_holidays = bool(work_holidays)
        if isinstance(holidays, HolidayRegistry):
            self.holidays = holidays
        else:
            self.holidays = HolidayRegistry(holidays)
        self._compiled: Optional[np.busdaycalendar] = None
        self._compiled_key: Optional[tuple] = None

    # ── compiled form ────────────────────────────────────────────────────

    @property
    def weekmask(self) -> str:
        return (
            _MON_TO_FRI
            + ("1" if self.work_saturdays else "0")
            + ("1" if self.work_sundays else "0")
        )

    @property
    def busdaycalendar(self) -> np.busdaycalendar:
        key = (self.weekmask, self.work_holidays, id(self.holidays), self.holidays.version)
        if self._compiled is None or key != self._compiled_key:
            excluded = (
                np.empty(0, dtype="datetime64[D]")
                if self.work_holidays
                else self.holidays.dates
            )
            self._compiled = compile_busdaycalendar(self.weekmask, excluded)
            self._compiled_key = key
        return self._compiled

    # ── queries ──────────────────────────────────────────────────────────

    def is_working_day(self, day: DateArrayLike) -> Union[bool, np.ndarray]:
        scalar = np.ndim(day) == 0
        result = np.is_busday(as_datetime64(day), busdaycal=self.busdaycalendar)
        return bool(result) if scalar else result

    def __repr__(self) -> str:
        return (
            f"CalendarPolicy(work_saturdays={self.work_saturdays}, "
            f"work_sundays={self.work_sundays}, "
            f"work_holidays={self.work_holidays}, "
            f"holidays={len(self.holidays)})"
        )


class WorkingDayCalculator:
    """
    Advances dates by whole working days under a CalendarPolicy.

    NumPy arrays are accepted everywhere a scalar is; scalar calls return a
    ``datetime.date``, array calls a ``datetime64[D]`` array.
    """

    def __init__(self, policy: CalendarPolicy) -> None:
        self._policy = policy

    @property
    def policy(self) -> CalendarPolicy:
        return self._policy

    def advance_working_days(
        self, start: DateArrayLike, count: CountLike
    ) -> Union[date, np.ndarray]:
        """Date on which the ``count``-th working day after ``start`` is reached.

        Counting begins the day after ``start``.  ``count == 0`` returns
        ``start`` unchanged, even when ``start`` itself is not a working day.
        """
        scalar = np.ndim(start) == 0 and np.ndim(count) == 0
        s = np.atleast_1d(as_datetime64(start))
        c = np.atleast_1d(np.asarray(count, dtype=np.int64))
        s, c = np.broadcast_arrays(s, c)
        if c.size and int(c.min()) < 0:
            raise CalendarError(f"Working-day count must be >= 0; got {int(c.min())}.")

        # Rolling a non-working start back to the previous working day leaves
        # the set of working days strictly after it unchanged.
        moved = np.busday_offset(s, c, roll="backward", busdaycal=self._policy.busdaycalendar)
        result = np.where(c == 0, s, moved)
        return to_date(result.flat[0]) if scalar else result

    def next_working_day(self, day: DateArrayLike) -> Union[date, np.ndarray]:
        """Smallest working date strictly after ``day``."""
        return self.advance_working_days(day, 1)

    def __repr__(self) -> str:
        return f"WorkingDayCalculator(policy={self._policy!r})"
