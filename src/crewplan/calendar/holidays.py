from __future__ import annotations

from datetime import date
from typing import Iterable, Iterator, Mapping, Optional, Tuple, Union

import numpy as np

from ._dates import DateLike, parse_date
from ._exceptions import CalendarError

HolidaySource = Union[
    Mapping[DateLike, str],
    Iterable[Union[DateLike, Tuple[DateLike, str]]],
]


class HolidayRegistry:
    """
    Mutable set of exception dates, each carrying a descriptive label.

    Dates are keyed by day/month/year only.  Labels are informational and
    never influence working-day decisions.  Every mutation bumps ``version``
    so that compiled calendars can tell when they are stale.
    """

    def __init__(self, holidays: Optional[HolidaySource] = None) -> None:
        self._labels: dict[date, str] = {}
        self._version: int = 0
        if holidays is None:
            return
        if isinstance(holidays, Mapping):
            for day, label in holidays.items():
                self.add(day, label)
            return
        for item in holidays:
            if isinstance(item, tuple):
                self.add(*item)
            else:
                self.add(item)

    @classmethod
    def from_strings(cls, values: Iterable[str], label: str = "") -> "HolidayRegistry":
        """Build from ``dd/mm/yyyy`` (or ISO) strings, as found in site holiday sheets."""
        registry = cls()
        for value in values:
            registry.add(value, label)
        return registry

    # ── mutation ─────────────────────────────────────────────────────────

    def add(self, day: DateLike, label: str = "") -> None:
        self._labels[parse_date(day)] = label
        self._version += 1

    def remove(self, day: DateLike) -> None:
        key = parse_date(day)
        if key in self._labels:
            del self._labels[key]
            self._version += 1

    def clear(self) -> None:
        if self._labels:
            self._labels.clear()
            self._version += 1

    # ── lookup ───────────────────────────────────────────────────────────

    def label_for(self, day: DateLike) -> Optional[str]:
        return self._labels.get(parse_date(day))

    def items(self) -> list[tuple[date, str]]:
        return sorted(self._labels.items())

    @property
    def dates(self) -> np.ndarray:
        """Sorted ``datetime64[D]`` array, ready for ``np.busdaycalendar``."""
        return np.array(sorted(self._labels), dtype="datetime64[D]")

    @property
    def version(self) -> int:
        return self._version

    def __contains__(self, day: object) -> bool:
        try:
            return parse_date(day) in self._labels
        except CalendarError:
            return False

    def __iter__(self) -> Iterator[date]:
        return iter(sorted(self._labels))

    def __len__(self) -> int:
        return len(self._labels)

    def __repr__(self) -> str:
        return f"HolidayRegistry(holidays={len(self)}, version={self._version})"
