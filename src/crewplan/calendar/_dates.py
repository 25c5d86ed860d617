from __future__ import annotations

from datetime import date, datetime
from typing import Any, Union

import numpy as np

from ._exceptions import CalendarError

DateLike = Union[date, datetime, str, "np.datetime64"]
DateArrayLike = Union[DateLike, "np.ndarray"]

# ISO first; the site holiday sheets use day-first dates.
_FORMATS: tuple[str, ...] = ("%Y-%m-%d", "%d/%m/%Y")


def parse_date(value: Any) -> date:
    """Normalise a scalar date-like value to ``datetime.date``.

    Time-of-day is discarded, so two values on the same calendar day compare
    equal regardless of their clock time.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, np.datetime64):
        if np.isnat(value):
            raise CalendarError("NaT is not a valid date.")
        return value.astype("datetime64[D]").item()
    if isinstance(value, str):
        text = value.strip()
        for fmt in _FORMATS:
            try:
                return datetime.strptime(text, fmt).date()
            except ValueError:
                continue
        raise CalendarError(
            f"Unrecognised date {value!r}; expected yyyy-mm-dd or dd/mm/yyyy."
        )
    raise CalendarError(f"Cannot interpret {value!r} as a date.")


def as_datetime64(value: DateArrayLike) -> np.ndarray:
    """Scalars become 0-d ``datetime64[D]``, sequences a 1-d+ array."""
    if np.ndim(value) == 0:
        return np.asarray(np.datetime64(parse_date(value), "D"))
    return np.asarray(value, dtype="datetime64[D]")


def to_date(value: np.datetime64) -> date:
    return parse_date(np.datetime64(value, "D"))
