from __future__ import annotations

from typing import Union

import numpy as np

from ._dates import DateArrayLike, as_datetime64

_BUSINESS_WEEK = "1111100"


def compute_duration(
    start: DateArrayLike,
    end: DateArrayLike,
    include_weekends: bool = False,
) -> Union[int, np.ndarray]:
    """
    Inclusive length of ``[start, end]`` in days.

    With ``include_weekends`` every calendar day counts.  Otherwise the
    result is the number of Monday–Friday days from ``start`` up to (not
    including) ``end``, plus one for the inclusive end.

    Holidays are deliberately not consulted here; only the scheduler's
    WorkingDayCalculator honours them.
    """
    scalar = np.ndim(start) == 0 and np.ndim(end) == 0
    s = as_datetime64(start)
    e = as_datetime64(end)
    if include_weekends:
        days = (e - s).astype(np.int64) + 1
    else:
        days = np.busday_count(s, e, weekmask=_BUSINESS_WEEK) + 1
    return int(days) if scalar else np.asarray(days, dtype=np.int64)
