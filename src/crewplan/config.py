"""Load scheduling configuration from YAML or a mapping.

Example file::

    calendar:
      work_saturdays: false
      work_sundays: false
      work_holidays: false
      holidays:
        - {date: 01/05/2026, label: Dia do Trabalho}
        - 2026-06-12
    periods:
      - {start_date: 2026-03-23, crew_count: 2, task_duration_days: 2}
      - {start_date: 2026-06-01, crew_count: 3, task_duration_days: 1, end_date: 2026-06-30}
"""

from __future__ import annotations

import datetime as dt
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml
from loguru import logger
from pydantic import BaseModel, Field, ValidationError, field_validator

from crewplan.calendar import CalendarPolicy, HolidayRegistry, parse_date
from crewplan.schedule import MAX_PERIODS, Period


class ConfigError(ValueError):
    """Raised when a configuration source is malformed."""


def _coerce_date(value: Any) -> Any:
    # yaml.safe_load already yields dates for ISO values; dd/mm/yyyy stays a string.
    if isinstance(value, str):
        return parse_date(value)
    return value


class HolidaySettings(BaseModel):
    date: dt.date
    label: str = ""

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, value: Any) -> Any:
        return _coerce_date(value)


class CalendarSettings(BaseModel):
    work_saturdays: bool = False
    work_sundays: bool = False
    work_holidays: bool = False
    holidays: list[HolidaySettings] = Field(default_factory=list)

    @field_validator("holidays", mode="before")
    @classmethod
    def _bare_dates(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return value
        return [
            item if isinstance(item, (Mapping, HolidaySettings)) else {"date": item}
            for item in value
        ]


class PeriodSettings(BaseModel):
    start_date: dt.date
    crew_count: int = Field(default=1, ge=1)
    task_duration_days: int = Field(default=1, ge=1)
    end_date: Optional[dt.date] = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _parse_dates(cls, value: Any) -> Any:
        return _coerce_date(value)


class ScheduleConfig(BaseModel):
    calendar: CalendarSettings = Field(default_factory=CalendarSettings)
    periods: list[PeriodSettings] = Field(min_length=1, max_length=MAX_PERIODS)

    def build_policy(self) -> CalendarPolicy:
        registry = HolidayRegistry()
        for holiday in self.calendar.holidays:
            registry.add(holiday.date, holiday.label)
        return CalendarPolicy(
            work_saturdays=self.calendar.work_saturdays,
            work_sundays=self.calendar.work_sundays,
            work_holidays=self.calendar.work_holidays,
            holidays=registry,
        )

    def build_periods(self) -> list[Period]:
        return [
            Period(
                start_date=p.start_date,
                crew_count=p.crew_count,
                task_duration_days=p.task_duration_days,
                index=i,
                end_date=p.end_date,
            )
            for i, p in enumerate(self.periods)
        ]


def load_config(source: Union[str, Path, Mapping[str, Any]]) -> ScheduleConfig:
    """Build a ScheduleConfig from a YAML file path or an already-parsed mapping.

    Raises:
        FileNotFoundError: If ``source`` is a path that does not exist
        ConfigError: If the content is not a mapping or fails validation
    """
    if isinstance(source, Mapping):
        data: Any = source
        origin = "mapping"
    else:
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"Schedule config not found: {path}")
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
        origin = str(path)

    if not isinstance(data, Mapping):
        raise ConfigError(f"Invalid config format in {origin}: expected a mapping")

    try:
        config = ScheduleConfig.model_validate(dict(data))
    except ValidationError as exc:
        raise ConfigError(f"Invalid schedule config in {origin}: {exc}") from exc

    logger.info(
        "Loaded schedule config from {}: {} period(s), {} holiday(s)",
        origin, len(config.periods), len(config.calendar.holidays),
    )
    return config
