"""
tests/schedule/test_scheduler.py

Covers:
  - Single-period rounds and crew rotation
  - Weekend / holiday handling of round dates
  - Multi-period cutover
  - Bounded periods and incomplete schedules
  - Task selection (ordering, unsequenced tasks, duplicates)
  - Period validation and the error taxonomy
  - Invariants (coverage, ordering, per-period rotation)
"""

from datetime import date

import pytest
from loguru import logger

from crewplan.calendar import CalendarPolicy
from crewplan.schedule import (
    DuplicateSequenceNumber,
    EmptyTaskSet,
    InvalidPeriodConfiguration,
    Period,
    PeriodScheduler,
    ScheduleError,
    Task,
    compute_schedule,
)

MON = date(2026, 3, 23)


def d(day: int, month: int = 3) -> date:
    return date(2026, month, day)


def make_tasks(n: int, start: int = 1) -> list:
    return [Task(seq, f"WTG-{seq:02d}", f"Pos {seq:03d}") for seq in range(start, start + n)]


def spans(result):
    return [(e.sequence_number, e.crew_label, e.start_date, e.end_date) for e in result]


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture
def work_week():
    return CalendarPolicy()


@pytest.fixture
def with_holidays():
    return CalendarPolicy(holidays={d(21, 4): "Tiradentes", d(1, 5): "Dia do Trabalho"})


@pytest.fixture
def scheduler(work_week):
    return PeriodScheduler(work_week)


# ── Single period ─────────────────────────────────────────────────────────────

class TestSinglePeriod:

    def test_two_crews_two_day_rounds(self, work_week):
        period = Period(MON, crew_count=2, task_duration_days=2)
        result = compute_schedule(make_tasks(4), [period], work_week)
        assert spans(result) == [
            (1, "T1", d(23), d(24)),
            (2, "T2", d(23), d(24)),
            (3, "T1", d(25), d(26)),
            (4, "T2", d(25), d(26)),
        ]
        assert result.is_complete

    def test_three_crews_seven_tasks(self, work_week):
        period = Period(MON, crew_count=3, task_duration_days=1)
        result = compute_schedule(make_tasks(7), period, work_week)
        assert [e.crew_label for e in result] == ["T1", "T2", "T3", "T1", "T2", "T3", "T1"]
        assert [e.start_date for e in result] == [d(23)] * 3 + [d(24)] * 3 + [d(25)]

    def test_single_crew_single_day(self, work_week):
        result = compute_schedule(make_tasks(6), Period(MON), work_week)
        assert [e.start_date for e in result] == [d(23), d(24), d(25), d(26), d(27), d(30)]
        assert all(e.start_date == e.end_date for e in result)

    def test_round_spans_weekend(self, work_week):
        period = Period(d(26), crew_count=2, task_duration_days=3)
        result = compute_schedule(make_tasks(3), period, work_week)
        assert spans(result) == [
            (1, "T1", d(26), d(30)),
            (2, "T2", d(26), d(30)),
            (3, "T1", d(31), date(2026, 4, 2)),
        ]

    def test_holiday_skipped(self, with_holidays):
        result = compute_schedule(make_tasks(3), Period(d(20, 4)), with_holidays)
        assert [e.start_date for e in result] == [d(20, 4), d(22, 4), d(23, 4)]

    def test_holiday_inside_round(self, with_holidays):
        # Mon 20 Apr + 2 working days, skipping Tue 21 → Thu 23
        result = compute_schedule(
            make_tasks(2), Period(d(20, 4), task_duration_days=3), with_holidays
        )
        assert spans(result) == [
            (1, "T1", d(20, 4), d(23, 4)),
            (2, "T1", d(24, 4), d(28, 4)),
        ]

    def test_worked_holidays(self):
        policy = CalendarPolicy(work_holidays=True, holidays=[d(21, 4)])
        result = compute_schedule(make_tasks(3), Period(d(20, 4)), policy)
        assert [e.start_date for e in result] == [d(20, 4), d(21, 4), d(22, 4)]

    def test_worked_weekends(self):
        policy = CalendarPolicy(work_saturdays=True, work_sundays=True)
        result = compute_schedule(make_tasks(4), Period(d(27)), policy)
        assert [e.start_date for e in result] == [d(27), d(28), d(29), d(30)]

    def test_period_starting_on_weekend(self, work_week):
        # The first round keeps the configured start; later rounds follow the calendar.
        result = compute_schedule(make_tasks(2), Period(d(28)), work_week)
        assert [e.start_date for e in result] == [d(28), d(30)]

    def test_entries_carry_task_fields(self, work_week):
        result = compute_schedule([Task(1, "241269", "Monte Verde I Pos 001")], Period(MON), work_week)
        entry = result.entries[0]
        assert entry.task_identity == "241269"
        assert entry.task_label == "Monte Verde I Pos 001"
        assert entry.period_index == 0

    def test_scheduler_calendar_property(self, scheduler, work_week):
        assert scheduler.calendar is work_week


# ── Multiple periods ──────────────────────────────────────────────────────────

class TestMultiPeriod:

    def test_cutover_at_natural_round_boundary(self, work_week):
        periods = [
            Period(MON, crew_count=2, task_duration_days=1),
            Period(d(25), crew_count=3, task_duration_days=1),
            Period(d(30), crew_count=1, task_duration_days=2),
        ]
        result = compute_schedule(make_tasks(16), periods, work_week)
        assert spans(result) == [
            (1, "T1", d(23), d(23)),
            (2, "T2", d(23), d(23)),
            (3, "T1", d(24), d(24)),
            (4, "T2", d(24), d(24)),
            (5, "T1", d(25), d(25)),
            (6, "T2", d(25), d(25)),
            (7, "T3", d(25), d(25)),
            (8, "T1", d(26), d(26)),
            (9, "T2", d(26), d(26)),
            (10, "T3", d(26), d(26)),
            (11, "T1", d(27), d(27)),
            (12, "T2", d(27), d(27)),
            (13, "T3", d(27), d(27)),
            (14, "T1", d(30), d(31)),
            (15, "T1", d(1, 4), d(2, 4)),
            (16, "T1", d(3, 4), d(6, 4)),
        ]
        assert [e.period_index for e in result] == [0] * 4 + [1] * 9 + [2] * 3

    def test_next_period_starts_at_configured_date(self, work_week):
        # Period 1's first round runs Mon–Wed; period 2 starts Tue, mid-round.
        periods = [
            Period(MON, crew_count=2, task_duration_days=3),
            Period(d(24), crew_count=1, task_duration_days=1),
        ]
        result = compute_schedule(make_tasks(4), periods, work_week)
        assert spans(result) == [
            (1, "T1", d(23), d(25)),
            (2, "T2", d(23), d(25)),
            (3, "T1", d(24), d(24)),
            (4, "T1", d(25), d(25)),
        ]

    def test_period_cut_short_with_rounds_left(self, work_week):
        periods = [
            Period(MON, crew_count=1, task_duration_days=1),
            Period(d(25), crew_count=1, task_duration_days=5),
        ]
        result = compute_schedule(make_tasks(4), periods, work_week)
        assert [(e.period_index, e.start_date) for e in result] == [
            (0, d(23)),
            (0, d(24)),
            (1, d(25)),
            (1, d(1, 4)),
        ]

    def test_rotation_restarts_each_period(self, work_week):
        periods = [
            Period(MON, crew_count=3, task_duration_days=1),
            Period(d(24), crew_count=3, task_duration_days=1),
        ]
        result = compute_schedule(make_tasks(5), periods, work_week)
        # Period 0 consumes one partial round; period 1 starts again at T1.
        assert [e.crew_label for e in result] == ["T1", "T2", "T3", "T1", "T2"]
        assert [e.period_index for e in result] == [0, 0, 0, 1, 1]

    def test_unused_later_periods(self, work_week):
        periods = [Period(MON, crew_count=4), Period(d(1, 6))]
        result = compute_schedule(make_tasks(3), periods, work_week)
        assert {e.period_index for e in result} == {0}
        assert result.is_complete


# ── Bounded periods ───────────────────────────────────────────────────────────

class TestBoundedPeriods:

    def test_incomplete_schedule(self, work_week):
        period = Period(MON, crew_count=1, task_duration_days=1, end_date=d(25))
        result = compute_schedule(make_tasks(5), period, work_week)
        assert [e.sequence_number for e in result] == [1, 2, 3]
        assert result.unscheduled_count == 2
        assert [t.sequence_number for t in result.unscheduled] == [4, 5]
        assert not result.is_complete

    def test_end_date_only_limits_round_starts(self, work_week):
        period = Period(MON, crew_count=1, task_duration_days=3, end_date=d(23))
        result = compute_schedule(make_tasks(2), period, work_week)
        assert spans(result) == [(1, "T1", d(23), d(25))]
        assert result.unscheduled_count == 1

    def test_bounded_period_hands_over(self, work_week):
        periods = [
            Period(MON, crew_count=1, end_date=d(24)),
            Period(d(30), crew_count=2),
        ]
        result = compute_schedule(make_tasks(4), periods, work_week)
        assert [(e.crew_label, e.start_date) for e in result] == [
            ("T1", d(23)),
            ("T1", d(24)),
            ("T1", d(30)),
            ("T2", d(30)),
        ]
        assert result.is_complete

    def test_incomplete_schedule_logs_warning(self, work_week):
        messages = []
        handler_id = logger.add(messages.append, level="WARNING")
        try:
            compute_schedule(make_tasks(3), Period(MON, end_date=MON), work_week)
        finally:
            logger.remove(handler_id)
        assert any("unscheduled" in str(m) for m in messages)


# ── Task selection ────────────────────────────────────────────────────────────

class TestTaskSelection:

    def test_sorted_by_sequence(self, work_week):
        tasks = [Task(3, "c"), Task(1, "a"), Task(2, "b")]
        result = compute_schedule(tasks, Period(MON), work_week)
        assert [(e.sequence_number, e.task_identity) for e in result] == [(1, "a"), (2, "b"), (3, "c")]

    def test_unsequenced_tasks_excluded(self, work_week):
        tasks = [Task(0, "zero"), Task(None, "none"), Task(-1, "neg"), Task(2, "b"), Task(5, "e")]
        result = compute_schedule(tasks, Period(MON), work_week)
        assert [e.task_identity for e in result] == ["b", "e"]
        assert result.is_complete

    def test_gaps_in_sequence_are_fine(self, work_week):
        tasks = [Task(10, "x"), Task(20, "y")]
        result = compute_schedule(tasks, Period(MON, crew_count=2), work_week)
        assert [e.crew_label for e in result] == ["T1", "T2"]

    def test_duplicate_sequence_raises(self, work_week):
        with pytest.raises(DuplicateSequenceNumber):
            compute_schedule([Task(1, "a"), Task(1, "b")], Period(MON), work_week)

    def test_no_tasks_raises(self, work_week):
        with pytest.raises(EmptyTaskSet):
            compute_schedule([], Period(MON), work_week)

    def test_only_unsequenced_tasks_raises(self, work_week):
        with pytest.raises(EmptyTaskSet):
            compute_schedule([Task(0, "a"), Task(None, "b")], Period(MON), work_week)

    def test_generator_input(self, work_week):
        result = compute_schedule((t for t in make_tasks(2)), Period(MON), work_week)
        assert len(result) == 2


# ── Validation ────────────────────────────────────────────────────────────────

class TestValidation:

    @pytest.mark.parametrize(
        "periods",
        [
            [],
            [Period(MON), Period(d(24)), Period(d(25)), Period(d(26))],
            [Period(MON, crew_count=0)],
            [Period(MON, task_duration_days=0)],
            [Period(MON), Period(MON)],
            [Period(d(25)), Period(MON)],
            [Period(MON, index=1)],
            [Period(MON, end_date=d(20))],
        ],
        ids=[
            "no-periods",
            "four-periods",
            "zero-crews",
            "zero-duration",
            "same-start",
            "decreasing-start",
            "wrong-index",
            "end-before-start",
        ],
    )
    def test_invalid_periods(self, work_week, periods):
        with pytest.raises(InvalidPeriodConfiguration):
            compute_schedule(make_tasks(2), periods, work_week)

    def test_periods_validated_before_tasks(self, work_week):
        with pytest.raises(InvalidPeriodConfiguration):
            compute_schedule([], [], work_week)

    def test_three_periods_allowed(self, work_week):
        periods = [Period(MON, index=0), Period(d(24), index=1), Period(d(25), index=2)]
        assert len(compute_schedule(make_tasks(3), periods, work_week)) == 3

    def test_error_taxonomy(self):
        assert issubclass(InvalidPeriodConfiguration, ScheduleError)
        assert issubclass(InvalidPeriodConfiguration, ValueError)
        assert issubclass(EmptyTaskSet, ScheduleError)
        assert not issubclass(EmptyTaskSet, RuntimeError)
        assert issubclass(DuplicateSequenceNumber, ScheduleError)

    def test_inputs_not_mutated(self, work_week):
        tasks = [Task(2, "b"), Task(1, "a")]
        periods = [Period(MON)]
        compute_schedule(tasks, periods, work_week)
        assert [t.identity for t in tasks] == ["b", "a"]
        assert periods == [Period(MON)]


# ── Invariants ────────────────────────────────────────────────────────────────

class TestInvariants:

    @pytest.fixture
    def big_run(self, with_holidays):
        periods = [
            Period(d(6, 4), crew_count=3, task_duration_days=2),
            Period(d(27, 4), crew_count=2, task_duration_days=3),
            Period(d(1, 6), crew_count=4, task_duration_days=1),
        ]
        tasks = make_tasks(60)
        return tasks, compute_schedule(list(reversed(tasks)), periods, with_holidays)

    def test_every_task_appears_once(self, big_run):
        tasks, result = big_run
        assert sorted(e.sequence_number for e in result) == [t.sequence_number for t in tasks]

    def test_entries_ascending(self, big_run):
        _, result = big_run
        seqs = [e.sequence_number for e in result]
        assert seqs == sorted(seqs)

    def test_rotation_per_period(self, big_run):
        _, result = big_run
        crews = {0: 3, 1: 2, 2: 4}
        for index, crew_count in crews.items():
            labels = [e.crew_label for e in result if e.period_index == index]
            assert labels == [f"T{1 + k % crew_count}" for k in range(len(labels))]

    def test_dates_are_working_days(self, big_run, with_holidays):
        _, result = big_run
        for e in result:
            assert with_holidays.is_working_day(e.start_date)
            assert with_holidays.is_working_day(e.end_date)
            assert e.end_date >= e.start_date

    def test_round_starts_never_reach_next_period(self, big_run):
        _, result = big_run
        assert max(e.start_date for e in result if e.period_index == 0) < d(27, 4)
        assert max(e.start_date for e in result if e.period_index == 1) < d(1, 6)
