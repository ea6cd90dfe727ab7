"""Tests for fasting streak statistics."""

from datetime import UTC, date, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from tracker_metrics.domain.fasting import format_duration
from tracker_metrics.services.streaks import StreakStatistics
from tests.conftest import NOW, make_session


def _day(day: int, hour: int = 8) -> datetime:
    return datetime(2026, 10, day, hour, 0, tzinfo=UTC)


def test_empty_history() -> None:
    stats = StreakStatistics([], now=NOW)

    assert stats.calculate_current_streak() == 0
    assert stats.calculate_longest_streak() == 0
    assert stats.calculate_longest_fast() == 0.0


def test_forced_end_after_completions() -> None:
    sessions = [
        make_session(_day(1), completed=True),
        make_session(_day(2), completed=True),
        make_session(_day(3), force_ended=True),
    ]
    stats = StreakStatistics(sessions, now=NOW)

    assert stats.calculate_longest_streak() == 2
    assert stats.calculate_current_streak() == 0


def test_forced_end_zeroes_current_streak_even_if_marked_completed() -> None:
    sessions = [
        make_session(_day(1), completed=True),
        make_session(_day(2), completed=True, force_ended=True),
    ]

    assert StreakStatistics(sessions, now=NOW).calculate_current_streak() == 0


def test_current_streak_counts_since_last_forced_end() -> None:
    sessions = [
        make_session(_day(3), completed=True),
        make_session(_day(1), force_ended=True),
        make_session(_day(2), completed=True),
    ]

    assert StreakStatistics(sessions, now=NOW).calculate_current_streak() == 2


def test_in_progress_sessions_are_skipped() -> None:
    sessions = [
        make_session(_day(1), completed=True),
        make_session(_day(2), completed=True),
        make_session(_day(3), fasting_hours=4.0),
    ]
    stats = StreakStatistics(sessions, now=NOW)

    assert stats.calculate_current_streak() == 2
    assert stats.calculate_longest_streak() == 2


def test_longest_streak_keeps_best_run() -> None:
    sessions = [
        make_session(_day(1), completed=True),
        make_session(_day(2), completed=True),
        make_session(_day(3), completed=True),
        make_session(_day(4), force_ended=True),
        make_session(_day(5), completed=True),
        make_session(_day(6), completed=True),
    ]
    stats = StreakStatistics(sessions, now=NOW)

    assert stats.calculate_longest_streak() == 3
    assert stats.calculate_current_streak() == 2


def test_longest_streak_ending_at_most_recent_session() -> None:
    sessions = [
        make_session(_day(1), force_ended=True),
        make_session(_day(2), completed=True),
        make_session(_day(3), completed=True),
    ]

    assert StreakStatistics(sessions, now=NOW).calculate_longest_streak() == 2


def test_longest_fast_ignores_forced_sessions() -> None:
    sessions = [
        make_session(_day(1), completed=True, fasting_hours=16.0),
        make_session(_day(2), force_ended=True, fasting_hours=20.0),
        make_session(_day(3), completed=True, fasting_hours=18.5),
    ]

    assert StreakStatistics(sessions, now=NOW).calculate_longest_fast() == 18.5


def test_monthly_stats() -> None:
    sessions = [
        make_session(_day(1), completed=True, fasting_hours=16.0),
        make_session(_day(5), force_ended=True, fasting_hours=8.5),
        make_session(_day(10), fasting_hours=3.0),
        make_session(
            datetime(2026, 9, 30, 8, tzinfo=UTC), completed=True, fasting_hours=18.0
        ),
    ]

    monthly = StreakStatistics(sessions, now=NOW).calculate_monthly_stats()

    assert monthly.session_count == 2
    assert monthly.total_hours == pytest.approx(24.5)
    assert monthly.average_hours == pytest.approx(12.25)
    assert monthly.success_rate == 0.5
    assert monthly.total_formatted == "24h 30m"
    assert monthly.average_formatted == "12h 15m"


def test_monthly_stats_include_last_day_of_month() -> None:
    now = datetime(2026, 10, 31, 23, 0, tzinfo=UTC)
    sessions = [make_session(_day(31, hour=20), completed=True, fasting_hours=2.0)]

    monthly = StreakStatistics(sessions, now=now).calculate_monthly_stats()

    assert monthly.session_count == 1
    assert monthly.success_rate == 1.0


def test_monthly_stats_without_ended_sessions() -> None:
    sessions = [make_session(_day(18), fasting_hours=5.0)]

    monthly = StreakStatistics(sessions, now=NOW).calculate_monthly_stats()

    assert monthly.session_count == 0
    assert monthly.success_rate == 0.0
    assert monthly.total_formatted == "0m"
    assert monthly.average_formatted == "0m"


@pytest.mark.parametrize(
    ("hours", "expected"),
    [
        (1.5, "1h 30m"),
        (0.5, "30m"),
        (2.0, "2h"),
        (0.0, "0m"),
        (16.25, "16h 15m"),
    ],
)
def test_format_duration(hours: float, expected: str) -> None:
    assert format_duration(hours) == expected


def test_sub_minute_sessions_never_change_results() -> None:
    sessions = [
        make_session(_day(1), completed=True),
        make_session(_day(2), completed=True, fasting_hours=20.0),
    ]
    noise = make_session(
        _day(3),
        force_ended=True,
        fasting_hours=0.01,
        end=_day(3) + timedelta(seconds=30),
    )
    clean = StreakStatistics(sessions, now=NOW)
    noisy = StreakStatistics([*sessions, noise], now=NOW)

    assert noisy.calculate_current_streak() == clean.calculate_current_streak() == 2
    assert noisy.calculate_longest_streak() == clean.calculate_longest_streak()
    assert noisy.calculate_longest_fast() == clean.calculate_longest_fast()
    assert noisy.calculate_monthly_stats() == clean.calculate_monthly_stats()
    assert noisy.get_last_seven_days_data() == clean.get_last_seven_days_data()


def test_last_seven_days_layout() -> None:
    days = StreakStatistics([], now=NOW).get_last_seven_days_data()

    assert len(days) == 7
    assert days[0].day == date(2026, 10, 13)
    assert days[-1].day == date(2026, 10, 19)
    assert all(day.duration_hours == 0.0 for day in days)
    assert not any(day.completed for day in days)


def test_last_seven_days_durations() -> None:
    sessions = [
        make_session(
            _day(13),
            completed=True,
            fasting_hours=16.0,
            end=_day(13, hour=20),
        ),
        make_session(_day(15, hour=6), force_ended=True, fasting_hours=3.0),
        make_session(_day(12), completed=True, end=_day(12, hour=20)),
    ]
    live = make_session(
        _day(19, hour=2), fasting_hours=0.0, end=_day(19, hour=18)
    )

    days = StreakStatistics([*sessions, live], now=NOW).get_last_seven_days_data(live)

    durations = [day.duration_hours for day in days]
    assert durations == pytest.approx([12.0, 0.0, 3.0, 0.0, 0.0, 0.0, 10.0])
    assert [day.completed for day in days] == [
        True,
        False,
        False,
        False,
        False,
        False,
        False,
    ]


def test_live_session_in_eating_window_counts_fasting_phase_only() -> None:
    live = make_session(
        datetime(2026, 10, 18, 20, tzinfo=UTC),
        fasting_hours=0.0,
        end=_day(19, hour=8),
        eating_window_end=_day(19, hour=16),
    )

    days = StreakStatistics([live], now=NOW).get_last_seven_days_data(live)

    assert days[-2].duration_hours == pytest.approx(12.0)
    assert days[-1].duration_hours == 0.0


def test_last_seven_days_follow_timezone() -> None:
    late_start = datetime(2026, 10, 18, 23, 30, tzinfo=UTC)
    session = make_session(
        late_start,
        completed=True,
        end=late_start + timedelta(hours=16),
    )

    in_utc = StreakStatistics([session], now=NOW).get_last_seven_days_data()
    in_berlin = StreakStatistics(
        [session], now=NOW, tz=ZoneInfo("Europe/Berlin")
    ).get_last_seven_days_data()

    assert in_utc[-2].duration_hours == pytest.approx(16.0)
    assert in_utc[-2].completed
    assert in_berlin[-1].duration_hours == pytest.approx(16.0)
    assert in_berlin[-1].completed
    assert in_berlin[-2].duration_hours == 0.0
