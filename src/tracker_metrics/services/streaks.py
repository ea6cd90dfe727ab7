"""Streak and history statistics for fasting sessions."""

import logging
from datetime import UTC, datetime, timedelta, tzinfo

from tracker_metrics.domain.fasting import DayActivity, FastingSession, MonthlyStats

MIN_SESSION_HOURS = 1 / 60
HISTORY_DAYS = 7

_logger = logging.getLogger(__name__)


class StreakStatistics:
    """Calculator over a fixed collection of fasting sessions.

    Sessions shorter than one minute are treated as accidental starts and
    dropped before any calculation. ``now`` and ``tz`` define "today" and
    "this month"; both default to the current moment in UTC.
    """

    def __init__(
        self,
        sessions: list[FastingSession],
        now: datetime | None = None,
        tz: tzinfo = UTC,
    ) -> None:
        self._sessions = [
            session
            for session in sessions
            if session.fasting_hours >= MIN_SESSION_HOURS
        ]
        self._tz = tz
        self._now = now or datetime.now(tz=tz)

    def calculate_current_streak(self) -> int:
        """Count natural completions since the most recent forced end."""
        ordered = sorted(
            self._sessions, key=lambda session: session.start_time, reverse=True
        )
        _logger.debug("Current streak: analysing %s sessions", len(ordered))
        if not ordered:
            return 0

        most_recent = ordered[0]
        if most_recent.force_ended:
            _logger.debug("Current streak: most recent session was force-ended")
            return 0

        streak = 0
        for session in ordered:
            if session.force_ended:
                _logger.debug(
                    "Current streak: stopped at forced end, streak=%s", streak
                )
                break
            if session.completed:
                streak += 1
        _logger.debug("Current streak: final=%s", streak)
        return streak

    def calculate_longest_streak(self) -> int:
        """Return the longest run of natural completions in history."""
        ordered = sorted(self._sessions, key=lambda session: session.start_time)
        longest = 0
        running = 0
        for session in ordered:
            if session.force_ended:
                longest = max(longest, running)
                running = 0
            elif session.completed:
                running += 1
                longest = max(longest, running)
        longest = max(longest, running)
        _logger.debug("Longest streak: final=%s", longest)
        return longest

    def calculate_longest_fast(self) -> float:
        """Return the longest naturally completed fast in hours."""
        return max(
            (
                session.fasting_hours
                for session in self._sessions
                if session.completed_naturally
            ),
            default=0.0,
        )

    def calculate_monthly_stats(self) -> MonthlyStats:
        """Totals over ended sessions started in the current calendar month."""
        current = self._now.astimezone(self._tz)
        month_sessions = [
            session
            for session in self._sessions
            if session.has_ended
            and _same_month(self._local(session.start_time), current)
        ]
        count = len(month_sessions)
        total_hours = sum((session.fasting_hours for session in month_sessions), 0.0)
        average_hours = total_hours / count if count else 0.0
        successes = sum(1 for session in month_sessions if session.completed_naturally)
        success_rate = successes / count if count else 0.0
        return MonthlyStats(
            total_hours=total_hours,
            average_hours=average_hours,
            success_rate=success_rate,
            session_count=count,
        )

    def get_last_seven_days_data(
        self, current_session: FastingSession | None = None
    ) -> list[DayActivity]:
        """Return daily fasting time for the last seven days, oldest first.

        A live ``current_session`` contributes the fasting time elapsed so far
        on the day it started instead of its stored duration.
        """
        today = self._now.astimezone(self._tz).date()
        live_start = current_session.start_time if current_session else None
        ended = [
            session for session in self._sessions if session.start_time != live_start
        ]

        days = []
        for offset in range(HISTORY_DAYS - 1, -1, -1):
            day = today - timedelta(days=offset)
            day_sessions = [
                session
                for session in ended
                if self._local(session.start_time).date() == day
            ]
            duration = sum((_recorded_hours(session) for session in day_sessions), 0.0)
            completed = any(session.completed_naturally for session in day_sessions)
            if (
                current_session
                and self._local(current_session.start_time).date() == day
            ):
                duration += self._elapsed_fasting_hours(current_session)
                completed = completed or current_session.completed_naturally
            days.append(
                DayActivity(day=day, duration_hours=duration, completed=completed)
            )
        return days

    def _local(self, moment: datetime) -> datetime:
        return moment.astimezone(self._tz)

    def _elapsed_fasting_hours(self, session: FastingSession) -> float:
        fasting_until = self._now
        if session.end_time is not None and session.end_time < fasting_until:
            fasting_until = session.end_time
        elapsed = (fasting_until - session.start_time).total_seconds() / 3600
        return max(elapsed, 0.0)


def _recorded_hours(session: FastingSession) -> float:
    if session.end_time is not None:
        return (session.end_time - session.start_time).total_seconds() / 3600
    return session.fasting_hours


def _same_month(moment: datetime, reference: datetime) -> bool:
    return moment.year == reference.year and moment.month == reference.month
