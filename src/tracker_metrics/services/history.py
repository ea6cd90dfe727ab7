"""History service for fasting sessions."""

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from tracker_metrics.domain.fasting import FastingPhase, FastingSession, HistoryOverview
from tracker_metrics.services.streaks import StreakStatistics

_logger = logging.getLogger(__name__)


class FastingSessionRepository(Protocol):
    """Persistence interface for fasting sessions."""

    def list_sessions(self) -> list[FastingSession]:
        """Return all stored sessions."""

    def get_session(self, session_id: UUID) -> FastingSession | None:
        """Return a session by id, if present."""

    def complete_session(self, session_id: UUID) -> FastingSession:
        """Mark a session as naturally completed and return it."""


def resolve_phase(session: FastingSession, now: datetime) -> FastingPhase:
    """Return where ``session`` stands at ``now``.

    An unfinished session whose eating window has already closed counts as
    completed.
    """
    if session.force_ended:
        return FastingPhase.FORCE_ENDED
    if session.completed:
        return FastingPhase.COMPLETED
    window_end = session.eating_window_end_time
    if window_end is not None and now > window_end:
        return FastingPhase.COMPLETED
    if session.end_time is not None and now > session.end_time:
        return FastingPhase.EATING
    return FastingPhase.FASTING


def find_live_session(
    sessions: list[FastingSession], now: datetime
) -> FastingSession | None:
    """Return the most recent session if it is still fasting or eating."""
    if not sessions:
        return None
    most_recent = max(sessions, key=lambda session: session.start_time)
    if resolve_phase(most_recent, now) in {FastingPhase.FASTING, FastingPhase.EATING}:
        return most_recent
    return None


def recover_completion(session: FastingSession, now: datetime) -> FastingSession:
    """Return ``session`` marked completed if its eating window has lapsed."""
    if not session.completed and resolve_phase(session, now) == FastingPhase.COMPLETED:
        return replace(session, completed=True)
    return session


@dataclass
class FastingHistoryService:
    """Service computing the history screen in the user's timezone."""

    repository: FastingSessionRepository
    timezone_name: str = "UTC"
    debug: bool = False

    def get_overview(self, now: datetime | None = None) -> HistoryOverview:
        """Return streaks, monthly stats and the last seven days."""
        tz = ZoneInfo(self.timezone_name)
        moment = now or datetime.now(tz=tz)
        sessions = [
            recover_completion(session, moment)
            for session in self.repository.list_sessions()
        ]
        statistics = StreakStatistics(sessions, now=moment, tz=tz)
        live_session = find_live_session(sessions, moment)
        overview = HistoryOverview(
            current_streak=statistics.calculate_current_streak(),
            longest_streak=statistics.calculate_longest_streak(),
            longest_fast_hours=statistics.calculate_longest_fast(),
            monthly=statistics.calculate_monthly_stats(),
            last_seven_days=statistics.get_last_seven_days_data(live_session),
        )
        if self.debug:
            _logger.info(
                "Fasting history: sessions=%s current_streak=%s live=%s",
                len(sessions),
                overview.current_streak,
                live_session is not None,
            )
        return overview

    def get_phase(
        self, session_id: UUID, now: datetime | None = None
    ) -> FastingPhase | None:
        """Return the phase of a stored session, if present."""
        session = self.repository.get_session(session_id)
        if session is None:
            return None
        moment = now or datetime.now(tz=ZoneInfo(self.timezone_name))
        return resolve_phase(session, moment)

    def recover_lapsed_sessions(
        self, now: datetime | None = None
    ) -> list[FastingSession]:
        """Persist completion for sessions whose eating window has closed."""
        moment = now or datetime.now(tz=ZoneInfo(self.timezone_name))
        recovered = [
            self.repository.complete_session(session.id)
            for session in self.repository.list_sessions()
            if recover_completion(session, moment) is not session
        ]
        if self.debug and recovered:
            _logger.info(
                "Fasting history: recovered %s lapsed sessions", len(recovered)
            )
        return recovered
