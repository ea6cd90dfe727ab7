"""Domain models for time-restricted eating sessions."""

from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta
from enum import StrEnum
from uuid import UUID


class FastingPhase(StrEnum):
    """Where a session stands at a given moment."""

    FASTING = "fasting"
    EATING = "eating"
    COMPLETED = "completed"
    FORCE_ENDED = "force_ended"


@dataclass(frozen=True)
class FastingProtocol:
    """A fasting/eating split such as 16:8."""

    name: str
    fasting_hours: float
    eating_hours: float

    def schedule(self, start: datetime) -> tuple[datetime, datetime]:
        """Return the fasting end and eating window end for a start time."""
        fasting_end = start + timedelta(hours=self.fasting_hours)
        eating_window_end = fasting_end + timedelta(hours=self.eating_hours)
        return fasting_end, eating_window_end


DEFAULT_PROTOCOLS: tuple[FastingProtocol, ...] = (
    FastingProtocol(name="13:11", fasting_hours=13, eating_hours=11),
    FastingProtocol(name="16:8", fasting_hours=16, eating_hours=8),
    FastingProtocol(name="18:6", fasting_hours=18, eating_hours=6),
    FastingProtocol(name="20:4", fasting_hours=20, eating_hours=4),
    FastingProtocol(name="23:1", fasting_hours=23, eating_hours=1),
)


@dataclass(frozen=True)
class FastingSession:
    """A fasting period followed by its eating window.

    ``end_time`` marks the end of the fasting phase and ``fasting_hours`` the
    elapsed fasting duration once the session has ended.
    """

    id: UUID
    protocol_name: str
    start_time: datetime
    end_time: datetime | None = None
    eating_window_end_time: datetime | None = None
    completed: bool = False
    force_ended: bool = False
    fasting_hours: float = 0.0

    @property
    def completed_naturally(self) -> bool:
        return self.completed and not self.force_ended

    @property
    def has_ended(self) -> bool:
        return self.completed or self.force_ended


@dataclass(frozen=True)
class MonthlyStats:
    """Totals for ended sessions started in the current month."""

    total_hours: float
    average_hours: float
    success_rate: float
    session_count: int

    @property
    def total_formatted(self) -> str:
        return format_duration(self.total_hours)

    @property
    def average_formatted(self) -> str:
        return format_duration(self.average_hours)


@dataclass(frozen=True)
class DayActivity:
    """Fasting time recorded on one calendar day."""

    day: date
    duration_hours: float
    completed: bool


@dataclass(frozen=True)
class HistoryOverview:
    """Everything the history screen shows."""

    current_streak: int
    longest_streak: int
    longest_fast_hours: float
    monthly: MonthlyStats
    last_seven_days: list[DayActivity]

    @property
    def longest_fast_formatted(self) -> str:
        return format_duration(self.longest_fast_hours)


class ChallengeKind(StrEnum):
    CHALLENGE = "challenge"
    ACHIEVEMENT = "achievement"


@dataclass(frozen=True)
class Challenge:
    """A goal counted in completed sessions, such as seven fasts in a row."""

    id: UUID
    title: str
    requirement: int
    current_progress: int = 0
    completed: bool = False
    kind: ChallengeKind = ChallengeKind.CHALLENGE

    @property
    def progress_percentage(self) -> float:
        if self.requirement <= 0:
            return 0.0
        return min(1.0, self.current_progress / self.requirement)

    def advance(self, increment: int = 1) -> "Challenge":
        """Return the challenge with progress added, capped at the requirement."""
        progress = min(self.current_progress + increment, self.requirement)
        return replace(
            self,
            current_progress=progress,
            completed=self.completed or progress >= self.requirement,
        )


def format_duration(hours: float) -> str:
    """Format hours as ``Xh Ym``, ``Xh`` or ``Ym``."""
    if hours < 1:
        return f"{int(hours * 60)}m"
    whole_hours = int(hours)
    remaining_minutes = int((hours - whole_hours) * 60)
    if remaining_minutes > 0:
        return f"{whole_hours}h {remaining_minutes}m"
    return f"{whole_hours}h"
