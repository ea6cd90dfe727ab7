"""Supabase-backed fasting session repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from tracker_metrics.adapters.supabase_rows import parse_timestamp
from tracker_metrics.domain.fasting import FastingSession
from tracker_metrics.services.history import FastingSessionRepository

_COLUMNS = (
    "id, protocol_name, start_time, end_time, eating_window_end_time, "
    "completed, force_ended, fasting_hours"
)


@dataclass
class SupabaseFastingSessionRepository(FastingSessionRepository):
    """Supabase implementation for fasting sessions."""

    client: Client

    def list_sessions(self) -> list[FastingSession]:
        """Return all sessions, newest first."""
        response = (
            self.client.table("fasting_sessions")
            .select(_COLUMNS)
            .order("start_time", desc=True)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def get_session(self, session_id: UUID) -> FastingSession | None:
        """Return a session by id, if present."""
        response = (
            self.client.table("fasting_sessions")
            .select(_COLUMNS)
            .eq("id", str(session_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def complete_session(self, session_id: UUID) -> FastingSession:
        """Mark a session as naturally completed and return it."""
        response = (
            self.client.table("fasting_sessions")
            .update({"completed": True})
            .eq("id", str(session_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to complete fasting session")
        return _parse_row(response.data[0])


def _parse_row(row: dict[str, object]) -> FastingSession:
    start_time = parse_timestamp(row.get("start_time"))
    if start_time is None:
        raise ValueError(f"Fasting session {row.get('id')} has no start time")
    fasting_hours = float(row.get("fasting_hours") or 0.0)
    if fasting_hours < 0:
        raise ValueError(f"Fasting session {row.get('id')} has negative duration")
    return FastingSession(
        id=UUID(str(row["id"])),
        protocol_name=str(row.get("protocol_name") or ""),
        start_time=start_time,
        end_time=parse_timestamp(row.get("end_time")),
        eating_window_end_time=parse_timestamp(row.get("eating_window_end_time")),
        completed=bool(row.get("completed", False)),
        force_ended=bool(row.get("force_ended", False)),
        fasting_hours=fasting_hours,
    )
