"""Row parsing helpers shared by the Supabase adapters."""

from datetime import UTC, datetime


def parse_timestamp(raw: object) -> datetime | None:
    """Parse an ISO timestamp column; values without an offset are UTC."""
    if not isinstance(raw, str) or not raw:
        return None
    parsed = datetime.fromisoformat(raw)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed
