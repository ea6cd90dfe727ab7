"""Supabase repository for brewing batches."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from tracker_metrics.adapters.supabase_rows import parse_timestamp
from tracker_metrics.domain.brewing import (
    AcidityLevel,
    Batch,
    BatchStage,
    CarbonationLevel,
    FermentationParameters,
    SweetnessLevel,
    YeastType,
)
from tracker_metrics.services.fermentation import BatchRepository

_COLUMNS = "id, name, volume, stage, start_date, timer_parameters"
_PARAMETER_AMOUNTS = ("initial_sweetness", "yeast_amount", "volume")


@dataclass
class SupabaseBatchRepository(BatchRepository):
    """Supabase implementation for brewing batches."""

    client: Client

    def list_batches(self) -> list[Batch]:
        """Return all batches, newest first."""
        response = (
            self.client.table("batches")
            .select(_COLUMNS)
            .order("start_date", desc=True)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def get_batch(self, batch_id: UUID) -> Batch | None:
        """Return a batch by id, if present."""
        response = (
            self.client.table("batches")
            .select(_COLUMNS)
            .eq("id", str(batch_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])


def _parse_parameters(raw: object) -> FermentationParameters | None:
    if not isinstance(raw, dict):
        return None
    amounts = {name: float(raw[name]) for name in _PARAMETER_AMOUNTS}
    negative = [name for name, value in amounts.items() if value < 0]
    if negative:
        raise ValueError(f"Timer parameters have negative {negative[0]}")
    return FermentationParameters(
        temperature=float(raw["temperature"]),
        yeast_type=YeastType(raw["yeast_type"]),
        desired_sweetness=SweetnessLevel(raw.get("desired_sweetness", "medium")),
        desired_carbonation=CarbonationLevel(raw.get("desired_carbonation", "medium")),
        desired_acidity=AcidityLevel(raw.get("desired_acidity", "soft")),
        **amounts,
    )


def _parse_row(row: dict[str, object]) -> Batch:
    volume = float(row.get("volume") or 0.0)
    if volume < 0:
        raise ValueError(f"Batch {row.get('id')} has negative volume")
    start_date = parse_timestamp(row.get("start_date"))
    if start_date is None:
        raise ValueError(f"Batch {row.get('id')} has no start date")
    return Batch(
        id=UUID(str(row["id"])),
        name=str(row.get("name") or ""),
        volume=volume,
        start_date=start_date,
        stage=BatchStage(row.get("stage") or BatchStage.PRIMARY),
        parameters=_parse_parameters(row.get("timer_parameters")),
    )
