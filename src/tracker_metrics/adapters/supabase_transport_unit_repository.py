"""Supabase repository for vehicles and trip logs."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from tracker_metrics.adapters.supabase_rows import parse_timestamp
from tracker_metrics.domain.fleet import (
    EnergySource,
    TransportCategory,
    TransportUnit,
    TripRecord,
)
from tracker_metrics.services.fleet import TransportUnitRepository

_COLUMNS = (
    "id, unit_name, model_name, category, energy_type, operator_name, "
    "trip_records(id, record_date, distance_traveled, energy_consumed, "
    "money_spent, additional_info)"
)
_TRIP_AMOUNTS = ("distance_traveled", "energy_consumed", "money_spent")


@dataclass
class SupabaseTransportUnitRepository(TransportUnitRepository):
    """Supabase implementation for the fleet logbook."""

    client: Client

    def list_units(self) -> list[TransportUnit]:
        """Return all vehicles with their trip records."""
        response = (
            self.client.table("transport_units")
            .select(_COLUMNS)
            .order("registration_date", desc=False)
            .execute()
        )
        return [_parse_unit(row) for row in response.data or []]

    def get_unit(self, unit_id: UUID) -> TransportUnit | None:
        """Return a vehicle by id, if present."""
        response = (
            self.client.table("transport_units")
            .select(_COLUMNS)
            .eq("id", str(unit_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_unit(response.data[0])

    def add_trip(self, unit_id: UUID, trip: TripRecord) -> TripRecord:
        """Append a trip record to a vehicle's log and return it."""
        response = (
            self.client.table("trip_records")
            .insert(
                {
                    "id": str(trip.id),
                    "unit_id": str(unit_id),
                    "record_date": trip.record_date.isoformat(),
                    "distance_traveled": trip.distance_traveled,
                    "energy_consumed": trip.energy_consumed,
                    "money_spent": trip.money_spent,
                    "additional_info": trip.additional_info,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create trip record")
        return _parse_trip(response.data[0])


def _parse_unit(row: dict[str, object]) -> TransportUnit:
    trips = row.get("trip_records") or []
    trip_logs = sorted(
        (_parse_trip(trip) for trip in trips),
        key=lambda trip: trip.record_date,
    )
    return TransportUnit(
        id=UUID(str(row["id"])),
        unit_name=str(row.get("unit_name") or ""),
        model_name=str(row.get("model_name") or ""),
        category=TransportCategory(row["category"]),
        energy_type=EnergySource(row["energy_type"]),
        operator_name=str(row.get("operator_name") or ""),
        trip_logs=tuple(trip_logs),
    )


def _parse_trip(row: dict[str, object]) -> TripRecord:
    amounts = {name: float(row.get(name) or 0.0) for name in _TRIP_AMOUNTS}
    negative = [name for name, value in amounts.items() if value < 0]
    if negative:
        raise ValueError(f"Trip record {row.get('id')} has negative {negative[0]}")
    record_date = parse_timestamp(row.get("record_date"))
    if record_date is None:
        raise ValueError(f"Trip record {row.get('id')} has no date")
    return TripRecord(
        id=UUID(str(row["id"])),
        record_date=record_date,
        additional_info=str(row.get("additional_info") or ""),
        **amounts,
    )
