"""Domain models for the vehicle fleet logbook."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class TransportCategory(StrEnum):
    """Body category of a vehicle."""

    SEDAN = "sedan"
    SUV = "suv"
    TRUCK = "truck"
    VAN = "van"
    BUS = "bus"


class EnergySource(StrEnum):
    """Fuel or energy a vehicle runs on."""

    GASOLINE = "gasoline"
    DIESEL = "diesel"
    GAS = "gas"
    ELECTRIC = "electric"
    HYBRID = "hybrid"

    @property
    def default_unit_cost(self) -> float:
        """Price per energy unit used when the user gives none."""
        return _DEFAULT_UNIT_COSTS[self]


_DEFAULT_UNIT_COSTS = {
    EnergySource.GASOLINE: 50.0,
    EnergySource.DIESEL: 55.0,
    EnergySource.GAS: 30.0,
    EnergySource.ELECTRIC: 10.0,
    EnergySource.HYBRID: 45.0,
}


@dataclass(frozen=True)
class TripRecord:
    """A single logbook entry."""

    id: UUID
    record_date: datetime
    distance_traveled: float
    energy_consumed: float
    money_spent: float
    additional_info: str = ""


@dataclass(frozen=True)
class TransportUnit:
    """A vehicle with its trip log.

    Totals are derived from ``trip_logs`` on every access.
    """

    id: UUID
    unit_name: str
    category: TransportCategory
    energy_type: EnergySource
    operator_name: str
    model_name: str = ""
    trip_logs: tuple[TripRecord, ...] = field(default_factory=tuple)

    @property
    def total_distance_covered(self) -> float:
        return sum(log.distance_traveled for log in self.trip_logs)

    @property
    def total_energy_used(self) -> float:
        return sum(log.energy_consumed for log in self.trip_logs)

    @property
    def total_expenditure(self) -> float:
        return sum(log.money_spent for log in self.trip_logs)

    @property
    def efficiency_rate(self) -> float:
        """Energy used per 100 distance units."""
        distance = self.total_distance_covered
        if distance <= 0:
            return 0.0
        return self.total_energy_used / distance * 100

    @property
    def cost_performance(self) -> float:
        """Distance covered per currency unit."""
        expenditure = self.total_expenditure
        if expenditure <= 0:
            return 0.0
        return self.total_distance_covered / expenditure

    def with_trip(self, trip: TripRecord) -> "TransportUnit":
        return replace(self, trip_logs=(*self.trip_logs, trip))

    def without_trip(self, trip_id: UUID) -> "TransportUnit":
        return replace(
            self, trip_logs=tuple(log for log in self.trip_logs if log.id != trip_id)
        )


@dataclass(frozen=True)
class OperatorRanking:
    """Distance and cost performance of one operator."""

    operator_name: str
    total_distance: float
    performance: float


@dataclass(frozen=True)
class TripCostEstimate:
    """Projected energy and cost for a planned distance."""

    required_energy: float
    total_expense: float
    cost_per_distance: float


@dataclass(frozen=True)
class SavingsComparison:
    """Cost of the same distance on two energy sources."""

    current_expense: float
    alternative_expense: float
    difference: float
    percentage_difference: float

    @property
    def is_saving(self) -> bool:
        return self.difference >= 0

    @property
    def annual_savings(self) -> float:
        """Twelve months of the difference, 0 when switching costs more."""
        return self.difference * 12 if self.is_saving else 0.0


@dataclass(frozen=True)
class FleetReport:
    """Aggregates shown on the analytics and hall of fame screens."""

    total_distance: float
    total_expenditure: float
    total_energy: float
    expenditure_by_energy: dict[EnergySource, float]
    distance_by_operator: dict[str, float]
    best_performers: list[TransportUnit]
    elite_operators: list[OperatorRanking]
