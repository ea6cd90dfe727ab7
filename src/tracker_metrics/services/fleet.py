"""Fleet cost and efficiency aggregation."""

import logging
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from typing import Protocol, TypeVar
from uuid import UUID

from tracker_metrics.domain.fleet import (
    EnergySource,
    FleetReport,
    OperatorRanking,
    SavingsComparison,
    TransportCategory,
    TransportUnit,
    TripCostEstimate,
    TripRecord,
)

RANKING_LIMIT = 5

_K = TypeVar("_K", bound=Hashable)

_logger = logging.getLogger(__name__)


class FleetAggregator:
    """Aggregates over a fixed collection of transport units."""

    def __init__(self, units: list[TransportUnit]) -> None:
        self._units = list(units)

    @property
    def aggregated_distance(self) -> float:
        return sum((unit.total_distance_covered for unit in self._units), 0.0)

    @property
    def aggregated_expenditure(self) -> float:
        return sum((unit.total_expenditure for unit in self._units), 0.0)

    @property
    def aggregated_energy_usage(self) -> float:
        return sum((unit.total_energy_used for unit in self._units), 0.0)

    def grouped_by_category(self) -> dict[TransportCategory, list[TransportUnit]]:
        return _group(self._units, lambda unit: unit.category)

    def grouped_by_operator(self) -> dict[str, list[TransportUnit]]:
        return _group(self._units, lambda unit: unit.operator_name)

    def grouped_by_energy_type(self) -> dict[EnergySource, list[TransportUnit]]:
        return _group(self._units, lambda unit: unit.energy_type)

    def expenditure_by_energy(self) -> dict[EnergySource, float]:
        return {
            energy: sum((unit.total_expenditure for unit in units), 0.0)
            for energy, units in self.grouped_by_energy_type().items()
        }

    def distance_by_operator(self) -> dict[str, float]:
        return {
            operator: sum((unit.total_distance_covered for unit in units), 0.0)
            for operator, units in self.grouped_by_operator().items()
        }

    def best_performers(self) -> list[TransportUnit]:
        """Top units by distance per currency unit.

        Units without both distance and expenditure are left out entirely.
        """
        eligible = [
            unit
            for unit in self._units
            if unit.total_distance_covered > 0 and unit.total_expenditure > 0
        ]
        eligible.sort(key=lambda unit: unit.cost_performance, reverse=True)
        return eligible[:RANKING_LIMIT]

    def elite_operators(self) -> list[OperatorRanking]:
        """Top operators by distance per currency unit across their units."""
        rankings = []
        for operator, units in self.grouped_by_operator().items():
            distance = sum((unit.total_distance_covered for unit in units), 0.0)
            expenditure = sum((unit.total_expenditure for unit in units), 0.0)
            performance = distance / expenditure if expenditure > 0 else 0.0
            rankings.append(
                OperatorRanking(
                    operator_name=operator,
                    total_distance=distance,
                    performance=performance,
                )
            )
        ranked = [ranking for ranking in rankings if ranking.total_distance > 0]
        ranked.sort(key=lambda ranking: ranking.performance, reverse=True)
        return ranked[:RANKING_LIMIT]

    def average_efficiency(self) -> float:
        """Mean per-unit consumption per 100 distance units."""
        if not self._units:
            return 0.0
        return sum(unit.efficiency_rate for unit in self._units) / len(self._units)

    def average_distance(self) -> float:
        """Mean distance covered per unit."""
        if not self._units:
            return 0.0
        return self.aggregated_distance / len(self._units)


def estimate_trip_cost(
    distance: float,
    efficiency: float,
    energy: EnergySource,
    unit_price: float | None = None,
) -> TripCostEstimate:
    """Project energy and cost for ``distance`` at ``efficiency`` per 100 units."""
    price = energy.default_unit_cost if unit_price is None else unit_price
    required_energy = distance * efficiency / 100
    total_expense = required_energy * price
    return TripCostEstimate(
        required_energy=required_energy,
        total_expense=total_expense,
        cost_per_distance=total_expense / distance if distance > 0 else 0.0,
    )


def compare_energy_sources(
    distance: float,
    efficiency: float,
    current: EnergySource,
    alternative: EnergySource,
) -> SavingsComparison:
    """Compare the cost of a distance on two energy sources at default prices."""
    required_energy = distance * efficiency / 100
    current_expense = required_energy * current.default_unit_cost
    alternative_expense = required_energy * alternative.default_unit_cost
    difference = current_expense - alternative_expense
    percentage = difference / current_expense * 100 if current_expense > 0 else 0.0
    return SavingsComparison(
        current_expense=current_expense,
        alternative_expense=alternative_expense,
        difference=difference,
        percentage_difference=percentage,
    )


def _group(
    units: list[TransportUnit], key: Callable[[TransportUnit], _K]
) -> dict[_K, list[TransportUnit]]:
    groups: dict[_K, list[TransportUnit]] = {}
    for unit in units:
        groups.setdefault(key(unit), []).append(unit)
    return groups


class TransportUnitRepository(Protocol):
    """Persistence interface for vehicles and their trip logs."""

    def list_units(self) -> list[TransportUnit]:
        """Return every vehicle with its trip log."""

    def get_unit(self, unit_id: UUID) -> TransportUnit | None:
        """Return a vehicle by id, if present."""

    def add_trip(self, unit_id: UUID, trip: TripRecord) -> TripRecord:
        """Append a trip record to a vehicle's log and return it."""


@dataclass
class FleetReportService:
    """Service building fleet reports from the record store."""

    repository: TransportUnitRepository
    debug: bool = False

    def get_report(self) -> FleetReport:
        """Return totals, breakdowns and rankings for the whole fleet."""
        units = self.repository.list_units()
        aggregator = FleetAggregator(units)
        report = FleetReport(
            total_distance=aggregator.aggregated_distance,
            total_expenditure=aggregator.aggregated_expenditure,
            total_energy=aggregator.aggregated_energy_usage,
            expenditure_by_energy=aggregator.expenditure_by_energy(),
            distance_by_operator=aggregator.distance_by_operator(),
            best_performers=aggregator.best_performers(),
            elite_operators=aggregator.elite_operators(),
        )
        if self.debug:
            _logger.info(
                "Fleet report: units=%s distance=%.1f expenditure=%.2f",
                len(units),
                report.total_distance,
                report.total_expenditure,
            )
        return report

    def get_unit_summary(self, unit_id: UUID) -> TransportUnit | None:
        """Return a single vehicle, whose totals derive from its trip log."""
        return self.repository.get_unit(unit_id)

    def log_trip(self, unit_id: UUID, trip: TripRecord) -> TransportUnit | None:
        """Store a trip and return the vehicle with its updated totals."""
        unit = self.repository.get_unit(unit_id)
        if unit is None:
            return None
        stored = self.repository.add_trip(unit_id, trip)
        if self.debug:
            _logger.info(
                "Trip logged: unit=%s distance=%.1f", unit_id, stored.distance_traveled
            )
        return unit.with_trip(stored)
