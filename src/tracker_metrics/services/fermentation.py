"""Fermentation time estimation for brewing batches."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from math import floor
from typing import Protocol
from uuid import UUID

from tracker_metrics.domain.brewing import (
    Batch,
    BatchSummary,
    CarbonationLevel,
    FermentationEstimate,
    FermentationParameters,
    SweetnessLevel,
    YeastType,
)

BASE_DAYS = 7.0
MIN_DAYS = 3.0
MAX_DAYS = 30.0
OPTIMAL_TEMPERATURE = 22.0
COLD_THRESHOLD = 15.0
HOT_THRESHOLD = 30.0
MIN_TEMPERATURE_FACTOR = 0.1

_SWEETNESS_RESULT_FACTORS = {
    SweetnessLevel.SWEET: 0.8,
    SweetnessLevel.MEDIUM: 1.0,
    SweetnessLevel.DRY: 1.3,
    SweetnessLevel.TARGET_BRIX: 1.1,
}

_CARBONATION_RESULT_FACTORS = {
    CarbonationLevel.LOW: 0.9,
    CarbonationLevel.MEDIUM: 1.0,
    CarbonationLevel.HIGH: 1.1,
}

_logger = logging.getLogger(__name__)


def temperature_factor(temperature: float) -> float:
    """Return the duration multiplier for a fermentation temperature.

    Cold slows fermentation without bound, heat speeds it up, and the normal
    range penalises distance from 22 °C. The result never drops below 0.1.
    """
    if temperature < COLD_THRESHOLD:
        factor = 1.5 + (COLD_THRESHOLD - temperature) * 0.1
    elif temperature > HOT_THRESHOLD:
        factor = 0.7 - (temperature - HOT_THRESHOLD) * 0.05
    else:
        deviation = abs(temperature - OPTIMAL_TEMPERATURE)
        factor = 1.0 - (deviation / OPTIMAL_TEMPERATURE) * 0.3
    return max(factor, MIN_TEMPERATURE_FACTOR)


def estimate_days(params: FermentationParameters) -> float:
    """Return the estimated fermentation time in days, within [3, 30]."""
    sweetness_factor = 1.0 + (params.initial_sweetness / 20.0) * 0.5
    yeast_factor = 1.0 / params.yeast_type.speed_multiplier
    yeast_amount_factor = 1.0 / (1.0 + params.yeast_amount / 10.0)
    volume_factor = 1.0 + (params.volume / 50.0) * 0.1
    result_factor = (
        _SWEETNESS_RESULT_FACTORS[params.desired_sweetness]
        * _CARBONATION_RESULT_FACTORS[params.desired_carbonation]
    )
    total_days = (
        BASE_DAYS
        * temperature_factor(params.temperature)
        * sweetness_factor
        * yeast_factor
        * yeast_amount_factor
        * volume_factor
        * result_factor
    )
    return max(MIN_DAYS, min(MAX_DAYS, total_days))


def estimate(
    params: FermentationParameters, start: datetime | None = None
) -> FermentationEstimate:
    """Estimate duration and completion date for a batch started at ``start``."""
    started_at = start or datetime.now(tz=UTC)
    days = estimate_days(params)
    return FermentationEstimate(
        days=days,
        completion_date=started_at + timedelta(days=floor(days)),
    )


def summarize_batches(batches: list[Batch]) -> BatchSummary:
    """Aggregate volumes, stages and estimates over a set of batches."""
    active_count = sum(1 for batch in batches if batch.is_active)
    total_volume = sum(batch.volume for batch in batches)
    average_volume = total_volume / len(batches) if batches else 0.0
    largest_volume = max((batch.volume for batch in batches), default=0.0)

    with_params = [batch.parameters for batch in batches if batch.parameters]
    average_days = (
        sum(estimate_days(params) for params in with_params) / len(with_params)
        if with_params
        else None
    )
    distribution: dict[YeastType, int] = {}
    for params in with_params:
        distribution[params.yeast_type] = distribution.get(params.yeast_type, 0) + 1

    start_dates = [batch.start_date for batch in batches]
    return BatchSummary(
        active_count=active_count,
        completed_count=len(batches) - active_count,
        total_volume=total_volume,
        average_volume=average_volume,
        largest_volume=largest_volume,
        average_fermentation_days=average_days,
        yeast_distribution=distribution,
        oldest_start=min(start_dates, default=None),
        newest_start=max(start_dates, default=None),
    )


class BatchRepository(Protocol):
    """Persistence interface for brewing batches."""

    def list_batches(self) -> list[Batch]:
        """Return all stored batches."""

    def get_batch(self, batch_id: UUID) -> Batch | None:
        """Return a batch by id, if present."""


@dataclass
class BrewingService:
    """Service exposing estimates and statistics for stored batches."""

    repository: BatchRepository
    debug: bool = False

    def estimate_batch(self, batch_id: UUID) -> FermentationEstimate | None:
        """Estimate completion for a stored batch that has timer parameters."""
        batch = self.repository.get_batch(batch_id)
        if batch is None or batch.parameters is None:
            return None
        result = estimate(batch.parameters, start=batch.start_date)
        if self.debug:
            _logger.info(
                "Fermentation estimate: batch=%s days=%.2f", batch_id, result.days
            )
        return result

    def get_summary(self) -> BatchSummary:
        """Return statistics over every stored batch."""
        return summarize_batches(self.repository.list_batches())
