"""Domain models for the brewing tracker."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from math import ceil
from uuid import UUID


class YeastType(StrEnum):
    """Yeast or culture used for a batch."""

    BREAD = "bread"
    WINE = "wine"
    WILD = "wild"
    KEFIR = "kefir"
    CUSTOM = "custom"

    @property
    def display_name(self) -> str:
        return _YEAST_DISPLAY_NAMES[self]

    @property
    def speed_multiplier(self) -> float:
        """Relative fermentation speed, 1.0 being normal."""
        return _YEAST_SPEED_MULTIPLIERS[self]


_YEAST_DISPLAY_NAMES = {
    YeastType.BREAD: "Bread Yeast",
    YeastType.WINE: "Wine Yeast",
    YeastType.WILD: "Wild Fermentation",
    YeastType.KEFIR: "Kefir Grains",
    YeastType.CUSTOM: "Custom",
}

_YEAST_SPEED_MULTIPLIERS = {
    YeastType.BREAD: 1.2,
    YeastType.WINE: 0.9,
    YeastType.WILD: 0.7,
    YeastType.KEFIR: 1.0,
    YeastType.CUSTOM: 1.0,
}


class SweetnessLevel(StrEnum):
    """Desired sweetness of the finished drink."""

    SWEET = "sweet"
    MEDIUM = "medium"
    DRY = "dry"
    TARGET_BRIX = "target_brix"


class CarbonationLevel(StrEnum):
    """Desired carbonation of the finished drink."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class AcidityLevel(StrEnum):
    """Desired acidity of the finished drink."""

    SOFT = "soft"
    SLIGHTLY_ACIDIC = "slightly_acidic"
    TARGET_PH = "target_ph"


class BatchStage(StrEnum):
    """Lifecycle stage of a batch."""

    PRIMARY = "primary"
    SECONDARY = "secondary"
    COLD_CRASH = "cold_crash"
    CONDITIONING = "conditioning"
    BOTTLED = "bottled"


@dataclass(frozen=True)
class FermentationParameters:
    """Inputs of a fermentation time estimate.

    Temperature is in degrees Celsius, initial sweetness in °Bx (or g/L),
    yeast amount in grams (or % of volume) and volume in liters.
    """

    temperature: float
    initial_sweetness: float
    yeast_type: YeastType
    yeast_amount: float
    volume: float
    desired_sweetness: SweetnessLevel = SweetnessLevel.MEDIUM
    desired_carbonation: CarbonationLevel = CarbonationLevel.MEDIUM
    desired_acidity: AcidityLevel = AcidityLevel.SOFT


@dataclass(frozen=True)
class FermentationEstimate:
    """Estimated fermentation duration and completion time."""

    days: float
    completion_date: datetime

    @property
    def whole_days(self) -> int:
        """Days rounded up, as displayed on the timer screen."""
        return ceil(self.days)


@dataclass(frozen=True)
class Batch:
    """A brewing batch stored by the record store."""

    id: UUID
    name: str
    volume: float
    start_date: datetime
    stage: BatchStage = BatchStage.PRIMARY
    parameters: FermentationParameters | None = None

    @property
    def is_active(self) -> bool:
        return self.stage != BatchStage.BOTTLED


@dataclass(frozen=True)
class BatchSummary:
    """Aggregate figures over a set of batches."""

    active_count: int
    completed_count: int
    total_volume: float
    average_volume: float
    largest_volume: float
    average_fermentation_days: float | None
    yeast_distribution: dict[YeastType, int] = field(default_factory=dict)
    oldest_start: datetime | None = None
    newest_start: datetime | None = None
