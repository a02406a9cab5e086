"""
Metric Change Between Check-ins.

Computes the delta, percent change and trend of one metric between the
current and previous check-in. Each metric is compared on its own.
"""

import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from nutrition_planner.units import round_half_up


class Trend(str, Enum):
    """Direction of a metric between two check-ins."""

    UP = "up"
    DOWN = "down"
    STABLE = "stable"


DEFAULT_TREND_TOLERANCE = 0.5

# Changes smaller than the tolerance read as stable
METRIC_TOLERANCES = {
    "weight": 0.1,
    "body_fat_percentage": 0.1,
    "waist": 0.1,
    "hips": 0.1,
    "chest": 0.1,
    "arms": 0.1,
    "thighs": 0.1,
    "mood": 0.5,
    "energy": 0.5,
    "sleep": 0.5,
    "stress": 0.5,
    "workouts_completed": 0.5,
    "adherence_percentage": 0.5,
}


@dataclass
class MetricChange:
    """Current value of a metric and its change since the previous check-in."""

    current: float
    previous: Optional[float] = None
    change: Optional[float] = None
    percent_change: Optional[int] = None
    trend: Optional[Trend] = None

    @property
    def has_comparison(self) -> bool:
        return self.previous is not None

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "current": self.current,
            "previous": self.previous,
            "change": self.change,
            "percent_change": self.percent_change,
            "trend": self.trend.value if self.trend else None,
        }


def trend_for_change(change: float, tolerance: float = DEFAULT_TREND_TOLERANCE) -> Trend:
    if abs(change) < tolerance:
        return Trend.STABLE
    return Trend.UP if change > 0 else Trend.DOWN


def calculate_metric_change(
    current: Optional[float],
    previous: Optional[float] = None,
    tolerance: Optional[float] = None,
    metric: Optional[str] = None,
) -> Optional[MetricChange]:
    """
    Compare a metric between two check-ins.

    Args:
        current: Value on the current check-in
        previous: Value on the previous check-in, if any
        tolerance: Minimum absolute change that counts as a trend
        metric: Metric name used to look up a default tolerance

    Returns:
        None if there is no current value; a MetricChange without a delta if
        there is nothing to compare against
    """
    if current is None:
        return None

    result = MetricChange(current=current, previous=previous)
    if previous is None:
        return result

    if tolerance is None:
        tolerance = METRIC_TOLERANCES.get(metric, DEFAULT_TREND_TOLERANCE)

    change = round(current - previous, 2)
    result.change = change
    if previous != 0:
        result.percent_change = round_half_up(change / previous * 100)
    result.trend = trend_for_change(change, tolerance)
    return result


def days_between(first: datetime, second: datetime) -> int:
    """Whole days between two timestamps, rounded up."""
    seconds = abs((first - second).total_seconds())
    return math.ceil(seconds / 86400)
