"""
Goal Progress Calculation.

Measures how far a client has come from their starting value toward a goal
(weight or body fat), whether the recent rate of change will get them there
by the deadline, and when they can expect to arrive.
"""

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from .metric_change import days_between
from .records import utc_now

logger = logging.getLogger(__name__)

# Rates smaller than this are treated as no movement
RATE_EPSILON = 1e-6


class OnTrackStatus(str, Enum):
    """Whether the current rate of change reaches the goal in time."""

    ON_TRACK = "on_track"
    OFF_TRACK = "off_track"
    INSUFFICIENT_DATA = "insufficient_data"


@dataclass
class GoalProgress:
    """Progress toward a single goal."""

    current: float
    goal: float
    starting_value: float
    remaining: float
    percent_complete: float
    on_track: OnTrackStatus
    avg_change_per_period: Optional[float] = None
    weeks_to_goal: Optional[float] = None
    projected_completion_date: Optional[date] = None
    unit: Optional[str] = None

    @property
    def is_on_track(self) -> Optional[bool]:
        """True/False, or None when there is no rate data yet."""
        if self.on_track == OnTrackStatus.INSUFFICIENT_DATA:
            return None
        return self.on_track == OnTrackStatus.ON_TRACK

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "current": self.current,
            "goal": self.goal,
            "starting_value": self.starting_value,
            "remaining": self.remaining,
            "percent_complete": self.percent_complete,
            "on_track": self.on_track.value,
            "is_on_track": self.is_on_track,
            "avg_change_per_period": self.avg_change_per_period,
            "weeks_to_goal": self.weeks_to_goal,
            "projected_completion_date": (
                self.projected_completion_date.isoformat()
                if self.projected_completion_date
                else None
            ),
            "unit": self.unit,
        }


@dataclass
class DeadlineProgress:
    """Time left until the goal deadline."""

    date: date
    days_remaining: int

    @property
    def is_past_deadline(self) -> bool:
        return self.days_remaining < 0

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "days_remaining": self.days_remaining,
            "is_past_deadline": self.is_past_deadline,
        }


def _sign(value: float) -> int:
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


def _on_track_status(
    remaining: float,
    avg_change: Optional[float],
    deadline: Optional[date],
    today: date,
    period_days: Optional[float],
) -> OnTrackStatus:
    if abs(remaining) < RATE_EPSILON:
        return OnTrackStatus.ON_TRACK
    if avg_change is None:
        return OnTrackStatus.INSUFFICIENT_DATA

    # remaining = current - goal, so the goal lies in the opposite direction
    if _sign(avg_change) != -_sign(remaining):
        return OnTrackStatus.OFF_TRACK

    if deadline is not None and period_days:
        periods_left = (deadline - today).days / period_days
        if abs(avg_change) * periods_left < abs(remaining):
            return OnTrackStatus.OFF_TRACK

    return OnTrackStatus.ON_TRACK


def calculate_goal_progress(
    current: float,
    goal: float,
    starting_value: Optional[float] = None,
    avg_change_per_period: Optional[float] = None,
    deadline: Optional[date] = None,
    today: Optional[date] = None,
    period_days: Optional[float] = 7,
    unit: Optional[str] = None,
) -> GoalProgress:
    """
    Compute progress toward a goal.

    Args:
        current: Latest value
        goal: Target value
        starting_value: Value when the client started (defaults to current)
        avg_change_per_period: Average change per period from recent check-ins
        deadline: Goal deadline, if any
        today: Reference date (defaults to today)
        period_days: Length of one rate period in days (7 for weekly rates)
        unit: Display unit carried through to the result

    Returns:
        GoalProgress; percent complete is clamped to [0, 100]
    """
    today = today or utc_now().date()
    start = current if starting_value is None else starting_value

    total_distance = abs(start - goal)
    # Progress is measured toward the goal; moving away counts as none
    direction = _sign(goal - start)
    progress_made = (current - start) * direction
    progress_made = max(0.0, min(progress_made, total_distance))

    if total_distance > 0:
        percent_complete = round(progress_made / total_distance * 100, 1)
    else:
        percent_complete = 100.0

    remaining = round(current - goal, 2)
    status = _on_track_status(remaining, avg_change_per_period, deadline, today, period_days)

    weeks_to_goal = None
    projected = None
    if (
        avg_change_per_period is not None
        and abs(avg_change_per_period) >= RATE_EPSILON
        and period_days
        and _sign(avg_change_per_period) == -_sign(remaining)
    ):
        periods = abs(remaining) / abs(avg_change_per_period)
        weeks_to_goal = round(periods * period_days / 7, 1)
        projected = today + timedelta(days=round(weeks_to_goal * 7))

    logger.debug(
        f"[PROGRESS] current={current} goal={goal} start={start}: "
        f"{percent_complete}% complete, {status.value}"
    )

    return GoalProgress(
        current=current,
        goal=goal,
        starting_value=start,
        remaining=remaining,
        percent_complete=percent_complete,
        on_track=status,
        avg_change_per_period=avg_change_per_period,
        weeks_to_goal=weeks_to_goal,
        projected_completion_date=projected,
        unit=unit,
    )


def calculate_deadline_progress(
    deadline: date, now: Optional[datetime] = None
) -> DeadlineProgress:
    """Days until the deadline (negative once it has passed)."""
    now = now or utc_now()
    deadline_start = datetime(deadline.year, deadline.month, deadline.day, tzinfo=now.tzinfo)
    days_remaining = math.ceil((deadline_start - now).total_seconds() / 86400)
    return DeadlineProgress(date=deadline, days_remaining=days_remaining)


def resolve_starting_value(
    explicit: Optional[float],
    first_check_in_value: Optional[float],
    recent_values: Sequence[float],
    current: float,
) -> float:
    """
    Starting value for a goal.

    Priority: value recorded on the client, first-ever check-in, oldest of the
    recent check-ins (oldest first in ``recent_values``), then the current value.
    """
    if explicit is not None:
        return explicit
    if first_check_in_value is not None:
        return first_check_in_value
    if recent_values:
        return recent_values[0]
    return current


def average_weekly_change(points: List[Tuple[datetime, float]]) -> Optional[float]:
    """
    Average change per week between the oldest and newest point.

    Returns None with fewer than two points or when they share a day.
    """
    if len(points) < 2:
        return None
    ordered = sorted(points, key=lambda p: p[0])
    (oldest_at, oldest), (newest_at, newest) = ordered[0], ordered[-1]
    days = days_between(newest_at, oldest_at)
    if days <= 0:
        return None
    return round((newest - oldest) / days * 7, 2)


def average_change_per_sample(values: Sequence[float]) -> Optional[float]:
    """(newest - oldest) / sample count for chronologically ordered values."""
    if len(values) < 2:
        return None
    return round((values[-1] - values[0]) / len(values), 2)
