"""Goal progress and chart models."""
from pydantic import BaseModel, Field
from typing import Optional

from .checkin import CheckInComparison


class GoalProgress(BaseModel):
    """Progress toward a weight or body fat goal."""

    current: float
    goal: float
    starting_value: float
    remaining: float
    percent_complete: float = Field(ge=0, le=100)
    on_track: str
    is_on_track: Optional[bool] = None
    avg_change_per_period: Optional[float] = None
    weeks_to_goal: Optional[float] = None
    projected_completion_date: Optional[str] = None
    unit: Optional[str] = None


class DeadlineProgress(BaseModel):
    """Countdown to the goal deadline."""

    date: str
    days_remaining: int
    is_past_deadline: bool


class GoalProgressReport(BaseModel):
    """Goal blocks; a block is absent when that goal is not configured."""

    weight: Optional[GoalProgress] = None
    body_fat: Optional[GoalProgress] = None
    deadline: Optional[DeadlineProgress] = None


class ChartPoint(BaseModel):
    date: str
    value: float
    label: str


class ComparisonResponse(BaseModel):
    """Check-in review payload."""

    client_id: str
    comparison: CheckInComparison
    goal_progress: GoalProgressReport
    chart_data: dict[str, list[ChartPoint]]
