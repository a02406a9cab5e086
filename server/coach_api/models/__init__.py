"""Pydantic models for coaching API responses."""
from .nutrition import (
    CalorieContribution,
    DailyNutritionTarget,
    NutritionPlan,
    NutritionPlanResponse,
    WeeklySummary,
    WeeklyNutritionResponse,
)
from .checkin import CheckInRecord, MetricChange, CheckInComparison
from .progress import GoalProgress, DeadlineProgress, GoalProgressReport, ChartPoint, ComparisonResponse
from .schedule import ScheduleStatus, OverdueClient, ClientDueSoon, AdherenceStats, PendingReminder

__all__ = [
    "CalorieContribution",
    "DailyNutritionTarget",
    "WeeklySummary",
    "WeeklyNutritionResponse",
    "NutritionPlan",
    "NutritionPlanResponse",
    "CheckInRecord",
    "MetricChange",
    "CheckInComparison",
    "GoalProgress",
    "DeadlineProgress",
    "GoalProgressReport",
    "ChartPoint",
    "ComparisonResponse",
    "ScheduleStatus",
    "OverdueClient",
    "ClientDueSoon",
    "AdherenceStats",
    "PendingReminder",
]
