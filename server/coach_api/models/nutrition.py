"""Weekly nutrition target models."""
from pydantic import BaseModel, ConfigDict
from typing import Optional


class CalorieContribution(BaseModel):
    """Named session or activity adding calories to a day."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    calories: float


class DailyNutritionTarget(BaseModel):
    """Calorie and macro targets for one day of the week."""

    model_config = ConfigDict(from_attributes=True)

    day: str
    day_label: str
    is_training_day: bool
    baseline_calories: int
    training_session_calories: int
    external_activity_calories: int
    calories: int
    protein_g: int
    carbs_g: int
    fat_g: int
    protein_percent: int
    carbs_percent: int
    fat_percent: int
    training_sessions: list[CalorieContribution] = []
    external_activities: list[CalorieContribution] = []


class WeeklySummary(BaseModel):
    """Weekly totals across the seven daily targets."""

    weekly_total_calories: int
    average_daily_calories: int
    training_days_count: int
    rest_days_count: int


class WeeklyNutritionResponse(BaseModel):
    """Weekly plan for a client; targets are null when no plan is configured."""

    client_id: str
    has_plan: bool
    diet_type: Optional[str] = None
    training_plan_name: Optional[str] = None
    targets: Optional[list[DailyNutritionTarget]] = None
    summary: Optional[WeeklySummary] = None


class NutritionPlan(BaseModel):
    """Baseline calories and rest-day macros generated from the profile."""

    bmr: int
    tdee: int
    baseline_calories: int
    protein_target_g: int
    carb_target_g: int
    fat_target_g: int
    weekly_weight_change_kg: float
    required_daily_deficit: float
    diet_type: str
    warnings: list[str] = []


class NutritionPlanResponse(BaseModel):
    """Generated plan for a client; plan is null while profile data is missing."""

    client_id: str
    has_plan: bool
    missing: list[str] = []
    plan: Optional[NutritionPlan] = None
