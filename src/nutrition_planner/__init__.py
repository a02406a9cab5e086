"""
Nutrition Planner Module.

Computes weekly calorie and macro targets for a coaching client from their
baseline calories, protein target, diet type and active training plan.
"""

from .energy import NutritionPlan, generate_nutrition_plan, nutrition_plan_for_client
from .macro_split import DietType, calculate_daily_macros, macro_percentages
from .training_days import (
    DAYS_OF_WEEK,
    TrainingPlan,
    TrainingSession,
    get_training_days,
)
from .units import kg_to_lbs, lbs_to_kg, weight_to_kg
from .weekly_targets import (
    DailyNutritionTarget,
    InsufficientProfileDataError,
    calculate_weekly_nutrition_targets,
    summarize_week,
    weekly_targets_for_client,
)

__all__ = [
    "DAYS_OF_WEEK",
    "DailyNutritionTarget",
    "DietType",
    "InsufficientProfileDataError",
    "NutritionPlan",
    "TrainingPlan",
    "TrainingSession",
    "calculate_daily_macros",
    "calculate_weekly_nutrition_targets",
    "generate_nutrition_plan",
    "get_training_days",
    "kg_to_lbs",
    "lbs_to_kg",
    "macro_percentages",
    "nutrition_plan_for_client",
    "summarize_week",
    "weekly_targets_for_client",
    "weight_to_kg",
]
