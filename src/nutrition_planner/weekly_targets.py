"""
Weekly Nutrition Target Engine.

Builds seven daily calorie and macro targets from a client's baseline
(rest-day) calories, protein target and diet type, adding the calories of
training sessions and external activities scheduled on each day.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .macro_split import calculate_daily_macros, macro_percentages, normalize_diet_type
from .training_days import (
    DAY_LABELS,
    CalorieContribution,
    TrainingPlan,
    build_training_plan_days,
)
from .units import round_half_up

logger = logging.getLogger(__name__)


class InsufficientProfileDataError(ValueError):
    """Baseline calories or protein target missing, so no plan can be built."""


@dataclass
class DailyNutritionTarget:
    """Calorie and macro targets for one day of the week."""

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
    training_sessions: List[CalorieContribution] = field(default_factory=list)
    external_activities: List[CalorieContribution] = field(default_factory=list)

    @property
    def activity_calories(self) -> int:
        return self.training_session_calories + self.external_activity_calories

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "day": self.day,
            "day_label": self.day_label,
            "is_training_day": self.is_training_day,
            "baseline_calories": self.baseline_calories,
            "training_session_calories": self.training_session_calories,
            "external_activity_calories": self.external_activity_calories,
            "calories": self.calories,
            "protein_g": self.protein_g,
            "carbs_g": self.carbs_g,
            "fat_g": self.fat_g,
            "protein_percent": self.protein_percent,
            "carbs_percent": self.carbs_percent,
            "fat_percent": self.fat_percent,
            "training_sessions": [s.to_dict() for s in self.training_sessions],
            "external_activities": [a.to_dict() for a in self.external_activities],
        }


def calculate_weekly_nutrition_targets(
    baseline_calories: Optional[float],
    protein_target_g: Optional[float],
    training_plan: Optional[TrainingPlan] = None,
    diet_type: Optional[str] = "balanced",
) -> List[DailyNutritionTarget]:
    """
    Compute the seven daily nutrition targets for a week.

    Protein stays constant across the week; activity calories raise the day's
    total and the training/rest status shifts the carb/fat split.

    Args:
        baseline_calories: Rest-day calories (TDEE adjusted for the goal)
        protein_target_g: Daily protein target in grams
        training_plan: Active training plan, or None for an all-rest week
        diet_type: Diet policy; unknown values fall back to balanced

    Returns:
        Exactly seven DailyNutritionTarget records, Monday first

    Raises:
        InsufficientProfileDataError: If baseline calories or protein target
            is missing or not positive
    """
    if not baseline_calories or baseline_calories <= 0:
        raise InsufficientProfileDataError("baseline calories must be positive")
    if not protein_target_g or protein_target_g <= 0:
        raise InsufficientProfileDataError("protein target must be positive")

    diet = normalize_diet_type(diet_type)
    baseline = round_half_up(baseline_calories)
    targets = []

    for plan_day in build_training_plan_days(training_plan):
        training_calories = round_half_up(plan_day.training_session_calories)
        external_calories = round_half_up(plan_day.external_activity_calories)
        calories = baseline + training_calories + external_calories

        macros = calculate_daily_macros(
            calories, protein_target_g, plan_day.is_training_day, diet
        )
        protein_percent, carbs_percent, fat_percent = macro_percentages(
            macros.protein_g, macros.carbs_g, macros.fat_g
        )

        targets.append(
            DailyNutritionTarget(
                day=plan_day.day,
                day_label=DAY_LABELS[plan_day.day],
                is_training_day=plan_day.is_training_day,
                baseline_calories=baseline,
                training_session_calories=training_calories,
                external_activity_calories=external_calories,
                calories=calories,
                protein_g=macros.protein_g,
                carbs_g=macros.carbs_g,
                fat_g=macros.fat_g,
                protein_percent=protein_percent,
                carbs_percent=carbs_percent,
                fat_percent=fat_percent,
                training_sessions=list(plan_day.training_sessions),
                external_activities=list(plan_day.external_activities),
            )
        )
        logger.debug(
            f"[NUTRITION] {plan_day.day}: {calories} kcal "
            f"(P{macros.protein_g}/C{macros.carbs_g}/F{macros.fat_g}, "
            f"{'training' if plan_day.is_training_day else 'rest'})"
        )

    logger.info(
        f"[NUTRITION] Built weekly targets: baseline={baseline}, "
        f"protein={protein_target_g}g, diet={diet.value}, "
        f"training_days={sum(1 for t in targets if t.is_training_day)}"
    )
    return targets


def weekly_targets_for_client(
    client: Any, training_plan: Optional[TrainingPlan] = None
) -> Optional[List[DailyNutritionTarget]]:
    """
    Weekly targets for a client profile, or None when the profile has no plan.

    The profile's baseline calories fall back to its calorie target. A missing
    baseline or protein target means "no plan configured", not zero targets.
    """
    baseline = getattr(client, "baseline_calories", None) or getattr(
        client, "calorie_target", None
    )
    protein = getattr(client, "protein_target_g", None)
    if not baseline or baseline <= 0 or not protein or protein <= 0:
        logger.info(
            f"[NUTRITION] Client {getattr(client, 'id', '?')} has no nutrition plan yet"
        )
        return None

    return calculate_weekly_nutrition_targets(
        baseline, protein, training_plan, getattr(client, "diet_type", None)
    )


def summarize_week(targets: List[DailyNutritionTarget]) -> Dict[str, Any]:
    """Weekly totals for a set of daily targets."""
    training_days = sum(1 for t in targets if t.is_training_day)
    total = sum(t.calories for t in targets)
    return {
        "weekly_total_calories": total,
        "average_daily_calories": round_half_up(total / len(targets)) if targets else 0,
        "training_days_count": training_days,
        "rest_days_count": len(targets) - training_days,
    }
