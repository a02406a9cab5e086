"""
Energy Plan Generation.

Derives the inputs of the weekly engine from a client's profile:
BMR (Mifflin-St Jeor), TDEE from the work activity level, baseline
(rest-day) calories adjusted toward the weight goal by its deadline, and the
protein target. Training calories are not part of TDEE here; they are added
per day by the weekly engine.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, List, Optional

from .macro_split import calculate_daily_macros, normalize_diet_type
from .units import round_half_up

logger = logging.getLogger(__name__)

KCAL_PER_KG = 7700

ACTIVITY_MULTIPLIERS = {
    "sedentary": 1.2,
    "lightly_active": 1.375,
    "moderately_active": 1.55,
    "very_active": 1.725,
    "extremely_active": 1.9,
}

# Weekly rate caps in kg: (max loss, max gain)
WEEKLY_RATE_CAPS = {
    "female": (0.75, 0.35),
    "default": (1.0, 0.5),
}

MINIMUM_CALORIES = {
    "female": 1200,
    "default": 1500,
}

MIN_PROTEIN_G_PER_KG = 1.6
MAX_PROTEIN_G_PER_KG = 2.5

# Used when the profile has no date of birth or protein multiplier
DEFAULT_AGE = 30
DEFAULT_PROTEIN_G_PER_KG = 1.8


def _gender_key(gender: Optional[str]) -> str:
    return "female" if gender == "female" else "default"


def mifflin_st_jeor_bmr(
    weight_kg: float, height_cm: float, age: int, gender: Optional[str]
) -> int:
    """Basal metabolic rate; 'other' uses the midpoint of both offsets."""
    bmr = 10 * weight_kg + 6.25 * height_cm - 5 * age
    if gender == "male":
        bmr += 5
    elif gender == "female":
        bmr -= 161
    else:
        bmr -= 78
    return round_half_up(bmr)


def age_from_birth_date(date_of_birth: date, today: Optional[date] = None) -> int:
    today = today or date.today()
    age = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age


def calculate_tdee(bmr: float, activity_level: Optional[str]) -> int:
    """BMR times the work activity multiplier (no training calories)."""
    multiplier = ACTIVITY_MULTIPLIERS.get(activity_level or "")
    if multiplier is None:
        logger.warning(
            f"[ENERGY] Unknown activity level {activity_level!r}, using sedentary"
        )
        multiplier = ACTIVITY_MULTIPLIERS["sedentary"]
    return round_half_up(bmr * multiplier)


@dataclass
class BaselineCalories:
    """Rest-day calories and the goal rate behind them."""

    baseline_calories: int
    required_daily_deficit: float
    weekly_rate_kg: float
    warnings: List[str] = field(default_factory=list)


def calculate_baseline_calories(
    tdee: float,
    current_weight_kg: float,
    goal_weight_kg: Optional[float],
    goal_deadline: Optional[date],
    gender: Optional[str],
    today: Optional[date] = None,
) -> BaselineCalories:
    """
    Rest-day calories needed to reach the goal weight by the deadline.

    Without a goal or deadline the client eats at maintenance. Rates are capped
    per week for safety and the result never drops below a minimum intake.

    Args:
        tdee: Total daily energy expenditure without training
        current_weight_kg: Current weight in kilograms
        goal_weight_kg: Goal weight in kilograms
        goal_deadline: Date the goal should be reached
        gender: "male", "female" or "other"
        today: Reference date (defaults to today)

    Returns:
        BaselineCalories with any warnings raised by the caps
    """
    if not goal_weight_kg or not goal_deadline:
        return BaselineCalories(round_half_up(tdee), 0.0, 0.0)

    today = today or date.today()
    days_to_goal = (goal_deadline - today).days
    if days_to_goal <= 0:
        return BaselineCalories(
            round_half_up(tdee),
            0.0,
            0.0,
            ["Goal deadline has passed. Using maintenance calories."],
        )

    warnings = []
    weight_change_kg = goal_weight_kg - current_weight_kg
    is_weight_loss = weight_change_kg < 0
    daily_change = abs(weight_change_kg) * KCAL_PER_KG / days_to_goal
    weekly_rate = weight_change_kg / (days_to_goal / 7)

    max_loss, max_gain = WEEKLY_RATE_CAPS[_gender_key(gender)]
    if is_weight_loss and weekly_rate < -max_loss:
        weekly_rate = -max_loss
        daily_change = max_loss * KCAL_PER_KG / 7
        warnings.append(
            f"Weekly deficit capped at {max_loss}kg/week for safety. "
            "Goal timeline may need adjustment."
        )
    elif not is_weight_loss and weekly_rate > max_gain:
        weekly_rate = max_gain
        daily_change = max_gain * KCAL_PER_KG / 7
        warnings.append(
            f"Weekly surplus capped at {max_gain}kg/week for optimal muscle gain. "
            "Goal timeline may need adjustment."
        )

    required_daily_deficit = daily_change if is_weight_loss else -daily_change
    baseline = round_half_up(tdee - required_daily_deficit)

    minimum = MINIMUM_CALORIES[_gender_key(gender)]
    if baseline < minimum:
        warnings.append(
            f"Calorie target raised to minimum safe level ({minimum} cal/day). "
            "Consider adjusting goal timeline."
        )
        baseline = minimum

    return BaselineCalories(baseline, required_daily_deficit, weekly_rate, warnings)


def calculate_protein_target_g(weight_kg: float, g_per_kg: float) -> tuple:
    """Protein grams for a body weight, with range warnings."""
    warnings = []
    if g_per_kg < MIN_PROTEIN_G_PER_KG:
        warnings.append(
            "Protein target is below recommended minimum (1.6g/kg). "
            "Consider increasing for better results."
        )
    elif g_per_kg > MAX_PROTEIN_G_PER_KG:
        warnings.append(
            "Protein target is higher than necessary (>2.5g/kg). "
            "Excess protein provides no additional benefit."
        )
    return round_half_up(weight_kg * g_per_kg), warnings


@dataclass
class NutritionPlan:
    """Generated baseline nutrition plan for a client."""

    bmr: int
    tdee: int
    baseline_calories: int
    protein_target_g: int
    carb_target_g: int
    fat_target_g: int
    weekly_weight_change_kg: float
    required_daily_deficit: float
    diet_type: str
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "bmr": self.bmr,
            "tdee": self.tdee,
            "baseline_calories": self.baseline_calories,
            "protein_target_g": self.protein_target_g,
            "carb_target_g": self.carb_target_g,
            "fat_target_g": self.fat_target_g,
            "weekly_weight_change_kg": round(self.weekly_weight_change_kg, 2),
            "required_daily_deficit": round(self.required_daily_deficit),
            "diet_type": self.diet_type,
            "warnings": list(self.warnings),
        }


def generate_nutrition_plan(
    weight_kg: float,
    height_cm: float,
    age: int,
    gender: Optional[str],
    activity_level: Optional[str],
    protein_g_per_kg: float,
    diet_type: Optional[str] = "balanced",
    goal_weight_kg: Optional[float] = None,
    goal_deadline: Optional[date] = None,
    today: Optional[date] = None,
) -> NutritionPlan:
    """
    Generate baseline calories and rest-day macros for a client.

    The rest-day carb/fat grams come from the same daily split the weekly
    engine uses, so the plan matches the engine's rest days exactly.
    """
    bmr = mifflin_st_jeor_bmr(weight_kg, height_cm, age, gender)
    tdee = calculate_tdee(bmr, activity_level)
    baseline = calculate_baseline_calories(
        tdee, weight_kg, goal_weight_kg, goal_deadline, gender, today
    )
    protein_g, protein_warnings = calculate_protein_target_g(weight_kg, protein_g_per_kg)
    macros = calculate_daily_macros(baseline.baseline_calories, protein_g, False, diet_type)

    warnings = baseline.warnings + protein_warnings
    if protein_g * 4 > baseline.baseline_calories:
        warnings.append("Protein alone exceeds calorie target. Review the protein multiplier.")

    logger.info(
        f"[ENERGY] Plan generated: bmr={bmr}, tdee={tdee}, "
        f"baseline={baseline.baseline_calories}, protein={protein_g}g, "
        f"warnings={len(warnings)}"
    )

    return NutritionPlan(
        bmr=bmr,
        tdee=tdee,
        baseline_calories=baseline.baseline_calories,
        protein_target_g=protein_g,
        carb_target_g=macros.carbs_g,
        fat_target_g=macros.fat_g,
        weekly_weight_change_kg=baseline.weekly_rate_kg,
        required_daily_deficit=baseline.required_daily_deficit,
        diet_type=normalize_diet_type(diet_type).value,
        warnings=warnings,
    )


def missing_energy_inputs(client: Any) -> List[str]:
    """Profile fields a nutrition plan cannot be generated without."""
    missing = []
    if not getattr(client, "current_weight", None):
        missing.append("current_weight")
    if not getattr(client, "height", None):
        missing.append("height")
    if not getattr(client, "gender", None):
        missing.append("gender")
    return missing


def nutrition_plan_for_client(
    client: Any, today: Optional[date] = None
) -> Optional[NutritionPlan]:
    """
    Nutrition plan from a client profile, or None when the profile lacks
    current weight, height or gender.

    Age comes from the date of birth (30 without one); the protein
    multiplier defaults to 1.8 g/kg.
    """
    missing = missing_energy_inputs(client)
    if missing:
        logger.info(
            f"[ENERGY] Client {getattr(client, 'id', '?')} is missing {', '.join(missing)}"
        )
        return None

    date_of_birth = getattr(client, "date_of_birth", None)
    age = age_from_birth_date(date_of_birth, today) if date_of_birth else DEFAULT_AGE

    return generate_nutrition_plan(
        weight_kg=client.current_weight_kg,
        height_cm=client.height_cm,
        age=age,
        gender=client.gender,
        activity_level=getattr(client, "work_activity_level", None),
        protein_g_per_kg=getattr(client, "protein_target_g_per_kg", None) or DEFAULT_PROTEIN_G_PER_KG,
        diet_type=getattr(client, "diet_type", None),
        goal_weight_kg=getattr(client, "goal_weight_kg", None),
        goal_deadline=getattr(client, "goal_deadline", None),
        today=today,
    )
