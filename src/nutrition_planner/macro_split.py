"""
Diet-Type Macro Split.

Protein is a fixed recovery requirement (4 kcal/g) that does not move with
training load. The calories left after protein are split between carbs
(4 kcal/g) and fat (9 kcal/g) by a carb ratio chosen from the diet type and
whether the day is a training day. Each diet type has its own pair of
ratios so that, for example, keto stays ketogenic on training days.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .units import round_half_up

logger = logging.getLogger(__name__)

PROTEIN_KCAL_PER_G = 4
CARB_KCAL_PER_G = 4
FAT_KCAL_PER_G = 9


class DietType(str, Enum):
    """Macro-split policy selected by the coach."""

    BALANCED = "balanced"
    HIGH_CARB = "high_carb"
    LOW_CARB = "low_carb"
    KETO = "keto"
    CUSTOM = "custom"


@dataclass(frozen=True)
class CarbRatios:
    """Share of non-protein calories given to carbohydrate."""

    training_day: float
    rest_day: float


DIET_CARB_RATIOS = {
    DietType.KETO: CarbRatios(training_day=0.12, rest_day=0.08),
    DietType.LOW_CARB: CarbRatios(training_day=0.30, rest_day=0.20),
    DietType.BALANCED: CarbRatios(training_day=0.55, rest_day=0.45),
    DietType.CUSTOM: CarbRatios(training_day=0.55, rest_day=0.45),
    DietType.HIGH_CARB: CarbRatios(training_day=0.70, rest_day=0.60),
}


def normalize_diet_type(value: Optional[str]) -> DietType:
    """
    Map a stored or AI-generated diet type onto a known policy.

    Unrecognized values degrade to ``balanced`` instead of failing.
    """
    if isinstance(value, DietType):
        return value
    if value:
        try:
            return DietType(str(value).strip().lower())
        except ValueError:
            logger.warning(f"[MACROS] Unknown diet type {value!r}, using balanced")
    return DietType.BALANCED


def carb_ratio(diet_type, is_training_day: bool) -> float:
    """Carb share of the non-protein calories for a day."""
    ratios = DIET_CARB_RATIOS[normalize_diet_type(diet_type)]
    return ratios.training_day if is_training_day else ratios.rest_day


@dataclass
class DailyMacros:
    """Gram targets for one day."""

    protein_g: int
    carbs_g: int
    fat_g: int
    carb_ratio: float

    @property
    def derived_calories(self) -> int:
        """Calories implied by the rounded gram targets."""
        return (
            self.protein_g * PROTEIN_KCAL_PER_G
            + self.carbs_g * CARB_KCAL_PER_G
            + self.fat_g * FAT_KCAL_PER_G
        )

    def percentages(self) -> Tuple[int, int, int]:
        return macro_percentages(self.protein_g, self.carbs_g, self.fat_g)


def calculate_daily_macros(
    calories: float,
    protein_g: float,
    is_training_day: bool,
    diet_type="balanced",
) -> DailyMacros:
    """
    Split a day's calories into protein, carb and fat grams.

    Args:
        calories: Total calorie target for the day
        protein_g: Protein target in grams (constant across the week)
        is_training_day: Whether a training session is scheduled that day
        diet_type: Diet policy name; unknown values fall back to balanced

    Returns:
        DailyMacros with whole-gram targets
    """
    ratio = carb_ratio(diet_type, is_training_day)
    # Carbs and fat split whatever the reported whole-gram protein leaves
    protein_g = round_half_up(protein_g)
    protein_calories = protein_g * PROTEIN_KCAL_PER_G
    remaining = calories - protein_calories

    if remaining < 0:
        logger.warning(
            f"[MACROS] Protein ({protein_calories:.0f} kcal) exceeds day target "
            f"({calories:.0f} kcal); no calories left for carbs or fat"
        )
        remaining = 0

    return DailyMacros(
        protein_g=protein_g,
        carbs_g=round_half_up(remaining * ratio / CARB_KCAL_PER_G),
        fat_g=round_half_up(remaining * (1 - ratio) / FAT_KCAL_PER_G),
        carb_ratio=ratio,
    )


def macro_percentages(
    protein_g: float, carbs_g: float, fat_g: float
) -> Tuple[int, int, int]:
    """
    Calorie share of each macro as whole percentages.

    Fat takes the remainder so the three values always sum to exactly 100.
    """
    total = (
        protein_g * PROTEIN_KCAL_PER_G
        + carbs_g * CARB_KCAL_PER_G
        + fat_g * FAT_KCAL_PER_G
    )
    if total <= 0:
        return 0, 0, 0

    protein_percent = round_half_up(protein_g * PROTEIN_KCAL_PER_G / total * 100)
    carbs_percent = round_half_up(carbs_g * CARB_KCAL_PER_G / total * 100)
    fat_percent = 100 - protein_percent - carbs_percent
    return protein_percent, carbs_percent, fat_percent
