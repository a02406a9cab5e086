"""
Unit Conversion Helpers.

All weight arithmetic inside the planners is done in kilograms and all
length arithmetic in centimeters. These helpers convert at the boundary
between stored/display units and the internal units.
"""

import math
from dataclasses import dataclass

LBS_PER_KG = 2.205
CM_PER_INCH = 2.54

# Weight swing (kg) since plan creation that warrants regenerating the plan
REGENERATION_THRESHOLD_KG = 3.0


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    if value < 0:
        return -int(math.floor(-value + 0.5))
    return int(math.floor(value + 0.5))


def lbs_to_kg(lbs: float) -> float:
    return lbs / LBS_PER_KG


def kg_to_lbs(kg: float) -> float:
    return kg * LBS_PER_KG


def inches_to_cm(inches: float) -> float:
    return inches * CM_PER_INCH


def cm_to_inches(cm: float) -> float:
    return cm / CM_PER_INCH


def weight_to_kg(weight: float, unit: str) -> float:
    """Convert a weight recorded in ``unit`` (lbs or kg) to kilograms."""
    return lbs_to_kg(weight) if unit == "lbs" else weight


def weight_from_kg(weight_kg: float, unit: str) -> float:
    """Convert kilograms to ``unit`` (lbs or kg)."""
    return kg_to_lbs(weight_kg) if unit == "lbs" else weight_kg


def length_to_cm(length: float, unit: str) -> float:
    return inches_to_cm(length) if unit == "in" else length


def length_from_cm(length_cm: float, unit: str) -> float:
    return cm_to_inches(length_cm) if unit == "in" else length_cm


def display_weight_unit(unit_preference: str) -> str:
    """Weight unit shown for a metric/imperial preference."""
    return "lbs" if unit_preference == "imperial" else "kg"


def display_length_unit(unit_preference: str) -> str:
    """Length unit shown for a metric/imperial preference."""
    return "in" if unit_preference == "imperial" else "cm"


def format_weight(weight_kg: float, unit_preference: str) -> str:
    """Format a kilogram weight for display, e.g. ``"180.0 lbs"``."""
    unit = display_weight_unit(unit_preference)
    return f"{weight_from_kg(weight_kg, unit):.1f} {unit}"


@dataclass
class WeightChange:
    """Absolute weight change expressed in a display unit."""

    value: float
    unit: str
    is_loss: bool

    def to_dict(self) -> dict:
        return {"value": self.value, "unit": self.unit, "is_loss": self.is_loss}


def weight_change(
    current_weight_kg: float, base_weight_kg: float, unit_preference: str
) -> WeightChange:
    """
    Describe the change from a base weight in the client's display unit.

    Args:
        current_weight_kg: Latest weight in kilograms
        base_weight_kg: Reference weight in kilograms (e.g. plan base weight)
        unit_preference: "metric" or "imperial"

    Returns:
        WeightChange with the absolute value rounded to one decimal
    """
    change_kg = current_weight_kg - base_weight_kg
    unit = display_weight_unit(unit_preference)
    value = weight_from_kg(abs(change_kg), unit)
    return WeightChange(value=round(value, 1), unit=unit, is_loss=change_kg < 0)


def should_show_regeneration_banner(
    current_weight_kg: float, base_weight_kg: float
) -> bool:
    """True when weight has moved enough that the nutrition plan is stale."""
    return abs(current_weight_kg - base_weight_kg) >= REGENERATION_THRESHOLD_KG


def protein_target_label(g_per_kg: float, unit_preference: str) -> str:
    """Human label for a protein multiplier in the client's unit system."""
    if unit_preference == "metric":
        return f"{g_per_kg:.1f}g per kg"
    return f"{g_per_kg / LBS_PER_KG:.2f}g per lb"
