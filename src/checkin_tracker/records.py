"""
Client and Check-in Records.

Read-only snapshots handed to the calculators by the persistence layer.
Weights are stored in the unit they were recorded in and converted to
kilograms (lengths to centimeters) before any arithmetic across records.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from nutrition_planner.units import length_to_cm, weight_to_kg


class CheckInFrequency(str, Enum):
    """How often a client is expected to check in."""

    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    CUSTOM = "custom"
    NONE = "none"


class CheckInStatus(str, Enum):
    """Review state of a check-in."""

    PENDING = "pending"
    AI_PROCESSED = "ai_processed"
    REVIEWED = "reviewed"


def parse_date(value: Any) -> Optional[date]:
    """Accept a date, datetime or ISO string and return a date."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00")).date()


def parse_datetime(value: Any) -> Optional[datetime]:
    """
    Accept a datetime, date or ISO string and return a naive datetime.

    Timezone-aware values are converted to UTC so every timestamp handled by
    the calculators can be compared with every other.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    else:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def utc_now() -> datetime:
    """Current time as naive UTC, the same form parse_datetime returns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


@dataclass
class ReminderPreferences:
    """Per-client reminder settings."""

    enabled: bool = True
    auto_send: bool = False
    send_before_hours: int = 24


@dataclass
class ClientProfile:
    """A coaching client as seen by the calculators."""

    id: str
    name: str = ""
    coach_id: Optional[str] = None
    active: bool = True
    created_at: Optional[datetime] = None

    # Weights in ``weight_unit``
    weight_unit: str = "lbs"
    current_weight: Optional[float] = None
    goal_weight: Optional[float] = None
    starting_weight: Optional[float] = None

    current_body_fat_percentage: Optional[float] = None
    goal_body_fat_percentage: Optional[float] = None
    starting_body_fat_percentage: Optional[float] = None
    goal_deadline: Optional[date] = None
    unit_preference: str = "imperial"

    # Static profile
    height: Optional[float] = None
    height_unit: str = "in"
    gender: Optional[str] = None
    date_of_birth: Optional[date] = None

    # Nutrition
    diet_type: Optional[str] = "balanced"
    protein_target_g: Optional[float] = None
    protein_target_g_per_kg: Optional[float] = None
    baseline_calories: Optional[float] = None
    calorie_target: Optional[float] = None
    work_activity_level: Optional[str] = None
    nutrition_plan_base_weight_kg: Optional[float] = None

    # Check-in scheduling
    check_in_frequency: CheckInFrequency = CheckInFrequency.WEEKLY
    check_in_frequency_days: Optional[int] = None
    expected_check_in_day: Optional[str] = None
    last_check_in_date: Optional[datetime] = None
    last_reminder_sent_at: Optional[datetime] = None
    reminder_preferences: ReminderPreferences = field(default_factory=ReminderPreferences)

    def __post_init__(self):
        try:
            self.check_in_frequency = CheckInFrequency(self.check_in_frequency or "weekly")
        except ValueError:
            self.check_in_frequency = CheckInFrequency.WEEKLY
        self.created_at = parse_datetime(self.created_at)
        self.last_check_in_date = parse_datetime(self.last_check_in_date)
        self.last_reminder_sent_at = parse_datetime(self.last_reminder_sent_at)
        self.goal_deadline = parse_date(self.goal_deadline)
        self.date_of_birth = parse_date(self.date_of_birth)
        if self.expected_check_in_day:
            self.expected_check_in_day = self.expected_check_in_day.lower()

    @property
    def effective_baseline_calories(self) -> Optional[float]:
        return self.baseline_calories or self.calorie_target

    @property
    def has_check_in_schedule(self) -> bool:
        return self.check_in_frequency != CheckInFrequency.NONE

    def _kg(self, value: Optional[float]) -> Optional[float]:
        return None if value is None else weight_to_kg(value, self.weight_unit)

    @property
    def current_weight_kg(self) -> Optional[float]:
        return self._kg(self.current_weight)

    @property
    def goal_weight_kg(self) -> Optional[float]:
        return self._kg(self.goal_weight)

    @property
    def starting_weight_kg(self) -> Optional[float]:
        return self._kg(self.starting_weight)

    @property
    def height_cm(self) -> Optional[float]:
        return None if self.height is None else length_to_cm(self.height, self.height_unit)


@dataclass
class CheckIn:
    """A point-in-time client check-in."""

    id: str
    client_id: str
    created_at: datetime
    status: CheckInStatus = CheckInStatus.PENDING

    # Subjective
    mood: Optional[int] = None
    energy: Optional[int] = None
    sleep: Optional[int] = None
    stress: Optional[int] = None
    notes: Optional[str] = None

    # Body metrics
    weight: Optional[float] = None
    weight_unit: str = "lbs"
    body_fat_percentage: Optional[float] = None
    waist: Optional[float] = None
    hips: Optional[float] = None
    chest: Optional[float] = None
    arms: Optional[float] = None
    thighs: Optional[float] = None
    measurement_unit: str = "in"

    # Training and nutrition
    workouts_completed: Optional[int] = None
    adherence_percentage: Optional[float] = None
    prs: Optional[str] = None
    challenges: Optional[str] = None

    ai_summary: Optional[str] = None

    def __post_init__(self):
        self.created_at = parse_datetime(self.created_at)
        self.status = CheckInStatus(self.status or "pending")

    @property
    def weight_kg(self) -> Optional[float]:
        return None if self.weight is None else weight_to_kg(self.weight, self.weight_unit)

    def measurement_cm(self, name: str) -> Optional[float]:
        value = getattr(self, name)
        return None if value is None else length_to_cm(value, self.measurement_unit)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "client_id": self.client_id,
            "created_at": self.created_at.isoformat(),
            "status": self.status.value,
            "mood": self.mood,
            "energy": self.energy,
            "sleep": self.sleep,
            "stress": self.stress,
            "notes": self.notes,
            "weight": self.weight,
            "weight_unit": self.weight_unit,
            "body_fat_percentage": self.body_fat_percentage,
            "waist": self.waist,
            "hips": self.hips,
            "chest": self.chest,
            "arms": self.arms,
            "thighs": self.thighs,
            "measurement_unit": self.measurement_unit,
            "workouts_completed": self.workouts_completed,
            "adherence_percentage": self.adherence_percentage,
            "prs": self.prs,
            "challenges": self.challenges,
            "ai_summary": self.ai_summary,
        }
