"""
Training Plan Day Derivation.

Turns a training plan snapshot into the per-day view the nutrition engine
needs: which days are training days, and which named sessions and external
activities add calories on each day. The view is recomputed from the plan on
every request and never stored.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional

from .units import round_half_up

logger = logging.getLogger(__name__)

DAYS_OF_WEEK = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

DAY_LABELS = {
    "monday": "Mon",
    "tuesday": "Tue",
    "wednesday": "Wed",
    "thursday": "Thu",
    "friday": "Fri",
    "saturday": "Sat",
    "sunday": "Sun",
}

# Used when a plan states a weekly frequency but no session has a day assigned
FALLBACK_DAY_DISTRIBUTION: Dict[int, FrozenSet[str]] = {
    1: frozenset({"monday"}),
    2: frozenset({"monday", "thursday"}),
    3: frozenset({"monday", "wednesday", "friday"}),
    4: frozenset({"monday", "tuesday", "thursday", "friday"}),
    5: frozenset({"monday", "tuesday", "wednesday", "thursday", "friday"}),
    6: frozenset(DAYS_OF_WEEK[:6]),
    7: frozenset(DAYS_OF_WEEK),
}


class SessionType(str, Enum):
    """Kind of entry in a training plan."""

    TRAINING = "training"
    EXTERNAL_ACTIVITY = "external_activity"


class SplitType(str, Enum):
    """Training split of a plan."""

    PUSH_PULL_LEGS = "push_pull_legs"
    UPPER_LOWER = "upper_lower"
    FULL_BODY = "full_body"
    BRO_SPLIT = "bro_split"
    PUSH_PULL = "push_pull"
    CUSTOM = "custom"


def normalize_split_type(value: Optional[str]) -> SplitType:
    """Map a possibly AI-generated split name onto a known split, else custom."""
    if isinstance(value, SplitType):
        return value
    try:
        return SplitType(str(value).strip().lower())
    except ValueError:
        if value:
            logger.warning(f"[TRAINING] Unknown split type {value!r}, using custom")
        return SplitType.CUSTOM


def _normalize_day(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    day = str(value).strip().lower()
    return day if day in DAYS_OF_WEEK else None


def _pick(data: Dict[str, Any], *keys: str, default=None):
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return default


@dataclass
class TrainingSession:
    """A scheduled training session or external activity."""

    name: str
    session_type: SessionType = SessionType.TRAINING
    day_of_week: Optional[str] = None
    estimated_calories: Optional[float] = None

    def __post_init__(self):
        self.session_type = SessionType(self.session_type)
        self.day_of_week = _normalize_day(self.day_of_week)

    @property
    def calories(self) -> float:
        return self.estimated_calories or 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TrainingSession":
        """
        Build a session from a persisted record.

        Accepts snake_case or camelCase keys. External activities carry their
        calorie estimate inside the activity metadata.
        """
        session_type = _pick(data, "session_type", "sessionType", default="training")
        if session_type == SessionType.EXTERNAL_ACTIVITY.value:
            metadata = _pick(data, "activity_metadata", "activityMetadata", default={})
            calories = _pick(metadata, "estimated_calories", "estimatedCalories")
        else:
            calories = _pick(data, "estimated_calories", "estimatedCalories")

        return cls(
            name=data.get("name", ""),
            session_type=session_type,
            day_of_week=_pick(data, "day_of_week", "dayOfWeek"),
            estimated_calories=calories,
        )


@dataclass
class TrainingPlan:
    """Snapshot of a client's active training plan."""

    name: str = ""
    sessions: List[TrainingSession] = field(default_factory=list)
    frequency_per_week: Optional[int] = None
    split_type: SplitType = SplitType.CUSTOM
    id: Optional[str] = None

    def __post_init__(self):
        self.split_type = normalize_split_type(self.split_type)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TrainingPlan":
        return cls(
            id=data.get("id"),
            name=data.get("name", ""),
            sessions=[TrainingSession.from_dict(s) for s in data.get("sessions") or []],
            frequency_per_week=_pick(data, "frequency_per_week", "frequencyPerWeek"),
            split_type=_pick(data, "split_type", "splitType", default="custom"),
        )


@dataclass
class CalorieContribution:
    """Named calorie addition shown on a day card."""

    name: str
    calories: float

    def to_dict(self) -> dict:
        return {"name": self.name, "calories": self.calories}


@dataclass
class TrainingPlanDay:
    """Derived per-day view of a training plan."""

    day: str
    is_training_day: bool
    training_sessions: List[CalorieContribution] = field(default_factory=list)
    external_activities: List[CalorieContribution] = field(default_factory=list)

    @property
    def training_session_calories(self) -> float:
        return sum(item.calories for item in self.training_sessions)

    @property
    def external_activity_calories(self) -> float:
        return sum(item.calories for item in self.external_activities)


def get_training_days(plan: Optional[TrainingPlan]) -> FrozenSet[str]:
    """
    Days of the week that have a training session.

    External activities do not make a day a training day. When no training
    session has a day assigned but the plan has a weekly frequency, the fixed
    fallback distribution for that frequency is used.
    """
    if plan is None:
        return frozenset()

    assigned = frozenset(
        session.day_of_week
        for session in plan.sessions
        if session.session_type == SessionType.TRAINING and session.day_of_week
    )
    if assigned:
        return assigned

    if plan.frequency_per_week:
        frequency = max(1, min(7, int(plan.frequency_per_week)))
        logger.debug(
            f"[TRAINING] No session days assigned, using {frequency}x/week distribution"
        )
        return FALLBACK_DAY_DISTRIBUTION[frequency]

    return frozenset()


def build_training_plan_days(plan: Optional[TrainingPlan]) -> List[TrainingPlanDay]:
    """Seven TrainingPlanDay records in canonical Monday-first order."""
    training_days = get_training_days(plan)
    days = {
        day: TrainingPlanDay(day=day, is_training_day=day in training_days)
        for day in DAYS_OF_WEEK
    }

    if plan is not None:
        for session in plan.sessions:
            if not session.day_of_week:
                continue
            contribution = CalorieContribution(name=session.name, calories=session.calories)
            if session.session_type == SessionType.TRAINING:
                days[session.day_of_week].training_sessions.append(contribution)
            else:
                days[session.day_of_week].external_activities.append(contribution)

    return [days[day] for day in DAYS_OF_WEEK]


def training_calories_by_day(plan: Optional[TrainingPlan]) -> Dict[str, float]:
    """Calories added per day by sessions and external activities combined."""
    return {
        plan_day.day: plan_day.training_session_calories + plan_day.external_activity_calories
        for plan_day in build_training_plan_days(plan)
    }


def weekly_training_calories(plan: Optional[TrainingPlan]) -> float:
    """Total calories of every session and activity in the plan."""
    if plan is None:
        return 0
    return sum(session.calories for session in plan.sessions)


def daily_average_training_calories(plan: Optional[TrainingPlan]) -> int:
    return round_half_up(weekly_training_calories(plan) / 7)
