"""
Check-in Comparison Assembly.

Brings together everything the coach sees when reviewing a check-in: the
change of every tracked metric since the previous check-in, weight and body
fat goal progress, the goal deadline, and chart series for recent history.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, List, Optional

from nutrition_planner.units import (
    display_length_unit,
    display_weight_unit,
    length_from_cm,
    weight_from_kg,
    weight_to_kg,
)

from .goal_progress import (
    DeadlineProgress,
    GoalProgress,
    average_change_per_sample,
    average_weekly_change,
    calculate_deadline_progress,
    calculate_goal_progress,
    resolve_starting_value,
)
from .metric_change import MetricChange, calculate_metric_change, days_between
from .records import CheckIn, ClientProfile, utc_now

logger = logging.getLogger(__name__)

RECENT_CHECK_IN_LIMIT = 10

MEASUREMENT_METRICS = ("waist", "hips", "chest", "arms", "thighs")
PLAIN_METRICS = (
    "body_fat_percentage",
    "workouts_completed",
    "adherence_percentage",
    "mood",
    "energy",
    "sleep",
    "stress",
)


@dataclass
class ChartPoint:
    """One point of a progress chart series."""

    date: str
    value: float
    label: str

    def to_dict(self) -> dict:
        return {"date": self.date, "value": self.value, "label": self.label}


@dataclass
class CheckInComparison:
    """Metric changes between the current and previous check-in."""

    current: CheckIn
    previous: Optional[CheckIn]
    changes: Dict[str, MetricChange] = field(default_factory=dict)
    time_between_check_ins: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "current": self.current.to_dict(),
            "previous": self.previous.to_dict() if self.previous else None,
            "changes": {name: change.to_dict() for name, change in self.changes.items()},
            "time_between_check_ins": self.time_between_check_ins,
        }


@dataclass
class GoalProgressReport:
    """Goal blocks; a missing block means no goal is set."""

    weight: Optional[GoalProgress] = None
    body_fat: Optional[GoalProgress] = None
    deadline: Optional[DeadlineProgress] = None

    def to_dict(self) -> dict:
        result = {}
        if self.weight:
            result["weight"] = self.weight.to_dict()
        if self.body_fat:
            result["body_fat"] = self.body_fat.to_dict()
        if self.deadline:
            result["deadline"] = self.deadline.to_dict()
        return result


@dataclass
class ComparisonReport:
    """Everything needed to review one check-in."""

    comparison: CheckInComparison
    goal_progress: GoalProgressReport
    chart_data: Dict[str, List[ChartPoint]]

    def to_dict(self) -> dict:
        return {
            "comparison": self.comparison.to_dict(),
            "goal_progress": self.goal_progress.to_dict(),
            "chart_data": {
                name: [point.to_dict() for point in points]
                for name, points in self.chart_data.items()
            },
        }


def _display_weight(weight: Optional[float], unit: str, display_unit: str) -> Optional[float]:
    if weight is None:
        return None
    return round(weight_from_kg(weight_to_kg(weight, unit), display_unit), 2)


def _display_measurement(check_in: CheckIn, name: str, display_unit: str) -> Optional[float]:
    value_cm = check_in.measurement_cm(name)
    if value_cm is None:
        return None
    return round(length_from_cm(value_cm, display_unit), 2)


def _chart_date(moment: datetime) -> str:
    return f"{moment:%b} {moment.day}"


def prepare_chart_data(
    check_ins: List[CheckIn], unit_preference: str = "imperial"
) -> Dict[str, List[ChartPoint]]:
    """Chronological chart series for weight, body fat, adherence, mood and energy."""
    weight_unit = display_weight_unit(unit_preference)
    series: Dict[str, List[ChartPoint]] = {
        "weight": [],
        "body_fat": [],
        "adherence": [],
        "mood": [],
        "energy": [],
    }

    for check_in in sorted(check_ins, key=lambda c: c.created_at):
        label_date = _chart_date(check_in.created_at)
        weight = _display_weight(check_in.weight, check_in.weight_unit, weight_unit)
        if weight is not None:
            series["weight"].append(ChartPoint(label_date, weight, f"{weight} {weight_unit}"))
        if check_in.body_fat_percentage is not None:
            value = check_in.body_fat_percentage
            series["body_fat"].append(ChartPoint(label_date, value, f"{value}%"))
        if check_in.adherence_percentage is not None:
            value = check_in.adherence_percentage
            series["adherence"].append(ChartPoint(label_date, value, f"{value}%"))
        if check_in.mood is not None:
            series["mood"].append(ChartPoint(label_date, check_in.mood, f"{check_in.mood}/5"))
        if check_in.energy is not None:
            series["energy"].append(
                ChartPoint(label_date, check_in.energy, f"{check_in.energy}/10")
            )

    return series


def compare_check_ins(
    current: CheckIn, previous: Optional[CheckIn], unit_preference: str = "imperial"
) -> CheckInComparison:
    """
    Per-metric changes between two check-ins.

    Weights and measurements are brought to the client's display unit before
    subtracting, so check-ins recorded in different units compare correctly.
    """
    weight_unit = display_weight_unit(unit_preference)
    length_unit = display_length_unit(unit_preference)
    changes: Dict[str, MetricChange] = {}

    def add(name: str, current_value, previous_value):
        change = calculate_metric_change(current_value, previous_value, metric=name)
        if change is not None:
            changes[name] = change

    add(
        "weight",
        _display_weight(current.weight, current.weight_unit, weight_unit),
        _display_weight(previous.weight, previous.weight_unit, weight_unit) if previous else None,
    )
    for name in MEASUREMENT_METRICS:
        add(
            name,
            _display_measurement(current, name, length_unit),
            _display_measurement(previous, name, length_unit) if previous else None,
        )
    for name in PLAIN_METRICS:
        add(name, getattr(current, name), getattr(previous, name) if previous else None)

    time_between = (
        days_between(current.created_at, previous.created_at) if previous else None
    )
    return CheckInComparison(
        current=current,
        previous=previous,
        changes=changes,
        time_between_check_ins=time_between,
    )


def build_check_in_comparison(
    current: CheckIn,
    previous: Optional[CheckIn],
    client: ClientProfile,
    recent_check_ins: List[CheckIn],
    first_check_in: Optional[CheckIn] = None,
    today: Optional[date] = None,
    now: Optional[datetime] = None,
    history_limit: int = RECENT_CHECK_IN_LIMIT,
) -> ComparisonReport:
    """
    Assemble the comparison report for a check-in.

    Args:
        current: The check-in under review
        previous: The check-in before it, if any
        client: Client profile with goals and unit preference
        recent_check_ins: Recent check-ins (any order)
        first_check_in: The client's first-ever check-in, if known
        today: Reference date for projections
        now: Reference time for the deadline countdown
        history_limit: How many of the newest check-ins feed trends and charts

    Returns:
        ComparisonReport with goal blocks only where a goal is set
    """
    now = now or utc_now()
    today = today or now.date()
    unit_preference = client.unit_preference
    weight_unit = display_weight_unit(unit_preference)

    recent = sorted(recent_check_ins, key=lambda c: c.created_at)[-history_limit:]
    comparison = compare_check_ins(current, previous, unit_preference)
    report = GoalProgressReport()

    # Weight goal
    current_weight = _display_weight(current.weight, current.weight_unit, weight_unit)
    goal_weight = _display_weight(client.goal_weight, client.weight_unit, weight_unit)
    if current_weight is not None and goal_weight is not None:
        weight_points = [
            (c.created_at, _display_weight(c.weight, c.weight_unit, weight_unit))
            for c in recent
            if c.weight is not None
        ]
        starting_weight = resolve_starting_value(
            _display_weight(client.starting_weight, client.weight_unit, weight_unit),
            _display_weight(first_check_in.weight, first_check_in.weight_unit, weight_unit)
            if first_check_in
            else None,
            [value for _, value in weight_points],
            current_weight,
        )
        report.weight = calculate_goal_progress(
            current_weight,
            goal_weight,
            starting_weight,
            average_weekly_change(weight_points),
            deadline=client.goal_deadline,
            today=today,
            period_days=7,
            unit=weight_unit,
        )

    # Body fat goal
    current_body_fat = current.body_fat_percentage
    goal_body_fat = client.goal_body_fat_percentage
    if current_body_fat is not None and goal_body_fat is not None:
        body_fat_points = [
            (c.created_at, c.body_fat_percentage)
            for c in recent
            if c.body_fat_percentage is not None
        ]
        values = [value for _, value in body_fat_points]
        period_days = None
        if len(body_fat_points) >= 2:
            span = days_between(body_fat_points[-1][0], body_fat_points[0][0])
            period_days = span / len(body_fat_points) if span > 0 else None

        starting_body_fat = resolve_starting_value(
            client.starting_body_fat_percentage,
            first_check_in.body_fat_percentage if first_check_in else None,
            values,
            current_body_fat,
        )
        report.body_fat = calculate_goal_progress(
            current_body_fat,
            goal_body_fat,
            starting_body_fat,
            average_change_per_sample(values),
            deadline=client.goal_deadline,
            today=today,
            period_days=period_days,
            unit="%",
        )
        # Weeks-to-goal projections are only reported for weight
        report.body_fat.weeks_to_goal = None
        report.body_fat.projected_completion_date = None

    if client.goal_deadline:
        report.deadline = calculate_deadline_progress(client.goal_deadline, now)

    logger.info(
        f"[PROGRESS] Comparison for check-in {current.id}: "
        f"{len(comparison.changes)} metrics, "
        f"weight_goal={'yes' if report.weight else 'no'}, "
        f"body_fat_goal={'yes' if report.body_fat else 'no'}"
    )

    return ComparisonReport(
        comparison=comparison,
        goal_progress=report,
        chart_data=prepare_chart_data(recent, unit_preference),
    )
