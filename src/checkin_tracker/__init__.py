"""
Check-in Tracker Module.

Compares client check-ins, measures progress toward weight and body fat
goals, and keeps track of check-in schedules, adherence and reminders.
"""

from .adherence import (
    AdherenceStats,
    build_adherence_stats,
    calculate_adherence_rate,
    calculate_streaks,
)
from .comparison import ComparisonReport, build_check_in_comparison, prepare_chart_data
from .goal_progress import GoalProgress, OnTrackStatus, calculate_goal_progress
from .metric_change import MetricChange, Trend, calculate_metric_change
from .records import CheckIn, CheckInFrequency, ClientProfile, ReminderPreferences
from .reminders import (
    ReminderDecision,
    ReminderType,
    can_send_reminder,
    plan_automated_reminders,
    plan_reminder,
)
from .schedule import (
    OverdueSeverity,
    calculate_next_expected_check_in,
    find_clients_due_soon,
    find_overdue_clients,
    schedule_status,
)

__all__ = [
    "AdherenceStats",
    "CheckIn",
    "CheckInFrequency",
    "ClientProfile",
    "ComparisonReport",
    "GoalProgress",
    "MetricChange",
    "OnTrackStatus",
    "OverdueSeverity",
    "ReminderDecision",
    "ReminderPreferences",
    "ReminderType",
    "Trend",
    "build_adherence_stats",
    "build_check_in_comparison",
    "calculate_adherence_rate",
    "calculate_goal_progress",
    "calculate_metric_change",
    "calculate_next_expected_check_in",
    "calculate_streaks",
    "can_send_reminder",
    "find_clients_due_soon",
    "find_overdue_clients",
    "plan_automated_reminders",
    "plan_reminder",
    "prepare_chart_data",
    "schedule_status",
]
