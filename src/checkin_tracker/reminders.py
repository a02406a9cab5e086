"""
Check-in Reminder Planning.

Decides which clients should receive an automated check-in reminder right now
and which kind. Delivery and persistence of the reminder happen elsewhere;
this module only answers "who, and what type".
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Iterable, List, Optional

from .records import ClientProfile, parse_datetime, utc_now
from .schedule import days_until_or_past_due

logger = logging.getLogger(__name__)

# A reminder is not re-sent within this window unless a coach sends it by hand
REMINDER_DEDUP_WINDOW = timedelta(hours=24)

DEFAULT_SEND_BEFORE_HOURS = 24


class ReminderType(str, Enum):
    UPCOMING = "upcoming"
    OVERDUE = "overdue"
    FOLLOW_UP = "follow_up"


class ReminderChannel(str, Enum):
    """Who triggered the reminder."""

    SYSTEM = "system"
    MANUAL = "manual"


def can_send_reminder(
    last_sent_at: Optional[datetime], now: Optional[datetime] = None, manual: bool = False
) -> bool:
    """False if a reminder went out within the de-duplication window."""
    if manual or last_sent_at is None:
        return True
    now = parse_datetime(now) if now is not None else utc_now()
    return now - parse_datetime(last_sent_at) >= REMINDER_DEDUP_WINDOW


def select_reminder_type(
    days_overdue: int, send_before_hours: int = DEFAULT_SEND_BEFORE_HOURS
) -> Optional[ReminderType]:
    """
    Reminder type for a client's position in their schedule.

    Args:
        days_overdue: Days past the expected check-in (negative = still ahead)
        send_before_hours: How early an upcoming reminder may go out

    Returns:
        The reminder type, or None when no reminder is due
    """
    hours_until_due = -days_overdue * 24
    if 0 < hours_until_due <= send_before_hours:
        return ReminderType.UPCOMING
    if 1 <= days_overdue <= 3:
        return ReminderType.OVERDUE
    if days_overdue >= 4:
        return ReminderType.FOLLOW_UP
    return None


@dataclass
class ReminderDecision:
    """A reminder that should be sent."""

    client: ClientProfile
    reminder_type: ReminderType
    days_overdue: Optional[int]
    sent_via: ReminderChannel = ReminderChannel.SYSTEM

    def to_dict(self) -> dict:
        return {
            "client_id": self.client.id,
            "name": self.client.name,
            "reminder_type": self.reminder_type.value,
            "days_overdue": self.days_overdue,
            "sent_via": self.sent_via.value,
        }


def plan_reminder(
    client: ClientProfile,
    reminder_type: ReminderType = ReminderType.OVERDUE,
    now: Optional[datetime] = None,
    manual: bool = False,
) -> Optional[ReminderDecision]:
    """
    Decide whether one reminder may go out to a client.

    A coach sending by hand (``manual=True``) bypasses the de-duplication
    window and the decision is recorded as a manual send.

    Returns:
        The decision, or None when a reminder already went out recently
    """
    now = parse_datetime(now) if now is not None else utc_now()

    if not can_send_reminder(client.last_reminder_sent_at, now, manual=manual):
        logger.info(
            f"[REMINDERS] Skipping {client.name or client.id}: "
            f"reminder already sent within last 24 hours"
        )
        return None

    days_overdue = days_until_or_past_due(client, now.date())
    return ReminderDecision(
        client=client,
        reminder_type=reminder_type,
        days_overdue=days_overdue if days_overdue is not None and days_overdue > 0 else None,
        sent_via=ReminderChannel.MANUAL if manual else ReminderChannel.SYSTEM,
    )


def plan_automated_reminders(
    clients: Iterable[ClientProfile], now: Optional[datetime] = None
) -> List[ReminderDecision]:
    """
    Reminders the daily automated run should send.

    Inactive clients, clients without a schedule, and clients whose reminders
    are disabled or not set to auto-send are skipped, as is anyone reminded
    within the last 24 hours.
    """
    now = parse_datetime(now) if now is not None else utc_now()
    decisions = []

    for client in clients:
        if not client.active or not client.has_check_in_schedule:
            continue

        prefs = client.reminder_preferences
        if not prefs.enabled or not prefs.auto_send:
            continue

        days_overdue = days_until_or_past_due(client, now.date())
        if days_overdue is None:
            continue

        reminder_type = select_reminder_type(
            days_overdue, prefs.send_before_hours or DEFAULT_SEND_BEFORE_HOURS
        )
        if reminder_type is None:
            continue

        decision = plan_reminder(client, reminder_type, now)
        if decision is not None:
            decisions.append(decision)

    logger.info(f"[REMINDERS] Planned {len(decisions)} automated reminders")
    return decisions
