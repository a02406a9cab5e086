"""
Check-in Schedule and Overdue Status.

Works out when each client's next check-in is expected and classifies how
late (or early) they are:

    UPCOMING -> DUE_SOON -> OVERDUE -> CRITICALLY_OVERDUE

The state is never stored; it is derived from the days between today and the
next expected check-in each time it is asked for.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Iterable, List, Optional, Union

from nutrition_planner.training_days import DAYS_OF_WEEK

from .records import CheckInFrequency, ClientProfile, utc_now

logger = logging.getLogger(__name__)

FREQUENCY_DAYS = {
    CheckInFrequency.WEEKLY: 7,
    CheckInFrequency.BIWEEKLY: 14,
    CheckInFrequency.MONTHLY: 30,
    CheckInFrequency.NONE: 0,
}
DEFAULT_CUSTOM_FREQUENCY_DAYS = 7

DUE_SOON_WINDOW_DAYS = 2


class OverdueSeverity(str, Enum):
    """How far a client is from (or past) their expected check-in."""

    UPCOMING = "upcoming"
    DUE_SOON = "due_soon"
    OVERDUE = "overdue"
    CRITICALLY_OVERDUE = "critically_overdue"


def frequency_in_days(
    frequency: Union[CheckInFrequency, str], custom_days: Optional[int] = None
) -> int:
    """Days between expected check-ins; 0 means no schedule."""
    frequency = CheckInFrequency(frequency)
    if frequency == CheckInFrequency.CUSTOM:
        return custom_days or DEFAULT_CUSTOM_FREQUENCY_DAYS
    return FREQUENCY_DAYS[frequency]


def next_day_of_week(from_date: datetime, day: str) -> datetime:
    """First occurrence of ``day`` on or after ``from_date``."""
    target = DAYS_OF_WEEK.index(day.lower())
    offset = (target - from_date.weekday()) % 7
    return from_date + timedelta(days=offset)


def calculate_next_expected_check_in(client: ClientProfile) -> Optional[datetime]:
    """
    When the client's next check-in is expected.

    The base is the last check-in, or the client's creation date when they have
    never checked in. If an expected weekday is set the date rolls forward to it.

    Returns:
        The expected datetime, or None for clients with no schedule
    """
    if not client.has_check_in_schedule:
        return None

    base = client.last_check_in_date or client.created_at
    if base is None:
        return None

    days = frequency_in_days(client.check_in_frequency, client.check_in_frequency_days)
    next_date = base + timedelta(days=days)

    if client.expected_check_in_day:
        try:
            return next_day_of_week(next_date, client.expected_check_in_day)
        except ValueError:
            logger.warning(
                f"[SCHEDULE] Unknown expected check-in day "
                f"'{client.expected_check_in_day}' for client {client.id}"
            )

    return next_date


def days_until_or_past_due(client: ClientProfile, today: Optional[date] = None) -> Optional[int]:
    """
    Days past the expected check-in (negative while it is still ahead).

    Returns None for clients with no schedule.
    """
    next_expected = calculate_next_expected_check_in(client)
    if next_expected is None:
        return None
    today = today or utc_now().date()
    return (today - next_expected.date()).days


def overdue_severity(days_overdue: int) -> OverdueSeverity:
    if days_overdue < -3:
        return OverdueSeverity.UPCOMING
    if days_overdue < 0:
        return OverdueSeverity.DUE_SOON
    if days_overdue <= 3:
        return OverdueSeverity.OVERDUE
    return OverdueSeverity.CRITICALLY_OVERDUE


def is_client_overdue(client: ClientProfile, today: Optional[date] = None) -> bool:
    days = days_until_or_past_due(client, today)
    return days is not None and days >= 0


@dataclass
class ScheduleStatus:
    """Schedule snapshot for one client."""

    client_id: str
    frequency: CheckInFrequency
    frequency_days: int
    next_expected_check_in: Optional[datetime] = None
    days_overdue: Optional[int] = None
    severity: Optional[OverdueSeverity] = None

    def to_dict(self) -> dict:
        return {
            "client_id": self.client_id,
            "frequency": self.frequency.value,
            "frequency_days": self.frequency_days,
            "next_expected_check_in": (
                self.next_expected_check_in.isoformat() if self.next_expected_check_in else None
            ),
            "days_overdue": self.days_overdue,
            "severity": self.severity.value if self.severity else None,
        }


def schedule_status(client: ClientProfile, today: Optional[date] = None) -> ScheduleStatus:
    """Next expected check-in, days overdue and severity for a client."""
    next_expected = calculate_next_expected_check_in(client)
    days = days_until_or_past_due(client, today)
    return ScheduleStatus(
        client_id=client.id,
        frequency=client.check_in_frequency,
        frequency_days=frequency_in_days(
            client.check_in_frequency, client.check_in_frequency_days
        ),
        next_expected_check_in=next_expected,
        days_overdue=days,
        severity=overdue_severity(days) if days is not None else None,
    )


@dataclass
class OverdueClient:
    """A client whose expected check-in date has passed."""

    client: ClientProfile
    next_expected_check_in: datetime
    days_overdue: int
    severity: OverdueSeverity

    def to_dict(self) -> dict:
        return {
            "client_id": self.client.id,
            "name": self.client.name,
            "last_check_in_date": (
                self.client.last_check_in_date.isoformat()
                if self.client.last_check_in_date
                else None
            ),
            "next_expected_check_in": self.next_expected_check_in.isoformat(),
            "days_overdue": self.days_overdue,
            "severity": self.severity.value,
        }


@dataclass
class ClientDueSoon:
    """A client whose check-in is due within the next few days."""

    client: ClientProfile
    next_expected_check_in: datetime
    days_until_due: int  # 1 means due tomorrow

    def to_dict(self) -> dict:
        return {
            "client_id": self.client.id,
            "name": self.client.name,
            "next_expected_check_in": self.next_expected_check_in.isoformat(),
            "days_until_due": self.days_until_due,
        }


def _scheduled(clients: Iterable[ClientProfile]) -> List[ClientProfile]:
    return [c for c in clients if c.active and c.has_check_in_schedule]


def find_overdue_clients(
    clients: Iterable[ClientProfile], today: Optional[date] = None
) -> List[OverdueClient]:
    """Active, scheduled clients at or past their expected date, most overdue first."""
    today = today or utc_now().date()
    overdue = []
    for client in _scheduled(clients):
        next_expected = calculate_next_expected_check_in(client)
        if next_expected is None:
            continue
        days = (today - next_expected.date()).days
        if days >= 0:
            overdue.append(
                OverdueClient(
                    client=client,
                    next_expected_check_in=next_expected,
                    days_overdue=days,
                    severity=overdue_severity(days),
                )
            )

    overdue.sort(key=lambda o: o.days_overdue, reverse=True)
    logger.info(f"[SCHEDULE] {len(overdue)} overdue clients as of {today.isoformat()}")
    return overdue


def find_clients_due_soon(
    clients: Iterable[ClientProfile],
    today: Optional[date] = None,
    window_days: int = DUE_SOON_WINDOW_DAYS,
) -> List[ClientDueSoon]:
    """Active, scheduled clients due within ``window_days``, soonest first."""
    today = today or utc_now().date()
    due_soon = []
    for client in _scheduled(clients):
        next_expected = calculate_next_expected_check_in(client)
        if next_expected is None:
            continue
        days = (today - next_expected.date()).days
        if -window_days <= days < 0:
            due_soon.append(
                ClientDueSoon(
                    client=client,
                    next_expected_check_in=next_expected,
                    days_until_due=-days,
                )
            )

    due_soon.sort(key=lambda d: d.days_until_due)
    logger.info(f"[SCHEDULE] {len(due_soon)} clients due within {window_days} days")
    return due_soon
