"""
Check-in Adherence and Streaks.

Adherence compares the check-ins a client actually submitted with how many
their schedule expected since they joined. Streaks count consecutive
check-ins whose gaps stay within the schedule plus a short grace period.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional, Sequence, Tuple

from .records import ClientProfile, utc_now
from .schedule import frequency_in_days

logger = logging.getLogger(__name__)

# Extra days allowed between check-ins before a streak breaks
STREAK_GRACE_DAYS = 2


def calculate_adherence_rate(
    account_age_days: int, frequency_days: int, actual_count: int
) -> float:
    """
    Percentage of expected check-ins that were completed.

    Clients with no schedule, or too new to owe a check-in yet, score 100.
    Extra check-ins never push the rate above 100.
    """
    if frequency_days <= 0:
        return 100.0
    expected_count = max(account_age_days, 0) // frequency_days
    if expected_count == 0:
        return 100.0
    return round(min(actual_count / expected_count * 100, 100.0), 1)


def calculate_streaks(
    check_in_dates: Sequence[datetime],
    frequency_days: int,
    as_of: Optional[date] = None,
) -> Tuple[int, int]:
    """
    Current and longest check-in streaks.

    Args:
        check_in_dates: Check-in timestamps in any order
        frequency_days: Expected days between check-ins (0 disables streaks)
        as_of: If given, the current streak is 0 once the latest check-in is
            already further back than the allowed gap

    Returns:
        (current_streak, longest_streak)
    """
    if frequency_days <= 0 or not check_in_dates:
        return 0, 0

    tolerance = frequency_days + STREAK_GRACE_DAYS
    ordered = sorted(check_in_dates)
    days = [d.date() if isinstance(d, datetime) else d for d in ordered]

    running = 1
    longest = 1
    # Gaps are counted in calendar days, regardless of time of day
    for previous, current in zip(days, days[1:]):
        if (current - previous).days <= tolerance:
            running += 1
        else:
            running = 1
        longest = max(longest, running)

    current_streak = running
    if as_of is not None and (as_of - days[-1]).days > tolerance:
        current_streak = 0

    return current_streak, longest


@dataclass
class AdherenceStats:
    """Adherence summary for one client."""

    client_id: str
    total_check_ins_expected: int
    total_check_ins_completed: int
    check_in_adherence_rate: float
    current_streak: int
    longest_streak: int

    def to_dict(self) -> dict:
        return {
            "client_id": self.client_id,
            "total_check_ins_expected": self.total_check_ins_expected,
            "total_check_ins_completed": self.total_check_ins_completed,
            "check_in_adherence_rate": self.check_in_adherence_rate,
            "current_streak": self.current_streak,
            "longest_streak": self.longest_streak,
        }


def build_adherence_stats(
    client: ClientProfile,
    check_in_dates: List[datetime],
    today: Optional[date] = None,
) -> AdherenceStats:
    """Adherence rate, expected/completed counts and streaks for a client."""
    today = today or utc_now().date()
    frequency_days = frequency_in_days(
        client.check_in_frequency, client.check_in_frequency_days
    )
    account_age = (today - client.created_at.date()).days if client.created_at else 0
    expected = max(account_age, 0) // frequency_days if frequency_days > 0 else 0
    completed = len(check_in_dates)

    current_streak, longest_streak = calculate_streaks(check_in_dates, frequency_days, as_of=today)
    stats = AdherenceStats(
        client_id=client.id,
        total_check_ins_expected=expected,
        total_check_ins_completed=completed,
        check_in_adherence_rate=calculate_adherence_rate(account_age, frequency_days, completed),
        current_streak=current_streak,
        longest_streak=longest_streak,
    )

    logger.debug(
        f"[SCHEDULE] Adherence for {client.id}: {completed}/{expected} "
        f"({stats.check_in_adherence_rate}%), streak {current_streak}/{longest_streak}"
    )
    return stats
