"""
Tests for check-in scheduling and overdue classification.
"""
from datetime import datetime, timedelta

import pytest

from checkin_tracker.records import CheckInFrequency
from checkin_tracker.schedule import (
    OverdueSeverity,
    calculate_next_expected_check_in,
    days_until_or_past_due,
    find_clients_due_soon,
    find_overdue_clients,
    frequency_in_days,
    is_client_overdue,
    next_day_of_week,
    overdue_severity,
    schedule_status,
)


# ============================================================================
# Next Expected Check-in
# ============================================================================

class TestNextExpectedCheckIn:
    """Tests for computing when the next check-in is due."""

    @pytest.mark.parametrize(
        "frequency,custom_days,expected",
        [
            ("weekly", None, 7),
            ("biweekly", None, 14),
            ("monthly", None, 30),
            ("custom", 10, 10),
            ("custom", None, 7),
            ("none", None, 0),
        ],
    )
    def test_frequency_in_days(self, frequency, custom_days, expected):
        assert frequency_in_days(frequency, custom_days) == expected

    def test_based_on_last_check_in(self, make_client, now):
        client = make_client(last_check_in_date=now - timedelta(days=2))
        assert calculate_next_expected_check_in(client) == now + timedelta(days=5)

    def test_based_on_creation_without_check_ins(self, make_client, now):
        client = make_client(created_at=now - timedelta(days=1), check_in_frequency="biweekly")
        assert calculate_next_expected_check_in(client) == now + timedelta(days=13)

    def test_no_schedule_has_no_date(self, make_client):
        client = make_client(check_in_frequency="none")
        assert calculate_next_expected_check_in(client) is None
        assert days_until_or_past_due(client) is None

    def test_unknown_frequency_is_weekly(self, make_client):
        assert make_client(check_in_frequency="fortnightly").check_in_frequency == CheckInFrequency.WEEKLY

    def test_rolls_forward_to_expected_day(self, make_client):
        """Last check-in on a Tuesday, weekly, expected Friday: next Friday after the due date."""
        tuesday = datetime(2025, 3, 4, 18, 30)
        client = make_client(last_check_in_date=tuesday, expected_check_in_day="Friday")
        assert calculate_next_expected_check_in(client) == datetime(2025, 3, 14, 18, 30)

    def test_expected_day_on_due_date_is_kept(self):
        """A due date already on the expected weekday does not move."""
        monday = datetime(2025, 3, 10)
        assert next_day_of_week(monday, "monday") == monday
        assert next_day_of_week(monday, "sunday") == datetime(2025, 3, 16)

    def test_iso_string_timestamps(self, make_client):
        client = make_client(last_check_in_date="2025-03-03T10:00:00Z")
        assert calculate_next_expected_check_in(client) == datetime(2025, 3, 10, 10, 0)


# ============================================================================
# Overdue Classification
# ============================================================================

class TestOverdueSeverity:
    """Tests for the UPCOMING -> DUE_SOON -> OVERDUE -> CRITICALLY_OVERDUE states."""

    @pytest.mark.parametrize(
        "days,severity",
        [
            (-10, OverdueSeverity.UPCOMING),
            (-4, OverdueSeverity.UPCOMING),
            (-3, OverdueSeverity.DUE_SOON),
            (-1, OverdueSeverity.DUE_SOON),
            (0, OverdueSeverity.OVERDUE),
            (3, OverdueSeverity.OVERDUE),
            (4, OverdueSeverity.CRITICALLY_OVERDUE),
        ],
    )
    def test_severity_thresholds(self, days, severity):
        assert overdue_severity(days) == severity

    def test_ten_days_since_weekly_check_in_is_overdue(self, make_client, now, today):
        client = make_client(last_check_in_date=now - timedelta(days=10))
        assert days_until_or_past_due(client, today) == 3
        status = schedule_status(client, today)
        assert status.severity == OverdueSeverity.OVERDUE
        assert is_client_overdue(client, today) is True

    def test_eleven_days_since_weekly_check_in_is_critical(self, make_client, now, today):
        client = make_client(last_check_in_date=now - timedelta(days=11))
        assert days_until_or_past_due(client, today) == 4
        assert schedule_status(client, today).severity == OverdueSeverity.CRITICALLY_OVERDUE

    def test_schedule_status_without_schedule(self, make_client, today):
        status = schedule_status(make_client(check_in_frequency="none"), today)
        assert status.frequency_days == 0
        assert status.severity is None
        assert status.to_dict()["next_expected_check_in"] is None


# ============================================================================
# Client Lists
# ============================================================================

class TestClientLists:
    """Tests for the overdue and due-soon client lists."""

    @pytest.fixture
    def clients(self, make_client, now):
        return [
            make_client(id="overdue_3", last_check_in_date=now - timedelta(days=10)),
            make_client(id="overdue_9", last_check_in_date=now - timedelta(days=16)),
            make_client(id="due_0", last_check_in_date=now - timedelta(days=7)),
            make_client(id="due_in_1", last_check_in_date=now - timedelta(days=6)),
            make_client(id="due_in_2", last_check_in_date=now - timedelta(days=5)),
            make_client(id="due_in_3", last_check_in_date=now - timedelta(days=4)),
            make_client(id="paused", check_in_frequency="none", last_check_in_date=now - timedelta(days=40)),
            make_client(id="inactive", active=False, last_check_in_date=now - timedelta(days=40)),
        ]

    def test_overdue_sorted_most_overdue_first(self, clients, today):
        overdue = find_overdue_clients(clients, today)
        assert [o.client.id for o in overdue] == ["overdue_9", "overdue_3", "due_0"]
        assert overdue[0].severity == OverdueSeverity.CRITICALLY_OVERDUE
        assert overdue[-1].days_overdue == 0

    def test_due_soon_window(self, clients, today):
        due_soon = find_clients_due_soon(clients, today)
        assert [d.client.id for d in due_soon] == ["due_in_1", "due_in_2"]
        assert [d.days_until_due for d in due_soon] == [1, 2]

    def test_wider_due_soon_window(self, clients, today):
        due_soon = find_clients_due_soon(clients, today, window_days=3)
        assert [d.client.id for d in due_soon] == ["due_in_1", "due_in_2", "due_in_3"]

    def test_paused_and_inactive_clients_excluded(self, clients, today):
        ids = {o.client.id for o in find_overdue_clients(clients, today)}
        assert "paused" not in ids
        assert "inactive" not in ids

    def test_to_dict(self, clients, today):
        data = find_overdue_clients(clients, today)[0].to_dict()
        assert data["client_id"] == "overdue_9"
        assert data["severity"] == "critically_overdue"
        assert data["days_overdue"] == 9
