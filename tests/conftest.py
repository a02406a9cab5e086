"""
Pytest fixtures for Coach Check-in tests.
"""
import json
import sqlite3
import sys
from datetime import date, datetime, timedelta
from pathlib import Path

import pytest
from dotenv import load_dotenv

# Ensure src/ and the project root are on sys.path so tests can import the
# calculator packages and the API server.
ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
for path in (SRC, ROOT):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

# Load environment variables
load_dotenv()


# ============================================================================
# Record Fixtures
# ============================================================================

@pytest.fixture
def today() -> date:
    return date(2025, 3, 10)  # a Monday


@pytest.fixture
def now(today) -> datetime:
    return datetime(today.year, today.month, today.day, 9, 0)


@pytest.fixture
def make_client(now):
    """Factory for ClientProfile records with sensible defaults."""
    from checkin_tracker.records import ClientProfile

    def _make_client(**overrides) -> ClientProfile:
        fields = {
            "id": "client_1",
            "name": "Test Client",
            "coach_id": "coach_1",
            "created_at": now - timedelta(days=70),
        }
        fields.update(overrides)
        return ClientProfile(**fields)

    return _make_client


@pytest.fixture
def make_check_in(now):
    """Factory for CheckIn records; ``days_ago`` sets created_at relative to now."""
    from checkin_tracker.records import CheckIn

    counter = {"n": 0}

    def _make_check_in(days_ago: int = 0, **overrides) -> CheckIn:
        counter["n"] += 1
        fields = {
            "id": f"ci_{counter['n']}",
            "client_id": "client_1",
            "created_at": now - timedelta(days=days_ago),
        }
        fields.update(overrides)
        return CheckIn(**fields)

    return _make_check_in


# ============================================================================
# Database Fixtures
# ============================================================================

def _insert(cursor: sqlite3.Cursor, table_name: str, row: dict) -> None:
    columns = ", ".join(row.keys())
    placeholders = ", ".join(["?"] * len(row))
    cursor.execute(
        f"INSERT INTO {table_name} ({columns}) VALUES ({placeholders})",
        list(row.values()),
    )


def _seed_rows(moment: datetime) -> dict:
    """Clients covering each schedule state, check-ins and one training plan."""

    def ago(days: int, hours: int = 0) -> str:
        return (moment - timedelta(days=days, hours=hours)).isoformat()

    clients = [
        {
            "id": "client_on_track",
            "coach_id": "coach_1",
            "name": "A On Track",
            "created_at": ago(70),
            "weight_unit": "lbs",
            "current_weight": 190,
            "goal_weight": 180,
            "starting_weight": 200,
            "goal_deadline": (moment.date() + timedelta(days=60)).isoformat(),
            "unit_preference": "imperial",
            "diet_type": "balanced",
            "protein_target_g": 150,
            "baseline_calories": 2000,
            "height": 70,
            "height_unit": "in",
            "gender": "male",
            "date_of_birth": f"{moment.year - 35}-01-01",
            "work_activity_level": "sedentary",
            "check_in_frequency": "weekly",
            "last_check_in_date": ago(3),
            "reminders_auto_send": 1,
        },
        {
            "id": "client_overdue",
            "coach_id": "coach_1",
            "name": "B Overdue",
            "created_at": ago(40),
            "check_in_frequency": "weekly",
            "last_check_in_date": ago(10),
            "reminders_auto_send": 1,
        },
        {
            "id": "client_critical",
            "coach_id": "coach_1",
            "name": "C Critical",
            "created_at": ago(40),
            "check_in_frequency": "weekly",
            "last_check_in_date": ago(11),
            "last_reminder_sent_at": ago(0, hours=2),
            "reminders_auto_send": 1,
        },
        {
            "id": "client_due_soon",
            "coach_id": "coach_2",
            "name": "D Due Soon",
            "created_at": ago(40),
            "check_in_frequency": "weekly",
            "last_check_in_date": ago(6),
            "reminders_auto_send": 1,
            "reminders_send_before_hours": 24,
        },
        {
            "id": "client_paused",
            "coach_id": "coach_1",
            "name": "E Paused",
            "created_at": ago(40),
            "check_in_frequency": "none",
            "last_check_in_date": ago(30),
            "reminders_auto_send": 1,
        },
        {
            "id": "client_inactive",
            "coach_id": "coach_1",
            "name": "F Inactive",
            "active": 0,
            "created_at": ago(40),
            "check_in_frequency": "weekly",
            "last_check_in_date": ago(20),
            "reminders_auto_send": 1,
        },
    ]

    check_ins = [
        {"id": "ci_1", "client_id": "client_on_track", "created_at": ago(17), "weight": 200, "mood": 3},
        {"id": "ci_2", "client_id": "client_on_track", "created_at": ago(10), "weight": 195, "mood": 3},
        {
            "id": "ci_3",
            "client_id": "client_on_track",
            "created_at": ago(3),
            "weight": 190,
            "mood": 4,
            "body_fat_percentage": 20.5,
            "adherence_percentage": 90,
        },
    ]

    plans = [
        {
            "id": "plan_1",
            "client_id": "client_on_track",
            "name": "Two Day Split",
            "split_type": "upper_lower",
            "frequency_per_week": 2,
            "is_active": 1,
            "created_at": ago(60),
        }
    ]
    sessions = [
        {"id": "s1", "plan_id": "plan_1", "name": "Upper", "day_of_week": "monday", "estimated_calories": 300},
        {"id": "s2", "plan_id": "plan_1", "name": "Lower", "day_of_week": "wednesday"},
        {
            "id": "s3",
            "plan_id": "plan_1",
            "name": "Sunday hike",
            "session_type": "external_activity",
            "day_of_week": "sunday",
            "activity_metadata": json.dumps({"estimated_calories": 400}),
        },
    ]

    return {
        "clients": clients,
        "check_ins": check_ins,
        "training_plans": plans,
        "training_sessions": sessions,
    }


@pytest.fixture
def coach_db(tmp_path, monkeypatch):
    """
    Temporary coaching database wired into the API's read-only db_manager.

    Timestamps are relative to the real current time because the API
    evaluates schedules against today's date.
    """
    from server.coach_api.config import Settings
    from server.coach_api.database import db_manager
    from checkin_tracker.records import utc_now
    from server.coach_api.schema import SCHEMA_SQL

    db_path = tmp_path / "coach.db"
    conn = sqlite3.connect(db_path)
    cursor = conn.cursor()
    cursor.executescript(SCHEMA_SQL)
    for table_name, rows in _seed_rows(utc_now().replace(microsecond=0)).items():
        for row in rows:
            _insert(cursor, table_name, row)
    conn.commit()
    conn.close()

    monkeypatch.setattr(db_manager, "settings", Settings(data_path=str(tmp_path)))
    return db_path
