#!/usr/bin/env python3
"""
Populate the coaching SQLite database with demo clients and check-ins.

Dates are generated relative to today so the overdue, due-soon and reminder
views always have something to show.

Usage:
    python scripts/populate_database.py
"""
import json
import os
import sqlite3
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path


# Base directory (project root)
BASE_DIR = Path(__file__).parent.parent
if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

from server.coach_api.schema import SCHEMA_SQL  # noqa: E402

DB_FILE = "coach.db"
COACH_ID = "coach_demo"


def insert_row(cursor: sqlite3.Cursor, table_name: str, row: dict) -> None:
    """Insert one dict as a row; keys are column names."""
    columns = ", ".join(row.keys())
    placeholders = ", ".join(["?"] * len(row))
    cursor.execute(f"INSERT INTO {table_name} ({columns}) VALUES ({placeholders})", list(row.values()))


def demo_clients(now: datetime) -> list[dict]:
    """Three clients: one on track, one overdue, one due in two days."""
    return [
        {
            "id": "client_alex",
            "coach_id": COACH_ID,
            "name": "Alex Rivera",
            "created_at": (now - timedelta(days=70)).isoformat(),
            "weight_unit": "lbs",
            "current_weight": 190.0,
            "goal_weight": 180.0,
            "starting_weight": 200.0,
            "current_body_fat_percentage": 22.0,
            "goal_body_fat_percentage": 18.0,
            "goal_deadline": (now + timedelta(days=60)).date().isoformat(),
            "unit_preference": "imperial",
            "height": 70,
            "height_unit": "in",
            "gender": "male",
            "date_of_birth": "1990-04-12",
            "diet_type": "balanced",
            "protein_target_g": 165,
            "baseline_calories": 2300,
            "work_activity_level": "lightly_active",
            "check_in_frequency": "weekly",
            "expected_check_in_day": "monday",
            "last_check_in_date": (now - timedelta(days=3)).isoformat(),
            "reminders_enabled": 1,
            "reminders_auto_send": 1,
        },
        {
            "id": "client_sam",
            "coach_id": COACH_ID,
            "name": "Sam Okafor",
            "created_at": (now - timedelta(days=40)).isoformat(),
            "weight_unit": "kg",
            "current_weight": 68.0,
            "goal_weight": 63.0,
            "unit_preference": "metric",
            "gender": "female",
            "diet_type": "low_carb",
            "protein_target_g": 120,
            "calorie_target": 1750,
            "check_in_frequency": "weekly",
            "last_check_in_date": (now - timedelta(days=11)).isoformat(),
            "reminders_enabled": 1,
            "reminders_auto_send": 1,
        },
        {
            "id": "client_jordan",
            "coach_id": COACH_ID,
            "name": "Jordan Lee",
            "created_at": (now - timedelta(days=30)).isoformat(),
            "weight_unit": "lbs",
            "current_weight": 155.0,
            "unit_preference": "imperial",
            "check_in_frequency": "biweekly",
            "last_check_in_date": (now - timedelta(days=12)).isoformat(),
        },
    ]


def demo_check_ins(now: datetime) -> list[dict]:
    """Weekly check-ins for Alex, trending toward the goal, plus a few for Sam and Jordan."""
    rows = []
    alex_weights = [200.0, 198.4, 197.0, 195.6, 194.2, 193.0, 191.4, 190.0]
    alex_body_fat = [25.0, 24.6, 24.2, 23.8, 23.4, 23.0, 22.5, 22.0]
    for i, (weight, body_fat) in enumerate(zip(alex_weights, alex_body_fat)):
        days_ago = 3 + 7 * (len(alex_weights) - 1 - i)
        rows.append({
            "id": f"ci_alex_{i + 1}",
            "client_id": "client_alex",
            "created_at": (now - timedelta(days=days_ago)).isoformat(),
            "status": "reviewed" if i < len(alex_weights) - 1 else "pending",
            "mood": 3 + i % 3,
            "energy": 6 + i % 4,
            "sleep": 7,
            "stress": 4,
            "weight": weight,
            "weight_unit": "lbs",
            "body_fat_percentage": body_fat,
            "waist": round(36.0 - 0.25 * i, 2),
            "measurement_unit": "in",
            "workouts_completed": 4,
            "adherence_percentage": 85 + i,
        })

    for i, weight in enumerate([70.0, 69.2, 68.6, 68.0]):
        rows.append({
            "id": f"ci_sam_{i + 1}",
            "client_id": "client_sam",
            "created_at": (now - timedelta(days=11 + 7 * (3 - i))).isoformat(),
            "mood": 4,
            "energy": 7,
            "weight": weight,
            "weight_unit": "kg",
            "adherence_percentage": 80,
        })

    rows.append({
        "id": "ci_jordan_1",
        "client_id": "client_jordan",
        "created_at": (now - timedelta(days=12)).isoformat(),
        "mood": 5,
        "weight": 155.0,
    })
    return rows


def demo_training_plans(now: datetime) -> tuple[list[dict], list[dict]]:
    """An upper/lower plan for Alex with a weekend hike."""
    plans = [{
        "id": "plan_alex",
        "client_id": "client_alex",
        "name": "Upper / Lower 4x",
        "split_type": "upper_lower",
        "frequency_per_week": 4,
        "is_active": 1,
        "created_at": (now - timedelta(days=60)).isoformat(),
    }]
    sessions = [
        {"id": "s1", "plan_id": "plan_alex", "name": "Upper A", "day_of_week": "monday", "estimated_calories": 320},
        {"id": "s2", "plan_id": "plan_alex", "name": "Lower A", "day_of_week": "tuesday", "estimated_calories": 380},
        {"id": "s3", "plan_id": "plan_alex", "name": "Upper B", "day_of_week": "thursday", "estimated_calories": 320},
        {"id": "s4", "plan_id": "plan_alex", "name": "Lower B", "day_of_week": "friday", "estimated_calories": 380},
        {
            "id": "s5",
            "plan_id": "plan_alex",
            "name": "Saturday hike",
            "session_type": "external_activity",
            "day_of_week": "saturday",
            "activity_metadata": json.dumps({"estimated_calories": 450}),
        },
    ]
    return plans, sessions


def populate_database(db_path: Path) -> dict:
    """
    Create the coaching database and fill it with demo data.

    Args:
        db_path: Path of the SQLite file to (re)create

    Returns:
        Row counts per table
    """
    # Remove existing database file
    if db_path.exists():
        os.remove(db_path)
        print(f"  Removed existing: {db_path.name}")

    now = datetime.now(timezone.utc).replace(tzinfo=None, microsecond=0)
    plans, sessions = demo_training_plans(now)
    tables = {
        "clients": demo_clients(now),
        "check_ins": demo_check_ins(now),
        "training_plans": plans,
        "training_sessions": sessions,
    }

    conn = sqlite3.connect(db_path)
    cursor = conn.cursor()
    cursor.executescript(SCHEMA_SQL)

    counts = {}
    for table_name, rows in tables.items():
        for row in rows:
            insert_row(cursor, table_name, row)
        counts[table_name] = len(rows)

    conn.commit()
    conn.close()
    return counts


def main():
    """Populate the coaching database."""
    data_path = Path(os.getenv("DATA_PATH", str(BASE_DIR)))
    db_path = data_path / DB_FILE

    print("=" * 60)
    print("Coach Check-in Database Population Script")
    print("=" * 60)
    print(f"\nDatabase: {db_path}\n")

    counts = populate_database(db_path)
    for table_name, count in counts.items():
        print(f"  {table_name}: {count} rows")

    size_kb = db_path.stat().st_size / 1024
    print("=" * 60)
    print(f"Complete! {sum(counts.values())} rows ({size_kb:.1f} KB)")
    print("=" * 60)


if __name__ == "__main__":
    main()
