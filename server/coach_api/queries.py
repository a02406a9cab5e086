"""SQLite row converters and read queries for the coaching database."""
import json
import sqlite3
from datetime import datetime
from typing import Optional

from checkin_tracker.records import CheckIn, ClientProfile, ReminderPreferences, parse_datetime
from nutrition_planner.training_days import TrainingPlan, TrainingSession


# Helpers to safely convert values (handles float strings like '7.0', '' and None)
def to_int(val) -> Optional[int]:
    return int(float(val)) if val not in (None, "") else None


def to_float(val) -> Optional[float]:
    return float(val) if val not in (None, "") else None


def to_bool(val, default: bool = False) -> bool:
    if val in (None, ""):
        return default
    if isinstance(val, str):
        return val.strip().lower() in ("1", "true", "yes", "t")
    return bool(val)


def _row_to_client(row) -> ClientProfile:
    """Convert SQLite row to ClientProfile."""
    return ClientProfile(
        id=row["id"],
        name=row["name"] or "",
        coach_id=row["coach_id"],
        active=to_bool(row["active"], default=True),
        created_at=row["created_at"],
        weight_unit=row["weight_unit"] or "lbs",
        current_weight=to_float(row["current_weight"]),
        goal_weight=to_float(row["goal_weight"]),
        starting_weight=to_float(row["starting_weight"]),
        current_body_fat_percentage=to_float(row["current_body_fat_percentage"]),
        goal_body_fat_percentage=to_float(row["goal_body_fat_percentage"]),
        starting_body_fat_percentage=to_float(row["starting_body_fat_percentage"]),
        goal_deadline=row["goal_deadline"],
        unit_preference=row["unit_preference"] or "imperial",
        height=to_float(row["height"]),
        height_unit=row["height_unit"] or "in",
        gender=row["gender"],
        date_of_birth=row["date_of_birth"],
        diet_type=row["diet_type"] or "balanced",
        protein_target_g=to_float(row["protein_target_g"]),
        protein_target_g_per_kg=to_float(row["protein_target_g_per_kg"]),
        baseline_calories=to_float(row["baseline_calories"]),
        calorie_target=to_float(row["calorie_target"]),
        work_activity_level=row["work_activity_level"],
        nutrition_plan_base_weight_kg=to_float(row["nutrition_plan_base_weight_kg"]),
        check_in_frequency=row["check_in_frequency"] or "weekly",
        check_in_frequency_days=to_int(row["check_in_frequency_days"]),
        expected_check_in_day=row["expected_check_in_day"],
        last_check_in_date=row["last_check_in_date"],
        last_reminder_sent_at=row["last_reminder_sent_at"],
        reminder_preferences=ReminderPreferences(
            enabled=to_bool(row["reminders_enabled"], default=True),
            auto_send=to_bool(row["reminders_auto_send"], default=False),
            send_before_hours=to_int(row["reminders_send_before_hours"]) or 24,
        ),
    )


def _row_to_check_in(row) -> CheckIn:
    """Convert SQLite row to CheckIn."""
    return CheckIn(
        id=row["id"],
        client_id=row["client_id"],
        created_at=row["created_at"],
        status=row["status"] or "pending",
        mood=to_int(row["mood"]),
        energy=to_int(row["energy"]),
        sleep=to_int(row["sleep"]),
        stress=to_int(row["stress"]),
        notes=row["notes"],
        weight=to_float(row["weight"]),
        weight_unit=row["weight_unit"] or "lbs",
        body_fat_percentage=to_float(row["body_fat_percentage"]),
        waist=to_float(row["waist"]),
        hips=to_float(row["hips"]),
        chest=to_float(row["chest"]),
        arms=to_float(row["arms"]),
        thighs=to_float(row["thighs"]),
        measurement_unit=row["measurement_unit"] or "in",
        workouts_completed=to_int(row["workouts_completed"]),
        adherence_percentage=to_float(row["adherence_percentage"]),
        prs=row["prs"],
        challenges=row["challenges"],
        ai_summary=row["ai_summary"],
    )


def _row_to_session(row) -> TrainingSession:
    """Convert SQLite row to TrainingSession; activity metadata is stored as JSON."""
    metadata = row["activity_metadata"]
    return TrainingSession.from_dict(
        {
            "name": row["name"],
            "session_type": row["session_type"] or "training",
            "day_of_week": row["day_of_week"],
            "estimated_calories": to_float(row["estimated_calories"]),
            "activity_metadata": json.loads(metadata) if metadata else {},
        }
    )


def fetch_client(conn: sqlite3.Connection, client_id: str) -> Optional[ClientProfile]:
    cursor = conn.cursor()
    cursor.execute("SELECT * FROM clients WHERE id = ?", (client_id,))
    row = cursor.fetchone()
    return _row_to_client(row) if row else None


def fetch_clients(conn: sqlite3.Connection, coach_id: Optional[str] = None) -> list[ClientProfile]:
    """All clients, optionally limited to one coach."""
    cursor = conn.cursor()
    if coach_id:
        cursor.execute("SELECT * FROM clients WHERE coach_id = ? ORDER BY name", (coach_id,))
    else:
        cursor.execute("SELECT * FROM clients ORDER BY name")
    return [_row_to_client(row) for row in cursor.fetchall()]


def fetch_check_in(conn: sqlite3.Connection, check_in_id: str) -> Optional[CheckIn]:
    cursor = conn.cursor()
    cursor.execute("SELECT * FROM check_ins WHERE id = ?", (check_in_id,))
    row = cursor.fetchone()
    return _row_to_check_in(row) if row else None


def fetch_previous_check_in(conn: sqlite3.Connection, check_in: CheckIn) -> Optional[CheckIn]:
    """The client's check-in immediately before the given one."""
    cursor = conn.cursor()
    cursor.execute(
        """
        SELECT * FROM check_ins
        WHERE client_id = ? AND created_at < ?
        ORDER BY created_at DESC
        LIMIT 1
        """,
        (check_in.client_id, check_in.created_at.isoformat()),
    )
    row = cursor.fetchone()
    return _row_to_check_in(row) if row else None


def fetch_first_check_in(conn: sqlite3.Connection, client_id: str) -> Optional[CheckIn]:
    cursor = conn.cursor()
    cursor.execute(
        "SELECT * FROM check_ins WHERE client_id = ? ORDER BY created_at ASC LIMIT 1",
        (client_id,),
    )
    row = cursor.fetchone()
    return _row_to_check_in(row) if row else None


def fetch_recent_check_ins(
    conn: sqlite3.Connection,
    client_id: str,
    limit: int,
    up_to: Optional[datetime] = None,
) -> list[CheckIn]:
    """Newest ``limit`` check-ins (optionally up to and including ``up_to``), oldest first."""
    cursor = conn.cursor()
    if up_to is not None:
        cursor.execute(
            """
            SELECT * FROM check_ins
            WHERE client_id = ? AND created_at <= ?
            ORDER BY created_at DESC
            LIMIT ?
            """,
            (client_id, up_to.isoformat(), limit),
        )
    else:
        cursor.execute(
            "SELECT * FROM check_ins WHERE client_id = ? ORDER BY created_at DESC LIMIT ?",
            (client_id, limit),
        )
    return list(reversed([_row_to_check_in(row) for row in cursor.fetchall()]))


def fetch_check_in_dates(conn: sqlite3.Connection, client_id: str) -> list[datetime]:
    cursor = conn.cursor()
    cursor.execute(
        "SELECT created_at FROM check_ins WHERE client_id = ? ORDER BY created_at ASC",
        (client_id,),
    )
    return [parse_datetime(row["created_at"]) for row in cursor.fetchall()]


def fetch_active_training_plan(conn: sqlite3.Connection, client_id: str) -> Optional[TrainingPlan]:
    """The client's most recent active training plan with its sessions."""
    cursor = conn.cursor()
    cursor.execute(
        """
        SELECT * FROM training_plans
        WHERE client_id = ? AND is_active = 1
        ORDER BY created_at DESC
        LIMIT 1
        """,
        (client_id,),
    )
    plan_row = cursor.fetchone()
    if not plan_row:
        return None

    cursor.execute(
        "SELECT * FROM training_sessions WHERE plan_id = ? ORDER BY id",
        (plan_row["id"],),
    )
    sessions = [_row_to_session(row) for row in cursor.fetchall()]

    return TrainingPlan(
        id=plan_row["id"],
        name=plan_row["name"],
        sessions=sessions,
        frequency_per_week=to_int(plan_row["frequency_per_week"]),
        split_type=plan_row["split_type"] or "custom",
    )
