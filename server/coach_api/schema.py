"""SQLite schema for the coaching database read by the API."""

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS clients (
    id TEXT PRIMARY KEY,
    coach_id TEXT,
    name TEXT NOT NULL,
    active INTEGER DEFAULT 1,
    created_at TEXT NOT NULL,
    weight_unit TEXT DEFAULT 'lbs',
    current_weight REAL,
    goal_weight REAL,
    starting_weight REAL,
    current_body_fat_percentage REAL,
    goal_body_fat_percentage REAL,
    starting_body_fat_percentage REAL,
    goal_deadline TEXT,
    unit_preference TEXT DEFAULT 'imperial',
    height REAL,
    height_unit TEXT DEFAULT 'in',
    gender TEXT,
    date_of_birth TEXT,
    diet_type TEXT DEFAULT 'balanced',
    protein_target_g REAL,
    protein_target_g_per_kg REAL,
    baseline_calories REAL,
    calorie_target REAL,
    work_activity_level TEXT,
    nutrition_plan_base_weight_kg REAL,
    check_in_frequency TEXT DEFAULT 'weekly',
    check_in_frequency_days INTEGER,
    expected_check_in_day TEXT,
    last_check_in_date TEXT,
    last_reminder_sent_at TEXT,
    reminders_enabled INTEGER DEFAULT 1,
    reminders_auto_send INTEGER DEFAULT 0,
    reminders_send_before_hours INTEGER DEFAULT 24
);

CREATE TABLE IF NOT EXISTS check_ins (
    id TEXT PRIMARY KEY,
    client_id TEXT NOT NULL REFERENCES clients(id),
    created_at TEXT NOT NULL,
    status TEXT DEFAULT 'pending',
    mood INTEGER,
    energy INTEGER,
    sleep INTEGER,
    stress INTEGER,
    notes TEXT,
    weight REAL,
    weight_unit TEXT DEFAULT 'lbs',
    body_fat_percentage REAL,
    waist REAL,
    hips REAL,
    chest REAL,
    arms REAL,
    thighs REAL,
    measurement_unit TEXT DEFAULT 'in',
    workouts_completed INTEGER,
    adherence_percentage REAL,
    prs TEXT,
    challenges TEXT,
    ai_summary TEXT
);

CREATE INDEX IF NOT EXISTS idx_check_ins_client_created
    ON check_ins (client_id, created_at);

CREATE TABLE IF NOT EXISTS training_plans (
    id TEXT PRIMARY KEY,
    client_id TEXT NOT NULL REFERENCES clients(id),
    name TEXT NOT NULL,
    split_type TEXT DEFAULT 'custom',
    frequency_per_week INTEGER,
    is_active INTEGER DEFAULT 1,
    created_at TEXT
);

CREATE TABLE IF NOT EXISTS training_sessions (
    id TEXT PRIMARY KEY,
    plan_id TEXT NOT NULL REFERENCES training_plans(id),
    name TEXT NOT NULL,
    session_type TEXT DEFAULT 'training',
    day_of_week TEXT,
    estimated_calories REAL,
    activity_metadata TEXT
);
"""
