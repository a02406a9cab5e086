"""
Tests for the Coach Check-in API.

Requests go through the FastAPI app in-process over httpx's ASGI transport,
against a temporary read-only SQLite database seeded by the coach_db fixture.
"""
import httpx
import pytest
import pytest_asyncio


@pytest_asyncio.fixture
async def api_client(coach_db):
    from server.coach_api.main import app

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


# ============================================================================
# Row Conversion
# ============================================================================

class TestRowConversion:
    """Test the SQLite row converters handle loosely typed values."""

    def test_row_to_check_in_with_float_strings(self):
        """Integer metrics stored as float strings are converted."""
        from server.coach_api.queries import _row_to_check_in

        mock_row = {
            "id": "ci_1",
            "client_id": "client_1",
            "created_at": "2025-03-03T10:00:00",
            "status": None,
            "mood": "4.0",
            "energy": "7",
            "sleep": "",
            "stress": None,
            "notes": None,
            "weight": "190.5",
            "weight_unit": None,
            "body_fat_percentage": None,
            "waist": "34",
            "hips": None,
            "chest": None,
            "arms": None,
            "thighs": None,
            "measurement_unit": None,
            "workouts_completed": "4.0",
            "adherence_percentage": "90",
            "prs": None,
            "challenges": None,
            "ai_summary": None,
        }

        result = _row_to_check_in(mock_row)

        assert result.mood == 4
        assert result.energy == 7
        assert result.sleep is None
        assert result.weight == 190.5
        assert result.weight_unit == "lbs"
        assert result.workouts_completed == 4
        assert result.status.value == "pending"

    def test_bool_conversion(self):
        from server.coach_api.queries import to_bool

        assert to_bool(1) is True
        assert to_bool("0") is False
        assert to_bool("true") is True
        assert to_bool(None, default=True) is True


# ============================================================================
# Endpoints
# ============================================================================

class TestHealthEndpoint:

    @pytest.mark.asyncio
    async def test_health(self, api_client):
        response = await api_client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestWeeklyNutritionEndpoint:
    """Tests for GET /api/clients/{client_id}/nutrition/weekly."""

    @pytest.mark.asyncio
    async def test_weekly_targets(self, api_client):
        response = await api_client.get("/api/clients/client_on_track/nutrition/weekly")
        assert response.status_code == 200

        data = response.json()
        assert data["has_plan"] is True
        assert data["training_plan_name"] == "Two Day Split"
        assert len(data["targets"]) == 7

        monday, tuesday = data["targets"][0], data["targets"][1]
        assert monday["calories"] == 2300
        assert (monday["carbs_g"], monday["fat_g"]) == (234, 85)
        assert tuesday["calories"] == 2000
        assert (tuesday["carbs_g"], tuesday["fat_g"]) == (158, 86)

        sunday = data["targets"][6]
        assert sunday["is_training_day"] is False
        assert sunday["external_activity_calories"] == 400

        assert data["summary"]["training_days_count"] == 2
        assert data["summary"]["weekly_total_calories"] == 14700

    @pytest.mark.asyncio
    async def test_client_without_plan(self, api_client):
        """An incomplete profile is not an error; it has no targets."""
        response = await api_client.get("/api/clients/client_overdue/nutrition/weekly")
        assert response.status_code == 200
        data = response.json()
        assert data["has_plan"] is False
        assert data["targets"] is None

    @pytest.mark.asyncio
    async def test_unknown_client(self, api_client):
        response = await api_client.get("/api/clients/nobody/nutrition/weekly")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_generated_nutrition_plan(self, api_client):
        """190 lbs, 70 in, 35-year-old sedentary man losing toward 180 lbs."""
        response = await api_client.get("/api/clients/client_on_track/nutrition/plan")
        assert response.status_code == 200

        data = response.json()
        assert data["has_plan"] is True
        plan = data["plan"]
        assert plan["bmr"] == 1803
        assert plan["tdee"] == 2164
        assert plan["baseline_calories"] < plan["tdee"]
        assert plan["weekly_weight_change_kg"] < 0
        assert plan["protein_target_g"] == 155

    @pytest.mark.asyncio
    async def test_nutrition_plan_lists_missing_profile_data(self, api_client):
        response = await api_client.get("/api/clients/client_overdue/nutrition/plan")
        assert response.status_code == 200
        data = response.json()
        assert data["has_plan"] is False
        assert data["plan"] is None
        assert data["missing"] == ["current_weight", "height", "gender"]

    @pytest.mark.asyncio
    async def test_nutrition_plan_unknown_client(self, api_client):
        response = await api_client.get("/api/clients/nobody/nutrition/plan")
        assert response.status_code == 404


class TestComparisonEndpoint:
    """Tests for GET /api/check-ins/{check_in_id}/comparison."""

    @pytest.mark.asyncio
    async def test_comparison_with_weight_goal(self, api_client):
        response = await api_client.get("/api/check-ins/ci_3/comparison")
        assert response.status_code == 200

        data = response.json()
        assert data["client_id"] == "client_on_track"
        assert data["comparison"]["previous"]["id"] == "ci_2"
        assert data["comparison"]["changes"]["weight"]["change"] == -5
        assert data["comparison"]["changes"]["weight"]["trend"] == "down"
        assert data["comparison"]["time_between_check_ins"] == 7

        weight = data["goal_progress"]["weight"]
        assert weight["percent_complete"] == 50
        assert weight["remaining"] == 10
        assert weight["on_track"] == "on_track"
        assert weight["unit"] == "lbs"
        assert data["goal_progress"]["deadline"]["days_remaining"] == 60

        # No body fat goal configured
        assert "body_fat" not in data["goal_progress"]
        assert [p["value"] for p in data["chart_data"]["weight"]] == [200, 195, 190]

    @pytest.mark.asyncio
    async def test_first_check_in_has_no_previous(self, api_client):
        response = await api_client.get("/api/check-ins/ci_1/comparison")
        assert response.status_code == 200
        data = response.json()
        assert "previous" not in data["comparison"]
        assert "change" not in data["comparison"]["changes"]["weight"]

    @pytest.mark.asyncio
    async def test_unknown_check_in(self, api_client):
        response = await api_client.get("/api/check-ins/missing/comparison")
        assert response.status_code == 404


class TestScheduleEndpoints:
    """Tests for overdue, due-soon, schedule and adherence endpoints."""

    @pytest.mark.asyncio
    async def test_overdue_clients(self, api_client):
        response = await api_client.get("/api/clients/overdue")
        assert response.status_code == 200

        data = response.json()
        assert [c["client_id"] for c in data] == ["client_critical", "client_overdue"]
        assert data[0]["severity"] == "critically_overdue"
        assert data[0]["days_overdue"] == 4
        assert data[1]["severity"] == "overdue"
        assert data[1]["days_overdue"] == 3

    @pytest.mark.asyncio
    async def test_overdue_filtered_by_coach(self, api_client):
        response = await api_client.get("/api/clients/overdue", params={"coach_id": "coach_2"})
        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_due_soon_clients(self, api_client):
        response = await api_client.get("/api/clients/due-soon")
        assert response.status_code == 200
        data = response.json()
        assert [c["client_id"] for c in data] == ["client_due_soon"]
        assert data[0]["days_until_due"] == 1

    @pytest.mark.asyncio
    async def test_client_schedule(self, api_client):
        response = await api_client.get("/api/clients/client_on_track/schedule")
        assert response.status_code == 200
        data = response.json()
        assert data["frequency"] == "weekly"
        assert data["days_overdue"] == -4
        assert data["severity"] == "upcoming"

    @pytest.mark.asyncio
    async def test_paused_client_schedule(self, api_client):
        response = await api_client.get("/api/clients/client_paused/schedule")
        assert response.status_code == 200
        data = response.json()
        assert data["next_expected_check_in"] is None
        assert data["severity"] is None

    @pytest.mark.asyncio
    async def test_client_adherence(self, api_client):
        response = await api_client.get("/api/clients/client_on_track/adherence")
        assert response.status_code == 200
        data = response.json()
        assert data["total_check_ins_expected"] == 10
        assert data["total_check_ins_completed"] == 3
        assert data["check_in_adherence_rate"] == 30.0
        assert data["current_streak"] == 3
        assert data["longest_streak"] == 3

    @pytest.mark.asyncio
    async def test_adherence_unknown_client(self, api_client):
        response = await api_client.get("/api/clients/nobody/adherence")
        assert response.status_code == 404


class TestRemindersEndpoint:
    """Tests for GET /api/reminders/pending."""

    @pytest.mark.asyncio
    async def test_pending_reminders(self, api_client):
        response = await api_client.get("/api/reminders/pending")
        assert response.status_code == 200

        reminders = {r["client_id"]: r for r in response.json()}
        # client_critical was reminded two hours ago
        assert set(reminders) == {"client_overdue", "client_due_soon"}
        assert reminders["client_overdue"]["reminder_type"] == "overdue"
        assert reminders["client_overdue"]["days_overdue"] == 3
        assert reminders["client_due_soon"]["reminder_type"] == "upcoming"

    @pytest.mark.asyncio
    async def test_pending_reminders_for_coach(self, api_client):
        response = await api_client.get("/api/reminders/pending", params={"coach_id": "coach_2"})
        assert [r["client_id"] for r in response.json()] == ["client_due_soon"]
