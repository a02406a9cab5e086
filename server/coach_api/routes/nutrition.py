"""Weekly nutrition target and nutrition plan routes."""
import logging

from fastapi import APIRouter, HTTPException

from checkin_tracker.records import utc_now
from nutrition_planner import nutrition_plan_for_client, summarize_week, weekly_targets_for_client
from nutrition_planner.energy import missing_energy_inputs
from nutrition_planner.macro_split import normalize_diet_type

from ..models.nutrition import (
    DailyNutritionTarget,
    NutritionPlan,
    NutritionPlanResponse,
    WeeklyNutritionResponse,
    WeeklySummary,
)
from ..database import db_manager
from ..queries import fetch_active_training_plan, fetch_client

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/clients", tags=["Nutrition"])


@router.get("/{client_id}/nutrition/weekly", response_model=WeeklyNutritionResponse)
async def get_weekly_nutrition(client_id: str):
    """Get the seven daily calorie and macro targets for a client's week."""
    with db_manager.get_conn() as conn:
        client = fetch_client(conn, client_id)
        if client is None:
            raise HTTPException(status_code=404, detail=f"Client not found: {client_id}")
        plan = fetch_active_training_plan(conn, client_id)

    targets = weekly_targets_for_client(client, plan)
    if targets is None:
        log.info(f"[API] No nutrition plan configured for client {client_id}")
        return WeeklyNutritionResponse(client_id=client_id, has_plan=False)

    return WeeklyNutritionResponse(
        client_id=client_id,
        has_plan=True,
        diet_type=normalize_diet_type(client.diet_type).value,
        training_plan_name=plan.name if plan else None,
        targets=[DailyNutritionTarget.model_validate(t.to_dict()) for t in targets],
        summary=WeeklySummary(**summarize_week(targets)),
    )


@router.get("/{client_id}/nutrition/plan", response_model=NutritionPlanResponse)
async def get_nutrition_plan(client_id: str):
    """
    Get BMR, TDEE, baseline calories and rest-day macros for a client.

    Generated from the profile's weight, height, gender, date of birth, work
    activity level and weight goal. Nothing is saved.
    """
    with db_manager.get_conn() as conn:
        client = fetch_client(conn, client_id)
    if client is None:
        raise HTTPException(status_code=404, detail=f"Client not found: {client_id}")

    missing = missing_energy_inputs(client)
    if missing:
        return NutritionPlanResponse(client_id=client_id, has_plan=False, missing=missing)

    plan = nutrition_plan_for_client(client, utc_now().date())
    return NutritionPlanResponse(
        client_id=client_id,
        has_plan=True,
        plan=NutritionPlan.model_validate(plan.to_dict()),
    )
