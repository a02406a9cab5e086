"""Check-in schedule and adherence routes."""
import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from checkin_tracker import (
    build_adherence_stats,
    find_clients_due_soon,
    find_overdue_clients,
    schedule_status,
)
from checkin_tracker.records import utc_now

from ..models.schedule import AdherenceStats, ClientDueSoon, OverdueClient, ScheduleStatus
from ..database import db_manager
from ..queries import fetch_check_in_dates, fetch_client, fetch_clients

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/clients", tags=["Check-in Schedule"])


@router.get("/overdue", response_model=list[OverdueClient])
async def get_overdue_clients(
    coach_id: Optional[str] = Query(default=None, description="Limit to one coach's clients"),
):
    """Get active clients past their expected check-in, most overdue first."""
    with db_manager.get_conn() as conn:
        clients = fetch_clients(conn, coach_id)

    overdue = find_overdue_clients(clients, utc_now().date())
    return [OverdueClient.model_validate(o.to_dict()) for o in overdue]


@router.get("/due-soon", response_model=list[ClientDueSoon])
async def get_clients_due_soon(
    coach_id: Optional[str] = Query(default=None, description="Limit to one coach's clients"),
):
    """Get active clients due within the next two days, soonest first."""
    with db_manager.get_conn() as conn:
        clients = fetch_clients(conn, coach_id)

    due_soon = find_clients_due_soon(clients, utc_now().date())
    return [ClientDueSoon.model_validate(d.to_dict()) for d in due_soon]


@router.get("/{client_id}/adherence", response_model=AdherenceStats)
async def get_client_adherence(client_id: str):
    """Get check-in adherence rate and streaks for a client."""
    with db_manager.get_conn() as conn:
        client = fetch_client(conn, client_id)
        if client is None:
            raise HTTPException(status_code=404, detail=f"Client not found: {client_id}")
        dates = fetch_check_in_dates(conn, client_id)

    stats = build_adherence_stats(client, dates, utc_now().date())
    return AdherenceStats.model_validate(stats.to_dict())


@router.get("/{client_id}/schedule", response_model=ScheduleStatus)
async def get_client_schedule(client_id: str):
    """Get the next expected check-in and overdue severity for a client."""
    with db_manager.get_conn() as conn:
        client = fetch_client(conn, client_id)
    if client is None:
        raise HTTPException(status_code=404, detail=f"Client not found: {client_id}")

    return ScheduleStatus.model_validate(schedule_status(client, utc_now().date()).to_dict())
