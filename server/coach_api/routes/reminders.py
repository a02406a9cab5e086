"""Automated reminder routes."""
import logging
from typing import Optional

from fastapi import APIRouter, Query

from checkin_tracker import plan_automated_reminders
from checkin_tracker.records import utc_now

from ..models.schedule import PendingReminder
from ..database import db_manager
from ..queries import fetch_clients

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/reminders", tags=["Reminders"])


@router.get("/pending", response_model=list[PendingReminder])
async def get_pending_reminders(
    coach_id: Optional[str] = Query(default=None, description="Limit to one coach's clients"),
):
    """
    Get the reminders the automated run would send right now.

    Read-only: nothing is sent or recorded.
    """
    with db_manager.get_conn() as conn:
        clients = fetch_clients(conn, coach_id)

    decisions = plan_automated_reminders(clients, utc_now())
    return [PendingReminder.model_validate(d.to_dict()) for d in decisions]
