"""Check-in comparison and goal progress routes."""
import logging

from fastapi import APIRouter, HTTPException

from checkin_tracker import build_check_in_comparison

from ..config import get_settings
from ..models.progress import ComparisonResponse
from ..database import db_manager
from ..queries import (
    fetch_check_in,
    fetch_client,
    fetch_first_check_in,
    fetch_previous_check_in,
    fetch_recent_check_ins,
)

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/check-ins", tags=["Progress"])


@router.get(
    "/{check_in_id}/comparison",
    response_model=ComparisonResponse,
    response_model_exclude_none=True,
)
async def get_check_in_comparison(check_in_id: str):
    """
    Compare a check-in with the one before it.

    Includes weight and body fat goal progress when those goals are set,
    the deadline countdown, and chart series for recent check-ins.
    """
    limit = get_settings().recent_check_in_limit

    with db_manager.get_conn() as conn:
        current = fetch_check_in(conn, check_in_id)
        if current is None:
            raise HTTPException(status_code=404, detail=f"Check-in not found: {check_in_id}")
        client = fetch_client(conn, current.client_id)
        if client is None:
            raise HTTPException(status_code=404, detail=f"Client not found: {current.client_id}")

        previous = fetch_previous_check_in(conn, current)
        recent = fetch_recent_check_ins(conn, client.id, limit, up_to=current.created_at)
        first = fetch_first_check_in(conn, client.id)

    report = build_check_in_comparison(
        current, previous, client, recent, first_check_in=first, history_limit=limit
    )
    data = report.to_dict()
    return ComparisonResponse(client_id=client.id, **data)
