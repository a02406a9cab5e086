"""Check-in schedule, adherence and reminder models."""
from pydantic import BaseModel, Field
from typing import Optional


class ScheduleStatus(BaseModel):
    """Where a client stands in their check-in schedule."""

    client_id: str
    frequency: str
    frequency_days: int = Field(ge=0, le=365)
    next_expected_check_in: Optional[str] = None
    days_overdue: Optional[int] = None
    severity: Optional[str] = None


class OverdueClient(BaseModel):
    """Client past their expected check-in date."""

    client_id: str
    name: str
    last_check_in_date: Optional[str] = None
    next_expected_check_in: str
    days_overdue: int = Field(ge=0)
    severity: str


class ClientDueSoon(BaseModel):
    """Client whose check-in is coming up."""

    client_id: str
    name: str
    next_expected_check_in: str
    days_until_due: int = Field(gt=0)


class AdherenceStats(BaseModel):
    """Check-in adherence summary."""

    client_id: str
    total_check_ins_expected: int
    total_check_ins_completed: int
    check_in_adherence_rate: float = Field(ge=0, le=100)
    current_streak: int
    longest_streak: int


class PendingReminder(BaseModel):
    """Reminder the automated run would send now."""

    client_id: str
    name: str
    reminder_type: str
    days_overdue: Optional[int] = None
    sent_via: str = "system"
