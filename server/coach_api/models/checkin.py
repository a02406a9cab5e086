"""Check-in record and metric change models."""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional


class CheckInRecord(BaseModel):
    """A client check-in with validated metric ranges."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    client_id: str
    created_at: str
    status: str = "pending"

    mood: Optional[int] = Field(default=None, ge=1, le=5)
    energy: Optional[int] = Field(default=None, ge=1, le=10)
    sleep: Optional[int] = Field(default=None, ge=1, le=10)
    stress: Optional[int] = Field(default=None, ge=1, le=10)
    notes: Optional[str] = None

    weight: Optional[float] = Field(default=None, gt=0, le=1000)
    weight_unit: str = "lbs"
    body_fat_percentage: Optional[float] = Field(default=None, ge=0, le=100)
    waist: Optional[float] = Field(default=None, gt=0)
    hips: Optional[float] = Field(default=None, gt=0)
    chest: Optional[float] = Field(default=None, gt=0)
    arms: Optional[float] = Field(default=None, gt=0)
    thighs: Optional[float] = Field(default=None, gt=0)
    measurement_unit: str = "in"

    workouts_completed: Optional[int] = Field(default=None, ge=0, le=100)
    adherence_percentage: Optional[float] = Field(default=None, ge=0, le=100)
    prs: Optional[str] = None
    challenges: Optional[str] = None
    ai_summary: Optional[str] = None


class MetricChange(BaseModel):
    """Change of one metric since the previous check-in."""

    current: float
    previous: Optional[float] = None
    change: Optional[float] = None
    percent_change: Optional[int] = None
    trend: Optional[str] = None


class CheckInComparison(BaseModel):
    """Per-metric changes between two consecutive check-ins."""

    current: CheckInRecord
    previous: Optional[CheckInRecord] = None
    changes: dict[str, MetricChange] = {}
    time_between_check_ins: Optional[int] = None
