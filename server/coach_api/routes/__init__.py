"""API route modules."""
from .nutrition import router as nutrition_router
from .progress import router as progress_router
from .schedule import router as schedule_router
from .reminders import router as reminders_router

__all__ = [
    "nutrition_router",
    "progress_router",
    "schedule_router",
    "reminders_router",
]
