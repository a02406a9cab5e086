"""Coach Check-in API - FastAPI application entry point."""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .routes import nutrition, progress, schedule, reminders

log = logging.getLogger(__name__)

settings = get_settings()

app = FastAPI(
    title="Coach Check-in API",
    description="Read-only API for client nutrition targets, progress and check-in schedules",
    version="1.0.0",
)

# Configure CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

# Include routers
app.include_router(schedule.router)
app.include_router(nutrition.router)
app.include_router(progress.router)
app.include_router(reminders.router)


@app.get("/health")
async def health_check():
    """Health check endpoint for the API."""
    return {"status": "healthy", "service": "coach-api"}


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run(
        "server.coach_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
    )
