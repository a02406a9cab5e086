"""Application configuration loaded from environment variables."""
import os
from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Database path
    data_path: str = os.getenv("DATA_PATH", os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

    @property
    def coach_db_path(self) -> str:
        return os.path.join(self.data_path, "coach.db")

    # API configuration
    api_host: str = "127.0.0.1"
    api_port: int = 8083

    # CORS
    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Check-ins considered for progress trends and charts
    recent_check_in_limit: int = 10

    class Config:
        env_prefix = "COACH_API_"


@lru_cache
def get_settings() -> Settings:
    return Settings()
