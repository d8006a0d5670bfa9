"""Application configuration."""
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment."""

    # Storage
    data_dir: Path = Path("data")
    catalog_db_name: str = "catalog.db"
    sqlite_echo: bool = False

    # Application
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:5173,http://localhost:3000"

    # Project defaults (used when the create form leaves them out)
    default_story_point_hours: float = 4.0
    default_daily_hours: float = 8.0
    default_sprint_duration_days: int = 10

    # Colors
    default_epic_color: str = "#3B82F6"
    no_epic_color: str = "#9CA3AF"
    imported_status_color: str = "#6B7280"

    # Sprint lifecycle
    enforce_sprint_transitions: bool = True
    # With no completed status defined, completing a sprint sends every story back to the backlog
    backlog_all_when_no_completed_status: bool = True

    @property
    def cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def catalog_path(self) -> Path:
        return self.data_dir / self.catalog_db_name

    class Config:
        env_prefix = "SPRINTDESK_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache
def get_settings() -> Settings:
    return Settings()
