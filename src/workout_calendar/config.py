"""Application settings."""

from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class CompletionTrigger(str, Enum):
    """When an exercise with every set logged is marked completed."""

    IMMEDIATE = "immediate"
    AFTER_FINAL_REST = "after-final-rest"


class WorkoutCompletion(str, Enum):
    """How a workout's completed flag is maintained."""

    MANUAL = "manual"  # user presses "complete workout"
    DERIVED = "derived"  # follows "every exercise completed"


class Settings(BaseSettings):
    """Runtime configuration, overridable through WORKOUT_CALENDAR_* variables."""

    model_config = SettingsConfigDict(
        env_prefix="WORKOUT_CALENDAR_",
        env_file=".env",
        extra="ignore",
    )

    # Storage
    data_dir: Path = Path("data")
    db_filename: str = "workout_calendar.db"

    # Sessions
    session_secret: str = "change-me-in-production"
    session_cookie: str = "workout_calendar_session"
    session_max_age: int = 7 * 24 * 3600

    # Identity headers set by the authenticating proxy
    auth_user_header: str = "X-Forwarded-User"
    auth_email_header: str = "X-Forwarded-Email"
    auth_first_name_header: str = "X-Forwarded-Given-Name"
    auth_last_name_header: str = "X-Forwarded-Family-Name"
    auth_picture_header: str = "X-Forwarded-Picture"

    # Policies
    strict_exercise_ownership: bool = False
    completion_trigger: CompletionTrigger = CompletionTrigger.IMMEDIATE
    workout_completion: WorkoutCompletion = WorkoutCompletion.DERIVED

    # Client
    local_user: str = "local"  # identity the CLI signs in as

    log_level: str = "INFO"

    @property
    def db_path(self) -> Path:
        """Database file inside the data directory."""
        return self.data_dir / self.db_filename


@lru_cache
def get_settings() -> Settings:
    """Get the process-wide settings instance."""
    return Settings()
