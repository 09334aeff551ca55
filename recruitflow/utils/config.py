"""
Configuration for RecruitFlow.

Settings are grouped by concern, each group reading its own environment
prefix (``DB_``, ``WORKFLOW_``, ``STORAGE_``, ``LOG_``) and the top level
reading ``APP_`` plus an optional ``.env`` file.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from recruitflow.utils.constants import MAX_RESUME_SIZE_BYTES

# Relative defaults resolve against the working directory
DATA_DIR = Path("data")
LOG_DIR = Path("logs")


def _strip_slash(value: str) -> str:
    return value.rstrip("/")


class DatabaseSettings(BaseSettings):
    """Where the MongoDB entity store lives."""

    model_config = SettingsConfigDict(env_prefix="DB_")

    host: str = "localhost"
    port: int = Field(default=27017, ge=1, le=65535)
    name: str = "recruitflow"
    username: Optional[str] = None
    password: Optional[str] = None
    auth_source: Optional[str] = None
    replica_set: Optional[str] = None
    timeout_ms: int = Field(default=5000, ge=100)

    # Multi-document transactions need a replica set
    use_transactions: bool = False

    @property
    def has_credentials(self) -> bool:
        return bool(self.username and self.password)


class WorkflowSettings(BaseSettings):
    """Hiring workflow rules and listing defaults."""

    model_config = SettingsConfigDict(env_prefix="WORKFLOW_")

    default_page_size: int = Field(default=10, ge=1)
    max_page_size: int = Field(default=100, ge=1)

    # new -> reviewed -> sent_to_manager, no way back
    candidate_forward_only: bool = False

    # Public site serving /apply/{job_id}
    application_base_url: str = "http://localhost:3000"

    @field_validator("application_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return _strip_slash(v)

    @model_validator(mode="after")
    def check_page_sizes(self) -> "WorkflowSettings":
        if self.default_page_size > self.max_page_size:
            raise ValueError(
                f"default_page_size ({self.default_page_size}) exceeds "
                f"max_page_size ({self.max_page_size})"
            )
        return self


class StorageSettings(BaseSettings):
    """Resume file storage."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    resume_dir: Path = DATA_DIR / "resumes"
    public_base_url: str = "http://localhost:3000/resumes"
    max_resume_size_bytes: int = Field(default=MAX_RESUME_SIZE_BYTES, ge=1)

    @field_validator("public_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return _strip_slash(v)


class LoggingSettings(BaseSettings):
    """Log sinks, levels and retention."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: str = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"
    file_path: Path = LOG_DIR / "recruitflow.log"
    rotation: str = "10 MB"
    retention: str = "30 days"
    console_output: bool = True
    file_output: bool = True


class AppSettings(BaseSettings):
    """All RecruitFlow settings."""

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    name: str = "RecruitFlow"
    version: str = "0.1.0"
    debug: bool = False
    environment: Literal["development", "production", "testing"] = "development"

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    workflow: WorkflowSettings = Field(default_factory=WorkflowSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Settings read once from the environment and shared afterwards."""
    return AppSettings()


def reload_settings() -> AppSettings:
    """Drop the cached settings and read the environment again."""
    get_settings.cache_clear()
    return get_settings()
