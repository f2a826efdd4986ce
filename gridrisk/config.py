"""
GridRisk Configuration.

Pydantic Settings v2 — loads from .env, environment variables.
"""

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Worker settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Application ──────────────────────────────────────────────────────
    app_version: str = "1.0.0"

    # ── Workflow Engine ──────────────────────────────────────────────────
    zeebe_rest_address: str = Field(
        default="http://localhost:8080", alias="ZEEBE_REST_ADDRESS"
    )
    zeebe_access_token: str = Field(default="", alias="ZEEBE_ACCESS_TOKEN")
    zeebe_request_timeout_seconds: float = Field(
        default=10.0, alias="ZEEBE_REQUEST_TIMEOUT_SECONDS"
    )

    # ── Job Worker ────────────────────────────────────────────────────────
    worker_name: str = Field(default="gridrisk-worker", alias="WORKER_NAME")
    task_type: str = Field(default="risk-analysis", alias="TASK_TYPE")
    job_timeout_seconds: int = Field(default=60, alias="JOB_TIMEOUT_SECONDS")
    poll_interval_seconds: float = Field(default=2.0, alias="POLL_INTERVAL_SECONDS")
    max_jobs_to_activate: int = Field(
        default=1,
        ge=1,
        alias="MAX_JOBS_TO_ACTIVATE",
        description="Jobs activated per poll; they are always handled one at a time",
    )

    # ── Profile Service ───────────────────────────────────────────────────
    profile_service_url: str = Field(
        default="http://localhost:3000", alias="PROFILE_SERVICE_URL"
    )
    profile_timeout_seconds: float = Field(default=30.0, alias="PROFILE_TIMEOUT_SECONDS")

    # ── Risk Analysis ─────────────────────────────────────────────────────
    default_analysis_mode: str = Field(default="standard", alias="DEFAULT_ANALYSIS_MODE")
    segment_keys: List[str] = Field(
        default=["A", "B", "C", "D"],
        alias="SEGMENT_KEYS",
    )

    # ── Operational ────────────────────────────────────────────────────────
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="console", alias="LOG_FORMAT")


settings = Settings()
