"""
Job Boundary — what the worker sees of the workflow engine.

An activated job is a lease on one unit of work. The worker answers every
job exactly once: complete (with output variables) or fail (with a message).
"""

from typing import Any, Optional, Protocol

from pydantic import BaseModel, ConfigDict, Field


class ActivatedJob(BaseModel):
    """A job handed to this worker by the engine."""
    model_config = ConfigDict(frozen=True)

    key: str
    type: str
    variables: dict[str, Any] = Field(default_factory=dict)
    retries: int = 0
    process_instance_key: Optional[str] = None


class JobClient(Protocol):
    """Protocol for workflow engine job APIs."""

    async def activate_jobs(
        self,
        task_type: str,
        worker: str,
        max_jobs: int,
        timeout_seconds: int,
    ) -> list[ActivatedJob]:
        ...

    async def complete_job(self, job: ActivatedJob, variables: dict) -> None:
        ...

    async def fail_job(self, job: ActivatedJob, error_message: str) -> None:
        ...
