"""
Zeebe REST Job Client — Camunda 8 ``/v2/jobs`` API over httpx.

    POST /v2/jobs/activation           → {"jobs": [...]}
    POST /v2/jobs/{jobKey}/completion  {"variables": {...}}
    POST /v2/jobs/{jobKey}/failure     {"retries": n, "errorMessage": "..."}

Failing a job hands it back with one retry fewer; the engine decides whether
and when to redeliver it.
"""

from typing import Optional

import httpx
import structlog

from gridrisk.exceptions import JobClientError
from gridrisk.worker.jobs import ActivatedJob

logger = structlog.get_logger(__name__)


def _parse_job(raw: dict) -> ActivatedJob:
    process_instance_key = raw.get("processInstanceKey")
    return ActivatedJob(
        key=str(raw["jobKey"]),
        type=raw.get("type", ""),
        variables=raw.get("variables") or {},
        retries=int(raw.get("retries", 0)),
        process_instance_key=(
            str(process_instance_key) if process_instance_key is not None else None
        ),
    )


class ZeebeRestJobClient:
    """HTTP client for the workflow engine's job API."""

    def __init__(
        self,
        base_url: str,
        access_token: str = "",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.access_token = access_token
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        headers = {}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return httpx.AsyncClient(
            timeout=self.timeout,
            headers=headers,
            transport=self._transport,
        )

    async def _post(self, operation: str, path: str, payload: dict) -> httpx.Response:
        try:
            async with self._client() as client:
                resp = await client.post(f"{self.base_url}{path}", json=payload)
                resp.raise_for_status()
                return resp
        except httpx.HTTPStatusError as exc:
            raise JobClientError(
                operation, reason=f"http {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise JobClientError(operation, reason=str(exc)) from exc

    async def activate_jobs(
        self,
        task_type: str,
        worker: str,
        max_jobs: int,
        timeout_seconds: int,
    ) -> list[ActivatedJob]:
        resp = await self._post(
            "activate_jobs",
            "/v2/jobs/activation",
            {
                "type": task_type,
                "worker": worker,
                "timeout": timeout_seconds * 1000,
                "maxJobsToActivate": max_jobs,
            },
        )
        try:
            body = resp.json()
        except ValueError as exc:
            raise JobClientError("activate_jobs", reason="invalid json") from exc
        try:
            jobs = [_parse_job(j) for j in body.get("jobs") or []]
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise JobClientError(
                "activate_jobs", reason=f"malformed job: {exc!r}"
            ) from exc
        if jobs:
            logger.debug("jobs_activated", task_type=task_type, count=len(jobs))
        return jobs

    async def complete_job(self, job: ActivatedJob, variables: dict) -> None:
        await self._post(
            "complete_job",
            f"/v2/jobs/{job.key}/completion",
            {"variables": variables},
        )

    async def fail_job(self, job: ActivatedJob, error_message: str) -> None:
        await self._post(
            "fail_job",
            f"/v2/jobs/{job.key}/failure",
            {
                "retries": max(job.retries - 1, 0),
                "errorMessage": error_message,
            },
        )
