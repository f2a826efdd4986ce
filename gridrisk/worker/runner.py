"""
Job Worker — polls the workflow engine and runs one job at a time.

Each poll activates at most ``max_jobs`` jobs and handles them sequentially.
The poll is scheduled with ``max_instances=1``, so a slow profile fetch delays
the next poll instead of overlapping it. Scale out by running more workers.
"""

import asyncio

import structlog
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from gridrisk.exceptions import JobClientError
from gridrisk.worker.adapter import RiskAnalysisAdapter
from gridrisk.worker.jobs import ActivatedJob, JobClient

logger = structlog.get_logger(__name__)

POLL_JOB_ID = "poll_jobs"


class JobWorker:
    """Background poll loop for one task type."""

    def __init__(
        self,
        client: JobClient,
        adapter: RiskAnalysisAdapter,
        task_type: str = "risk-analysis",
        worker_name: str = "gridrisk-worker",
        job_timeout_seconds: int = 60,
        poll_interval_seconds: float = 2.0,
        max_jobs: int = 1,
    ):
        self.client = client
        self.adapter = adapter
        self.task_type = task_type
        self.worker_name = worker_name
        self.job_timeout_seconds = job_timeout_seconds
        self.poll_interval_seconds = poll_interval_seconds
        self.max_jobs = max_jobs
        self.scheduler = AsyncIOScheduler()
        self._poll_lock = asyncio.Lock()

    def start(self):
        """Register and start the poll job."""
        self.scheduler.add_job(
            self.poll_once,
            IntervalTrigger(seconds=self.poll_interval_seconds),
            id=POLL_JOB_ID,
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        self.scheduler.start()
        logger.info(
            "job_worker_started",
            task_type=self.task_type,
            worker=self.worker_name,
            poll_interval=self.poll_interval_seconds,
        )

    async def stop(self):
        """Stop polling; a poll already in flight is reported before shutdown."""
        self.scheduler.pause()
        # The executor cancels running coroutines on shutdown.
        async with self._poll_lock:
            self.scheduler.shutdown(wait=False)
        logger.info("job_worker_stopped", task_type=self.task_type)

    async def poll_once(self) -> int:
        """Activate and process one batch of jobs. Returns jobs handled."""
        async with self._poll_lock:
            return await self._poll()

    async def _poll(self) -> int:
        try:
            jobs = await self.client.activate_jobs(
                task_type=self.task_type,
                worker=self.worker_name,
                max_jobs=self.max_jobs,
                timeout_seconds=self.job_timeout_seconds,
            )
        except JobClientError as e:
            logger.warning("job_activation_failed", error=e.message, **e.details)
            return 0

        for job in jobs:
            await self.process(job)
        return len(jobs)

    async def process(self, job: ActivatedJob) -> None:
        """Run one job through the adapter and report the outcome."""
        with structlog.contextvars.bound_contextvars(
            job_key=job.key, task_type=job.type
        ):
            outcome = await self.adapter.handle(job.variables)
            try:
                if outcome.succeeded:
                    await self.client.complete_job(job, outcome.variables or {})
                    logger.info("job_reported_complete")
                else:
                    await self.client.fail_job(job, outcome.error_message or "")
                    logger.info("job_reported_failed", error_code=outcome.error_code)
            except JobClientError as e:
                # Lease expiry makes the engine redeliver the job.
                logger.error("job_report_failed", error=e.message, **e.details)
