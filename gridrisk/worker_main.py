"""
Worker Entry Point — runs the risk analysis job worker.

Usage:
    python -m gridrisk.worker_main

This does NOT run a web server. It polls the workflow engine for
``risk-analysis`` jobs and answers each with a completion or a failure.
"""

import asyncio
import signal

import structlog

from gridrisk.config import settings
from gridrisk.logging_config import configure_logging
from gridrisk.profiles.resolver import HttpProfileResolver
from gridrisk.worker.adapter import RiskAnalysisAdapter
from gridrisk.worker.modes import parse_mode
from gridrisk.worker.runner import JobWorker
from gridrisk.worker.zeebe_rest import ZeebeRestJobClient

logger = structlog.get_logger(__name__)


def build_worker() -> JobWorker:
    """Wire resolver, adapter and job client from settings."""
    resolver = HttpProfileResolver(
        base_url=settings.profile_service_url,
        timeout=settings.profile_timeout_seconds,
    )
    adapter = RiskAnalysisAdapter(
        resolver=resolver,
        segment_keys=settings.segment_keys,
        default_mode=parse_mode(settings.default_analysis_mode, field="DEFAULT_ANALYSIS_MODE"),
    )
    client = ZeebeRestJobClient(
        base_url=settings.zeebe_rest_address,
        access_token=settings.zeebe_access_token,
        timeout=settings.zeebe_request_timeout_seconds,
    )
    return JobWorker(
        client=client,
        adapter=adapter,
        task_type=settings.task_type,
        worker_name=settings.worker_name,
        job_timeout_seconds=settings.job_timeout_seconds,
        poll_interval_seconds=settings.poll_interval_seconds,
        max_jobs=settings.max_jobs_to_activate,
    )


async def main():
    """Initialize and run the worker until a shutdown signal arrives."""
    configure_logging(settings.log_level, settings.log_format)
    logger.info(
        "worker_starting",
        version=settings.app_version,
        task_type=settings.task_type,
        profile_service=settings.profile_service_url,
    )

    worker = build_worker()
    worker.start()

    stop_event = asyncio.Event()

    def _handle_signal(signum, frame):
        logger.info("shutdown_signal_received", signal=signum)
        stop_event.set()

    signal.signal(signal.SIGINT, _handle_signal)
    signal.signal(signal.SIGTERM, _handle_signal)

    logger.info("worker_running", msg="Waiting for jobs... Ctrl+C to stop.")

    await stop_event.wait()

    await worker.stop()
    logger.info("worker_shutdown_complete")


def run():
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
