"""
Risk Analysis Job Adapter — one job in, one terminal outcome out.

State machine:
    RECEIVED → SCORING → COMPLETED
        │          │
        └──────────┴────→ FAILED

RECEIVED   select the analysis mode, validate segment variables
SCORING    fetch the profile (once), score segments, aggregate
COMPLETED  ScoreResult + analysisModeUsed (+ analysisDecision) as output variables
FAILED     one human-readable message; never partial output

The adapter holds no state between jobs.
"""

import uuid
from dataclasses import dataclass
from enum import StrEnum
from typing import Mapping, Optional, Sequence

import structlog

from gridrisk.engine.pipeline import evaluate
from gridrisk.engine.schemas import AnalysisMode
from gridrisk.exceptions import ErrorCode, GridRiskError
from gridrisk.profiles.resolver import ProfileResolver
from gridrisk.worker.modes import DECISION_VARIABLE, select_mode
from gridrisk.worker.variables import build_segments

logger = structlog.get_logger(__name__)

DEFAULT_SEGMENT_KEYS: tuple[str, ...] = ("A", "B", "C", "D")
MODE_USED_VARIABLE = "analysisModeUsed"


class JobState(StrEnum):
    RECEIVED = "received"
    SCORING = "scoring"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class JobOutcome:
    """
    Terminal result of one job.

    - COMPLETED: ``variables`` holds the output variables
    - FAILED: ``error_message`` / ``error_code`` describe why; ``failed_in``
      is the state the job was in when it failed
    """
    state: JobState
    variables: Optional[dict] = None
    error_message: Optional[str] = None
    error_code: Optional[str] = None
    failed_in: Optional[JobState] = None
    mode: Optional[AnalysisMode] = None

    @property
    def succeeded(self) -> bool:
        return self.state == JobState.COMPLETED


class RiskAnalysisAdapter:
    """Turns job variables into risk analysis output variables."""

    def __init__(
        self,
        resolver: ProfileResolver,
        segment_keys: Sequence[str] = DEFAULT_SEGMENT_KEYS,
        default_mode: AnalysisMode = AnalysisMode.STANDARD,
    ):
        self.resolver = resolver
        self.segment_keys = tuple(segment_keys)
        self.default_mode = default_mode

    async def handle(self, variables: Mapping[str, object]) -> JobOutcome:
        state = JobState.RECEIVED
        mode: Optional[AnalysisMode] = None

        try:
            selection = select_mode(variables, self.default_mode)
            mode = selection.mode
            logger.info(
                "job_received",
                mode=mode.value,
                decision=selection.decision,
            )
            segments = build_segments(variables, self.segment_keys)

            state = JobState.SCORING
            profile = await self.resolver.resolve(mode)
            result = evaluate(segments, profile)

        except GridRiskError as exc:
            logger.warning(
                "job_failed",
                failed_in=state.value,
                mode=mode.value if mode else None,
                error_code=exc.code.value,
                error=exc.message,
                details=exc.details,
            )
            return JobOutcome(
                state=JobState.FAILED,
                error_message=exc.message,
                error_code=exc.code.value,
                failed_in=state,
                mode=mode,
            )
        except Exception as exc:
            error_id = str(uuid.uuid4())
            logger.error(
                "job_unhandled_exception",
                error_id=error_id,
                failed_in=state.value,
                error=str(exc),
                exc_info=True,
            )
            return JobOutcome(
                state=JobState.FAILED,
                error_message=f"Risk analysis failed unexpectedly (error_id={error_id})",
                error_code=ErrorCode.INTERNAL_ERROR.value,
                failed_in=state,
                mode=mode,
            )

        output = result.to_variables()
        output[MODE_USED_VARIABLE] = mode.value
        if selection.decision is not None:
            output[DECISION_VARIABLE] = selection.decision

        logger.info(
            "job_completed",
            mode=mode.value,
            top_risk_segment=result.top_risk_segment,
            risk_level=result.risk_level.value,
        )
        return JobOutcome(state=JobState.COMPLETED, variables=output, mode=mode)
