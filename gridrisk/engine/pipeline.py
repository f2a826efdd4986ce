"""
Risk Scoring Pipeline — the single entry point for one analysis run.

    segments + profile → score each segment → aggregate → ScoreResult

Pure and deterministic: identical inputs and an identical profile snapshot
produce an identical ScoreResult.
"""

from typing import Mapping

import structlog

from gridrisk.engine.aggregator import derive_risk, select_top_segment
from gridrisk.engine.schemas import AnalysisProfile, ScoreResult, SegmentInput
from gridrisk.engine.scorer import score_segment

logger = structlog.get_logger(__name__)


def evaluate(
    segments: Mapping[str, SegmentInput],
    profile: AnalysisProfile,
) -> ScoreResult:
    """Score every segment and derive the overload verdict."""
    segment_scores = {key: score_segment(seg, profile) for key, seg in segments.items()}

    top_segment, max_score = select_top_segment(segment_scores)
    risk = derive_risk(max_score, profile)

    result = ScoreResult(
        segment_scores=segment_scores,
        top_risk_segment=top_segment,
        overload_probability=risk.overload_probability,
        risk_level=risk.classification.risk_level,
        recommendation_code=risk.classification.recommendation_code,
        recommendation_text=risk.classification.recommendation_text,
    )

    logger.info(
        "risk_evaluated",
        profile=profile.id.value,
        segment_scores=segment_scores,
        top_risk_segment=top_segment,
        overload_probability=risk.overload_probability,
        risk_level=result.risk_level.value,
        recommendation=result.recommendation_code.value,
    )
    return result
