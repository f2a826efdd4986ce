"""
Risk Aggregator — from per-segment scores to one overload verdict.

Steps:
1. Pick the top-risk segment (highest score; ties → lowest key label)
2. Derive overload probability from the maximal score and the profile base
3. Classify the probability into one band (risk level + recommendation)

Risk level and recommendation share RISK_BANDS so their thresholds cannot
drift apart.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping, Optional

from gridrisk.engine.schemas import (
    AnalysisProfile,
    RecommendationCode,
    RiskClassification,
    RiskDerivation,
    RiskLevel,
)
from gridrisk.exceptions import InvalidInputError

# ── Configuration ─────────────────────────────────────────────────────────

PROBABILITY_QUANTUM = Decimal("0.01")

# (exclusive upper bound, classification); None = unbounded.
RISK_BANDS: tuple[tuple[Optional[float], RiskClassification], ...] = (
    (
        0.4,
        RiskClassification(
            risk_level=RiskLevel.LOW,
            recommendation_code=RecommendationCode.NO_ACTION,
            recommendation_text="No action required, keep monitoring.",
        ),
    ),
    (
        0.7,
        RiskClassification(
            risk_level=RiskLevel.MEDIUM,
            recommendation_code=RecommendationCode.MANUAL_REVIEW,
            recommendation_text="Manual review by a grid engineer recommended.",
        ),
    ),
    (
        None,
        RiskClassification(
            risk_level=RiskLevel.HIGH,
            recommendation_code=RecommendationCode.MEASURE_REQUIRED,
            recommendation_text=(
                "Action required: schedule maintenance or grid reinforcement promptly."
            ),
        ),
    ),
)


def select_top_segment(scores: Mapping[str, int]) -> tuple[str, int]:
    """
    Return (segment_key, max_score).

    Sorted by score descending, then key ascending, so equal scores always
    resolve to the same segment regardless of mapping order.
    """
    if not scores:
        raise InvalidInputError("No grid segments to aggregate", field="segmentScores")
    key, score = sorted(scores.items(), key=lambda item: (-item[1], item[0]))[0]
    return key, score


def round_probability(value: float) -> float:
    """Round half-up to 2 decimals on the exact binary value of ``value``."""
    return float(Decimal(value).quantize(PROBABILITY_QUANTUM, rounding=ROUND_HALF_UP))


def overload_probability(max_score: int, profile: AnalysisProfile) -> float:
    base = profile.overload_base
    prob = base + (max_score / 100) * (1 - base)
    return round_probability(max(0.0, min(1.0, prob)))


def classify(probability: float) -> RiskClassification:
    """Map a probability to its band. Bounds are inclusive-exclusive."""
    for upper, classification in RISK_BANDS:
        if upper is None or probability < upper:
            return classification
    raise AssertionError("RISK_BANDS must end with an unbounded band")


def derive_risk(max_score: int, profile: AnalysisProfile) -> RiskDerivation:
    probability = overload_probability(max_score, profile)
    return RiskDerivation(
        overload_probability=probability,
        classification=classify(probability),
    )
