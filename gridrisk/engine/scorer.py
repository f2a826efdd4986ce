"""
Segment Scorer — bounded integer risk score for one grid segment.

    load_ratio = 1                              if expected_load == 0
               = current_load / expected_load   otherwise
    raw        = weather_weight + incident_weight × incidents + load_weight × load_ratio
    score      = round_half_up(clamp(raw, 0, 100))
"""

import math
from decimal import ROUND_HALF_UP, Decimal

from gridrisk.engine.schemas import AnalysisProfile, SegmentInput
from gridrisk.exceptions import InvalidProfileError

MIN_SCORE: int = 0
MAX_SCORE: int = 100


def load_ratio(segment: SegmentInput) -> float:
    """Current over expected load; an expected load of zero counts as fully loaded."""
    if segment.expected_load == 0:
        return 1.0
    return segment.current_load / segment.expected_load


def round_half_up(value: float) -> int:
    """Half-up on the exact binary value. Scores are clamped to be non-negative first."""
    return int(Decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def incident_term(weight: float, incidents: int) -> float:
    """``weight × incidents``, saturating to ±inf for counts beyond float range."""
    if weight == 0 or incidents == 0:
        return 0.0
    try:
        return weight * incidents
    except OverflowError:
        return math.copysign(math.inf, weight)


def score_segment(segment: SegmentInput, profile: AnalysisProfile) -> int:
    """Score one segment against a profile. Pure."""
    weather_weight = profile.weather_weights.get(segment.weather)
    if weather_weight is None:
        raise InvalidProfileError(
            f"Analysis profile '{profile.id.value}' has no weight for weather "
            f"'{segment.weather.value}'",
            mode=profile.id.value,
            details={"missing_weight": segment.weather.value},
        )

    raw = (
        weather_weight
        + incident_term(profile.incident_weight, segment.incidents)
        + profile.load_weight * load_ratio(segment)
    )
    # Clamp first; rounding needs a finite value.
    return round_half_up(max(MIN_SCORE, min(MAX_SCORE, raw)))
