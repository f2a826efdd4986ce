"""
Test fixtures for GridRisk tests.

Provides:
- Reference analysis profiles (standard / extended)
- Raw profile bodies as the profile service returns them
- Job variables for four grid segments
- In-memory profile resolvers
"""

import pytest

from gridrisk.engine.schemas import AnalysisMode, AnalysisProfile, SegmentInput, Weather
from gridrisk.profiles.resolver import StaticProfileResolver

STANDARD_PROFILE_BODY = {
    "id": "standard",
    "weatherWeights": {"good": 10, "moderate": 30, "bad": 60},
    "incidentWeight": 5,
    "loadWeight": 20,
    "overloadBase": 0.1,
}

EXTENDED_PROFILE_BODY = {
    "id": "extended",
    "weatherWeights": {"good": 15, "moderate": 40, "bad": 70},
    "incidentWeight": 8,
    "loadWeight": 25,
    "overloadBase": 0.2,
}


def make_segment(
    weather: Weather = Weather.GOOD,
    incidents: int = 0,
    current_load: float = 50,
    expected_load: float = 100,
) -> SegmentInput:
    return SegmentInput(
        weather=weather,
        incidents=incidents,
        current_load=current_load,
        expected_load=expected_load,
    )


def segment_variables(key: str, weather: str, incidents, current_load, expected_load) -> dict:
    return {
        f"segment{key}_weather": weather,
        f"segment{key}_incidents": incidents,
        f"segment{key}_currentLoad": current_load,
        f"segment{key}_expectedLoad": expected_load,
    }


@pytest.fixture
def standard_profile() -> AnalysisProfile:
    return AnalysisProfile.model_validate(STANDARD_PROFILE_BODY)


@pytest.fixture
def extended_profile() -> AnalysisProfile:
    return AnalysisProfile.model_validate(EXTENDED_PROFILE_BODY)


@pytest.fixture
def resolver(standard_profile, extended_profile) -> StaticProfileResolver:
    return StaticProfileResolver({
        AnalysisMode.STANDARD: standard_profile,
        AnalysisMode.EXTENDED: extended_profile,
    })


@pytest.fixture
def job_variables() -> dict:
    """
    Four segments against the standard profile score:
      A = 60 + 2×5 + 0.8×20 = 86
      B = 10 + 0   + 0.5×20 = 20
      C = 30 + 1×5 + 0.9×20 = 53
      D = 10 + 0   + 1.0×20 = 30   (expected load 0 → ratio 1)
    """
    variables: dict = {}
    variables.update(segment_variables("A", "bad", 2, 80, 100))
    variables.update(segment_variables("B", "good", 0, 50, 100))
    variables.update(segment_variables("C", "moderate", 1, 90, 100))
    variables.update(segment_variables("D", "good", 0, 50, 0))
    return variables
