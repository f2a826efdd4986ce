"""
Risk Engine Schemas — immutable value objects for one analysis run.

Field names are snake_case in Python and camelCase on the wire (job
variables, profile service JSON). Every model is frozen: a job builds its
inputs once and never mutates them.
"""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Weather(StrEnum):
    GOOD = "good"
    MODERATE = "moderate"
    BAD = "bad"

    @classmethod
    def parse(cls, value: object) -> "Weather":
        """Resolve a canonical or German-labelled weather value."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            weather = WEATHER_ALIASES.get(value.strip().lower())
            if weather is not None:
                return weather
        raise ValueError(f"unknown weather category: {value!r}")


# Upstream BPMN process models label weather in German.
WEATHER_ALIASES: dict[str, Weather] = {
    "good": Weather.GOOD,
    "gut": Weather.GOOD,
    "moderate": Weather.MODERATE,
    "mittel": Weather.MODERATE,
    "bad": Weather.BAD,
    "schlecht": Weather.BAD,
}


class AnalysisMode(StrEnum):
    STANDARD = "standard"
    EXTENDED = "extended"


class RiskLevel(StrEnum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class RecommendationCode(StrEnum):
    NO_ACTION = "NO_ACTION"
    MANUAL_REVIEW = "MANUAL_REVIEW"
    MEASURE_REQUIRED = "MEASURE_REQUIRED"


def _require_number(value: object) -> object:
    """Reject booleans and numeric strings that lax parsing would coerce."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"must be a number, got {type(value).__name__}")
    return value


class _WireModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        allow_inf_nan=False,
        extra="ignore",
    )


class SegmentInput(_WireModel):
    """Telemetry for one grid segment."""
    weather: Weather
    incidents: int = Field(ge=0)
    current_load: float = Field(ge=0)
    expected_load: float = Field(ge=0)

    @field_validator("incidents", "current_load", "expected_load", mode="before")
    @classmethod
    def _strict_numbers(cls, value: object) -> object:
        return _require_number(value)

    @field_validator("weather", mode="before")
    @classmethod
    def _normalize_weather(cls, value: object) -> Weather:
        return Weather.parse(value)


class AnalysisProfile(_WireModel):
    """
    Scoring weights for one analysis mode.

    Owned by the profile service. ``weather_weights`` may be incomplete on the
    wire; the scorer rejects a segment whose weather has no weight.
    """
    id: AnalysisMode
    weather_weights: dict[Weather, float]
    incident_weight: float
    load_weight: float
    overload_base: float = Field(ge=0.0, le=1.0)

    @field_validator("incident_weight", "load_weight", "overload_base", mode="before")
    @classmethod
    def _strict_numbers(cls, value: object) -> object:
        return _require_number(value)

    @field_validator("weather_weights", mode="before")
    @classmethod
    def _normalize_weight_keys(cls, value: object) -> object:
        if not isinstance(value, dict):
            return value
        normalized: dict[Weather, object] = {}
        for key, weight in value.items():
            weather = Weather.parse(key)
            if weather in normalized:
                raise ValueError(f"duplicate weight for weather {weather.value!r}")
            normalized[weather] = _require_number(weight)
        return normalized


class RiskClassification(BaseModel):
    """One probability band: level, recommendation code and text move together."""
    model_config = ConfigDict(frozen=True)

    risk_level: RiskLevel
    recommendation_code: RecommendationCode
    recommendation_text: str


class RiskDerivation(BaseModel):
    """Risk derived from the maximal segment score."""
    model_config = ConfigDict(frozen=True)

    overload_probability: float
    classification: RiskClassification


class ScoreResult(_WireModel):
    """
    Complete output of one analysis run.

    Produced once per job and handed back to the workflow engine as output
    variables; nothing is stored.
    """
    segment_scores: dict[str, int]
    top_risk_segment: str
    overload_probability: float
    risk_level: RiskLevel
    recommendation_code: RecommendationCode
    recommendation_text: str

    def to_variables(self) -> dict:
        """Serialize to camelCase job variables."""
        return self.model_dump(mode="json", by_alias=True)
