"""
Risk Analysis Job Adapter Tests.

Resolvers are in-memory stubs except for the HTTP 500 scenario, which runs
the real HTTP resolver over httpx.MockTransport.
"""

import json

import httpx
import pytest

from gridrisk.engine.schemas import AnalysisMode, AnalysisProfile
from gridrisk.exceptions import ErrorCode, ProfileUnavailableError
from gridrisk.profiles.resolver import HttpProfileResolver, StaticProfileResolver
from gridrisk.worker.adapter import JobState, RiskAnalysisAdapter


class CountingResolver:
    """Wraps a resolver and records every requested mode."""

    def __init__(self, inner):
        self.inner = inner
        self.calls: list[AnalysisMode] = []

    async def resolve(self, mode: AnalysisMode) -> AnalysisProfile:
        self.calls.append(mode)
        return await self.inner.resolve(mode)


class ExplodingResolver:
    async def resolve(self, mode: AnalysisMode) -> AnalysisProfile:
        raise RuntimeError("unexpected bug")


@pytest.mark.asyncio
class TestRiskAnalysisAdapter:
    async def test_completes_with_output_variables(self, resolver, job_variables):
        outcome = await RiskAnalysisAdapter(resolver).handle(job_variables)

        assert outcome.state == JobState.COMPLETED
        assert outcome.succeeded
        assert outcome.variables == {
            "segmentScores": {"A": 86, "B": 20, "C": 53, "D": 30},
            "topRiskSegment": "A",
            "overloadProbability": 0.87,
            "riskLevel": "HIGH",
            "recommendationCode": "MEASURE_REQUIRED",
            "recommendationText": outcome.variables["recommendationText"],
            "analysisModeUsed": "standard",
        }
        assert outcome.error_message is None

    async def test_decision_selects_profile_and_is_echoed(self, resolver, job_variables):
        counting = CountingResolver(resolver)
        job_variables["analysisDecision"] = "EXTENDED"

        outcome = await RiskAnalysisAdapter(counting).handle(job_variables)

        assert counting.calls == [AnalysisMode.EXTENDED]
        assert outcome.variables["analysisModeUsed"] == "extended"
        assert outcome.variables["analysisDecision"] == "EXTENDED"
        # extended: A = 70 + 16 + 20 = 106 → 100
        assert outcome.variables["segmentScores"]["A"] == 100
        assert outcome.variables["overloadProbability"] == 1.0

    async def test_explicit_mode_variable(self, resolver, job_variables):
        job_variables["analysisMode"] = "extended"
        outcome = await RiskAnalysisAdapter(resolver).handle(job_variables)
        assert outcome.variables["analysisModeUsed"] == "extended"
        assert "analysisDecision" not in outcome.variables

    async def test_configured_default_mode(self, resolver, job_variables):
        adapter = RiskAnalysisAdapter(resolver, default_mode=AnalysisMode.EXTENDED)
        outcome = await adapter.handle(job_variables)
        assert outcome.mode == AnalysisMode.EXTENDED

    async def test_huge_incident_count_completes(self, resolver, job_variables):
        job_variables["segmentB_incidents"] = 10**400
        outcome = await RiskAnalysisAdapter(resolver).handle(job_variables)

        assert outcome.succeeded
        assert outcome.variables["segmentScores"]["B"] == 100
        assert outcome.variables["topRiskSegment"] == "B"

    async def test_boolean_incidents_fail_as_invalid_input(self, resolver, job_variables):
        counting = CountingResolver(resolver)
        job_variables["segmentA_incidents"] = True

        outcome = await RiskAnalysisAdapter(counting).handle(job_variables)

        assert outcome.state == JobState.FAILED
        assert outcome.error_code == ErrorCode.VALIDATION_ERROR.value
        assert counting.calls == []

    async def test_exactly_one_profile_fetch(self, resolver, job_variables):
        counting = CountingResolver(resolver)
        await RiskAnalysisAdapter(counting).handle(job_variables)
        assert counting.calls == [AnalysisMode.STANDARD]

    async def test_profile_unavailable_fails_without_output(self, job_variables):
        outcome = await RiskAnalysisAdapter(StaticProfileResolver({})).handle(job_variables)

        assert outcome.state == JobState.FAILED
        assert outcome.failed_in == JobState.SCORING
        assert outcome.variables is None
        assert outcome.error_message == ProfileUnavailableError.MESSAGE
        assert outcome.error_code == ErrorCode.SERVICE_UNAVAILABLE.value

    async def test_http_500_from_profile_service(self, job_variables):
        transport = httpx.MockTransport(lambda request: httpx.Response(500))
        resolver = HttpProfileResolver("http://profiles.test", transport=transport)

        outcome = await RiskAnalysisAdapter(resolver).handle(job_variables)

        assert outcome.state == JobState.FAILED
        assert outcome.variables is None
        assert outcome.error_message == "Risk analysis service unavailable"

    async def test_invalid_input_fails_before_profile_fetch(self, resolver, job_variables):
        counting = CountingResolver(resolver)
        del job_variables["segmentC_weather"]

        outcome = await RiskAnalysisAdapter(counting).handle(job_variables)

        assert outcome.state == JobState.FAILED
        assert outcome.failed_in == JobState.RECEIVED
        assert outcome.error_code == ErrorCode.VALIDATION_ERROR.value
        assert "segmentC_weather" in outcome.error_message
        assert counting.calls == []

    async def test_unknown_decision_fails(self, resolver, job_variables):
        job_variables["analysisDecision"] = "maximum"
        outcome = await RiskAnalysisAdapter(resolver).handle(job_variables)
        assert outcome.state == JobState.FAILED
        assert outcome.mode is None

    async def test_missing_weather_weight_fails(self, standard_profile, job_variables):
        partial = standard_profile.model_copy(
            update={"weather_weights": {k: v for k, v in standard_profile.weather_weights.items() if k != "moderate"}}
        )
        resolver = StaticProfileResolver({AnalysisMode.STANDARD: partial})

        outcome = await RiskAnalysisAdapter(resolver).handle(job_variables)

        assert outcome.state == JobState.FAILED
        assert outcome.error_code == ErrorCode.INVALID_DATA.value
        assert outcome.variables is None

    async def test_unexpected_error_is_reported_as_failure(self, job_variables):
        outcome = await RiskAnalysisAdapter(ExplodingResolver()).handle(job_variables)

        assert outcome.state == JobState.FAILED
        assert outcome.error_code == ErrorCode.INTERNAL_ERROR.value
        assert "error_id=" in outcome.error_message
        assert "unexpected bug" not in outcome.error_message

    async def test_custom_segment_keys(self, resolver, job_variables):
        adapter = RiskAnalysisAdapter(resolver, segment_keys=["B", "D"])
        outcome = await adapter.handle(job_variables)
        assert outcome.variables["segmentScores"] == {"B": 20, "D": 30}
        assert outcome.variables["topRiskSegment"] == "D"

    async def test_idempotent(self, resolver, job_variables):
        adapter = RiskAnalysisAdapter(resolver)
        first = await adapter.handle(dict(job_variables))
        second = await adapter.handle(dict(job_variables))
        assert json.dumps(first.variables) == json.dumps(second.variables)
