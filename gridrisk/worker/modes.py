"""
Mode Selection — which analysis profile a job runs with.

Precedence:
1. ``analysisDecision`` (output of an upstream decision table)
2. ``analysisMode`` (explicit profile id)
3. the configured default
"""

from typing import Mapping, NamedTuple, Optional

from gridrisk.engine.schemas import AnalysisMode
from gridrisk.exceptions import InvalidInputError

DECISION_VARIABLE = "analysisDecision"
MODE_VARIABLE = "analysisMode"

DECISION_MODES: dict[str, AnalysisMode] = {
    "standard": AnalysisMode.STANDARD,
    "standard_analysis": AnalysisMode.STANDARD,
    "extended": AnalysisMode.EXTENDED,
    "extended_analysis": AnalysisMode.EXTENDED,
}


class ModeSelection(NamedTuple):
    mode: AnalysisMode
    decision: Optional[str] = None


def _normalize(value: object) -> Optional[str]:
    if not isinstance(value, str):
        return None
    return value.strip().lower()


def parse_mode(value: object, field: str = MODE_VARIABLE) -> AnalysisMode:
    """Parse an explicit analysis mode identifier."""
    normalized = _normalize(value)
    try:
        return AnalysisMode(normalized)
    except ValueError:
        raise InvalidInputError(
            f"Unknown analysis mode: {value!r}",
            field=field,
            details={"allowed": [m.value for m in AnalysisMode]},
        ) from None


def select_mode(
    variables: Mapping[str, object],
    default: AnalysisMode = AnalysisMode.STANDARD,
) -> ModeSelection:
    """Pick the analysis mode for a job. Pure."""
    decision = variables.get(DECISION_VARIABLE)
    if decision is not None:
        mode = DECISION_MODES.get(_normalize(decision) or "")
        if mode is None:
            raise InvalidInputError(
                f"Unknown analysis decision: {decision!r}",
                field=DECISION_VARIABLE,
                details={"allowed": sorted(DECISION_MODES)},
            )
        return ModeSelection(mode=mode, decision=str(decision))

    explicit = variables.get(MODE_VARIABLE)
    if explicit is not None:
        return ModeSelection(mode=parse_mode(explicit))

    return ModeSelection(mode=default)
