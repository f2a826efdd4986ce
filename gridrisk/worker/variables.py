"""
Process Variables → Segment Inputs.

Job variables are flat: ``segment{KEY}_{field}`` per configured segment key,
e.g. ``segmentA_weather``, ``segmentA_incidents``, ``segmentA_currentLoad``,
``segmentA_expectedLoad``. Every field of every segment is required; problems
are collected across all segments and reported in one InvalidInputError.
"""

from typing import Mapping, Sequence

from pydantic import ValidationError

from gridrisk.engine.schemas import SegmentInput
from gridrisk.exceptions import InvalidInputError

SEGMENT_FIELDS: tuple[str, ...] = ("weather", "incidents", "currentLoad", "expectedLoad")


def variable_name(segment_key: str, field: str) -> str:
    return f"segment{segment_key}_{field}"


def build_segments(
    variables: Mapping[str, object],
    segment_keys: Sequence[str],
) -> dict[str, SegmentInput]:
    """Build one SegmentInput per key, in ``segment_keys`` order."""
    if not segment_keys:
        raise InvalidInputError("No grid segments configured", field="segmentKeys")

    segments: dict[str, SegmentInput] = {}
    problems: dict[str, str] = {}

    for key in segment_keys:
        raw = {}
        for field in SEGMENT_FIELDS:
            name = variable_name(key, field)
            value = variables.get(name)
            if value is None:
                problems[name] = "missing"
            else:
                raw[field] = value
        if len(raw) != len(SEGMENT_FIELDS):
            continue

        try:
            segments[key] = SegmentInput.model_validate(raw)
        except ValidationError as exc:
            for err in exc.errors(include_url=False):
                field = str(err["loc"][0]) if err["loc"] else "?"
                problems[variable_name(key, field)] = err["msg"]

    if problems:
        first = next(iter(problems))
        raise InvalidInputError(
            f"Invalid segment input: {', '.join(f'{k} ({v})' for k, v in problems.items())}",
            field=first,
            details={"problems": problems},
        )
    return segments
