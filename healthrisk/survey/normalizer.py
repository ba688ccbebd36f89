from __future__ import annotations

"""
Normalize raw survey key/value input into a typed answer set.

Design intent:
- Treat JSON bodies and OCR-scraped text identically once they reach this layer.
- Keep one coercion function per field type, driven by a declarative field table.
- Reject profiles that are too incomplete to score instead of guessing.
"""

import re
from dataclasses import dataclass
from typing import Callable, Sequence

from healthrisk.survey.models import SURVEY_FIELDS, RawInput, RawValue, SurveyAnswer

MIN_MISSING_FOR_REJECTION = 2

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")
_MAX_INT_DIGITS = 18


class IncompleteProfileError(ValueError):
    """Raised when too many recognized survey fields are missing to score."""

    def __init__(self, missing_fields: Sequence[str]):
        self.missing_fields = list(missing_fields)
        super().__init__(
            f"{len(self.missing_fields)} of {len(SURVEY_FIELDS)} survey fields missing: "
            + ", ".join(self.missing_fields)
        )


@dataclass(frozen=True)
class NormalizedInput:
    answer: SurveyAnswer
    missing_fields: list[str]
    confidence: float


def coerce_int(value: RawValue) -> int | None:
    """Lenient leading-integer parse: `"30 years"` -> 30, `41.9` -> 41, junk -> None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        try:
            return int(value)
        except (OverflowError, ValueError):
            return None
    match = _LEADING_INT_RE.match(str(value))
    if not match:
        return None
    digits = match.group(1)
    # Oversized digit runs are treated as unparsable.
    if len(digits.lstrip("+-")) > _MAX_INT_DIGITS:
        return None
    return int(digits)


def coerce_flag(value: RawValue) -> bool:
    # Only a real boolean true or the exact string "true" counts.
    return value is True or (isinstance(value, str) and value == "true")


def coerce_token(value: RawValue) -> str | None:
    """Strings pass through; JSON scalars use their JSON spelling; lists and objects are dropped."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return None


def _truthy(value: RawValue) -> bool:
    return bool(value)


def _not_null(value: RawValue) -> bool:
    return value is not None


@dataclass(frozen=True)
class _FieldSpec:
    name: str
    coerce: Callable[[RawValue], object]
    is_present: Callable[[RawValue], bool]


_FIELD_SPECS: tuple[_FieldSpec, ...] = (
    _FieldSpec(name="age", coerce=coerce_int, is_present=_truthy),
    _FieldSpec(name="smoker", coerce=coerce_flag, is_present=_not_null),
    _FieldSpec(name="exercise", coerce=coerce_token, is_present=_truthy),
    _FieldSpec(name="diet", coerce=coerce_token, is_present=_truthy),
)


def normalize(raw: RawInput) -> NormalizedInput:
    values: dict[str, object] = {}
    missing_fields: list[str] = []

    for spec in _FIELD_SPECS:
        value = raw.get(spec.name)
        if not spec.is_present(value):
            missing_fields.append(spec.name)
            continue
        values[spec.name] = spec.coerce(value)

    if len(missing_fields) >= MIN_MISSING_FOR_REJECTION:
        raise IncompleteProfileError(missing_fields)

    return NormalizedInput(
        answer=SurveyAnswer(**values),
        missing_fields=missing_fields,
        confidence=compute_confidence(len(missing_fields)),
    )


def compute_confidence(missing_count: int) -> float:
    total = len(SURVEY_FIELDS)
    return (total - missing_count) / total
