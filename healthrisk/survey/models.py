from __future__ import annotations

"""
Typed survey contracts shared by the normalizer, the rule engine and the API.

Design intent:
- Accept loosely typed raw values at the boundary only.
- Keep the normalized answer explicit about which fields were supplied.
"""

from typing import Mapping, Union

from pydantic import BaseModel, ConfigDict

# JSON bodies carry typed scalars, OCR input carries lower-cased strings.
RawValue = Union[str, bool, int, float, None]
RawInput = Mapping[str, RawValue]

SURVEY_FIELDS: tuple[str, ...] = ("age", "smoker", "exercise", "diet")


class SurveyAnswer(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    age: int | None = None
    smoker: bool | None = None
    exercise: str | None = None
    diet: str | None = None

    def supplied(self) -> dict[str, object]:
        """Only the fields that were present in the raw input."""
        return self.model_dump(exclude_unset=True)
