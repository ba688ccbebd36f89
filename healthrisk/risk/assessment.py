from __future__ import annotations

"""
Build a complete risk assessment from raw survey input.

Design intent:
- Compose normalization and rule scoring into one pure call per request.
- Carry completeness (missing fields, confidence) next to the score.
"""

from dataclasses import dataclass

from healthrisk.risk.rules import RiskLevel, classify_risk_level, evaluate
from healthrisk.survey.models import RawInput, SurveyAnswer
from healthrisk.survey.normalizer import normalize


@dataclass(frozen=True)
class RiskAssessment:
    answer: SurveyAnswer
    missing_fields: list[str]
    confidence: float
    factors: list[str]
    rationale: list[str]
    recommendations: list[str]
    score: int
    risk_level: RiskLevel


def assess(raw: RawInput) -> RiskAssessment:
    """
    Normalize `raw` and score it.

    Raises `IncompleteProfileError` before any scoring when the profile is too sparse.
    """
    normalized = normalize(raw)
    evaluation = evaluate(normalized.answer)
    return RiskAssessment(
        answer=normalized.answer,
        missing_fields=normalized.missing_fields,
        confidence=normalized.confidence,
        factors=evaluation.factors,
        rationale=evaluation.rationale,
        recommendations=evaluation.recommendations,
        score=evaluation.score,
        risk_level=classify_risk_level(evaluation.score),
    )
