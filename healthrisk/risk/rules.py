from __future__ import annotations

"""
Score normalized survey answers against a fixed lifestyle rule table.

Design intent:
- Keep rules declarative so each one can be tested in isolation.
- Evaluate rules in table order; factor/rationale/recommendation lists stay aligned.
- Prefer deterministic, explainable rules over any learned model.
"""

from dataclasses import dataclass
from typing import Callable, Literal, Sequence

from healthrisk.survey.models import SurveyAnswer

RiskLevel = Literal["Low Risk", "Moderate Risk", "High Risk"]

MODERATE_RISK_MIN_SCORE = 40
HIGH_RISK_MIN_SCORE = 70

_LOW_EXERCISE_TOKENS = frozenset({"rarely", "never"})


@dataclass(frozen=True)
class RiskRule:
    factor: str
    rationale: str
    recommendation: str
    weight: int
    applies: Callable[[SurveyAnswer], bool]


@dataclass(frozen=True)
class RuleEvaluation:
    score: int
    factors: list[str]
    rationale: list[str]
    recommendations: list[str]


RISK_RULES: tuple[RiskRule, ...] = (
    RiskRule(
        factor="smoking",
        rationale="smoking",
        recommendation="Quit Smoking",
        weight=40,
        applies=lambda answer: answer.smoker is True,
    ),
    RiskRule(
        factor="low exercise",
        rationale="low activity",
        recommendation="Walk 30 mins daily",
        weight=25,
        applies=lambda answer: answer.exercise in _LOW_EXERCISE_TOKENS,
    ),
    RiskRule(
        factor="poor diet",
        rationale="high sugar diet",
        recommendation="Reduce sugar",
        weight=35,
        applies=lambda answer: answer.diet == "high sugar",
    ),
)

MAX_SCORE = sum(rule.weight for rule in RISK_RULES)


def evaluate(answer: SurveyAnswer, rules: Sequence[RiskRule] = RISK_RULES) -> RuleEvaluation:
    score = 0
    factors: list[str] = []
    rationale: list[str] = []
    recommendations: list[str] = []

    for rule in rules:
        if not rule.applies(answer):
            continue
        factors.append(rule.factor)
        rationale.append(rule.rationale)
        recommendations.append(rule.recommendation)
        score += rule.weight

    return RuleEvaluation(
        score=score,
        factors=factors,
        rationale=rationale,
        recommendations=recommendations,
    )


def classify_risk_level(score: int) -> RiskLevel:
    if score < MODERATE_RISK_MIN_SCORE:
        return "Low Risk"
    if score < HIGH_RISK_MIN_SCORE:
        return "Moderate Risk"
    return "High Risk"
