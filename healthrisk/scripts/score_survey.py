from __future__ import annotations

import argparse
import json
from dataclasses import asdict
from pathlib import Path
from typing import Any

from healthrisk.risk.assessment import RiskAssessment, assess
from healthrisk.survey.normalizer import IncompleteProfileError
from healthrisk.survey.text_fields import parse_survey_text


def load_survey(path: Path, *, as_text: bool) -> dict[str, Any]:
    raw = path.read_text(encoding="utf-8")
    if as_text:
        return dict(parse_survey_text(raw))
    payload = json.loads(raw)
    if not isinstance(payload, dict):
        raise SystemExit(f"expected a JSON object in {path}")
    return payload


def format_assessment(assessment: RiskAssessment) -> dict[str, Any]:
    data = asdict(assessment)
    data["answer"] = assessment.answer.supplied()
    return data


def main() -> None:
    parser = argparse.ArgumentParser(description="Score a survey file without running the HTTP service.")
    parser.add_argument("survey_path", help="Path to a JSON survey, or to OCR-style text with --text.")
    parser.add_argument(
        "--text",
        action="store_true",
        help="Treat the file as `key: value` lines, the same format OCR output is parsed from.",
    )
    args = parser.parse_args()

    path = Path(args.survey_path).expanduser()
    if not path.exists():
        raise SystemExit(f"survey file not found: {path}")

    survey = load_survey(path, as_text=args.text)
    try:
        assessment = assess(survey)
    except IncompleteProfileError as exc:
        raise SystemExit(f"incomplete profile: {exc}") from exc

    print(json.dumps(format_assessment(assessment), indent=2))


if __name__ == "__main__":
    main()
