from __future__ import annotations

"""
Turn OCR-extracted survey text into a raw key/value mapping.

Design intent:
- Accept noisy `key: value` lines from a photographed paper survey.
- Lower-case everything so downstream matching is identical to JSON input.
- Silently skip lines that do not look like a field.
"""


def parse_survey_line(line: str) -> tuple[str, str] | None:
    parts = (line or "").split(":")
    if len(parts) < 2:
        return None

    # Anything after a second colon is dropped.
    key = parts[0].strip().lower()
    value = parts[1].strip().lower()
    if not key or not value:
        return None
    return key, value


def parse_survey_text(text: str) -> dict[str, str]:
    fields: dict[str, str] = {}
    for line in (text or "").split("\n"):
        if not line.strip():
            continue
        parsed = parse_survey_line(line)
        if parsed is None:
            continue
        key, value = parsed
        fields[key] = value
    return fields
