"""
Risk scoring boundary for the healthrisk profiler.

Design intent:
- Score normalized survey answers with a fixed, declarative rule table.
- Keep every contributing factor paired with its rationale and recommendation.
- Illustrative lifestyle rules only; no diagnosis or treatment outputs.
"""
