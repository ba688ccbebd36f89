"""
healthrisk profiler package.

Design intent:
- Host the survey-to-risk-profile service behind a thin FastAPI surface.
- Keep domain modules (survey/risk) independent from transport and OCR plumbing.
"""
