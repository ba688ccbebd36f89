"""
Survey input boundary for the healthrisk profiler.

Design intent:
- Coerce loosely typed JSON or OCR key/value input into a typed answer set.
- Track missing fields so confidence and completeness checks stay explicit.
"""
