"""
HTTP API boundary for the healthrisk profiler.
"""
