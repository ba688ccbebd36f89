"""
Offline helper scripts for the healthrisk profiler.
"""
