"""API Layer — FastAPI routes, error normalization and dependencies.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Routes delegate to services; they only map outcomes to responses
"""
