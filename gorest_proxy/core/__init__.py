"""Core Layer — pure domain logic, no IO, no async.

Invariants:
    - No module in core/ imports from services/, api/, or infrastructure/
    - models/ is imported only for type contracts (repository_protocols.py)
    - All functions are pure and deterministic
"""
