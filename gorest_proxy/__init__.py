"""GoREST Proxy — stores GoREST users in a local relational database.

Invariants:
    - Package root contains no executable code (no import side-effects)
"""
