"""Infrastructure Layer — database sessions, GoREST client, logging setup.

Invariants:
    - Infrastructure never imports from services/ or api/
    - External failures mapped to DatabaseError / RemoteAPIError (core/errors.py)
"""
