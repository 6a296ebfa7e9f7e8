"""Services Layer — user orchestration and validation with IO.

Invariants:
    - Services receive their collaborators explicitly (repository, remote client)
    - Expected conditions are returned as outcome variants, never raised
"""
