"""Pydantic Schemas — request/response/remote payload shapes.

Invariants:
    - Schemas validate at system boundaries (HTTP body, GoREST JSON)
    - Separate from models: schemas are API contracts, models are persistence
"""
