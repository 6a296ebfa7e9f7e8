"""User Schemas — Pydantic models for the HTTP body, responses and GoREST payloads.

Invariants:
    - UserPayload fields are all optional: missing/blank fields are reported by
      the field rules (core/validate_user.py) as field-level errors, not by pydantic
    - Wrongly-typed values (e.g. name: 42) are still rejected by pydantic → 400
    - RemoteUser ignores unknown GoREST keys; id is required
"""

from pydantic import BaseModel, ConfigDict


class UserPayload(BaseModel):
    """Create/update request body."""
    id: int | None = None
    name: str | None = None
    email: str | None = None
    gender: str | None = None
    status: str | None = None


class UserResponse(BaseModel):
    """Public-facing user record."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    gender: str
    status: str


class RemoteUser(BaseModel):
    """One user as returned by GET /users and GET /users/{id} on GoREST."""
    model_config = ConfigDict(extra="ignore")

    id: int
    name: str | None = None
    email: str | None = None
    gender: str | None = None
    status: str | None = None
