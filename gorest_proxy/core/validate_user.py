"""User Field Rules — pure field-level validation for user candidates.

Invariants:
    - Every rule runs on every call (no short-circuit), so one call reports all violations
    - Each message is keyed to the field it describes
    - Blank and not-allowed values produce distinct messages
    - Values are compared exactly (no case folding); only blankness is trimmed

Design Decisions:
    - ValidationErrors instead of raising: callers inspect has_error once and
      decide (ADR: validation faults are data)
    - Candidate is structural (any object with name/email/gender/status), so the
      same rules apply to HTTP payloads and GoREST records
"""

from dataclasses import dataclass, field
from typing import Protocol

from gorest_proxy.core.domain_types import GENDER_VALUES, STATUS_VALUES


class UserCandidate(Protocol):
    id: int | None
    name: str | None
    email: str | None
    gender: str | None
    status: str | None


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


@dataclass
class ValidationErrors:
    """Ordered (field, message) pairs; empty means valid."""
    errors: list[FieldError] = field(default_factory=list)

    def add_error(self, field_name: str, message: str) -> None:
        self.errors.append(FieldError(field_name, message))

    @property
    def has_error(self) -> bool:
        return bool(self.errors)

    @property
    def fields(self) -> list[str]:
        return [e.field for e in self.errors]

    def messages_for(self, field_name: str) -> list[str]:
        return [e.message for e in self.errors if e.field == field_name]

    def to_details(self) -> list[dict]:
        return [{"field": e.field, "message": e.message} for e in self.errors]

    def __str__(self) -> str:
        return "; ".join(f"{e.field}: {e.message}" for e in self.errors)


MISSING_ID = "Id can not be left blank"
NAME_BLANK = "Name can not be left blank"
EMAIL_BLANK = "Email can not be left blank"
GENDER_BLANK = "Gender can not be left blank"
GENDER_INVALID = "Gender must be: male, female, or other"
STATUS_BLANK = "Status can not be left blank"
STATUS_INVALID = "Status must be: active or inactive"


def no_user_found(user_id: int) -> str:
    return f"No user found with the ID:{user_id}"


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def check_user_fields(
    candidate: UserCandidate, errors: ValidationErrors | None = None,
) -> ValidationErrors:
    """Apply name/email/gender/status rules, appending to errors."""
    errors = errors if errors is not None else ValidationErrors()

    if _is_blank(candidate.name):
        errors.add_error("name", NAME_BLANK)
    if _is_blank(candidate.email):
        errors.add_error("email", EMAIL_BLANK)

    if _is_blank(candidate.gender):
        errors.add_error("gender", GENDER_BLANK)
    elif candidate.gender not in GENDER_VALUES:
        errors.add_error("gender", GENDER_INVALID)

    if _is_blank(candidate.status):
        errors.add_error("status", STATUS_BLANK)
    elif candidate.status not in STATUS_VALUES:
        errors.add_error("status", STATUS_INVALID)

    return errors
