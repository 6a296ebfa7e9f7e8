"""User Validator — field rules plus the update-target lookup.

Invariants:
    - is_update: missing id → "id" error; id with no stored user → "id" error
    - A failing lookup is collected as an "id" error, never raised
    - Field rules always run, whatever the id checks found
    - Only side effect is the read-only lookup
"""

import logging

from gorest_proxy.core.domain_types import UserId
from gorest_proxy.core.repository_protocols import UserLookup
from gorest_proxy.core.validate_user import (
    MISSING_ID, UserCandidate, ValidationErrors, check_user_fields, no_user_found,
)

logger = logging.getLogger(__name__)


async def validate_user(
    candidate: UserCandidate, lookup: UserLookup, is_update: bool,
) -> ValidationErrors:
    """Collect every field-level error for a create (is_update=False) or update."""
    errors = ValidationErrors()

    if is_update:
        if candidate.id is None:
            errors.add_error("id", MISSING_ID)
        else:
            try:
                existing = await lookup.find_by_id(UserId(candidate.id))
            except Exception as e:
                logger.warning(
                    f"User lookup failed during validation: {e}",
                    extra={"user_id": candidate.id, "error_kind": type(e).__name__},
                )
                existing = None
            if existing is None:
                errors.add_error("id", no_user_found(candidate.id))

    return check_user_fields(candidate, errors)
