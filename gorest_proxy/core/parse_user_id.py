"""User Id Parsing — path segment → UserId, or None when not a valid id.

Invariants:
    - Accepts an optional sign followed by ASCII digits only
      (no whitespace, underscores, or non-ASCII digits)
    - Result fits a signed 32-bit column
"""

import re

from gorest_proxy.core.domain_types import UserId, USER_ID_MIN, USER_ID_MAX

_ID_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_user_id(raw: str | None) -> UserId | None:
    """Return the parsed id, or None if raw is not a valid id."""
    if raw is None or not _ID_PATTERN.fullmatch(raw):
        return None
    value = int(raw)
    if value < USER_ID_MIN or value > USER_ID_MAX:
        return None
    return UserId(value)


def invalid_id_message(raw: str | None) -> str:
    return f"{raw} is not a valid ID"
