"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId wraps int — GoREST ids and local ids share one space
    - Allowed gender/status values encoded as Enums — no raw string lists elsewhere
    - USER_ID_MIN/USER_ID_MAX bound ids to a signed 32-bit column
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)

USER_ID_MIN = -(2 ** 31)
USER_ID_MAX = 2 ** 31 - 1


# ─── Enums ───────────────────────────────────────────────────────

class Gender(str, Enum):
    """Accepted values for User.gender."""
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class UserStatus(str, Enum):
    """Accepted values for User.status."""
    ACTIVE = "active"
    INACTIVE = "inactive"


GENDER_VALUES = frozenset(g.value for g in Gender)
STATUS_VALUES = frozenset(s.value for s in UserStatus)
