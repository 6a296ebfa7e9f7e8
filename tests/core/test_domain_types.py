"""Domain Types — verifies enum values and allowed-value sets."""

from gorest_proxy.core.domain_types import (
    GENDER_VALUES, STATUS_VALUES, Gender, UserId, UserStatus,
)
from gorest_proxy.core.outcomes import ClientFault, NotFound, Ok


def test_user_id_wraps_int():
    assert UserId(5) == 5


def test_gender_values():
    assert GENDER_VALUES == {"male", "female", "other"}
    assert Gender.OTHER.value == "other"


def test_status_values():
    assert STATUS_VALUES == {"active", "inactive"}
    assert UserStatus.INACTIVE.value == "inactive"


def test_outcome_status_codes():
    assert NotFound("x").status_code == 404
    assert ClientFault("x").status_code == 400
    assert ClientFault("x").details == []
    assert Ok(1).value == 1
