"""User Field Rules — tests for check_user_fields and ValidationErrors.

Tests cover:
    - Blank (None, "", whitespace) name/email/gender/status each flag their own field
    - Not-allowed gender/status flag exactly that field with a distinct message
    - All rules run in one call (no short-circuit), in field order
    - ValidationErrors rendering (str, details)
"""

from types import SimpleNamespace

import pytest

from gorest_proxy.core.validate_user import (
    EMAIL_BLANK, GENDER_BLANK, GENDER_INVALID, NAME_BLANK, STATUS_BLANK,
    STATUS_INVALID, ValidationErrors, check_user_fields, no_user_found,
)


def _candidate(**overrides):
    data = {
        "id": None, "name": "Ada", "email": "ada@example.com",
        "gender": "female", "status": "active",
    }
    data.update(overrides)
    return SimpleNamespace(**data)


def test_valid_candidate_has_no_errors():
    errors = check_user_fields(_candidate())
    assert not errors.has_error
    assert str(errors) == ""


@pytest.mark.parametrize("field_name, message", [
    ("name", NAME_BLANK),
    ("email", EMAIL_BLANK),
    ("gender", GENDER_BLANK),
    ("status", STATUS_BLANK),
])
@pytest.mark.parametrize("blank", [None, "", "   "])
def test_blank_field_is_flagged_on_that_field(field_name, message, blank):
    errors = check_user_fields(_candidate(**{field_name: blank}))
    assert errors.fields == [field_name]
    assert errors.messages_for(field_name) == [message]


@pytest.mark.parametrize("gender", ["robot", "Male", "FEMALE", " male"])
def test_gender_outside_allowed_set_flags_only_gender(gender):
    errors = check_user_fields(_candidate(gender=gender))
    assert errors.fields == ["gender"]
    assert errors.messages_for("gender") == [GENDER_INVALID]


@pytest.mark.parametrize("status", ["pending", "Active", "inactive "])
def test_status_outside_allowed_set_flags_only_status(status):
    errors = check_user_fields(_candidate(status=status))
    assert errors.fields == ["status"]
    assert errors.messages_for("status") == [STATUS_INVALID]


@pytest.mark.parametrize("gender", ["male", "female", "other"])
def test_every_allowed_gender_passes(gender):
    assert not check_user_fields(_candidate(gender=gender)).has_error


def test_all_rules_run_without_short_circuit():
    errors = check_user_fields(
        _candidate(name="", email=None, gender="x", status=" "),
    )
    assert errors.fields == ["name", "email", "gender", "status"]


def test_email_format_is_not_checked():
    assert not check_user_fields(_candidate(email="not-an-email")).has_error


def test_appends_to_existing_errors():
    errors = ValidationErrors()
    errors.add_error("id", "Id can not be left blank")
    check_user_fields(_candidate(name=""), errors)
    assert errors.fields == ["id", "name"]


def test_str_and_details_keep_order():
    errors = ValidationErrors()
    errors.add_error("id", no_user_found(5))
    errors.add_error("status", STATUS_INVALID)
    assert str(errors) == (
        "id: No user found with the ID:5; status: Status must be: active or inactive"
    )
    assert errors.to_details() == [
        {"field": "id", "message": "No user found with the ID:5"},
        {"field": "status", "message": STATUS_INVALID},
    ]
