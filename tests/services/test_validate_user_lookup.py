"""User Validator — tests for the async validator (field rules + update lookup).

Tests cover:
    - Create: no lookup, only field rules
    - Update: missing id, unknown id, failing lookup, existing id
    - Id errors never suppress field errors
"""

from unittest.mock import AsyncMock

from gorest_proxy.schemas.user import UserPayload
from gorest_proxy.services.validate_user import validate_user


def _payload(**overrides) -> UserPayload:
    data = {"name": "Ada", "email": "ada@example.com", "gender": "female", "status": "active"}
    data.update(overrides)
    return UserPayload(**data)


def _lookup(result=None, side_effect=None) -> AsyncMock:
    lookup = AsyncMock()
    lookup.find_by_id = AsyncMock(return_value=result, side_effect=side_effect)
    return lookup


async def test_create_does_not_look_up_id():
    lookup = _lookup()
    errors = await validate_user(_payload(id=5), lookup, is_update=False)
    assert not errors.has_error
    lookup.find_by_id.assert_not_awaited()


async def test_update_without_id_has_id_error():
    errors = await validate_user(_payload(), _lookup(), is_update=True)
    assert errors.fields == ["id"]
    assert errors.messages_for("id") == ["Id can not be left blank"]


async def test_update_without_id_still_reports_field_errors():
    errors = await validate_user(_payload(name="", status="gone"), _lookup(), is_update=True)
    assert errors.fields == ["id", "name", "status"]


async def test_update_with_unknown_id_only_flags_id():
    lookup = _lookup(result=None)
    errors = await validate_user(_payload(id=77), lookup, is_update=True)
    assert errors.fields == ["id"]
    assert errors.messages_for("id") == ["No user found with the ID:77"]
    lookup.find_by_id.assert_awaited_once_with(77)


async def test_update_with_existing_id_is_valid():
    errors = await validate_user(_payload(id=1), _lookup(result=object()), is_update=True)
    assert not errors.has_error


async def test_lookup_failure_is_collected_not_raised():
    lookup = _lookup(side_effect=RuntimeError("db down"))
    errors = await validate_user(_payload(id=1, email=" "), lookup, is_update=True)
    assert errors.fields == ["id", "email"]
