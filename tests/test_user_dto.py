from datetime import datetime, timezone

import pytest

from catalog.v1_0.entities import (
    CreateOrUpdateUserResponse,
    UserCreated,
    UserDTO,
    UserId,
    UserLastUpdatedWith,
    UserType,
    UserUpdated,
)


def _user() -> UserDTO:
    return UserDTO(
        id=UserId.oidc("test_user_1"),
        name="Test User 1",
        email=None,
        user_type=UserType.HUMAN,
        last_updated_with=UserLastUpdatedWith.CREATE_ENDPOINT,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        updated_at=None,
    )


def test_outcome_base_cannot_be_built() -> None:
    with pytest.raises(TypeError):
        CreateOrUpdateUserResponse(_user())


def test_outcomes_report_created_flag() -> None:
    user = _user()
    assert UserCreated(user).created is True
    assert UserUpdated(user).created is False
    assert isinstance(UserUpdated(user), CreateOrUpdateUserResponse)
