import pytest

from todo_api.exceptions import ValidationError
from todo_api.models.user import Role
from todo_api.services.users import USERNAME_MAX_LENGTH, create_user, get_user_by_username


async def test_username_length_limit(db):
    longest = "u" * USERNAME_MAX_LENGTH
    user = await create_user(db, longest, "pw", {Role.USER})
    assert user.username == longest

    with pytest.raises(ValidationError, match=f"cannot exceed {USERNAME_MAX_LENGTH}"):
        await create_user(db, "u" * (USERNAME_MAX_LENGTH + 1), "pw", {Role.USER})


@pytest.mark.parametrize("username, password, message", [
    ("   ", "pw", "Username is required"),
    ("carol", "  ", "Password is required"),
])
async def test_create_user_rejects_blank_fields(db, username, password, message):
    with pytest.raises(ValidationError, match=message):
        await create_user(db, username, password, {Role.USER})


async def test_duplicate_username_rejected(db, users):
    with pytest.raises(ValidationError, match="already registered"):
        await create_user(db, "user1", "other", {Role.USER})
    assert (await get_user_by_username(db, "user1")).roles == {Role.USER}
