import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from todo_api.exceptions import ValidationError
from todo_api.models.user import Role, User, UserRole
from todo_api.utils.security import get_password_hash

logger = logging.getLogger(__name__)

USERNAME_MAX_LENGTH = 50


async def get_user_by_username(db: AsyncSession, username: str) -> User | None:
    result = await db.execute(select(User).filter(User.username == username))
    return result.scalars().first()


async def create_user(db: AsyncSession, username: str, password: str, roles: set[Role]) -> User:
    """Provision a user. There is no public registration endpoint; this is
    used by the ``create_user`` script and by tests."""
    username = (username or "").strip()
    if not username:
        raise ValidationError("Username is required")
    if len(username) > USERNAME_MAX_LENGTH:
        raise ValidationError(f"Username cannot exceed {USERNAME_MAX_LENGTH} characters")
    if not password or not password.strip():
        raise ValidationError("Password is required")
    if await get_user_by_username(db, username):
        raise ValidationError(f"Username already registered: {username}")

    user = User(
        username=username,
        hashed_password=get_password_hash(password),
        role_rows=[UserRole(role=role) for role in sorted(roles)],
    )
    db.add(user)
    await db.flush()
    logger.debug("Created user %s with roles %s", username, sorted(r.value for r in roles))
    return user
