"""
Per-task authorization: admins may act on any task, everyone else only on
tasks they own.

Ownership is read from the task row on every check, so a change of owner or
role takes effect on the next request.
"""
from dataclasses import dataclass, field

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from todo_api.exceptions import AccessDeniedError, AuthenticationMissingError, NotFoundError
from todo_api.models.task import Task
from todo_api.models.user import Role, User


@dataclass(frozen=True)
class Principal:
    username: str
    roles: frozenset[Role] = field(default_factory=frozenset)

    def is_admin(self) -> bool:
        return Role.ADMIN in self.roles

    @classmethod
    def from_user(cls, user: User) -> "Principal":
        return cls(username=user.username, roles=user.roles)


def require_principal(principal: Principal | None) -> Principal:
    if principal is None:
        raise AuthenticationMissingError("No authentication present")
    return principal


async def get_task_owner_username(db: AsyncSession, task_id: int) -> str:
    result = await db.execute(
        select(User.username).join(Task, Task.user_id == User.id).filter(Task.id == task_id)
    )
    username = result.scalars().first()
    if username is None:
        raise NotFoundError(f"Task not found with id: {task_id}")
    return username


async def is_owner_or_admin(db: AsyncSession, task_id: int, principal: Principal | None) -> bool:
    principal = require_principal(principal)
    owner = await get_task_owner_username(db, task_id)
    if principal.is_admin():
        return True
    return owner == principal.username


async def validate_access(db: AsyncSession, task_id: int, principal: Principal | None) -> None:
    if not await is_owner_or_admin(db, task_id, principal):
        raise AccessDeniedError(f"Access denied to task: {task_id}")
