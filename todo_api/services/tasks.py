import logging
from sqlalchemy import Date, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from datetime import date, datetime, timezone

from todo_api.exceptions import NotFoundError, ValidationError
from todo_api.models.task import Task
from todo_api.models.user import User
from todo_api.schemas.task import TaskCreate, TaskUpdate
from todo_api.services.access import Principal, require_principal, validate_access
from todo_api.services.categories import get_category
from todo_api.services.users import get_user_by_username

logger = logging.getLogger(__name__)

NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


def as_utc(value: datetime) -> datetime:
    # Naive values (client input without offset, SQLite round-trips) are UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def validate_task(task: Task, now: datetime | None = None) -> None:
    now = now or datetime.now(timezone.utc)

    if task.name is None or not task.name.strip():
        raise ValidationError("Task name is required")
    if len(task.name) > NAME_MAX_LENGTH:
        raise ValidationError(f"Task name must be between 1 and {NAME_MAX_LENGTH} characters")
    if task.description is not None and len(task.description) > DESCRIPTION_MAX_LENGTH:
        raise ValidationError(f"Task description cannot exceed {DESCRIPTION_MAX_LENGTH} characters")
    if task.deadline is None:
        raise ValidationError("Deadline is required")
    if as_utc(task.deadline) <= now:
        raise ValidationError("Deadline must be in the future")
    if task.category_id is None:
        raise ValidationError("Category is required")
    if task.user_id is None:
        raise ValidationError("User is required")


async def get_task_by_id(db: AsyncSession, task_id: int) -> Task:
    result = await db.execute(select(Task).filter(Task.id == task_id))
    task = result.scalars().unique().first()
    if not task:
        raise NotFoundError(f"Task not found with id: {task_id}")
    return task


async def create_task(db: AsyncSession, task_data: TaskCreate, principal: Principal | None) -> Task:
    principal = require_principal(principal)
    owner = await get_user_by_username(db, principal.username)

    new_task = Task(
        name=task_data.name,
        description=task_data.description,
        deadline=as_utc(task_data.deadline) if task_data.deadline else None,
        category_id=task_data.category_id,
        user_id=owner.id if owner else None,
    )
    validate_task(new_task)

    new_task.category = await get_category(db, task_data.category_id)
    new_task.owner = owner

    db.add(new_task)
    await db.flush()
    logger.debug("User %s created task %s", principal.username, new_task.id)
    return new_task


async def get_task(db: AsyncSession, task_id: int, principal: Principal | None) -> Task:
    await validate_access(db, task_id, principal)
    return await get_task_by_id(db, task_id)


async def update_task(db: AsyncSession, task_id: int, update_data: TaskUpdate, principal: Principal | None) -> Task:
    await validate_access(db, task_id, principal)
    task = await get_task_by_id(db, task_id)

    # Owner and category are fixed once the task exists.
    changes = update_data.model_dump(exclude_unset=True)
    if "deadline" in changes and changes["deadline"] is not None:
        changes["deadline"] = as_utc(changes["deadline"])

    # Validate a detached copy so a rejected update leaves the stored task untouched.
    candidate = Task(
        name=changes.get("name", task.name),
        description=changes.get("description", task.description),
        deadline=changes.get("deadline", task.deadline),
        category_id=task.category_id,
        user_id=task.user_id,
    )
    validate_task(candidate)

    task.name = candidate.name
    task.description = candidate.description
    task.deadline = candidate.deadline
    await db.flush()
    logger.debug("User %s updated task %s", principal.username, task_id)
    return task


async def delete_task(db: AsyncSession, task_id: int, principal: Principal | None) -> None:
    await validate_access(db, task_id, principal)
    task = await get_task_by_id(db, task_id)
    await db.delete(task)
    await db.flush()
    logger.debug("User %s deleted task %s", principal.username, task_id)


async def search_tasks(
    db: AsyncSession,
    username: str | None = None,
    name: str | None = None,
    description: str | None = None,
    deadline: date | datetime | None = None,
    category_id: int | None = None,
) -> list[Task]:
    """
    Find tasks matching every given filter; omitted filters match everything.

    ``name`` and ``description`` are case-insensitive substring matches,
    ``deadline`` compares the calendar day only, ``username`` and
    ``category_id`` must match exactly. No ordering is applied and no
    visibility rules are enforced here.
    """
    query = select(Task)

    if username is not None:
        query = query.join(User, Task.user_id == User.id).filter(User.username == username)
    if name is not None:
        query = query.filter(func.lower(Task.name).contains(name.lower(), autoescape=True))
    if description is not None:
        query = query.filter(func.lower(Task.description).contains(description.lower(), autoescape=True))
    if deadline is not None:
        if isinstance(deadline, datetime):
            deadline = as_utc(deadline).date()  # calendar days are UTC days
        query = query.filter(func.date(Task.deadline, type_=Date) == deadline)
    if category_id is not None:
        query = query.filter(Task.category_id == category_id)

    result = await db.execute(query)
    return list(result.scalars().unique().all())


async def list_tasks_for(db: AsyncSession, principal: Principal | None) -> list[Task]:
    principal = require_principal(principal)
    if principal.is_admin():
        return await search_tasks(db)
    return await search_tasks(db, username=principal.username)
