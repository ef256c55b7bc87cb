"""
Shared task categories.

Callers are expected to have checked the admin role before any mutation;
nothing in here looks at the principal.
"""
import logging

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from todo_api.exceptions import NotFoundError, ValidationError
from todo_api.models.category import Category
from todo_api.models.task import Task
from todo_api.schemas.category import CategoryCreate, CategoryUpdate

logger = logging.getLogger(__name__)

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50
DESCRIPTION_MAX_LENGTH = 255


async def _validate(db: AsyncSession, data: CategoryCreate | CategoryUpdate, category_id: int | None = None):
    if data is None:
        raise ValidationError("Category data is required")
    name = data.name
    if name is None or not name.strip():
        raise ValidationError("Category name is required")
    if not NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH:
        raise ValidationError(
            f"Category name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters"
        )
    if data.description is not None and len(data.description) > DESCRIPTION_MAX_LENGTH:
        raise ValidationError(f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters")

    query = select(Category.id).filter(Category.name == name)
    if category_id is not None:
        query = query.filter(Category.id != category_id)
    result = await db.execute(query)
    if result.scalars().first() is not None:
        raise ValidationError(f"Category name already exists: {name}")


async def get_category(db: AsyncSession, category_id: int) -> Category:
    result = await db.execute(select(Category).filter(Category.id == category_id))
    category = result.scalars().first()
    if not category:
        raise NotFoundError(f"Category not found with id: {category_id}")
    return category


async def list_categories(db: AsyncSession) -> list[Category]:
    result = await db.execute(select(Category).order_by(Category.id))
    return list(result.scalars().all())


async def create_category(db: AsyncSession, data: CategoryCreate) -> Category:
    await _validate(db, data)
    category = Category(name=data.name, description=data.description)
    db.add(category)
    await db.flush()
    logger.debug("Created category %s (%s)", category.id, category.name)
    return category


async def update_category(db: AsyncSession, category_id: int, data: CategoryUpdate) -> Category:
    category = await get_category(db, category_id)
    await _validate(db, data, category_id=category_id)
    category.name = data.name
    category.description = data.description
    await db.flush()
    logger.debug("Updated category %s", category_id)
    return category


async def delete_category(db: AsyncSession, category_id: int) -> None:
    """Delete a category together with every task filed under it."""
    category = await get_category(db, category_id)
    result = await db.execute(delete(Task).where(Task.category_id == category_id))
    await db.delete(category)
    await db.flush()
    logger.debug("Deleted category %s and %s task(s)", category_id, result.rowcount)
