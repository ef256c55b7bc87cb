from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from todo_api.dependencies import get_db, get_current_principal, require_admin
from todo_api.schemas.category import Category as CategorySchema, CategoryCreate, CategoryUpdate
from todo_api.services import categories as category_service

router = APIRouter(prefix="/api/categories", tags=["categories"])

# Reads are open to any authenticated user, writes need the admin role.

@router.get("", response_model=list[CategorySchema], dependencies=[Depends(get_current_principal)])
async def list_categories(db: AsyncSession = Depends(get_db)):
    return await category_service.list_categories(db)

@router.get("/{category_id}", response_model=CategorySchema, dependencies=[Depends(get_current_principal)])
async def get_category(category_id: int, db: AsyncSession = Depends(get_db)):
    return await category_service.get_category(db, category_id)

@router.post("", response_model=CategorySchema, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_admin)])
async def create_category(data: CategoryCreate, db: AsyncSession = Depends(get_db)):
    category = await category_service.create_category(db, data)
    await db.commit()
    return category

@router.put("/{category_id}", response_model=CategorySchema, dependencies=[Depends(require_admin)])
async def update_category(category_id: int, data: CategoryUpdate, db: AsyncSession = Depends(get_db)):
    category = await category_service.update_category(db, category_id, data)
    await db.commit()
    return category

@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_admin)])
async def delete_category(category_id: int, db: AsyncSession = Depends(get_db)):
    await category_service.delete_category(db, category_id)
    await db.commit()
    return None
