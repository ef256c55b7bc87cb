from datetime import date, datetime

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from todo_api.dependencies import get_db, get_current_principal
from todo_api.exceptions import AccessDeniedError
from todo_api.schemas.task import TaskCreate, Task as TaskSchema, TaskUpdate
from todo_api.services import tasks as task_service
from todo_api.services.access import Principal

router = APIRouter(prefix="/api/tasks", tags=["tasks"])

@router.post("", response_model=TaskSchema, status_code=status.HTTP_201_CREATED)
async def create_task(
    task_data: TaskCreate,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    task = await task_service.create_task(db, task_data, principal)
    await db.commit()
    return task

@router.get("", response_model=list[TaskSchema])
async def list_tasks(
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    return await task_service.list_tasks_for(db, principal)

@router.get("/search", response_model=list[TaskSchema])
async def search_tasks(
    username: str | None = None,
    name: str | None = None,
    description: str | None = None,
    deadline: datetime | date | None = None,
    category_id: int | None = None,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    # The search itself is unrestricted; non-admins are pinned to their own tasks here.
    if not principal.is_admin():
        if username is None:
            username = principal.username
        elif username != principal.username:
            raise AccessDeniedError("Cannot search tasks of another user")

    return await task_service.search_tasks(
        db,
        username=username,
        name=name,
        description=description,
        deadline=deadline,
        category_id=category_id,
    )

@router.get("/{task_id}", response_model=TaskSchema)
async def get_task(
    task_id: int,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    return await task_service.get_task(db, task_id, principal)

@router.put("/{task_id}", response_model=TaskSchema)
async def update_task(
    task_id: int,
    update_data: TaskUpdate,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    task = await task_service.update_task(db, task_id, update_data, principal)
    await db.commit()
    return task

@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: int,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    await task_service.delete_task(db, task_id, principal)
    await db.commit()
    return None
