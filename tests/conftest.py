"""Shared fixtures: a throwaway SQLite database per test, seeded users, and an
HTTP client wired to the app with ``get_db`` overridden."""
import os

# Must be set before todo_api.config is imported.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ERROR_LOG_PATH", "")

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from todo_api.database import Base, get_db
from todo_api.main import app
from todo_api.models import task as _task_models  # noqa: F401
from todo_api.models.user import Role
from todo_api.schemas.category import CategoryCreate
from todo_api.schemas.task import TaskCreate
from todo_api.services.access import Principal
from todo_api.services.categories import create_category
from todo_api.services.tasks import create_task
from todo_api.services.users import create_user
from todo_api.utils.security import create_access_token


def in_days(days: float) -> datetime:
    return datetime.now(timezone.utc) + timedelta(days=days)


@pytest.fixture()
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'todo.sqlite3'}")

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture()
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture()
async def users(db):
    admin = await create_user(db, "admin", "adminpass", {Role.USER, Role.ADMIN})
    user1 = await create_user(db, "user1", "password1", {Role.USER})
    user2 = await create_user(db, "user2", "password2", {Role.USER})
    await db.commit()
    return SimpleNamespace(admin=admin, user1=user1, user2=user2)


@pytest.fixture()
def principals(users):
    return SimpleNamespace(
        admin=Principal.from_user(users.admin),
        user1=Principal.from_user(users.user1),
        user2=Principal.from_user(users.user2),
    )


@pytest.fixture()
async def work(db):
    category = await create_category(db, CategoryCreate(name="Work", description="Office things"))
    await db.commit()
    return category


@pytest.fixture()
async def ship_task(db, principals, work):
    """A task named "Ship" owned by user1, due tomorrow."""
    task = await create_task(
        db,
        TaskCreate(name="Ship", description="Ship the release", deadline=in_days(1), category_id=work.id),
        principals.user1,
    )
    await db.commit()
    return task


@pytest.fixture()
async def client(session_factory, users):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def auth_headers(username: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token({'sub': username})}"}
