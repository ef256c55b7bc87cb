import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from todo_api.config import settings
from todo_api.database import create_tables, engine
from todo_api.exceptions import (
    AccessDeniedError,
    AuthenticationMissingError,
    NotFoundError,
    TodoError,
    ValidationError,
)
from todo_api.logging_setup import setup_logging
from todo_api.routers.auth import router as auth_router
from todo_api.routers.categories import router as categories_router
from todo_api.routers.tasks import router as tasks_router
from todo_api.routers.users import router as users_router

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    AuthenticationMissingError: status.HTTP_401_UNAUTHORIZED,
    AccessDeniedError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    if settings.CREATE_TABLES:
        logger.info("Creating database tables")
        await create_tables()
    logger.info("Todo API started")

    yield

    await engine.dispose()
    logger.info("Todo API stopped")


app = FastAPI(
    lifespan=lifespan,
    title="Todo API",
    description="Todo lists with per-user task ownership and admin-managed categories",
    version="1.0.0",
)


@app.exception_handler(TodoError)
async def todo_error_handler(request: Request, exc: TodoError):
    status_code = next(
        (code for cls, code in ERROR_STATUS.items() if isinstance(exc, cls)),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    if status_code == status.HTTP_403_FORBIDDEN:
        logger.warning("%s %s denied: %s", request.method, request.url.path, exc.detail)
    elif status_code == status.HTTP_401_UNAUTHORIZED:
        logger.error("%s %s reached without a principal", request.method, request.url.path)
    return JSONResponse(status_code=status_code, content={"detail": exc.detail})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


# Global exception handler so unexpected failures are logged with a traceback
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal Server Error"},
    )


app.include_router(auth_router)
app.include_router(users_router)
app.include_router(tasks_router)
app.include_router(categories_router)


@app.get("/")
def root():
    return {"message": "Todo API running"}
