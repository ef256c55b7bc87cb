from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession
from jose import JWTError, jwt
from todo_api.database import get_db as db_session
from todo_api.config import settings
from todo_api.exceptions import AccessDeniedError
from todo_api.models.user import User as UserModel
from todo_api.schemas.user import TokenData
from todo_api.services.access import Principal
from todo_api.services.users import get_user_by_username

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="token")

def get_db(db: AsyncSession = Depends(db_session)):
    return db

async def get_current_user(
    db: AsyncSession = Depends(get_db),
    token: str = Depends(oauth2_scheme)
) -> UserModel:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        username: str = payload.get("sub")
        if username is None:
            raise credentials_exception
        token_data = TokenData(username=username)
    except JWTError:
        raise credentials_exception

    user = await get_user_by_username(db, token_data.username)
    if user is None:
        raise credentials_exception
    return user

async def get_current_principal(current_user: UserModel = Depends(get_current_user)) -> Principal:
    # Roles come from the database on every request, never from the token.
    return Principal.from_user(current_user)

async def require_admin(principal: Principal = Depends(get_current_principal)) -> Principal:
    if not principal.is_admin():
        raise AccessDeniedError("Admin role required")
    return principal
