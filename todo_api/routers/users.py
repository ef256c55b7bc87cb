from fastapi import APIRouter, Depends
from todo_api.dependencies import get_current_user
from todo_api.models.user import User as UserModel
from todo_api.schemas.user import UserResponse

router = APIRouter(prefix="/users", tags=["users"])

@router.get("/me", response_model=UserResponse)
async def get_me(current_user: UserModel = Depends(get_current_user)):
    return current_user
