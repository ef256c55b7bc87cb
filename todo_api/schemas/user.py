from pydantic import BaseModel
from todo_api.models.user import Role


class Token(BaseModel):
    access_token: str
    token_type: str


class TokenData(BaseModel):
    username: str | None = None


class UserResponse(BaseModel):
    id: int
    username: str
    roles: list[Role]

    class Config:
        from_attributes = True
