from pydantic import BaseModel, Field, field_validator
from todo_api.utils.sanitization import sanitize_string


class CategoryBase(BaseModel):
    name: str | None = Field(None, max_length=50)
    description: str | None = Field(None, max_length=255)

    @field_validator("name", "description", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)


class CategoryCreate(CategoryBase):
    pass


class CategoryUpdate(CategoryBase):
    pass


class Category(BaseModel):
    id: int
    name: str
    description: str | None = None

    class Config:
        from_attributes = True
