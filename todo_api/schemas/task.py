from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from todo_api.utils.sanitization import sanitize_string


# Blank names, missing deadlines and missing categories are accepted here and
# rejected by the task service, so every entry point gets the same errors.

class TaskCreate(BaseModel):
    name: str | None = Field(None, max_length=100)
    description: str | None = Field(None, max_length=500)
    deadline: datetime | None = None
    category_id: int | None = None

    @field_validator("name", "description", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)


class TaskUpdate(BaseModel):
    name: str | None = Field(None, max_length=100)
    description: str | None = Field(None, max_length=500)
    deadline: datetime | None = None

    @field_validator("name", "description", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)


class Task(BaseModel):
    id: int
    name: str
    description: str | None = None
    deadline: datetime
    category_id: int
    category_name: str | None = None
    username: str | None = None

    class Config:
        from_attributes = True
