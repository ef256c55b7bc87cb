from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from todo_api.database import Base
from todo_api.models.category import Category  # noqa: F401
from todo_api.models.user import User  # noqa: F401


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    description = Column(String(500), nullable=True)
    deadline = Column(DateTime(timezone=True), nullable=False)
    category_id = Column(Integer, ForeignKey("task_categories.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Many-to-one only; neither User nor Category holds a task collection.
    category = relationship("Category", lazy="joined")
    owner = relationship("User", lazy="joined")

    @property
    def username(self) -> str | None:
        return self.owner.username if self.owner else None

    @property
    def category_name(self) -> str | None:
        return self.category.name if self.category else None
