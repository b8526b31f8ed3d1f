"""
Task model for user-owned to-do items.

Status lifecycle is free-form within the allowed set:
    pending ⇄ in-progress ⇄ completed
"""

from sqlalchemy import Column, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from taskboard.models.base import Base, UUIDMixin

TASK_STATUSES = ("pending", "in-progress", "completed")


class Task(Base, UUIDMixin):
    """A single task, visible and mutable only through its owner."""

    __tablename__ = "tasks"

    title = Column(
        Text,
        nullable=False,
        comment="Short non-empty summary of the task",
    )

    description = Column(
        Text,
        nullable=True,
        comment="Optional free-form details",
    )

    status = Column(
        String(20),
        nullable=False,
        default="pending",
        comment="One of: pending, in-progress, completed",
    )

    owner_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Reference to the user who created this task",
    )

    owner = relationship(
        "User",
        back_populates="tasks",
        doc="User who owns this task",
    )

    def __repr__(self):
        return f"<Task(id={self.id}, status='{self.status}', owner_id={self.owner_id})>"
