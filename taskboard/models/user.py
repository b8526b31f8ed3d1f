"""
User model for authentication and task ownership.

Architecture:
    User → Task

Users are created by registration (or the seed command) and are never updated
or deleted by the API.
"""

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from taskboard.models.base import Base, UUIDMixin


class User(Base, UUIDMixin):
    """
    Registered account that owns tasks.

    The bcrypt hash is excluded from ``to_dict`` so it cannot leak into a response.
    """

    __tablename__ = "users"
    __private_columns__ = ("password_hash",)

    username = Column(
        String(50),
        nullable=False,
        unique=True,
        index=True,
        comment="Unique, case-sensitive username used for login",
    )

    password_hash = Column(
        String(255),
        nullable=False,
        comment="Bcrypt hash including salt and cost factor",
    )

    tasks = relationship(
        "Task",
        back_populates="owner",
        cascade="all, delete-orphan",
        doc="Tasks created by this user",
    )

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}')>"
