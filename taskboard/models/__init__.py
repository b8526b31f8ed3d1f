"""
Database models for the Taskboard API.

Architecture: User → Task ownership.
"""

from taskboard.models.task import TASK_STATUSES, Task
from taskboard.models.user import User

__all__ = [
    "User",
    "Task",
    "TASK_STATUSES",
]
