from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.db_handlers.base import BaseDBHandler, check_local_db
from taskboard.models.task import Task
from taskboard.utils.logger import setup_logger

logger = setup_logger("task_db_handler")


class TaskDBHandler(BaseDBHandler[Task]):
    def __init__(self):
        super().__init__(Task)

    @check_local_db
    async def create_task(
        self, obj_dict: dict[str, Any], *, db: AsyncSession = None
    ) -> Task:
        """Create a new task. ``obj_dict`` must carry ``owner_id``."""
        return await super().create(obj_dict, db=db)

    @check_local_db
    async def get_tasks_by_owner(
        self, owner_id: str, *, db: AsyncSession = None
    ) -> list[Task]:
        """All tasks belonging to ``owner_id``, in store order."""
        return await self.get_multi_by_attributes(owner_id=owner_id, db=db)

    @check_local_db
    async def get_owned_task_by_user(
        self, task_id: str, user_id: str, *, db: AsyncSession = None
    ) -> Task | None:
        """Get a task by id only if it belongs to ``user_id``, in one lookup."""
        try:
            stmt = select(Task).where(Task.id == task_id, Task.owner_id == user_id)
            result = await db.execute(stmt)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(
                f"Error retrieving task {task_id} for owner {user_id}: {e}",
                exc_info=True,
            )
            raise
