"""
Task access control.

Every read or write is scoped to the caller's identity with a single
``id AND owner_id`` lookup. A task owned by someone else is reported exactly
like a task that does not exist.
"""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.db_handlers.task import TaskDBHandler
from taskboard.exceptions import AuthenticationError, NotFoundError, ValidationError
from taskboard.models import TASK_STATUSES, Task
from taskboard.schemas import Identity, TaskCreateRequest, TaskUpdateRequest
from taskboard.services.errors import storage_errors_as_internal
from taskboard.utils.logger import setup_logger

logger = setup_logger("task_service")

INVALID_STATUS_MESSAGE = f"Status must be one of: {', '.join(TASK_STATUSES)}"


def _validate_status(status: str | None) -> None:
    if status not in TASK_STATUSES:
        raise ValidationError(INVALID_STATUS_MESSAGE)


class TaskService:
    def __init__(self, task_db_handler: TaskDBHandler):
        self.tasks = task_db_handler

    @storage_errors_as_internal
    async def list_tasks(self, identity: Identity, *, db: AsyncSession) -> list[Task]:
        return await self.tasks.get_tasks_by_owner(identity.owner_id, db=db)

    @storage_errors_as_internal
    async def get_task(
        self, identity: Identity, task_id: str, *, db: AsyncSession
    ) -> Task:
        task = await self.tasks.get_owned_task_by_user(
            task_id, identity.owner_id, db=db
        )
        if task is None:
            raise NotFoundError("Task not found")
        return task

    @storage_errors_as_internal
    async def create_task(
        self, identity: Identity, data: TaskCreateRequest, *, db: AsyncSession
    ) -> Task:
        if not data.title or not data.title.strip():
            raise ValidationError("Title is required")
        _validate_status(data.status)

        try:
            task = await self.tasks.create_task(
                {
                    "title": data.title,
                    "description": data.description,
                    "status": data.status,
                    "owner_id": identity.owner_id,
                },
                db=db,
            )
        except IntegrityError as e:
            # Validly signed token for a user that no longer exists
            logger.warning(f"Rejected task for unknown owner {identity.owner_id}")
            raise AuthenticationError() from e
        logger.info(f"Created task {task.id} for user {identity.owner_id}")
        return task

    @storage_errors_as_internal
    async def update_task(
        self,
        identity: Identity,
        task_id: str,
        data: TaskUpdateRequest,
        *,
        db: AsyncSession,
    ) -> Task:
        """Apply only the fields present in the request body."""
        task = await self.get_task(identity, task_id, db=db)
        changes = data.model_dump(exclude_unset=True)

        if "title" in changes and (not changes["title"] or not changes["title"].strip()):
            raise ValidationError("Title cannot be empty")
        if "status" in changes:
            _validate_status(changes["status"])

        merged = {
            "title": changes.get("title", task.title),
            "description": changes.get("description", task.description),
            "status": changes.get("status", task.status),
        }
        task = await self.tasks.update(task, merged, db=db)
        logger.info(
            f"Updated task {task.id} ({', '.join(sorted(changes)) or 'no fields'})"
        )
        return task

    @storage_errors_as_internal
    async def delete_task(
        self, identity: Identity, task_id: str, *, db: AsyncSession
    ) -> str:
        task = await self.get_task(identity, task_id, db=db)
        await self.tasks.delete(task, db=db)
        logger.info(f"Deleted task {task_id} for user {identity.owner_id}")
        return task_id
