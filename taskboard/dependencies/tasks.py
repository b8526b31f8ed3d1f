from taskboard.db_handlers.task import TaskDBHandler
from taskboard.services.task_service import TaskService


def get_task_service() -> TaskService:
    return TaskService(TaskDBHandler())
