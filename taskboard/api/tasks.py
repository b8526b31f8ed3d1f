"""
Task API Routes - CRUD on the caller's own tasks.

Every route requires a bearer token. Lookups are scoped to the caller, so a
task belonging to another user answers 404 exactly like a missing one.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.db import get_app_db
from taskboard.dependencies.auth import get_current_identity
from taskboard.dependencies.tasks import get_task_service
from taskboard.schemas import (
    Identity,
    MessageResponse,
    TaskCreateRequest,
    TaskResponse,
    TaskUpdateRequest,
)
from taskboard.services.task_service import TaskService

router = APIRouter(prefix="/tasks", tags=["Tasks"])


@router.get("", response_model=list[TaskResponse])
async def list_tasks(
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_app_db),
    task_service: TaskService = Depends(get_task_service),
):
    tasks = await task_service.list_tasks(identity, db=db)
    return [TaskResponse.model_validate(task) for task in tasks]


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: str,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_app_db),
    task_service: TaskService = Depends(get_task_service),
):
    task = await task_service.get_task(identity, task_id, db=db)
    return TaskResponse.model_validate(task)


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    task_data: TaskCreateRequest,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_app_db),
    task_service: TaskService = Depends(get_task_service),
):
    """Create a task owned by the caller."""
    task = await task_service.create_task(identity, task_data, db=db)
    return TaskResponse.model_validate(task)


@router.patch("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: str,
    task_data: TaskUpdateRequest,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_app_db),
    task_service: TaskService = Depends(get_task_service),
):
    """Partially update a task; omitted fields keep their current value."""
    task = await task_service.update_task(identity, task_id, task_data, db=db)
    return TaskResponse.model_validate(task)


@router.delete("/{task_id}", response_model=MessageResponse)
async def delete_task(
    task_id: str,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_app_db),
    task_service: TaskService = Depends(get_task_service),
):
    deleted_id = await task_service.delete_task(identity, task_id, db=db)
    return MessageResponse(message=f"Task {deleted_id} deleted")
