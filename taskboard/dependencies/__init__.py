from taskboard.dependencies.auth import (
    get_auth_service,
    get_current_identity,
    get_password_hasher,
    get_token_service,
)
from taskboard.dependencies.tasks import get_task_service

__all__ = [
    "get_auth_service",
    "get_current_identity",
    "get_password_hasher",
    "get_token_service",
    "get_task_service",
]
