"""
Unit tests for the auth and task services with the stores mocked out.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from taskboard.exceptions import (
    AuthenticationError,
    ConflictError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from taskboard.schemas import (
    Identity,
    TaskCreateRequest,
    TaskUpdateRequest,
    UserCredentials,
)
from taskboard.services.auth_service import AuthService
from taskboard.services.task_service import TaskService
from taskboard.utils.auth import PasswordHasher, TokenService

ALICE = Identity(owner_id="alice-id", username="alice")


def _auth_service(users) -> AuthService:
    return AuthService(users, PasswordHasher(rounds=4), TokenService("unit-secret"))


class TestAuthService:
    @pytest.mark.asyncio
    async def test_register_checks_run_before_any_write(self):
        users = MagicMock()
        users.username_exists = AsyncMock(return_value=True)
        users.create = AsyncMock()
        service = _auth_service(users)

        with pytest.raises(ConflictError):
            await service.register(
                UserCredentials(username="alice", password="secret1"), db=None
            )

        users.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_register_maps_constraint_race_to_conflict(self):
        users = MagicMock()
        users.username_exists = AsyncMock(return_value=False)
        users.create = AsyncMock(side_effect=IntegrityError("insert", {}, Exception()))
        service = _auth_service(users)

        with pytest.raises(ConflictError) as exc_info:
            await service.register(
                UserCredentials(username="alice", password="secret1"), db=None
            )

        assert exc_info.value.message == "Username already exists"
        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_register_stores_hash_not_password(self):
        users = MagicMock()
        users.username_exists = AsyncMock(return_value=False)
        users.create = AsyncMock(
            side_effect=lambda data, db: SimpleNamespace(id="new-id", **data)
        )
        service = _auth_service(users)

        user = await service.register(
            UserCredentials(username="alice", password="secret1"), db=None
        )

        stored = users.create.await_args.args[0]
        assert stored["password_hash"] != "secret1"
        assert service.hasher.verify("secret1", stored["password_hash"])
        assert user.id == "new-id"

    @pytest.mark.asyncio
    async def test_login_issues_token_with_identity_claims(self):
        hasher = PasswordHasher(rounds=4)
        user = SimpleNamespace(
            id="alice-id", username="alice", password_hash=hasher.hash("secret1")
        )
        users = MagicMock()
        users.get_user_by_username = AsyncMock(return_value=user)
        service = AuthService(users, hasher, TokenService("unit-secret"))

        token = await service.login(
            UserCredentials(username="alice", password="secret1"), db=None
        )

        claims = service.tokens.verify(token)
        assert claims["sub"] == "alice-id"
        assert claims["username"] == "alice"

    @pytest.mark.asyncio
    async def test_login_unknown_user(self):
        users = MagicMock()
        users.get_user_by_username = AsyncMock(return_value=None)
        service = _auth_service(users)

        with pytest.raises(AuthenticationError) as exc_info:
            await service.login(
                UserCredentials(username="nobody", password="secret1"), db=None
            )

        assert exc_info.value.message == "Invalid username or password"


class TestTaskService:
    @staticmethod
    def _stored_task(**overrides):
        fields = {
            "id": "task-1",
            "title": "buy milk",
            "description": "2 litres",
            "status": "pending",
            "owner_id": ALICE.owner_id,
        }
        fields.update(overrides)
        return SimpleNamespace(**fields)

    @pytest.mark.asyncio
    async def test_lookup_is_scoped_to_identity(self):
        tasks = MagicMock()
        tasks.get_owned_task_by_user = AsyncMock(return_value=None)
        service = TaskService(tasks)

        with pytest.raises(NotFoundError):
            await service.get_task(ALICE, "task-1", db=None)

        tasks.get_owned_task_by_user.assert_awaited_once_with(
            "task-1", "alice-id", db=None
        )

    @pytest.mark.asyncio
    async def test_partial_update_merges_all_three_fields(self):
        stored = self._stored_task()
        tasks = MagicMock()
        tasks.get_owned_task_by_user = AsyncMock(return_value=stored)
        tasks.update = AsyncMock(return_value=stored)
        service = TaskService(tasks)

        await service.update_task(
            ALICE, "task-1", TaskUpdateRequest(status="in-progress"), db=None
        )

        tasks.update.assert_awaited_once_with(
            stored,
            {"title": "buy milk", "description": "2 litres", "status": "in-progress"},
            db=None,
        )

    @pytest.mark.asyncio
    async def test_invalid_status_blocks_the_write(self):
        tasks = MagicMock()
        tasks.get_owned_task_by_user = AsyncMock(return_value=self._stored_task())
        tasks.update = AsyncMock()
        service = TaskService(tasks)

        with pytest.raises(ValidationError):
            await service.update_task(
                ALICE, "task-1", TaskUpdateRequest(status=None), db=None
            )

        tasks.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_for_vanished_owner_is_unauthenticated(self):
        tasks = MagicMock()
        tasks.create_task = AsyncMock(
            side_effect=IntegrityError("insert", {}, Exception("FOREIGN KEY"))
        )
        service = TaskService(tasks)

        with pytest.raises(AuthenticationError):
            await service.create_task(
                ALICE, TaskCreateRequest(title="buy milk", status="pending"), db=None
            )

    @pytest.mark.asyncio
    async def test_store_failure_becomes_internal_error(self):
        tasks = MagicMock()
        tasks.get_tasks_by_owner = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("disk I/O error"))
        )
        service = TaskService(tasks)

        with pytest.raises(InternalError) as exc_info:
            await service.list_tasks(ALICE, db=None)

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Internal Server Error"
