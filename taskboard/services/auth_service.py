"""
Registration and login flows.

Both flows talk to the credential store, the password hasher and the token
service directly; neither goes through the bearer-token gate.
"""

import asyncio

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.db_handlers.user import UserDBHandler
from taskboard.exceptions import AuthenticationError, ConflictError, ValidationError
from taskboard.models import User
from taskboard.schemas import UserCredentials
from taskboard.services.errors import storage_errors_as_internal
from taskboard.utils.auth import MAX_PASSWORD_BYTES, PasswordHasher, TokenService
from taskboard.utils.logger import setup_logger

logger = setup_logger("auth_service")

LOGIN_FAILED_MESSAGE = "Invalid username or password"


class AuthService:
    def __init__(
        self,
        user_db_handler: UserDBHandler,
        password_hasher: PasswordHasher,
        token_service: TokenService,
    ):
        self.users = user_db_handler
        self.hasher = password_hasher
        self.tokens = token_service

    @storage_errors_as_internal
    async def register(self, credentials: UserCredentials, *, db: AsyncSession) -> User:
        """Create a user. Each check short-circuits before anything is written."""
        username, password = credentials.username, credentials.password

        if not username or not username.strip():
            raise ValidationError("Username is required")
        if not password:
            raise ValidationError("Password is required")
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError(
                f"Password must be at most {MAX_PASSWORD_BYTES} bytes"
            )

        if await self.users.username_exists(username, db=db):
            raise ConflictError("Username already exists")

        password_hash = await asyncio.to_thread(self.hasher.hash, password)
        try:
            user = await self.users.create(
                {"username": username, "password_hash": password_hash}, db=db
            )
        except IntegrityError as e:
            # Lost a race with a concurrent registration of the same name
            raise ConflictError("Username already exists") from e

        logger.info(f"Registered user {user.username} (ID: {user.id})")
        return user

    @storage_errors_as_internal
    async def login(self, credentials: UserCredentials, *, db: AsyncSession) -> str:
        """Check credentials and return a freshly issued bearer token."""
        username, password = credentials.username, credentials.password

        if not username or not password:
            raise ValidationError("Username and password are required")

        user = await self.users.get_user_by_username(username, db=db)
        if user is None:
            await asyncio.to_thread(self.hasher.dummy_verify, password)
            logger.info("Login failed: unknown username")
            raise AuthenticationError(LOGIN_FAILED_MESSAGE)

        if not await asyncio.to_thread(self.hasher.verify, password, user.password_hash):
            logger.info(f"Login failed: wrong password for user {user.id}")
            raise AuthenticationError(LOGIN_FAILED_MESSAGE)

        token = self.tokens.issue({"sub": user.id, "username": user.username})
        logger.info(f"Login: {user.username} (ID: {user.id})")
        return token
