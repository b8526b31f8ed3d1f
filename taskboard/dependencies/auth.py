"""
Authentication dependencies for FastAPI route protection.
"""


from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from taskboard.db_handlers.user import UserDBHandler
from taskboard.exceptions import AuthenticationError
from taskboard.schemas import Identity
from taskboard.services.auth_service import AuthService
from taskboard.utils.auth import PasswordHasher, TokenService

# Missing or non-Bearer headers come through as None so they get the same 401 as bad tokens
security = HTTPBearer(auto_error=False)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_auth_service(
    password_hasher: PasswordHasher = Depends(get_password_hasher),
    token_service: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(UserDBHandler(), password_hasher, token_service)


async def get_current_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    token_service: TokenService = Depends(get_token_service),
) -> Identity:
    """
    Dependency that turns a valid bearer token into the caller's Identity.

    Every failure (no header, wrong scheme, bad signature, expired token, missing
    claims) raises the same AuthenticationError. No database lookup is made.
    """
    if credentials is None:
        raise AuthenticationError()

    claims = token_service.verify(credentials.credentials)

    username = claims.get("username")
    if not isinstance(username, str):
        raise AuthenticationError()

    return Identity(owner_id=claims["sub"], username=username)
