# Authentication API routes for user registration and login

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.db import get_app_db
from taskboard.dependencies.auth import get_auth_service
from taskboard.schemas import TokenResponse, UserCredentials, UserResponse
from taskboard.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED
)
async def register_user(
    credentials: UserCredentials,
    db: AsyncSession = Depends(get_app_db),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Register a new user. The password hash is never returned."""
    user = await auth_service.register(credentials, db=db)
    return UserResponse.model_validate(user)


@router.post("/login", response_model=TokenResponse)
async def login_user(
    credentials: UserCredentials,
    db: AsyncSession = Depends(get_app_db),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Authenticate a user and return a bearer token for API access."""
    token = await auth_service.login(credentials, db=db)
    return TokenResponse(token=token)
