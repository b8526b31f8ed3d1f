"""
Request and response models for the Taskboard API.

Request models accept missing or empty values on purpose: the services check
required fields in a fixed order and report each with its own message.
"""

from pydantic import BaseModel, ConfigDict, Field


class Identity(BaseModel):
    """Authenticated caller, rebuilt from token claims for one request."""

    owner_id: str
    username: str

    model_config = ConfigDict(frozen=True)


class UserCredentials(BaseModel):
    username: str | None = Field(None, description="Account username")
    password: str | None = Field(None, description="Account password")


class UserResponse(BaseModel):
    id: str = Field(..., description="User unique identifier")
    username: str = Field(..., description="Username")

    model_config = ConfigDict(from_attributes=True)


class TokenResponse(BaseModel):
    token: str = Field(..., description="Signed bearer token")


class MessageResponse(BaseModel):
    message: str = Field(..., description="Response message")


class TaskCreateRequest(BaseModel):
    title: str | None = Field(None, description="Short summary, required")
    description: str | None = Field(None, description="Optional details")
    status: str | None = Field(
        None, description="One of: pending, in-progress, completed"
    )


class TaskUpdateRequest(BaseModel):
    # Only fields present in the body are applied: model_dump(exclude_unset=True).
    title: str | None = None
    description: str | None = None
    status: str | None = None


class TaskResponse(BaseModel):
    id: str
    title: str
    description: str | None = None
    status: str
    owner_id: str

    model_config = ConfigDict(from_attributes=True)
