"""User registry Pydantic models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserRecord(BaseModel):
    """A registered user as stored in the user store."""

    id: str = Field(..., description="Store-assigned identifier")
    name: str = Field(..., description="Name of the user")
    email: str = Field(..., description="Email address of the user")
    created_at: datetime = Field(..., alias="createdAt", description="Creation timestamp, set by the store")

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        json_schema_extra={
            "example": {
                "id": "0f8fad5b-d9cb-469f-a165-70867728950e",
                "name": "Jane Doe",
                "email": "jane.doe@example.com",
                "createdAt": "2025-01-01T12:00:00+00:00",
            }
        },
    )


class CreateUserRequest(BaseModel):
    """Body of a createUser request."""

    name: str | None = None
    email: str | None = None

    model_config = ConfigDict(extra="ignore")


class UpdateEmailRequest(BaseModel):
    """Body of an updateEmail request."""

    name: str | None = None
    new_email: str | None = Field(None, alias="newEmail")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)
