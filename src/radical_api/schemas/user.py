"""User and login schemas."""

from typing import Annotated

from pydantic import Field, field_validator

from .common import CamelModel


class UserCreate(CamelModel):
    """Schema for the create-or-get user call."""

    id: str = Field(..., min_length=1, description="Client-chosen user identifier")
    name: str = Field(..., min_length=1, description="Display name")


class UserOut(CamelModel):
    """User identity plus whether this call created it."""

    id: str
    name: str
    created: bool


class LoginRequest(CamelModel):
    """Emoji login credentials."""

    emoji_combination: (
        Annotated[list[str], Field(min_length=1)] | Annotated[str, Field(min_length=1)]
    )
    selected_dictator: str = Field(..., min_length=1)
    selected_target: str = Field(..., min_length=1)

    @field_validator("emoji_combination")
    @classmethod
    def _join_emojis(cls, value: list[str] | str) -> str:
        if isinstance(value, list):
            return "".join(value)
        return value


class LoginResponse(CamelModel):
    """Result of a successful login or first-time sign-up."""

    success: bool = True
    is_new_user: bool = False
    user_id: str
    username: str
    message: str
