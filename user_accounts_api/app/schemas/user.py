"""
Pydantic models for user data.

Request bodies carry raw passwords; response models never contain a
password field of any kind.
"""

from pydantic import BaseModel, Field


class UserBase(BaseModel):
    name: str = Field(..., json_schema_extra={"example": "Jane Doe"})
    email: str = Field(..., json_schema_extra={"example": "jane@example.com"})


class UserCreate(UserBase):
    """Body of ``POST /users``."""

    password: str = Field(..., json_schema_extra={"example": "strongpassword"})
    password_confirm: str = Field(..., json_schema_extra={"example": "strongpassword"})


class UserUpdate(UserBase):
    """Body of ``PUT``/``PATCH /users/{id}``."""


class PasswordChange(BaseModel):
    """Body of ``PUT /users/{id}/password``."""

    current_password: str
    new_password: str
    password_confirm: str


class UserRead(UserBase):
    """Schema for reading a user from the API."""

    id: str

    model_config = {
        "from_attributes": True,
    }


class UserCreated(UserBase):
    """Response of a successful registration: name and email only."""


class UserId(BaseModel):
    id: str
