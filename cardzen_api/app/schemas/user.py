"""
Pydantic models for user data.

Request fields are declared optional so that a missing value reaches
``UserService`` and is reported with the API's own 400 message instead
of a framework validation error.  The password hash never appears in
a response model.
"""

from typing import Optional

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    """Schema for registering a user."""

    username: Optional[str] = Field(None, example="alice")
    email: Optional[str] = Field(None, example="a@x.com")
    password: Optional[str] = Field(None, example="pw1")


class UserLogin(BaseModel):
    """Credentials posted to ``/login``."""

    username: Optional[str] = Field(None, example="alice")
    password: Optional[str] = Field(None, example="pw1")


class UserRead(BaseModel):
    """Public summary of a user."""

    id: int
    username: str
    email: str

    model_config = {
        "from_attributes": True,
    }


class LoginResponse(BaseModel):
    message: str = Field("Login successful")
    token: str
    user: UserRead
