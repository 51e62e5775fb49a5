"""Request and response bodies. JSON keys are camelCase on the wire."""

from datetime import datetime
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

T = TypeVar("T")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiResponse(CamelModel, Generic[T]):
    success: bool
    message: str
    data: Optional[T] = None


# Auth

class LoginRequest(CamelModel):
    email: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1, max_length=100)


class RegisterRequest(CamelModel):
    name: str = Field(min_length=1, max_length=50)
    email: str = Field(max_length=100, pattern=EMAIL_PATTERN)
    password: str = Field(min_length=6, max_length=100)


class ResetPasswordRequest(CamelModel):
    name: str = Field(min_length=1, max_length=50)
    email: str = Field(max_length=100, pattern=EMAIL_PATTERN)
    new_password: str = Field(min_length=6, max_length=100)


class LoginResponse(CamelModel):
    token: str
    name: str
    email: str


# Boards

class BoardRequest(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)


class BoardResponse(CamelModel):
    id: int
    title: str
    content: str
    author_name: str
    created_at: datetime
    updated_at: datetime
    view_count: int
    can_edit: bool
