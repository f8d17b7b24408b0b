"""User directory Pydantic models shared between the store and the service."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator


class UserBase(BaseModel):
    """Fields a client supplies on create and replaces on update."""

    first_name: str = ""
    last_name: str = ""
    nickname: str = ""
    password: str = ""
    email: str = ""
    country: str = ""

    @field_validator("first_name", "last_name", "nickname", "password", "email", "country", mode="before")
    @classmethod
    def null_to_empty(cls, value):
        # JSON null leaves a field at its zero value.
        return "" if value is None else value


class User(UserBase):
    model_config = ConfigDict(frozen=True)

    id: str
    created_at: datetime
    updated_at: datetime
