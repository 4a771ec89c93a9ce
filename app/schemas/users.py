"""
app/schemas/users.py

Schemas for user, login and notification endpoints.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class UserRegisterRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=120)
    password: str = Field(..., min_length=1)
    email: str | None = None


class UserLoginRequest(BaseModel):
    username: str
    password: str


class UserResponse(BaseModel):
    id: str
    username: str
    email: str | None
    role: str

    model_config = {"from_attributes": True}


class NotificationCreateRequest(BaseModel):
    part_id: uuid.UUID
    type: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    price_before: float | None = None
    price_after: float | None = None


class NotificationResponse(BaseModel):
    id: uuid.UUID
    part_id: uuid.UUID
    type: str
    message: str
    read_status: bool
    price_before: float | None
    price_after: float | None
    created_at: datetime

    model_config = {"from_attributes": True}
