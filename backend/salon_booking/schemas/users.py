# backend/salon_booking/schemas/users.py

from datetime import datetime
from typing import Optional

from pydantic import Field

from .common import CamelModel


class UserCreate(CamelModel):
    name: Optional[str] = Field(default=None, max_length=100)
    email: str = Field(min_length=3, pattern=r"^[^@\s]+@[^@\s]+$")


class UserRead(CamelModel):
    id: int
    name: Optional[str] = None
    email: str
    is_active: bool
    created_at: Optional[datetime] = None
