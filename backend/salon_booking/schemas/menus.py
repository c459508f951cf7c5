# backend/salon_booking/schemas/menus.py

from typing import Optional

from pydantic import Field

from .common import CamelModel


class MenuCreate(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    price: float = Field(default=0, ge=0)
    duration: int = Field(gt=0)  # minutes
    description: Optional[str] = None
    is_active: bool = True


class MenuUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    price: Optional[float] = Field(default=None, ge=0)
    duration: Optional[int] = Field(default=None, gt=0)
    description: Optional[str] = None
    is_active: Optional[bool] = None


class MenuRead(CamelModel):
    id: int
    name: str
    price: float
    duration: int
    description: Optional[str] = None
    is_active: bool
