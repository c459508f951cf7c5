# backend/salon_booking/schemas/reservations.py

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import Field, field_validator

from .common import CamelModel, check_not_past, check_time

ReservationStatus = Literal["PENDING", "CONFIRMED", "CANCELLED", "COMPLETED", "NO_SHOW"]


class ReservationCreate(CamelModel):
    menu_id: int
    staff_id: Optional[int] = None  # None = no preference
    reserved_date: date
    reserved_time: str
    notes: Optional[str] = Field(default=None, max_length=500)

    @field_validator("reserved_time")
    @classmethod
    def validate_time(cls, v):
        return check_time(v)

    @field_validator("reserved_date")
    @classmethod
    def validate_date(cls, v):
        return check_not_past(v)


class AdminReservationCreate(CamelModel):
    """Staff-side booking on behalf of a customer. Created as CONFIRMED."""
    user_id: int
    menu_id: int
    staff_id: Optional[int] = None
    reserved_date: date
    reserved_time: str
    notes: Optional[str] = Field(default=None, max_length=500)

    @field_validator("reserved_time")
    @classmethod
    def validate_time(cls, v):
        return check_time(v)


class ReservationUpdate(CamelModel):
    menu_id: Optional[int] = None
    staff_id: Optional[int] = None
    reserved_date: Optional[date] = None
    reserved_time: Optional[str] = None
    notes: Optional[str] = Field(default=None, max_length=500)

    @field_validator("reserved_time")
    @classmethod
    def validate_time(cls, v):
        return check_time(v)

    @field_validator("reserved_date")
    @classmethod
    def validate_date(cls, v):
        return check_not_past(v)


class AdminReservationUpdate(CamelModel):
    menu_id: Optional[int] = None
    staff_id: Optional[int] = None
    reserved_date: Optional[date] = None
    reserved_time: Optional[str] = None
    notes: Optional[str] = Field(default=None, max_length=500)

    @field_validator("reserved_time")
    @classmethod
    def validate_time(cls, v):
        return check_time(v)


class ReservationCancel(CamelModel):
    cancellation_reason: Optional[str] = Field(default=None, max_length=500)


class StatusUpdate(CamelModel):
    status: ReservationStatus


class ReservationRead(CamelModel):
    id: int

    user_id: int
    staff_id: Optional[int] = None
    menu_id: int

    reserved_date: date
    reserved_time: str

    status: str
    notes: Optional[str] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
