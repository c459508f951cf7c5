# backend/salon_booking/schemas/staff.py

from datetime import date
from typing import Optional

from pydantic import Field, field_validator, model_validator

from ..services.scheduling import TimeOfDay
from .common import CamelModel, check_time


class StaffCreate(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    role: Optional[str] = None
    is_active: bool = True


class StaffUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    role: Optional[str] = None
    is_active: Optional[bool] = None


class StaffRead(CamelModel):
    id: int
    name: str
    role: Optional[str] = None
    is_active: bool


# ---------------------------------------------------------------------
# Shifts
# ---------------------------------------------------------------------

class ShiftIn(CamelModel):
    day_of_week: int = Field(ge=0, le=6)  # 0 = Monday
    start_time: str
    end_time: str
    is_active: bool = True

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time(cls, v):
        return check_time(v)

    @model_validator(mode="after")
    def check_range(self):
        if TimeOfDay.parse(self.start_time) >= TimeOfDay.parse(self.end_time):
            raise ValueError("endTime must be after startTime")
        return self


class ShiftsReplace(CamelModel):
    """Full weekly schedule; replaces whatever the staff member had."""
    shifts: list[ShiftIn]

    @field_validator("shifts")
    @classmethod
    def one_rule_per_day(cls, v):
        days = [s.day_of_week for s in v]
        if len(days) != len(set(days)):
            raise ValueError("At most one shift per dayOfWeek")
        return v


class ShiftRead(CamelModel):
    id: int
    day_of_week: int
    start_time: str
    end_time: str
    is_active: bool


# ---------------------------------------------------------------------
# Vacations
# ---------------------------------------------------------------------

class VacationCreate(CamelModel):
    start_date: date
    end_date: date  # inclusive
    reason: Optional[str] = None

    @model_validator(mode="after")
    def check_range(self):
        if self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        return self


class VacationRead(CamelModel):
    id: int
    staff_id: int
    start_date: date
    end_date: date
    reason: Optional[str] = None
