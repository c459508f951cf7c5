# backend/salon_booking/schemas/settings.py

import json
from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator, model_validator

from ..services.scheduling import TimeOfDay
from ..services.scheduling.config import WEEKDAY_NAMES
from .common import CamelModel, check_time


class StoreSettingsUpdate(CamelModel):
    open_time: str
    close_time: str
    slot_duration: int = Field(gt=0)
    closed_days: list[str] = []
    cancellation_deadline_hours: int = Field(default=24, ge=0)

    @field_validator("open_time", "close_time")
    @classmethod
    def validate_time(cls, v):
        return check_time(v)

    @field_validator("closed_days")
    @classmethod
    def validate_closed_days(cls, v):
        unknown = [d for d in v if d not in WEEKDAY_NAMES]
        if unknown:
            raise ValueError(f"Unknown weekday name(s): {', '.join(unknown)}")
        return list(dict.fromkeys(v))

    @model_validator(mode="after")
    def check_hours(self):
        if TimeOfDay.parse(self.open_time) >= TimeOfDay.parse(self.close_time):
            raise ValueError("closeTime must be after openTime")
        return self


class StoreSettingsRead(CamelModel):
    open_time: str
    close_time: str
    slot_duration: int
    closed_days: list[str]
    cancellation_deadline_hours: int
    updated_at: Optional[datetime] = None

    @field_validator("closed_days", mode="before")
    @classmethod
    def decode_closed_days(cls, v):
        # Stored as JSON text
        if isinstance(v, str):
            return json.loads(v) if v else []
        return v


class FeatureFlagsUpdate(CamelModel):
    enable_staff_selection: Optional[bool] = None
    enable_staff_shift_management: Optional[bool] = None


class FeatureFlagsRead(CamelModel):
    enable_staff_selection: bool = False
    enable_staff_shift_management: bool = False
