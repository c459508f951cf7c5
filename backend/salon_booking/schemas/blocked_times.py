# backend/salon_booking/schemas/blocked_times.py

from datetime import datetime
from typing import Optional

from pydantic import field_validator, model_validator

from .common import CamelModel


class BlockedTimeCreate(CamelModel):
    start_date_time: datetime  # store-local wall clock, no offset
    end_date_time: datetime
    reason: Optional[str] = None

    @field_validator("start_date_time", "end_date_time")
    @classmethod
    def naive_only(cls, v):
        if v.tzinfo is not None:
            raise ValueError("Use store-local time without a UTC offset")
        return v

    @model_validator(mode="after")
    def check_range(self):
        if self.end_date_time <= self.start_date_time:
            raise ValueError("endDateTime must be after startDateTime")
        return self


class BlockedTimeRead(CamelModel):
    id: int
    start_date_time: datetime
    end_date_time: datetime
    reason: Optional[str] = None
    created_at: Optional[datetime] = None
