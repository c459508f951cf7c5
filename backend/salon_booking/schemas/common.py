# backend/salon_booking/schemas/common.py
"""
Shared schema pieces: camelCase wire names, date/time field checks.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from ..errors import ValidationFailed
from ..services.scheduling import is_valid_time


class CamelModel(BaseModel):
    """snake_case in Python, camelCase on the wire."""

    model_config = {
        "from_attributes": True,
        "populate_by_name": True,
        "alias_generator": to_camel,
    }


def check_time(value: Optional[str]) -> Optional[str]:
    if value is not None and not is_valid_time(value):
        raise ValueError("Time must be in HH:mm format")
    return value


def check_not_past(value: Optional[date]) -> Optional[date]:
    if value is not None and value < date.today():
        raise ValueError("Reservation date must be today or in the future")
    return value


def parse_date_param(value: str, name: str = "date") -> date:
    """YYYY-MM-DD query parameter → date, 400 otherwise."""
    try:
        if len(value) != 10:
            raise ValueError(value)
        return date.fromisoformat(value)
    except ValueError:
        raise ValidationFailed(
            f"{name} must be in YYYY-MM-DD format",
            details={"field": name, "value": value},
        )
