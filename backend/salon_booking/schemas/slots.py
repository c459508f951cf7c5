# backend/salon_booking/schemas/slots.py
"""
Pydantic schemas for the available-slots API.
"""

from datetime import date
from typing import Optional

from .common import CamelModel


class SlotRead(CamelModel):
    """One generated start time."""
    time: str  # "HH:MM"
    available: bool
    staff_id: Optional[int] = None  # staff who would take the slot


class AvailableSlotsResponse(CamelModel):
    date: date
    slots: list[SlotRead]
