# backend/salon_booking/errors.py
"""
Booking error taxonomy.

Every error carries a stable code so callers can tell the variants apart
(e.g. the three conflict kinds). main.py renders them as
{"detail": message, "code": code} with the class status code.
"""

from typing import Any, Optional

from fastapi import status


class BookingError(Exception):
    """Base class for errors surfaced to API callers."""

    code: str = "BOOKING_ERROR"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Booking error"

    def __init__(self, message: Optional[str] = None, details: Optional[dict[str, Any]] = None):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"detail": self.message, "code": self.code}
        if self.details:
            payload["details"] = self.details
        return payload


# ── Validation (400) ─────────────────────────────────────────────────────


class ValidationFailed(BookingError):
    code = "VALIDATION_ERROR"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class InvalidStatus(BookingError):
    code = "INVALID_STATUS"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Reservation is already cancelled or completed"


class InvalidStatusTransition(BookingError):
    code = "INVALID_STATUS_TRANSITION"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Status transition is not allowed"


class PastReservation(BookingError):
    code = "PAST_RESERVATION"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Cannot change a past reservation"


class CancellationDeadlinePassed(BookingError):
    code = "CANCELLATION_DEADLINE_PASSED"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Cancellation deadline has passed"


# ── Not found (404) ──────────────────────────────────────────────────────


class SettingsNotFound(BookingError):
    code = "SETTINGS_NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Store settings not found"


class MenuNotFound(BookingError):
    code = "MENU_NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Menu not found or inactive"


class StaffNotFound(BookingError):
    code = "STAFF_NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Staff not found or inactive"


class ReservationNotFound(BookingError):
    code = "NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Reservation not found"


# ── Infeasible requests ──────────────────────────────────────────────────


class NoStaffAvailable(BookingError):
    """No active staff at all."""

    code = "NO_STAFF_AVAILABLE"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "No active staff registered"


class NoAvailableStaffForTime(BookingError):
    """Staff exist, but every one of them is busy or off at that time."""

    code = "NO_STAFF_AVAILABLE_FOR_TIME"
    status_code = status.HTTP_409_CONFLICT
    default_message = "No staff available for the selected time"


# ── Conflicts (409) ──────────────────────────────────────────────────────


class TimeSlotConflict(BookingError):
    status_code = status.HTTP_409_CONFLICT


class UserTimeSlotConflict(TimeSlotConflict):
    code = "USER_TIME_SLOT_CONFLICT"
    default_message = "You already have a reservation at this time"


class StaffTimeSlotConflict(TimeSlotConflict):
    code = "STAFF_TIME_SLOT_CONFLICT"
    default_message = "The selected staff member is not available at this time"


class PoolTimeSlotConflict(TimeSlotConflict):
    code = "TIME_SLOT_CONFLICT"
    default_message = "Time slot is already reserved"


# ── Storage ──────────────────────────────────────────────────────────────


class TransientStorageError(BookingError):
    code = "TRANSIENT_STORAGE_ERROR"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "Reservation could not be stored, please retry"


# ── Identity ─────────────────────────────────────────────────────────────


class Unauthorized(BookingError):
    code = "UNAUTHORIZED"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"
