from .tables import (
    Base,
    BlockedTimeSlots,
    FeatureFlags,
    Menus,
    Reservations,
    SchedulingLocks,
    Staff,
    StaffShifts,
    StaffVacations,
    StoreSettings,
    Users,
    metadata,
)

__all__ = [
    "Base",
    "metadata",
    "StoreSettings",
    "FeatureFlags",
    "Users",
    "Menus",
    "Staff",
    "StaffShifts",
    "StaffVacations",
    "BlockedTimeSlots",
    "Reservations",
    "SchedulingLocks",
]
