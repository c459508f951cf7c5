# backend/salon_booking/services/scheduling/resources.py
"""
Scheduling resources.

A reservation occupies either one staff member or the unassigned pool.
The pool is a resource of its own: pool bookings only conflict with each
other, never with staff bookings.
"""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class Assigned:
    staff_id: int

    @property
    def scope_key(self) -> str:
        return f"staff:{self.staff_id}"

    @property
    def column_value(self) -> Optional[int]:
        return self.staff_id


@dataclass(frozen=True)
class Pool:
    @property
    def scope_key(self) -> str:
        return "pool"

    @property
    def column_value(self) -> Optional[int]:
        return None


Resource = Union[Assigned, Pool]

POOL = Pool()


def resource_for(staff_id: Optional[int]) -> Resource:
    """Map the nullable staff_id column to a resource."""
    return POOL if staff_id is None else Assigned(staff_id)


def user_scope_key(user_id: int) -> str:
    return f"user:{user_id}"
