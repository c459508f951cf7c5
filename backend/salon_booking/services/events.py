"""
backend/salon_booking/services/events.py

Event emitter: pushes reservation events to a Redis list consumed by the
notification worker (emails etc.).

Delivery is fire-and-forget. Events are emitted after the reservation
transaction has committed and a failed push is only logged, so a broken
queue never undoes a booking.
"""

import json
import time
import logging
from typing import Optional

from redis import Redis

logger = logging.getLogger(__name__)


class EventEmitter:
    def __init__(self, redis: Optional[Redis], queue: str = "events:p2p"):
        self.redis = redis
        self.queue = queue

    def emit(self, event_type: str, payload: dict) -> bool:
        """
        Emit an event for instant delivery.

        Returns True when the event was queued.
        """
        if self.redis is None:
            logger.debug(f"Event dropped (no Redis): {event_type}")
            return False

        event = {
            "type": event_type,
            **payload,
            "ts": int(time.time()),
        }
        try:
            self.redis.rpush(self.queue, json.dumps(event, default=str))
            logger.info(f"Event emitted: {event_type} → {self.queue}")
            return True
        except Exception as e:
            logger.error(f"Failed to emit event {event_type}: {e}")
            return False


def reservation_payload(reservation) -> dict:
    return {
        "reservation_id": reservation.id,
        "user_id": reservation.user_id,
        "staff_id": reservation.staff_id,
        "menu_id": reservation.menu_id,
        "reserved_date": reservation.reserved_date.isoformat(),
        "reserved_time": reservation.reserved_time,
        "status": reservation.status,
    }
