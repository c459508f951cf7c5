# backend/salon_booking/redis_client.py

import logging
from typing import Optional

from fastapi import Request
from redis import Redis

from .config import Settings

logger = logging.getLogger(__name__)


def build_redis(settings: Settings) -> Optional[Redis]:
    """Redis handle for event queues. None when REDIS_URL is not configured."""
    if not settings.redis_url:
        logger.info("REDIS_URL not set, notification events disabled")
        return None
    return Redis.from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
    )


def get_redis(request: Request) -> Optional[Redis]:
    return request.app.state.redis
