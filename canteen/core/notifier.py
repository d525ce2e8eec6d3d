"""
Canteen Console — Notification sink

User feedback ("Order priority increased", "Failed to update order", ...) is
fire-and-forget: a notifier never raises, a delivery failure is only logged.
Notification failures MUST NOT affect the action that produced them.
"""
import logging
from abc import ABC, abstractmethod
from typing import Literal

import httpx
import redis.asyncio as aioredis
from pydantic import BaseModel

logger = logging.getLogger(__name__)


class Notification(BaseModel):
    level: Literal["success", "error"]
    message: str


class Notifier(ABC):
    async def success(self, message: str) -> None:
        await self.publish(Notification(level="success", message=message))

    async def error(self, message: str) -> None:
        await self.publish(Notification(level="error", message=message))

    @abstractmethod
    async def publish(self, notification: Notification) -> None:
        ...


class LogNotifier(Notifier):
    async def publish(self, notification: Notification) -> None:
        level = logging.WARNING if notification.level == "error" else logging.INFO
        logger.log(level, "[%s] %s", notification.level, notification.message)


class RedisNotifier(Notifier):
    """Publishes JSON payloads on a Redis pub/sub channel."""

    def __init__(self, redis: aioredis.Redis, channel: str):
        self._redis = redis
        self._channel = channel

    async def publish(self, notification: Notification) -> None:
        try:
            await self._redis.publish(self._channel, notification.model_dump_json())
        except Exception as exc:
            logger.warning("Notification channel %s unreachable: %s", self._channel, exc)


class HttpNotifier(Notifier):
    """Pushes notifications to a notification hub over HTTP."""

    def __init__(self, hub_url: str, timeout: float = 3.0, transport: httpx.AsyncBaseTransport | None = None):
        self._url = f"{hub_url.rstrip('/')}/notifications/publish"
        self._timeout = timeout
        self._transport = transport

    async def publish(self, notification: Notification) -> None:
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                await client.post(self._url, json=notification.model_dump())
        except Exception as exc:
            logger.warning("Notification Hub unreachable: %s", exc)
