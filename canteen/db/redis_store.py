"""
Canteen Console — Redis-backed document repository

Layout: one hash per collection, key = <REDIS_KEY_PREFIX><collection>,
field = document id, value = JSON body.
HSET replaces the whole field, which gives `set` its full-upsert semantics.
"""
import json
import logging

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from canteen.core.exceptions import PersistenceError
from canteen.db.repository import DocumentRepository, with_id

logger = logging.getLogger(__name__)


class RedisDocumentRepository(DocumentRepository):
    name = "redis"

    def __init__(self, redis: aioredis.Redis, key_prefix: str = "docs:"):
        self._redis = redis
        self._prefix = key_prefix

    def _key(self, collection: str) -> str:
        return f"{self._prefix}{collection}"

    async def get_all(self, collection: str) -> list[dict]:
        try:
            raw = await self._redis.hgetall(self._key(collection))
        except RedisError as exc:
            raise PersistenceError(f"Could not read '{collection}': {exc}") from exc

        records = []
        for doc_id, body in raw.items():
            try:
                doc = json.loads(body)
            except json.JSONDecodeError:
                doc = None
            if not isinstance(doc, dict):
                logger.warning("Skipping unreadable document %s/%s", collection, doc_id)
                continue
            records.append(with_id(doc_id, doc))
        return records

    async def set(self, collection: str, doc_id: str, record: dict) -> None:
        try:
            await self._redis.hset(self._key(collection), doc_id, json.dumps(record))
        except RedisError as exc:
            raise PersistenceError(f"Could not write '{collection}/{doc_id}': {exc}") from exc

    async def delete(self, collection: str, doc_id: str) -> None:
        try:
            await self._redis.hdel(self._key(collection), doc_id)
        except RedisError as exc:
            raise PersistenceError(f"Could not delete '{collection}/{doc_id}': {exc}") from exc

    async def ping(self) -> None:
        try:
            await self._redis.ping()
        except RedisError as exc:
            raise PersistenceError(f"Redis unreachable: {exc}") from exc
