"""
Redis News Store

Append-only collection of analyzed news backed by Redis. Each record is a
JSON document in a hash, indexed by creation time in a sorted set so the
newest records can be read back with a single range query.

Keys (collection "news"):
    news:docs        hash   id -> JSON document
    news:by_created  zset   id scored by createdAt epoch seconds

Usage:
    async with RedisNewsStore(redis_url="redis://localhost:6379/0") as store:
        records = await store.fetch_recent(10)
        await store.append(record)
"""
from __future__ import annotations

import logging
import uuid

from redis.asyncio import Redis
from redis.exceptions import RedisError

from sentiment_feed.core.types import StoreUnavailable, StoreWriteError
from sentiment_feed.models.news import AnalyzedNewsRecord

from .serializer import DocumentError, decode_document, encode_document

logger = logging.getLogger(__name__)


class RedisNewsStore:
    """
    News store over a single Redis connection.

    Writes are a MULTI/EXEC pipeline so a document never exists without its
    index entry. There is no deduplication: appending the same headline
    twice yields two documents.
    """

    def __init__(self, redis_url: str, collection: str = "news") -> None:
        if not collection:
            raise ValueError("collection must be non-empty")
        self._redis_url = redis_url
        self._collection = collection
        self._redis: Redis | None = None

    @property
    def collection(self) -> str:
        return self._collection

    @property
    def docs_key(self) -> str:
        return f"{self._collection}:docs"

    @property
    def index_key(self) -> str:
        return f"{self._collection}:by_created"

    # ── Lifecycle ─────────────────────────────────────────────────────────────

    async def connect(self) -> None:
        """Open the Redis connection."""
        self._redis = Redis.from_url(self._redis_url, decode_responses=False)
        try:
            await self._redis.ping()
            logger.info("RedisNewsStore connected to Redis at %s", self._redis_url)
        except RedisError as exc:
            await self._redis.aclose()
            self._redis = None
            raise StoreUnavailable(
                f"Cannot connect to Redis: {exc}", collection=self._collection
            ) from exc

    async def close(self) -> None:
        """Close the Redis connection."""
        if self._redis is not None:
            await self._redis.aclose()
            self._redis = None
            logger.info("RedisNewsStore disconnected from Redis")

    async def __aenter__(self) -> RedisNewsStore:
        await self.connect()
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.close()

    # ── Read ──────────────────────────────────────────────────────────────────

    async def fetch_recent(self, limit: int) -> list[AnalyzedNewsRecord]:
        """
        Return up to *limit* records, newest first.

        Documents that are missing or fail to decode are logged and skipped
        and do not count toward *limit*. When every one of the newest
        *limit* documents is unusable the result is empty, so a cache fill
        treats the collection as empty and refills it.

        Raises:
            StoreUnavailable: If not connected or Redis returns an error.
        """
        if self._redis is None:
            raise StoreUnavailable(
                "RedisNewsStore is not connected — call connect() first",
                collection=self._collection,
            )
        if limit <= 0:
            return []

        try:
            ids = await self._redis.zrevrange(self.index_key, 0, limit - 1)
            if not ids:
                return []
            raw_docs = await self._redis.hmget(self.docs_key, ids)
        except RedisError as exc:
            raise StoreUnavailable(
                f"Redis read failed: {exc}", collection=self._collection
            ) from exc

        records: list[AnalyzedNewsRecord] = []
        for doc_id, raw in zip(ids, raw_docs):
            if raw is None:
                logger.warning(
                    "Indexed document missing from hash",
                    extra={"doc_id": doc_id, "collection": self._collection},
                )
                continue
            try:
                records.append(decode_document(raw))
            except DocumentError as exc:
                logger.warning(
                    "Skipping undecodable document",
                    extra={"doc_id": doc_id, "error": str(exc)},
                )

        logger.debug("Fetched %d record(s) from '%s'", len(records), self._collection)
        return records

    # ── Write ─────────────────────────────────────────────────────────────────

    async def append(self, record: AnalyzedNewsRecord) -> str:
        """
        Persist one record.

        Returns:
            The generated document id.

        Raises:
            StoreWriteError: If not connected, encoding fails, or Redis errors.
        """
        if self._redis is None:
            raise StoreWriteError(
                "RedisNewsStore is not connected — call connect() first",
                title=record.title,
            )

        doc_id = uuid.uuid4().hex
        try:
            payload = encode_document(doc_id, record)
        except DocumentError as exc:
            raise StoreWriteError(str(exc), title=record.title) from exc

        score = record.created_at.timestamp()
        try:
            async with self._redis.pipeline(transaction=True) as pipe:
                pipe.hset(self.docs_key, doc_id, payload)
                pipe.zadd(self.index_key, {doc_id: score})
                await pipe.execute()
        except RedisError as exc:
            raise StoreWriteError(
                f"Redis write failed: {exc}", title=record.title
            ) from exc

        logger.debug("Appended document %s to '%s'", doc_id, self._collection)
        return doc_id
