"""
News Store

Persistence for analyzed news records.
"""
from sentiment_feed.store.memory import InMemoryNewsStore
from sentiment_feed.store.redis_store import RedisNewsStore
from sentiment_feed.store.serializer import DocumentError, decode_document, encode_document

__all__ = [
    "DocumentError",
    "InMemoryNewsStore",
    "RedisNewsStore",
    "decode_document",
    "encode_document",
]
