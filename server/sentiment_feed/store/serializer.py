"""
Store Document Serializer

Converts between AnalyzedNewsRecord and the JSON documents held in Redis.

Document format:
  {
    "id": "<uuid4 hex>",
    "title": "...",
    "url": "...",
    "analysis": {"score": 0.8, "label": "BULLISH", "summary": "..."},
    "createdAt": "2026-01-01T12:00:00.000Z"
  }
"""
from __future__ import annotations

import json
from typing import Any

from sentiment_feed.core.types import MalformedTimestamp
from sentiment_feed.models.news import AnalyzedNewsRecord


class DocumentError(Exception):
    """Raised when a stored document cannot be encoded or decoded."""


def encode_document(doc_id: str, record: AnalyzedNewsRecord) -> str:
    """Encode a record plus its store id as a JSON string."""
    doc: dict[str, Any] = {"id": doc_id, **record.to_dict()}
    try:
        return json.dumps(doc, default=str)
    except (TypeError, ValueError) as exc:
        raise DocumentError(f"Failed to encode document: {exc}") from exc


def decode_document(raw: str | bytes) -> AnalyzedNewsRecord:
    """
    Decode a stored JSON document back into a record.

    The store id is dropped; it is metadata, not part of the record.
    """
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8")
    try:
        doc = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise DocumentError(f"Failed to decode document: {exc}") from exc

    if not isinstance(doc, dict) or "createdAt" not in doc:
        raise DocumentError("Malformed document: expected an object with createdAt")

    try:
        return AnalyzedNewsRecord.from_dict(doc)
    except MalformedTimestamp as exc:
        raise DocumentError(f"Malformed document createdAt: {exc}") from exc
