"""
Core Type Definitions and Exceptions

Error taxonomy for the sentiment feed pipeline. Gateways wrap library
exceptions in these so the orchestrator can contain them by type.
"""
from __future__ import annotations

from typing import Any, Optional


class SentimentFeedError(Exception):
    """Base exception for all sentiment feed errors."""

    def __init__(
        self,
        message: str,
        context: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} [{ctx_str}]"
        return self.message


class StoreUnavailable(SentimentFeedError):
    """Raised when the news store cannot be reached for reading."""

    def __init__(
        self,
        message: str,
        collection: str = "",
        context: Optional[dict[str, Any]] = None,
    ) -> None:
        ctx = context or {}
        if collection:
            ctx["collection"] = collection
        super().__init__(message, ctx)
        self.collection = collection


class StoreWriteError(SentimentFeedError):
    """Raised when a record cannot be persisted."""

    def __init__(
        self,
        message: str,
        title: str = "",
        context: Optional[dict[str, Any]] = None,
    ) -> None:
        ctx = context or {}
        if title:
            ctx["title"] = title[:60]
        super().__init__(message, ctx)
        self.title = title


class SourceUnavailable(SentimentFeedError):
    """Raised when the external news feed fails or returns no item list."""

    def __init__(
        self,
        message: str,
        url: str = "",
        context: Optional[dict[str, Any]] = None,
    ) -> None:
        ctx = context or {}
        if url:
            ctx["url"] = url
        super().__init__(message, ctx)
        self.url = url


class AnalysisError(SentimentFeedError):
    """Raised when the sentiment service request fails."""

    def __init__(
        self,
        message: str,
        model: str = "",
        status_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None,
    ) -> None:
        ctx = context or {}
        if model:
            ctx["model"] = model
        if status_code is not None:
            ctx["status_code"] = status_code
        super().__init__(message, ctx)
        self.model = model
        self.status_code = status_code


class MalformedTimestamp(SentimentFeedError):
    """Raised when a timestamp cannot be parsed."""

    def __init__(
        self,
        message: str,
        value: Any = None,
        context: Optional[dict[str, Any]] = None,
    ) -> None:
        ctx = context or {}
        if value is not None:
            ctx["value"] = repr(value)[:100]  # Truncate long values
        super().__init__(message, ctx)
        self.value = value
