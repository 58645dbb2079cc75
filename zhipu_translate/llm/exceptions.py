"""
Error handling for translation requests.

This module provides the error types raised to callers with rich context:
- Provider and model information
- HTTP status codes for transport failures
- Parse details for malformed response documents
"""

from __future__ import annotations


class LLMError(Exception):
    """Base LLM error with rich context."""

    def __init__(
        self,
        message: str,
        provider: str,
        model: str,
        status_code: int | None = None,
        response_data: dict | None = None,
    ):
        super().__init__(message)
        self.provider = provider
        self.model = model
        self.status_code = status_code
        self.response_data = response_data or {}


class StreamingError(LLMError):
    """Streaming-specific errors."""

    def __init__(
        self,
        message: str,
        provider: str = "unknown",
        model: str = "unknown",
        **kwargs,
    ):
        super().__init__(message, provider, model, **kwargs)


class DocumentParseError(StreamingError):
    """A complete response document could not be reduced to its content."""

    def __init__(self, message: str, detail: str = "", **kwargs):
        super().__init__(message, **kwargs)
        self.detail = detail


class TransportError(LLMError):
    """The transport reported a non-success HTTP status."""

    def __init__(
        self,
        message: str,
        status_code: int,
        provider: str = "unknown",
        model: str = "unknown",
        **kwargs,
    ):
        super().__init__(message, provider, model, status_code=status_code, **kwargs)
