"""
ZhipuAI chat-completions integration.

This package provides:
- Type-safe request and response models
- Error types with provider context
- The streaming decoder and accumulator (``llm.streaming``)
- A thin httpx client driving them (``llm.client``)
"""

from __future__ import annotations

from .exceptions import DocumentParseError, LLMError, StreamingError, TransportError
from .models import (
    ChatCompletion,
    ChatRequest,
    CompletionChoice,
    ResponseMessage,
    TranslationConfig,
)

__all__ = [
    # Models
    "ChatCompletion",
    "ChatRequest",
    "CompletionChoice",
    # Exceptions
    "DocumentParseError",
    "LLMError",
    "ResponseMessage",
    "StreamingError",
    "TranslationConfig",
    "TransportError",
]
