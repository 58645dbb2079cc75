"""
Streaming translation results from ZhipuAI chat-completion responses.
"""

from __future__ import annotations

from .config import Configuration
from .llm.client import ZhipuAIClient
from .llm.exceptions import DocumentParseError, LLMError, StreamingError, TransportError
from .llm.models import TranslationConfig
from .llm.streaming.models import Frame, TaskStatus, TranslationSnapshot
from .llm.streaming.parser import DeltaAccumulator, FrameDecoder, parse_document

__all__ = [
    "Configuration",
    "DeltaAccumulator",
    "DocumentParseError",
    "Frame",
    "FrameDecoder",
    "LLMError",
    "StreamingError",
    "TaskStatus",
    "TransportError",
    "TranslationConfig",
    "TranslationSnapshot",
    "ZhipuAIClient",
    "parse_document",
]
