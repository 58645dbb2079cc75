"""
Core models for ZhipuAI chat-completion translation requests.

This module provides:
- The explicit per-request configuration structure
- The request payload sent to the chat-completions endpoint
- Wire models for the non-streaming response document
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_MAX_TOKENS = 4000
PROVIDER_NAME = "zhipuai"


class TranslationConfig(BaseModel):
    """Explicit configuration passed to a translation task at construction."""
    model_config = ConfigDict(frozen=True)

    endpoint: str = Field(min_length=1)
    model: str = Field(min_length=1)
    temperature: float = Field(default=1.0, ge=0.0, le=1.0)
    stream: bool = True
    max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, gt=0)
    timeout: float = Field(default=60.0, gt=0)


@dataclass
class ChatRequest:
    """OpenAI-compatible chat-completions request body."""
    model: str
    messages: list[dict[str, str]] = field(default_factory=list)
    temperature: float = 1.0
    stream: bool = True
    max_tokens: int = DEFAULT_MAX_TOKENS

    @classmethod
    def from_config(cls, config: TranslationConfig, prompt: str) -> ChatRequest:
        """Build a single-turn request carrying an already rendered prompt."""
        return cls(
            model=config.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=config.temperature,
            stream=config.stream,
            max_tokens=config.max_tokens,
        )

    def to_payload(self) -> dict[str, Any]:
        return asdict(self)


class ResponseMessage(BaseModel):
    """Assistant message of a non-streaming choice."""
    content: str | None = None


class CompletionChoice(BaseModel):
    message: ResponseMessage | None = None


class ChatCompletion(BaseModel):
    """Non-streaming response document, reduced to the fields we read."""
    choices: list[CompletionChoice | None]

    @property
    def content(self) -> str:
        """First choice's message content, empty when the model sent none."""
        if not self.choices or self.choices[0] is None:
            return ""
        message = self.choices[0].message
        if message is None or message.content is None:
            return ""
        return message.content
