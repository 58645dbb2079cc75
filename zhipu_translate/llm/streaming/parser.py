"""
Streaming response decoder and result accumulator.

The decoder turns raw text fragments of a chat-completions response into
parsed frames; the accumulator folds those frames (or one complete response
document) into the running translation result and its terminal status.
Both are synchronous and owned by exactly one translation task.
"""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Callable, Iterable
from typing import Any

from pydantic import ValidationError

from ...logging_utils import ContextualLogger
from ..exceptions import DocumentParseError, TransportError
from ..models import ChatCompletion
from .models import (
    AccumulatorState,
    DecoderState,
    DecoderStats,
    DeltaEvent,
    Frame,
    TaskStatus,
    TranslationSnapshot,
)

# Constants
RECORD_SEPARATOR = "\n"
DATA_PREFIX = "data:"
DONE_SENTINEL = "[DONE]"
LEADING_NEWLINES = "\n\n"
DEFAULT_PLACEHOLDER = "Translating..."

RefreshCallback = Callable[[TranslationSnapshot], None]


def trim_leading_newlines(text: str) -> str:
    """Drop one leading pair of newlines, the way results are displayed."""
    if text.startswith(LEADING_NEWLINES):
        return text[len(LEADING_NEWLINES):]
    return text


def extract_delta(frame: Frame) -> DeltaEvent:
    """Reduce a frame to the text it contributes; missing fields contribute ''."""
    choices = frame.data.get("choices")
    if not isinstance(choices, list) or not choices:
        return DeltaEvent(content="")

    choice = choices[0]
    if not isinstance(choice, dict):
        return DeltaEvent(content="")

    delta = choice.get("delta")
    if not isinstance(delta, dict):
        return DeltaEvent(content="")

    content = delta.get("content")
    return DeltaEvent(content=content if isinstance(content, str) else "")


def parse_document(
    document: str | bytes,
    *,
    provider: str = "unknown",
    model: str = "unknown",
) -> str:
    """
    Parse a complete non-streaming response and return its content.

    Raises:
        DocumentParseError: If the document is not JSON or has no usable
            ``choices`` list.
    """
    try:
        completion = ChatCompletion.model_validate_json(document)
    except ValidationError as e:
        raise DocumentParseError(
            f"Failed to parse response: {e}",
            detail=str(e),
            provider=provider,
            model=model,
        ) from e
    return completion.content


class FrameDecoder:
    """
    Line-oriented decoder for server-sent-event style chat-completion streams.

    Fragments may end anywhere, including mid-record; the text after the
    last newline is buffered until a later fragment completes it. Records
    that do not parse as a JSON object are discarded without raising.
    """

    def __init__(self, context: dict[str, Any] | None = None):
        self.state = DecoderState()
        self.seen_terminator = False
        self._logger = ContextualLogger({"component": "frame_decoder", **(context or {})})
        self.stats = DecoderStats()

    def feed(self, fragment: str) -> list[Frame]:
        """Decode the text that arrived since the previous call."""
        self.state.buffer += fragment
        self.state.consumed_length += len(fragment)

        *records, self.state.buffer = self.state.buffer.split(RECORD_SEPARATOR)

        frames = []
        for record in records:
            frame = self._decode_record(record)
            if frame is not None:
                frames.append(frame)
        return frames

    def feed_cumulative(self, response_text: str) -> list[Frame]:
        """Decode a transport's whole response-so-far, skipping what was consumed."""
        return self.feed(response_text[self.state.consumed_length:])

    def finalize(self) -> list[Frame]:
        """Flush the buffered tail as a last record once the stream has ended."""
        tail, self.state.buffer = self.state.buffer, ""
        if not tail:
            return []

        frame = self._decode_record(tail)
        return [frame] if frame is not None else []

    def _decode_record(self, raw_record: str) -> Frame | None:
        self.stats.total_records += 1

        record = raw_record.strip()
        if record.startswith(DATA_PREFIX):
            record = record[len(DATA_PREFIX):].strip()

        if not record:
            self.stats.skipped_records += 1
            return None

        if record == DONE_SENTINEL:
            self.stats.terminators += 1
            self.seen_terminator = True
            return None

        try:
            data = json.loads(record)
        except json.JSONDecodeError as e:
            self._discard(record, f"JSON decode error: {e}")
            return None

        if not isinstance(data, dict):
            self._discard(record, f"expected JSON object, got {type(data).__name__}")
            return None

        self.stats.emitted_frames += 1
        return Frame(data=data, raw_data=record)

    def _discard(self, record: str, reason: str) -> None:
        self.stats.discarded_records += 1
        self._logger.debug(
            "Discarded undecodable stream record",
            reason=reason,
            record_length=len(record),
        )

    def get_stats(self) -> DecoderStats:
        """Get a copy of the decoding statistics for monitoring."""
        return dataclasses.replace(self.stats)

    def reset_stats(self) -> None:
        """Reset statistics counters."""
        self.stats = DecoderStats()


class DeltaAccumulator:
    """
    Running translation result for one task.

    The stored text only ever grows. What callers see is the stored text with
    one leading blank line removed, recomputed on every exposure. Once the
    status is terminal, later frames and documents are ignored.
    """

    def __init__(
        self,
        on_refresh: RefreshCallback | None = None,
        placeholder: str = DEFAULT_PLACEHOLDER,
        *,
        provider: str = "unknown",
        model: str = "unknown",
        context: dict[str, Any] | None = None,
    ):
        self.state = AccumulatorState()
        self.on_refresh = on_refresh
        self.placeholder = placeholder
        self.provider = provider
        self.model = model
        self._logger = ContextualLogger({
            "component": "delta_accumulator",
            "provider": provider,
            "model": model,
            **(context or {}),
        })

    @property
    def is_terminal(self) -> bool:
        return self.state.status.is_terminal

    @property
    def result(self) -> str:
        return trim_leading_newlines(self.state.result_text)

    def snapshot(self) -> TranslationSnapshot:
        """Current display value; repeated calls without mutation are equal."""
        return TranslationSnapshot(result=self.result, status=self.state.status)

    def apply_frame(self, frame: Frame) -> AccumulatorState:
        """Append the frame's delta text while the task is still pending."""
        if self.is_terminal:
            return self.state

        delta = extract_delta(frame)
        self.state.result_text += delta.content
        self.state.frame_count += 1
        self._notify()
        return self.state

    def apply_frames(self, frames: Iterable[Frame]) -> AccumulatorState:
        for frame in frames:
            self.apply_frame(frame)
        return self.state

    def complete(self) -> AccumulatorState:
        """Record the transport's end-of-stream notification."""
        if self.is_terminal:
            return self.state

        self.state.status = TaskStatus.SUCCESS
        self._logger.info(
            "Translation completed",
            frames=self.state.frame_count,
            result_length=len(self.state.result_text),
        )
        self._notify()
        return self.state

    def apply_document(self, document: str | bytes) -> AccumulatorState:
        """
        Apply a complete non-streaming response document.

        Raises:
            DocumentParseError: After recording the failure and the
                placeholder result.
        """
        if self.is_terminal:
            return self.state

        try:
            content = parse_document(document, provider=self.provider, model=self.model)
        except DocumentParseError as e:
            self._record_failure(self.placeholder)
            self._logger.error("Response document rejected", error_message=e.detail)
            raise

        self.state.result_text += content
        self.state.status = TaskStatus.SUCCESS
        self._logger.info("Translation completed", result_length=len(self.state.result_text))
        self._notify()
        return self.state

    def fail_transport(self, status_code: int) -> None:
        """
        Record a non-success HTTP status and raise it to the caller.

        Raises:
            TransportError: Always, carrying ``status_code``.
        """
        message = f"Request error: {status_code}"
        if not self.is_terminal:
            self._record_failure(message)
            self._logger.error("Translation request failed", status_code=status_code)

        raise TransportError(
            message,
            status_code=status_code,
            provider=self.provider,
            model=self.model,
        )

    def _record_failure(self, message: str) -> None:
        # Accumulated text stays; the message follows it after a blank line.
        if self.state.result_text:
            self.state.result_text += LEADING_NEWLINES + message
        else:
            self.state.result_text = message
        self.state.status = TaskStatus.FAIL
        self._notify()

    def _notify(self) -> None:
        if self.on_refresh is not None:
            self.on_refresh(self.snapshot())
