"""
Streaming-specific dataclasses for frame decoding and result accumulation.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class TaskStatus(Enum):
    """Lifecycle of a single translation task."""
    PENDING = "pending"
    SUCCESS = "success"
    FAIL = "fail"

    @property
    def is_terminal(self) -> bool:
        return self is not TaskStatus.PENDING


@dataclass(frozen=True)
class Frame:
    """One decoded streaming record carrying a parsed JSON object."""
    data: dict[str, Any]
    raw_data: str


@dataclass(frozen=True)
class DeltaEvent:
    """Text contributed by a single frame (possibly empty)."""
    content: str


@dataclass(frozen=True)
class TranslationSnapshot:
    """Display value pushed to the refresh callback after each state change."""
    result: str
    status: TaskStatus


@dataclass
class DecoderState:
    """Mutable state owned by one FrameDecoder for one HTTP exchange."""
    buffer: str = ""
    consumed_length: int = 0


@dataclass
class AccumulatorState:
    """Mutable state owned by one DeltaAccumulator for one translation task."""
    result_text: str = ""
    status: TaskStatus = TaskStatus.PENDING
    frame_count: int = 0


@dataclass
class DecoderStats:
    """Record counters for one FrameDecoder, for monitoring."""
    total_records: int = 0
    emitted_frames: int = 0
    skipped_records: int = 0
    discarded_records: int = 0
    terminators: int = 0
