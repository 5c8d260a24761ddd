"""
Log Entry Module - Wire model for streamed log records

Handles:
- LogEntry schema (immutable once received)
- Envelope decoding for inbound stream messages
- Log level identification and display colors
"""
import json
from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class DecodeError(ValueError):
    """Raised when an inbound payload is not a usable stream envelope"""


class LogLevel(str, Enum):
    """Known log severity levels"""
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    FATAL = "fatal"

    @property
    def color(self) -> str:
        """Get rich style for this log level"""
        colors = {
            LogLevel.DEBUG: "grey50",
            LogLevel.INFO: "dodger_blue1",
            LogLevel.WARN: "yellow",
            LogLevel.ERROR: "red",
            LogLevel.FATAL: "bold white on red",
        }
        return colors[self]


# Levels that count towards the error tally
ERROR_LEVELS = frozenset({LogLevel.ERROR.value, LogLevel.FATAL.value})


def level_style(level: str) -> str:
    """Rich style for a level string, empty for levels we don't know"""
    try:
        return LogLevel(level).color
    except ValueError:
        return ""


class LogEntry(BaseModel):
    """A single log record as received from the stream"""
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )

    id: str
    timestamp: str
    project: str
    level: str
    message: str
    trace_id: Optional[str] = Field(default=None, alias="traceId")
    # Opaque passthrough, stored as received
    source: Any = None
    meta: Any = None

    @property
    def is_error(self) -> bool:
        return self.level in ERROR_LEVELS

    @property
    def time_of_day(self) -> str:
        """Time portion of the ISO timestamp, e.g. '12:30:01.123'"""
        _, sep, clock = self.timestamp.partition("T")
        return clock[:12] if sep else ""

    @property
    def short_trace(self) -> str:
        return f"[{self.trace_id[:8]}]" if self.trace_id else ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the wire shape for export"""
        return self.model_dump(by_alias=True, exclude_none=True)


class Envelope(BaseModel):
    """Outer stream wrapper: {"type": ..., "data": ...}"""
    model_config = ConfigDict(frozen=True, extra="ignore")

    type: str
    data: Any = None


def decode_envelope(raw: Union[str, bytes]) -> Envelope:
    """
    Decode a raw stream message into an Envelope

    Envelopes of type "log" carry a validated LogEntry as their data;
    every other type is passed through untouched.

    Args:
        raw: Text or binary frame received from the stream

    Returns:
        Decoded Envelope

    Raises:
        DecodeError: If the payload is not JSON, not an object, or a log
            envelope whose data is not a valid LogEntry
    """
    try:
        payload = json.loads(raw)
    except (TypeError, ValueError, RecursionError) as e:
        raise DecodeError(f"payload is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise DecodeError(f"expected an object envelope, got {type(payload).__name__}")

    try:
        envelope = Envelope.model_validate(payload)
        if envelope.type == "log":
            entry = LogEntry.model_validate(envelope.data)
            envelope = Envelope(type=envelope.type, data=entry)
    except ValidationError as e:
        raise DecodeError(f"invalid envelope: {e.error_count()} validation error(s)") from e

    return envelope
