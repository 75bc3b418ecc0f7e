"""Object model records used by commands: messages, endpoints, sessions and file info."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum, IntEnum
from typing import Any

REPRAP_FIRMWARE_NAMESPACE = "rr_"

_FRACTION = re.compile(r"\.(\d+)")


def _parse_timestamp(text: str) -> datetime:
    """Parse an RFC 3339 timestamp, tolerating 'Z' and nanosecond fractions."""
    text = text.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = _FRACTION.sub(lambda m: "." + (m.group(1) + "000000")[:6], text, count=1)
    return datetime.fromisoformat(text)


def _optional_timestamp(value: Any) -> datetime | None:
    if value is None:
        return None
    return _parse_timestamp(value)


class MessageType(IntEnum):
    """Severity of a generic message."""

    SUCCESS = 0
    WARNING = 1
    ERROR = 2


@dataclass
class Message:
    """A generic message with a time, a type and content."""

    type: MessageType = MessageType.SUCCESS
    content: str = ""
    time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __str__(self) -> str:
        if self.type is MessageType.ERROR:
            return f"Error: {self.content}"
        if self.type is MessageType.WARNING:
            return f"Warning: {self.content}"
        return self.content

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Message:
        time = data.get("time")
        message = cls(
            type=MessageType(data.get("type", 0)),
            content=data.get("content") or "",
        )
        if time is not None:
            message.time = _parse_timestamp(time)
        return message

    def to_dict(self) -> dict[str, Any]:
        return {
            "time": self.time.isoformat(),
            "type": int(self.type),
            "content": self.content,
        }


class HttpEndpointType(str, Enum):
    """HTTP request types a third-party endpoint can serve."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    TRACE = "TRACE"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"
    WEBSOCKET = "WebSocket"


class AccessLevel(str, Enum):
    """What a user session is allowed to do."""

    READ_ONLY = "readOnly"
    READ_WRITE = "readWrite"


class SessionType(str, Enum):
    """Kind of user session."""

    LOCAL = "local"
    HTTP = "http"
    TELNET = "telnet"


@dataclass
class Thumbnail:
    """A thumbnail image embedded in a G-code file."""

    encoded_image: str = ""
    height: int = 0
    width: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Thumbnail:
        return cls(
            encoded_image=data.get("encodedImage") or "",
            height=int(data.get("height") or 0),
            width=int(data.get("width") or 0),
        )


@dataclass
class ParsedFileInfo:
    """Information gathered by analysing a G-code file."""

    filament: list[float] = field(default_factory=list)
    file_name: str = ""
    first_layer_height: float = 0.0
    generated_by: str = ""
    height: float = 0.0
    last_modified: datetime | None = None
    layer_height: float = 0.0
    num_layers: int = 0
    print_time: int | None = None
    simulated_time: int | None = None
    size: int = 0
    thumbnails: list[Thumbnail] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ParsedFileInfo:
        return cls(
            filament=[float(f) for f in data.get("filament") or []],
            file_name=data.get("fileName") or "",
            first_layer_height=float(data.get("firstLayerHeight") or 0.0),
            generated_by=data.get("generatedBy") or "",
            height=float(data.get("height") or 0.0),
            last_modified=_optional_timestamp(data.get("lastModified")),
            layer_height=float(data.get("layerHeight") or 0.0),
            num_layers=int(data.get("numLayers") or 0),
            print_time=data.get("printTime"),
            simulated_time=data.get("simulatedTime"),
            size=int(data.get("size") or 0),
            thumbnails=[Thumbnail.from_dict(t) for t in data.get("thumbnails") or []],
        )