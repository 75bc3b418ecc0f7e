"""Messages exchanged when a connection to the control server is set up."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from dsfapi.types import CodeChannel

PROTOCOL_VERSION = 10


class ConnectionMode(str, Enum):
    """Connection types a client may request."""

    UNKNOWN = "Unknown"
    COMMAND = "Command"
    INTERCEPT = "Intercept"
    SUBSCRIBE = "Subscribe"


class InterceptionMode(str, Enum):
    """When codes are intercepted."""

    PRE = "Pre"
    POST = "Post"
    EXECUTED = "Executed"


class SubscriptionMode(str, Enum):
    """How object model updates are delivered."""

    FULL = "Full"
    PATCH = "Patch"


@dataclass
class ClientInitMessage:
    """Sent by the client in answer to the server's greeting to pick a connection mode."""

    mode: ConnectionMode
    version: int = PROTOCOL_VERSION

    def to_dict(self) -> dict[str, Any]:
        return {"Mode": self.mode.value, "Version": self.version}


def command_init_message() -> ClientInitMessage:
    """Return an init message that enters command mode."""
    return ClientInitMessage(ConnectionMode.COMMAND)


@dataclass(kw_only=True)
class InterceptInitMessage(ClientInitMessage):
    """Enters interception mode for the given channels and code filters."""

    mode: ConnectionMode = field(default=ConnectionMode.INTERCEPT, init=False)
    interception_mode: InterceptionMode = InterceptionMode.PRE
    channels: list[CodeChannel] | None = None
    filters: list[str] | None = None
    priority_codes: bool = False

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["InterceptionMode"] = self.interception_mode.value
        data["Channels"] = (
            None if self.channels is None else [CodeChannel(c).value for c in self.channels]
        )
        data["Filters"] = None if self.filters is None else list(self.filters)
        data["PriorityCodes"] = self.priority_codes
        return data


@dataclass(kw_only=True)
class SubscribeInitMessage(ClientInitMessage):
    """Enters subscription mode to receive the full model or patches after each update."""

    mode: ConnectionMode = field(default=ConnectionMode.SUBSCRIBE, init=False)
    subscription_mode: SubscriptionMode
    filter: str = ""
    filters: list[str] | None = None

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["SubscriptionMode"] = self.subscription_mode.value
        data["Filter"] = self.filter
        data["Filters"] = None if self.filters is None else list(self.filters)
        return data


@dataclass
class ServerInitMessage:
    """Greeting the server sends once a connection is established."""

    version: int = 0
    id: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ServerInitMessage:
        lowered = {key.lower(): value for key, value in data.items()}
        return cls(
            version=int(lowered.get("version") or 0),
            id=int(lowered.get("id") or 0),
        )

    def is_compatible(self) -> bool:
        """Whether the server speaks at least this client's protocol version."""
        return self.version >= PROTOCOL_VERSION