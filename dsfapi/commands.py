"""Commands that can be sent to the control server and the responses it returns."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any

from dsfapi.model import AccessLevel, HttpEndpointType, MessageType, SessionType
from dsfapi.types import CodeChannel

_UINT16_MAX = 0xFFFF


def _pascal(name: str) -> str:
    return "".join(part[:1].upper() + part[1:] for part in name.split("_"))


def _encode(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [_encode(v) for v in value]
    if isinstance(value, dict):
        return {k: _encode(v) for k, v in value.items()}
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return value


def _lowered(data: dict[str, Any]) -> dict[str, Any]:
    return {key.lower(): value for key, value in data.items()}


@dataclass
class Command:
    """A command identified by its name; subclasses add their own members."""

    command: str

    def to_dict(self) -> dict[str, Any]:
        """Return the wire representation of this command."""
        data: dict[str, Any] = {"Command": self.command}
        for f in fields(self):
            if f.name == "command":
                continue
            data[_pascal(f.name)] = _encode(getattr(self, f.name))
        return data


@dataclass
class Response:
    """The server's reply to a command."""

    success: bool = False
    result: Any = None
    error_type: str = ""
    error_message: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Response:
        lowered = _lowered(data)
        return cls(
            success=bool(lowered.get("success", False)),
            result=lowered.get("result"),
            error_type=lowered.get("errortype") or "",
            error_message=lowered.get("errormessage") or "",
        )


def cancel() -> Command:
    """Cancel the intercepted code."""
    return Command("Cancel")


def ignore() -> Command:
    """Let the intercepted code pass on unchanged."""
    return Command("Ignore")


def acknowledge() -> Command:
    """Acknowledge a received object model update."""
    return Command("Acknowledge")


def get_object_model() -> Command:
    """Request the full object model."""
    return Command("GetObjectModel")


def sync_object_model() -> Command:
    """Wait for the object model to be updated from the firmware."""
    return Command("SyncObjectModel")


def lock_object_model() -> Command:
    """Lock the object model for read/write access."""
    return Command("LockObjectModel")


def unlock_object_model() -> Command:
    """Release the object model lock."""
    return Command("UnlockObjectModel")


@dataclass
class Resolve(Command):
    """Resolve the intercepted code with the given message."""

    command: str = field(default="Resolve", init=False)
    type: MessageType = MessageType.SUCCESS
    content: str = ""


@dataclass
class GetFileInfo(Command):
    """Analyse a G-code file and return its parsed information."""

    command: str = field(default="GetFileInfo", init=False)
    file_name: str = ""


@dataclass
class ResolvePath(Command):
    """Resolve a firmware-style path to a file system path."""

    command: str = field(default="ResolvePath", init=False)
    path: str = ""


@dataclass
class EvaluateExpression(Command):
    """Evaluate an expression on the given channel in the firmware."""

    command: str = field(default="EvaluateExpression", init=False)
    channel: CodeChannel = CodeChannel.SBC
    expression: str = ""


@dataclass
class Flush(Command):
    """Wait for all pending codes on a channel to finish."""

    command: str = field(default="Flush", init=False)
    channel: CodeChannel = CodeChannel.SBC


@dataclass
class SetUpdateStatus(Command):
    """Override the reported status while a software update runs."""

    command: str = field(default="SetUpdateStatus", init=False)
    updating: bool = False


@dataclass
class SimpleCode(Command):
    """Execute a G/M/T-code given as text and return its result as text."""

    command: str = field(default="SimpleCode", init=False)
    code: str = ""
    channel: CodeChannel = CodeChannel.SBC


@dataclass
class WriteMessage(Command):
    """Write a generic message to the console, the object model or the log."""

    command: str = field(default="WriteMessage", init=False)
    type: MessageType = MessageType.SUCCESS
    content: str = ""
    output_message: bool = False
    log_message: bool = False


@dataclass
class HttpEndpointCommand(Command):
    """Create or remove a third-party HTTP endpoint."""

    endpoint_type: HttpEndpointType = HttpEndpointType.GET
    namespace: str = ""
    path: str = ""
    is_upload_request: bool = False


def add_http_endpoint(
    endpoint_type: HttpEndpointType, namespace: str, path: str, is_upload_request: bool
) -> HttpEndpointCommand:
    """Register an endpoint under /machine/{namespace}/{path}."""
    return HttpEndpointCommand(
        "AddHttpEndpoint", endpoint_type, namespace, path, is_upload_request
    )


def remove_http_endpoint(
    endpoint_type: HttpEndpointType, namespace: str, path: str
) -> HttpEndpointCommand:
    """Remove an existing endpoint."""
    return HttpEndpointCommand("RemoveHttpEndpoint", endpoint_type, namespace, path)


@dataclass
class ReceivedHttpRequest:
    """An HTTP request forwarded by the web server to an endpoint."""

    session_id: int = 0
    queries: dict[str, str] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    content_type: str = ""
    body: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ReceivedHttpRequest:
        lowered = _lowered(data)
        return cls(
            session_id=int(lowered.get("sessionid") or 0),
            queries=dict(lowered.get("queries") or {}),
            headers=dict(lowered.get("headers") or {}),
            content_type=lowered.get("contenttype") or "",
            body=lowered.get("body") or "",
        )


class HttpResponseType(str, Enum):
    """Kinds of HTTP response an endpoint may send."""

    STATUS_CODE = "statuscode"
    PLAIN_TEXT = "plaintext"
    JSON = "json"
    FILE = "file"


@dataclass
class SendHttpResponse:
    """A response to a received HTTP request."""

    status_code: int
    response: str
    response_type: HttpResponseType

    def __post_init__(self) -> None:
        if not 0 <= self.status_code <= _UINT16_MAX:
            raise ValueError(f"status code out of range: {self.status_code}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "StatusCode": self.status_code,
            "Response": self.response,
            "ResponseType": _encode(self.response_type),
        }


@dataclass
class SetObjectModel(Command):
    """Set an atomic property in the object model."""

    command: str = field(default="SetObjectModel", init=False)
    property_path: str = ""
    value: str = ""


@dataclass
class PatchObjectModel(Command):
    """Apply a JSON patch to the object model."""

    command: str = field(default="PatchObjectModel", init=False)
    key: str = ""
    patch: str = ""


@dataclass
class InstallPlugin(Command):
    """Install or upgrade a plugin from a ZIP bundle."""

    command: str = field(default="InstallPlugin", init=False)
    plugin_file: str = ""


@dataclass
class PluginControl(Command):
    """Start, stop or uninstall a plugin."""

    plugin: str = ""


def start_plugin(plugin: str) -> PluginControl:
    """Start the named plugin."""
    return PluginControl("StartPlugin", plugin)


def stop_plugin(plugin: str) -> PluginControl:
    """Stop the named plugin."""
    return PluginControl("StopPlugin", plugin)


def uninstall_plugin(plugin: str) -> PluginControl:
    """Uninstall the named plugin."""
    return PluginControl("UninstallPlugin", plugin)


@dataclass
class SetPluginData(Command):
    """Set custom plugin data in the object model."""

    command: str = field(default="SetPluginData", init=False)
    plugin: str = ""
    key: str = ""
    value: str = ""


@dataclass
class AddUserSession(Command):
    """Register a new user session."""

    command: str = field(default="AddUserSession", init=False)
    access_level: AccessLevel = AccessLevel.READ_ONLY
    session_type: SessionType = SessionType.LOCAL
    origin: str = ""
    origin_port: int = 0


@dataclass
class RemoveUserSession(Command):
    """Remove an existing user session."""

    command: str = field(default="RemoveUserSession", init=False)
    id: int = 0