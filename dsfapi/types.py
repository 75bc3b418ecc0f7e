"""Types shared by commands and the object model: code channels, permissions and driver ids."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

_UINT64_MAX = (1 << 64) - 1
_DIGITS = re.compile(r"[0-9]+")


class CodeChannel(str, Enum):
    """Input channels that G/M/T-codes can arrive on."""

    HTTP = "HTTP"
    TELNET = "Telnet"
    FILE = "File"
    USB = "USB"
    AUX = "Aux"
    TRIGGER = "Trigger"
    QUEUE = "Queue"
    LCD = "LCD"
    SBC = "SBC"
    DAEMON = "Daemon"
    AUX2 = "Aux2"
    AUTO_PAUSE = "AutoPause"
    UNKNOWN = "Unknown"


DEFAULT_CHANNEL = CodeChannel.SBC


def all_channels() -> list[CodeChannel]:
    """Return every code channel in declaration order."""
    return list(CodeChannel)


class SbcPermissions(str, Enum):
    """Permissions a plugin running on the SBC may request."""

    NONE = "none"
    COMMAND_EXECUTION = "commandExecution"
    CODE_INTERCEPTION_READ = "codeInterceptionRead"
    CODE_INTERCEPTION_READ_WRITE = "codeInterceptionReadWrite"
    MANAGE_PLUGINS = "managePlugins"
    MANAGE_USER_SESSION = "manageUserSessions"
    OBJECT_MODEL_READ = "objectModelRead"
    OBJECT_MODEL_READ_WRITE = "objectModelReadWrite"
    REGISTER_HTTP_ENDPOINTS = "registerHttpEndpoints"
    READ_FILAMENTS = "readFilaments"
    WRITE_FILAMENTS = "writeFilaments"
    READ_FIRMWARE = "readFirmware"
    WRITE_FIRMWARE = "writeFirmware"
    READ_GCODES = "readGCodes"
    WRITE_GCODES = "writeGCodes"
    READ_MACROS = "readMacros"
    WRITE_MACROS = "writeMacros"
    READ_MENU = "readMenu"
    WRITE_MENU = "WriteMenu"
    READ_SYSTEM = "readSystem"
    WRITE_SYSTEM = "writeSystem"
    READ_WEB = "readWeb"
    WRITE_WEB = "writeWeb"
    FILE_SYSTEM_ACCESS = "fileSystemAccess"
    LAUNCH_PROCESS = "launchProcess"
    NETWORK_ACCESS = "networkAccess"
    SUPER_USER = "superUser"


def _parse_uint64(text: str) -> int:
    if not _DIGITS.fullmatch(text):
        raise ValueError(text)
    value = int(text)
    if value > _UINT64_MAX:
        raise ValueError(text)
    return value


@dataclass(frozen=True)
class DriverId:
    """A driver identification made of a board number and a port."""

    board: int = 0
    port: int = 0

    @classmethod
    def from_uint64(cls, value: int) -> DriverId:
        """Build a driver id from its bit-masked integer form."""
        return cls(board=(value >> 16) & 0xFFFF, port=value & 0xFFFF)

    @classmethod
    def parse(cls, value: str) -> DriverId:
        """Parse a driver id of the form 'port' or 'board.port'."""
        if not value.strip():
            return cls()
        parts = value.split(".")
        if len(parts) == 1:
            try:
                port = _parse_uint64(parts[0])
            except ValueError:
                raise ValueError("Failed to parse driver number") from None
            return cls(port=port)
        if len(parts) == 2:
            try:
                board = _parse_uint64(parts[0])
            except ValueError:
                raise ValueError("Failed to parse board number") from None
            try:
                port = _parse_uint64(parts[1])
            except ValueError:
                raise ValueError("Failed to parse driver number") from None
            return cls(board=board, port=port)
        raise ValueError("Driver value is invalid")

    def as_uint64(self) -> int:
        """Return the bit-masked integer form of this driver id."""
        return ((self.board << 16) | self.port) & _UINT64_MAX

    def __str__(self) -> str:
        return f"{self.board}.{self.port}"