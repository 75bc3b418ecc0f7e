"""Parsed parameters of G/M/T-codes and conversions of their values."""

from __future__ import annotations

import copy
import math
import re
from decimal import Decimal
from typing import Any

from dsfapi.types import DriverId

LETTER_FOR_UNPRECEDENTED_STRING = "@"

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_UINT64_MAX = (1 << 64) - 1

_SIGNED = re.compile(r"[+-]?[0-9]+")
_UNSIGNED = re.compile(r"[0-9]+")
_DECIMAL_FLOAT = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_HEX_FLOAT = re.compile(
    r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+"
)
_SPECIAL_FLOAT = re.compile(r"[+-]?(?:inf|infinity)|nan", re.IGNORECASE)

_TRUE_WORDS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_WORDS = frozenset({"0", "f", "F", "FALSE", "false", "False"})


class MissingParameterError(LookupError):
    """Raised when a required code parameter is not present."""

    def __init__(self, message: str = "Parameter not found") -> None:
        super().__init__(message)


class CodeParameterError(ValueError):
    """Raised when a parameter value cannot be parsed or converted."""


def _parse_int(text: str) -> int | None:
    if not _SIGNED.fullmatch(text):
        return None
    value = int(text)
    return value if _INT64_MIN <= value <= _INT64_MAX else None


def _parse_uint(text: str) -> int | None:
    if not _UNSIGNED.fullmatch(text):
        return None
    value = int(text)
    return value if value <= _UINT64_MAX else None


def _parse_float(text: str) -> float | None:
    if _SPECIAL_FLOAT.fullmatch(text):
        return float(text)
    if _HEX_FLOAT.fullmatch(text):
        try:
            value = float.fromhex(text)
        except OverflowError:
            return None
    elif _DECIMAL_FLOAT.fullmatch(text):
        value = float(text)
    else:
        return None
    if math.isinf(value):
        return None
    return value


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    sign = "-" if value < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(value))).as_tuple()
    digits = "".join(str(d) for d in digit_tuple).lstrip("0")
    stripped = digits.rstrip("0")
    exponent += len(digits) - len(stripped)
    digits = stripped
    count = len(digits)
    point = count + exponent
    exp10 = point - 1
    if exp10 < -4 or exp10 >= 6:
        mantissa = digits[0] + ("." + digits[1:] if count > 1 else "")
        return f"{sign}{mantissa}e{'+' if exp10 >= 0 else '-'}{abs(exp10):02d}"
    if point <= 0:
        return f"{sign}0.{'0' * -point}{digits}"
    if point >= count:
        return f"{sign}{digits}{'0' * (point - count)}"
    return f"{sign}{digits[:point]}.{digits[point:]}"


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, DriverId):
        return f"{{{value.board} {value.port}}}"
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(_format_value(v) for v in value) + "]"
    if value is None:
        return "<nil>"
    return str(value)


def _scalar_kind(value: Any) -> str | None:
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int):
        if _INT64_MIN <= value <= _INT64_MAX:
            return "int"
        if value <= _UINT64_MAX:
            return "uint"
        return None
    if isinstance(value, float):
        return "float"
    if isinstance(value, DriverId):
        return "driver"
    if isinstance(value, str):
        return "str"
    return None


def _kind(value: Any) -> str | None:
    """Classify a parsed value the way the wire protocol's typed values are told apart."""
    if isinstance(value, (list, tuple)):
        if not value:
            return None
        kinds = {_scalar_kind(v) for v in value}
        if kinds == {"float"}:
            return "floats"
        if kinds == {"driver"}:
            return "drivers"
        if kinds == {"int"}:
            return "ints"
        if kinds <= {"int", "uint"} and all(v >= 0 for v in value):
            return "uints"
        return None
    return _scalar_kind(value)


def _wrap_int64(value: int) -> int:
    return ((value - _INT64_MIN) % (1 << 64)) + _INT64_MIN


def _float_to_int(value: float) -> int:
    try:
        return int(value)
    except (ValueError, OverflowError) as exc:
        raise CodeParameterError(str(exc)) from None


class CodeParameter:
    """A parsed parameter of a G/M/T-code such as P2 in M106 P2."""

    def __init__(
        self, letter: str, value: str, is_string: bool = False, is_driver_id: bool = False
    ) -> None:
        self.letter = letter
        self.is_expression = False
        self.is_driver_id = is_driver_id
        self.is_string = is_string
        self._string_value = value
        self._parsed_value: Any = None
        if is_string:
            self._parsed_value = value
        elif is_driver_id:
            self.convert_driver_ids()
        else:
            self._parse(value)

    @classmethod
    def simple(cls, letter: str, value: Any) -> CodeParameter:
        """Create a parameter from an already native value."""
        parameter = cls.__new__(cls)
        is_string = isinstance(value, str)
        text = value if is_string else _format_value(value)
        parameter.letter = letter
        parameter.is_driver_id = False
        parameter.is_string = is_string
        parameter.is_expression = is_string and text.startswith("{") and text.endswith("}")
        parameter._string_value = text
        parameter._parsed_value = value
        return parameter

    @property
    def string_value(self) -> str:
        """The unparsed text of this parameter."""
        return self._string_value

    @property
    def value(self) -> Any:
        """The parsed native value of this parameter."""
        return self._parsed_value

    def _parse(self, value: str) -> None:
        value = value.strip()
        if value == "":
            self._parsed_value = 0
        elif value.startswith("{") and value.endswith("}"):
            self.is_expression = True
        elif ":" in value:
            self._parse_list(value)
        elif (number := _parse_int(value)) is not None:
            self._parsed_value = number
        elif (number := _parse_uint(value)) is not None:
            self._parsed_value = number
        elif (real := _parse_float(value)) is not None:
            self._parsed_value = real
        else:
            self._parsed_value = value

    def _parse_list(self, value: str) -> None:
        parts = value.split(":")
        if "." in value:
            floats = [_parse_float(p) for p in parts]
            if all(f is not None for f in floats):
                self._parsed_value = floats
                return
        else:
            ints = [_parse_int(p) for p in parts]
            if all(i is not None for i in ints):
                self._parsed_value = ints
                return
            uints = [_parse_uint(p) for p in parts]
            if all(u is not None for u in uints):
                self._parsed_value = uints
                return
        self._parsed_value = value

    def __str__(self) -> str:
        letter = "" if self.letter == LETTER_FOR_UNPRECEDENTED_STRING else self.letter
        if self.is_string and not self.is_expression:
            escaped = self._string_value.replace('"', '""')
            return f'{letter}"{escaped}"'
        return f"{letter}{self._string_value}"

    def __repr__(self) -> str:
        return (
            f"CodeParameter(letter={self.letter!r}, value={self._string_value!r}, "
            f"is_string={self.is_string}, is_driver_id={self.is_driver_id})"
        )

    def clone(self) -> CodeParameter:
        """Return a copy of this parameter."""
        return copy.copy(self)

    def convert_driver_ids(self) -> None:
        """Reinterpret the value as a driver id or a list of driver ids."""
        if self.is_expression:
            return
        drivers = []
        for part in self._string_value.split(":"):
            try:
                drivers.append(DriverId.parse(part))
            except ValueError as exc:
                raise CodeParameterError(f"{exc} from {self.letter} parameter") from None
        self._parsed_value = drivers[0] if len(drivers) == 1 else drivers
        self.is_driver_id = True

    def _error(self, target: str) -> CodeParameterError:
        return CodeParameterError(
            f"Cannot convert {self.letter} parameter to {target} "
            f"(value {self._string_value} of type {type(self._parsed_value).__name__})"
        )

    def as_float(self) -> float:
        """Return the value as a float."""
        v = self._parsed_value
        if _kind(v) in ("float", "int", "uint"):
            return float(v)
        raise self._error("float64")

    def as_int(self) -> int:
        """Return the value as a signed 64-bit integer."""
        v = self._parsed_value
        if _kind(v) == "int":
            return v
        raise self._error("int64")

    def as_uint(self) -> int:
        """Return the value as an unsigned 64-bit integer."""
        v = self._parsed_value
        kind = _kind(v)
        if kind == "uint" or (kind == "int" and v >= 0):
            return v
        if kind == "driver":
            return v.as_uint64()
        raise self._error("uint64")

    def as_driver_id(self) -> DriverId:
        """Return the value as a driver id."""
        v = self._parsed_value
        kind = _kind(v)
        if kind == "driver":
            return v
        if kind == "uint":
            return DriverId.from_uint64(v)
        raise CodeParameterError(
            f"Cannot convert {self.letter} parameter to driver ID (value {self._string_value})"
        )

    def as_bool(self) -> bool:
        """Interpret the text of this parameter as a boolean."""
        if self._string_value in _TRUE_WORDS:
            return True
        if self._string_value in _FALSE_WORDS:
            return False
        raise CodeParameterError(
            f"Cannot convert {self.letter} parameter to bool (value {self._string_value})"
        )

    def as_float_list(self) -> list[float]:
        """Return the value as a list of floats."""
        v = self._parsed_value
        match _kind(v):
            case "floats":
                return list(v)
            case "float" | "int" | "uint":
                return [float(v)]
            case "ints" | "uints":
                return [float(x) for x in v]
        raise self._error("[]float64")

    def as_int_list(self) -> list[int]:
        """Return the value as a list of signed 64-bit integers."""
        v = self._parsed_value
        match _kind(v):
            case "ints":
                return list(v)
            case "float":
                return [_float_to_int(v)]
            case "int":
                return [v]
            case "uint":
                return [_wrap_int64(v)]
            case "floats":
                return [_float_to_int(x) for x in v]
            case "uints":
                return [_wrap_int64(x) for x in v]
        raise self._error("[]int64")

    def as_uint_list(self) -> list[int]:
        """Return the value as a list of unsigned 64-bit integers."""
        v = self._parsed_value
        match _kind(v):
            case "uints":
                return list(v)
            case "float":
                return [_float_to_int(v) % (1 << 64)]
            case "int":
                if v >= 0:
                    return [v]
            case "uint":
                return [v]
            case "floats":
                return [_float_to_int(x) % (1 << 64) for x in v]
            case "ints":
                if all(x >= 0 for x in v):
                    return list(v)
            case "drivers":
                return [d.as_uint64() for d in v]
            case "driver":
                return [v.as_uint64()]
        raise self._error("[]uint64")

    def as_driver_id_list(self) -> list[DriverId]:
        """Return the value as a list of driver ids."""
        v = self._parsed_value
        match _kind(v):
            case "drivers":
                return list(v)
            case "driver":
                return [v]
            case "uint":
                return [DriverId.from_uint64(v)]
            case "uints":
                return [DriverId.from_uint64(x) for x in v]
        raise self._error("[]DriverId")

    def to_dict(self) -> dict[str, Any]:
        """Return the wire representation of this parameter."""
        return {
            "letter": self.letter,
            "value": self._string_value,
            "isDriverId": self.is_driver_id,
            "isString": self.is_string,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CodeParameter:
        """Build a parameter from its wire representation and parse its value."""
        letter = data.get("letter", "")
        value = data.get("value", "")
        if not isinstance(letter, str) or not isinstance(value, str):
            raise CodeParameterError("letter and value must be strings")
        return cls(
            letter,
            value,
            is_string=_flag(data.get("isString")),
            is_driver_id=_flag(data.get("isDriverId")),
        )


def _flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value == 1
    return False