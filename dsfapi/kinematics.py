"""Kinematics settings of the move subsystem and conversions between their forms."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum
from typing import Any, Callable, Mapping, TypeVar

DEFAULT_ANCHOR_DZ = 3000.0
DEFAULT_HANGPRINTER_PRINT_RADIUS = 1500.0


class KinematicsName(str, Enum):
    """Supported kinematics types."""

    CARTESIAN = "cartesian"
    CORE_XY = "coreXY"
    CORE_XYU = "coreXYU"
    CORE_XYUV = "coreXYUV"
    CORE_XZ = "coreXZ"
    MARK_FORGED = "markForged"
    FIVE_BAR_SCARA = "FiveBarScara"
    HANGPRINTER = "Hangprinter"
    DELTA = "delta"
    POLAR = "Polar"
    ROTARY_DELTA = "Rotary delta"
    SCARA = "Scara"
    UNKNOWN = "unknown"


_CORE = {
    KinematicsName.CARTESIAN,
    KinematicsName.CORE_XY,
    KinematicsName.CORE_XYU,
    KinematicsName.CORE_XYUV,
    KinematicsName.CORE_XZ,
    KinematicsName.MARK_FORGED,
}
_DELTA = {KinematicsName.DELTA, KinematicsName.ROTARY_DELTA}
_HANGPRINTER = {KinematicsName.HANGPRINTER}
_SCARA = {KinematicsName.FIVE_BAR_SCARA, KinematicsName.SCARA}


def default_forward_matrix() -> list[list[float]]:
    """Identity movement matrix for core kinematics."""
    return [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]]


def default_inverse_matrix() -> list[list[float]]:
    """Identity inverse movement matrix for core kinematics."""
    return [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]]


def default_anchor_a() -> list[float]:
    return [0.0, -2000.0, -100.0]


def default_anchor_b() -> list[float]:
    return [2000.0, 1000.0, -100.0]


def default_anchor_c() -> list[float]:
    return [-2000.0, 1000.0, -100.0]


def _float(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"expected a number, got {value!r}")
    return float(value)


def _list_of(convert: Callable[[Any], Any]) -> Callable[[Any], list]:
    def decode(value: Any) -> list:
        if not isinstance(value, (list, tuple)):
            raise ValueError(f"expected a list, got {value!r}")
        return [convert(item) for item in value]

    return decode


def _name(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError(f"expected a kinematics name, got {value!r}")
    try:
        return KinematicsName(value)
    except ValueError:
        return value


_T = TypeVar("_T")


def _decode(cls: type[_T], data: Mapping[str, Any], instance: _T | None = None) -> _T:
    """Fill a dataclass from a mapping whose keys match field names case-insensitively."""
    if not isinstance(data, Mapping):
        raise ValueError(f"expected a mapping, got {data!r}")
    target = cls() if instance is None else instance
    lowered = {str(key).lower(): value for key, value in data.items()}
    for f in fields(target):
        key = f.name.replace("_", "").lower()
        value = lowered.get(key)
        if value is None:
            continue
        setattr(target, f.name, f.metadata["decode"](value))
    return target


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _encode(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if is_dataclass(value):
        return {_camel(f.name): _encode(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, (list, tuple)):
        return [_encode(v) for v in value]
    return value


def _nested(cls: type) -> Callable[[Any], Any]:
    return lambda value: _decode(cls, value)


_FLOAT = {"decode": _float}
_FLOATS = {"decode": _list_of(_float)}
_MATRIX = {"decode": _list_of(_list_of(_float))}


@dataclass
class BaseKinematics:
    """The configured kinematics, identified by name."""

    name: str = field(default="", metadata={"decode": _name})

    def to_dict(self) -> dict[str, Any]:
        """Return the generic mapping form of these kinematics."""
        return _encode(self)


@dataclass
class TiltCorrection:
    """Parameters for Z leadscrew tilt compensation."""

    correction_factor: float = field(default=0.0, metadata=_FLOAT)
    last_corrections: list[float] = field(default_factory=list, metadata=_FLOATS)
    max_correction: float = field(default=0.0, metadata=_FLOAT)
    screw_pitch: float = field(default=0.0, metadata=_FLOAT)
    screw_x: list[float] = field(default_factory=list, metadata=_FLOATS)
    screw_y: list[float] = field(default_factory=list, metadata=_FLOATS)


@dataclass
class ZLeadscrewKinematics(BaseKinematics):
    """Kinematics that can level the bed using Z leadscrews."""

    tilt_correction: TiltCorrection = field(
        default_factory=TiltCorrection, metadata={"decode": _nested(TiltCorrection)}
    )


@dataclass
class CoreKinematics(ZLeadscrewKinematics):
    """Cartesian and core kinematics with their movement matrices."""

    forward_matrix: list[list[float]] = field(
        default_factory=default_forward_matrix, metadata=_MATRIX
    )
    inverse_matrix: list[list[float]] = field(
        default_factory=default_inverse_matrix, metadata=_MATRIX
    )


@dataclass
class DeltaTower:
    """Properties of one delta tower."""

    angle_correction: float = field(default=0.0, metadata=_FLOAT)
    diagonal: float = field(default=0.0, metadata=_FLOAT)
    endstop_adjustment: float = field(default=0.0, metadata=_FLOAT)
    x_pos: float = field(default=0.0, metadata=_FLOAT)
    y_pos: float = field(default=0.0, metadata=_FLOAT)


@dataclass
class DeltaKinematics(BaseKinematics):
    """Delta kinematics."""

    delta_radius: float = field(default=0.0, metadata=_FLOAT)
    homed_height: float = field(default=0.0, metadata=_FLOAT)
    print_radius: float = field(default=0.0, metadata=_FLOAT)
    towers: list[DeltaTower] = field(
        default_factory=list, metadata={"decode": _list_of(_nested(DeltaTower))}
    )
    x_tilt: float = field(default=0.0, metadata=_FLOAT)
    y_tilt: float = field(default=0.0, metadata=_FLOAT)


@dataclass
class HangprinterKinematics(BaseKinematics):
    """Hangprinter kinematics."""

    anchor_a: list[float] = field(default_factory=default_anchor_a, metadata=_FLOATS)
    anchor_b: list[float] = field(default_factory=default_anchor_b, metadata=_FLOATS)
    anchor_c: list[float] = field(default_factory=default_anchor_c, metadata=_FLOATS)
    anchor_dz: float = field(default=DEFAULT_ANCHOR_DZ, metadata=_FLOAT)
    print_radius: float = field(default=DEFAULT_HANGPRINTER_PRINT_RADIUS, metadata=_FLOAT)


@dataclass
class ScaraKinematics(ZLeadscrewKinematics):
    """SCARA kinematics."""


def kinematics_name(data: Mapping[str, Any]) -> KinematicsName:
    """Return the kinematics name stored in a generic kinematics mapping."""
    if "name" not in data:
        raise KeyError("name")
    return KinematicsName(data["name"])


def _check(data: Mapping[str, Any], allowed: set[KinematicsName], label: str) -> None:
    name = data.get("name")
    if name not in {n.value for n in allowed}:
        raise ValueError(f"Not {label} kinematics: {name}")


def as_base_kinematics(data: Mapping[str, Any]) -> BaseKinematics:
    """Decode the generic mapping as base kinematics."""
    return _decode(BaseKinematics, data)


def as_zleadscrew_kinematics(data: Mapping[str, Any]) -> ZLeadscrewKinematics:
    """Decode the generic mapping as Z leadscrew kinematics."""
    return _decode(ZLeadscrewKinematics, data)


def as_core_kinematics(data: Mapping[str, Any]) -> CoreKinematics:
    """Decode the generic mapping as core kinematics."""
    _check(data, _CORE, "core")
    return _decode(CoreKinematics, data)


def as_delta_kinematics(data: Mapping[str, Any]) -> DeltaKinematics:
    """Decode the generic mapping as delta kinematics."""
    _check(data, _DELTA, "delta")
    return _decode(DeltaKinematics, data)


def as_hangprinter_kinematics(data: Mapping[str, Any]) -> HangprinterKinematics:
    """Decode the generic mapping as Hangprinter kinematics."""
    _check(data, _HANGPRINTER, "Hangprinter")
    return _decode(HangprinterKinematics, data)


def as_scara_kinematics(data: Mapping[str, Any]) -> ScaraKinematics:
    """Decode the generic mapping as SCARA kinematics."""
    _check(data, _SCARA, "Scara")
    return _decode(ScaraKinematics, data)