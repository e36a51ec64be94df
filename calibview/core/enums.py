"""Enumerations for calibview."""

from enum import Enum, IntEnum
from typing import Type, TypeVar

E = TypeVar("E", bound=Enum)


def parse_enum(enum_cls: Type[E], value) -> E:
    """Parse an enum member from a member, its value, or its name.

    Names are matched case-insensitively and may use '-' or ' ' in place of '_',
    so 'two-vanishing-point' resolves to TWO_VANISHING_POINT.

    Raises:
        ValueError: If value matches no member
    """
    if isinstance(value, enum_cls):
        return value
    for member in enum_cls:
        if member.value == value:
            return member
    if isinstance(value, str):
        key = value.strip().upper().replace('-', '_').replace(' ', '_')
        if key in enum_cls.__members__:
            return enum_cls.__members__[key]
    raise ValueError(
        f"Invalid {enum_cls.__name__}: {value!r} "
        f"(expected one of {', '.join(m.name.lower() for m in enum_cls)})"
    )


class CalibrationMode(Enum):
    """Number of vanishing points the user marks."""
    ONE_VANISHING_POINT = "1VP"
    TWO_VANISHING_POINT = "2VP"


class PrincipalPointMode1VP(Enum):
    """Principal point source in one-vanishing-point mode."""
    DEFAULT = "Default"
    MANUAL = "Manual"


class PrincipalPointMode2VP(Enum):
    """Principal point source in two-vanishing-point mode."""
    DEFAULT = "Default"
    MANUAL = "Manual"
    FROM_THIRD_VANISHING_POINT = "FromThirdVanishingPoint"


class HorizonMode(Enum):
    """Whether the horizon line is user-editable in one-vanishing-point mode."""
    DEFAULT = "Default"
    MANUAL = "Manual"


class Axis(Enum):
    """World axis a vanishing point is assigned to."""
    POSITIVE_X = "xPositive"
    NEGATIVE_X = "xNegative"
    POSITIVE_Y = "yPositive"
    NEGATIVE_Y = "yNegative"
    POSITIVE_Z = "zPositive"
    NEGATIVE_Z = "zNegative"


class ImageCoordinateFrame(Enum):
    """Coordinate frames spanning a single image."""
    RELATIVE = "relative"          # [0, 1] x [0, 1], origin top left
    IMAGE_PIXEL = "image_pixel"    # [0, w] x [0, h], origin top left
    IMAGE_PLANE = "image_plane"    # origin at image center, y up


class ControlKind(Enum):
    """Kinds of interactive controls laid over the image."""
    VANISHING_POINT = "vanishing_point"
    HORIZON = "horizon"
    PRINCIPAL_POINT = "principal_point"
    ORIGIN = "origin"


class ControlPointPairIndex(IntEnum):
    """Index of a point within a control point pair."""
    FIRST = 0
    SECOND = 1
