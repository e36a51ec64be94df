"""Color palette for calibration controls."""

from typing import Optional, Tuple

from .enums import Axis
from .types import Color


class Palette:
    """Fixed per-axis colors plus a few accents."""
    red: Color = "#d0021b"
    green: Color = "#41a33b"
    blue: Color = "#2a7ed8"
    orange: Color = "#f5a623"
    gray: Color = "#9b9b9b"
    white: Color = "#ffffff"

    @classmethod
    def color_for_axis(cls, axis: Optional[Axis]) -> Color:
        """Color for a world axis; both directions of an axis share a color."""
        if axis in (Axis.POSITIVE_X, Axis.NEGATIVE_X):
            return cls.red
        if axis in (Axis.POSITIVE_Y, Axis.NEGATIVE_Y):
            return cls.green
        if axis in (Axis.POSITIVE_Z, Axis.NEGATIVE_Z):
            return cls.blue
        return cls.gray


def hex_to_bgr(color: Color) -> Tuple[int, int, int]:
    """Convert '#rrggbb' to an OpenCV BGR tuple."""
    value = color.lstrip('#')
    if len(value) == 3:
        value = ''.join(c * 2 for c in value)
    r, g, b = (int(value[i:i + 2], 16) for i in (0, 2, 4))
    return (b, g, r)
