"""Conversions between the Relative, Image-Plane and Absolute (viewport) frames.

Every conversion is total. Inputs that cannot be resolved yet (no layout,
unknown image size) produce None from the `try_*` functions and the ORIGIN
sentinel from their render-safe wrappers, never an exception.
"""

import math
from typing import Optional

import numpy as np

from .coordinates_util import image_plane_to_relative
from .types import AABB, ORIGIN, ImagePlaneConverter, Point2D


def _clamp_unit(value: float) -> float:
    if math.isnan(value):
        return 0.0
    return min(1.0, max(0.0, value))


def try_relative_to_absolute(point: Point2D, aabb: Optional[AABB]) -> Optional[Point2D]:
    """Map a relative point onto the image rectangle.

    Out-of-range relative values are not clamped; they land outside the
    rectangle.
    """
    if aabb is None:
        return None
    return Point2D(
        aabb.x_min + point.x * (aabb.x_max - aabb.x_min),
        aabb.y_min + point.y * (aabb.y_max - aabb.y_min)
    )


def try_absolute_to_relative(point: Point2D, aabb: Optional[AABB]) -> Optional[Point2D]:
    """Map a viewport point to the relative frame, clamped to [0, 1] x [0, 1]."""
    if aabb is None or not aabb.is_valid:
        return None
    return Point2D(
        _clamp_unit((point.x - aabb.x_min) / aabb.width),
        _clamp_unit((point.y - aabb.y_min) / aabb.height)
    )


def try_image_plane_to_absolute(
    point: Point2D,
    aabb: Optional[AABB],
    image_width: Optional[float],
    image_height: Optional[float],
    converter: ImagePlaneConverter = image_plane_to_relative
) -> Optional[Point2D]:
    """Map an image plane point (e.g. a solver result) into the viewport."""
    if not image_width or not image_height or image_width <= 0 or image_height <= 0:
        return None
    if aabb is None:
        return None
    relative = converter(point, image_width, image_height)
    return try_relative_to_absolute(relative, aabb)


def relative_to_absolute(point: Point2D, aabb: Optional[AABB]) -> Point2D:
    """Render-safe relative to absolute conversion; ORIGIN without a layout."""
    result = try_relative_to_absolute(point, aabb)
    return ORIGIN if result is None else result


def absolute_to_relative(point: Point2D, aabb: Optional[AABB]) -> Point2D:
    """Render-safe absolute to relative conversion; ORIGIN without a layout."""
    result = try_absolute_to_relative(point, aabb)
    return ORIGIN if result is None else result


def image_plane_to_absolute(
    point: Point2D,
    aabb: Optional[AABB],
    image_width: Optional[float],
    image_height: Optional[float],
    converter: ImagePlaneConverter = image_plane_to_relative
) -> Point2D:
    """Render-safe image plane to absolute conversion; ORIGIN when unresolvable."""
    result = try_image_plane_to_absolute(point, aabb, image_width, image_height, converter)
    return ORIGIN if result is None else result


def relative_to_absolute_array(points: np.ndarray, aabb: Optional[AABB]) -> np.ndarray:
    """Vectorised relative to absolute conversion.

    Args:
        points: Array of relative points [N, 2]
        aabb: Image placement rectangle, or None

    Returns:
        Array of absolute points [N, 2]. Rows containing NaN stay NaN; the whole
        array is NaN when there is no layout.
    """
    points = np.asarray(points, dtype=float).reshape(-1, 2)
    if aabb is None:
        return np.full_like(points, np.nan)

    origin = np.array(aabb.min)
    extent = np.array(aabb.max) - origin
    return origin + points * extent


def absolute_to_relative_array(points: np.ndarray, aabb: Optional[AABB]) -> np.ndarray:
    """Vectorised absolute to relative conversion, clamped to the unit square.

    Args:
        points: Array of viewport points [N, 2]
        aabb: Image placement rectangle, or None

    Returns:
        Array of relative points [N, 2]. NaN input rows stay NaN; the whole
        array is NaN when there is no valid layout.
    """
    points = np.asarray(points, dtype=float).reshape(-1, 2)
    if aabb is None or not aabb.is_valid:
        return np.full_like(points, np.nan)

    origin = np.array(aabb.min)
    extent = np.array(aabb.max) - origin
    # np.clip leaves NaN untouched
    return np.clip((points - origin) / extent, 0.0, 1.0)
