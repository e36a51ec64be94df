"""Structural projection of control point state between frames.

Control state comes in three shapes: a single Point2D, a ControlPointPair and a
VanishingPointControlState. `map_points` rebuilds any of them with every
embedded point passed through a function, so relative and absolute copies stay
structurally identical.
"""

from functools import singledispatch
from typing import Callable, Optional, TypeVar

from .coordinate_transform import absolute_to_relative, relative_to_absolute
from .types import AABB, ControlPointPair, ControlShape, Point2D, VanishingPointControlState

S = TypeVar("S", bound=ControlShape)
PointFn = Callable[[Point2D], Point2D]


@singledispatch
def map_points(shape, fn: PointFn):
    """Apply fn to every point in a control state shape."""
    raise TypeError(f"Unsupported control state shape: {type(shape).__name__}")


@map_points.register
def _(shape: Point2D, fn: PointFn) -> Point2D:
    return fn(shape)


@map_points.register
def _(shape: ControlPointPair, fn: PointFn) -> ControlPointPair:
    return ControlPointPair(fn(shape.first), fn(shape.second))


@map_points.register
def _(shape: VanishingPointControlState, fn: PointFn) -> VanishingPointControlState:
    first, second = shape.line_segments
    return VanishingPointControlState((map_points(first, fn), map_points(second, fn)))


def project_to_absolute(shape: S, aabb: Optional[AABB]) -> S:
    """Relative-frame control state to absolute (viewport) frame."""
    return map_points(shape, lambda p: relative_to_absolute(p, aabb))


def project_to_relative(shape: S, aabb: Optional[AABB]) -> S:
    """Absolute-frame control state to relative frame, clamped per point."""
    return map_points(shape, lambda p: absolute_to_relative(p, aabb))


def make_drag_handler(aabb: Optional[AABB], report: Callable[..., None]) -> Callable[..., None]:
    """Wrap an outbound callback so it receives relative positions.

    The returned handler takes any leading indices followed by the dragged
    absolute position, and forwards them to report with the position converted
    to the relative frame.

    Args:
        aabb: Image placement rectangle the drag happened against
        report: Upstream callback, e.g. callbacks.on_origin_drag

    Returns:
        Handler accepting (*indices, absolute_position)
    """
    def handler(*args):
        *indices, position = args
        report(*indices, absolute_to_relative(position, aabb))
    return handler
