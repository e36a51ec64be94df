"""Type definitions for calibview.

Value types shared by the layout engine, frame converter, projector and
visibility resolver. Points never carry their coordinate frame; every
conversion takes the frame context (an AABB, image dimensions) explicitly.
"""

import math
from dataclasses import dataclass, field
from typing import Callable, List, NamedTuple, Optional, Tuple, Union

from .enums import (
    Axis, CalibrationMode, HorizonMode, PrincipalPointMode1VP, PrincipalPointMode2VP
)


# =============================================================================
# BASIC TYPE ALIASES
# =============================================================================

Color = str  # hex string, e.g. '#d0021b'
Dimension = Optional[float]


# =============================================================================
# GEOMETRY
# =============================================================================

class Point2D(NamedTuple):
    """An (x, y) pair in whatever frame the caller is working in."""
    x: float
    y: float

    def as_tuple(self) -> Tuple[int, int]:
        """Return point as integer tuple for OpenCV."""
        return (int(round(self.x)), int(round(self.y)))


ORIGIN = Point2D(0.0, 0.0)


@dataclass(frozen=True)
class AABB:
    """Axis-aligned rectangle in absolute viewport pixels.

    May be degenerate (zero or negative extent); check `is_valid` before
    dividing by its extent.
    """
    x_min: float
    y_min: float
    x_max: float
    y_max: float

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    @property
    def min(self) -> Point2D:
        return Point2D(self.x_min, self.y_min)

    @property
    def max(self) -> Point2D:
        return Point2D(self.x_max, self.y_max)

    @property
    def is_valid(self) -> bool:
        """True when both extents are finite and strictly positive."""
        return (
            math.isfinite(self.width) and math.isfinite(self.height)
            and self.width > 0 and self.height > 0
        )

    def contains(self, point: Point2D, tolerance: float = 1e-9) -> bool:
        """Check whether a point lies inside the rectangle (edges included)."""
        return (
            self.x_min - tolerance <= point.x <= self.x_max + tolerance
            and self.y_min - tolerance <= point.y <= self.y_max + tolerance
        )

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.x_min, self.y_min, self.x_max, self.y_max)


class ControlPointPair(NamedTuple):
    """One edge of a vanishing point line segment pair, or the horizon."""
    first: Point2D
    second: Point2D


class VanishingPointControlState(NamedTuple):
    """Two line segments whose intersection estimates one vanishing point."""
    line_segments: Tuple[ControlPointPair, ControlPointPair]


ControlShape = Union[Point2D, ControlPointPair, VanishingPointControlState]


def _pair(x0: float, y0: float, x1: float, y1: float) -> ControlPointPair:
    return ControlPointPair(Point2D(x0, y0), Point2D(x1, y1))


# =============================================================================
# INPUT STATE
# =============================================================================

@dataclass(frozen=True)
class ImageState:
    """Image handle URL plus intrinsic pixel size, unknown until loaded."""
    url: Optional[str] = None
    width: Dimension = None
    height: Dimension = None


@dataclass(frozen=True)
class ViewportState:
    """Measured size of the rendering surface."""
    width: Dimension = None
    height: Dimension = None


@dataclass(frozen=True)
class SolverResult:
    """Read-only output of the external camera solver, in the Image-Plane frame."""
    vanishing_points: Optional[List[Point2D]] = None
    vanishing_point_axes: Optional[List[Axis]] = None
    principal_point: Optional[Point2D] = None


# =============================================================================
# CONTROL POINT STATE (relative frame, owned upstream)
# =============================================================================

@dataclass(frozen=True)
class ControlPointsStateBase:
    """Control points present in every calibration mode."""
    principal_point: Point2D = Point2D(0.5, 0.5)
    origin: Point2D = Point2D(0.5, 0.5)
    first_vanishing_point: VanishingPointControlState = VanishingPointControlState((
        _pair(0.22, 0.80, 0.62, 0.84),
        _pair(0.26, 0.48, 0.66, 0.36),
    ))


@dataclass(frozen=True)
class ControlPointsState1VP:
    """Control points specific to one-vanishing-point mode."""
    horizon: ControlPointPair = _pair(0.25, 0.5, 0.75, 0.5)


@dataclass(frozen=True)
class ControlPointsState2VP:
    """Control points specific to two-vanishing-point mode."""
    second_vanishing_point: VanishingPointControlState = VanishingPointControlState((
        _pair(0.78, 0.82, 0.40, 0.86),
        _pair(0.74, 0.46, 0.34, 0.38),
    ))
    third_vanishing_point: VanishingPointControlState = VanishingPointControlState((
        _pair(0.12, 0.30, 0.16, 0.72),
        _pair(0.88, 0.30, 0.84, 0.72),
    ))


# =============================================================================
# SETTINGS (read-only, owned upstream)
# =============================================================================

@dataclass(frozen=True)
class CalibrationSettingsBase:
    """Axis assignment chosen by the user for the marked vanishing points."""
    first_vanishing_point_axis: Axis = Axis.POSITIVE_X
    second_vanishing_point_axis: Axis = Axis.POSITIVE_Y


@dataclass(frozen=True)
class CalibrationSettings1VP:
    principal_point_mode: PrincipalPointMode1VP = PrincipalPointMode1VP.DEFAULT
    horizon_mode: HorizonMode = HorizonMode.DEFAULT


@dataclass(frozen=True)
class CalibrationSettings2VP:
    principal_point_mode: PrincipalPointMode2VP = PrincipalPointMode2VP.DEFAULT


@dataclass(frozen=True)
class GlobalSettings:
    calibration_mode: CalibrationMode = CalibrationMode.ONE_VANISHING_POINT
    image_opacity: float = 1.0


# =============================================================================
# CALLBACKS
# =============================================================================

class ControlPointsCallbacks:
    """Receivers for relative-frame drag updates.

    The default implementation ignores every update; hosts override the
    methods they care about. Indices identify the line segment (0 or 1) and
    the point within its pair (0 or 1).
    """

    def on_first_vanishing_point_control_point_drag(
        self, line_segment_index: int, point_pair_index: int, position: Point2D
    ) -> None:
        pass

    def on_second_vanishing_point_control_point_drag(
        self, line_segment_index: int, point_pair_index: int, position: Point2D
    ) -> None:
        pass

    def on_third_vanishing_point_control_point_drag(
        self, line_segment_index: int, point_pair_index: int, position: Point2D
    ) -> None:
        pass

    def on_horizon_drag(self, point_pair_index: int, position: Point2D) -> None:
        pass

    def on_principal_point_drag(self, position: Point2D) -> None:
        pass

    def on_origin_drag(self, position: Point2D) -> None:
        pass


ImagePlaneConverter = Callable[[Point2D, float, float], Point2D]


@dataclass
class ControlPointsPanelProps:
    """Everything one render pass of the control points panel reads."""
    global_settings: GlobalSettings = field(default_factory=GlobalSettings)
    image_state: ImageState = field(default_factory=ImageState)
    callbacks: ControlPointsCallbacks = field(default_factory=ControlPointsCallbacks)

    calibration_settings_base: CalibrationSettingsBase = field(default_factory=CalibrationSettingsBase)
    calibration_settings_1vp: CalibrationSettings1VP = field(default_factory=CalibrationSettings1VP)
    calibration_settings_2vp: CalibrationSettings2VP = field(default_factory=CalibrationSettings2VP)

    control_points_state_base: ControlPointsStateBase = field(default_factory=ControlPointsStateBase)
    control_points_state_1vp: ControlPointsState1VP = field(default_factory=ControlPointsState1VP)
    control_points_state_2vp: ControlPointsState2VP = field(default_factory=ControlPointsState2VP)

    solver_result: SolverResult = field(default_factory=SolverResult)
