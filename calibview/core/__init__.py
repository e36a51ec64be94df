"""Core components for calibview."""

# Value types
from .types import (
    AABB, ORIGIN, Point2D, ControlPointPair, VanishingPointControlState,
    ImageState, ViewportState, SolverResult, ControlPointsCallbacks, ControlPointsPanelProps
)
from .enums import (
    CalibrationMode, PrincipalPointMode1VP, PrincipalPointMode2VP, HorizonMode, Axis,
    ImageCoordinateFrame, ControlKind
)

# Layout and frame conversion
from .layout import compute_image_aabb, compute_layout_for, DEFAULT_PAD
from .coordinate_transform import (
    relative_to_absolute, absolute_to_relative, image_plane_to_absolute,
    try_relative_to_absolute, try_absolute_to_relative, try_image_plane_to_absolute
)
from .projector import map_points, project_to_absolute, project_to_relative, make_drag_handler

# Control resolution
from .visibility import ControlContext, resolve_controls, visible_controls
from .panel import ControlPointsPanel, Overlay3D, RenderFrame

# Exceptions
from .exceptions import CalibviewError, ConfigurationError

__all__ = [
    # Types
    "AABB",
    "ORIGIN",
    "Point2D",
    "ControlPointPair",
    "VanishingPointControlState",
    "ImageState",
    "ViewportState",
    "SolverResult",
    "ControlPointsCallbacks",
    "ControlPointsPanelProps",

    # Enums
    "CalibrationMode",
    "PrincipalPointMode1VP",
    "PrincipalPointMode2VP",
    "HorizonMode",
    "Axis",
    "ImageCoordinateFrame",
    "ControlKind",

    # Layout and conversion
    "compute_image_aabb",
    "compute_layout_for",
    "DEFAULT_PAD",
    "relative_to_absolute",
    "absolute_to_relative",
    "image_plane_to_absolute",
    "try_relative_to_absolute",
    "try_absolute_to_relative",
    "try_image_plane_to_absolute",
    "map_points",
    "project_to_absolute",
    "project_to_relative",
    "make_drag_handler",

    # Control resolution
    "ControlContext",
    "resolve_controls",
    "visible_controls",
    "ControlPointsPanel",
    "RenderFrame",
    "Overlay3D",

    # Exceptions
    "CalibviewError",
    "ConfigurationError",
]
