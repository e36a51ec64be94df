"""Reference OpenCV renderer for resolved calibration controls.

Draws the letterboxed image and the declarative control list produced by the
visibility resolver onto a BGR canvas. Hosts with their own drawing layer only
need the control list; this renderer backs the CLI preview.
"""

import math
from typing import Callable, Dict, List, Optional, Tuple

import cv2
import numpy as np
from loguru import logger

from ..core.constants import Defaults, RenderStyle
from ..core.enums import ControlKind, ControlPointPairIndex
from ..core.palette import Palette, hex_to_bgr
from ..core.types import AABB, ControlPointPair, Point2D
from ..core.visibility import (
    Control, HorizonControl, OriginControl, PrincipalPointControl, VanishingPointControl
)

# Far-away vanishing points must still fit OpenCV's integer coordinates
_COORD_LIMIT = 1e5


def _pixel(point: Point2D) -> Optional[Tuple[int, int]]:
    if not (math.isfinite(point.x) and math.isfinite(point.y)):
        return None
    x = min(_COORD_LIMIT, max(-_COORD_LIMIT, point.x))
    y = min(_COORD_LIMIT, max(-_COORD_LIMIT, point.y))
    return Point2D(x, y).as_tuple()


def create_canvas(width: int, height: int, color: Tuple[int, int, int] = Defaults.RENDER_BACKGROUND) -> np.ndarray:
    """Blank BGR canvas of the viewport size."""
    canvas = np.zeros((int(height), int(width), 3), dtype=np.uint8)
    canvas[:] = color
    return canvas


def draw_image(canvas: np.ndarray, image: np.ndarray, aabb: AABB, opacity: float = 1.0) -> np.ndarray:
    """Blend the image into its placement rectangle.

    Args:
        canvas: Target canvas (H, W, 3), modified in place
        image: Source image (h, w, 3)
        aabb: Placement rectangle in canvas pixels
        opacity: Image opacity in [0, 1]

    Returns:
        The canvas
    """
    if not aabb.is_valid:
        return canvas

    x0, y0 = int(round(aabb.x_min)), int(round(aabb.y_min))
    width, height = int(round(aabb.width)), int(round(aabb.height))
    if width <= 0 or height <= 0:
        return canvas
    if image.ndim == 2:
        image = cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
    elif image.shape[2] == 4:
        image = cv2.cvtColor(image, cv2.COLOR_BGRA2BGR)
    resized = cv2.resize(image, (width, height), interpolation=cv2.INTER_AREA).astype(canvas.dtype)

    # Clip to the canvas
    cx0, cy0 = max(x0, 0), max(y0, 0)
    cx1 = min(x0 + width, canvas.shape[1])
    cy1 = min(y0 + height, canvas.shape[0])
    if cx1 <= cx0 or cy1 <= cy0:
        return canvas

    patch = resized[cy0 - y0:cy1 - y0, cx0 - x0:cx1 - x0]
    region = canvas[cy0:cy1, cx0:cx1]
    canvas[cy0:cy1, cx0:cx1] = cv2.addWeighted(patch, opacity, region, 1.0 - opacity, 0)
    return canvas


def _draw_handle(canvas: np.ndarray, point: Point2D, color: Tuple[int, int, int]) -> None:
    pixel = _pixel(point)
    if pixel is None:
        return
    cv2.circle(canvas, pixel, RenderStyle.HANDLE_RADIUS, color, RenderStyle.HANDLE_THICKNESS, cv2.LINE_AA)


def _draw_segment(canvas: np.ndarray, pair: ControlPointPair, color: Tuple[int, int, int], thickness: int) -> None:
    start, end = _pixel(pair.first), _pixel(pair.second)
    if start is None or end is None:
        return
    cv2.line(canvas, start, end, color, thickness, cv2.LINE_AA)


def _draw_marker(canvas: np.ndarray, point: Optional[Point2D], color: Tuple[int, int, int]) -> None:
    if point is None:
        return
    pixel = _pixel(point)
    if pixel is None:
        return
    cv2.circle(canvas, pixel, RenderStyle.MARKER_RADIUS, color, -1, cv2.LINE_AA)


def _draw_cross(canvas: np.ndarray, point: Point2D, arm: int, color: Tuple[int, int, int]) -> None:
    pixel = _pixel(point)
    if pixel is None:
        return
    x, y = pixel
    cv2.line(canvas, (x - arm, y), (x + arm, y), color, RenderStyle.LINE_THICKNESS, cv2.LINE_AA)
    cv2.line(canvas, (x, y - arm), (x, y + arm), color, RenderStyle.LINE_THICKNESS, cv2.LINE_AA)


def draw_vanishing_point(canvas: np.ndarray, control: VanishingPointControl) -> None:
    color = hex_to_bgr(control.color)
    marker_color = hex_to_bgr(control.vanishing_point_color)
    for segment in control.control_state.line_segments:
        _draw_segment(canvas, segment, color, RenderStyle.LINE_THICKNESS)
        if control.vanishing_point is not None:
            # Guide from the segment's far end to the vanishing point
            _draw_segment(canvas, ControlPointPair(segment.second, control.vanishing_point), marker_color, 1)
        for index in ControlPointPairIndex:
            _draw_handle(canvas, segment[index], color)
    _draw_marker(canvas, control.vanishing_point, marker_color)


def draw_horizon(canvas: np.ndarray, control: HorizonControl) -> None:
    color = hex_to_bgr(Palette.white if control.enabled else Palette.gray)
    _draw_segment(canvas, control.point_pair, color, RenderStyle.LINE_THICKNESS)
    if control.enabled:
        for index in ControlPointPairIndex:
            _draw_handle(canvas, control.point_pair[index], color)
    _draw_marker(canvas, control.vanishing_point, hex_to_bgr(control.vanishing_point_color))


def draw_principal_point(canvas: np.ndarray, control: PrincipalPointControl) -> None:
    color = hex_to_bgr(Palette.white if control.enabled else Palette.gray)
    _draw_cross(canvas, control.position, RenderStyle.PRINCIPAL_POINT_ARM, color)


def draw_origin(canvas: np.ndarray, control: OriginControl) -> None:
    color = hex_to_bgr(Palette.white)
    _draw_cross(canvas, control.position, RenderStyle.ORIGIN_ARM, color)
    _draw_handle(canvas, control.position, color)


DRAWERS: Dict[ControlKind, Callable[[np.ndarray, Control], None]] = {
    ControlKind.VANISHING_POINT: draw_vanishing_point,
    ControlKind.HORIZON: draw_horizon,
    ControlKind.PRINCIPAL_POINT: draw_principal_point,
    ControlKind.ORIGIN: draw_origin,
}


def render_controls(
    frame: np.ndarray,
    controls: List[Control],
    image_aabb: Optional[AABB] = None,
    image: Optional[np.ndarray] = None,
    opacity: float = 1.0
) -> np.ndarray:
    """Draw the image and every visible control onto a frame.

    Args:
        frame: Canvas (H, W, 3) in viewport pixels
        controls: Resolved controls in absolute coordinates
        image_aabb: Image placement rectangle, if laid out
        image: BGR image to place inside image_aabb
        opacity: Image opacity in [0, 1]

    Returns:
        A new frame with image and controls drawn
    """
    output = frame.copy()
    if image is not None and image_aabb is not None:
        draw_image(output, image, image_aabb, opacity)

    drawn = 0
    for control in controls:
        if not control.visible:
            continue
        DRAWERS[control.kind](output, control)
        drawn += 1

    logger.debug(f"Rendered {drawn} of {len(controls)} controls")
    return output
