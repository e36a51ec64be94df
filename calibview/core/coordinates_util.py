"""Conversions between the coordinate frames spanning a single image.

Relative:    [0, 1] x [0, 1], origin at the top left corner, y down.
Image pixel: [0, w] x [0, h], origin at the top left corner, y down.
Image plane: origin at the image center, y up. The longer side spans [-1, 1]:
             wide images cover [-1, 1] x [-1/aspect, 1/aspect] and tall images
             cover [-aspect, aspect] x [-1, 1], where aspect = w / h.
"""

from .enums import ImageCoordinateFrame
from .types import Point2D


def _relative_to_image_plane(point: Point2D, aspect: float) -> Point2D:
    if aspect <= 1:
        return Point2D(
            (2 * point.x - 1) * aspect,
            1 - 2 * point.y
        )
    return Point2D(
        2 * point.x - 1,
        (1 - 2 * point.y) / aspect
    )


def _image_plane_to_relative(point: Point2D, aspect: float) -> Point2D:
    if aspect <= 1:
        return Point2D(
            (point.x + aspect) / (2 * aspect),
            (1 - point.y) / 2
        )
    return Point2D(
        (point.x + 1) / 2,
        (1 / aspect - point.y) / (2 / aspect)
    )


def _to_relative(
    point: Point2D, frame: ImageCoordinateFrame, image_width: float, image_height: float
) -> Point2D:
    if frame is ImageCoordinateFrame.RELATIVE:
        return point
    if frame is ImageCoordinateFrame.IMAGE_PIXEL:
        return Point2D(point.x / image_width, point.y / image_height)
    return _image_plane_to_relative(point, image_width / image_height)


def _from_relative(
    point: Point2D, frame: ImageCoordinateFrame, image_width: float, image_height: float
) -> Point2D:
    if frame is ImageCoordinateFrame.RELATIVE:
        return point
    if frame is ImageCoordinateFrame.IMAGE_PIXEL:
        return Point2D(point.x * image_width, point.y * image_height)
    return _relative_to_image_plane(point, image_width / image_height)


def convert(
    point: Point2D,
    source_frame: ImageCoordinateFrame,
    target_frame: ImageCoordinateFrame,
    image_width: float,
    image_height: float
) -> Point2D:
    """Convert a point between image coordinate frames.

    Args:
        point: Point expressed in source_frame
        source_frame: Frame the point is given in
        target_frame: Frame to express the point in
        image_width: Intrinsic image width in pixels
        image_height: Intrinsic image height in pixels

    Returns:
        The point expressed in target_frame

    Raises:
        ValueError: If the image dimensions are not positive
    """
    if image_width <= 0 or image_height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {image_width}x{image_height}")
    point = Point2D(float(point.x), float(point.y))
    if source_frame is target_frame:
        return point
    relative = _to_relative(point, source_frame, image_width, image_height)
    return _from_relative(relative, target_frame, image_width, image_height)


def image_plane_to_relative(point: Point2D, image_width: float, image_height: float) -> Point2D:
    """Default Image-Plane to Relative primitive used by the frame converter."""
    return convert(
        point,
        ImageCoordinateFrame.IMAGE_PLANE,
        ImageCoordinateFrame.RELATIVE,
        image_width,
        image_height
    )
