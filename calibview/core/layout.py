"""Aspect-preserving placement of the image inside the viewport."""

from typing import Optional

from loguru import logger

from .constants import Defaults
from .types import AABB, ImageState, ViewportState

DEFAULT_PAD = Defaults.PAD


def _is_positive(value: Optional[float]) -> bool:
    return value is not None and value > 0


def compute_image_aabb(
    viewport_width: Optional[float],
    viewport_height: Optional[float],
    image_width: Optional[float],
    image_height: Optional[float],
    pad: float = DEFAULT_PAD
) -> Optional[AABB]:
    """Fit the image into the padded viewport without distorting it.

    The image fills the constrained axis exactly and is centered on the other.
    A single scale factor is used for both axes.

    Args:
        viewport_width: Measured viewport width, or None if not yet measured
        viewport_height: Measured viewport height, or None if not yet measured
        image_width: Intrinsic image width, or None if unknown
        image_height: Intrinsic image height, or None if unknown
        pad: Margin applied on all four sides of the viewport

    Returns:
        Placement rectangle in viewport pixels, or None while any dimension is
        missing, non-positive, or the padded area is empty
    """
    dims = (viewport_width, viewport_height, image_width, image_height)
    if not all(_is_positive(d) for d in dims):
        return None

    available_width = viewport_width - 2 * pad
    available_height = viewport_height - 2 * pad
    if available_width <= 0 or available_height <= 0:
        return None

    image_aspect = image_width / image_height
    available_aspect = available_width / available_height
    x_offset = pad
    y_offset = pad
    if image_aspect > available_aspect:
        # wide image
        scale = available_width / image_width
        y_offset = pad + 0.5 * (available_height - scale * image_height)
    else:
        # tall image
        scale = available_height / image_height
        x_offset = pad + 0.5 * (available_width - scale * image_width)

    return AABB(
        x_min=x_offset,
        y_min=y_offset,
        x_max=x_offset + scale * image_width,
        y_max=y_offset + scale * image_height
    )


def compute_layout_for(
    viewport: ViewportState,
    image: ImageState,
    pad: float = DEFAULT_PAD
) -> Optional[AABB]:
    """Compute the image placement from viewport and image state objects."""
    aabb = compute_image_aabb(viewport.width, viewport.height, image.width, image.height, pad)
    if aabb is None:
        logger.debug(
            f"No layout yet: viewport={viewport.width}x{viewport.height} "
            f"image={image.width}x{image.height}"
        )
    return aabb
