"""Control points panel: one render cycle of the calibration editor's image view.

The panel owns only what it measures itself (viewport size) and the image
handle it creates whenever the image URL changes. Everything else is read from
the props of the current pass.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from loguru import logger

from .constants import Defaults
from .coordinates_util import image_plane_to_relative
from .layout import compute_layout_for
from .types import (
    AABB, ControlPointsPanelProps, GlobalSettings, ImagePlaneConverter, ImageState, SolverResult,
    ViewportState
)
from .visibility import Control, ControlContext, resolve_controls

ImageLoader = Callable[[str], Any]


@dataclass(frozen=True)
class Overlay3D:
    """Inputs for the 3D reference overlay drawn beneath the image.

    Drawing is left to the host; the panel only decides whether the overlay
    exists and hands it the placement, viewport size and solver result.
    """
    image_aabb: AABB
    viewport_width: float
    viewport_height: float
    solver_result: SolverResult
    global_settings: GlobalSettings


@dataclass
class RenderFrame:
    """Declarative output of one render pass."""
    viewport: ViewportState
    image_aabb: Optional[AABB]
    image: Any = None
    image_opacity: float = Defaults.IMAGE_OPACITY
    controls: List[Control] = field(default_factory=list)
    overlay_3d: Optional[Overlay3D] = None

    @property
    def is_renderable(self) -> bool:
        return self.image_aabb is not None


class ControlPointsPanel:
    """Ties viewport measurement, image layout and control resolution together."""

    def __init__(
        self,
        pad: float = Defaults.PAD,
        image_loader: Optional[ImageLoader] = None,
        image_plane_converter: ImagePlaneConverter = image_plane_to_relative
    ):
        """Initialize panel.

        Args:
            pad: Margin between viewport edge and image on every side
            image_loader: Creates an image handle from a URL. Called once per
                URL change and never awaited; defaults to keeping the URL itself
            image_plane_converter: Image-Plane to Relative primitive
        """
        self.pad = pad
        self.image_loader = image_loader or (lambda url: url)
        self.image_plane_converter = image_plane_converter
        self.viewport = ViewportState()
        self.image_handle: Any = None
        self._previous_image_url: Optional[str] = None

    def on_resize(self, width: Optional[float], height: Optional[float]) -> None:
        """Record a viewport measurement. Either dimension may be unknown."""
        self.viewport = ViewportState(width=width, height=height)
        logger.debug(f"Viewport resized to {width}x{height}")

    def update_image(self, image_state: ImageState) -> None:
        """Create a fresh image handle when the URL changes."""
        if image_state.url == self._previous_image_url:
            return
        if image_state.url:
            self.image_handle = self.image_loader(image_state.url)
            logger.debug(f"Created image handle for {image_state.url}")
        else:
            self.image_handle = None
        self._previous_image_url = image_state.url

    def image_aabb(self, image_state: ImageState) -> Optional[AABB]:
        """Placement rectangle of the image, or None until it can be laid out."""
        if self.image_handle is None:
            return None
        return compute_layout_for(self.viewport, image_state, self.pad)

    def overlay_3d(self, image_aabb: Optional[AABB], props: ControlPointsPanelProps) -> Optional[Overlay3D]:
        """3D overlay inputs, or None unless layout and viewport size are known."""
        if image_aabb is None or not self.viewport.width or not self.viewport.height:
            return None
        return Overlay3D(
            image_aabb=image_aabb,
            viewport_width=self.viewport.width,
            viewport_height=self.viewport.height,
            solver_result=props.solver_result,
            global_settings=props.global_settings,
        )

    def render(self, props: ControlPointsPanelProps) -> RenderFrame:
        """Run one synchronous render pass.

        Args:
            props: Settings, control point state, solver result and callbacks

        Returns:
            RenderFrame with the image placement, the 3D overlay inputs and the
            controls to draw
        """
        self.update_image(props.image_state)
        aabb = self.image_aabb(props.image_state)
        ctx = ControlContext(
            image_aabb=aabb,
            props=props,
            image_plane_converter=self.image_plane_converter,
        )
        return RenderFrame(
            viewport=self.viewport,
            image_aabb=aabb,
            image=self.image_handle if aabb is not None else None,
            image_opacity=props.global_settings.image_opacity,
            controls=resolve_controls(ctx),
            overlay_3d=self.overlay_3d(aabb, props),
        )
