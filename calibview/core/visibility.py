"""Mode-dependent resolution of the controls drawn over the image.

The resolver turns one render-cycle snapshot (layout, settings, control point
state, solver result) into a declarative list of controls. Calibration mode
selects a builder from `MODE_BUILDERS`; the principal point mode decides
visibility, drag state and position source of the principal point and whether
the third vanishing point control exists at all.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Union

from loguru import logger

from .coordinate_transform import relative_to_absolute, try_image_plane_to_absolute
from .coordinates_util import image_plane_to_relative
from .enums import (
    CalibrationMode, ControlKind, HorizonMode, PrincipalPointMode1VP, PrincipalPointMode2VP
)
from .palette import Palette
from .projector import make_drag_handler, project_to_absolute
from .types import (
    AABB, Color, ControlPointPair, ControlPointsPanelProps, ImagePlaneConverter,
    Point2D, VanishingPointControlState
)

DragHandler = Callable[..., None]


# =============================================================================
# CONTROL DESCRIPTIONS
# =============================================================================

@dataclass(frozen=True)
class VanishingPointControl:
    """Two line segments plus the solved vanishing point marker."""
    index: int
    color: Color
    vanishing_point_color: Color
    control_state: VanishingPointControlState
    vanishing_point: Optional[Point2D]
    on_drag: DragHandler = field(compare=False, repr=False)
    visible: bool = True
    enabled: bool = True
    kind: ControlKind = field(default=ControlKind.VANISHING_POINT, init=False)


@dataclass(frozen=True)
class HorizonControl:
    """Horizon line in one-vanishing-point mode."""
    point_pair: ControlPointPair
    vanishing_point: Optional[Point2D]
    vanishing_point_color: Color
    enabled: bool
    on_drag: DragHandler = field(compare=False, repr=False)
    visible: bool = True
    kind: ControlKind = field(default=ControlKind.HORIZON, init=False)


@dataclass(frozen=True)
class PrincipalPointControl:
    position: Point2D
    visible: bool
    enabled: bool
    on_drag: DragHandler = field(compare=False, repr=False)
    kind: ControlKind = field(default=ControlKind.PRINCIPAL_POINT, init=False)


@dataclass(frozen=True)
class OriginControl:
    position: Point2D
    on_drag: DragHandler = field(compare=False, repr=False)
    visible: bool = True
    enabled: bool = True
    kind: ControlKind = field(default=ControlKind.ORIGIN, init=False)


Control = Union[VanishingPointControl, HorizonControl, PrincipalPointControl, OriginControl]


@dataclass(frozen=True)
class ControlContext:
    """Inputs of one resolution pass."""
    image_aabb: Optional[AABB]
    props: ControlPointsPanelProps
    image_plane_converter: ImagePlaneConverter = image_plane_to_relative

    @property
    def image_width(self) -> Optional[float]:
        return self.props.image_state.width

    @property
    def image_height(self) -> Optional[float]:
        return self.props.image_state.height


# =============================================================================
# SOLVER DERIVED POSITIONS AND COLORS
# =============================================================================

def image_plane_to_absolute_or_none(point: Point2D, ctx: ControlContext) -> Optional[Point2D]:
    return try_image_plane_to_absolute(
        point, ctx.image_aabb, ctx.image_width, ctx.image_height, ctx.image_plane_converter
    )


def vanishing_point_absolute(index: int, ctx: ControlContext) -> Optional[Point2D]:
    """Absolute position of a solved vanishing point, or None if unavailable."""
    vanishing_points = ctx.props.solver_result.vanishing_points
    if not vanishing_points or index >= len(vanishing_points):
        return None
    image_plane_position = vanishing_points[index]
    if image_plane_position is None:
        return None
    return image_plane_to_absolute_or_none(image_plane_position, ctx)


def vanishing_point_color(index: int, ctx: ControlContext) -> Optional[Color]:
    """Color of the axis the solver attributed to a vanishing point, if solved."""
    axes = ctx.props.solver_result.vanishing_point_axes
    if not axes or index >= len(axes) or axes[index] is None:
        return None
    return Palette.color_for_axis(axes[index])


def _marker_color(index: int, ctx: ControlContext, fallback: Color) -> Color:
    solved = vanishing_point_color(index, ctx)
    return fallback if solved is None else solved


# =============================================================================
# CONTROL BUILDERS
# =============================================================================

def _vanishing_point_control(
    index: int,
    color: Color,
    state: VanishingPointControlState,
    report: DragHandler,
    ctx: ControlContext
) -> VanishingPointControl:
    return VanishingPointControl(
        index=index,
        color=color,
        vanishing_point_color=_marker_color(index, ctx, color),
        control_state=project_to_absolute(state, ctx.image_aabb),
        vanishing_point=vanishing_point_absolute(index, ctx),
        on_drag=make_drag_handler(ctx.image_aabb, report),
    )


def _common_controls(ctx: ControlContext) -> List[Control]:
    props = ctx.props
    return [
        _vanishing_point_control(
            0,
            Palette.color_for_axis(props.calibration_settings_base.first_vanishing_point_axis),
            props.control_points_state_base.first_vanishing_point,
            props.callbacks.on_first_vanishing_point_control_point_drag,
            ctx,
        ),
        OriginControl(
            position=relative_to_absolute(props.control_points_state_base.origin, ctx.image_aabb),
            on_drag=make_drag_handler(ctx.image_aabb, props.callbacks.on_origin_drag),
        ),
    ]


def _one_vanishing_point_controls(ctx: ControlContext) -> List[Control]:
    props = ctx.props
    settings = props.calibration_settings_1vp
    is_manual = settings.principal_point_mode == PrincipalPointMode1VP.MANUAL
    second_axis_color = Palette.color_for_axis(
        props.calibration_settings_base.second_vanishing_point_axis
    )
    return [
        HorizonControl(
            point_pair=project_to_absolute(props.control_points_state_1vp.horizon, ctx.image_aabb),
            vanishing_point=vanishing_point_absolute(1, ctx),
            vanishing_point_color=_marker_color(1, ctx, second_axis_color),
            enabled=settings.horizon_mode == HorizonMode.MANUAL,
            on_drag=make_drag_handler(ctx.image_aabb, props.callbacks.on_horizon_drag),
        ),
        PrincipalPointControl(
            position=relative_to_absolute(
                props.control_points_state_base.principal_point, ctx.image_aabb
            ),
            visible=is_manual,
            enabled=is_manual,
            on_drag=make_drag_handler(ctx.image_aabb, props.callbacks.on_principal_point_drag),
        ),
    ]


def _principal_point_2vp(ctx: ControlContext) -> Optional[PrincipalPointControl]:
    props = ctx.props
    mode = props.calibration_settings_2vp.principal_point_mode

    position: Optional[Point2D] = None
    if mode == PrincipalPointMode2VP.FROM_THIRD_VANISHING_POINT:
        solved = props.solver_result.principal_point
        if solved is not None:
            position = image_plane_to_absolute_or_none(solved, ctx)
    elif mode == PrincipalPointMode2VP.MANUAL:
        position = relative_to_absolute(
            props.control_points_state_base.principal_point, ctx.image_aabb
        )

    if position is None:
        return None

    return PrincipalPointControl(
        position=position,
        visible=mode != PrincipalPointMode2VP.DEFAULT,
        enabled=mode == PrincipalPointMode2VP.MANUAL,
        on_drag=make_drag_handler(ctx.image_aabb, props.callbacks.on_principal_point_drag),
    )


def _two_vanishing_point_controls(ctx: ControlContext) -> List[Control]:
    props = ctx.props
    state = props.control_points_state_2vp
    callbacks = props.callbacks

    controls: List[Control] = [
        _vanishing_point_control(
            1,
            Palette.color_for_axis(props.calibration_settings_base.second_vanishing_point_axis),
            state.second_vanishing_point,
            callbacks.on_second_vanishing_point_control_point_drag,
            ctx,
        )
    ]

    if props.calibration_settings_2vp.principal_point_mode == PrincipalPointMode2VP.FROM_THIRD_VANISHING_POINT:
        controls.append(_vanishing_point_control(
            2,
            Palette.orange,
            state.third_vanishing_point,
            callbacks.on_third_vanishing_point_control_point_drag,
            ctx,
        ))

    principal_point = _principal_point_2vp(ctx)
    if principal_point is not None:
        controls.append(principal_point)
    else:
        logger.debug("Principal point control omitted: no position in current mode")

    return controls


MODE_BUILDERS: Dict[CalibrationMode, Callable[[ControlContext], List[Control]]] = {
    CalibrationMode.ONE_VANISHING_POINT: _one_vanishing_point_controls,
    CalibrationMode.TWO_VANISHING_POINT: _two_vanishing_point_controls,
}


def resolve_controls(ctx: ControlContext) -> List[Control]:
    """Resolve every control to draw for the current modes.

    Args:
        ctx: Layout, props and image plane converter for this pass

    Returns:
        Common controls followed by the calibration mode's controls, or an
        empty list while there is no layout
    """
    if ctx.image_aabb is None:
        logger.debug("No image layout; nothing to resolve")
        return []

    controls = _common_controls(ctx)
    controls.extend(MODE_BUILDERS[ctx.props.global_settings.calibration_mode](ctx))
    return controls


def visible_controls(controls: List[Control]) -> List[Control]:
    """Controls a drawing collaborator should actually draw."""
    return [c for c in controls if c.visible]
