"""Scene configuration specifications using Pydantic for validation.

A scene file describes one render pass of the control points panel: viewport
size, image, calibration settings, control point state and (optionally) a
solver result. Scene files are YAML and are read through OmegaConf.
"""

from pathlib import Path
from typing import Any, List, Optional, Tuple, Union

from loguru import logger
from omegaconf import OmegaConf
from pydantic import BaseModel, Field, ValidationError, field_validator

from .constants import Defaults
from .enums import (
    Axis, CalibrationMode, HorizonMode, PrincipalPointMode1VP, PrincipalPointMode2VP, parse_enum
)
from .exceptions import ConfigurationFileError, ConfigurationValidationError
from .types import (
    CalibrationSettings1VP, CalibrationSettings2VP, CalibrationSettingsBase, ControlPointPair,
    ControlPointsCallbacks, ControlPointsPanelProps, ControlPointsState1VP, ControlPointsState2VP,
    ControlPointsStateBase, GlobalSettings, ImageState, Point2D, SolverResult,
    VanishingPointControlState, ViewportState
)

PointSpec = Tuple[float, float]
PairSpec = Tuple[PointSpec, PointSpec]
VanishingPointSpec = Tuple[PairSpec, PairSpec]


def _point(value: PointSpec) -> Point2D:
    return Point2D(float(value[0]), float(value[1]))


def _pair(value: PairSpec) -> ControlPointPair:
    return ControlPointPair(_point(value[0]), _point(value[1]))


def _vanishing_point(value: VanishingPointSpec) -> VanishingPointControlState:
    return VanishingPointControlState((_pair(value[0]), _pair(value[1])))


def _coerce_point(value: Any) -> Any:
    """Accept {'x': .., 'y': ..} mappings as well as [x, y] sequences."""
    if isinstance(value, dict) and set(value) == {'x', 'y'}:
        return (value['x'], value['y'])
    return value


def _coerce_pair(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return [_coerce_point(point) for point in value]
    return value


class ViewportSpec(BaseModel):
    """Measured viewport size; either side may be unknown."""
    width: Optional[float] = Field(None, description="Viewport width in pixels")
    height: Optional[float] = Field(None, description="Viewport height in pixels")


class ImageSpec(BaseModel):
    """Image URL and intrinsic size."""
    url: Optional[str] = Field(None, description="Image location")
    width: Optional[float] = Field(None, description="Intrinsic width in pixels")
    height: Optional[float] = Field(None, description="Intrinsic height in pixels")


class SettingsSpec(BaseModel):
    """Calibration and global settings."""
    calibration_mode: CalibrationMode = Field(CalibrationMode.ONE_VANISHING_POINT)
    image_opacity: float = Field(Defaults.IMAGE_OPACITY, ge=0.0, le=1.0)
    first_vanishing_point_axis: Axis = Field(Axis.POSITIVE_X)
    second_vanishing_point_axis: Axis = Field(Axis.POSITIVE_Y)
    principal_point_mode_1vp: PrincipalPointMode1VP = Field(PrincipalPointMode1VP.DEFAULT)
    horizon_mode: HorizonMode = Field(HorizonMode.DEFAULT)
    principal_point_mode_2vp: PrincipalPointMode2VP = Field(PrincipalPointMode2VP.DEFAULT)

    @field_validator('calibration_mode', mode='before')
    @classmethod
    def parse_calibration_mode(cls, v):
        return parse_enum(CalibrationMode, v)

    @field_validator('first_vanishing_point_axis', 'second_vanishing_point_axis', mode='before')
    @classmethod
    def parse_axis(cls, v):
        return parse_enum(Axis, v)

    @field_validator('principal_point_mode_1vp', mode='before')
    @classmethod
    def parse_principal_point_mode_1vp(cls, v):
        return parse_enum(PrincipalPointMode1VP, v)

    @field_validator('horizon_mode', mode='before')
    @classmethod
    def parse_horizon_mode(cls, v):
        return parse_enum(HorizonMode, v)

    @field_validator('principal_point_mode_2vp', mode='before')
    @classmethod
    def parse_principal_point_mode_2vp(cls, v):
        return parse_enum(PrincipalPointMode2VP, v)


class ControlPointsSpec(BaseModel):
    """Relative-frame control point state; omitted entries use defaults."""
    principal_point: Optional[PointSpec] = None
    origin: Optional[PointSpec] = None
    first_vanishing_point: Optional[VanishingPointSpec] = None
    horizon: Optional[PairSpec] = None
    second_vanishing_point: Optional[VanishingPointSpec] = None
    third_vanishing_point: Optional[VanishingPointSpec] = None

    @field_validator('principal_point', 'origin', mode='before')
    @classmethod
    def parse_point(cls, v):
        return _coerce_point(v)

    @field_validator('horizon', mode='before')
    @classmethod
    def parse_pair(cls, v):
        return _coerce_pair(v)

    @field_validator('first_vanishing_point', 'second_vanishing_point', 'third_vanishing_point', mode='before')
    @classmethod
    def parse_vanishing_point(cls, v):
        if isinstance(v, (list, tuple)):
            return [_coerce_pair(pair) for pair in v]
        return v


class SolverResultSpec(BaseModel):
    """Solver output in the image plane frame."""
    vanishing_points: Optional[List[PointSpec]] = None
    vanishing_point_axes: Optional[List[Axis]] = None
    principal_point: Optional[PointSpec] = None

    @field_validator('vanishing_points', mode='before')
    @classmethod
    def parse_vanishing_points(cls, v):
        if v is None:
            return v
        return [_coerce_point(p) for p in v]

    @field_validator('vanishing_point_axes', mode='before')
    @classmethod
    def parse_axes(cls, v):
        if v is None:
            return v
        return [parse_enum(Axis, a) for a in v]

    @field_validator('principal_point', mode='before')
    @classmethod
    def parse_principal_point(cls, v):
        return _coerce_point(v)


class SceneConfig(BaseModel):
    """Complete scene: everything one render pass reads."""
    pad: float = Field(Defaults.PAD, ge=0, description="Margin around the image")
    viewport: ViewportSpec = Field(default_factory=ViewportSpec)
    image: ImageSpec = Field(default_factory=ImageSpec)
    settings: SettingsSpec = Field(default_factory=SettingsSpec)
    control_points: ControlPointsSpec = Field(default_factory=ControlPointsSpec)
    solver_result: SolverResultSpec = Field(default_factory=SolverResultSpec)

    def to_viewport(self) -> ViewportState:
        return ViewportState(width=self.viewport.width, height=self.viewport.height)

    def to_image_state(self) -> ImageState:
        return ImageState(url=self.image.url, width=self.image.width, height=self.image.height)

    def to_props(self, callbacks: Optional[ControlPointsCallbacks] = None) -> ControlPointsPanelProps:
        """Build panel props, filling unspecified control points with defaults."""
        s = self.settings
        cp = self.control_points
        base_defaults = ControlPointsStateBase()
        defaults_1vp = ControlPointsState1VP()
        defaults_2vp = ControlPointsState2VP()
        solver = self.solver_result

        return ControlPointsPanelProps(
            global_settings=GlobalSettings(
                calibration_mode=s.calibration_mode,
                image_opacity=s.image_opacity
            ),
            image_state=self.to_image_state(),
            callbacks=callbacks or ControlPointsCallbacks(),
            calibration_settings_base=CalibrationSettingsBase(
                first_vanishing_point_axis=s.first_vanishing_point_axis,
                second_vanishing_point_axis=s.second_vanishing_point_axis
            ),
            calibration_settings_1vp=CalibrationSettings1VP(
                principal_point_mode=s.principal_point_mode_1vp,
                horizon_mode=s.horizon_mode
            ),
            calibration_settings_2vp=CalibrationSettings2VP(
                principal_point_mode=s.principal_point_mode_2vp
            ),
            control_points_state_base=ControlPointsStateBase(
                principal_point=_point(cp.principal_point) if cp.principal_point else base_defaults.principal_point,
                origin=_point(cp.origin) if cp.origin else base_defaults.origin,
                first_vanishing_point=(
                    _vanishing_point(cp.first_vanishing_point)
                    if cp.first_vanishing_point else base_defaults.first_vanishing_point
                ),
            ),
            control_points_state_1vp=ControlPointsState1VP(
                horizon=_pair(cp.horizon) if cp.horizon else defaults_1vp.horizon
            ),
            control_points_state_2vp=ControlPointsState2VP(
                second_vanishing_point=(
                    _vanishing_point(cp.second_vanishing_point)
                    if cp.second_vanishing_point else defaults_2vp.second_vanishing_point
                ),
                third_vanishing_point=(
                    _vanishing_point(cp.third_vanishing_point)
                    if cp.third_vanishing_point else defaults_2vp.third_vanishing_point
                ),
            ),
            solver_result=SolverResult(
                vanishing_points=(
                    [_point(p) for p in solver.vanishing_points]
                    if solver.vanishing_points is not None else None
                ),
                vanishing_point_axes=solver.vanishing_point_axes,
                principal_point=_point(solver.principal_point) if solver.principal_point else None,
            ),
        )


def _format_validation_errors(error: ValidationError) -> List[str]:
    lines = []
    for e in error.errors():
        location = '.'.join(str(part) for part in e['loc']) or '<root>'
        lines.append(f"{location}: {e['msg']}")
    return lines


def parse_scene_config(data: Union[dict, Any], source: Optional[str] = None) -> SceneConfig:
    """Validate a plain mapping as a scene configuration.

    Raises:
        ConfigurationValidationError: If any field is invalid
    """
    try:
        return SceneConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationValidationError(_format_validation_errors(e), source) from e


def load_scene_config(config_path: Union[str, Path]) -> SceneConfig:
    """Load and validate a YAML scene file.

    Args:
        config_path: Path to the scene file

    Returns:
        Validated SceneConfig

    Raises:
        ConfigurationFileError: If the file is missing or not a YAML mapping
        ConfigurationValidationError: If the content fails validation
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise ConfigurationFileError(str(config_path), "file does not exist")

    try:
        raw = OmegaConf.load(config_path)
    except Exception as e:
        raise ConfigurationFileError(str(config_path), str(e)) from e

    data = OmegaConf.to_container(raw, resolve=True)
    if not isinstance(data, dict):
        raise ConfigurationFileError(str(config_path), "top level must be a mapping")

    scene = parse_scene_config(data, str(config_path))
    logger.debug(f"Loaded scene configuration from {config_path}")
    return scene
