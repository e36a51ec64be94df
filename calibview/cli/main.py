"""
calibview CLI - inspect image layout and resolved calibration controls.

This module provides the command-line interface for calibview, supporting
layout computation, control resolution for scene files, preview rendering and
scene validation.
"""

import json
import sys
from dataclasses import fields, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import click
import cv2
from loguru import logger

from .. import __version__, configure_logging
from ..core.config_spec import SceneConfig, load_scene_config
from ..core.exceptions import CalibviewError, RenderError
from ..core.layout import DEFAULT_PAD, compute_image_aabb
from ..core.panel import ControlPointsPanel, RenderFrame
from ..core.types import ImageState
from ..visualizers.control_overlay import create_canvas, render_controls


def _jsonable(value: Any) -> Any:
    """Convert control descriptions to JSON-friendly structures."""
    if isinstance(value, Enum):
        return value.value
    if hasattr(value, '_asdict'):
        return {k: _jsonable(v) for k, v in value._asdict().items()}
    if is_dataclass(value):
        return {
            f.name: _jsonable(getattr(value, f.name))
            for f in fields(value)
            if f.name != 'on_drag'
        }
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


def _render_scene(scene: SceneConfig, image_loader=None, image_state: Optional[ImageState] = None) -> RenderFrame:
    panel = ControlPointsPanel(pad=scene.pad, image_loader=image_loader)
    viewport = scene.to_viewport()
    panel.on_resize(viewport.width, viewport.height)
    props = scene.to_props()
    if image_state is not None:
        props.image_state = image_state
    return panel.render(props)


def resolve_scene_path(scene_path: Path, path: Optional[str]) -> Optional[Path]:
    """Resolve a path named in a scene file.

    Relative paths are taken relative to the directory holding the scene file,
    so a scene can name a sibling image regardless of the working directory.

    Args:
        scene_path: Path to the scene file
        path: Path as written in the scene, or None

    Returns:
        Resolved path, or None if the scene names no path
    """
    if not path:
        return None
    resolved = Path(path).expanduser()
    if not resolved.is_absolute():
        resolved = scene_path.parent.absolute() / resolved
    return resolved


def _point_str(point) -> str:
    return f"({point.x:.1f}, {point.y:.1f})"


def _describe_control(control) -> str:
    flags = []
    if not control.visible:
        flags.append("hidden")
    if not control.enabled:
        flags.append("locked")
    flag_str = f" [{', '.join(flags)}]" if flags else ""
    if hasattr(control, 'position'):
        return f"{control.kind.value}{flag_str} at {_point_str(control.position)}"
    marker = getattr(control, 'vanishing_point', None)
    marker_str = _point_str(marker) if marker is not None else "none"
    return f"{control.kind.value}{flag_str} vanishing point {marker_str}"


@click.group()
@click.version_option(version=__version__, prog_name='calibview')
@click.option('--log-level', default='info',
              type=click.Choice(['debug', 'info', 'warning', 'error'], case_sensitive=False),
              help='Logging verbosity')
def cli(log_level: str):
    """calibview - image layout and control resolution for calibration editors.

    \b
    Common Commands:
      calibview layout 800 600 1600 800        - Place an image in a viewport
      calibview controls scene.yaml            - List resolved controls
      calibview render scene.yaml out.png      - Draw a preview of the scene
      calibview validate scene.yaml            - Validate a scene file

    Use 'calibview COMMAND --help' for more information on each command.
    """
    configure_logging(log_level)


@cli.command()
@click.argument('viewport_width', type=float)
@click.argument('viewport_height', type=float)
@click.argument('image_width', type=float)
@click.argument('image_height', type=float)
@click.option('--pad', type=float, default=DEFAULT_PAD, show_default=True,
              help='Margin around the image in viewport pixels')
def layout(viewport_width: float, viewport_height: float, image_width: float, image_height: float, pad: float):
    """Compute where an image lands inside a viewport.

    \b
    Example:
      calibview layout 800 600 1600 800 --pad 20
    """
    aabb = compute_image_aabb(viewport_width, viewport_height, image_width, image_height, pad)
    if aabb is None:
        click.echo("No layout: dimensions must be positive and larger than the padding")
        return
    click.echo(
        f"AABB: ({aabb.x_min:g}, {aabb.y_min:g}) - ({aabb.x_max:g}, {aabb.y_max:g}) "
        f"size {aabb.width:g}x{aabb.height:g}"
    )


@cli.command()
@click.argument('scene_path', type=click.Path(exists=True, path_type=Path))
@click.option('--format', '-f', 'output_format',
              type=click.Choice(['table', 'json']),
              default='table',
              help='Output format for resolved controls')
def controls(scene_path: Path, output_format: str):
    """Resolve the controls a scene file would display.

    SCENE_PATH: Path to YAML scene file
    """
    try:
        scene = load_scene_config(scene_path)
        frame = _render_scene(scene)
    except CalibviewError as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)

    if output_format == 'json':
        output: Dict[str, Any] = {
            'image_aabb': _jsonable(frame.image_aabb) if frame.image_aabb else None,
            'controls': [_jsonable(c) for c in frame.controls],
        }
        click.echo(json.dumps(output, indent=2))
        return

    if not frame.is_renderable:
        click.echo("No layout yet: viewport or image size unknown")
        return

    aabb = frame.image_aabb
    click.echo(f"Image: ({aabb.x_min:g}, {aabb.y_min:g}) - ({aabb.x_max:g}, {aabb.y_max:g})")
    click.echo("-" * 40)
    for control in frame.controls:
        click.echo(f"  • {_describe_control(control)}")


@cli.command()
@click.argument('scene_path', type=click.Path(exists=True, path_type=Path))
@click.argument('output_path', type=click.Path(path_type=Path))
@click.option('--image', 'image_path', type=click.Path(exists=True, path_type=Path),
              help='Image file to draw (defaults to the scene image url)')
def render(scene_path: Path, output_path: Path, image_path: Optional[Path]):
    """Draw a preview of a scene with the reference OpenCV renderer.

    \b
    SCENE_PATH: Path to YAML scene file
    OUTPUT_PATH: Where to write the PNG preview
    """
    try:
        scene = load_scene_config(scene_path)
        viewport = scene.to_viewport()
        if not viewport.width or not viewport.height:
            raise RenderError("Viewport size is required to render", {"scene": str(scene_path)})

        image = None
        source = image_path or resolve_scene_path(scene_path, scene.image.url)
        if source is not None:
            image = cv2.imread(str(source), cv2.IMREAD_COLOR)
            if image is None:
                raise RenderError("Cannot read image", {"path": str(source)})

        image_state = None
        if image is not None:
            height, width = image.shape[:2]
            image_state = ImageState(
                url=str(source),
                width=scene.image.width or width,
                height=scene.image.height or height,
            )

        frame = _render_scene(scene, image_loader=lambda url: image, image_state=image_state)
        canvas = create_canvas(int(viewport.width), int(viewport.height))
        preview = render_controls(canvas, frame.controls, frame.image_aabb, frame.image, frame.image_opacity)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        if not cv2.imwrite(str(output_path), preview):
            raise RenderError("Cannot write preview", {"path": str(output_path)})
    except CalibviewError as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)

    logger.info(f"Preview written to {output_path}")
    click.echo(f"✅ Preview saved to: {output_path}")


@cli.command()
@click.argument('scene_path', type=click.Path(exists=True, path_type=Path))
def validate(scene_path: Path):
    """Validate a scene file.

    SCENE_PATH: Path to YAML scene file
    """
    try:
        scene = load_scene_config(scene_path)
    except CalibviewError as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)

    click.echo(f"✅ Scene is valid: {scene_path}")
    click.echo(f"  Calibration mode: {scene.settings.calibration_mode.value}")
    if not scene.image.url:
        click.echo("  ⚠️  Image cannot be laid out yet (no image url)")
    elif not _render_scene(scene).is_renderable:
        click.echo("  ⚠️  Image cannot be laid out yet (missing or non-positive size)")


def main():
    """Entry point for the calibview console script."""
    cli()


if __name__ == '__main__':
    main()
