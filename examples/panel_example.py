#!/usr/bin/env python3
"""Control points panel example.

Loads a scene file, runs one render pass of the panel, prints the resolved
controls and simulates a drag to show the relative-frame update a host
receives.
"""

from pathlib import Path

from calibview.core import ControlPointsCallbacks, ControlPointsPanel, Point2D
from calibview.core.config_spec import load_scene_config


class PrintingCallbacks(ControlPointsCallbacks):
    """Host stand-in that prints every update instead of storing it."""

    def on_origin_drag(self, position):
        print(f"  origin moved to relative ({position.x:.3f}, {position.y:.3f})")

    def on_first_vanishing_point_control_point_drag(self, line_segment_index, point_pair_index, position):
        print(
            f"  first vanishing point, segment {line_segment_index} point {point_pair_index} "
            f"moved to relative ({position.x:.3f}, {position.y:.3f})"
        )


def main():
    scene = load_scene_config(Path(__file__).parent / "scene_2vp.yaml")

    panel = ControlPointsPanel(pad=scene.pad)
    viewport = scene.to_viewport()
    panel.on_resize(viewport.width, viewport.height)

    frame = panel.render(scene.to_props(PrintingCallbacks()))
    print(f"Image placed at {frame.image_aabb.as_tuple()}")
    for control in frame.controls:
        state = "visible" if control.visible else "hidden"
        print(f"  {control.kind.value:<16} {state}, {'editable' if control.enabled else 'locked'}")

    print("Simulated drags:")
    origin = next(c for c in frame.controls if c.kind.value == "origin")
    origin.on_drag(Point2D(400, 300))
    first_vanishing_point = frame.controls[0]
    first_vanishing_point.on_drag(1, 0, Point2D(900, 50))  # outside the image, clamped


if __name__ == '__main__':
    main()
