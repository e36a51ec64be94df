"""Reference drawing collaborators for resolved controls."""

from .control_overlay import create_canvas, draw_image, render_controls

__all__ = ["create_canvas", "draw_image", "render_controls"]
