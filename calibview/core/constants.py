"""Constants used throughout the calibview system."""


# Default values
class Defaults:
    """Default configuration values."""
    PAD = 20
    IMAGE_OPACITY = 1.0
    RENDER_BACKGROUND = (40, 40, 40)  # BGR


# Reference renderer styling
class RenderStyle:
    """Sizes used by the reference OpenCV renderer."""
    HANDLE_RADIUS = 6
    HANDLE_THICKNESS = 2
    LINE_THICKNESS = 2
    MARKER_RADIUS = 4
    ORIGIN_ARM = 10
    PRINCIPAL_POINT_ARM = 8
