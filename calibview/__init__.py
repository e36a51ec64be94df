"""calibview: layout and coordinate-mapping engine for camera calibration editors.

Fits a photograph into a resizable viewport, converts calibration marks between
the Relative, Image-Plane and Absolute (viewport) frames, and resolves which
vanishing-point, horizon, origin and principal-point controls are shown for the
active calibration mode.
"""

__version__ = "0.3.0"
__author__ = "calibview Team"

from loguru import logger

# Configure clean logger for CLI (default level, can be overridden)
logger.remove()  # Remove default handler


def _format_record(record):
    level = record["level"].name
    colors = {
        "INFO": "<blue>",
        "DEBUG": "<yellow>",
        "WARNING": "<light-red>",
        "ERROR": "<red>"
    }
    color = colors.get(level, "<white>")

    return (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        f"{color}{{level: <8}}</> | "
        "{message}\n"
    )


logger.add(
    lambda msg: print(msg, end=""),
    level="INFO",
    format=_format_record,
    colorize=True,
)


def configure_logging(log_level: str = "info"):
    """Configure logger level based on config."""
    logger.remove()  # Remove all handlers

    logger.add(
        lambda msg: print(msg, end=""),
        level=log_level.upper(),
        format=_format_record,
        colorize=True,
    )


__all__ = ["__version__", "__author__", "logger", "configure_logging"]
