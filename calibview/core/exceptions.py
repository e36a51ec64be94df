"""Exception hierarchy for calibview.

Layout, frame conversion and control resolution never raise: missing inputs
resolve to a "not yet renderable" state. Exceptions belong to the boundary
where scene files are read and previews are written.
"""

from typing import Any, Dict, List, Optional


class CalibviewError(Exception):
    """Base exception for all calibview errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize CalibviewError with message and optional details.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return formatted error message with details if available."""
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


# =============================================================================
# CONFIGURATION EXCEPTIONS
# =============================================================================

class ConfigurationError(CalibviewError):
    """Base exception for configuration-related errors."""
    pass


class ConfigurationFileError(ConfigurationError):
    """Raised when a scene file cannot be found or parsed."""

    def __init__(self, file_path: str, reason: str):
        super().__init__(f"Cannot read scene file '{file_path}'", {
            "file_path": file_path,
            "reason": reason
        })


class ConfigurationValidationError(ConfigurationError):
    """Raised when scene configuration validation fails."""

    def __init__(self, errors: List[str], file_path: Optional[str] = None):
        """Initialize with validation details.

        Args:
            errors: One line per invalid field, 'location: problem'
            file_path: Scene file the configuration came from, if any
        """
        message = f"Invalid scene configuration: {'; '.join(errors)}"
        details: Dict[str, Any] = {"error_count": len(errors)}
        if file_path:
            details["file_path"] = file_path
        super().__init__(message, details)
        self.errors = errors


# =============================================================================
# RENDERING EXCEPTIONS
# =============================================================================

class RenderError(CalibviewError):
    """Raised when a preview image cannot be produced or written."""
    pass
