"""
Error types for tsi-scaffold.

Filesystem failures are not wrapped: ``OSError`` raised while creating
directories, reading or writing files reaches the caller unchanged.
"""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base exception for all tsi-scaffold errors."""

    def __init__(self, message: str, path: Path | None = None):
        self.message = message
        self.path = path
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with the offending path if available."""
        if self.path is not None:
            return f"{self.path}: {self.message}"
        return self.message


class InvalidArgumentError(ScaffoldError, TypeError):
    """
    Raised when a utility is called with unusable arguments.

    Examples:
    - Empty list of source patterns
    - Missing copy destination

    Always raised before any filesystem access.
    """

    pass


class TemplateError(ScaffoldError):
    """
    Raised when a project cannot be scaffolded from a template.

    Examples:
    - Template directory for the chosen framework does not exist
    - Application name is not a valid package name
    """

    pass


class ConfigError(ScaffoldError):
    """
    Raised when the scaffold configuration cannot be loaded.

    Examples:
    - Malformed tsi-scaffold.toml
    - Unknown vector database or framework identifier
    """

    pass
