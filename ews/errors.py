from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised before any computation when an analysis is set up incorrectly."""


class WindowSizeError(ConfigurationError):
    """Output buffer does not match the number of windows."""
