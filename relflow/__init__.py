"""Interactive version-bump and release helper for a single repository."""

__version__ = "0.1.0"
