"""Terminal viewer for paginated listing feeds."""

__version__ = "0.1.0"
