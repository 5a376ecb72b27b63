"""taskctl: ownership-scoped task management."""

__version__ = "0.1.0"
