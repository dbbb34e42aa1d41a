"""Reading plan and session progress engine."""

__version__ = "0.1.0"
