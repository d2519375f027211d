"""Block chosen applications during scheduled focus hours."""

__version__ = "1.0.0"