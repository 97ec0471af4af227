"""Frankly SDK version."""

__version__ = "1.0.0"

USER_AGENT = f"Frankly-SDK/{__version__} (Python)"
