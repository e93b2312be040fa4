"""Mockup Studio - AI product mockups from an uploaded design."""

__version__ = "0.1.0"
