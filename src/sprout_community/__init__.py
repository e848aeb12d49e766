"""Sprout Community: moderated plant-care forum service."""

__version__ = "0.1.0"
