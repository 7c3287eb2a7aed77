"""Roster and event management API for a professional wrestling promotion."""

__version__ = "0.1.0"
