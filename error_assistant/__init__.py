"""Relay that turns notebook errors into Gemini troubleshooting answers."""

__version__ = "1.0.0"
