"""Twitch chat bot with user-defined reply commands."""

__version__ = "0.1.0"
