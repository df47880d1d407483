"""Chatty AI: a thin relay between a chat UI and a hosted completion service."""

__version__ = "0.1.0"
