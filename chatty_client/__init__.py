"""Client side of Chatty AI."""

from chatty_client.surface import ChatEntry, ChatSurface

__all__ = ["ChatEntry", "ChatSurface"]
