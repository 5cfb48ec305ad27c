"""Security utilities for the calculator statistics service."""

from .session_hasher import SessionHasher

__all__ = ["SessionHasher"]
