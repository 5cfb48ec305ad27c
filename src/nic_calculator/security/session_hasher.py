"""Keyed one-way hashing of caller supplied session identifiers."""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
from dataclasses import dataclass, field

DEFAULT_ALGORITHM = "sha512"


@dataclass(frozen=True, slots=True)
class SessionHasher:
    """Derive an opaque session token with HMAC so raw ids are never stored.

    The same identifier always yields the same token for a given key, which
    lets calculations from one browsing session be grouped without keeping
    the identifier itself.
    """

    key: bytes = field(repr=False)
    algorithm: str = DEFAULT_ALGORITHM

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("session hasher key must not be empty")
        if self.algorithm not in hashlib.algorithms_available:
            raise ValueError(f"unsupported algorithm: {self.algorithm}")

    @classmethod
    def from_base64(cls, encoded: str, *, algorithm: str = DEFAULT_ALGORITHM) -> "SessionHasher":
        """Build a hasher from base64 encoded key material."""

        try:
            key = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValueError("session hasher key must be valid base64") from exc
        return cls(key=key, algorithm=algorithm)

    def hash(self, session_id: str) -> str:
        digest = hmac.new(self.key, session_id.encode("utf-8"), self.algorithm).digest()
        return base64.b64encode(digest).decode("ascii")


__all__ = ["SessionHasher"]
