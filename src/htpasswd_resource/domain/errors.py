"""Domain errors raised while resolving htpasswd entries."""

from __future__ import annotations


class UnsupportedAlgorithmError(ValueError):
    """Raised when an algorithm tag is outside the supported enumeration."""

    def __init__(self, *, algorithm: object) -> None:
        super().__init__(f"unsupported htpasswd algorithm: {algorithm!r}")
        self.algorithm = algorithm


class MissingPasswordError(ValueError):
    """Raised when hashing is attempted without a resolved password."""

    def __init__(self, *, username: str) -> None:
        super().__init__(f"no password resolved for user: {username}")
        self.username = username


class RandomSourceFailureError(RuntimeError):
    """Raised when the secure randomness source cannot produce bytes."""


class HashComputationError(RuntimeError):
    """Raised when the hashing library rejects one credential."""

    def __init__(self, *, username: str, reason: str) -> None:
        super().__init__(f"hash computation failed for user {username}: {reason}")
        self.username = username
