"""Port for cryptographically secure random bytes."""

from __future__ import annotations

from typing import Protocol


class RandomSourcePort(Protocol):
    """Secure randomness contract."""

    def read(self, size: int) -> bytes:
        """Return exactly `size` random bytes."""
