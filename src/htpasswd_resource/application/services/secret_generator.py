"""Random password and resource-id generation."""

from __future__ import annotations

import base64
from typing import Final

from htpasswd_resource.application.ports.random_source_port import RandomSourcePort
from htpasswd_resource.domain.errors import RandomSourceFailureError

SECRET_ENTROPY_BYTES: Final = 32


class SecretGenerator:
    """Produce URL-safe random strings suitable for htpasswd lines and ids."""

    def __init__(self, *, random_source: RandomSourcePort) -> None:
        self._random_source = random_source

    def generate(self) -> str:
        """Return a fresh secret of 256 random bits, base64url encoded without padding."""

        raw = self._random_source.read(SECRET_ENTROPY_BYTES)
        if len(raw) != SECRET_ENTROPY_BYTES:
            raise RandomSourceFailureError(
                f"random source returned {len(raw)} bytes, expected {SECRET_ENTROPY_BYTES}"
            )
        return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")
