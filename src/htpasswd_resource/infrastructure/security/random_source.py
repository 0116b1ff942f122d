"""Operating-system backed secure random source."""

from __future__ import annotations

import secrets

from htpasswd_resource.application.ports.random_source_port import RandomSourcePort
from htpasswd_resource.domain.errors import RandomSourceFailureError


class OsRandomSource(RandomSourcePort):
    """Random bytes drawn from the `secrets` module (OS CSPRNG)."""

    def read(self, size: int) -> bytes:
        try:
            return secrets.token_bytes(size)
        except (OSError, NotImplementedError) as error:
            raise RandomSourceFailureError(f"secure random source unavailable: {error}") from error
