"""Port for the one-way hash behind htpasswd lines."""

from __future__ import annotations

from typing import Protocol


class PasswordHasherPort(Protocol):
    """Hashing capability for one htpasswd algorithm.

    `hash_password` feeds entry resolution. `verify_password` backs
    `HashEngine.verify_line` for consumers checking a credential against a
    generated document.
    """

    def hash_password(self, password: str) -> str:
        """Return a salted one-way hash; rejected passwords raise `ValueError`."""

    def verify_password(self, *, password: str, password_hash: str) -> bool:
        """Return whether the password matches a hash produced by this algorithm."""
