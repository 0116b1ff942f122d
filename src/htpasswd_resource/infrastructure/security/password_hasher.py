"""Bcrypt adapter for htpasswd line hashing."""

from __future__ import annotations

from typing import Final

import bcrypt

from htpasswd_resource.application.ports.password_hasher_port import PasswordHasherPort

BCRYPT_ROUNDS: Final = 10
_MIN_ROUNDS: Final = 4
_MAX_ROUNDS: Final = 31


class BcryptPasswordHasher(PasswordHasherPort):
    """Salted bcrypt hashes in the `$2b$<cost>$` form read by Apache and NGINX."""

    def __init__(self, *, rounds: int = BCRYPT_ROUNDS) -> None:
        if not _MIN_ROUNDS <= rounds <= _MAX_ROUNDS:
            raise ValueError(f"bcrypt rounds must be between {_MIN_ROUNDS} and {_MAX_ROUNDS}")
        self._rounds = rounds

    def hash_password(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("ascii")

    def verify_password(self, *, password: str, password_hash: str) -> bool:
        if not password_hash.startswith(("$2a$", "$2b$", "$2y$")):
            return False
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("ascii"))
        except ValueError:
            return False
