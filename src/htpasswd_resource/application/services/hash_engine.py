"""Algorithm dispatch for htpasswd line hashing."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping

from htpasswd_resource.application.ports.password_hasher_port import PasswordHasherPort
from htpasswd_resource.domain.algorithm import HtpasswdAlgorithm
from htpasswd_resource.domain.errors import (
    HashComputationError,
    MissingPasswordError,
    UnsupportedAlgorithmError,
)


class HashEngine:
    """Compute `username:hash` lines with one hasher per supported algorithm."""

    def __init__(
        self,
        *,
        hashers: Mapping[HtpasswdAlgorithm, PasswordHasherPort],
        max_concurrency: int = 4,
    ) -> None:
        missing = [algorithm for algorithm in HtpasswdAlgorithm if algorithm not in hashers]
        if missing:
            raise ValueError(
                "hash engine requires a hasher for every algorithm, missing: "
                + ", ".join(algorithm.value for algorithm in missing)
            )
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be positive")
        self._hashers = dict(hashers)
        self._max_concurrency = max_concurrency

    def open_slots(self) -> asyncio.Semaphore:
        """Return a fresh concurrency limiter for one batch of hash calls.

        Each batch owns its limiter so it is bound to the running event loop only.
        """

        return asyncio.Semaphore(self._max_concurrency)

    def hasher_for(self, algorithm: HtpasswdAlgorithm) -> PasswordHasherPort:
        """Return the hasher registered for one algorithm tag."""

        if not isinstance(algorithm, HtpasswdAlgorithm):
            raise UnsupportedAlgorithmError(algorithm=algorithm)
        return self._hashers[algorithm]

    async def hash(
        self,
        *,
        username: str,
        password: str | None,
        algorithm: HtpasswdAlgorithm,
        slots: asyncio.Semaphore | None = None,
    ) -> str:
        """Return the htpasswd line for one credential.

        Hashing runs in a worker thread so independent entries can be computed
        in parallel; calls sharing `slots` run at most `max_concurrency` at once.
        """

        hasher = self.hasher_for(algorithm)
        if not password:
            raise MissingPasswordError(username=username)

        limiter = slots if slots is not None else self.open_slots()
        async with limiter:
            try:
                password_hash = await asyncio.to_thread(hasher.hash_password, password)
            except ValueError as error:
                raise HashComputationError(username=username, reason=str(error)) from error
        return f"{username}:{password_hash}"

    def verify_line(self, *, line: str, password: str, algorithm: HtpasswdAlgorithm) -> bool:
        """Return whether `password` matches one `username:hash` document line."""

        hasher = self.hasher_for(algorithm)
        _, separator, password_hash = line.partition(":")
        if not separator:
            return False
        return hasher.verify_password(password=password, password_hash=password_hash)
