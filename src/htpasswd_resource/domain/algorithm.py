"""Supported htpasswd hashing algorithms."""

from __future__ import annotations

from enum import StrEnum
from typing import Final

from htpasswd_resource.domain.errors import UnsupportedAlgorithmError


class HtpasswdAlgorithm(StrEnum):
    """Closed set of algorithm tags accepted by the hash engine."""

    BCRYPT = "Bcrypt"


DEFAULT_ALGORITHM: Final = HtpasswdAlgorithm.BCRYPT


def parse_algorithm(tag: str | None) -> HtpasswdAlgorithm:
    """Return the effective algorithm for a declared tag, defaulting when unset."""

    if tag is None:
        return DEFAULT_ALGORITHM
    try:
        return HtpasswdAlgorithm(tag)
    except ValueError as error:
        raise UnsupportedAlgorithmError(algorithm=tag) from error
