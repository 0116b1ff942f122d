"""Entry records shared by resolution, diffing, and composition."""

from __future__ import annotations

from dataclasses import dataclass

from htpasswd_resource.domain.algorithm import HtpasswdAlgorithm


@dataclass(frozen=True)
class PasswordPresent:
    """Password declared explicitly, possibly as an empty string."""

    value: str


@dataclass(frozen=True)
class PasswordAbsent:
    """Password left unset; one is generated during resolution."""


DeclaredPassword = PasswordPresent | PasswordAbsent


@dataclass(frozen=True)
class Entry:
    """Desired username/password declaration."""

    username: str
    password: DeclaredPassword = PasswordAbsent()


@dataclass(frozen=True)
class HtpasswdInputs:
    """Desired resource inputs as declared by the host."""

    entries: tuple[Entry, ...]
    algorithm: str | None = None


@dataclass(frozen=True)
class HashedEntry:
    """Entry paired with the password that was used and its htpasswd line."""

    original_entry: Entry
    resolved_password: str
    hash: str


@dataclass(frozen=True)
class ProviderState:
    """Snapshot of one resolution, round-tripped into the next diff/update."""

    algorithm: HtpasswdAlgorithm
    hashed_entries: tuple[HashedEntry, ...]


@dataclass(frozen=True)
class PlaintextEntry:
    """Username with the password that ended up in the document."""

    username: str
    password: str


@dataclass(frozen=True)
class HtpasswdOutputs:
    """Resource outputs handed back to the host."""

    result: str
    plaintext_entries: tuple[PlaintextEntry, ...]
    state: ProviderState


def passwords_equal(left: DeclaredPassword, right: DeclaredPassword) -> bool:
    """Compare declared passwords, keeping unset distinct from empty."""

    if isinstance(left, PasswordAbsent) or isinstance(right, PasswordAbsent):
        return isinstance(left, PasswordAbsent) and isinstance(right, PasswordAbsent)
    return left.value == right.value


def entries_equal(left: Entry, right: Entry) -> bool:
    """Field-wise equality for desired entries."""

    return left.username == right.username and passwords_equal(left.password, right.password)


def entry_lists_equal(left: tuple[Entry, ...], right: tuple[Entry, ...]) -> bool:
    """Order-sensitive equality for desired entry sequences."""

    if len(left) != len(right):
        return False
    return all(entries_equal(a, b) for a, b in zip(left, right, strict=True))
