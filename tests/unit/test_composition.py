from __future__ import annotations

from htpasswd_resource.domain.algorithm import HtpasswdAlgorithm
from htpasswd_resource.domain.composition import compose_outputs
from htpasswd_resource.domain.entries import (
    Entry,
    HashedEntry,
    PasswordPresent,
    PlaintextEntry,
)


def _hashed(username: str, password: str) -> HashedEntry:
    return HashedEntry(
        original_entry=Entry(username=username, password=PasswordPresent(password)),
        resolved_password=password,
        hash=f"{username}:hashed::{password}",
    )


def test_compose_joins_lines_in_order_without_trailing_newline() -> None:
    resolved = [_hashed("user1", "pw1"), _hashed("user2", "pw2")]

    outputs = compose_outputs(resolved, HtpasswdAlgorithm.BCRYPT)

    assert outputs.result == "user1:hashed::pw1\nuser2:hashed::pw2"
    assert outputs.plaintext_entries == (
        PlaintextEntry(username="user1", password="pw1"),
        PlaintextEntry(username="user2", password="pw2"),
    )
    assert outputs.state.algorithm is HtpasswdAlgorithm.BCRYPT
    assert outputs.state.hashed_entries == tuple(resolved)


def test_compose_empty_list_yields_empty_document() -> None:
    outputs = compose_outputs([], HtpasswdAlgorithm.BCRYPT)

    assert outputs.result == ""
    assert outputs.plaintext_entries == ()
    assert outputs.state.hashed_entries == ()


def test_compose_is_deterministic() -> None:
    resolved = [_hashed("a", "1"), _hashed("a", "2")]

    assert compose_outputs(resolved, HtpasswdAlgorithm.BCRYPT) == compose_outputs(
        list(resolved),
        HtpasswdAlgorithm.BCRYPT,
    )
