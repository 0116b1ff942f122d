from __future__ import annotations

import asyncio

import pytest

from htpasswd_resource.application.services.hash_engine import HashEngine
from htpasswd_resource.domain.algorithm import HtpasswdAlgorithm
from htpasswd_resource.domain.errors import (
    HashComputationError,
    MissingPasswordError,
    UnsupportedAlgorithmError,
)


class FakePasswordHasher:
    def __init__(self) -> None:
        self.hash_calls: list[str] = []

    def hash_password(self, password: str) -> str:
        self.hash_calls.append(password)
        return f"hashed::{password}"

    def verify_password(self, *, password: str, password_hash: str) -> bool:
        return password_hash == f"hashed::{password}"


class RejectingPasswordHasher(FakePasswordHasher):
    def hash_password(self, password: str) -> str:
        raise ValueError("password longer than 72 bytes")


def _engine(hasher: FakePasswordHasher | None = None, *, max_concurrency: int = 4) -> HashEngine:
    return HashEngine(
        hashers={HtpasswdAlgorithm.BCRYPT: hasher or FakePasswordHasher()},
        max_concurrency=max_concurrency,
    )


@pytest.mark.asyncio
async def test_hash_returns_htpasswd_line() -> None:
    hasher = FakePasswordHasher()
    engine = _engine(hasher)

    line = await engine.hash(username="user1", password="pw", algorithm=HtpasswdAlgorithm.BCRYPT)

    assert line == "user1:hashed::pw"
    assert hasher.hash_calls == ["pw"]


@pytest.mark.asyncio
@pytest.mark.parametrize("password", ["", None])
async def test_missing_password_raises_before_hashing(password: str | None) -> None:
    hasher = FakePasswordHasher()
    engine = _engine(hasher)

    with pytest.raises(MissingPasswordError) as error:
        await engine.hash(username="user1", password=password, algorithm=HtpasswdAlgorithm.BCRYPT)

    assert error.value.username == "user1"
    assert hasher.hash_calls == []


@pytest.mark.asyncio
async def test_unknown_algorithm_tag_is_rejected() -> None:
    engine = _engine()

    with pytest.raises(UnsupportedAlgorithmError):
        await engine.hash(username="user1", password="pw", algorithm="MD5")  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_library_rejection_is_wrapped_with_username() -> None:
    engine = _engine(RejectingPasswordHasher())

    with pytest.raises(HashComputationError) as error:
        await engine.hash(username="user1", password="pw", algorithm=HtpasswdAlgorithm.BCRYPT)

    assert error.value.username == "user1"
    assert isinstance(error.value.__cause__, ValueError)


@pytest.mark.asyncio
async def test_concurrent_hashes_share_bounded_slots() -> None:
    hasher = FakePasswordHasher()
    engine = _engine(hasher, max_concurrency=2)
    slots = engine.open_slots()

    lines = await asyncio.gather(
        *(
            engine.hash(
                username=f"u{i}",
                password=f"pw{i}",
                algorithm=HtpasswdAlgorithm.BCRYPT,
                slots=slots,
            )
            for i in range(5)
        )
    )

    assert lines == [f"u{i}:hashed::pw{i}" for i in range(5)]
    assert sorted(hasher.hash_calls) == [f"pw{i}" for i in range(5)]


def test_engine_requires_hasher_for_every_algorithm() -> None:
    with pytest.raises(ValueError, match="Bcrypt"):
        HashEngine(hashers={})


def test_engine_rejects_non_positive_concurrency() -> None:
    with pytest.raises(ValueError):
        _engine(max_concurrency=0)


def test_open_slots_returns_independent_limiters() -> None:
    engine = _engine(max_concurrency=3)

    first = engine.open_slots()
    second = engine.open_slots()

    assert first is not second


def test_verify_line_checks_hash_part_of_document_line() -> None:
    engine = _engine()

    assert engine.verify_line(
        line="user1:hashed::pw",
        password="pw",
        algorithm=HtpasswdAlgorithm.BCRYPT,
    )
    assert not engine.verify_line(
        line="user1:hashed::pw",
        password="other",
        algorithm=HtpasswdAlgorithm.BCRYPT,
    )
    assert not engine.verify_line(
        line="no-separator",
        password="pw",
        algorithm=HtpasswdAlgorithm.BCRYPT,
    )
