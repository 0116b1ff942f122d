from __future__ import annotations

import bcrypt
import pytest

from htpasswd_resource.application.services.hash_engine import HashEngine
from htpasswd_resource.domain.algorithm import HtpasswdAlgorithm
from htpasswd_resource.infrastructure.security.password_hasher import (
    BCRYPT_ROUNDS,
    BcryptPasswordHasher,
)


def test_hash_password_never_stores_plaintext_and_verifies() -> None:
    hasher = BcryptPasswordHasher()
    password = "super-secret-password"

    password_hash = hasher.hash_password(password)

    assert password_hash != password
    assert password not in password_hash
    assert hasher.verify_password(password=password, password_hash=password_hash) is True


def test_wrong_password_fails_verification() -> None:
    hasher = BcryptPasswordHasher()
    password_hash = hasher.hash_password("correct")

    assert hasher.verify_password(password="wrong", password_hash=password_hash) is False


def test_hash_uses_fixed_work_factor_and_fresh_salt() -> None:
    hasher = BcryptPasswordHasher()

    first = hasher.hash_password("same")
    second = hasher.hash_password("same")

    assert first.startswith(f"$2b${BCRYPT_ROUNDS:02d}$")
    assert first != second
    assert bcrypt.checkpw(b"same", second.encode("utf-8"))


def test_malformed_hash_fails_verification_without_raising() -> None:
    hasher = BcryptPasswordHasher()

    assert hasher.verify_password(password="pw", password_hash="not-a-bcrypt-hash") is False


@pytest.mark.parametrize("rounds", [3, 32])
def test_out_of_range_rounds_are_rejected(rounds: int) -> None:
    with pytest.raises(ValueError):
        BcryptPasswordHasher(rounds=rounds)


@pytest.mark.asyncio
async def test_engine_verifies_generated_document_line() -> None:
    engine = HashEngine(hashers={HtpasswdAlgorithm.BCRYPT: BcryptPasswordHasher(rounds=4)})

    line = await engine.hash(username="admin", password="s3cret", algorithm=HtpasswdAlgorithm.BCRYPT)

    assert engine.verify_line(line=line, password="s3cret", algorithm=HtpasswdAlgorithm.BCRYPT)
    assert not engine.verify_line(line=line, password="wrong", algorithm=HtpasswdAlgorithm.BCRYPT)
