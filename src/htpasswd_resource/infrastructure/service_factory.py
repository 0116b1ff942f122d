"""Composition of the htpasswd resource service from settings."""

from __future__ import annotations

from htpasswd_resource.application.services.entry_resolver import EntryResolver
from htpasswd_resource.application.services.hash_engine import HashEngine
from htpasswd_resource.application.services.htpasswd_resource_service import (
    HtpasswdResourceService,
)
from htpasswd_resource.application.services.secret_generator import SecretGenerator
from htpasswd_resource.config.settings import Settings
from htpasswd_resource.domain.algorithm import HtpasswdAlgorithm
from htpasswd_resource.infrastructure.security.password_hasher import BcryptPasswordHasher
from htpasswd_resource.infrastructure.security.random_source import OsRandomSource


def build_htpasswd_resource_service(settings: Settings) -> HtpasswdResourceService:
    """Build the lifecycle service with bcrypt hashing and OS randomness."""

    secret_generator = SecretGenerator(random_source=OsRandomSource())
    hash_engine = HashEngine(
        hashers={HtpasswdAlgorithm.BCRYPT: BcryptPasswordHasher()},
        max_concurrency=settings.hash_concurrency,
    )
    return HtpasswdResourceService(
        resolver=EntryResolver(secret_generator=secret_generator, hash_engine=hash_engine),
        secret_generator=secret_generator,
    )
