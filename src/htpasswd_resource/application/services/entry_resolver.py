"""Carry-over and recomputation of hashed htpasswd entries."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from htpasswd_resource.application.services.hash_engine import HashEngine
from htpasswd_resource.application.services.secret_generator import SecretGenerator
from htpasswd_resource.domain.algorithm import HtpasswdAlgorithm
from htpasswd_resource.domain.entries import (
    Entry,
    HashedEntry,
    PasswordAbsent,
    entries_equal,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolutionResult:
    """Resolved entries plus how many were reused versus computed."""

    hashed_entries: tuple[HashedEntry, ...]
    carried_over: int
    computed: int


class EntryResolver:
    """Resolve desired entries against the previous state snapshot."""

    def __init__(self, *, secret_generator: SecretGenerator, hash_engine: HashEngine) -> None:
        self._secret_generator = secret_generator
        self._hash_engine = hash_engine

    async def resolve(
        self,
        *,
        previous_entries: Sequence[HashedEntry],
        new_entries: Sequence[Entry],
        algorithm: HtpasswdAlgorithm,
    ) -> ResolutionResult:
        """Return one hashed entry per desired entry, in desired order.

        Entries equal to a previously resolved original entry keep that
        password and hash. Everything else gets a password (generated when
        unset) and a fresh hash. If any pending entry fails, the error
        propagates and nothing is returned.
        """

        # Reject unsupported tags before generating any password.
        self._hash_engine.hasher_for(algorithm)

        resolved: list[HashedEntry | None] = []
        pending: list[tuple[int, Entry]] = []
        for index, entry in enumerate(new_entries):
            carried = _find_previous(previous_entries, entry)
            resolved.append(carried)
            if carried is None:
                pending.append((index, entry))

        slots = self._hash_engine.open_slots()
        try:
            async with asyncio.TaskGroup() as group:
                tasks = [
                    (index, group.create_task(self._resolve_pending(entry, algorithm, slots)))
                    for index, entry in pending
                ]
        except ExceptionGroup as errors:
            raise _first_leaf(errors) from None

        for index, task in tasks:
            resolved[index] = task.result()

        hashed_entries = tuple(entry for entry in resolved if entry is not None)
        result = ResolutionResult(
            hashed_entries=hashed_entries,
            carried_over=len(hashed_entries) - len(pending),
            computed=len(pending),
        )
        logger.debug(
            "entries_resolved total=%s carried_over=%s computed=%s",
            len(hashed_entries),
            result.carried_over,
            result.computed,
        )
        return result

    async def _resolve_pending(
        self,
        entry: Entry,
        algorithm: HtpasswdAlgorithm,
        slots: asyncio.Semaphore,
    ) -> HashedEntry:
        if isinstance(entry.password, PasswordAbsent):
            password = self._secret_generator.generate()
        else:
            password = entry.password.value

        line = await self._hash_engine.hash(
            username=entry.username,
            password=password,
            algorithm=algorithm,
            slots=slots,
        )
        return HashedEntry(original_entry=entry, resolved_password=password, hash=line)


def _find_previous(previous_entries: Sequence[HashedEntry], entry: Entry) -> HashedEntry | None:
    for previous in previous_entries:
        if entries_equal(previous.original_entry, entry):
            return previous
    return None


def _first_leaf(group: ExceptionGroup[Exception]) -> Exception:
    error: Exception = group
    while isinstance(error, ExceptionGroup):
        error = error.exceptions[0]
    return error
