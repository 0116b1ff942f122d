"""Assembly of resource outputs from resolved entries."""

from __future__ import annotations

from collections.abc import Sequence

from htpasswd_resource.domain.algorithm import HtpasswdAlgorithm
from htpasswd_resource.domain.entries import (
    HashedEntry,
    HtpasswdOutputs,
    PlaintextEntry,
    ProviderState,
)


def compose_outputs(
    resolved_entries: Sequence[HashedEntry],
    algorithm: HtpasswdAlgorithm,
) -> HtpasswdOutputs:
    """Build the htpasswd document, plaintext list, and next state snapshot."""

    hashed_entries = tuple(resolved_entries)
    return HtpasswdOutputs(
        result="\n".join(entry.hash for entry in hashed_entries),
        plaintext_entries=tuple(
            PlaintextEntry(
                username=entry.original_entry.username,
                password=entry.resolved_password,
            )
            for entry in hashed_entries
        ),
        state=ProviderState(algorithm=algorithm, hashed_entries=hashed_entries),
    )
