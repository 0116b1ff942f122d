"""Change detection between a stored state snapshot and new desired inputs."""

from __future__ import annotations

from htpasswd_resource.domain.algorithm import DEFAULT_ALGORITHM
from htpasswd_resource.domain.entries import HtpasswdInputs, ProviderState, entry_lists_equal


def has_changes(previous_state: ProviderState | None, new_inputs: HtpasswdInputs) -> bool:
    """Return whether new inputs require an update of the resolved state.

    A missing snapshot always reports changes. Unknown algorithm tags compare
    as different so the update path can reject them.
    """

    if previous_state is None:
        return True

    new_algorithm = new_inputs.algorithm if new_inputs.algorithm is not None else DEFAULT_ALGORITHM
    if previous_state.algorithm != new_algorithm:
        return True

    previous_entries = tuple(hashed.original_entry for hashed in previous_state.hashed_entries)
    return not entry_lists_equal(previous_entries, new_inputs.entries)
