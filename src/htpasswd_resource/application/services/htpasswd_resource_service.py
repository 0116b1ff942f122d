"""Resource lifecycle use-cases for a declarative htpasswd document."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from htpasswd_resource.application.services.entry_resolver import EntryResolver
from htpasswd_resource.application.services.secret_generator import SecretGenerator
from htpasswd_resource.domain.algorithm import parse_algorithm
from htpasswd_resource.domain.composition import compose_outputs
from htpasswd_resource.domain.diff import has_changes
from htpasswd_resource.domain.entries import HashedEntry, HtpasswdInputs, HtpasswdOutputs

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreateOutcome:
    """Identifier and outputs of a freshly created resource."""

    resource_id: str
    outputs: HtpasswdOutputs


class HtpasswdResourceService:
    """Expose create/diff/update/delete for one htpasswd resource."""

    def __init__(self, *, resolver: EntryResolver, secret_generator: SecretGenerator) -> None:
        self._resolver = resolver
        self._secret_generator = secret_generator

    async def create(self, inputs: HtpasswdInputs) -> CreateOutcome:
        """Resolve every entry from scratch and mint a resource id."""

        outputs = await self._resolve(previous_entries=(), inputs=inputs, operation="create")
        resource_id = self._secret_generator.generate()
        logger.info("htpasswd_created resource_id=%s entries=%s", resource_id, len(inputs.entries))
        return CreateOutcome(resource_id=resource_id, outputs=outputs)

    def diff(
        self,
        resource_id: str,
        old_outputs: HtpasswdOutputs | None,
        new_inputs: HtpasswdInputs,
    ) -> bool:
        """Return whether new inputs differ from what was last resolved."""

        previous_state = old_outputs.state if old_outputs is not None else None
        changes = has_changes(previous_state, new_inputs)
        logger.debug("htpasswd_diff resource_id=%s changes=%s", resource_id, changes)
        return changes

    async def update(
        self,
        resource_id: str,
        old_outputs: HtpasswdOutputs | None,
        new_inputs: HtpasswdInputs,
    ) -> HtpasswdOutputs:
        """Resolve new inputs, reusing hashes of unchanged entries."""

        previous_entries = old_outputs.state.hashed_entries if old_outputs is not None else ()
        outputs = await self._resolve(
            previous_entries=previous_entries,
            inputs=new_inputs,
            operation="update",
        )
        logger.info(
            "htpasswd_updated resource_id=%s entries=%s",
            resource_id,
            len(new_inputs.entries),
        )
        return outputs

    def delete(self, resource_id: str, old_outputs: HtpasswdOutputs | None) -> None:
        """Forget the resource; nothing is persisted so there is nothing to remove."""

        _ = old_outputs
        logger.info("htpasswd_deleted resource_id=%s", resource_id)

    async def _resolve(
        self,
        *,
        previous_entries: tuple[HashedEntry, ...],
        inputs: HtpasswdInputs,
        operation: str,
    ) -> HtpasswdOutputs:
        try:
            algorithm = parse_algorithm(inputs.algorithm)
            resolution = await self._resolver.resolve(
                previous_entries=previous_entries,
                new_entries=inputs.entries,
                algorithm=algorithm,
            )
        except Exception as error:
            logger.error("htpasswd_%s_failed error=%s", operation, error)
            raise

        logger.info(
            "htpasswd_%s_resolved algorithm=%s carried_over=%s computed=%s",
            operation,
            algorithm.value,
            resolution.carried_over,
            resolution.computed,
        )
        return compose_outputs(resolution.hashed_entries, algorithm)
