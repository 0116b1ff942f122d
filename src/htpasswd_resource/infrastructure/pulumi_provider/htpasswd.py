"""Pulumi dynamic resource exposing a declarative htpasswd document."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping, Sequence
from typing import Any

from pulumi import Input, Output, ResourceOptions
from pulumi.dynamic import (
    CheckFailure,
    CheckResult,
    CreateResult,
    DiffResult,
    Resource,
    ResourceProvider,
    UpdateResult,
)
from pulumi.runtime import rpc
from pydantic import ValidationError

from htpasswd_resource.application.dto.resource_models import (
    HtpasswdInputsModel,
    HtpasswdOutputsModel,
)
from htpasswd_resource.application.services.htpasswd_resource_service import (
    HtpasswdResourceService,
)
from htpasswd_resource.config.settings import load_settings
from htpasswd_resource.domain.algorithm import parse_algorithm
from htpasswd_resource.domain.entries import HtpasswdInputs, HtpasswdOutputs
from htpasswd_resource.domain.errors import UnsupportedAlgorithmError
from htpasswd_resource.infrastructure.logging import configure_logging
from htpasswd_resource.infrastructure.service_factory import build_htpasswd_resource_service

_INPUT_KEYS = ("entries", "algorithm")
_OUTPUT_KEYS = ("result", "plaintextEntries", "state")


def _build_service() -> HtpasswdResourceService:
    settings = load_settings()
    configure_logging(level=settings.log_level)
    return build_htpasswd_resource_service(settings)


def _contains_unknowns(value: Any) -> bool:
    """Return whether a property value still holds preview-time unknowns."""

    if value == rpc.UNKNOWN:
        return True
    if isinstance(value, Mapping):
        return any(_contains_unknowns(item) for item in value.values())
    if isinstance(value, list | tuple):
        return any(_contains_unknowns(item) for item in value)
    return False


def _has_unknown_inputs(props: Mapping[str, Any]) -> bool:
    return _contains_unknowns([props.get(key) for key in _INPUT_KEYS])


def _parse_inputs(props: Mapping[str, Any]) -> HtpasswdInputs:
    payload = {key: props[key] for key in _INPUT_KEYS if props.get(key) is not None}
    return HtpasswdInputsModel.model_validate(payload).to_domain()


def _parse_old_outputs(olds: Mapping[str, Any]) -> HtpasswdOutputs | None:
    if olds.get("state") is None:
        return None
    payload = {key: olds[key] for key in _OUTPUT_KEYS if key in olds}
    return HtpasswdOutputsModel.model_validate(payload).to_domain()


def _to_outs(outputs: HtpasswdOutputs) -> dict[str, Any]:
    return HtpasswdOutputsModel.from_domain(outputs).to_wire()


class HtpasswdProvider(ResourceProvider):
    """Stateless dynamic provider; each call builds its own service."""

    def check(self, _olds: dict[str, Any], news: dict[str, Any]) -> CheckResult:
        failures: list[CheckFailure] = []
        if _has_unknown_inputs(news):
            return CheckResult(news, failures)
        try:
            inputs = _parse_inputs(news)
        except ValidationError as error:
            for detail in error.errors():
                location = detail["loc"][0] if detail["loc"] else "entries"
                failures.append(CheckFailure(str(location), detail["msg"]))
            return CheckResult(news, failures)

        try:
            parse_algorithm(inputs.algorithm)
        except UnsupportedAlgorithmError as error:
            failures.append(CheckFailure("algorithm", str(error)))
        return CheckResult(news, failures)

    def create(self, props: dict[str, Any]) -> CreateResult:
        outcome = asyncio.run(_build_service().create(_parse_inputs(props)))
        return CreateResult(outcome.resource_id, outs=_to_outs(outcome.outputs))

    def diff(self, id_: str, olds: dict[str, Any], news: dict[str, Any]) -> DiffResult:
        if _has_unknown_inputs(news):
            return DiffResult(changes=True)
        changes = _build_service().diff(id_, _parse_old_outputs(olds), _parse_inputs(news))
        return DiffResult(changes=changes)

    def update(self, id_: str, olds: dict[str, Any], news: dict[str, Any]) -> UpdateResult:
        outputs = asyncio.run(
            _build_service().update(id_, _parse_old_outputs(olds), _parse_inputs(news))
        )
        return UpdateResult(outs=_to_outs(outputs))

    def delete(self, id_: str, props: dict[str, Any]) -> None:
        _ = props
        _build_service().delete(id_, None)


class HtpasswdProps:
    """Props for the Htpasswd resource."""

    def __init__(
        self,
        entries: Input[Sequence[Input[Mapping[str, Input[str]]]]],
        algorithm: Input[str] | None = None,
    ) -> None:
        self.entries = entries
        self.algorithm = algorithm


class Htpasswd(Resource):
    """htpasswd document generated from username/password declarations.

    Entries without a password get a random one, exposed through
    `plaintextEntries`. Document, plaintext entries, and state are secret outputs.
    """

    result: Output[str]
    plaintextEntries: Output[list[dict[str, str]]]  # noqa: N815

    def __init__(
        self,
        name: str,
        props: HtpasswdProps,
        opts: ResourceOptions | None = None,
    ) -> None:
        secret_opts = ResourceOptions(additional_secret_outputs=list(_OUTPUT_KEYS))
        super().__init__(
            HtpasswdProvider(),
            name,
            {**vars(props), "result": None, "plaintextEntries": None, "state": None},
            ResourceOptions.merge(opts, secret_opts),
        )
