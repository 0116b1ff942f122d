"""Pydantic models for host-facing resource inputs and outputs."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from htpasswd_resource.domain.algorithm import parse_algorithm
from htpasswd_resource.domain.entries import (
    Entry,
    HashedEntry,
    HtpasswdInputs,
    HtpasswdOutputs,
    PasswordAbsent,
    PasswordPresent,
    PlaintextEntry,
    ProviderState,
)

_FORBIDDEN_USERNAME_CHARS = frozenset(":\r\n")


class StrictModel(BaseModel):
    """Base model with strict unknown-field rejection and camelCase wire keys."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        """Dump using wire aliases and dropping unset optionals."""

        return self.model_dump(by_alias=True, exclude_none=True)


class EntryModel(StrictModel):
    """One desired username/password declaration."""

    username: str = Field(min_length=1)
    password: str | None = None

    @field_validator("username")
    @classmethod
    def _reject_line_breaking_chars(cls, value: str) -> str:
        if any(char in _FORBIDDEN_USERNAME_CHARS for char in value):
            raise ValueError("username must not contain ':' or line breaks")
        return value

    def to_domain(self) -> Entry:
        if self.password is None:
            return Entry(username=self.username, password=PasswordAbsent())
        return Entry(username=self.username, password=PasswordPresent(value=self.password))

    @classmethod
    def from_domain(cls, entry: Entry) -> EntryModel:
        password = entry.password.value if isinstance(entry.password, PasswordPresent) else None
        return cls(username=entry.username, password=password)


class HtpasswdInputsModel(StrictModel):
    """Resource inputs: ordered entries plus an optional algorithm tag."""

    entries: list[EntryModel]
    algorithm: str | None = None

    def to_domain(self) -> HtpasswdInputs:
        return HtpasswdInputs(
            entries=tuple(entry.to_domain() for entry in self.entries),
            algorithm=self.algorithm,
        )


class HashedEntryModel(StrictModel):
    """Serialized resolved entry kept in the state snapshot."""

    original_entry: EntryModel = Field(alias="originalEntry")
    resolved_password: str = Field(alias="resolvedPassword")
    hash: str


class ProviderStateModel(StrictModel):
    """Serialized state snapshot round-tripped through the host."""

    algorithm: str | None = None
    hashed_entries: list[HashedEntryModel] = Field(alias="hashedEntries")

    def to_domain(self) -> ProviderState:
        return ProviderState(
            algorithm=parse_algorithm(self.algorithm),
            hashed_entries=tuple(
                HashedEntry(
                    original_entry=hashed.original_entry.to_domain(),
                    resolved_password=hashed.resolved_password,
                    hash=hashed.hash,
                )
                for hashed in self.hashed_entries
            ),
        )

    @classmethod
    def from_domain(cls, state: ProviderState) -> ProviderStateModel:
        return cls(
            algorithm=state.algorithm.value,
            hashed_entries=[
                HashedEntryModel(
                    original_entry=EntryModel.from_domain(hashed.original_entry),
                    resolved_password=hashed.resolved_password,
                    hash=hashed.hash,
                )
                for hashed in state.hashed_entries
            ],
        )


class PlaintextEntryModel(StrictModel):
    """Username with the password written into the document."""

    username: str
    password: str


class HtpasswdOutputsModel(StrictModel):
    """Resource outputs: document, plaintext entries, and opaque state."""

    result: str
    plaintext_entries: list[PlaintextEntryModel] = Field(alias="plaintextEntries")
    state: ProviderStateModel

    def to_domain(self) -> HtpasswdOutputs:
        return HtpasswdOutputs(
            result=self.result,
            plaintext_entries=tuple(
                PlaintextEntry(username=entry.username, password=entry.password)
                for entry in self.plaintext_entries
            ),
            state=self.state.to_domain(),
        )

    @classmethod
    def from_domain(cls, outputs: HtpasswdOutputs) -> HtpasswdOutputsModel:
        return cls(
            result=outputs.result,
            plaintext_entries=[
                PlaintextEntryModel(username=entry.username, password=entry.password)
                for entry in outputs.plaintext_entries
            ],
            state=ProviderStateModel.from_domain(outputs.state),
        )
