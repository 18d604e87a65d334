# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Per-resource access decisions.

Everything here is pure: no I/O, no clock, no request state. Callers pass the
authenticated identity (or ``None`` for anonymous callers) and the resource.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol


@dataclass(slots=True, frozen=True)
class Identity:
    """Authenticated caller, as established by the request gate."""

    username: str


class Operation(StrEnum):
    READ_MESSAGE = "read_message"
    MARK_MESSAGE_READ = "mark_message_read"
    CREATE_MESSAGE = "create_message"
    READ_PROFILE = "read_profile"
    UPDATE_PROFILE = "update_profile"


class MessageLike(Protocol):
    @property
    def from_username(self) -> str: ...

    @property
    def to_username(self) -> str: ...


class ProfileLike(Protocol):
    @property
    def username(self) -> str: ...


class AccessPolicy:
    def allows(
        self,
        identity: Identity | None,
        operation: Operation,
        resource: MessageLike | ProfileLike,
    ) -> bool:
        if identity is None:
            return False

        match operation:
            case Operation.READ_MESSAGE:
                return identity.username in (resource.from_username, resource.to_username)
            case Operation.MARK_MESSAGE_READ:
                return identity.username == resource.to_username
            case Operation.CREATE_MESSAGE:
                return identity.username == resource.from_username
            case Operation.READ_PROFILE | Operation.UPDATE_PROFILE:
                return identity.username == resource.username
        return False

    def can_read(self, identity: Identity | None, message: MessageLike) -> bool:
        return self.allows(identity, Operation.READ_MESSAGE, message)

    def can_mark_read(self, identity: Identity | None, message: MessageLike) -> bool:
        return self.allows(identity, Operation.MARK_MESSAGE_READ, message)

    def can_create(self, identity: Identity | None, draft: MessageLike) -> bool:
        return self.allows(identity, Operation.CREATE_MESSAGE, draft)

    def can_access_profile(
        self, identity: Identity | None, profile: ProfileLike, *, write: bool = False
    ) -> bool:
        operation = Operation.UPDATE_PROFILE if write else Operation.READ_PROFILE
        return self.allows(identity, operation, profile)
