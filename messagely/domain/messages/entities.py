# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Message entities and the composite shapes handed to clients."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from messagely.domain.exceptions import InvariantViolation
from messagely.domain.users.entities import Profile


@dataclass(slots=True, frozen=True)
class MessageDraft:
    """A message that has not been stored yet."""

    from_username: str
    to_username: str
    body: str

    def __post_init__(self) -> None:
        if not self.from_username:
            raise InvariantViolation("sender is required", field="from_username")
        if not self.to_username:
            raise InvariantViolation("recipient is required", field="to_username")


@dataclass(slots=True, frozen=True)
class Message:
    id: int
    from_username: str
    to_username: str
    body: str
    sent_at: datetime
    read_at: datetime | None = None


@dataclass(slots=True, frozen=True)
class MessageDetail:
    """A message with both endpoints' profiles embedded."""

    message: Message
    from_user: Profile
    to_user: Profile

    def __post_init__(self) -> None:
        if self.from_user.username != self.message.from_username:
            raise InvariantViolation("sender profile does not match", field="from_user")
        if self.to_user.username != self.message.to_username:
            raise InvariantViolation("recipient profile does not match", field="to_user")

    @property
    def id(self) -> int:
        return self.message.id

    @property
    def from_username(self) -> str:
        return self.message.from_username

    @property
    def to_username(self) -> str:
        return self.message.to_username
