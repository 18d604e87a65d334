# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

from messagely.domain.access import AccessDeniedError, AccessPolicy, Identity, Operation
from messagely.domain.messages.entities import Message, MessageDraft
from messagely.domain.messages.exceptions import RecipientNotFoundError
from messagely.domain.messages.repositories import MessageRepository
from messagely.domain.users.repositories import UserRepository
from messagely.shared.logging import logger


class SendMessageUseCase:
    def __init__(
        self,
        *,
        messages: MessageRepository,
        users: UserRepository,
        policy: AccessPolicy,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self._messages = messages
        self._users = users
        self._policy = policy
        self._clock = clock

    def execute(self, identity: Identity, to_username: str, body: str) -> Message:
        draft = MessageDraft(from_username=identity.username, to_username=to_username, body=body)
        if not self._policy.can_create(identity, draft):
            raise AccessDeniedError(Operation.CREATE_MESSAGE)

        if self._users.find_by_username(to_username) is None:
            raise RecipientNotFoundError(to_username)

        message = self._messages.create(draft, self._clock())
        logger.info(
            f"messages.send: id={message.id} from={message.from_username} to={message.to_username}"
        )
        return message
