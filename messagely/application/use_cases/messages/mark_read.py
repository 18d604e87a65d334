# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

from messagely.domain.access import AccessDeniedError, AccessPolicy, Identity, Operation
from messagely.domain.messages.entities import Message
from messagely.domain.messages.exceptions import MessageNotFoundError
from messagely.domain.messages.repositories import MessageRepository
from messagely.shared.logging import logger


class MarkMessageReadUseCase:
    """Set ``read_at`` once; later calls keep the first timestamp."""

    def __init__(
        self,
        *,
        messages: MessageRepository,
        policy: AccessPolicy,
        conceal_denied: bool = False,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self._messages = messages
        self._policy = policy
        self._conceal_denied = conceal_denied
        self._clock = clock

    def execute(self, identity: Identity, message_id: int) -> Message:
        detail = self._messages.get(message_id)
        if detail is None:
            raise MessageNotFoundError(message_id)

        if not self._policy.can_mark_read(identity, detail):
            logger.warning(f"messages.mark_read: denied id={message_id} user={identity.username}")
            if self._conceal_denied and not self._policy.can_read(identity, detail):
                raise MessageNotFoundError(message_id)
            raise AccessDeniedError(Operation.MARK_MESSAGE_READ)

        message = self._messages.mark_read(message_id, self._clock())
        if message is None:
            raise MessageNotFoundError(message_id)
        return message
