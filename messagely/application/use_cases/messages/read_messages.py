# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Reading a single message and listing a user's mailbox."""

from __future__ import annotations

from collections.abc import Sequence

from messagely.domain.access import AccessDeniedError, AccessPolicy, Identity, Operation
from messagely.domain.messages.entities import MessageDetail
from messagely.domain.messages.exceptions import MessageNotFoundError
from messagely.domain.messages.repositories import MessageRepository
from messagely.shared.logging import logger


class GetMessageUseCase:
    def __init__(
        self,
        *,
        messages: MessageRepository,
        policy: AccessPolicy,
        conceal_denied: bool = False,
    ) -> None:
        self._messages = messages
        self._policy = policy
        self._conceal_denied = conceal_denied

    def execute(self, identity: Identity, message_id: int) -> MessageDetail:
        detail = self._messages.get(message_id)
        if detail is None:
            raise MessageNotFoundError(message_id)

        if not self._policy.can_read(identity, detail):
            logger.warning(f"messages.get: denied id={message_id} user={identity.username}")
            if self._conceal_denied:
                raise MessageNotFoundError(message_id)
            raise AccessDeniedError(Operation.READ_MESSAGE)

        return detail


class ListMessagesUseCase:
    def __init__(self, *, messages: MessageRepository) -> None:
        self._messages = messages

    def sent(self, identity: Identity) -> Sequence[MessageDetail]:
        return self._messages.list_from(identity.username)

    def received(self, identity: Identity) -> Sequence[MessageDetail]:
        return self._messages.list_to(identity.username)
