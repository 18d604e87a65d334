# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import Message, MessageDetail, MessageDraft
from .exceptions import InvalidMessageIdError, MessageNotFoundError, RecipientNotFoundError
from .repositories import MessageRepository

__all__ = [
    "InvalidMessageIdError",
    "Message",
    "MessageDetail",
    "MessageDraft",
    "MessageNotFoundError",
    "MessageRepository",
    "RecipientNotFoundError",
]
