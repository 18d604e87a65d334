# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Protocol

from .entities import Message, MessageDetail, MessageDraft


class MessageRepository(Protocol):
    def create(self, draft: MessageDraft, sent_at: datetime) -> Message: ...
    def get(self, message_id: int) -> MessageDetail | None: ...
    def mark_read(self, message_id: int, at: datetime) -> Message | None: ...
    def list_from(self, username: str) -> Sequence[MessageDetail]: ...
    def list_to(self, username: str) -> Sequence[MessageDetail]: ...
