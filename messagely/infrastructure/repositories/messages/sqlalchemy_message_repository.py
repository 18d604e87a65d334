# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from messagely.domain.messages.entities import Message as DomainMessage
from messagely.domain.messages.entities import MessageDetail, MessageDraft
from messagely.domain.messages.exceptions import RecipientNotFoundError
from messagely.domain.messages.repositories import MessageRepository
from messagely.infrastructure.db.models import Message
from messagely.infrastructure.repositories._time import as_utc
from messagely.infrastructure.repositories.users.sqlalchemy_user_repository import to_profile
from messagely.infrastructure.unit_of_work import unit_of_work_scope


def _to_domain(row: Message) -> DomainMessage:
    return DomainMessage(
        id=row.id,
        from_username=row.from_username,
        to_username=row.to_username,
        body=row.body,
        sent_at=as_utc(row.sent_at),
        read_at=as_utc(row.read_at),
    )


def _to_detail(row: Message) -> MessageDetail:
    return MessageDetail(
        message=_to_domain(row),
        from_user=to_profile(row.from_user),
        to_user=to_profile(row.to_user),
    )


def _with_endpoints():
    return select(Message).options(joinedload(Message.from_user), joinedload(Message.to_user))


class SqlAlchemyMessageRepository(MessageRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def create(self, draft: MessageDraft, sent_at: datetime) -> DomainMessage:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = Message(
                    from_username=draft.from_username,
                    to_username=draft.to_username,
                    body=draft.body,
                    sent_at=sent_at,
                )
                session.add(row)
                session.flush()
                message = _to_domain(row)
        except IntegrityError as exc:
            raise RecipientNotFoundError(draft.to_username) from exc
        return message

    def get(self, message_id: int) -> MessageDetail | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.scalars(_with_endpoints().where(Message.id == message_id)).first()
            if not row:
                return None
            return _to_detail(row)

    def mark_read(self, message_id: int, at: datetime) -> DomainMessage | None:
        with unit_of_work_scope(self._session_factory) as session:
            session.execute(
                update(Message)
                .where(Message.id == message_id, Message.read_at.is_(None))
                .values(read_at=at)
            )
            row = session.get(Message, message_id, populate_existing=True)
            if not row:
                return None
            return _to_domain(row)

    def list_from(self, username: str) -> Sequence[MessageDetail]:
        with unit_of_work_scope(self._session_factory) as session:
            rows = session.scalars(
                _with_endpoints().where(Message.from_username == username).order_by(Message.id)
            ).all()
            return [_to_detail(row) for row in rows]

    def list_to(self, username: str) -> Sequence[MessageDetail]:
        with unit_of_work_scope(self._session_factory) as session:
            rows = session.scalars(
                _with_endpoints().where(Message.to_username == username).order_by(Message.id)
            ).all()
            return [_to_detail(row) for row in rows]
