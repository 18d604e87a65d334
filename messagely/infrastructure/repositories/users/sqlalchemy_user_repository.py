# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime

from sqlalchemy import or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from messagely.domain.users.entities import Profile
from messagely.domain.users.entities import User as DomainUser
from messagely.domain.users.exceptions import UserAlreadyExistsError
from messagely.domain.users.repositories import UserRepository
from messagely.infrastructure.db.models import User
from messagely.infrastructure.repositories._time import as_utc
from messagely.infrastructure.unit_of_work import unit_of_work_scope


def to_profile(row: User) -> Profile:
    return Profile(
        username=row.username,
        first_name=row.first_name,
        last_name=row.last_name,
        phone=row.phone,
    )


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        username=row.username,
        password_hash=row.password_hash,
        first_name=row.first_name,
        last_name=row.last_name,
        phone=row.phone,
        joined_at=as_utc(row.joined_at),
        last_login_at=as_utc(row.last_login_at),
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def find_by_username(self, username: str) -> DomainUser | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(User, username)
            if not row:
                return None
            return _to_domain(row)

    def add(self, user: DomainUser) -> DomainUser:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = User(
                    username=user.username,
                    password_hash=user.password_hash,
                    first_name=user.first_name,
                    last_name=user.last_name,
                    phone=user.phone,
                    joined_at=user.joined_at,
                )
                session.add(row)
                session.flush()
                persisted = _to_domain(row)
        except IntegrityError as exc:
            raise UserAlreadyExistsError() from exc
        return persisted

    def list_profiles(self) -> Sequence[Profile]:
        with unit_of_work_scope(self._session_factory) as session:
            rows = session.scalars(
                select(User).order_by(User.last_name.asc(), User.first_name.asc())
            ).all()
            return [to_profile(row) for row in rows]

    def touch_login(self, username: str, at: datetime) -> None:
        with unit_of_work_scope(self._session_factory) as session:
            session.execute(
                update(User)
                .where(User.username == username)
                .where(or_(User.last_login_at.is_(None), User.last_login_at < at))
                .values(last_login_at=at)
            )

    def update_profile(
        self,
        username: str,
        *,
        first_name: str | None = None,
        last_name: str | None = None,
        phone: str | None = None,
    ) -> DomainUser | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(User, username)
            if not row:
                return None
            if first_name is not None:
                row.first_name = first_name
            if last_name is not None:
                row.last_name = last_name
            if phone is not None:
                row.phone = phone
            session.flush()
            return _to_domain(row)
