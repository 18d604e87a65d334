# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Credential storage and verification on top of the user repository."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import UTC, datetime

from sqlalchemy.exc import SQLAlchemyError

from messagely.domain.users.entities import Profile, User, UserDetail
from messagely.domain.users.exceptions import UserAlreadyExistsError, UserNotFoundError
from messagely.domain.users.repositories import PasswordHasher, UserRepository
from messagely.shared.errors.base import StoreError
from messagely.shared.logging import logger


def _utcnow() -> datetime:
    return datetime.now(UTC)


class CredentialStore:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher
        self._clock = clock
        self._dummy: str | None = None

    def register(
        self,
        username: str,
        password: str,
        first_name: str,
        last_name: str,
        phone: str,
    ) -> UserDetail:
        if self._users.find_by_username(username) is not None:
            raise UserAlreadyExistsError()

        user = User(
            username=username,
            password_hash=self._password_hasher.hash(password),
            first_name=first_name,
            last_name=last_name,
            phone=phone,
            joined_at=self._clock(),
        )
        persisted = self._users.add(user)
        logger.info(f"credentials.register: created username={username}")
        return persisted.detail()

    def authenticate(self, username: str, password: str) -> bool:
        user = self._users.find_by_username(username)
        if user is None:
            # Burn one verification so unknown users cost the same as bad passwords.
            self._password_hasher.verify(password, self._dummy_hash())
            return False
        return self._password_hasher.verify(password, user.password_hash)

    def touch_login(self, username: str) -> None:
        try:
            self._users.touch_login(username, self._clock())
        except (StoreError, SQLAlchemyError):
            logger.exception(f"credentials.touch_login: failed for username={username}")

    def get_profile(self, username: str) -> UserDetail:
        user = self._users.find_by_username(username)
        if user is None:
            raise UserNotFoundError(username)
        return user.detail()

    def list_profiles(self) -> Sequence[Profile]:
        return list(self._users.list_profiles())

    def update_profile(
        self,
        username: str,
        *,
        first_name: str | None = None,
        last_name: str | None = None,
        phone: str | None = None,
    ) -> UserDetail:
        user = self._users.update_profile(
            username, first_name=first_name, last_name=last_name, phone=phone
        )
        if user is None:
            raise UserNotFoundError(username)
        return user.detail()

    def _dummy_hash(self) -> str:
        if self._dummy is None:
            self._dummy = self._password_hasher.hash("messagely-dummy-password")
        return self._dummy
