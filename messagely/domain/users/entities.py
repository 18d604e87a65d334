# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from messagely.domain.exceptions import InvariantViolation


@dataclass(slots=True, frozen=True)
class Profile:
    """Public projection of a user, embedded in message payloads."""

    username: str
    first_name: str
    last_name: str
    phone: str


@dataclass(slots=True, frozen=True)
class UserDetail:
    """Everything about a user except the password hash."""

    username: str
    first_name: str
    last_name: str
    phone: str
    joined_at: datetime
    last_login_at: datetime | None

    def profile(self) -> Profile:
        return Profile(
            username=self.username,
            first_name=self.first_name,
            last_name=self.last_name,
            phone=self.phone,
        )


@dataclass(slots=True, frozen=True)
class User:

    username: str
    password_hash: str
    first_name: str
    last_name: str
    phone: str
    joined_at: datetime
    last_login_at: datetime | None = None

    def __post_init__(self) -> None:
        if not self.username:
            raise InvariantViolation("username must not be empty", field="username")
        if not self.password_hash:
            raise InvariantViolation("password hash must not be empty", field="password_hash")

    def detail(self) -> UserDetail:
        return UserDetail(
            username=self.username,
            first_name=self.first_name,
            last_name=self.last_name,
            phone=self.phone,
            joined_at=self.joined_at,
            last_login_at=self.last_login_at,
        )

    def profile(self) -> Profile:
        return self.detail().profile()


@dataclass(slots=True, frozen=True)
class TokenClaims:

    username: str
    issued_at: datetime | None = None
    expires_at: datetime | None = None
