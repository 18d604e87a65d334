# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Protocol

from .entities import Profile, TokenClaims, User


class UserRepository(Protocol):
    def find_by_username(self, username: str) -> User | None: ...
    def add(self, user: User) -> User: ...
    def list_profiles(self) -> Sequence[Profile]: ...
    def touch_login(self, username: str, at: datetime) -> None: ...
    def update_profile(
        self,
        username: str,
        *,
        first_name: str | None = None,
        last_name: str | None = None,
        phone: str | None = None,
    ) -> User | None: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...


class TokenService(Protocol):
    def issue(self, username: str, *, now: datetime | None = None) -> str: ...
    def verify(self, token: str) -> TokenClaims: ...
