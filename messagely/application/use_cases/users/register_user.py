# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from messagely.application.services.credential_store import CredentialStore
from messagely.domain.users.entities import UserDetail
from messagely.domain.users.exceptions import RegistrationFailedError, UserAlreadyExistsError
from messagely.domain.users.repositories import TokenService
from messagely.shared.errors.base import StoreError
from messagely.shared.logging import logger


@dataclass(slots=True, frozen=True)
class RegisterUserInput:
    username: str
    password: str
    first_name: str
    last_name: str
    phone: str


class RegisterUserUseCase:
    def __init__(self, *, credentials: CredentialStore, tokens: TokenService) -> None:
        self._credentials = credentials
        self._tokens = tokens

    def execute(self, data: RegisterUserInput) -> tuple[UserDetail, str]:
        try:
            user = self._credentials.register(
                data.username,
                data.password,
                data.first_name,
                data.last_name,
                data.phone,
            )
        except (UserAlreadyExistsError, StoreError) as exc:
            logger.warning(f"register: store rejected username={data.username} ({exc.code})")
            raise RegistrationFailedError() from exc
        token = self._tokens.issue(user.username)
        return user, token
