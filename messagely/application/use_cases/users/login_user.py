# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from messagely.application.services.credential_store import CredentialStore
from messagely.domain.users.exceptions import InvalidCredentialsError
from messagely.domain.users.repositories import TokenService
from messagely.shared.logging import logger


class LoginUserUseCase:
    def __init__(self, *, credentials: CredentialStore, tokens: TokenService) -> None:
        self._credentials = credentials
        self._tokens = tokens

    def execute(self, username: str, password: str) -> str:
        if not self._credentials.authenticate(username, password):
            logger.info(f"auth.login: rejected username={username}")
            raise InvalidCredentialsError()

        self._credentials.touch_login(username)
        return self._tokens.issue(username)
