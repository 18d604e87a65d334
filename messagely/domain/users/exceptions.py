# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from messagely.shared.errors.base import (
    AuthenticationError,
    ConflictError,
    DomainError,
    NotFoundError,
)


class UserAlreadyExistsError(ConflictError):
    code = "user_already_exists"
    message = "Username is already taken"


class InvalidCredentialsError(AuthenticationError):
    code = "invalid_credentials"
    status = HTTPStatus.BAD_REQUEST
    message = "Invalid username/password"


class InvalidTokenError(AuthenticationError):
    code = "invalid_token"
    message = "Session token is invalid or expired"


class AuthenticationRequiredError(AuthenticationError):
    code = "unauthorized"


class UserNotFoundError(NotFoundError):
    code = "user_not_found"
    message = "No such user"

    def __init__(self, username: str) -> None:
        super().__init__(context={"username": username})


class RegistrationFailedError(DomainError):
    code = "registration_failed"
    status = HTTPStatus.INTERNAL_SERVER_ERROR
    message = "Could not register user"
