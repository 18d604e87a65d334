# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import Profile, TokenClaims, User, UserDetail
from .exceptions import (
    AuthenticationRequiredError,
    InvalidCredentialsError,
    InvalidTokenError,
    RegistrationFailedError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from .repositories import PasswordHasher, TokenService, UserRepository

__all__ = [
    "AuthenticationRequiredError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "PasswordHasher",
    "Profile",
    "RegistrationFailedError",
    "TokenClaims",
    "TokenService",
    "User",
    "UserAlreadyExistsError",
    "UserDetail",
    "UserNotFoundError",
    "UserRepository",
]
