# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Request gate: establishes the caller's identity before any handler runs."""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

from flask import Flask, g, request

from messagely.domain.access import AccessDeniedError, Identity, Operation
from messagely.domain.users.exceptions import AuthenticationRequiredError, InvalidTokenError
from messagely.domain.users.repositories import TokenService
from messagely.shared.logging import logger

F = TypeVar("F", bound=Callable[..., Any])


def extract_token() -> str:
    auth = request.headers.get("Authorization", "")
    if auth.startswith("Bearer "):
        return auth[7:].strip()

    body = request.get_json(silent=True)
    if isinstance(body, dict) and isinstance(body.get("_token"), str):
        return body["_token"]

    return request.args.get("_token", "")


def current_identity() -> Identity | None:
    return getattr(g, "identity", None)


class RequestGate:
    def __init__(self, *, tokens: TokenService) -> None:
        self._tokens = tokens

    def bind(self, app: Flask) -> None:
        app.before_request(self.establish_identity)

    def establish_identity(self) -> None:
        g.identity = None
        token = extract_token()
        if not token:
            return

        try:
            claims = self._tokens.verify(token)
        except InvalidTokenError:
            logger.warning(f"Auth failed (invalid token) on {request.method} {request.path}")
            raise

        g.identity = Identity(username=claims.username)
        logger.debug(f"Auth OK: user={claims.username} {request.method} {request.path}")

    def login_required(self, f: F) -> F:
        @wraps(f)
        def inner(*a, **kw):
            identity = current_identity()
            if identity is None:
                logger.warning(
                    f"No credentials on {request.method} {request.path} "
                    f"from {request.headers.get('X-Forwarded-For', request.remote_addr)}"
                )
                raise AuthenticationRequiredError()
            kw["identity"] = identity
            return f(*a, **kw)

        return inner  # type: ignore[return-value]

    def correct_user_required(self, f: F) -> F:
        """Like :meth:`login_required`, and the ``username`` path segment must be the caller."""

        @wraps(f)
        def inner(*a, **kw):
            identity = current_identity()
            if identity is None:
                raise AuthenticationRequiredError()
            if kw.get("username") != identity.username:
                logger.warning(
                    f"Auth mismatch: user={identity.username} path_user={kw.get('username')} "
                    f"on {request.method} {request.path}"
                )
                raise AccessDeniedError(Operation.READ_PROFILE)
            kw["identity"] = identity
            return f(*a, **kw)

        return inner  # type: ignore[return-value]
