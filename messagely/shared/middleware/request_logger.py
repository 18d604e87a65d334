# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Per-request correlation ids and access log lines."""

from __future__ import annotations

import time
import uuid
from collections.abc import Callable, Iterable

from flask import Flask, Response, g, request

from messagely.shared.logging import (
    clear_correlation_id,
    get_correlation_id,
    logger,
    set_correlation_id,
)

REQUEST_ID_HEADER = "X-Request-ID"

_SECRET_HEADERS = frozenset({"authorization", "cookie", "x-api-key"})
_SECRET_PARAM_PARTS = ("token", "password", "secret")


def _redact(
    items: Iterable[tuple[str, str]], is_secret: Callable[[str], bool]
) -> dict[str, str]:
    return {key: "<redacted>" if is_secret(key.lower()) else value for key, value in items}


def _client_ip() -> str:
    route = request.access_route
    return route[0] if route else (request.remote_addr or "unknown")


def _caller() -> str:
    identity = g.get("identity")
    return identity.username if identity is not None else "-"


def configure_request_logging(app: Flask, *, debug_mode: bool = False) -> None:
    @app.before_request
    def _open_request() -> None:
        set_correlation_id(request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:12])
        g.request_started = time.perf_counter()

        line = f"-> {request.method} {request.path} ip={_client_ip()}"
        if debug_mode:
            headers = _redact(request.headers.items(), lambda k: k in _SECRET_HEADERS)
            params = _redact(
                request.args.items(), lambda k: any(p in k for p in _SECRET_PARAM_PARTS)
            )
            line += f" args={params} headers={headers} bytes={request.content_length or 0}"
        logger.debug(line)

    @app.after_request
    def _close_request(response: Response) -> Response:
        elapsed_ms = (time.perf_counter() - g.get("request_started", time.perf_counter())) * 1000
        logger.info(
            f"<- {request.method} {request.path} status={response.status_code} "
            f"user={_caller()} took={elapsed_ms:.1f}ms"
        )
        response.headers.setdefault(REQUEST_ID_HEADER, get_correlation_id())
        return response

    @app.teardown_request
    def _finish_request(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(f"Request failed: {type(exc).__name__} on {request.method} {request.path}")
        clear_correlation_id()


__all__ = ["REQUEST_ID_HEADER", "configure_request_logging"]
