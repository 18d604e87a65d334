# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Flask, Response, g, jsonify, request
from werkzeug.exceptions import HTTPException

from messagely.shared.logging import logger

from .base import AppError


def handle_app_error(error: AppError) -> tuple[Response, HTTPStatus]:
    response = jsonify(error.to_dict())
    return response, error.status


def register_error_handler(
    app: Flask,
    *,
    debug_mode: bool = False,
    default_status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR,
) -> None:

    @app.errorhandler(AppError)
    def _handle_app_error(exc: AppError):
        if exc.status >= HTTPStatus.INTERNAL_SERVER_ERROR:
            logger.opt(exception=exc.__cause__ or exc).error(
                f"Application fault {exc.code} on {request.method} {request.path}"
            )
        else:
            logger.info(f"Handled application error {exc.code} on {request.method} {request.path}")
        return handle_app_error(exc)

    @app.errorhandler(HTTPException)
    def _handle_http(exc: HTTPException):
        response = jsonify(
            {
                "error": (exc.name or "http_error").lower().replace(" ", "_"),
                "message": exc.description,
            }
        )
        return response, exc.code or default_status

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        where = f"{request.method} {request.path}"
        if debug_mode:
            identity = g.get("identity")
            client = request.access_route[0] if request.access_route else request.remote_addr
            logger.exception(
                f"Unhandled {type(exc).__name__} on {where} client={client} "
                f"user={identity.username if identity else '-'} args={sorted(request.args)}"
            )
        else:
            logger.error(f"Unhandled {type(exc).__name__} on {where}")

        return jsonify({"error": "internal_error", "message": "Internal server error"}), default_status
