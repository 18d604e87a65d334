# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, cast


@dataclass(slots=True, eq=False)
class AppError(Exception):
    code: str
    status: HTTPStatus
    context: Mapping[str, Any] | None = None
    message: str | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message or self.code)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "error": self.code,
            "message": self.message or self.code.replace("_", " ").capitalize(),
        }
        if self.context:
            payload["context"] = dict(self.context)
        return payload


class DomainError(AppError):
    def __init__(
        self,
        *,
        code: str | None = None,
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
        message: str | None = None,
    ) -> None:
        resolved_code = code or cast(str, getattr(self, "code", "domain_error"))
        resolved_status = status or cast(
            HTTPStatus, getattr(self, "status", HTTPStatus.BAD_REQUEST)
        )
        resolved_message = message or cast(str | None, getattr(self, "message", None))
        super().__init__(
            code=resolved_code,
            status=resolved_status,
            context=context,
            message=resolved_message,
        )


class AuthenticationError(DomainError):
    code = "unauthorized"
    status = HTTPStatus.UNAUTHORIZED
    message = "Authentication required"


class AuthorizationError(DomainError):
    code = "access_denied"
    status = HTTPStatus.UNAUTHORIZED
    message = "Unauthorized"


class NotFoundError(DomainError):
    code = "not_found"
    status = HTTPStatus.NOT_FOUND
    message = "Not found"


class ConflictError(DomainError):
    code = "conflict"
    status = HTTPStatus.CONFLICT
    message = "Conflict"


class InfrastructureError(AppError):
    def __init__(
        self,
        code: str = "infrastructure_error",
        *,
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
        message: str | None = None,
    ) -> None:
        resolved_status = status or HTTPStatus.INTERNAL_SERVER_ERROR
        super().__init__(code=code, status=resolved_status, context=context, message=message)


class StoreError(InfrastructureError):
    def __init__(self, code: str = "store_error", *, message: str | None = None) -> None:
        super().__init__(code, message=message or "The data store could not complete the request")


class ValidationError(AppError):
    def __init__(
        self,
        code: str = "validation_error",
        *,
        context: Mapping[str, Any] | None = None,
        message: str | None = None,
    ) -> None:
        super().__init__(
            code=code,
            status=HTTPStatus.BAD_REQUEST,
            context=context,
            message=message or "Invalid request",
        )


class MissingFieldError(ValidationError):
    def __init__(self, fields: list[str]) -> None:
        super().__init__(
            "missing_field",
            context={"fields": fields},
            message="Missing required field(s): " + ", ".join(fields),
        )
