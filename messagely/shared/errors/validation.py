# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, NoReturn

from pydantic import ValidationError as PydanticValidationError

from .base import MissingFieldError, ValidationError


def format_pydantic_errors(exc: PydanticValidationError) -> dict[str, Any]:
    errors_list = []
    fields_set = set()

    for error in exc.errors():
        loc = error.get("loc", ())
        field_path = ".".join(str(part) for part in loc if part is not None)

        if field_path:
            fields_set.add(field_path)

        error_entry = {
            "field": field_path or "unknown",
            "type": error.get("type", "value_error"),
            "message": error.get("msg", ""),
        }

        errors_list.append(error_entry)

    return {
        "fields": sorted(fields_set),
        "errors": errors_list,
    }


def _is_missing(error: Mapping[str, Any]) -> bool:
    """Absent, null and empty-string fields all count as missing."""

    kind = error.get("type")
    value = error.get("input")
    if kind == "missing":
        return True
    if kind == "string_type":
        return value is None
    return kind == "string_too_short" and value == ""


def missing_fields(exc: PydanticValidationError) -> list[str]:
    return sorted(
        ".".join(str(part) for part in error.get("loc", ()))
        for error in exc.errors()
        if _is_missing(error)
    )


def raise_validation_error(exc: PydanticValidationError) -> NoReturn:
    missing = missing_fields(exc)
    if missing:
        raise MissingFieldError(missing) from exc
    context = format_pydantic_errors(exc)
    raise ValidationError(context=context) from exc


__all__ = [
    "format_pydantic_errors",
    "missing_fields",
    "raise_validation_error",
]
