# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from messagely.shared.errors.base import NotFoundError, ValidationError


class MessageNotFoundError(NotFoundError):
    code = "message_not_found"
    message = "No such message"

    def __init__(self, message_id: int) -> None:
        super().__init__(context={"message_id": message_id})


class RecipientNotFoundError(NotFoundError):
    code = "recipient_not_found"
    status = HTTPStatus.NOT_FOUND
    message = "Recipient does not exist"

    def __init__(self, username: str) -> None:
        super().__init__(context={"to_username": username})


class InvalidMessageIdError(ValidationError):
    def __init__(self, raw_id: str) -> None:
        super().__init__(
            "message_id_invalid",
            context={"message_id": raw_id},
            message="Message ID must be a positive integer",
        )
