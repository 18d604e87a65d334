# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""HTTP controller for message endpoints."""

from __future__ import annotations

import re

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from messagely.application.use_cases.messages.mark_read import MarkMessageReadUseCase
from messagely.application.use_cases.messages.read_messages import GetMessageUseCase
from messagely.application.use_cases.messages.send_message import SendMessageUseCase
from messagely.domain.access import Identity
from messagely.domain.messages.exceptions import InvalidMessageIdError
from messagely.interfaces.http.auth import RequestGate
from messagely.interfaces.http.dto.messages import (
    MessageDetailDTO,
    MessageDTO,
    MessageReadDTO,
    SendMessageRequestDTO,
)
from messagely.shared.errors.validation import raise_validation_error
from messagely.shared.logging import logger

_MESSAGE_ID_RE = re.compile(r"[1-9][0-9]{0,18}")
# Ids are stored as signed 64-bit integers.
MAX_MESSAGE_ID = 2**63 - 1


def parse_message_id(raw: str) -> int:
    if not _MESSAGE_ID_RE.fullmatch(raw) or int(raw) > MAX_MESSAGE_ID:
        raise InvalidMessageIdError(raw)
    return int(raw)


class MessagesController:
    def __init__(
        self,
        *,
        gate: RequestGate,
        get_use_case: GetMessageUseCase,
        send_use_case: SendMessageUseCase,
        mark_read_use_case: MarkMessageReadUseCase,
    ) -> None:
        self._gate = gate
        self._get_use_case = get_use_case
        self._send_use_case = send_use_case
        self._mark_read_use_case = mark_read_use_case

    def get_message(self, message_id: str, *, identity: Identity) -> tuple[Response, int]:
        detail = self._get_use_case.execute(identity, parse_message_id(message_id))
        payload = MessageDetailDTO.from_entity(detail).model_dump(mode="json")
        return jsonify({"message": payload}), 200

    def send_message(self, *, identity: Identity) -> tuple[Response, int]:
        try:
            dto = SendMessageRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        message = self._send_use_case.execute(identity, dto.to_username, dto.body)
        payload = MessageDTO.from_entity(message).model_dump(mode="json")
        return jsonify({"message": payload}), 201

    def mark_read(self, message_id: str, *, identity: Identity) -> tuple[Response, int]:
        message = self._mark_read_use_case.execute(identity, parse_message_id(message_id))
        logger.info(f"messages.mark_read: id={message.id} user={identity.username}")
        payload = MessageReadDTO.from_entity(message).model_dump(mode="json")
        return jsonify({"message": payload}), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("messages", __name__, url_prefix="/messages")
        login_required = self._gate.login_required

        bp.add_url_rule(
            "", view_func=login_required(self.send_message), methods=["POST"], endpoint="send"
        )
        bp.add_url_rule(
            "/<message_id>",
            view_func=login_required(self.get_message),
            methods=["GET"],
            endpoint="detail",
        )
        bp.add_url_rule(
            "/<message_id>",
            view_func=login_required(self.mark_read),
            methods=["POST"],
            endpoint="mark_read",
        )
        bp.add_url_rule(
            "/<message_id>/read",
            view_func=login_required(self.mark_read),
            methods=["POST"],
            endpoint="mark_read_explicit",
        )
        return bp
