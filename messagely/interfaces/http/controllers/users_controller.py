# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""HTTP controller for user directory and per-user mailboxes."""

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from messagely.application.use_cases.messages.read_messages import ListMessagesUseCase
from messagely.application.use_cases.users.profiles import (
    GetProfileUseCase,
    ListUsersUseCase,
    UpdateProfileUseCase,
)
from messagely.domain.access import Identity
from messagely.interfaces.http.auth import RequestGate
from messagely.interfaces.http.dto.messages import MessageDetailDTO
from messagely.interfaces.http.dto.users import (
    ProfileDTO,
    UpdateProfileRequestDTO,
    UserDetailDTO,
)
from messagely.shared.errors.validation import raise_validation_error


class UsersController:
    def __init__(
        self,
        *,
        gate: RequestGate,
        list_use_case: ListUsersUseCase,
        get_use_case: GetProfileUseCase,
        update_use_case: UpdateProfileUseCase,
        messages_use_case: ListMessagesUseCase,
    ) -> None:
        self._gate = gate
        self._list_use_case = list_use_case
        self._get_use_case = get_use_case
        self._update_use_case = update_use_case
        self._messages_use_case = messages_use_case

    def list_users(self, *, identity: Identity) -> tuple[Response, int]:
        users = [
            ProfileDTO.from_entity(profile).model_dump(mode="json")
            for profile in self._list_use_case.execute()
        ]
        return jsonify({"users": users}), 200

    def get_user(self, username: str, *, identity: Identity) -> tuple[Response, int]:
        user = self._get_use_case.execute(identity, username)
        return jsonify({"user": UserDetailDTO.from_entity(user).model_dump(mode="json")}), 200

    def update_user(self, username: str, *, identity: Identity) -> tuple[Response, int]:
        try:
            dto = UpdateProfileRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user = self._update_use_case.execute(
            identity,
            username,
            first_name=dto.first_name,
            last_name=dto.last_name,
            phone=dto.phone,
        )
        return jsonify({"user": UserDetailDTO.from_entity(user).model_dump(mode="json")}), 200

    def messages_to(self, username: str, *, identity: Identity) -> tuple[Response, int]:
        messages = [
            MessageDetailDTO.from_entity(detail).model_dump(mode="json", exclude={"to_user"})
            for detail in self._messages_use_case.received(identity)
        ]
        return jsonify({"messages": messages}), 200

    def messages_from(self, username: str, *, identity: Identity) -> tuple[Response, int]:
        messages = [
            MessageDetailDTO.from_entity(detail).model_dump(mode="json", exclude={"from_user"})
            for detail in self._messages_use_case.sent(identity)
        ]
        return jsonify({"messages": messages}), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("users", __name__, url_prefix="/users")
        login_required = self._gate.login_required
        correct_user = self._gate.correct_user_required

        bp.add_url_rule(
            "", view_func=login_required(self.list_users), methods=["GET"], endpoint="list"
        )
        bp.add_url_rule(
            "/<username>", view_func=correct_user(self.get_user), methods=["GET"], endpoint="detail"
        )
        bp.add_url_rule(
            "/<username>",
            view_func=correct_user(self.update_user),
            methods=["PATCH"],
            endpoint="update",
        )
        bp.add_url_rule(
            "/<username>/to",
            view_func=correct_user(self.messages_to),
            methods=["GET"],
            endpoint="messages_to",
        )
        bp.add_url_rule(
            "/<username>/from",
            view_func=correct_user(self.messages_from),
            methods=["GET"],
            endpoint="messages_from",
        )
        return bp
