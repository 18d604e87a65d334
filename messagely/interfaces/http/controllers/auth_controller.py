# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from messagely.application.use_cases.users.login_user import LoginUserUseCase
from messagely.application.use_cases.users.register_user import (
    RegisterUserInput,
    RegisterUserUseCase,
)
from messagely.interfaces.http.dto.auth import LoginRequestDTO, RegisterRequestDTO, TokenDTO
from messagely.shared.errors.validation import raise_validation_error
from messagely.shared.logging import logger


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case

    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user, token = self._register_use_case.execute(
            RegisterUserInput(
                username=dto.username,
                password=dto.password,
                first_name=dto.first_name,
                last_name=dto.last_name,
                phone=dto.phone,
            )
        )

        logger.info(f"auth.register: ok username={user.username}")
        return jsonify(TokenDTO(token=token).model_dump()), 201

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        token = self._login_use_case.execute(dto.username, dto.password)

        logger.info(f"auth.login: ok username={dto.username}")
        return jsonify(TokenDTO(token=token).model_dump()), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__)
        for prefix in ("/auth", ""):
            bp.add_url_rule(
                f"{prefix}/register",
                view_func=self.register,
                methods=["POST"],
                endpoint=f"register{prefix.replace('/', '_')}",
            )
            bp.add_url_rule(
                f"{prefix}/login",
                view_func=self.login,
                methods=["POST"],
                endpoint=f"login{prefix.replace('/', '_')}",
            )
        return bp
