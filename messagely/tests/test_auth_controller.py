from __future__ import annotations

from datetime import UTC, datetime
from typing import cast
from unittest.mock import MagicMock

import pytest
from flask import Flask

from messagely.application.use_cases.users.login_user import LoginUserUseCase
from messagely.application.use_cases.users.register_user import (
    RegisterUserInput,
    RegisterUserUseCase,
)
from messagely.domain.users.entities import UserDetail
from messagely.domain.users.exceptions import InvalidCredentialsError, RegistrationFailedError
from messagely.interfaces.http.controllers.auth_controller import AuthController
from messagely.shared.middleware.error_handler import configure_error_handling

FULL_PAYLOAD = {
    "username": "alice",
    "password": "pw1",
    "first_name": "Alice",
    "last_name": "Smith",
    "phone": "555-0100",
}


@pytest.fixture()
def flask_app() -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    return app


def test_register_endpoint_returns_token(flask_app: Flask) -> None:
    register_called: dict[str, RegisterUserInput] = {}

    class StubRegister:
        def execute(self, data: RegisterUserInput) -> tuple[UserDetail, str]:
            register_called["data"] = data
            return (
                UserDetail(
                    username=data.username,
                    first_name=data.first_name,
                    last_name=data.last_name,
                    phone=data.phone,
                    joined_at=datetime.now(UTC),
                    last_login_at=None,
                ),
                "token123",
            )

    controller = AuthController(
        register_use_case=cast(RegisterUserUseCase, StubRegister()),
        login_use_case=MagicMock(),
    )
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/register", json=FULL_PAYLOAD)

    assert response.status_code == 201
    assert response.get_json() == {"token": "token123"}
    assert register_called["data"].username == "alice"
    assert register_called["data"].phone == "555-0100"


@pytest.mark.parametrize("missing", ["username", "password", "first_name", "last_name", "phone"])
def test_register_missing_field_returns_400(flask_app: Flask, missing: str) -> None:
    register = MagicMock()
    controller = AuthController(register_use_case=register, login_use_case=MagicMock())
    flask_app.register_blueprint(controller.as_blueprint())
    payload = {k: v for k, v in FULL_PAYLOAD.items() if k != missing}

    with flask_app.test_client() as client:
        response = client.post("/auth/register", json=payload)

    assert response.status_code == 400
    body = response.get_json()
    assert body["error"] == "missing_field"
    assert body["context"]["fields"] == [missing]
    register.execute.assert_not_called()


@pytest.mark.parametrize("blank", [None, ""])
@pytest.mark.parametrize("field", ["username", "first_name", "phone"])
def test_register_null_or_empty_field_is_missing(
    flask_app: Flask, field: str, blank: str | None
) -> None:
    register = MagicMock()
    controller = AuthController(register_use_case=register, login_use_case=MagicMock())
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/register", json={**FULL_PAYLOAD, field: blank})

    assert response.status_code == 400
    body = response.get_json()
    assert body["error"] == "missing_field"
    assert body["context"]["fields"] == [field]
    register.execute.assert_not_called()


def test_register_accepts_email_style_username(flask_app: Flask) -> None:
    register = MagicMock()
    register.execute.return_value = (MagicMock(), "tok")
    controller = AuthController(register_use_case=register, login_use_case=MagicMock())
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/register", json={**FULL_PAYLOAD, "username": "alice@example.com"}
        )

    assert response.status_code == 201
    assert register.execute.call_args.args[0].username == "alice@example.com"


def test_register_rejected_by_store_returns_500(flask_app: Flask) -> None:
    register = MagicMock()
    register.execute.side_effect = RegistrationFailedError()
    controller = AuthController(register_use_case=register, login_use_case=MagicMock())
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/register", json=FULL_PAYLOAD)

    assert response.status_code == 500
    assert response.get_json()["error"] == "registration_failed"


def test_login_success(flask_app: Flask) -> None:
    login = MagicMock(spec=LoginUserUseCase)
    login.execute.return_value = "tok"
    controller = AuthController(register_use_case=MagicMock(), login_use_case=login)
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/login", json={"username": "alice", "password": "pw1"})

    assert response.status_code == 200
    assert response.get_json() == {"token": "tok"}
    login.execute.assert_called_once_with("alice", "pw1")


def test_login_invalid_credentials_returns_400(flask_app: Flask) -> None:
    login = MagicMock()
    login.execute.side_effect = InvalidCredentialsError()
    controller = AuthController(register_use_case=MagicMock(), login_use_case=login)
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/auth/login", json={"username": "alice", "password": "bad"})

    assert response.status_code == 400
    payload = response.get_json()
    assert payload["error"] == "invalid_credentials"
    assert payload["message"]


def test_login_invalid_payload_returns_400(flask_app: Flask) -> None:
    controller = AuthController(register_use_case=MagicMock(), login_use_case=MagicMock())
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/login", json={"username": "a"})

    assert response.status_code == 400
    assert response.get_json()["error"] == "missing_field"
