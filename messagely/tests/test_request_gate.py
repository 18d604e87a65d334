from __future__ import annotations

import pytest
from flask import Flask, jsonify

from messagely.application.services.token_service import JoseTokenService
from messagely.domain.access import Identity
from messagely.interfaces.http.auth import RequestGate
from messagely.shared.middleware.error_handler import configure_error_handling


@pytest.fixture()
def tokens() -> JoseTokenService:
    return JoseTokenService("gate-secret")


@pytest.fixture()
def gated_app(tokens: JoseTokenService) -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    gate = RequestGate(tokens=tokens)
    gate.bind(app)

    @app.get("/open")
    def open_view():
        return jsonify({"ok": True})

    @app.get("/whoami")
    @gate.login_required
    def whoami(*, identity: Identity):
        return jsonify({"username": identity.username})

    @app.get("/users/<username>")
    @gate.correct_user_required
    def profile(username: str, *, identity: Identity):
        return jsonify({"username": username})

    return app


def test_anonymous_allowed_on_open_route(gated_app: Flask) -> None:
    response = gated_app.test_client().get("/open")
    assert response.status_code == 200


def test_anonymous_rejected_on_protected_route(gated_app: Flask) -> None:
    response = gated_app.test_client().get("/whoami")
    assert response.status_code == 401
    assert response.get_json()["error"] == "unauthorized"


def test_bearer_token_establishes_identity(gated_app: Flask, tokens: JoseTokenService) -> None:
    response = gated_app.test_client().get(
        "/whoami", headers={"Authorization": f"Bearer {tokens.issue('alice')}"}
    )
    assert response.status_code == 200
    assert response.get_json() == {"username": "alice"}


def test_query_token_establishes_identity(gated_app: Flask, tokens: JoseTokenService) -> None:
    response = gated_app.test_client().get(f"/whoami?_token={tokens.issue('bob')}")
    assert response.get_json() == {"username": "bob"}


def test_invalid_token_fails_even_on_open_route(gated_app: Flask) -> None:
    response = gated_app.test_client().get("/open", headers={"Authorization": "Bearer junk"})
    assert response.status_code == 401
    assert response.get_json()["error"] == "invalid_token"


def test_correct_user_gate(gated_app: Flask, tokens: JoseTokenService) -> None:
    client = gated_app.test_client()
    headers = {"Authorization": f"Bearer {tokens.issue('alice')}"}

    assert client.get("/users/alice", headers=headers).status_code == 200

    mismatch = client.get("/users/bob", headers=headers)
    assert mismatch.status_code == 401
    assert mismatch.get_json()["error"] == "access_denied"

    assert client.get("/users/alice").status_code == 401
