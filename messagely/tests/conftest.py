from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace
from datetime import datetime
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

from messagely.app import create_app
from messagely.application.services.password_hashing import WerkzeugPasswordHasher
from messagely.domain.messages.entities import Message, MessageDetail, MessageDraft
from messagely.domain.messages.repositories import MessageRepository
from messagely.domain.users.entities import Profile, User
from messagely.domain.users.exceptions import UserAlreadyExistsError
from messagely.domain.users.repositories import UserRepository
from messagely.shared.config import AppConfig, DatabaseConfig, LoggingConfig, SecurityConfig

TEST_SECRET = "test-secret-key"
FAST_HASH_METHOD = "pbkdf2:sha256:1000"


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[str, User] = {}

    def find_by_username(self, username: str) -> User | None:
        return self._users.get(username)

    def add(self, user: User) -> User:
        if user.username in self._users:
            raise UserAlreadyExistsError()
        self._users[user.username] = user
        return user

    def list_profiles(self) -> Sequence[Profile]:
        users = sorted(self._users.values(), key=lambda u: (u.last_name, u.first_name))
        return [user.profile() for user in users]

    def touch_login(self, username: str, at: datetime) -> None:
        user = self._users.get(username)
        if user is None:
            return
        if user.last_login_at is None or user.last_login_at < at:
            self._users[username] = replace(user, last_login_at=at)

    def update_profile(
        self,
        username: str,
        *,
        first_name: str | None = None,
        last_name: str | None = None,
        phone: str | None = None,
    ) -> User | None:
        user = self._users.get(username)
        if user is None:
            return None
        changes = {
            key: value
            for key, value in (("first_name", first_name), ("last_name", last_name), ("phone", phone))
            if value is not None
        }
        updated = replace(user, **changes)
        self._users[username] = updated
        return updated


class InMemoryMessageRepository(MessageRepository):
    def __init__(self, users: InMemoryUserRepository) -> None:
        self._users = users
        self._messages: dict[int, Message] = {}
        self._seq = 1
        self.get_calls = 0

    def create(self, draft: MessageDraft, sent_at: datetime) -> Message:
        message = Message(
            id=self._seq,
            from_username=draft.from_username,
            to_username=draft.to_username,
            body=draft.body,
            sent_at=sent_at,
        )
        self._seq += 1
        self._messages[message.id] = message
        return message

    def get(self, message_id: int) -> MessageDetail | None:
        self.get_calls += 1
        message = self._messages.get(message_id)
        if message is None:
            return None
        return self._detail(message)

    def mark_read(self, message_id: int, at: datetime) -> Message | None:
        message = self._messages.get(message_id)
        if message is None:
            return None
        if message.read_at is None:
            message = replace(message, read_at=at)
            self._messages[message_id] = message
        return message

    def list_from(self, username: str) -> Sequence[MessageDetail]:
        return [self._detail(m) for m in self._messages.values() if m.from_username == username]

    def list_to(self, username: str) -> Sequence[MessageDetail]:
        return [self._detail(m) for m in self._messages.values() if m.to_username == username]

    def _detail(self, message: Message) -> MessageDetail:
        sender = self._users._users[message.from_username]
        recipient = self._users._users[message.to_username]
        return MessageDetail(message=message, from_user=sender.profile(), to_user=recipient.profile())


@pytest.fixture()
def hasher() -> WerkzeugPasswordHasher:
    return WerkzeugPasswordHasher(FAST_HASH_METHOD)


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def messages(users: InMemoryUserRepository) -> InMemoryMessageRepository:
    return InMemoryMessageRepository(users)


def make_config(database_path: Path, **security: object) -> AppConfig:
    return AppConfig(
        app_env="test",
        database=DatabaseConfig(url=f"sqlite:///{database_path}"),
        security=SecurityConfig(
            secret_key=TEST_SECRET,
            password_hash_iterations=1000,
            **security,
        ),
        logging=LoggingConfig(level="WARNING"),
    )


@pytest.fixture()
def config(tmp_path: Path) -> AppConfig:
    return make_config(tmp_path / "messagely.db")


@pytest.fixture()
def app(config: AppConfig) -> Flask:
    return create_app(config)


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    return app.test_client()


def register(client: FlaskClient, username: str, password: str, **profile: str) -> str:
    payload = {
        "username": username,
        "password": password,
        "first_name": profile.get("first_name", username.capitalize()),
        "last_name": profile.get("last_name", "Tester"),
        "phone": profile.get("phone", "555-0100"),
    }
    response = client.post("/register", json=payload)
    assert response.status_code == 201, response.get_json()
    return response.get_json()["token"]


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
