from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from conftest import InMemoryMessageRepository, InMemoryUserRepository

from messagely.application.services.credential_store import CredentialStore
from messagely.application.services.password_hashing import WerkzeugPasswordHasher
from messagely.application.use_cases.messages.mark_read import MarkMessageReadUseCase
from messagely.application.use_cases.messages.read_messages import (
    GetMessageUseCase,
    ListMessagesUseCase,
)
from messagely.application.use_cases.messages.send_message import SendMessageUseCase
from messagely.domain.access import AccessDeniedError, AccessPolicy, Identity
from messagely.domain.messages.exceptions import MessageNotFoundError, RecipientNotFoundError

ALICE = Identity("alice")
BOB = Identity("bob")
CAROL = Identity("carol")


class Ticker:
    def __init__(self) -> None:
        self.now = datetime(2025, 1, 1, tzinfo=UTC)

    def __call__(self) -> datetime:
        self.now = self.now + timedelta(seconds=1)
        return self.now


@pytest.fixture(autouse=True)
def people(users: InMemoryUserRepository, hasher: WerkzeugPasswordHasher) -> None:
    credentials = CredentialStore(users=users, password_hasher=hasher)
    for name in ("alice", "bob", "carol"):
        credentials.register(name, "pw", name.capitalize(), "Tester", "555")


@pytest.fixture()
def policy() -> AccessPolicy:
    return AccessPolicy()


@pytest.fixture()
def send(
    messages: InMemoryMessageRepository, users: InMemoryUserRepository, policy: AccessPolicy
) -> SendMessageUseCase:
    return SendMessageUseCase(messages=messages, users=users, policy=policy, clock=Ticker())


def test_send_sets_sender_from_identity(send: SendMessageUseCase) -> None:
    message = send.execute(ALICE, "bob", "hi")

    assert message.from_username == "alice"
    assert message.to_username == "bob"
    assert message.sent_at is not None
    assert message.read_at is None


def test_send_to_unknown_recipient(send: SendMessageUseCase) -> None:
    with pytest.raises(RecipientNotFoundError):
        send.execute(ALICE, "nobody", "hi")


def test_get_message_visible_to_both_endpoints(
    send: SendMessageUseCase, messages: InMemoryMessageRepository, policy: AccessPolicy
) -> None:
    message = send.execute(ALICE, "bob", "hi")
    get = GetMessageUseCase(messages=messages, policy=policy)

    for identity in (ALICE, BOB):
        detail = get.execute(identity, message.id)
        assert detail.from_user.username == "alice"
        assert detail.to_user.username == "bob"

    with pytest.raises(AccessDeniedError):
        get.execute(CAROL, message.id)


def test_get_missing_message(messages: InMemoryMessageRepository, policy: AccessPolicy) -> None:
    with pytest.raises(MessageNotFoundError):
        GetMessageUseCase(messages=messages, policy=policy).execute(ALICE, 99)


def test_conceal_mode_reports_denial_as_not_found(
    send: SendMessageUseCase, messages: InMemoryMessageRepository, policy: AccessPolicy
) -> None:
    message = send.execute(ALICE, "bob", "hi")
    get = GetMessageUseCase(messages=messages, policy=policy, conceal_denied=True)

    with pytest.raises(MessageNotFoundError):
        get.execute(CAROL, message.id)


def test_mark_read_recipient_only_and_idempotent(
    send: SendMessageUseCase, messages: InMemoryMessageRepository, policy: AccessPolicy
) -> None:
    message = send.execute(ALICE, "bob", "hi")
    mark = MarkMessageReadUseCase(messages=messages, policy=policy, clock=Ticker())

    with pytest.raises(AccessDeniedError):
        mark.execute(ALICE, message.id)

    first = mark.execute(BOB, message.id)
    second = mark.execute(BOB, message.id)

    assert first.read_at is not None
    assert second.read_at == first.read_at


def test_mark_read_missing_message(
    messages: InMemoryMessageRepository, policy: AccessPolicy
) -> None:
    with pytest.raises(MessageNotFoundError):
        MarkMessageReadUseCase(messages=messages, policy=policy).execute(BOB, 42)


def test_list_sent_and_received(
    send: SendMessageUseCase, messages: InMemoryMessageRepository
) -> None:
    send.execute(ALICE, "bob", "one")
    send.execute(ALICE, "carol", "two")
    send.execute(BOB, "alice", "three")
    listing = ListMessagesUseCase(messages=messages)

    assert [d.message.body for d in listing.sent(ALICE)] == ["one", "two"]
    assert [d.message.body for d in listing.received(ALICE)] == ["three"]
    assert [d.to_user.username for d in listing.sent(ALICE)] == ["bob", "carol"]
