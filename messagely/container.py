"""Application dependency container."""

from __future__ import annotations

from collections.abc import Callable
from functools import cached_property

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from messagely.application.services.credential_store import CredentialStore
from messagely.application.services.password_hashing import WerkzeugPasswordHasher
from messagely.application.services.token_service import JoseTokenService
from messagely.application.use_cases.messages.mark_read import MarkMessageReadUseCase
from messagely.application.use_cases.messages.read_messages import (
    GetMessageUseCase,
    ListMessagesUseCase,
)
from messagely.application.use_cases.messages.send_message import SendMessageUseCase
from messagely.application.use_cases.users.login_user import LoginUserUseCase
from messagely.application.use_cases.users.profiles import (
    GetProfileUseCase,
    ListUsersUseCase,
    UpdateProfileUseCase,
)
from messagely.application.use_cases.users.register_user import RegisterUserUseCase
from messagely.domain.access import AccessPolicy
from messagely.infrastructure.db import create_db_engine, create_session_factory
from messagely.infrastructure.repositories.messages.sqlalchemy_message_repository import (
    SqlAlchemyMessageRepository,
)
from messagely.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from messagely.interfaces.http.auth import RequestGate
from messagely.interfaces.http.controllers.auth_controller import AuthController
from messagely.interfaces.http.controllers.messages_controller import MessagesController
from messagely.interfaces.http.controllers.misc_controller import MiscController
from messagely.interfaces.http.controllers.users_controller import UsersController
from messagely.shared.config import AppConfig


class Container:
    def __init__(self, config: AppConfig) -> None:
        self.config = config

    @cached_property
    def engine(self) -> Engine:
        return create_db_engine(self.config.database)

    @cached_property
    def session_factory(self) -> Callable[[], Session]:
        return create_session_factory(self.engine)

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher(self.config.security.password_hash_spec)

    @cached_property
    def token_service(self) -> JoseTokenService:
        security = self.config.security
        return JoseTokenService(
            security.secret_key,
            algorithm=security.token_algorithm,
            ttl_seconds=security.token_ttl_seconds,
        )

    @cached_property
    def access_policy(self) -> AccessPolicy:
        return AccessPolicy()

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.session_factory)

    @cached_property
    def message_repository(self) -> SqlAlchemyMessageRepository:
        return SqlAlchemyMessageRepository(self.session_factory)

    @cached_property
    def credential_store(self) -> CredentialStore:
        return CredentialStore(users=self.user_repository, password_hasher=self.password_hasher)

    @cached_property
    def request_gate(self) -> RequestGate:
        return RequestGate(tokens=self.token_service)

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(credentials=self.credential_store, tokens=self.token_service)

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(credentials=self.credential_store, tokens=self.token_service)

    @cached_property
    def get_message_use_case(self) -> GetMessageUseCase:
        return GetMessageUseCase(
            messages=self.message_repository,
            policy=self.access_policy,
            conceal_denied=self.config.security.conceal_denied,
        )

    @cached_property
    def send_message_use_case(self) -> SendMessageUseCase:
        return SendMessageUseCase(
            messages=self.message_repository,
            users=self.user_repository,
            policy=self.access_policy,
        )

    @cached_property
    def mark_message_read_use_case(self) -> MarkMessageReadUseCase:
        return MarkMessageReadUseCase(
            messages=self.message_repository,
            policy=self.access_policy,
            conceal_denied=self.config.security.conceal_denied,
        )

    @cached_property
    def list_messages_use_case(self) -> ListMessagesUseCase:
        return ListMessagesUseCase(messages=self.message_repository)

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
        )

    @cached_property
    def messages_controller(self) -> MessagesController:
        return MessagesController(
            gate=self.request_gate,
            get_use_case=self.get_message_use_case,
            send_use_case=self.send_message_use_case,
            mark_read_use_case=self.mark_message_read_use_case,
        )

    @cached_property
    def users_controller(self) -> UsersController:
        return UsersController(
            gate=self.request_gate,
            list_use_case=ListUsersUseCase(credentials=self.credential_store),
            get_use_case=GetProfileUseCase(
                credentials=self.credential_store, policy=self.access_policy
            ),
            update_use_case=UpdateProfileUseCase(
                credentials=self.credential_store, policy=self.access_policy
            ),
            messages_use_case=self.list_messages_use_case,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(engine=self.engine)
