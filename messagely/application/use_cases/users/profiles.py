# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Profile reads and owner-only updates."""

from __future__ import annotations

from collections.abc import Sequence

from messagely.application.services.credential_store import CredentialStore
from messagely.domain.access import AccessDeniedError, AccessPolicy, Identity, Operation
from messagely.domain.users.entities import Profile, UserDetail


class _ProfileUseCase:
    def __init__(self, *, credentials: CredentialStore, policy: AccessPolicy) -> None:
        self._credentials = credentials
        self._policy = policy

    def _ensure_owner(self, identity: Identity, username: str, operation: Operation) -> None:
        if not self._policy.allows(identity, operation, Profile(username, "", "", "")):
            raise AccessDeniedError(operation)


class GetProfileUseCase(_ProfileUseCase):
    def execute(self, identity: Identity, username: str) -> UserDetail:
        self._ensure_owner(identity, username, Operation.READ_PROFILE)
        return self._credentials.get_profile(username)


class UpdateProfileUseCase(_ProfileUseCase):
    def execute(
        self,
        identity: Identity,
        username: str,
        *,
        first_name: str | None = None,
        last_name: str | None = None,
        phone: str | None = None,
    ) -> UserDetail:
        self._ensure_owner(identity, username, Operation.UPDATE_PROFILE)
        return self._credentials.update_profile(
            username, first_name=first_name, last_name=last_name, phone=phone
        )


class ListUsersUseCase:
    def __init__(self, *, credentials: CredentialStore) -> None:
        self._credentials = credentials

    def execute(self) -> Sequence[Profile]:
        return self._credentials.list_profiles()
