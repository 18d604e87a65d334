# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .access import AccessDeniedError, AccessPolicy, Identity, Operation
from .exceptions import InvariantViolation
from .messages import Message, MessageDetail, MessageDraft
from .users import Profile, TokenClaims, User, UserDetail

__all__ = [
    "AccessDeniedError",
    "AccessPolicy",
    "Identity",
    "InvariantViolation",
    "Message",
    "MessageDetail",
    "MessageDraft",
    "Operation",
    "Profile",
    "TokenClaims",
    "User",
    "UserDetail",
]
