# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from messagely.shared.errors.base import AuthorizationError

from .policy import Operation


class AccessDeniedError(AuthorizationError):
    def __init__(self, operation: Operation) -> None:
        super().__init__(context={"operation": str(operation)})
