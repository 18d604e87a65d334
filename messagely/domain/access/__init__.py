# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .exceptions import AccessDeniedError
from .policy import AccessPolicy, Identity, Operation

__all__ = ["AccessDeniedError", "AccessPolicy", "Identity", "Operation"]
