from .base import (
    AppError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    InfrastructureError,
    MissingFieldError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from .http import handle_app_error, register_error_handler

__all__ = [
    "AppError",
    "AuthenticationError",
    "AuthorizationError",
    "ConflictError",
    "DomainError",
    "InfrastructureError",
    "MissingFieldError",
    "NotFoundError",
    "StoreError",
    "ValidationError",
    "handle_app_error",
    "register_error_handler",
]
