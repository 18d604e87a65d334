"""Password hashing strategies."""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from messagely.domain.users.repositories import PasswordHasher
from messagely.shared.logging import logger


class WerkzeugPasswordHasher(PasswordHasher):
    """Salted, deliberately slow hashing via ``werkzeug.security``.

    ``method`` is a werkzeug method string; for PBKDF2 the trailing number is
    the iteration count, e.g. ``pbkdf2:sha256:600000``. Every call to
    :meth:`hash` draws a fresh salt.
    """

    def __init__(self, method: str = "pbkdf2:sha256:600000", *, salt_length: int = 16) -> None:
        self._method = method
        self._salt_length = salt_length

    def hash(self, password: str) -> str:
        return str(
            generate_password_hash(password, method=self._method, salt_length=self._salt_length)
        )

    def verify(self, password: str, hashed: str) -> bool:
        try:
            return bool(check_password_hash(hashed, password))
        except (ValueError, TypeError):
            logger.warning("password_hasher: malformed digest rejected")
            return False

