"""Signed session tokens."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from jose.utils import base64url_decode, base64url_encode

from messagely.domain.users.entities import TokenClaims
from messagely.domain.users.exceptions import InvalidTokenError
from messagely.domain.users.repositories import TokenService
from messagely.shared.logging import logger


class JoseTokenService(TokenService):
    """Issue and verify HMAC-signed JWTs carrying a ``username`` claim.

    Claims are readable by anyone holding the token; the signature only makes
    them forgery-resistant. Nothing is stored server-side.
    """

    def __init__(
        self,
        secret_key: str,
        *,
        algorithm: str = "HS256",
        ttl_seconds: int | None = None,
    ) -> None:
        if not secret_key:
            raise ValueError("secret_key must not be empty")
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._ttl = timedelta(seconds=ttl_seconds) if ttl_seconds else None

    def issue(self, username: str, *, now: datetime | None = None) -> str:
        claims: dict[str, object] = {"username": username}
        if self._ttl is not None:
            issued_at = now or datetime.now(UTC)
            claims["iat"] = int(issued_at.timestamp())
            claims["exp"] = int((issued_at + self._ttl).timestamp())
        return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        if not token or not _has_canonical_signature(token):
            raise InvalidTokenError()
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require_exp": self._ttl is not None},
            )
        except JWTError as exc:
            logger.debug(f"token.verify: rejected ({type(exc).__name__})")
            raise InvalidTokenError() from exc

        username = payload.get("username")
        if not isinstance(username, str) or not username:
            raise InvalidTokenError()

        return TokenClaims(
            username=username,
            issued_at=_from_timestamp(payload.get("iat")),
            expires_at=_from_timestamp(payload.get("exp")),
        )


def _has_canonical_signature(token: str) -> bool:
    # base64url ignores the spare low bits of the final character, so two
    # different strings can decode to the same signature bytes.
    parts = token.split(".")
    if len(parts) != 3 or not parts[2]:
        return False
    segment = parts[2].encode("ascii", errors="replace")
    try:
        return base64url_encode(base64url_decode(segment)) == segment
    except (ValueError, TypeError):
        return False


def _from_timestamp(value: object) -> datetime | None:
    if isinstance(value, int | float):
        return datetime.fromtimestamp(value, UTC)
    return None
