"""Bearer token signing and verification (HS256 JWT)."""

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from phonebook.application.errors import InvalidTokenError

ALGORITHM = "HS256"


class JwtTokenCodec:
    """
    Signs claims into a JWT with a shared secret. Tokens carry no expiry
    unless expire_minutes is set, in which case an ``exp`` claim is added
    and checked on decode.
    """

    def __init__(self, secret: str, *, expire_minutes: int | None = None) -> None:
        if not secret:
            raise ValueError("Token signing secret must be non-empty.")
        self._secret = secret
        self._expire_minutes = expire_minutes

    def encode(self, claims: dict[str, Any]) -> str:
        payload = dict(claims)
        if self._expire_minutes:
            payload["exp"] = datetime.now(timezone.utc) + timedelta(minutes=self._expire_minutes)
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def decode(self, token: str) -> dict[str, Any]:
        try:
            return jwt.decode(token, self._secret, algorithms=[ALGORITHM])
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(str(e)) from e
