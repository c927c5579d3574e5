"""Token Service — issues and validates signed, time-bounded identity tokens.

Invariants:
    - Tokens carry sub (username), iat and exp; nothing else is trusted
    - validate() is a pure function of the token and the clock: no store lookup
    - Expiry compared against the injected clock, so every replica agrees
    - An empty signing key is rejected at construction (fatal misconfiguration)

Design Decisions:
    - PyJWT HS256: symmetric key shared by all API replicas
    - PyJWT's own exp/iat checks disabled; the clock check below is the single
      source of truth, which keeps expiry testable
"""

import logging
from datetime import datetime, timedelta
from typing import Callable

import jwt

from huddle.core.domain_types import utc_now
from huddle.core.errors import (
    InvalidTokenError, TokenExpiredError, TokenSigningError,
)

logger = logging.getLogger(__name__)

REQUIRED_CLAIMS = ["sub", "exp", "iat"]


class TokenService:
    """issue(username) -> token / validate(token) -> username."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(hours=24),
        clock: Callable[[], datetime] = utc_now,
    ):
        if not secret_key:
            raise TokenSigningError("signing key is not configured")
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._ttl = ttl
        self._clock = clock

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, username: str) -> str:
        issued_at = self._clock()
        payload = {
            "sub": username,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self._ttl).timestamp()),
        }
        try:
            return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
        except (NotImplementedError, TypeError, ValueError) as e:
            logger.critical(f"Token signing failed: {e}")
            raise TokenSigningError(str(e)) from e

    def validate(self, token: str) -> str:
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={
                    "require": REQUIRED_CLAIMS,
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except jwt.InvalidTokenError as e:
            logger.info(f"Rejected token: {e}")
            raise InvalidTokenError() from e

        username = payload["sub"]
        if not isinstance(username, str) or not username:
            raise InvalidTokenError()
        if not isinstance(payload["exp"], (int, float)):
            raise InvalidTokenError()
        if payload["exp"] <= self._clock().timestamp():
            raise TokenExpiredError()
        return username
