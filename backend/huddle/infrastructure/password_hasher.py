"""Password Hasher — one-way credential function backed by passlib bcrypt.

Invariants:
    - hash() output is never reversible and never leaves the credential store
    - Passwords longer than PASSWORD_MAX_BYTES (UTF-8) are never truncated:
      hash() rejects them, verify() returns False
    - verify() never raises on a malformed stored credential; it returns False
    - dummy_verify() burns the same work as a real verify (unknown-user path)

Design Decisions:
    - passlib CryptContext: algorithm upgrades via deprecated="auto" without
      touching callers
    - Rounds configurable so tests run with the bcrypt minimum
"""

import logging

from passlib.context import CryptContext

from huddle.core.domain_types import PASSWORD_MAX_BYTES

logger = logging.getLogger(__name__)


def fits_bcrypt(password: str) -> bool:
    return len(password.encode("utf-8")) <= PASSWORD_MAX_BYTES


class PasswordHasher:
    """hash(password) -> credential / verify(password, credential) -> bool."""

    def __init__(self, rounds: int = 12):
        self._context = CryptContext(
            schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds,
        )

    def hash(self, password: str) -> str:
        if not fits_bcrypt(password):
            raise ValueError(
                f"password exceeds {PASSWORD_MAX_BYTES} bytes",
            )
        return self._context.hash(password)

    def verify(self, password: str, credential: str) -> bool:
        if not fits_bcrypt(password):
            self._context.dummy_verify()
            return False
        try:
            return self._context.verify(password, credential)
        except ValueError:
            logger.warning("Stored credential has an unrecognized format")
            return False

    def dummy_verify(self) -> None:
        self._context.dummy_verify()
