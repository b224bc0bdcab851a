"""bcrypt hashing for persisted IRC account passwords.

Passwords up to 72 bytes are hashed as plain bcrypt so The Lounge can check
them itself. Longer ones would be truncated by bcrypt, so their SHA-256
digest is hashed instead and the result carries ``PREHASH_MARKER``.
"""

from __future__ import annotations

import asyncio
import base64
import hashlib
from dataclasses import dataclass

import bcrypt
from loguru import logger

from lounge.core.constants import BCRYPT_MAX_PASSWORD_BYTES, BCRYPT_ROUNDS, PREHASH_MARKER


def _prehash(secret: bytes) -> bytes:
    return base64.b64encode(hashlib.sha256(secret).digest())


@dataclass(frozen=True)
class Credential:
    """Persisted IRC account record: the account key and an opaque password hash."""

    username: str
    password_hash: str


class CredentialStore:
    """Salted one-way hashing and verification. Does not persist anything."""

    def __init__(self, *, rounds: int = BCRYPT_ROUNDS) -> None:
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, plain_password: str) -> str:
        """Hash with a fresh salt. Errors from bcrypt propagate."""
        secret = plain_password.encode("utf-8")
        salt = bcrypt.gensalt(rounds=self._rounds)
        if len(secret) <= BCRYPT_MAX_PASSWORD_BYTES:
            return bcrypt.hashpw(secret, salt).decode("ascii")
        return PREHASH_MARKER + bcrypt.hashpw(_prehash(secret), salt).decode("ascii")

    def verify(self, plain_password: str, password_hash: str | bytes) -> bool:
        """Constant-time check of a password against a stored hash.

        Malformed or foreign hashes yield False.
        """
        if isinstance(password_hash, bytes):
            try:
                password_hash = password_hash.decode("ascii")
            except UnicodeDecodeError:
                return False
        if not isinstance(password_hash, str):
            return False

        secret = plain_password.encode("utf-8")
        if password_hash.startswith(PREHASH_MARKER):
            secret = _prehash(secret)
            password_hash = password_hash[len(PREHASH_MARKER) :]
        elif len(secret) > BCRYPT_MAX_PASSWORD_BYTES:
            # A plain bcrypt hash can only come from a password of at most 72 bytes
            return False

        try:
            return bcrypt.checkpw(secret, password_hash.encode("ascii"))
        except (ValueError, TypeError) as exc:
            logger.debug("Rejecting malformed password hash: {}", exc)
            return False

    def credential(self, username: str, plain_password: str) -> Credential:
        """Build the record to hand to the persistence layer."""
        return Credential(username=username, password_hash=self.hash(plain_password))

    async def hash_async(self, plain_password: str) -> str:
        """Non-blocking ``hash`` using the default executor."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.hash, plain_password)

    async def verify_async(self, plain_password: str, password_hash: str | bytes) -> bool:
        """Non-blocking ``verify`` using the default executor."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.verify, plain_password, password_hash)


_default_store = CredentialStore()


def hash_password(plain_password: str) -> str:
    return _default_store.hash(plain_password)


def verify_password(plain_password: str, password_hash: str | bytes) -> bool:
    return _default_store.verify(plain_password, password_hash)
