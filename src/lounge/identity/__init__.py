"""IRC identity generation and credential hashing."""

from lounge.identity.credentials import (
    Credential,
    CredentialStore,
    hash_password,
    verify_password,
)
from lounge.identity.generator import Identity, generate_identity, nickname, password, username

__all__ = [
    "Credential",
    "CredentialStore",
    "Identity",
    "generate_identity",
    "hash_password",
    "nickname",
    "password",
    "username",
    "verify_password",
]
