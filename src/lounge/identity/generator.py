"""IRC identity generation from application user profiles.

Usernames and nicknames are derived deterministically from the display name.
Collision handling is the caller's job: ``username`` only appends a short
suffix of the user's id to make clashes between equal display names unlikely.
"""

from __future__ import annotations

import re
import secrets
from dataclasses import dataclass

from lounge.core.constants import (
    IRC_NAME_MAX_LEN,
    NICK_DIGIT_PREFIX,
    NICK_FALLBACK,
    PASSWORD_ALPHABET,
    PASSWORD_LENGTH,
    UNIQUE_ID_SUFFIX_LEN,
)

# RFC 2812 user: no whitespace, no '@', no control characters
_USERNAME_FORBIDDEN_RE = re.compile(r"[\s@\x00-\x1f\x7f]")
# RFC 2812 nickname alphabet (lower-cased); '-' handled by the leading-char rule
_NICK_FORBIDDEN_RE = re.compile(r"[^a-z0-9_\-\[\]\\`^{}|]")


@dataclass(frozen=True)
class Identity:
    """IRC identity derived for one application user."""

    username: str
    nickname: str
    password: str


def username(display_name: str, unique_id: str | None = None) -> str:
    """Build an IRC username from a display name.

    With ``unique_id``, ``_`` plus its last four characters is appended before
    truncation. The result may be empty or all underscores for degenerate input.
    """
    raw = display_name
    if unique_id:
        raw = f"{display_name}_{unique_id[-UNIQUE_ID_SUFFIX_LEN:]}"
    cleaned = _USERNAME_FORBIDDEN_RE.sub("_", raw.lower())
    return cleaned[:IRC_NAME_MAX_LEN]


def nickname(display_name: str) -> str:
    """Build an IRC nickname from a display name. Never returns an empty string."""
    lowered = display_name.strip().lower()
    if not _NICK_FORBIDDEN_RE.sub("", lowered):
        # Empty, or nothing survives cleaning
        return NICK_FALLBACK

    cleaned = _NICK_FORBIDDEN_RE.sub("_", lowered)
    if cleaned[0].isdigit() or cleaned[0] == "-":
        cleaned = NICK_DIGIT_PREFIX + cleaned
    return cleaned[:IRC_NAME_MAX_LEN]


def password() -> str:
    """Random alphanumeric password from the OS CSPRNG."""
    return "".join(secrets.choice(PASSWORD_ALPHABET) for _ in range(PASSWORD_LENGTH))


def generate_identity(display_name: str, unique_id: str | None = None) -> Identity:
    """Derive a full identity (username, nickname, fresh password) for a user."""
    return Identity(
        username=username(display_name, unique_id),
        nickname=nickname(display_name),
        password=password(),
    )
