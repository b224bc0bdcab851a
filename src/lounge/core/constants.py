"""Shared constants and literal types."""

from __future__ import annotations

import string
from typing import Literal

Theme = Literal["light", "dark"]
THEMES: tuple[Theme, ...] = ("light", "dark")

ChatMode = Literal["single", "normal"]
CHAT_MODES: tuple[ChatMode, ...] = ("single", "normal")

DisplayMode = Literal["modal", "fullpage"]
DISPLAY_MODES: tuple[DisplayMode, ...] = ("modal", "fullpage")

DEFAULT_CHAT_BASE_URL = "https://chat.curia.network"
PROVISION_PATH = "/api/irc-user-provision"

# IRC identity limits
IRC_NAME_MAX_LEN = 32
UNIQUE_ID_SUFFIX_LEN = 4
NICK_FALLBACK = "user"
NICK_DIGIT_PREFIX = "u_"

# Alphanumeric only: no character needs percent-encoding in the auto-login URL
PASSWORD_ALPHABET = string.digits + string.ascii_uppercase + string.ascii_lowercase
PASSWORD_LENGTH = 20

# Same cost as the bouncer's existing accounts
BCRYPT_ROUNDS = 10
# bcrypt only reads this many bytes of its input
BCRYPT_MAX_PASSWORD_BYTES = 72
# Marks hashes of over-long passwords, which are SHA-256 digested before bcrypt
PREHASH_MARKER = "$sha256"

GENERIC_PROVISION_ERROR = "Failed to connect to chat"
