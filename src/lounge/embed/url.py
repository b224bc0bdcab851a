"""The Lounge auto-login URL.

Query contract, in order::

    password, autoconnect=true, nick, username=<irc user>/<network>,
    realname, join=#<channel>, [theme], [mode], [nofocus=true]

Values go through ``urlencode`` so a channel name containing ``&`` or ``#``
stays inside its own slot.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from loguru import logger

REDACTED = "***"
_SECRET_KEYS = frozenset({"password", "al-password"})


def build_lounge_url(
    base_url: str,
    irc_username: str,
    irc_password: str,
    network_name: str,
    user_nick: str,
    channel_name: str,
    *,
    nofocus: bool = False,
    theme: str | None = None,
    mode: str | None = None,
) -> str:
    """Assemble the iframe URL. Pure: no network or file access."""
    params: list[tuple[str, str]] = [
        ("password", irc_password),
        ("autoconnect", "true"),
        ("nick", user_nick),
        ("username", f"{irc_username}/{network_name}"),
        ("realname", user_nick),
        ("join", f"#{channel_name}"),
    ]
    if theme:
        params.append(("theme", theme))
    if mode:
        params.append(("mode", mode))
    if nofocus:
        params.append(("nofocus", "true"))

    separator = "&" if "?" in base_url else "?"
    url = f"{base_url}{separator}{urlencode(params)}"
    logger.debug("Built Lounge URL for user: {}", irc_username)
    return url


def redact_lounge_url(url: str) -> str:
    """Mask password values so the URL can be logged or displayed."""
    parts = urlsplit(url)
    query = [
        (key, REDACTED if key in _SECRET_KEYS else value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
    ]
    return urlunsplit(parts._replace(query=urlencode(query, safe="*")))


@dataclass(frozen=True)
class LoungeUrlParams:
    """Inputs for ``build_lounge_url`` as one immutable value."""

    base_url: str
    irc_username: str
    irc_password: str = field(repr=False)
    network_name: str
    user_nick: str
    channel_name: str
    nofocus: bool = False
    theme: str | None = None
    mode: str | None = None

    def build(self) -> str:
        return build_lounge_url(
            self.base_url,
            self.irc_username,
            self.irc_password,
            self.network_name,
            self.user_nick,
            self.channel_name,
            nofocus=self.nofocus,
            theme=self.theme,
            mode=self.mode,
        )

