"""Chat embedding model: channels, open/close state, iframe URL derivation."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from lounge.core.constants import DEFAULT_CHAT_BASE_URL, ChatMode, Theme
from lounge.embed.url import build_lounge_url
from lounge.provisioning.models import ProvisionedCredentials


@dataclass(frozen=True)
class ChatChannel:
    """Channel record as served by the host application's API."""

    id: int
    community_id: str
    name: str
    irc_channel_name: str
    is_single_mode: bool = False
    is_default: bool = False
    description: str | None = None
    settings: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> ChatChannel:
        settings = data.get("settings")
        return cls(
            id=int(data["id"]),
            community_id=str(data["community_id"]),
            name=str(data["name"]),
            irc_channel_name=str(data["irc_channel_name"]),
            is_single_mode=bool(data.get("is_single_mode", False)),
            is_default=bool(data.get("is_default", False)),
            description=data.get("description"),
            settings=settings if isinstance(settings, dict) else {},
        )

    @property
    def nofocus(self) -> bool:
        """settings.irc.nofocus, defaulting to True."""
        irc = self.settings.get("irc")
        if isinstance(irc, dict) and "nofocus" in irc:
            return bool(irc["nofocus"])
        return True

    @property
    def default_mode(self) -> ChatMode:
        return "single" if self.is_single_mode else "normal"


@dataclass(frozen=True)
class ChatState:
    """Caller-owned open/close state for the chat surface."""

    is_open: bool = False
    selected_channel_id: int | None = None

    def open(self, channel_id: int | None = None) -> ChatState:
        return replace(self, is_open=True, selected_channel_id=channel_id)

    def close(self) -> ChatState:
        return replace(self, is_open=False)


@dataclass(frozen=True)
class ChatTarget:
    """Where the embedded client should land for one render."""

    base_url: str
    channel_name: str
    theme: Theme | None = None
    mode: ChatMode | None = None

    def url_for(self, credentials: ProvisionedCredentials, *, nofocus: bool = False) -> str:
        """Auto-login URL; the IRC username doubles as nick and real name."""
        return build_lounge_url(
            self.base_url,
            credentials.irc_username,
            credentials.irc_password,
            credentials.network_name,
            credentials.irc_username,
            self.channel_name,
            nofocus=nofocus,
            theme=self.theme,
            mode=self.mode,
        )


def chat_url_for(
    credentials: ProvisionedCredentials,
    channel: ChatChannel,
    *,
    chat_base_url: str | None = None,
    theme: Theme = "light",
    mode: ChatMode | None = None,
) -> str:
    """Iframe URL for a channel, filling defaults from the channel record."""
    target = ChatTarget(
        base_url=chat_base_url or DEFAULT_CHAT_BASE_URL,
        channel_name=channel.irc_channel_name,
        theme=theme,
        mode=mode or channel.default_mode,
    )
    return target.url_for(credentials, nofocus=channel.nofocus)
