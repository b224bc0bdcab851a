"""Embedded client URL and chat surface model."""

from lounge.embed.chat import ChatChannel, ChatState, ChatTarget, chat_url_for
from lounge.embed.surface import ChatSurface
from lounge.embed.url import LoungeUrlParams, build_lounge_url, redact_lounge_url

__all__ = [
    "ChatChannel",
    "ChatState",
    "ChatSurface",
    "ChatTarget",
    "LoungeUrlParams",
    "build_lounge_url",
    "chat_url_for",
    "redact_lounge_url",
]
