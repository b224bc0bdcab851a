"""Chat surface lifecycle: one provisioning session per opening of the modal or page."""

from __future__ import annotations

import asyncio

from loguru import logger

from lounge.embed.chat import ChatState
from lounge.events import Dispatcher, chat_closed, chat_opened
from lounge.provisioning.models import Loading, SessionStatus
from lounge.provisioning.session import FetchCredentials, ProvisioningSession


class ChatSurface:
    """Ties open/close of the chat UI to a provisioning session.

    Closing tears the session down so a fetch still in flight never reaches
    the UI. Reopening starts a fresh session.
    """

    def __init__(self, fetch: FetchCredentials, *, dispatcher: Dispatcher | None = None) -> None:
        self._fetch = fetch
        self._dispatcher = dispatcher
        self._state = ChatState()
        self._session: ProvisioningSession | None = None

    @property
    def state(self) -> ChatState:
        return self._state

    @property
    def session(self) -> ProvisioningSession | None:
        return self._session

    def status(self) -> SessionStatus:
        if self._session is None:
            return Loading()
        return self._session.current_status()

    def open(self, channel_id: int | None = None) -> asyncio.Task[None] | None:
        """Open the surface. Repeated opens only switch the selected channel."""
        already_open = self._state.is_open
        self._state = self._state.open(channel_id)
        self._publish(chat_opened(channel_id))
        if already_open and self._session is not None:
            return None

        self._session = ProvisioningSession(dispatcher=self._dispatcher)
        logger.debug("Chat opened (channel {}), session {}", channel_id, self._session.session_id)
        return self._session.start(self._fetch)

    def retry(self) -> asyncio.Task[None] | None:
        if self._session is None:
            return None
        return self._session.retry()

    def close(self) -> None:
        if not self._state.is_open:
            return
        if self._session is not None:
            self._session.close()
            self._session = None
        self._state = self._state.close()
        self._publish(chat_closed())

    def _publish(self, typed_event: tuple[str, object]) -> None:
        if self._dispatcher is not None:
            _, evt = typed_event
            self._dispatcher.dispatch("surface", evt)
