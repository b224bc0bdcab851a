"""Provisioning session: one credential fetch per logical chat session.

The owning UI may call ``start`` several times in quick succession (duplicate
mount notifications). The in-flight guard is set before the fetch task is
created and cleared when that attempt settles, so only the first call issues
a fetch. ``close`` makes any late result invisible.
"""

from __future__ import annotations

import asyncio
import uuid
from collections.abc import Awaitable, Callable
from typing import Any

from loguru import logger

from lounge.core.constants import GENERIC_PROVISION_ERROR
from lounge.core.errors import ProvisioningError
from lounge.events import Dispatcher, status_changed
from lounge.provisioning.models import Error, Loading, ProvisionedCredentials, Ready, SessionStatus

FetchCredentials = Callable[[], Awaitable[Any]]


def _error_message(exc: BaseException) -> str:
    """Most specific human-readable text for a failed fetch."""
    text = str(exc).strip()
    return text or GENERIC_PROVISION_ERROR


def _outcome(result: Any) -> SessionStatus:
    """Map a fetch result to Ready or Error."""
    if isinstance(result, dict):
        try:
            result = ProvisionedCredentials.from_dict(result)
        except ProvisioningError as exc:
            return Error(_error_message(exc))
    if not isinstance(result, ProvisionedCredentials):
        return Error("Invalid response format")
    if not result.success:
        return Error(GENERIC_PROVISION_ERROR)
    return Ready(result)


class ProvisioningSession:
    """Three-state status machine (loading, ready, error) around one fetch."""

    def __init__(
        self,
        *,
        session_id: str | None = None,
        dispatcher: Dispatcher | None = None,
    ) -> None:
        self._id = session_id or uuid.uuid4().hex[:8]
        self._dispatcher = dispatcher
        self._status: SessionStatus = Loading()
        self._fetch: FetchCredentials | None = None
        self._task: asyncio.Task[None] | None = None
        self._in_flight = False
        self._attempt = 0
        self._alive = True

    @property
    def session_id(self) -> str:
        return self._id

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @property
    def closed(self) -> bool:
        return not self._alive

    def current_status(self) -> SessionStatus:
        """Read-only snapshot of the current status."""
        return self._status

    def start(self, fetch: FetchCredentials) -> asyncio.Task[None] | None:
        """Begin an attempt. Returns the fetch task, or None if nothing was started.

        Must be called from a running event loop.
        """
        loop = asyncio.get_running_loop()
        if not self._alive:
            logger.debug("Provisioning session {} is closed; ignoring start", self._id)
            return None
        if self._in_flight:
            logger.debug("Provisioning session {} already in flight; ignoring start", self._id)
            return None

        self._in_flight = True
        self._fetch = fetch
        self._attempt += 1
        self._set_status(Loading())
        logger.info("Starting IRC provisioning (session {}, attempt {})", self._id, self._attempt)
        self._task = loop.create_task(self._run(fetch, self._attempt))
        return self._task

    def retry(self) -> asyncio.Task[None] | None:
        """Cancel any attempt still in flight and start again with the original fetch."""
        if self._fetch is None:
            logger.warning("Provisioning session {} has nothing to retry", self._id)
            return None
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._in_flight = False
        return self.start(self._fetch)

    def close(self) -> None:
        """End the session: cancel any fetch and discard credentials."""
        if not self._alive:
            return
        self._alive = False
        self._in_flight = False
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
        self._fetch = None
        self._status = Loading()
        logger.debug("Provisioning session {} closed", self._id)

    async def _run(self, fetch: FetchCredentials, attempt: int) -> None:
        try:
            try:
                result = await fetch()
            except Exception as exc:
                outcome: SessionStatus = Error(_error_message(exc))
            else:
                outcome = _outcome(result)
        finally:
            if attempt == self._attempt:
                self._in_flight = False

        if not self._alive or attempt != self._attempt:
            logger.debug("Discarding stale provisioning result (session {}, attempt {})", self._id, attempt)
            return

        if isinstance(outcome, Ready):
            logger.info("IRC provisioning successful for {}", outcome.credentials.irc_username)
        else:
            logger.warning("IRC provisioning failed (session {}): {}", self._id, outcome.message)
        self._set_status(outcome)

    def _set_status(self, status: SessionStatus) -> None:
        if status == self._status:
            return
        self._status = status
        if self._dispatcher is not None:
            _, evt = status_changed(self._id, status)
            self._dispatcher.dispatch("provisioning", evt)
