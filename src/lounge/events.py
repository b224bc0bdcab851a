"""Event types and dispatcher for the UI shell."""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from loguru import logger

if TYPE_CHECKING:
    from lounge.provisioning.models import SessionStatus


@dataclass
class StatusChanged:
    """A provisioning session moved to a new status."""

    session_id: str
    status: SessionStatus


@dataclass
class ChatOpened:
    """The chat surface was opened, optionally on a specific channel."""

    channel_id: int | None = None


@dataclass
class ChatClosed:
    """The chat surface was closed."""

    pass


class EventTarget(Protocol):
    """UI-side consumer: accept_event + push_event."""

    def accept_event(self, source: str, evt: object) -> bool:
        """Return True if this target wants the event."""
        ...

    def push_event(self, source: str, evt: object) -> None:
        """Handle the event."""
        ...


def event(type_name: str):
    """Decorator to mark a factory as producing an event with a given type."""

    def decorator(f: Any) -> Any:
        @functools.wraps(f)
        def wrapper(*args: Any, **kwargs: Any) -> tuple[str, object]:
            evt = f(*args, **kwargs)
            return (type_name, evt)

        wrapper.TYPE = type_name
        return wrapper

    return decorator


@event("status_changed")
def status_changed(session_id: str, status: SessionStatus) -> StatusChanged:
    return StatusChanged(session_id=session_id, status=status)


@event("chat_opened")
def chat_opened(channel_id: int | None = None) -> ChatOpened:
    return ChatOpened(channel_id=channel_id)


@event("chat_closed")
def chat_closed() -> ChatClosed:
    return ChatClosed()


class Dispatcher:
    """Central event dispatcher; targets filter by type and receive events."""

    def __init__(self) -> None:
        self._targets: list[EventTarget] = []

    def register(self, target: EventTarget) -> None:
        """Register an event target."""
        self._targets.append(target)

    def unregister(self, target: EventTarget) -> None:
        """Unregister an event target."""
        if target in self._targets:
            self._targets.remove(target)

    def dispatch(self, source: str, evt: object) -> None:
        """Dispatch event to all targets that accept it. Target errors are logged."""
        for target in list(self._targets):
            try:
                if target.accept_event(source, evt):
                    target.push_event(source, evt)
            except Exception as exc:
                logger.exception("Failed to pass event to target {}: {}", target, exc)
