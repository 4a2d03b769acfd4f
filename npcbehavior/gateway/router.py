"""Message routing by type through a handler registry."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)


@dataclass
class Message:
    """A client message: its type, request id and payload."""

    type: str = ""
    id: str = ""
    data: Any = None


Handler = Callable[[Any, Message], Any]


class UnknownMessageType(LookupError):
    """No handler is registered for a message's type."""


class Router:
    """Maps message types to handlers."""

    def __init__(self) -> None:
        self._handlers: dict[str, Handler] = {}

    def register(self, msg_type: str, handler: Handler) -> None:
        """Register a handler; a later registration replaces an earlier one."""
        self._handlers[msg_type] = handler

    def dispatch(self, conn: Any, msg: Message) -> Any:
        """Call the handler for the message's type and return what it returns."""
        handler = self._handlers.get(msg.type)
        if handler is None:
            logger.warning("router.unknown_type type=%s id=%s", msg.type, msg.id)
            raise UnknownMessageType(f"unknown message type: {msg.type}")
        logger.debug("router.dispatch type=%s id=%s", msg.type, msg.id)
        return handler(conn, msg)