"""Transport interface.

This is the (small) contract that transport implementations should follow.
It lives outside :mod:`linkstack.protocol` so the protocol remains
transport-agnostic. A transport moves message text to whichever listener
is registered for a numeric slot; it never inspects the text or the token.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional

import structlog


logger = structlog.get_logger(__name__)

Callback = Callable[[int, str, Optional[str]], None]


# Transport agnostic exceptions

class TransportError(Exception):
    """Base class for all transport-layer errors."""


class TransportConnectionError(TransportError):
    """The transport could not establish or maintain a connection."""


class TransportPortError(TransportError):
    """No suitable port could be bound or connected."""


class Transport(ABC):
    """Minimal contract for a message transport.

    Subclasses implement :meth:`send` and :meth:`close`; listener
    bookkeeping is shared. :meth:`_subscribe` and :meth:`_unsubscribe` are
    hooks for transports that need to tell the wire about new slots.
    """

    def __init__(self):
        self._listeners: Dict[int, Callback] = {}
        self._listeners_lock = threading.Lock()

    @abstractmethod
    def send(self, target: str, slot: int, payload: str, token: Optional[str] = None) -> None:
        """Queue *payload* for delivery to the listener on *slot*."""

    @abstractmethod
    def close(self) -> None:
        """Tear down the underlying connection/socket."""

    def listen(self, slot: int, callback: Callback) -> None:
        """Deliver messages sent to *slot* to *callback*.

        Only one callback may listen on a slot; a second registration
        replaces the first.
        """

        slot = int(slot)
        with self._listeners_lock:
            new = slot not in self._listeners
            self._listeners[slot] = callback

        if new:
            self._subscribe(slot)

    def unlisten(self, slot: int) -> None:
        slot = int(slot)
        with self._listeners_lock:
            removed = self._listeners.pop(slot, None)

        if removed is not None:
            self._unsubscribe(slot)

    def listening(self, slot: int) -> bool:
        return int(slot) in self._listeners

    def _subscribe(self, slot: int) -> None:
        pass

    def _unsubscribe(self, slot: int) -> None:
        pass

    def _deliver(self, slot: int, payload: str, token: Optional[str]) -> bool:
        """Hand one message to the listener for *slot*.

        Returns False if nobody is listening; the message is dropped.
        """

        callback = self._listeners.get(slot)
        if callback is None:
            logger.debug("no listener, message dropped", slot=slot)
            return False

        callback(slot, payload, token)
        return True
