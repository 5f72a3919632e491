"""Transport layer implementations."""

import threading

from .base import (
    Transport,
    TransportError,
    TransportConnectionError,
    TransportPortError,
)
from .local import LocalTransport

from .. import config


_default = None
_default_lock = threading.Lock()


def create(backend=None):
    """ Create a new transport for *backend*, one of ``local`` or ``zmq``.
        The backend defaults to the ``LINKSTACK_TRANSPORT`` environment
        variable. ZeroMQ peers are taken from ``LINKSTACK_PEERS``, a comma
        separated list of endpoints.
    """

    if backend is None:
        backend = config.transport_backend()

    if backend == 'local':
        return LocalTransport()

    if backend == 'zmq':
        from . import zmq
        return zmq.bus(peers=config.peers())

    raise ValueError(f"unknown transport backend: {backend!r}")


def default():
    """ Return the process-wide default transport, creating it on first use.
    """

    global _default

    with _default_lock:
        if _default is None:
            _default = create()
        return _default


def set_default(transport):
    """ Replace the process-wide default transport, returning the previous
        one (which may be None).
    """

    global _default

    with _default_lock:
        previous = _default
        _default = transport

    return previous
