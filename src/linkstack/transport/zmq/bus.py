"""ZeroMQ publish/subscribe transport.

Each :class:`Bus` owns one PUB socket, bound to a local port, and one SUB
socket connected to the PUB sockets of its peers (and, by default, to its
own). A message is published on the topic of its destination slot; every
bus subscribed to that slot receives it. All socket operations happen on
the bus's own I/O thread; other threads hand work to it through a queue
and an inproc signalling socket.
"""

from __future__ import annotations

import atexit
import queue
import socket as pysocket
import threading
from typing import Iterable, Optional

import structlog
import zmq

from ..base import Transport, TransportConnectionError, TransportPortError
from .framing import from_frames, to_frames, topic


logger = structlog.get_logger(__name__)

minimum_port = 10139
maximum_port = 13679
zmq_context = zmq.Context()

# Link target accepted by every bus.
BROADCAST = "*"


class Bus(Transport):
    """PUB/SUB transport between actors in separate processes.

    *name* identifies this bus as a link target; frames addressed to
    another bus name are ignored. *port* is the PUB port to bind, chosen
    from the port range if None. *peers* are endpoints such as
    ``tcp://otherhost:10139`` to receive messages from.
    """

    def __init__(self, name: Optional[str] = None, port: Optional[int] = None,
                 peers: Iterable[str] = (), avoid: Optional[set] = None,
                 loopback: bool = True):
        super().__init__()

        avoid = avoid or set()
        self.port = int(port) if port is not None else None
        self.hostname = pysocket.getfqdn()

        self.socket = zmq_context.socket(zmq.PUB)
        self.socket.setsockopt(zmq.LINGER, 0)

        if self.port is None:
            for p in range(minimum_port, maximum_port):
                if p in avoid:
                    continue
                try:
                    self.socket.bind(f"tcp://*:{p}")
                    self.port = p
                    break
                except zmq.ZMQError:
                    continue
            if self.port is None:
                self.socket.close()
                raise TransportPortError(
                    f"no ports available in range {minimum_port}:{maximum_port}"
                )
        else:
            try:
                self.socket.bind(f"tcp://*:{self.port}")
            except zmq.ZMQError as exc:
                self.socket.close()
                raise TransportPortError(
                    f"port already in use: {self.port}"
                ) from exc

        self.name = name or f"{self.hostname}:{self.port}"
        self.endpoint = f"tcp://{self.hostname}:{self.port}"

        self.subscriber = zmq_context.socket(zmq.SUB)
        self.subscriber.setsockopt(zmq.LINGER, 0)

        # Internal queue for thread-safe socket operations
        self._queue = queue.SimpleQueue()
        self._signal_lock = threading.Lock()

        internal = f"inproc://linkstack.Bus:signal:{id(self)}"
        self._sig_rx = zmq_context.socket(zmq.PAIR)
        self._sig_rx.bind(internal)
        self._sig_tx = zmq_context.socket(zmq.PAIR)
        self._sig_tx.connect(internal)

        self.shutdown = False

        if loopback:
            self.connect(f"tcp://127.0.0.1:{self.port}")

        for peer in peers:
            self.connect(peer)

        self.thread = threading.Thread(target=self.run, daemon=True)
        self.thread.start()

        _buses.add(self)
        logger.debug("bus started", name=self.name, port=self.port)

    def _command(self, command: str, argument) -> None:
        if self.shutdown:
            raise TransportConnectionError(f"bus {self.name} is closed")

        self._queue.put((command, argument))
        with self._signal_lock:
            self._sig_tx.send(b"")

    def connect(self, endpoint: str) -> None:
        """Receive messages published by the bus at *endpoint*."""
        self._command("connect", endpoint)

    def send(self, target: str, slot: int, payload: str, token: Optional[str] = None) -> None:
        frames = to_frames(target or BROADCAST, slot, payload, token)
        self._command("send", frames)

    def _subscribe(self, slot: int) -> None:
        self._command("subscribe", topic(slot))

    def _unsubscribe(self, slot: int) -> None:
        self._command("unsubscribe", topic(slot))

    def _handle_command(self) -> None:
        self._sig_rx.recv(flags=zmq.NOBLOCK)
        command, argument = self._queue.get(block=False)

        if command == "send":
            self.socket.send_multipart(argument)
        elif command == "subscribe":
            self.subscriber.setsockopt(zmq.SUBSCRIBE, argument)
        elif command == "unsubscribe":
            self.subscriber.setsockopt(zmq.UNSUBSCRIBE, argument)
        elif command == "connect":
            self.subscriber.connect(argument)
        elif command == "close":
            self.shutdown = True

    def _handle_incoming(self) -> None:
        parts = self.subscriber.recv_multipart()

        try:
            target, slot, payload, token = from_frames(parts)
        except ValueError as exc:
            logger.warning("discarding message", bus=self.name, reason=str(exc))
            return

        if target != BROADCAST and target != self.name:
            return

        self._deliver(slot, payload, token)

    def run(self) -> None:
        poller = zmq.Poller()
        poller.register(self._sig_rx, zmq.POLLIN)
        poller.register(self.subscriber, zmq.POLLIN)

        while not self.shutdown:
            for active, _flag in poller.poll(10000):
                try:
                    if active == self._sig_rx:
                        self._handle_command()
                    elif active == self.subscriber:
                        self._handle_incoming()
                except Exception:
                    logger.exception("bus I/O failed", bus=self.name)

        for sock in (self.socket, self.subscriber, self._sig_rx):
            sock.close()

    def close(self) -> None:
        if self.shutdown:
            return

        self._command("close", None)
        self.thread.join()
        self._sig_tx.close()

        _buses.discard(self)
        logger.debug("bus closed", name=self.name)


_buses = set()


def bus(name: Optional[str] = None, port: Optional[int] = None, peers: Iterable[str] = ()) -> Bus:
    """Create a :class:`Bus`. Buses still open at exit are closed before
    the ZeroMQ context is terminated.
    """

    return Bus(name=name, port=port, peers=peers)


def _cleanup() -> None:
    for b in list(_buses):
        try:
            b.close()
        except Exception:
            pass

    try:
        zmq_context.term()
    except Exception:
        pass


atexit.register(_cleanup)
