"""ZeroMQ transport for Motion Master.

Requests and responses travel over a DEALER socket connected to the
server endpoint; notifications arrive on a SUB socket connected to the
notification endpoint and subscribed to every topic. A single background
thread owns both sockets: it receives from them, and it drains an outbox
of frames queued by :func:`Connection.send`.
"""

from __future__ import annotations

import atexit
import itertools
import logging
import queue
import threading
import uuid
from typing import Optional

import zmq

from .base import (
    MessageCallback,
    NotificationCallback,
    Transport,
    TransportConnectionError,
)

LOGGER = logging.getLogger(__name__)

zmq_context = zmq.Context()

_signal_ids = itertools.count()


class Connection(Transport):
    """One DEALER + SUB pair; the explicit handle for a client's sockets
    and identity."""

    poll_timeout = 1000

    def __init__(self, server_endpoint: str, notification_endpoint: str,
                 identity: Optional[str] = None, context: Optional[zmq.Context] = None):
        if identity is None:
            identity = str(uuid.uuid4())

        self.server_endpoint = server_endpoint
        self.notification_endpoint = notification_endpoint
        self.identity = identity
        self.context = context or zmq_context

        self.shutdown = False
        self.socket: Optional[zmq.Socket] = None
        self.subscriber: Optional[zmq.Socket] = None

        self._outbox: queue.SimpleQueue = queue.SimpleQueue()
        self._signal_rx: Optional[zmq.Socket] = None
        self._signal_tx: Optional[zmq.Socket] = None
        self._signal_lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self._on_message: Optional[MessageCallback] = None
        self._on_notification: Optional[NotificationCallback] = None

    def __repr__(self):
        return "Connection(%r, %r, identity=%r)" % (
            self.server_endpoint, self.notification_endpoint, self.identity)

    @property
    def is_open(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _open(self) -> None:
        try:
            self.socket = self.context.socket(zmq.DEALER)
            self.socket.setsockopt(zmq.LINGER, 0)
            self.socket.identity = self.identity.encode()
            self.socket.connect(self.server_endpoint)
            LOGGER.debug("DEALER socket connected to %s as %s", self.server_endpoint, self.identity)

            self.subscriber = self.context.socket(zmq.SUB)
            self.subscriber.setsockopt(zmq.LINGER, 0)
            self.subscriber.connect(self.notification_endpoint)
            self.subscriber.setsockopt(zmq.SUBSCRIBE, b"")
            LOGGER.debug("SUB socket connected to %s", self.notification_endpoint)
        except zmq.ZMQError as exc:
            self._close_sockets()
            raise TransportConnectionError(
                "cannot connect to %s / %s: %s" % (self.server_endpoint, self.notification_endpoint, exc)
            ) from exc

        internal = "inproc://mmclient.Connection:signal:%d" % (next(_signal_ids),)
        self._signal_rx = self.context.socket(zmq.PAIR)
        self._signal_rx.bind(internal)
        self._signal_tx = self.context.socket(zmq.PAIR)
        self._signal_tx.connect(internal)

    def start(self, on_message: MessageCallback, on_notification: NotificationCallback) -> None:
        if self._thread is not None:
            raise RuntimeError("connection already started")

        self._on_message = on_message
        self._on_notification = on_notification
        self._open()

        self._thread = threading.Thread(target=self.run, name="mmclient transport", daemon=True)
        self._thread.start()
        _connections.add(self)

    def send(self, data: bytes) -> None:
        # The signal socket is shared by every sending thread; ZeroMQ makes
        # no attempt to be thread-safe.
        with self._signal_lock:
            if self._signal_tx is None or self.shutdown:
                raise TransportConnectionError("connection is not open")

            self._outbox.put(data)
            self._signal_tx.send(b"")

    def close(self) -> None:
        if self.shutdown:
            return

        self.shutdown = True
        _connections.discard(self)

        if self._thread is None:
            self._close_sockets()
            return

        with self._signal_lock:
            if self._signal_tx is not None:
                self._signal_tx.send(b"")

        if self._thread is not threading.current_thread():
            self._thread.join()

    # --- internal ---
    def _handle_outgoing(self) -> None:
        # Clear one signal and send one frame.
        self._signal_rx.recv(flags=zmq.NOBLOCK)

        try:
            data = self._outbox.get(block=False)
        except queue.Empty:
            return

        self.socket.send(data)

    def _handle_incoming(self) -> None:
        parts = self.socket.recv_multipart()

        # Tolerate an empty delimiter frame from REQ-style routers.
        data = parts[-1]

        try:
            self._on_message(data)
        except Exception:
            LOGGER.exception("inbound message handler failed")

    def _handle_notification(self) -> None:
        parts = self.subscriber.recv_multipart()

        topic = parts[0]
        data = parts[1] if len(parts) > 1 else b""

        try:
            self._on_notification(topic, data)
        except Exception:
            LOGGER.exception("notification handler failed")

    def run(self) -> None:
        poller = zmq.Poller()
        poller.register(self.socket, zmq.POLLIN)
        poller.register(self.subscriber, zmq.POLLIN)
        poller.register(self._signal_rx, zmq.POLLIN)

        try:
            while not self.shutdown:
                for active, _flag in poller.poll(self.poll_timeout):
                    if active == self._signal_rx:
                        self._handle_outgoing()
                    elif active == self.socket:
                        self._handle_incoming()
                    elif active == self.subscriber:
                        self._handle_notification()
        finally:
            self._close_sockets()

    def _close_sockets(self) -> None:
        with self._signal_lock:
            for name in ("socket", "subscriber", "_signal_rx", "_signal_tx"):
                sock = getattr(self, name)
                if sock is not None:
                    sock.close(linger=0)
                    setattr(self, name, None)


_connections = set()


def _cleanup() -> None:
    for connection in list(_connections):
        connection.close()


atexit.register(_cleanup)
