"""Transport interface.

This is the (small) contract the client engine expects from whatever moves
bytes to and from Motion Master. It lives outside the engine modules so
that correlation and demultiplexing stay transport-agnostic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Union


# Transport agnostic exceptions

class TransportError(Exception):
    """Base class for all transport-layer errors."""


class TransportConnectionError(TransportError):
    """The transport could not establish or maintain a connection."""


MessageCallback = Callable[[bytes], None]
NotificationCallback = Callable[[Union[bytes, str], bytes], None]


class Transport(ABC):
    """Minimal contract for a two-channel transport.

    Inbound frames are delivered one at a time, in arrival order, to the
    callbacks given to :func:`start`. Outbound frames passed to
    :func:`send` go out in the order :func:`send` was called.
    """

    @abstractmethod
    def start(self, on_message: MessageCallback, on_notification: NotificationCallback) -> None:
        """Connect and begin delivering inbound frames."""

    @abstractmethod
    def send(self, data: bytes) -> None:
        """Queue one frame for the request channel; never blocks on I/O."""

    @abstractmethod
    def close(self) -> None:
        """Stop delivery and release the underlying sockets."""

    @property
    def is_open(self) -> bool:
        """Whether the transport is currently delivering frames."""
        return False
