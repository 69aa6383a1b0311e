"""Transport layer implementations."""

from .base import (
    Transport,
    TransportError,
    TransportConnectionError,
)

from . import zmq
from .zmq import Connection
