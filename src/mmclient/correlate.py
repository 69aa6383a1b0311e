"""Match inbound responses to the requests that produced them.

Any number of requests may be outstanding on the single request channel at
once, and their responses arrive in whatever order Motion Master produces
them. The :class:`MessageCorrelator` keeps one :class:`PendingRequest` per
outstanding correlation id and resolves it with the first inbound value
carrying that id.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Dict, List, Optional

from .errors import DuplicateRequestError
from .protocol.message import Request, Response
from .stream import Stream

LOGGER = logging.getLogger(__name__)


class PendingRequest:
    """One-shot completion handle for a single correlation id.

    The handle resolves at most once. Waiting on it blocks only the caller
    doing the waiting; the correlator keeps processing other responses.
    """

    def __init__(self, id: str, correlator: Optional["MessageCorrelator"] = None):
        self.id = id
        self.created_at = time.time()
        self.response: Optional[Response] = None
        self.cancelled = False

        self._correlator = correlator
        self._event = threading.Event()
        self._finished = threading.Event()
        self._callbacks: List[Callable[[Response], None]] = []
        self._lock = threading.Lock()

    def __repr__(self):
        if self._event.is_set():
            state = "resolved"
        elif self.cancelled:
            state = "cancelled"
        else:
            state = "pending"
        return "PendingRequest(%r, %s)" % (self.id, state)

    def poll(self) -> bool:
        """Return True if a response has arrived."""
        return self._event.is_set()

    def wait(self, timeout: Optional[float] = None) -> Optional[Response]:
        """Block until the response arrives and return it.

        If *timeout* expires first, None is returned and the request stays
        pending; call :func:`cancel` to give up on it entirely. Waiting on
        a cancelled request returns None immediately, and cancelling wakes
        any caller already waiting.
        """
        self._finished.wait(timeout)
        return self.response

    def cancel(self) -> bool:
        """Abandon interest in the response.

        A response arriving afterwards is treated as unmatched. Returns
        False if the request had already resolved.
        """
        if self._event.is_set():
            return False

        if self._correlator is not None:
            self._correlator.cancel(self.id)

        self._abandon()
        return True

    def add_callback(self, callback: Callable[[Response], None]) -> None:
        """Invoke *callback* with the response once it arrives, or right
        away if it already has."""
        if not callable(callback):
            raise TypeError("callback must be callable")

        with self._lock:
            if not self._event.is_set():
                self._callbacks.append(callback)
                return

        self._invoke(callback)

    def _complete(self, response: Response) -> None:
        with self._lock:
            self.response = response
            self._event.set()
            self._finished.set()
            callbacks = self._callbacks
            self._callbacks = []

        for callback in callbacks:
            self._invoke(callback)

    def _abandon(self) -> None:
        self.cancelled = True
        self._finished.set()

    def _invoke(self, callback: Callable[[Response], None]) -> None:
        try:
            callback(self.response)
        except Exception:
            LOGGER.exception("callback for request %s failed", self.id)


class MessageCorrelator:
    """Client-side request/response correlation.

    Every inbound value is published on :attr:`messages`. Values that do
    not resolve a pending request are additionally published on
    :attr:`unmatched`; a value that does resolve one is consumed by its
    waiter and appears nowhere else.

    :ivar messages: Stream of every value passed to :func:`feed`.
    :ivar unmatched: Stream of values that matched no pending request.
    """

    def __init__(self, submit: Optional[Callable[[Request], None]] = None):
        self._submit = submit
        self._pending: Dict[str, PendingRequest] = {}
        self._lock = threading.Lock()

        self.messages = Stream("messages")
        self.unmatched = Stream("unmatched")

    def __len__(self):
        return len(self._pending)

    def __contains__(self, id):
        return id in self._pending

    def pending(self) -> List[str]:
        """Return the ids currently awaiting a response."""
        with self._lock:
            return list(self._pending)

    def register(self, id: str) -> PendingRequest:
        """Start waiting for the response carrying *id*.

        Registration must happen before the matching request is submitted,
        otherwise a fast response could arrive first and go unmatched.
        """
        if id is None:
            raise ValueError("cannot register a request without an id")

        pending = PendingRequest(id, self)

        with self._lock:
            if id in self._pending:
                raise DuplicateRequestError("request id already pending: %r" % (id,))
            self._pending[id] = pending

        return pending

    def cancel(self, id: str) -> bool:
        """Forget the pending request for *id*, if any."""
        with self._lock:
            pending = self._pending.pop(id, None)

        if pending is None:
            return False

        pending._abandon()
        LOGGER.debug("request %s cancelled", id)
        return True

    def submit(self, request: Request) -> None:
        """Hand *request* to the outbound path."""
        if self._submit is None:
            raise RuntimeError("no outbound path configured")
        self._submit(request)

    def send(self, request: Request) -> PendingRequest:
        """Register then submit *request*, returning its pending handle."""
        pending = self.register(request.id)

        try:
            self.submit(request)
        except Exception:
            self.cancel(request.id)
            raise

        return pending

    def feed(self, value: Response) -> bool:
        """Process one inbound value.

        Returns True if it resolved a pending request. Values with an
        unknown or already-resolved id are never an error.
        """
        id = getattr(value, "id", None)

        with self._lock:
            pending = self._pending.pop(id, None) if id is not None else None

        self.messages.publish(value)

        if pending is None:
            self.unmatched.publish(value)
            return False

        pending._complete(value)
        return True
