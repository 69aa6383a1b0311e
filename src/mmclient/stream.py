""" A minimal broadcast stream: one producer, any number of independent
    subscribers. Every subscriber sees every value published after it
    subscribed, in publication order; nothing is retained for subscribers
    that arrive later.
"""

import logging
import queue
import threading

LOGGER = logging.getLogger(__name__)


class Stream:
    """ Fan out published values to every active :class:`Subscription`.
        Values published while nobody is subscribed are discarded.
    """

    def __init__(self, name=None):

        self.name = name
        self._subscriptions = list()
        self._lock = threading.Lock()


    def __len__(self):
        return len(self._subscriptions)


    def __repr__(self):
        return "Stream(%r, subscribers=%d)" % (self.name, len(self._subscriptions))


    def publish(self, value):
        """ Deliver *value* to all current subscribers. Subscriber failures
            are logged and do not interrupt delivery to the others.
        """

        # Do nothing if nobody is listening.

        if self._subscriptions:
            pass
        else:
            return

        with self._lock:
            subscriptions = tuple(self._subscriptions)

        for subscription in subscriptions:
            subscription._deliver(value)


    def subscribe(self, predicate=None, callback=None):
        """ Return a new :class:`Subscription`. If a *predicate* is provided
            only values for which it returns True are delivered. If a
            *callback* is provided it is invoked for each delivered value,
            on the publishing thread; otherwise values are queued for
            retrieval via :func:`Subscription.get` or iteration.
        """

        if callback is not None and not callable(callback):
            raise TypeError('callback must be callable')

        subscription = Subscription(self, predicate, callback)

        with self._lock:
            self._subscriptions.append(subscription)

        return subscription


    def _remove(self, subscription):

        with self._lock:
            try:
                self._subscriptions.remove(subscription)
            except ValueError:
                pass


# end of class Stream



class Subscription:
    """ One subscriber's view of a :class:`Stream`. Each subscription has
        its own queue, so a slow reader never affects any other reader.
        A subscription can be narrowed further with :func:`filter`, which
        creates a new, independent subscription on the same stream.
    """

    def __init__(self, stream, predicate=None, callback=None):

        self.stream = stream
        self.predicate = predicate
        self.callback = callback
        self.closed = False

        self._queue = queue.SimpleQueue()


    def __enter__(self):
        return self


    def __exit__(self, *exc_info):
        self.close()


    def __iter__(self):
        """ Iterate over delivered values, blocking for each one, until the
            subscription is closed.
        """

        while True:
            value = self._queue.get()
            if value is _closed:
                self._queue.put(_closed)
                return
            yield value


    def _deliver(self, value):

        if self.closed:
            return

        predicate = self.predicate

        if predicate is not None:
            try:
                matched = predicate(value)
            except Exception:
                LOGGER.exception("subscription filter failed on %r", value)
                return

            if not matched:
                return

        callback = self.callback

        if callback is None:
            self._queue.put(value)
            return

        try:
            callback(value)
        except Exception:
            LOGGER.exception("subscription callback failed on %r", value)


    def close(self):
        """ Stop receiving values. Any iteration over this subscription ends
            once the values already queued have been consumed.
        """

        if self.closed:
            return

        self.closed = True
        self.stream._remove(self)
        self._queue.put(_closed)


    def filter(self, predicate, callback=None):
        """ Return a new subscription that receives the values this one would
            receive, restricted further to those matching *predicate*.
        """

        existing = self.predicate

        if existing is None:
            combined = predicate
        else:
            def combined(value):
                return existing(value) and predicate(value)

        return self.stream.subscribe(combined, callback)


    def get(self, timeout=None):
        """ Return the next delivered value. If *timeout* is not None and
            nothing arrives within that many seconds, :class:`queue.Empty`
            is raised; it is also raised if the subscription is closed.
        """

        value = self._queue.get(timeout=timeout)

        if value is _closed:
            # Leave the marker in place for any other reader.
            self._queue.put(_closed)
            raise queue.Empty('subscription is closed')

        return value


    def pending(self):
        """ Return the number of values queued but not yet retrieved.
        """

        size = self._queue.qsize()

        if self.closed and size > 0:
            size -= 1

        return size


# end of class Subscription


_closed = object()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
