""" Background periodic traffic: the keep-alive ping, and any number of
    monitoring subscriptions, each emitting requests at its own cadence.
    None of this ever blocks the caller submitting foreground requests.
"""

import logging
import threading
import time

from .protocol import builder
from .protocol.message import MonitoringSubscription

LOGGER = logging.getLogger(__name__)


IDLE = 'idle'
RUNNING = 'running'
STOPPED = 'stopped'


class PeriodicTaskScheduler:
    """ Drive the two periodic producers. Every emitted request is handed
        to *submit*, which is expected to be a non-blocking hand-off to the
        outbound path. The ping producer runs every *ping_interval* seconds
        once :func:`start` is called; a *ping_interval* of None or zero
        leaves it idle.

        Monitoring subscriptions are keyed by topic and device address. A
        second :func:`monitor` call for a key that is already active stops
        the earlier poller before the new one starts; there is never more
        than one poller emitting for a given key.
    """

    def __init__(self, submit, ping_interval=None):

        if callable(submit):
            pass
        else:
            raise TypeError('submit must be callable')

        if ping_interval is not None:
            ping_interval = float(ping_interval)
            if ping_interval < 0:
                raise ValueError('ping interval cannot be negative: ' + str(ping_interval))
            if ping_interval == 0:
                ping_interval = None

        self.submit = submit
        self.ping_interval = ping_interval
        self.state = IDLE

        self._ping = None
        self._monitors = dict()
        self._lock = threading.Lock()


    def start(self):
        """ Start the ping producer. Only the first call has any effect.
        """

        with self._lock:
            if self.state != IDLE:
                return

            if self.ping_interval is None:
                return

            self._ping = _Poller(self.ping, self.ping_interval, 'ping')
            self._ping.start()
            self.state = RUNNING

        LOGGER.debug("pinging every %gs", self.ping_interval)


    def ping(self):
        self.submit(builder.ping_system())


    def monitor(self, subscription):
        """ Begin emitting parameter reads for the supplied
            :class:`MonitoringSubscription`, replacing any active
            subscription with the same key. Returns the replaced
            subscription, or None.
        """

        if isinstance(subscription, MonitoringSubscription):
            pass
        else:
            raise TypeError('expected a MonitoringSubscription, got ' + repr(subscription))

        key = subscription.key

        def emit():
            request = builder.get_device_parameter_values(
                        subscription.device_address,
                        subscription.parameters,
                        topic=subscription.topic)
            self.submit(request)

        poller = _Poller(emit, subscription.interval, "monitor %s:%s" % key)
        poller.subscription = subscription

        with self._lock:
            if self.state == STOPPED:
                raise RuntimeError('scheduler has been shut down')

            previous = self._monitors.pop(key, None)

            if previous is not None:
                previous.stop()

            self._monitors[key] = poller
            poller.start()

        if previous is None:
            LOGGER.debug("monitoring %s every %gs", key, subscription.interval)
            return None

        LOGGER.debug("monitoring %s every %gs, replacing %gs", key, subscription.interval, previous.interval)
        return previous.subscription


    def unmonitor(self, topic, device_address):
        """ Stop the monitoring subscription for the given key. Returns True
            if a subscription was active.
        """

        with self._lock:
            poller = self._monitors.pop((topic, device_address), None)

        if poller is None:
            return False

        poller.stop()
        LOGGER.debug("stopped monitoring %s", (topic, device_address))
        return True


    def monitoring(self):
        """ Return the active monitoring subscriptions.
        """

        with self._lock:
            return [poller.subscription for poller in self._monitors.values()]


    def interval(self, topic, device_address):
        """ Return the active interval for the given key, or None if nothing
            is monitored under that key.
        """

        try:
            poller = self._monitors[(topic, device_address)]
        except KeyError:
            return None

        return poller.interval


    def shutdown(self):
        """ Stop every producer. No further requests are emitted once this
            method returns.
        """

        with self._lock:
            self.state = STOPPED
            pollers = list(self._monitors.values())
            self._monitors.clear()
            ping = self._ping
            self._ping = None

        if ping is not None:
            pollers.append(ping)

        for poller in pollers:
            poller.stop()


# end of class PeriodicTaskScheduler



class _Poller:
    """ Background thread invoking *method* every *interval* seconds. The
        first call happens as soon as the thread starts.
    """

    join_timeout = 5

    def __init__(self, method, interval, name):

        interval = float(interval)
        if interval <= 0:
            raise ValueError('poll interval must be positive: ' + str(interval))

        self.method = method
        self.interval = interval
        self.name = name
        self.state = IDLE
        self.calls = 0
        self.subscription = None

        self.shutdown = False
        self.alarm = threading.Event()

        # The emission and the shutdown check happen under this lock; once
        # stop() acquires it, no further emission can begin.

        self.lock = threading.RLock()

        self.thread = threading.Thread(target=self.run, name='mmclient ' + name)
        self.thread.daemon = True


    def start(self):
        self.state = RUNNING
        self.thread.start()


    def run(self):

        next = time.time()

        while True:
            with self.lock:
                if self.shutdown == True:
                    break

                try:
                    self.method()
                except Exception:
                    LOGGER.exception("%s poller failed", self.name)

                self.calls += 1

            # Honor the requested cadence regardless of how long the method
            # took: the next deadline follows from the previous one. If the
            # method took longer than a whole interval, start a new cadence
            # rather than firing a burst of calls to catch up.

            next += self.interval
            now = time.time()
            delay = next - now

            if delay > 0:
                self.alarm.wait(delay)
            elif -delay > self.interval:
                next = now


    def stop(self):

        with self.lock:
            self.shutdown = True
            self.state = STOPPED
            self.alarm.set()

        if self.thread.is_alive() and self.thread is not threading.current_thread():
            self.thread.join(self.join_timeout)


# end of class _Poller


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
