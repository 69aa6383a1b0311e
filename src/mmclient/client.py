""" The client engine. A :class:`Client` owns one
    :class:`mmclient.correlate.MessageCorrelator`, one
    :class:`mmclient.notify.NotificationDemuxer` and one
    :class:`mmclient.poll.PeriodicTaskScheduler`, and is the only component
    that touches the outbound path.

    The transport delivers inbound frames via :func:`Client.receive` and
    :func:`Client.receive_notification`; outbound frames are handed to the
    *send* callable given to the constructor, in the order requests were
    submitted.
"""

import logging
import threading

from . import config
from . import protocol
from .correlate import MessageCorrelator
from .errors import DecodeError, RequestTimeout
from .notify import NotificationDemuxer
from .poll import PeriodicTaskScheduler
from .protocol import builder
from .protocol import fields
from .protocol.message import MonitoringSubscription

LOGGER = logging.getLogger(__name__)


class Client:
    """ Issue requests and receive responses and notifications. *send* is a
        callable accepting one encoded frame; it must not block on I/O. The
        *codec* defaults to :class:`mmclient.protocol.codec.Codec`. A
        *ping_interval*, in seconds, starts the keep-alive ping right away;
        None disables it. If a *connection* is supplied it is closed by
        :func:`shutdown`. The *configuration* supplies defaults for
        operations that don't specify their own, such as the monitoring
        interval; it is built from the environment if not supplied.
    """

    def __init__(self, send, codec=None, ping_interval=None, connection=None, configuration=None):

        if callable(send):
            pass
        else:
            raise TypeError('send must be callable')

        if codec is None:
            codec = protocol.codec.default

        if configuration is None:
            configuration = config.Configuration()

        self.codec = codec
        self.configuration = configuration
        self.connection = connection

        self._send = send
        self._send_lock = threading.Lock()

        self.correlator = MessageCorrelator(self.submit)
        self.demuxer = NotificationDemuxer()
        self.scheduler = PeriodicTaskScheduler(self.submit, ping_interval)
        self.scheduler.start()


    def __enter__(self):
        return self


    def __exit__(self, *exc_info):
        self.shutdown()


    @property
    def messages(self):
        """ Stream of every inbound response and status message.
        """

        return self.correlator.messages


    @property
    def unmatched(self):
        """ Stream of inbound values that resolved no pending request.
        """

        return self.correlator.unmatched


    def submit(self, request):
        """ Put *request* on the outbound path without waiting for anything.
            Monitoring requests are handled locally by the scheduler rather
            than being sent.
        """

        if request.local:
            self._local(request)
            return

        # Pings go out several times per second; logging them would drown
        # out everything else.

        if request.kind != fields.PING_SYSTEM:
            LOGGER.debug("-> %r", request)

        data = self.codec.encode(request)

        with self._send_lock:
            self._send(data)


    def _local(self, request):

        if request.kind == fields.START_MONITORING_DEVICE_PARAMETER_VALUES:
            subscription = MonitoringSubscription.from_request(request)
            self.scheduler.monitor(subscription)
        elif request.kind == fields.STOP_MONITORING_DEVICE_PARAMETER_VALUES:
            payload = request.payload
            self.scheduler.unmonitor(payload[fields.TOPIC], payload[fields.DEVICE_ADDRESS])
        else:
            raise ValueError('not a local request: ' + repr(request.kind))


    def register(self, id):
        return self.correlator.register(id)


    def send(self, request):
        """ Register *request* for correlation, submit it, and return the
            :class:`mmclient.correlate.PendingRequest` that will resolve with
            its response.
        """

        if request.local:
            raise ValueError("%s is handled locally and has no response" % (request.kind,))

        return self.correlator.send(request)


    def call(self, request, timeout=None):
        """ Send *request* and block until its response arrives. If *timeout*
            seconds elapse first the request is abandoned and
            :class:`mmclient.errors.RequestTimeout` is raised.
        """

        pending = self.send(request)
        response = pending.wait(timeout)

        if response is None:
            pending.cancel()
            raise RequestTimeout("%s %s: no response in %.2f sec" % (request.kind, request.id, timeout))

        return response


    def feed(self, value):
        """ Process one decoded response or status message.
        """

        LOGGER.debug("<- %r", value)
        return self.correlator.feed(value)


    def feed_notification(self, notification):
        self.demuxer.feed(notification)


    def receive(self, data):
        """ Decode and process one frame from the request channel. Frames
            that cannot be decoded are logged and dropped.
        """

        try:
            value = self.codec.decode(data)
        except DecodeError as exc:
            LOGGER.warning("dropping undecodable response frame: %s", exc)
            return False

        return self.feed(value)


    def receive_notification(self, topic, data):
        """ Decode and distribute one frame from the notification channel.
        """

        try:
            notification = self.codec.decode_notification(topic, data)
        except DecodeError as exc:
            LOGGER.warning("dropping undecodable notification on %r: %s", topic, exc)
            return

        self.feed_notification(notification)


    def topic(self, topic, device_address=None, callback=None):
        """ Subscribe to notifications on *topic*, optionally restricted to
            one device. See :func:`mmclient.notify.NotificationDemuxer.topic`.
        """

        return self.demuxer.topic(topic, device_address, callback)


    # Requests. Each returns the PendingRequest for the submitted request.

    def request_ping_system(self, id=None):
        return self.send(builder.ping_system(id))


    def request_get_system_version(self, id=None):
        return self.send(builder.get_system_version(id))


    def request_get_device_info(self, id=None):
        return self.send(builder.get_device_info(id))


    def request_get_device_parameter_info(self, device_address, id=None):
        return self.send(builder.get_device_parameter_info(device_address, id))


    def request_get_device_parameter_values(self, device_address, parameters, id=None):
        return self.send(builder.get_device_parameter_values(device_address, parameters, id))


    def request_set_device_parameter_values(self, device_address, parameter_values, id=None):
        return self.send(builder.set_device_parameter_values(device_address, parameter_values, id))


    def request_get_device_file_list(self, device_address, id=None):
        return self.send(builder.get_device_file_list(device_address, id))


    def request_get_device_log(self, device_address, id=None):
        return self.send(builder.get_device_log(device_address, id))


    def get_device_at_position(self, position, timeout=None):
        """ Ask Motion Master for its device list and return the entry, a
            dictionary, for the device at *position*; None if there is no
            such device.
        """

        response = self.call(builder.get_device_info(), timeout)

        devices = response.payload.get(fields.DEVICES)
        if not devices:
            return None

        for device in devices:
            try:
                device_position = device[fields.POSITION]
            except (KeyError, TypeError):
                continue

            if device_position == position:
                return device

        return None


    def start_monitoring_device_parameter_values(self, interval, topic, device_address, parameters):
        """ Read *parameters* from the device every *interval* seconds, tagged
            with *topic*, replacing any earlier monitoring of the same topic
            and device.
        """

        request = builder.start_monitoring_device_parameter_values(interval, topic, device_address, parameters)
        self.submit(request)
        return MonitoringSubscription.from_request(request)


    def stop_monitoring_device_parameter_values(self, topic, device_address):
        return self.scheduler.unmonitor(topic, device_address)


    def shutdown(self):
        """ Stop all periodic traffic and close the connection, if this
            client owns one. Pending requests are left as they are.
        """

        self.scheduler.shutdown()

        if self.connection is not None:
            self.connection.close()


# end of class Client


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
