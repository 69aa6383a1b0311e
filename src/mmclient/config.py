""" Runtime settings for a client connection. The defaults match a Motion
    Master instance running on the local host; any of them can be overridden
    with an environment variable, and any explicit keyword argument given
    to :class:`Configuration` takes precedence over both.
"""

import os


server_endpoint = 'tcp://127.0.0.1:62524'
notification_endpoint = 'tcp://127.0.0.1:62525'

# The ping interval is expressed in milliseconds, as it always has been for
# Motion Master clients; the monitoring interval is in seconds, consistent
# with every other period handled by mmclient.poll.

ping_interval = 250
monitoring_interval = 1.0

environment = {
    'server_endpoint': 'MMCLIENT_SERVER_ENDPOINT',
    'notification_endpoint': 'MMCLIENT_NOTIFICATION_ENDPOINT',
    'ping_interval': 'MMCLIENT_PING_INTERVAL',
    'monitoring_interval': 'MMCLIENT_MONITORING_INTERVAL',
}


class Configuration:
    """ Capture one set of connection settings. Values are resolved in
        order: keyword argument, environment variable, module default.

        :ivar server_endpoint: ZeroMQ endpoint of the request/response socket.
        :ivar notification_endpoint: ZeroMQ endpoint of the broadcast socket.
        :ivar ping_interval: Keep-alive period in milliseconds; zero disables.
        :ivar monitoring_interval: Default monitoring period in seconds.
    """

    def __init__(self, server_endpoint=None, notification_endpoint=None,
                       ping_interval=None, monitoring_interval=None):

        self.server_endpoint = _resolve('server_endpoint', server_endpoint, str)
        self.notification_endpoint = _resolve('notification_endpoint', notification_endpoint, str)
        self.ping_interval = _resolve('ping_interval', ping_interval, int)
        self.monitoring_interval = _resolve('monitoring_interval', monitoring_interval, float)

        if self.ping_interval < 0:
            raise ValueError('ping interval cannot be negative: ' + str(self.ping_interval))

        if self.monitoring_interval <= 0:
            raise ValueError('monitoring interval must be positive: ' + str(self.monitoring_interval))


    def __repr__(self):
        return "Configuration(server=%r, notification=%r, ping=%dms, monitoring=%gs)" % (
                self.server_endpoint, self.notification_endpoint,
                self.ping_interval, self.monitoring_interval)


    @property
    def ping_period(self):
        """ The ping interval in seconds, or None if pings are disabled.
        """

        if self.ping_interval == 0:
            return None

        return self.ping_interval / 1000.0


# end of class Configuration



def _resolve(name, explicit, cast):

    if explicit is not None:
        return cast(explicit)

    variable = environment[name]

    try:
        value = os.environ[variable]
    except KeyError:
        value = globals()[name]
    else:
        value = value.strip()
        if value == '':
            value = globals()[name]

    try:
        return cast(value)
    except ValueError:
        raise ValueError("invalid value for %s: %r" % (variable, value))


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
