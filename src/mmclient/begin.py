""" Implementation of the top-level :func:`connect` method, the principal
    entry point for a program that wants to talk to Motion Master.
"""

import logging

from . import config
from .client import Client
from .transport import Connection

LOGGER = logging.getLogger(__name__)


def connect(configuration=None, codec=None, identity=None):
    """ Connect to Motion Master and return a running :class:`Client`. The
        *configuration* defaults to :class:`mmclient.config.Configuration`
        built from the environment. The client owns the connection; call
        :func:`Client.shutdown` to release both.
    """

    if configuration is None:
        configuration = config.Configuration()

    connection = Connection(configuration.server_endpoint,
                            configuration.notification_endpoint,
                            identity=identity)

    client = Client(connection.send, codec, None, connection, configuration)
    connection.start(client.receive, client.receive_notification)

    # Pings only start once the connection can carry them.

    client.scheduler.ping_interval = configuration.ping_period
    client.scheduler.start()

    LOGGER.debug("connected: %r", configuration)
    return client


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
