""" The four operations of the Motion Master command line, expressed as
    functions over a :class:`mmclient.client.Client`. Argument parsing and
    deciding when to exit belong to whatever program calls these; each
    function here resolves the target device, issues its requests, and
    hands back something to wait on or read from.

    Parameters are given as text, ``index:subindex`` with a hexadecimal
    index, and ``index:subindex=value`` for values to write.
"""

import logging

from .errors import DeviceNotFoundError
from .protocol import builder
from .protocol import fields
from .protocol import parse

LOGGER = logging.getLogger(__name__)


def resolve_device(client, device_address=None, device_position=0, timeout=None):
    """ Return the device address to act on. An explicit *device_address*
        takes precedence; otherwise Motion Master is asked which device sits
        at *device_position*, which costs one round trip.
    """

    if device_address is not None:
        return device_address

    if device_position is None:
        raise DeviceNotFoundError('neither a device address nor a position was given')

    device = client.get_device_at_position(device_position, timeout)

    if device is None:
        raise DeviceNotFoundError("there is no device at position %s" % (device_position,))

    address = device[fields.DEVICE_ADDRESS]
    LOGGER.debug("device at position %s has address %s", device_position, address)
    return address


def request(client, kind, args=(), device_address=None, device_position=0, timeout=None):
    """ Issue a single request of the named *kind*, for example
        'GetDeviceParameterValues'. For parameter reads, *args* lists the
        parameters to read. Returns the pending request.
    """

    kind = builder.kind(kind)

    if kind in (fields.GET_SYSTEM_VERSION, fields.GET_DEVICE_INFO):
        return client.send(builder.build(kind))

    if kind == fields.GET_DEVICE_PARAMETER_VALUES:
        parameters = [parse.parameter(arg) for arg in args]
        address = resolve_device(client, device_address, device_position, timeout)
        return client.send(builder.get_device_parameter_values(address, parameters))

    if kind in (fields.GET_DEVICE_PARAMETER_INFO, fields.GET_DEVICE_FILE_LIST, fields.GET_DEVICE_LOG):
        address = resolve_device(client, device_address, device_position, timeout)
        return client.send(builder.build(kind, address))

    raise ValueError("request %r is not available as a command" % (kind,))


def upload(client, params, device_address=None, device_position=0, timeout=None):
    """ Read the listed parameters from the device.
    """

    parameters = [parse.parameter(param) for param in params]
    address = resolve_device(client, device_address, device_position, timeout)
    return client.send(builder.get_device_parameter_values(address, parameters))


def download(client, param_values, device_address=None, device_position=0, timeout=None):
    """ Write the listed parameter values to the device.
    """

    values = [parse.parameter_value(param_value) for param_value in param_values]
    address = resolve_device(client, device_address, device_position, timeout)
    return client.send(builder.set_device_parameter_values(address, values))


def monitor(client, topic, params, interval=None, device_address=None, device_position=0,
            timeout=None, callback=None):
    """ Start monitoring the listed parameters, publishing under *topic*
        every *interval* seconds; the client's configured monitoring
        interval applies if *interval* is None. The returned subscription
        is created before monitoring begins, so it sees every resulting
        notification.
    """

    if interval is None:
        interval = client.configuration.monitoring_interval

    parameters = [parse.parameter(param) for param in params]
    address = resolve_device(client, device_address, device_position, timeout)

    subscription = client.topic(topic, callback=callback)
    client.start_monitoring_device_parameter_values(interval, topic, address, parameters)
    return subscription


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
