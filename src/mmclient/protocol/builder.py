"""Constructors for every request Motion Master understands.

Each function returns a fully populated :class:`Request`; none of them
perform any I/O. The correlation *id* is optional everywhere, a new one is
generated when it is omitted.
"""

from __future__ import annotations

from typing import Iterable, Optional

from ..errors import UnknownRequestError
from . import fields
from .message import (
    MonitoringSubscription,
    ParameterAddress,
    ParameterValue,
    Request,
    device_address as _device_address,
)


def _addressed(kind: str, device_address: int, id: Optional[str], **extra) -> Request:
    payload = {fields.DEVICE_ADDRESS: _device_address(device_address)}
    payload.update(extra)
    return Request(kind, payload, id)


def _parameters(parameters: Iterable, expected: type) -> list:
    result = list()
    for parameter in parameters:
        if not isinstance(parameter, expected):
            raise TypeError("expected %s, got %r" % (expected.__name__, parameter))
        result.append(expected.to_dict(parameter))
    return result


def ping_system(id: Optional[str] = None) -> Request:
    return Request(fields.PING_SYSTEM, id=id)


def get_system_version(id: Optional[str] = None) -> Request:
    return Request(fields.GET_SYSTEM_VERSION, id=id)


def get_device_info(id: Optional[str] = None) -> Request:
    return Request(fields.GET_DEVICE_INFO, id=id)


def get_device_parameter_info(device_address: int, id: Optional[str] = None) -> Request:
    return _addressed(fields.GET_DEVICE_PARAMETER_INFO, device_address, id)


def get_device_parameter_values(device_address: int, parameters: Iterable[ParameterAddress],
                                id: Optional[str] = None, topic: Optional[str] = None) -> Request:
    """ Read the listed *parameters*, in order. A *topic* is attached when
        the read is issued on behalf of a monitoring subscription.
    """

    extra = {fields.PARAMETERS: _parameters(parameters, ParameterAddress)}
    if topic is not None:
        extra[fields.TOPIC] = topic

    return _addressed(fields.GET_DEVICE_PARAMETER_VALUES, device_address, id, **extra)


def set_device_parameter_values(device_address: int, parameter_values: Iterable[ParameterValue],
                                id: Optional[str] = None) -> Request:
    values = _parameters(parameter_values, ParameterValue)
    return _addressed(fields.SET_DEVICE_PARAMETER_VALUES, device_address, id,
                      **{fields.PARAMETER_VALUES: values})


def get_device_file_list(device_address: int, id: Optional[str] = None) -> Request:
    return _addressed(fields.GET_DEVICE_FILE_LIST, device_address, id)


def get_device_log(device_address: int, id: Optional[str] = None) -> Request:
    return _addressed(fields.GET_DEVICE_LOG, device_address, id)


def start_monitoring_device_parameter_values(interval: float, topic: str, device_address: int,
                                             parameters: Iterable[ParameterAddress],
                                             id: Optional[str] = None) -> Request:
    """ Describe a monitoring subscription. Submitting the result through
        :func:`mmclient.client.Client.submit` starts periodic reads of the
        *parameters* every *interval* seconds, tagged with *topic*; a later
        subscription for the same topic and device replaces this one.
    """

    parameters = list(parameters)
    _parameters(parameters, ParameterAddress)

    subscription = MonitoringSubscription(topic, _device_address(device_address), parameters, interval)
    return Request(fields.START_MONITORING_DEVICE_PARAMETER_VALUES, subscription.to_payload(), id)


def stop_monitoring_device_parameter_values(topic: str, device_address: int,
                                            id: Optional[str] = None) -> Request:
    return _addressed(fields.STOP_MONITORING_DEVICE_PARAMETER_VALUES, device_address, id,
                      **{fields.TOPIC: str(topic)})


_by_kind = {
    fields.PING_SYSTEM: ping_system,
    fields.GET_SYSTEM_VERSION: get_system_version,
    fields.GET_DEVICE_INFO: get_device_info,
    fields.GET_DEVICE_PARAMETER_INFO: get_device_parameter_info,
    fields.GET_DEVICE_PARAMETER_VALUES: get_device_parameter_values,
    fields.SET_DEVICE_PARAMETER_VALUES: set_device_parameter_values,
    fields.GET_DEVICE_FILE_LIST: get_device_file_list,
    fields.GET_DEVICE_LOG: get_device_log,
    fields.START_MONITORING_DEVICE_PARAMETER_VALUES: start_monitoring_device_parameter_values,
    fields.STOP_MONITORING_DEVICE_PARAMETER_VALUES: stop_monitoring_device_parameter_values,
}


def kind(name: str) -> str:
    """ Normalize an operation name as typed by a person, for example
        'GetDeviceInfo' or 'getDeviceInfo', to its canonical kind.
    """

    name = str(name).strip()
    if name == '':
        raise UnknownRequestError('empty request kind')

    normalized = name[0].lower() + name[1:]
    if normalized not in _by_kind:
        raise UnknownRequestError("request %r doesn't exist" % (name,))

    return normalized


def build(name: str, *args, **kwargs) -> Request:
    """ Build a request by operation name; the remaining arguments are
        passed to the matching constructor.
    """

    return _by_kind[kind(name)](*args, **kwargs)
