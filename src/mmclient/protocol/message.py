""" Class representations of the values exchanged with Motion Master:
    requests going out, responses and notifications coming back, and the
    parameter addressing shared by all of them.
"""

from __future__ import annotations

import time as timemodule
import uuid
from typing import Any, Dict, Iterable, Optional, Tuple

from . import fields


UINT8_MAX = 0xFF
UINT16_MAX = 0xFFFF
UINT32_MAX = 0xFFFFFFFF


def new_id() -> str:
    """ Return a new correlation id. Ids only need to be unique among the
        requests currently pending, a random UUID is more than sufficient.
    """

    return str(uuid.uuid4())


def device_address(value) -> int:
    """ Validate a device address, which Motion Master defines as an
        unsigned 32-bit integer.
    """

    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError('device address must be an integer: ' + repr(value))

    if value < 0 or value > UINT32_MAX:
        raise ValueError('device address out of range: ' + str(value))

    return value



class ParameterAddress:
    """ Identify a single device parameter by its object dictionary *index*
        (unsigned 16-bit) and *subindex* (unsigned 8-bit).
    """

    __slots__ = ('index', 'subindex')

    def __init__(self, index: int, subindex: int):

        index = int(index)
        subindex = int(subindex)

        if index < 0 or index > UINT16_MAX:
            raise ValueError('parameter index out of range: ' + str(index))

        if subindex < 0 or subindex > UINT8_MAX:
            raise ValueError('parameter subindex out of range: ' + str(subindex))

        self.index = index
        self.subindex = subindex


    def __eq__(self, other):
        if not isinstance(other, ParameterAddress):
            return NotImplemented
        return self.key == other.key


    def __hash__(self):
        return hash(self.key)


    def __repr__(self):
        return "ParameterAddress(0x%04x:%d)" % (self.index, self.subindex)


    @property
    def key(self) -> Tuple[int, int]:
        return (self.index, self.subindex)


    def to_dict(self) -> Dict[str, int]:
        return {'index': self.index, 'subindex': self.subindex}


    @classmethod
    def from_dict(cls, data) -> 'ParameterAddress':
        return cls(data['index'], data['subindex'])


# end of class ParameterAddress



class ParameterValue(ParameterAddress):
    """ A :class:`ParameterAddress` plus the value to write there. The same
        number is carried as a signed integer, an unsigned integer and a
        float; the receiving side picks whichever representation matches
        the declared type of the target parameter.
    """

    __slots__ = ('int_value', 'uint_value', 'float_value')

    def __init__(self, index: int, subindex: int, value=None,
                 int_value=None, uint_value=None, float_value=None):

        ParameterAddress.__init__(self, index, subindex)

        if value is not None:
            value = float(value)
            if int_value is None:
                int_value = int(value)
            if uint_value is None:
                uint_value = int(value)
            if float_value is None:
                float_value = value

        self.int_value = int_value
        self.uint_value = uint_value
        self.float_value = float_value


    def __eq__(self, other):
        if not isinstance(other, ParameterValue):
            return NotImplemented
        return self.key == other.key and self.values == other.values


    def __hash__(self):
        return hash((self.key, self.values))


    def __repr__(self):
        return "ParameterValue(0x%04x:%d=%r)" % (self.index, self.subindex, self.float_value)


    @property
    def address(self) -> ParameterAddress:
        return ParameterAddress(self.index, self.subindex)


    @property
    def values(self):
        return (self.int_value, self.uint_value, self.float_value)


    def to_dict(self) -> Dict[str, Any]:
        data = ParameterAddress.to_dict(self)
        data['intValue'] = self.int_value
        data['uintValue'] = self.uint_value
        data['floatValue'] = self.float_value
        return data


    @classmethod
    def from_dict(cls, data) -> 'ParameterValue':
        return cls(data['index'], data['subindex'],
                   int_value=data.get('intValue'),
                   uint_value=data.get('uintValue'),
                   float_value=data.get('floatValue'))


# end of class ParameterValue



class Message:
    """ The common shape of every value on the request/response channel:
        a correlation *id*, an operation *kind*, and a *payload* dictionary
        whose contents depend on the kind.

        :ivar timestamp: A UNIX epoch timestamp for when the instance was made.
    """

    def __init__(self, kind: str, payload: Optional[Dict[str, Any]] = None, id: Optional[str] = None):

        if payload is None:
            payload = dict()

        self.id = id
        self.kind = kind
        self.payload = payload
        self.timestamp = timemodule.time()


    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return (self.id, self.kind, self.payload) == (other.id, other.kind, other.payload)


    def __repr__(self):
        return "%s(id=%r, kind=%r, payload=%r)" % (type(self).__name__, self.id, self.kind, self.payload)


    def to_dict(self) -> Dict[str, Any]:
        return {'id': self.id, 'kind': self.kind, 'payload': self.payload}


    @classmethod
    def from_dict(cls, data):
        payload = data.get('payload')
        if payload is None:
            payload = dict()
        return cls(data['kind'], payload, data.get('id'))


# end of class Message



class Request(Message):
    """ A request bound for Motion Master. Every request has an id; one is
        generated if the caller does not provide it.
    """

    def __init__(self, kind: str, payload: Optional[Dict[str, Any]] = None, id: Optional[str] = None):

        if kind not in fields.REQUESTS:
            raise ValueError('invalid request kind: ' + repr(kind))

        if id is None:
            id = new_id()

        Message.__init__(self, kind, payload, id)


    @property
    def local(self) -> bool:
        """ True if this request is handled by the client itself rather
            than being sent to Motion Master.
        """

        return self.kind in fields.LOCAL


# end of class Request



class Response(Message):
    """ A response or status message from Motion Master. The id will
        usually, but not necessarily, match a pending :class:`Request`.
    """

    pass


# end of class Response



class Notification:
    """ A broadcast from the notification channel. The *device_address*, if
        any, is pulled out of the payload by the codec; it is carried here
        so that subscribers can filter on it without decoding anything.
    """

    def __init__(self, topic: str, payload: Any = None, device_address: Optional[int] = None):

        self.topic = topic
        self.payload = payload
        self.device_address = device_address
        self.timestamp = timemodule.time()


    def __eq__(self, other):
        if not isinstance(other, Notification):
            return NotImplemented
        return (self.topic, self.device_address, self.payload) == (other.topic, other.device_address, other.payload)


    def __repr__(self):
        return "Notification(topic=%r, device_address=%r, payload=%r)" % (self.topic, self.device_address, self.payload)


# end of class Notification



class MonitoringSubscription:
    """ A standing request to read *parameters* from the device at
        *device_address* every *interval* seconds, with the results
        published under *topic*. Subscriptions are keyed by topic and
        device address; there is never more than one active per key.
    """

    def __init__(self, topic: str, device_address: int, parameters: Iterable[ParameterAddress], interval: float):

        topic = str(topic)
        if topic == '':
            raise ValueError('monitoring topic cannot be empty')

        interval = float(interval)
        if interval <= 0:
            raise ValueError('monitoring interval must be positive: ' + str(interval))

        self.topic = topic
        self.device_address = device_address
        self.parameters = tuple(parameters)
        self.interval = interval


    def __repr__(self):
        return "MonitoringSubscription(topic=%r, device_address=%r, parameters=%r, interval=%g)" % (
                self.topic, self.device_address, self.parameters, self.interval)


    @property
    def key(self) -> Tuple[str, int]:
        return (self.topic, self.device_address)


    def to_payload(self) -> Dict[str, Any]:
        payload = dict()
        payload[fields.TOPIC] = self.topic
        payload[fields.DEVICE_ADDRESS] = self.device_address
        payload[fields.PARAMETERS] = [ParameterAddress.to_dict(parameter) for parameter in self.parameters]
        payload[fields.INTERVAL] = self.interval
        return payload


    @classmethod
    def from_request(cls, request: Request) -> 'MonitoringSubscription':
        """ Recover the subscription carried by a request built with
            :func:`mmclient.protocol.builder.start_monitoring_device_parameter_values`.
        """

        if request.kind != fields.START_MONITORING_DEVICE_PARAMETER_VALUES:
            raise ValueError('not a monitoring request: ' + repr(request.kind))

        payload = request.payload
        parameters = [ParameterAddress.from_dict(parameter) for parameter in payload[fields.PARAMETERS]]
        return cls(payload[fields.TOPIC], payload[fields.DEVICE_ADDRESS], parameters, payload[fields.INTERVAL])


# end of class MonitoringSubscription


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
