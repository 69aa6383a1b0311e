import json

import mmclient
import pytest

from mmclient.protocol import builder
from mmclient.protocol.codec import Codec
from mmclient.protocol.message import Response


def test_encode():

    request = builder.get_device_parameter_info(3, id='info')
    encoded = Codec().encode(request)

    assert isinstance(encoded, bytes)
    assert json.loads(encoded) == {
        'id': 'info',
        'kind': 'getDeviceParameterInfo',
        'payload': {'deviceAddress': 3},
    }


def test_decode():

    frame = json.dumps({'id': 'info', 'kind': 'deviceParameterInfo', 'payload': {'n': 1}}).encode()
    response = Codec().decode(frame)

    assert response == Response('deviceParameterInfo', {'n': 1}, 'info')


def test_decode_status_without_id():

    frame = json.dumps({'kind': 'systemPong'}).encode()
    response = Codec().decode(frame)

    assert response.id is None
    assert response.payload == {}


def test_decode_numeric_id():

    frame = json.dumps({'id': 12, 'kind': 'x'}).encode()
    assert Codec().decode(frame).id == '12'


def test_decode_failures():

    codec = Codec()

    for frame in (b'', b'not json', b'[1, 2]', b'{"id": "x"}', b'\xff\xfe'):
        with pytest.raises(mmclient.errors.DecodeError):
            codec.decode(frame)


def test_decode_payload_must_be_object():

    codec = Codec()

    for payload in ('[1, 2]', '"text"', '42', 'true'):
        frame = ('{"id": "x", "kind": "deviceInfo", "payload": %s}' % (payload,)).encode()
        with pytest.raises(mmclient.errors.DecodeError):
            codec.decode(frame)

    response = codec.decode(b'{"id": "x", "kind": "deviceInfo", "payload": null}')
    assert response.payload == {}


def test_decode_notification():

    codec = Codec()
    payload = {'deviceAddress': 42, 'parameterValues': [1, 2]}
    notification = codec.decode_notification(b'monitoring', json.dumps(payload).encode())

    assert notification.topic == 'monitoring'
    assert notification.device_address == 42
    assert notification.payload == payload


def test_decode_notification_without_device():

    codec = Codec()

    notification = codec.decode_notification('status', b'{"state": "ok"}')
    assert notification.device_address is None

    notification = codec.decode_notification('status', b'{"deviceAddress": "42"}')
    assert notification.device_address is None

    notification = codec.decode_notification('status', b'')
    assert notification.payload is None

    with pytest.raises(mmclient.errors.DecodeError):
        codec.decode_notification(b'status', b'{')


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
