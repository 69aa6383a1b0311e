import time

import mmclient
import pytest

from mmclient import commands
from mmclient.protocol import fields


def test_resolve_by_address(client, responder):

    assert commands.resolve_device(client, device_address=99) == 99

    # An explicit address never costs a round trip.

    assert responder.sent == []


def test_resolve_by_position(client, responder):

    assert commands.resolve_device(client, device_position=1, timeout=1) == 5678
    assert commands.resolve_device(client, timeout=1) == 1234
    assert responder.kinds() == [fields.GET_DEVICE_INFO, fields.GET_DEVICE_INFO]


def test_device_not_found(client):

    with pytest.raises(mmclient.errors.DeviceNotFoundError) as raised:
        commands.resolve_device(client, device_position=5, timeout=1)

    assert 'position 5' in str(raised.value)

    with pytest.raises(LookupError):
        commands.resolve_device(client, device_position=None)


def test_request_system(client, responder):

    pending = commands.request(client, 'GetSystemVersion')
    assert pending.wait(1).payload['version'] == '1.2.3'
    assert responder.kinds() == [fields.GET_SYSTEM_VERSION]


def test_request_parameter_values(client, responder):

    pending = commands.request(client, 'GetDeviceParameterValues', ['2004:1', '6064:0'],
                               device_position=1, timeout=1)

    payload = pending.wait(1).payload
    assert payload[fields.DEVICE_ADDRESS] == 5678
    assert payload[fields.PARAMETERS] == [{'index': 0x2004, 'subindex': 1},
                                          {'index': 0x6064, 'subindex': 0}]


def test_request_addressed(client, responder):

    commands.request(client, 'getDeviceLog', device_address=3)

    request = responder.sent[-1]
    assert request['kind'] == fields.GET_DEVICE_LOG
    assert request['payload'] == {fields.DEVICE_ADDRESS: 3}


def test_request_unavailable(client):

    with pytest.raises(ValueError):
        commands.request(client, 'SetDeviceParameterValues', device_address=3)

    with pytest.raises(mmclient.errors.UnknownRequestError):
        commands.request(client, 'RebootEverything')

    with pytest.raises(ValueError):
        commands.request(client, 'GetDeviceParameterValues', ['nonsense'], device_address=3)


def test_upload(client, responder):

    pending = commands.upload(client, ['2004:1'], device_address=7)
    payload = pending.wait(1).payload

    assert payload[fields.DEVICE_ADDRESS] == 7
    assert payload[fields.PARAMETERS] == [{'index': 0x2004, 'subindex': 1}]


def test_download(client, responder):

    commands.download(client, ['2004:1=3.5', '2004:2=-1'], device_address=7)

    request = responder.sent[-1]
    assert request['kind'] == fields.SET_DEVICE_PARAMETER_VALUES

    values = request['payload'][fields.PARAMETER_VALUES]
    assert values[0]['floatValue'] == 3.5
    assert values[0]['intValue'] == 3
    assert values[1]['intValue'] == -1
    assert values[1]['uintValue'] == -1


def test_monitor(client, responder):

    subscription = commands.monitor(client, 'pos', ['2004:1'], interval=0.03, device_address=7)

    assert client.scheduler.interval('pos', 7) == 0.03
    time.sleep(0.08)

    reads = [request for request in responder.sent if request['kind'] == fields.GET_DEVICE_PARAMETER_VALUES]
    assert len(reads) >= 2
    assert all(request['payload'][fields.TOPIC] == 'pos' for request in reads)

    client.receive_notification(b'pos', b'{"deviceAddress": 7}')
    client.receive_notification(b'other', b'{"deviceAddress": 7}')

    assert subscription.get(0).topic == 'pos'
    assert subscription.pending() == 0


def test_monitor_default_interval(monkeypatch, responder):

    monkeypatch.setenv('MMCLIENT_MONITORING_INTERVAL', '0.04')

    client = mmclient.Client(responder)
    responder.client = client

    try:
        assert client.configuration.monitoring_interval == 0.04

        commands.monitor(client, 'pos', ['2004:1'], device_address=7)
        assert client.scheduler.interval('pos', 7) == 0.04

        commands.monitor(client, 'pos', ['2004:1'], interval=0.5, device_address=7)
        assert client.scheduler.interval('pos', 7) == 0.5
    finally:
        client.shutdown()

    configuration = mmclient.config.Configuration(monitoring_interval=2)
    client = mmclient.Client(responder, configuration=configuration)

    try:
        commands.monitor(client, 'pos', ['2004:1'], device_address=7)
        assert client.scheduler.interval('pos', 7) == 2.0
    finally:
        client.shutdown()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
