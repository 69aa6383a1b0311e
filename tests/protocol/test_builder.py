import mmclient
import pytest

from mmclient.protocol import builder
from mmclient.protocol import fields
from mmclient.protocol.message import MonitoringSubscription, ParameterAddress, ParameterValue


def test_no_argument_requests():

    for function, kind in ((builder.ping_system, fields.PING_SYSTEM),
                           (builder.get_system_version, fields.GET_SYSTEM_VERSION),
                           (builder.get_device_info, fields.GET_DEVICE_INFO)):

        request = function()
        assert request.kind == kind
        assert request.payload == {}
        assert isinstance(request.id, str)

        request = function('chosen')
        assert request.id == 'chosen'


def test_generated_ids_are_unique():

    ids = set(builder.ping_system().id for number in range(1000))
    assert len(ids) == 1000


def test_addressed_requests():

    for function, kind in ((builder.get_device_parameter_info, fields.GET_DEVICE_PARAMETER_INFO),
                           (builder.get_device_file_list, fields.GET_DEVICE_FILE_LIST),
                           (builder.get_device_log, fields.GET_DEVICE_LOG)):

        request = function(0xFFFFFFFF, id='x')
        assert request.kind == kind
        assert request.id == 'x'
        assert request.payload == {fields.DEVICE_ADDRESS: 0xFFFFFFFF}


def test_bad_device_address():

    with pytest.raises(ValueError):
        builder.get_device_log(-1)

    with pytest.raises(ValueError):
        builder.get_device_log(0x100000000)

    with pytest.raises(TypeError):
        builder.get_device_log('12')


def test_get_parameter_values():

    parameters = [ParameterAddress(0x2004, 1), ParameterValue(0x6064, 0, 3)]
    request = builder.get_device_parameter_values(7, parameters, id='read')

    assert request.kind == fields.GET_DEVICE_PARAMETER_VALUES
    assert request.payload == {
        fields.DEVICE_ADDRESS: 7,
        fields.PARAMETERS: [{'index': 0x2004, 'subindex': 1},
                            {'index': 0x6064, 'subindex': 0}],
    }

    tagged = builder.get_device_parameter_values(7, parameters, topic='pos')
    assert tagged.payload[fields.TOPIC] == 'pos'

    with pytest.raises(TypeError):
        builder.get_device_parameter_values(7, [(0x2004, 1)])


def test_set_parameter_values():

    values = [ParameterValue(0x2004, 1, 3.5)]
    request = builder.set_device_parameter_values(7, values)

    assert request.kind == fields.SET_DEVICE_PARAMETER_VALUES
    assert request.payload[fields.PARAMETER_VALUES] == [{
        'index': 0x2004, 'subindex': 1,
        'intValue': 3, 'uintValue': 3, 'floatValue': 3.5,
    }]

    with pytest.raises(TypeError):
        builder.set_device_parameter_values(7, [ParameterAddress(0x2004, 1)])


def test_monitoring_requests():

    parameters = [ParameterAddress(0x2004, 1)]
    request = builder.start_monitoring_device_parameter_values(0.5, 'pos', 1, parameters)

    assert request.kind == fields.START_MONITORING_DEVICE_PARAMETER_VALUES
    assert request.local == True

    subscription = MonitoringSubscription.from_request(request)
    assert subscription.key == ('pos', 1)
    assert subscription.interval == 0.5
    assert subscription.parameters == (ParameterAddress(0x2004, 1),)

    stop = builder.stop_monitoring_device_parameter_values('pos', 1)
    assert stop.local == True
    assert stop.payload == {fields.DEVICE_ADDRESS: 1, fields.TOPIC: 'pos'}

    with pytest.raises(ValueError):
        builder.start_monitoring_device_parameter_values(0, 'pos', 1, parameters)

    with pytest.raises(ValueError):
        builder.start_monitoring_device_parameter_values(1, '', 1, parameters)

    with pytest.raises(ValueError):
        MonitoringSubscription.from_request(builder.ping_system())


def test_build_by_name():

    request = builder.build('GetDeviceLog', 12, id='log')
    assert request.kind == fields.GET_DEVICE_LOG
    assert request.payload[fields.DEVICE_ADDRESS] == 12

    assert builder.kind('getSystemVersion') == fields.GET_SYSTEM_VERSION
    assert builder.kind(' GetDeviceInfo ') == fields.GET_DEVICE_INFO

    with pytest.raises(mmclient.errors.UnknownRequestError):
        builder.build('GetEverything')

    with pytest.raises(mmclient.errors.UnknownRequestError):
        builder.kind('')


def test_invalid_request_kind():

    with pytest.raises(ValueError):
        mmclient.protocol.Request('systemPong')


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
