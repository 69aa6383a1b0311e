import mmclient
import pytest

from mmclient.protocol import parse
from mmclient.protocol.message import ParameterAddress, ParameterValue


def test_parameter():

    parameter = parse.parameter('2004:1')
    assert parameter == ParameterAddress(0x2004, 1)

    # The index is hexadecimal, the subindex decimal.

    parameter = parse.parameter('10:10')
    assert parameter.index == 16
    assert parameter.subindex == 10

    assert parse.parameter(' 6064:0 ') == ParameterAddress(0x6064, 0)


def test_malformed_parameter():

    for text in ('2004', '2004:', ':1', 'zz:1', '2004:x', '2004:0x1', '10000:0', '2004:256'):
        with pytest.raises(ValueError):
            parse.parameter(text)


def test_parameter_value():

    value = parse.parameter_value('2004:1=3.5')

    assert isinstance(value, ParameterValue)
    assert value.address == ParameterAddress(0x2004, 1)
    assert value.float_value == 3.5
    assert value.int_value == 3
    assert value.uint_value == 3

    negative = parse.parameter_value('2004:2=-4')
    assert negative.int_value == -4
    assert negative.float_value == -4.0
    assert negative.uint_value == -4


def test_malformed_parameter_value():

    for text in ('2004:1', '2004:1=', '=3', '2004:1=abc', 'zz:1=3', '2004:1=inf', '2004:1=-inf', '2004:1=nan'):
        with pytest.raises(ValueError):
            parse.parameter_value(text)


def test_integer():

    assert parse.integer('42') == 42
    assert parse.integer(' 7 ') == 7

    with pytest.raises(ValueError):
        parse.integer('0x10')


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
