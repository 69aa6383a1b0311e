"""Translate human-typed parameter references into protocol values.

A parameter is written as ``index:subindex``, with the index in
hexadecimal and the subindex in decimal, for example ``2004:1``. A
parameter value adds ``=value``, for example ``2004:1=3.5``.
"""

from __future__ import annotations

import math

from .message import ParameterAddress, ParameterValue


def _split(text: str, separator: str, what: str):
    text = str(text).strip()
    left, found, right = text.partition(separator)

    if found == '' or left == '' or right == '':
        raise ValueError("malformed %s: %r" % (what, text))

    return left.strip(), right.strip()


def parameter(text: str) -> ParameterAddress:
    index, subindex = _split(text, ':', 'parameter')

    try:
        index = int(index, 16)
        subindex = int(subindex, 10)
    except ValueError:
        raise ValueError("malformed parameter: %r" % (text,))

    return ParameterAddress(index, subindex)


def parameter_value(text: str) -> ParameterValue:
    reference, value = _split(text, '=', 'parameter value')
    address = parameter(reference)

    try:
        value = float(value)
    except ValueError:
        raise ValueError("malformed parameter value: %r" % (text,))

    if not math.isfinite(value):
        raise ValueError("malformed parameter value: %r" % (text,))

    return ParameterValue(address.index, address.subindex, value)


def integer(text: str) -> int:
    """ Parse a decimal integer option value, such as a device address or
        position.
    """

    try:
        return int(str(text).strip(), 10)
    except ValueError:
        raise ValueError("not a decimal integer: %r" % (text,))
