"""
Motion Master protocol values
=============================

This package defines what travels between a client and Motion Master:
typed requests, responses and notifications, constructors for each
request, parsing of human-typed parameter references, and the codec that
maps these values to bytes.

The protocol layer MUST NOT depend on any transport implementation, nor
on the client engine that correlates its values.

    fields.py     canonical operation kinds and payload keys
    message.py    Request, Response, Notification and parameter values
    builder.py    one constructor per request kind
    parse.py      "index:subindex[=value]" text to parameter values
    codec.py      values <-> bytes
"""

from . import fields
from . import message
from . import builder
from . import parse
from . import codec

from .message import (
    MonitoringSubscription,
    Notification,
    ParameterAddress,
    ParameterValue,
    Request,
    Response,
)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
