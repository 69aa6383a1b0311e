"""Byte-level encoding of protocol values.

The client engine only ever talks to a codec through the three methods of
:class:`Codec`; the JSON implementation here is what ships by default.
Swapping in a different wire format means providing another object with
the same three methods.
"""

from __future__ import annotations

from typing import Union

from .. import json
from ..errors import DecodeError
from . import fields
from .message import Notification, Request, Response


class Codec:
    """JSON framing for requests, responses and notifications.

    Request and response frames are a single JSON object with ``id``,
    ``kind`` and ``payload`` fields. Notification frames arrive as a topic
    frame plus a JSON payload frame; a ``deviceAddress`` key in the payload,
    if present, identifies the device that produced it.
    """

    def encode(self, request: Request) -> bytes:
        return json.dumps(request.to_dict())

    def decode(self, data: bytes) -> Response:
        decoded = self._loads(data)

        if not isinstance(decoded, dict):
            raise DecodeError("response frame is not an object: %r" % (decoded,))

        payload = decoded.get('payload')
        if payload is not None and not isinstance(payload, dict):
            raise DecodeError("response payload is not an object: %r" % (payload,))

        try:
            response = Response.from_dict(decoded)
        except KeyError as exc:
            raise DecodeError("response frame is missing %s" % (exc,)) from exc

        if response.id is not None:
            response.id = str(response.id)

        return response

    def decode_notification(self, topic: Union[bytes, str], data: bytes) -> Notification:
        if isinstance(topic, bytes):
            try:
                topic = topic.decode()
            except UnicodeDecodeError as exc:
                raise DecodeError("topic is not valid UTF-8: %r" % (topic,)) from exc

        if data in (b"", None):
            payload = None
        else:
            payload = self._loads(data)

        device_address = None
        if isinstance(payload, dict):
            device_address = payload.get(fields.DEVICE_ADDRESS)
            if isinstance(device_address, bool) or not isinstance(device_address, int):
                device_address = None

        return Notification(topic, payload, device_address)

    @staticmethod
    def _loads(data: bytes):
        try:
            return json.loads(data)
        except (json.error, UnicodeDecodeError, TypeError) as exc:
            raise DecodeError("malformed frame: %s" % (exc,)) from exc


default = Codec()
