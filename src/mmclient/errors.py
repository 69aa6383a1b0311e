"""Exceptions raised by the client engine.

Transport failures have their own hierarchy in :mod:`mmclient.transport`;
nothing here is raised for a reply that simply never arrives.
"""


class ClientError(Exception):
    """Base class for all client-side errors."""


class DuplicateRequestError(ClientError, ValueError):
    """A correlation id was registered while an earlier request using the
    same id is still pending."""


class DeviceNotFoundError(ClientError, LookupError):
    """No device matched the requested position."""


class UnknownRequestError(ClientError, ValueError):
    """The requested operation kind does not exist."""


class RequestTimeout(ClientError, TimeoutError):
    """A caller gave up waiting for a reply."""


class DecodeError(ClientError, ValueError):
    """An inbound frame could not be decoded."""


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
