""" Python client for Motion Master. This includes the engine correlating
    requests with their responses, the demultiplexing of broadcast
    notifications by topic and device, and the background keep-alive and
    monitoring traffic.
"""

# Utility components.

from . import json
from . import errors
from . import stream

# Submodules used by multiple other components.

from . import protocol
from . import config

from . import correlate
from . import notify
from . import poll
from . import transport

# Primary public-facing interfaces.

from .client import Client
from . import commands
from . import begin
connect = begin.connect

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
