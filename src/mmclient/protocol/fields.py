"""Operation kinds.

Keep these in one place to avoid stringly-typed message handling. The
values are the field names Motion Master uses for each request and status
message.
"""

# Requests

PING_SYSTEM = "pingSystem"
GET_SYSTEM_VERSION = "getSystemVersion"
GET_DEVICE_INFO = "getDeviceInfo"
GET_DEVICE_PARAMETER_INFO = "getDeviceParameterInfo"
GET_DEVICE_PARAMETER_VALUES = "getDeviceParameterValues"
SET_DEVICE_PARAMETER_VALUES = "setDeviceParameterValues"
GET_DEVICE_FILE_LIST = "getDeviceFileList"
GET_DEVICE_LOG = "getDeviceLog"
START_MONITORING_DEVICE_PARAMETER_VALUES = "startMonitoringDeviceParameterValues"
STOP_MONITORING_DEVICE_PARAMETER_VALUES = "stopMonitoringDeviceParameterValues"

REQUESTS = frozenset((
    PING_SYSTEM,
    GET_SYSTEM_VERSION,
    GET_DEVICE_INFO,
    GET_DEVICE_PARAMETER_INFO,
    GET_DEVICE_PARAMETER_VALUES,
    SET_DEVICE_PARAMETER_VALUES,
    GET_DEVICE_FILE_LIST,
    GET_DEVICE_LOG,
    START_MONITORING_DEVICE_PARAMETER_VALUES,
    STOP_MONITORING_DEVICE_PARAMETER_VALUES,
))

# Handled by the client itself; never put on the wire.

LOCAL = frozenset((
    START_MONITORING_DEVICE_PARAMETER_VALUES,
    STOP_MONITORING_DEVICE_PARAMETER_VALUES,
))

# Status messages

SYSTEM_PONG = "systemPong"
SYSTEM_VERSION = "systemVersion"
DEVICE_INFO = "deviceInfo"
DEVICE_PARAMETER_INFO = "deviceParameterInfo"
DEVICE_PARAMETER_VALUES = "deviceParameterValues"
DEVICE_FILE_LIST = "deviceFileList"
DEVICE_LOG = "deviceLog"

# Payload keys shared by the builder, the codec and the command surface.

DEVICE_ADDRESS = "deviceAddress"
DEVICES = "devices"
POSITION = "position"
PARAMETERS = "parameters"
PARAMETER_VALUES = "parameterValues"
TOPIC = "topic"
INTERVAL = "interval"
