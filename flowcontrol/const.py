"""Constants for the flowcontrol adapter."""

# API endpoints
ENDPOINT_ALIVE = "/alive"
ENDPOINT_FLOW_ON = "/cmd?flowon"
ENDPOINT_FLOW_OFF = "/cmd?flowoff"

# Poll delays in seconds, measured from the end of the previous poll
POLL_INTERVAL = 15
RETRY_INTERVAL = 5

DEFAULT_NAMESPACE = "flowcontrol.0"
DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_LOG_LEVEL = "info"

# State ids, relative to the adapter namespace
STATE_CONNECTED = "connected"
STATE_ALIVE = "alive"
STATE_VALVE = "valve"
STATE_ERROR = "error"
STATE_COMMAND_VALVE = "command.valve"

# id -> (name, role, type, writable)
STATE_DEFINITIONS = {
    STATE_CONNECTED: ("connection", "indicator", "bool", False),
    STATE_ALIVE: ("server alive", "indicator", "number", False),
    STATE_VALVE: ("current valve state", "indicator", "text", False),
    STATE_ERROR: ("current error", "indicator", "text", False),
    STATE_COMMAND_VALVE: ("set valve state", "switch", "bool", True),
}

# Leaf of the only id that carries commands
COMMAND_LEAF = "valve"

ERROR_SUCCESS = "success"
ERROR_COMMAND_FAILED = "command_failed"

ALIVE_UNKNOWN = -1
VALVE_UNKNOWN = "unknown"

# Host log levels mapped to logging level names
LOG_LEVELS = {
    "silly": "DEBUG",
    "debug": "DEBUG",
    "info": "INFO",
    "warn": "WARNING",
    "warning": "WARNING",
    "error": "ERROR",
}
