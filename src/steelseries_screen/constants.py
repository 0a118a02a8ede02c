"""Constants for the GameSense screen protocol."""

from typing import Final

# Event name every screen handler is bound to
DEFAULT_EVENT: Final[str] = "UPDATE"

# GameSense blanks the screen after ~15s without an event or heartbeat
DEVICE_TIMEOUT: Final[float] = 15.0
DEFAULT_HEARTBEAT_INTERVAL: Final[float] = 10.0

# HTTP configuration
HTTP_TIMEOUT: Final[float] = 2.0

# GameSense endpoints
ENDPOINT_REGISTER: Final[str] = "/game_metadata"
ENDPOINT_BIND: Final[str] = "/bind_game_event"
ENDPOINT_EVENT: Final[str] = "/game_event"
ENDPOINT_HEARTBEAT: Final[str] = "/game_heartbeat"
ENDPOINT_REMOVE: Final[str] = "/remove_game"

# Screen handler descriptor
HANDLER_ZONE: Final[str] = "one"
HANDLER_MODE: Final[str] = "screen"
