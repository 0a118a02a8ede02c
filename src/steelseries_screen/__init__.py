"""SteelSeries screen - Draw on SteelSeries LCD/OLED panels through GameSense.

This package drives the monochrome screens of SteelSeries keyboards,
headsets and mice via the GameSense HTTP API of SteelSeries GG.

Example:
    from steelseries_screen import DisplaySession, PanelVariant

    with DisplaySession("HELLO_WORLD", [PanelVariant.APEX]) as session:
        with session.drawing(PanelVariant.APEX) as fb:
            fb.set_pixel(0, 0, True)
        session.update()
        session.start_heartbeat()
"""

from steelseries_screen.api import GameSenseClient, find_engine_address
from steelseries_screen.display import DisplaySession, SteelSeriesDisplay
from steelseries_screen.exceptions import (
    DeviceCommunicationError,
    EngineNotFoundError,
    ImageError,
    RequestRejectedError,
    SteelSeriesError,
)
from steelseries_screen.framebuffer import DrawTarget, Framebuffer
from steelseries_screen.heartbeat import Heartbeat
from steelseries_screen.models import (
    Dimensions,
    PanelVariant,
    SessionIdentity,
    all_variants,
    dimensions,
)

__version__ = "1.0.0"

__all__ = [
    "DeviceCommunicationError",
    "Dimensions",
    "DisplaySession",
    "DrawTarget",
    "EngineNotFoundError",
    "Framebuffer",
    "GameSenseClient",
    "Heartbeat",
    "ImageError",
    "PanelVariant",
    "RequestRejectedError",
    "SessionIdentity",
    "SteelSeriesDisplay",
    "SteelSeriesError",
    "__version__",
    "all_variants",
    "dimensions",
    "find_engine_address",
]
