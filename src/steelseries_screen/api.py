"""GameSense HTTP client for screen events.

SteelSeries GG exposes the GameSense API on a localhost port that changes
with every start of the application. The current address is published in
``coreProps.json``; it is read once when the client is built.
"""

import json
import logging
import os
from collections.abc import Iterable, Mapping
from pathlib import Path
from types import TracebackType
from typing import Any, Self

import requests

from steelseries_screen.constants import (
    ENDPOINT_BIND,
    ENDPOINT_EVENT,
    ENDPOINT_HEARTBEAT,
    ENDPOINT_REGISTER,
    ENDPOINT_REMOVE,
    HANDLER_MODE,
    HANDLER_ZONE,
    HTTP_TIMEOUT,
)
from steelseries_screen.exceptions import (
    DeviceCommunicationError,
    EngineNotFoundError,
    RequestRejectedError,
)
from steelseries_screen.models import PanelVariant, SessionIdentity

logger = logging.getLogger(__name__)

# Paths to SteelSeries GG configuration
CORE_PROPS_PATHS = [
    Path(os.environ.get("PROGRAMDATA", r"C:\ProgramData"))
    / "SteelSeries"
    / "SteelSeries Engine 3"
    / "coreProps.json",
    Path("/Library/Application Support/SteelSeries Engine 3/coreProps.json"),
    Path.home() / "Library/Application Support/SteelSeries Engine 3/coreProps.json",
]


def find_engine_address(paths: Iterable[Path] | None = None) -> str:
    """Find the GameSense API address published by SteelSeries GG.

    The first existing file wins; a broken file is not skipped in favour
    of a later one.

    Args:
        paths: Candidate coreProps.json locations. Defaults to
            ``CORE_PROPS_PATHS``.

    Returns:
        The address as ``host:port``.

    Raises:
        EngineNotFoundError: If no file exists or the file is unusable.
    """
    for path in CORE_PROPS_PATHS if paths is None else paths:
        if not path.exists():
            continue
        try:
            with path.open(encoding="utf-8") as f:
                data = json.load(f)
            address = data["address"]
            host, port_str = address.rsplit(":", 1)
            port = int(port_str)
        except (OSError, json.JSONDecodeError) as e:
            msg = f"Cannot read SteelSeries GG configuration {path}: {e}"
            raise EngineNotFoundError(msg) from e
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            msg = f"No valid GameSense address in {path}"
            raise EngineNotFoundError(msg) from e
        logger.debug("GameSense address %s:%d from %s", host, port, path)
        return f"{host}:{port}"
    raise EngineNotFoundError


class GameSenseClient:
    """Stateless facade over the GameSense screen endpoints.

    The client does not track whether it has registered or bound; callers
    are expected to call ``register()``, then ``bind()``, then send events.
    Every failure is raised to the caller, nothing is retried.

    Example:
        with GameSenseClient(SessionIdentity("HELLO_WORLD")) as client:
            client.register()
            client.bind([PanelVariant.APEX])
            client.send_event({PanelVariant.APEX: framebuffer.as_bytes()})
    """

    def __init__(
        self,
        identity: SessionIdentity,
        address: str | None = None,
        *,
        timeout: float = HTTP_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            identity: Application identity sent with every request.
            address: ``host:port`` of the GameSense API. Looked up in
                coreProps.json when omitted.
            timeout: Per-request timeout in seconds.
            session: HTTP session to use instead of a new one.

        Raises:
            EngineNotFoundError: If the address cannot be resolved.
        """
        self.identity = identity
        self._address = address if address is not None else find_engine_address()
        self._base_url = f"http://{self._address}"
        self._timeout = timeout
        self._session = session if session is not None else requests.Session()

    @property
    def address(self) -> str:
        """Return the resolved ``host:port``."""
        return self._address

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()

    def register(self) -> None:
        """Register the game metadata with GameSense."""
        self._post(ENDPOINT_REGISTER, self.identity.metadata())

    def bind(self, variants: Iterable[PanelVariant]) -> None:
        """Bind one screen handler per panel variant to the event."""
        handlers = []
        for variant in variants:
            size = variant.dimensions
            handlers.append(
                {
                    "zone": HANDLER_ZONE,
                    "device-type": size.device_type,
                    "mode": HANDLER_MODE,
                    "datas": [
                        {
                            "has-text": False,
                            "image-data": [0] * size.byte_length,
                        }
                    ],
                }
            )
        self._post(
            ENDPOINT_BIND,
            {
                "game": self.identity.game,
                "event": self.identity.event,
                "value_optional": True,
                "handlers": handlers,
            },
        )

    def send_event(self, frames: Mapping[PanelVariant, bytes | memoryview]) -> None:
        """Send one frame per panel variant in a single event.

        Args:
            frames: Packed bitmap for each variant, as produced by
                ``Framebuffer.as_bytes()``.
        """
        frame = {
            variant.dimensions.image_data_key: list(data)
            for variant, data in frames.items()
        }
        self._post(
            ENDPOINT_EVENT,
            {
                "game": self.identity.game,
                "event": self.identity.event,
                "data": {"frame": frame},
            },
        )

    def heartbeat(self) -> None:
        """Keep the game alive without sending new screen data."""
        self._post(ENDPOINT_HEARTBEAT, {"game": self.identity.game})

    def remove_game(self) -> None:
        """Unregister the game and all its events from GameSense."""
        self._post(ENDPOINT_REMOVE, {"game": self.identity.game})

    def _post(self, endpoint: str, data: dict[str, Any]) -> None:
        """POST JSON to the GameSense API.

        Raises:
            DeviceCommunicationError: If the request cannot be delivered.
            RequestRejectedError: If GameSense answers with a non-2xx status.
        """
        url = f"{self._base_url}{endpoint}"
        logger.debug("POST %s", url)
        try:
            response = self._session.post(url, json=data, timeout=self._timeout)
        except requests.exceptions.Timeout as e:
            msg = f"GameSense API timed out on {endpoint}. Is SteelSeries GG running?"
            raise DeviceCommunicationError(msg) from e
        except requests.exceptions.RequestException as e:
            msg = f"GameSense API request to {endpoint} failed: {e}"
            raise DeviceCommunicationError(msg) from e

        if not response.ok:
            raise RequestRejectedError(endpoint, response.status_code, response.text)
