"""Custom exceptions for steelseries-screen."""


class SteelSeriesError(Exception):
    """Base exception for steelseries-screen errors."""


class EngineNotFoundError(SteelSeriesError):
    """Raised when the GameSense endpoint cannot be resolved."""

    def __init__(
        self,
        message: str = (
            "SteelSeries GG not found. Ensure SteelSeries GG is installed and running."
        ),
    ) -> None:
        super().__init__(message)


class DeviceCommunicationError(SteelSeriesError):
    """Raised when a request to the GameSense service fails."""


class RequestRejectedError(DeviceCommunicationError):
    """Raised when the GameSense service answers with a non-success status."""

    def __init__(self, endpoint: str, status_code: int, body: str) -> None:
        self.endpoint = endpoint
        self.status_code = status_code
        self.body = body
        super().__init__(
            f"GameSense rejected {endpoint} (HTTP {status_code}): {body or '<empty>'}"
        )


class ImageError(SteelSeriesError):
    """Raised when image processing fails."""
