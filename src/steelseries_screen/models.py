"""Data models for steelseries-screen."""

from dataclasses import dataclass
from enum import Enum

from steelseries_screen.constants import DEFAULT_EVENT


class PanelVariant(Enum):
    """Screen geometries supported by GameSense."""

    APEX = "apex"  # Apex 7, Apex 7 TKL, Apex Pro, Apex Pro TKL
    ARCTIS = "arctis"  # Arctis Pro Wireless
    GAMEDAC = "gamedac"  # GameDAC / Arctis Pro
    RIVAL = "rival"  # Rival 700, Rival 710

    @property
    def dimensions(self) -> "Dimensions":
        """Return the pixel geometry of this panel."""
        return dimensions(self)


@dataclass(frozen=True, slots=True)
class Dimensions:
    """Pixel size of a monochrome panel."""

    width: int
    height: int

    @property
    def byte_length(self) -> int:
        """Size of the packed 1-bit bitmap in bytes."""
        return self.width * self.height // 8

    @property
    def device_type(self) -> str:
        """GameSense device-type used when binding a screen handler."""
        return f"screened-{self.width}x{self.height}"

    @property
    def image_data_key(self) -> str:
        """Frame key carrying the bitmap for this geometry."""
        return f"image-data-{self.width}x{self.height}"


_DIMENSIONS: dict[PanelVariant, Dimensions] = {
    PanelVariant.APEX: Dimensions(128, 40),
    PanelVariant.ARCTIS: Dimensions(128, 48),
    PanelVariant.GAMEDAC: Dimensions(128, 52),
    PanelVariant.RIVAL: Dimensions(128, 36),
}


def dimensions(variant: PanelVariant) -> Dimensions:
    """Return the dimensions of a panel variant."""
    return _DIMENSIONS[variant]


def all_variants() -> tuple[PanelVariant, ...]:
    """Return every supported panel variant in a stable order."""
    return tuple(PanelVariant)


@dataclass(slots=True)
class SessionIdentity:
    """Application identity registered with GameSense.

    ``game`` must be upper-case A-Z, 0-9, hyphen or underscore; GameSense
    rejects anything else with an HTTP error. Changes made after
    registration only take effect on the next ``register()``.
    """

    game: str
    display_name: str | None = None
    developer: str | None = None
    event: str = DEFAULT_EVENT
    deinitialize_timer_ms: int | None = None

    def metadata(self) -> dict[str, object]:
        """Build the body of a ``game_metadata`` request."""
        body: dict[str, object] = {
            "game": self.game,
            "event": self.event,
            "value_optional": True,
        }
        if self.display_name is not None:
            body["game_display_name"] = self.display_name
        if self.developer is not None:
            body["developer"] = self.developer
        if self.deinitialize_timer_ms is not None:
            body["deinitialize_timer_length_ms"] = self.deinitialize_timer_ms
        return body
