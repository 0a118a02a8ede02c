"""Packed monochrome framebuffer and the draw-target contract.

Pixels are stored 1 bit each, MSB-first, row-major: pixel ``(x, y)`` lives
in byte ``(y * width + x) // 8`` at bit ``7 - (y * width + x) % 8``. This is
the layout GameSense expects in ``image-data`` payloads and also the layout
Pillow uses for mode ``"1"`` images.
"""

import logging
import math
from abc import ABC, abstractmethod
from collections.abc import Iterable

from steelseries_screen.models import Dimensions

logger = logging.getLogger(__name__)

# (x, y, on). Float coordinates are accepted and floored to the pixel grid.
Pixel = tuple[int | float, int | float, bool]


class DrawTarget(ABC):
    """Anything a raster library can draw monochrome pixels into.

    Usage:
        target.clear(False)
        target.draw_batch((x, y, True) for x, y in points)
    """

    @property
    @abstractmethod
    def size(self) -> Dimensions:
        """Return the drawable area."""
        ...

    @abstractmethod
    def clear(self, on: bool = False) -> None:
        """Set every pixel on or off."""
        ...

    @abstractmethod
    def draw_batch(self, pixels: Iterable[Pixel]) -> None:
        """Apply ``(x, y, on)`` writes in order; later writes win.

        Pixels outside the drawable area are ignored.
        """
        ...

    def set_pixel(self, x: int | float, y: int | float, on: bool) -> None:
        """Set a single pixel."""
        self.draw_batch(((x, y, on),))


class Framebuffer(DrawTarget):
    """In-memory bitmap mirroring one panel.

    Example:
        fb = Framebuffer(PanelVariant.APEX.dimensions)
        fb.set_pixel(0, 0, True)
        payload = fb.as_bytes()
    """

    __slots__ = ("_buffer", "_size")

    def __init__(self, size: Dimensions) -> None:
        """Allocate an all-off buffer.

        Raises:
            ValueError: If the geometry is empty or not byte-aligned.
        """
        if size.width <= 0 or size.height <= 0:
            msg = f"Invalid framebuffer size {size.width}x{size.height}"
            raise ValueError(msg)
        if (size.width * size.height) % 8:
            msg = (
                f"Framebuffer size {size.width}x{size.height} "
                "is not a whole number of bytes"
            )
            raise ValueError(msg)
        self._size = size
        self._buffer = bytearray(size.byte_length)

    @property
    def size(self) -> Dimensions:
        """Return the framebuffer geometry."""
        return self._size

    def __len__(self) -> int:
        return len(self._buffer)

    def clear(self, on: bool = False) -> None:
        """Fill the whole buffer with 0xFF (on) or 0x00 (off)."""
        fill = 0xFF if on else 0x00
        self._buffer[:] = bytes([fill]) * len(self._buffer)

    def draw_batch(self, pixels: Iterable[Pixel]) -> None:
        """Write pixels in order, ignoring (and logging) out-of-bounds ones."""
        width = self._size.width
        height = self._size.height
        buffer = self._buffer
        for px, py, on in pixels:
            x = math.floor(px)
            y = math.floor(py)
            if not (0 <= x < width and 0 <= y < height):
                logger.warning(
                    "Ignoring attempt to draw out of bounds at (%d, %d) on %dx%d",
                    x,
                    y,
                    width,
                    height,
                )
                continue
            index = y * width + x
            mask = 1 << (7 - index % 8)
            if on:
                buffer[index // 8] |= mask
            else:
                buffer[index // 8] &= ~mask & 0xFF

    def get_pixel(self, x: int, y: int) -> bool:
        """Return whether the pixel at (x, y) is on.

        Raises:
            IndexError: If the coordinate is outside the buffer.
        """
        if not (0 <= x < self._size.width and 0 <= y < self._size.height):
            msg = f"Pixel ({x}, {y}) outside {self._size.width}x{self._size.height}"
            raise IndexError(msg)
        index = y * self._size.width + x
        return bool(self._buffer[index // 8] & (1 << (7 - index % 8)))

    def as_bytes(self) -> memoryview:
        """Return a read-only view of the packed bitmap."""
        return memoryview(self._buffer).toreadonly()

    def load(self, data: bytes | bytearray | memoryview) -> None:
        """Replace the whole buffer with an already packed frame.

        Args:
            data: Exactly ``size.byte_length`` bytes in framebuffer layout,
                e.g. ``Image.tobytes()`` of a mode "1" image of the same size.

        Raises:
            ValueError: If data has the wrong length.
        """
        if len(data) != len(self._buffer):
            msg = (
                f"Frame data must be exactly {len(self._buffer)} bytes, "
                f"got {len(data)}"
            )
            raise ValueError(msg)
        self._buffer[:] = data
