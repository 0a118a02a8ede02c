"""Pillow adapter: images, GIFs and text onto a draw target."""

from pathlib import Path

from PIL import Image, ImageDraw, ImageFont, ImageSequence

from steelseries_screen.exceptions import ImageError
from steelseries_screen.framebuffer import DrawTarget
from steelseries_screen.models import Dimensions

Font = ImageFont.ImageFont | ImageFont.FreeTypeFont


def image_to_frame(image: Image.Image, size: Dimensions) -> bytes:
    """Resize an image to a panel and pack it as a 1-bit frame.

    Mode "1" images are packed MSB-first row-major, which is exactly the
    framebuffer layout, so the result can go straight to
    ``Framebuffer.load()``.
    """
    if image.size != (size.width, size.height):
        image = image.resize((size.width, size.height))
    if image.mode != "1":
        image = image.convert("1")
    return image.tobytes()


def load_frames(image_path: Path, size: Dimensions) -> tuple[list[bytes], float]:
    """Load and pack every frame of an image file.

    Args:
        image_path: Path to the image or GIF file.
        size: Target panel geometry.

    Returns:
        A tuple of (list of frame bytes, sleep time between frames).

    Raises:
        ImageError: If the image cannot be opened or processed.
    """
    try:
        with Image.open(image_path) as im:
            frames = [image_to_frame(frame, size) for frame in ImageSequence.Iterator(im)]

            if "duration" in im.info:
                # Minimum 16ms (~60fps) to prevent CPU spike on malformed GIFs
                sleep_time = max(im.info["duration"] / 1000.0, 0.016)
            else:
                sleep_time = 1.0

            return frames, sleep_time
    except FileNotFoundError as e:
        msg = f"Image file not found: {image_path}"
        raise ImageError(msg) from e
    except Image.DecompressionBombError as e:
        msg = f"Image too large (potential decompression bomb): {image_path}"
        raise ImageError(msg) from e
    except OSError as e:
        msg = f"Failed to open image: {image_path}"
        raise ImageError(msg) from e


def draw_image(
    target: DrawTarget, image: Image.Image, origin: tuple[int, int] = (0, 0)
) -> None:
    """Copy an image onto a draw target, clipped to the target's area.

    Every pixel of the visible region is written, lit or not.
    """
    mono = image if image.mode == "1" else image.convert("1")
    ox, oy = origin
    size = target.size
    x0, y0 = max(0, -ox), max(0, -oy)
    x1 = min(mono.width, size.width - ox)
    y1 = min(mono.height, size.height - oy)
    if x0 >= x1 or y0 >= y1:
        return
    px = mono.load()
    target.draw_batch(
        (ox + x, oy + y, bool(px[x, y]))
        for y in range(y0, y1)
        for x in range(x0, x1)
    )


def load_font(font_path: Path | None = None, size: int = 10) -> Font:
    """Load a TrueType font, or Pillow's default font.

    Raises:
        ImageError: If the font file cannot be loaded.
    """
    if font_path is None:
        return ImageFont.load_default()
    try:
        return ImageFont.truetype(str(font_path), size)
    except OSError as e:
        msg = f"Failed to load font: {font_path}"
        raise ImageError(msg) from e


def draw_text(
    target: DrawTarget,
    text: str,
    position: tuple[int, int] = (0, 0),
    font: Font | None = None,
) -> None:
    """Draw text onto a draw target.

    Only lit pixels are written, so text overlays existing content.
    """
    size = target.size
    canvas = Image.new("1", (size.width, size.height), color=0)
    ImageDraw.Draw(canvas).text(
        position, text, fill=1, font=font if font is not None else load_font()
    )
    px = canvas.load()
    target.draw_batch(
        (x, y, True)
        for y in range(size.height)
        for x in range(size.width)
        if px[x, y]
    )
