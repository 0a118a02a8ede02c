"""Tests for the Pillow adapter."""

from pathlib import Path

import pytest
from PIL import Image

from steelseries_screen.exceptions import ImageError
from steelseries_screen.framebuffer import Framebuffer
from steelseries_screen.models import Dimensions, PanelVariant
from steelseries_screen.render import (
    draw_image,
    draw_text,
    image_to_frame,
    load_font,
    load_frames,
)

APEX = PanelVariant.APEX.dimensions


class TestImageToFrame:
    """Tests for image_to_frame function."""

    def test_resizes_to_panel(self) -> None:
        """Oversized images should be scaled to the panel."""
        img = Image.new("RGB", (256, 80), color=(255, 255, 255))
        frame = image_to_frame(img, APEX)
        assert len(frame) == APEX.byte_length
        assert frame == b"\xff" * 640

    def test_layout_matches_framebuffer(self) -> None:
        """Pillow packing should equal the framebuffer packing."""
        img = Image.new("1", (128, 40), color=0)
        fb = Framebuffer(APEX)
        for x, y in [(0, 0), (127, 0), (0, 39), (64, 20)]:
            img.putpixel((x, y), 1)
            fb.set_pixel(x, y, True)
        assert image_to_frame(img, APEX) == bytes(fb.as_bytes())

    @pytest.mark.parametrize("variant", list(PanelVariant))
    def test_every_panel(self, variant: PanelVariant) -> None:
        """Frames should fit every panel's framebuffer."""
        img = Image.new("L", (100, 100), color=0)
        fb = Framebuffer(variant.dimensions)
        fb.load(image_to_frame(img, variant.dimensions))


class TestLoadFrames:
    """Tests for load_frames function."""

    def test_static_image_uses_default_duration(self, tmp_path: Path) -> None:
        """Static image without duration info should use 1.0 second."""
        img_path = tmp_path / "test.png"
        Image.new("1", (128, 40), color=0).save(img_path)

        frames, sleep_time = load_frames(img_path, APEX)

        assert len(frames) == 1
        assert sleep_time == 1.0

    def test_gif_frames_and_minimum_duration(self, tmp_path: Path) -> None:
        """GIF frames should be loaded and 0ms durations capped at 16ms."""
        gif_path = tmp_path / "test.gif"
        first = Image.new("L", (128, 36), color=0)
        second = Image.new("L", (128, 36), color=255)
        first.save(gif_path, save_all=True, append_images=[second], duration=0)

        frames, sleep_time = load_frames(gif_path, PanelVariant.RIVAL.dimensions)

        assert len(frames) == 2
        assert all(len(f) == 576 for f in frames)
        assert sleep_time >= 0.016

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file should raise ImageError."""
        with pytest.raises(ImageError, match="not found"):
            load_frames(tmp_path / "missing.png", APEX)

    def test_not_an_image(self, tmp_path: Path) -> None:
        """A non-image file should raise ImageError."""
        path = tmp_path / "notes.txt"
        path.write_text("hello")
        with pytest.raises(ImageError, match="Failed to open"):
            load_frames(path, APEX)


class TestDrawImage:
    """Tests for draw_image function."""

    def test_copies_pixels(self) -> None:
        """Lit and unlit pixels should both be written."""
        fb = Framebuffer(APEX)
        fb.clear(True)
        img = Image.new("1", (2, 1), color=0)
        img.putpixel((1, 0), 1)
        draw_image(fb, img, (10, 10))
        assert fb.get_pixel(10, 10) is False
        assert fb.get_pixel(11, 10) is True
        assert fb.get_pixel(12, 10) is True

    def test_clips_without_warnings(self, caplog: pytest.LogCaptureFixture) -> None:
        """Off-canvas parts of the image should be skipped quietly."""
        fb = Framebuffer(Dimensions(8, 8))
        img = Image.new("1", (4, 4), color=1)
        draw_image(fb, img, (-2, 6))
        assert fb.get_pixel(0, 6) is True
        assert fb.get_pixel(1, 7) is True
        assert fb.get_pixel(2, 6) is False
        assert "out of bounds" not in caplog.text

    def test_fully_off_canvas(self) -> None:
        """An image entirely outside the target should change nothing."""
        fb = Framebuffer(APEX)
        draw_image(fb, Image.new("1", (4, 4), color=1), (200, 0))
        assert not any(fb.as_bytes())


class TestDrawText:
    """Tests for draw_text function."""

    def test_draws_something(self) -> None:
        """Text should light some pixels."""
        fb = Framebuffer(APEX)
        draw_text(fb, "Hello World!", (0, 6))
        assert any(fb.as_bytes())

    def test_overlays(self) -> None:
        """Text should not erase existing pixels."""
        fb = Framebuffer(APEX)
        fb.set_pixel(127, 39, True)
        draw_text(fb, "Hi")
        assert fb.get_pixel(127, 39) is True

    def test_empty_text(self) -> None:
        """Empty text should leave the buffer untouched."""
        fb = Framebuffer(APEX)
        draw_text(fb, "")
        assert not any(fb.as_bytes())


class TestLoadFont:
    """Tests for load_font function."""

    def test_default_font(self) -> None:
        """Without a path, Pillow's default font should be used."""
        assert load_font() is not None

    def test_bad_font(self, tmp_path: Path) -> None:
        """An unreadable font file should raise ImageError."""
        path = tmp_path / "font.ttf"
        path.write_text("not a font")
        with pytest.raises(ImageError, match="Failed to load font"):
            load_font(path)
