"""Tests for CLI module."""

import argparse
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from PIL import Image

from steelseries_screen.cli import build_parser, cmd_clear, cmd_image, cmd_text, main
from steelseries_screen.exceptions import EngineNotFoundError
from steelseries_screen.models import PanelVariant, all_variants


def _args(*argv: str) -> argparse.Namespace:
    return build_parser().parse_args(list(argv))


class TestParser:
    """Tests for argument parsing."""

    def test_panel_default(self) -> None:
        """--panel is optional."""
        args = _args("clear")
        assert args.panel is None
        assert args.game == "STEELSERIES_SCREEN"

    def test_panel_repeatable(self) -> None:
        """--panel may be given several times."""
        args = _args("clear", "-p", "apex", "-p", "rival")
        assert args.panel == ["apex", "rival"]

    def test_unknown_panel(self) -> None:
        """Unknown panel names should be rejected by argparse."""
        with pytest.raises(SystemExit):
            _args("clear", "-p", "nokia")


class TestCmdPanels:
    """Tests for the panels command."""

    def test_lists_all(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Every panel should be listed with its device type."""
        assert main(["panels"]) == 0
        out = capsys.readouterr().out
        for variant in all_variants():
            assert variant.value in out
            assert variant.dimensions.device_type in out


class TestCmdClear:
    """Tests for the clear command."""

    def test_clears_selected_panels(self) -> None:
        """Should fill each selected framebuffer and send once."""
        session = MagicMock()
        session.__enter__.return_value = session
        session.variants = (PanelVariant.APEX, PanelVariant.RIVAL)

        with patch("steelseries_screen.cli.DisplaySession", return_value=session) as cls:
            result = cmd_clear(_args("--address", "127.0.0.1:1", "clear", "--on"))

        assert result == 0
        cls.assert_called_once_with(
            "STEELSERIES_SCREEN", (PanelVariant.APEX,), address="127.0.0.1:1"
        )
        session.drawing.return_value.__enter__.return_value.clear.assert_called_with(
            True
        )
        session.update.assert_called_once()

    def test_all_panels(self) -> None:
        """'all' should select every panel."""
        session = MagicMock()
        session.__enter__.return_value = session

        with patch("steelseries_screen.cli.DisplaySession", return_value=session) as cls:
            cmd_clear(_args("clear", "-p", "all"))

        assert cls.call_args.args[1] == all_variants()

    def test_identity_flags(self) -> None:
        """--developer and --description should reach the session."""
        session = MagicMock()
        session.__enter__.return_value = session

        with patch("steelseries_screen.cli.DisplaySession", return_value=session):
            cmd_clear(_args("--developer", "Max", "--description", "Hi", "clear"))

        session.set_developer.assert_called_once_with("Max")
        session.set_description.assert_called_once_with("Hi")

    def test_engine_missing(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Should return 1 with a hint when GG cannot be found."""
        with patch(
            "steelseries_screen.cli.DisplaySession", side_effect=EngineNotFoundError
        ):
            result = cmd_clear(_args("clear"))
        assert result == 1
        assert "--address" in capsys.readouterr().err


class TestCmdText:
    """Tests for the text command."""

    def test_missing_font(self, tmp_path: Path) -> None:
        """Should return 1 for a font that does not exist."""
        args = _args("text", "hi", "--font", str(tmp_path / "nope.ttf"))
        assert cmd_text(args) == 1

    def test_once(self) -> None:
        """--once should draw, send and exit without a heartbeat."""
        session = MagicMock()
        session.__enter__.return_value = session
        session.variants = (PanelVariant.APEX,)

        with (
            patch("steelseries_screen.cli.DisplaySession", return_value=session),
            patch("steelseries_screen.cli.draw_text") as draw,
        ):
            result = cmd_text(_args("text", "Hello", "--x", "2", "--y", "6", "--once"))

        assert result == 0
        assert draw.call_args.args[1:3] == ("Hello", (2, 6))
        session.update.assert_called_once()
        session.start_heartbeat.assert_not_called()


class TestCmdImage:
    """Tests for the image command."""

    def test_missing_file(self, tmp_path: Path) -> None:
        """Should return 1 for a missing image."""
        assert cmd_image(_args("image", str(tmp_path / "nope.png"))) == 1

    def test_once(self, tmp_path: Path) -> None:
        """--once should load the first frame into each framebuffer."""
        path = tmp_path / "img.png"
        Image.new("1", (128, 40), color=1).save(path)
        session = MagicMock()
        session.__enter__.return_value = session

        with patch("steelseries_screen.cli.DisplaySession", return_value=session):
            result = cmd_image(_args("image", str(path), "--once"))

        assert result == 0
        session.framebuffer_for.assert_called_once_with(PanelVariant.APEX)
        session.framebuffer_for.return_value.load.assert_called_once_with(
            b"\xff" * 640
        )
        session.update.assert_called_once()
