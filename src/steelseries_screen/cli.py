"""Command-line interface for SteelSeries GameSense screens."""

import argparse
import logging
import sys
from pathlib import Path

from steelseries_screen import __version__
from steelseries_screen._signal import interruptible
from steelseries_screen.display import DisplaySession
from steelseries_screen.exceptions import (
    EngineNotFoundError,
    ImageError,
    SteelSeriesError,
)
from steelseries_screen.models import PanelVariant, all_variants
from steelseries_screen.render import draw_text, load_font, load_frames

DEFAULT_GAME = "STEELSERIES_SCREEN"

MAIN_EPILOG = """\
examples:
  steelseries-screen panels                      List supported panels
  steelseries-screen text "Hello World!"         Show text on an Apex keyboard
  steelseries-screen image logo.gif -p rival     Loop a GIF on a Rival mouse
  steelseries-screen clear -p all                Blank every panel

Requires SteelSeries GG to be running. Use -h with any command for details.
"""

HOLD_NOTE = """\
The screen is kept alive with a heartbeat until Ctrl+C, unless --once is
given (GameSense then blanks the screen after ~15 seconds).
"""


def _variants(args: argparse.Namespace) -> tuple[PanelVariant, ...]:
    names = args.panel or [PanelVariant.APEX.value]
    if "all" in names:
        return all_variants()
    return tuple(dict.fromkeys(PanelVariant(name) for name in names))


def _open_session(args: argparse.Namespace) -> DisplaySession:
    session = DisplaySession(args.game, _variants(args), address=args.address)
    if args.developer is not None:
        session.set_developer(args.developer)
    if args.description is not None:
        session.set_description(args.description)
    return session


def _hold(session: DisplaySession) -> None:
    """Keep the current frame on screen until interrupted."""
    session.start_heartbeat()
    print("Press Ctrl+C to exit.")
    with interruptible() as flag:
        while flag.active:
            flag.wait(1.0)
    print()


def _report(error: SteelSeriesError) -> int:
    if isinstance(error, EngineNotFoundError):
        print(f"Error: {error}", file=sys.stderr)
        print("Start SteelSeries GG or pass --address HOST:PORT.", file=sys.stderr)
    else:
        print(f"Error: {error}", file=sys.stderr)
    return 1


def cmd_panels(args: argparse.Namespace) -> int:
    """List supported panels."""
    for variant in all_variants():
        size = variant.dimensions
        print(
            f"{variant.value:<8} {size.width}x{size.height:<4} "
            f"{size.byte_length:>4} bytes  {size.device_type}"
        )
    return 0


def cmd_clear(args: argparse.Namespace) -> int:
    """Fill the selected panels and send one frame."""
    try:
        with _open_session(args) as session:
            for variant in session.variants:
                with session.drawing(variant) as fb:
                    fb.clear(args.on)
            session.update()
        return 0
    except SteelSeriesError as e:
        return _report(e)
    except KeyboardInterrupt:
        return 0


def cmd_text(args: argparse.Namespace) -> int:
    """Render text on the selected panels."""
    if args.font is not None and not args.font.is_file():
        print(f"Error: Font file not found: {args.font}", file=sys.stderr)
        return 1

    try:
        font = load_font(args.font, args.size)
        with _open_session(args) as session:
            for variant in session.variants:
                with session.drawing(variant) as fb:
                    fb.clear(False)
                    draw_text(fb, args.text, (args.x, args.y), font)
            session.update()
            if not args.once:
                _hold(session)
        return 0
    except SteelSeriesError as e:
        return _report(e)
    except KeyboardInterrupt:
        return 0


def cmd_image(args: argparse.Namespace) -> int:
    """Display an image or loop a GIF on the selected panels."""
    if not args.image.exists():
        print(f"Error: File not found: {args.image}", file=sys.stderr)
        return 1

    try:
        variants = _variants(args)
        loaded = {v: load_frames(args.image, v.dimensions) for v in variants}
        frames = {v: frame_list for v, (frame_list, _) in loaded.items()}
        sleep_time = loaded[variants[0]][1]
        frame_count = len(frames[variants[0]])
        if frame_count == 0:
            msg = f"No frames found in image: {args.image}"
            raise ImageError(msg)

        with _open_session(args) as session:
            if args.once or frame_count == 1:
                for variant in variants:
                    session.framebuffer_for(variant).load(frames[variant][0])
                session.update()
                if not args.once:
                    _hold(session)
                return 0

            session.start_heartbeat()
            print("Press Ctrl+C to exit.")
            with interruptible() as flag:
                while flag.active:
                    for index in range(frame_count):
                        if not flag.active:
                            break
                        for variant in variants:
                            with session.drawing(variant) as fb:
                                fb.load(frames[variant][index])
                        session.update()
                        flag.wait(sleep_time)
            print()
        return 0
    except SteelSeriesError as e:
        return _report(e)
    except KeyboardInterrupt:
        return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="steelseries-screen",
        description="Draw on SteelSeries LCD/OLED screens through GameSense.",
        epilog=MAIN_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--game",
        default=DEFAULT_GAME,
        help=f"GameSense game name, A-Z 0-9 - _ (default: {DEFAULT_GAME})",
    )
    parser.add_argument("--developer", default=None, help="developer name shown in GG")
    parser.add_argument(
        "--description", default=None, help="game display name shown in GG"
    )
    parser.add_argument(
        "--address",
        metavar="HOST:PORT",
        default=None,
        help="GameSense address (default: read from coreProps.json)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="enable debug logging"
    )

    panel_choices = [v.value for v in PanelVariant] + ["all"]
    panel_kwargs = {
        "action": "append",
        "choices": panel_choices,
        "metavar": "PANEL",
        "help": f"target panel, repeatable: {', '.join(panel_choices)} (default: apex)",
    }

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="commands",
        metavar="<command>",
    )

    panels_parser = subparsers.add_parser("panels", help="list supported panels")
    panels_parser.set_defaults(func=cmd_panels)

    clear_parser = subparsers.add_parser("clear", help="blank (or fill) the screen")
    clear_parser.add_argument("-p", "--panel", **panel_kwargs)
    clear_parser.add_argument(
        "--on", action="store_true", help="light every pixel instead"
    )
    clear_parser.set_defaults(func=cmd_clear)

    text_parser = subparsers.add_parser(
        "text",
        help="show text",
        epilog=HOLD_NOTE,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    text_parser.add_argument("text", help="text to draw")
    text_parser.add_argument("-p", "--panel", **panel_kwargs)
    text_parser.add_argument("--x", type=int, default=0, help="left edge (default: 0)")
    text_parser.add_argument("--y", type=int, default=0, help="top edge (default: 0)")
    text_parser.add_argument(
        "--font", type=Path, metavar="FILE", default=None, help="TrueType font file"
    )
    text_parser.add_argument(
        "--size", type=int, default=10, help="font size for --font (default: 10)"
    )
    text_parser.add_argument(
        "--once", action="store_true", help="send once and exit"
    )
    text_parser.set_defaults(func=cmd_text)

    image_parser = subparsers.add_parser(
        "image",
        help="show an image or loop a GIF",
        epilog=HOLD_NOTE,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    image_parser.add_argument("image", type=Path, metavar="FILE", help="image/GIF file")
    image_parser.add_argument("-p", "--panel", **panel_kwargs)
    image_parser.add_argument(
        "--once", action="store_true", help="send the first frame and exit"
    )
    image_parser.set_defaults(func=cmd_image)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point with subcommands."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )
    result: int = args.func(args)
    return result


if __name__ == "__main__":
    sys.exit(main())
