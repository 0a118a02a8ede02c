"""Display sessions: framebuffers bound to a GameSense game.

Note:
    GameSense requires ``register()`` then ``bind()`` before frames are
    accepted. The session only warns about out-of-order calls; it still
    issues the request and leaves the outcome to GameSense.
"""

import logging
import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from types import TracebackType
from typing import Self

from steelseries_screen.api import GameSenseClient
from steelseries_screen.constants import DEFAULT_HEARTBEAT_INTERVAL, HTTP_TIMEOUT
from steelseries_screen.framebuffer import DrawTarget, Framebuffer, Pixel
from steelseries_screen.heartbeat import Heartbeat
from steelseries_screen.models import (
    Dimensions,
    PanelVariant,
    SessionIdentity,
    all_variants,
)

logger = logging.getLogger(__name__)


class DisplaySession:
    """One registered game driving one framebuffer per panel variant.

    Example:
        with DisplaySession("HELLO_WORLD") as session:
            with session.drawing(PanelVariant.APEX) as fb:
                fb.set_pixel(0, 0, True)
            session.update()
    """

    def __init__(
        self,
        game: str,
        variants: Iterable[PanelVariant] | None = None,
        *,
        address: str | None = None,
        client: GameSenseClient | None = None,
    ) -> None:
        """Create framebuffers and the GameSense client.

        Args:
            game: GameSense game name (upper-case A-Z, 0-9, -, _).
            variants: Panels to drive. Defaults to every supported panel.
            address: ``host:port`` of GameSense, skipping coreProps lookup.
            client: Pre-built client; its identity game must equal ``game``.

        Raises:
            EngineNotFoundError: If the GameSense address cannot be resolved.
            ValueError: If variants is empty or contains duplicates, or if
                game differs from the game of a supplied client.
        """
        variants = tuple(all_variants() if variants is None else variants)
        if not variants:
            msg = "A display session needs at least one panel variant"
            raise ValueError(msg)
        if len(set(variants)) != len(variants):
            msg = f"Duplicate panel variants: {[v.value for v in variants]}"
            raise ValueError(msg)

        if client is None:
            client = GameSenseClient(SessionIdentity(game), address)
        elif client.identity.game != game:
            msg = (
                f"Game name {game!r} does not match the client identity "
                f"{client.identity.game!r}"
            )
            raise ValueError(msg)
        self._client = client
        self._framebuffers = {v: Framebuffer(v.dimensions) for v in variants}
        self._lock = threading.Lock()
        self._heartbeat: Heartbeat | None = None
        self._registered = False
        self._bound = False

    def __enter__(self) -> Self:
        """Register the game and bind the screen event."""
        try:
            self.register()
            self.bind()
        except BaseException:
            self.close()
            raise
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def identity(self) -> SessionIdentity:
        return self._client.identity

    @property
    def client(self) -> GameSenseClient:
        return self._client

    @property
    def variants(self) -> tuple[PanelVariant, ...]:
        return tuple(self._framebuffers)

    def set_developer(self, name: str) -> None:
        """Set the developer name. Must be called before register()."""
        self.identity.developer = name

    def set_description(self, text: str) -> None:
        """Set the game display name. Must be called before register()."""
        self.identity.display_name = text

    def register(self) -> None:
        """Register the game metadata with GameSense."""
        self._client.register()
        self._registered = True

    def bind(self) -> None:
        """Declare the screen formats this session will send."""
        if not self._registered:
            logger.warning("Binding %s before register()", self.identity.game)
        self._client.bind(self._framebuffers)
        self._bound = True

    def unregister(self) -> None:
        """Remove the game from GameSense."""
        self._client.remove_game()
        self._registered = False
        self._bound = False

    def framebuffer_for(self, variant: PanelVariant) -> Framebuffer:
        """Return the framebuffer of a managed panel.

        Raises:
            KeyError: If the variant is not managed by this session.
        """
        return self._framebuffers[variant]

    @contextmanager
    def drawing(self, variant: PanelVariant) -> Iterator[Framebuffer]:
        """Hold exclusive access to a framebuffer while drawing into it."""
        framebuffer = self.framebuffer_for(variant)
        with self._lock:
            yield framebuffer

    def update(self) -> None:
        """Send every framebuffer to GameSense in one event."""
        if not self._bound:
            logger.warning("Sending frame for %s before bind()", self.identity.game)
        with self._lock:
            frames = {v: bytes(fb.as_bytes()) for v, fb in self._framebuffers.items()}
        self._client.send_event(frames)

    @property
    def heartbeat_active(self) -> bool:
        return self._heartbeat is not None and self._heartbeat.active

    def start_heartbeat(self, interval: float = DEFAULT_HEARTBEAT_INTERVAL) -> None:
        """Start the keep-alive loop, replacing any running one.

        A replaced loop is only told to stop, not joined. If it is in the
        middle of a heartbeat POST, that request still completes, so two
        heartbeat threads can briefly coexist; the old one sends nothing
        further.
        """
        heartbeat = Heartbeat(self._client.heartbeat, interval)
        if self._heartbeat is not None and self._heartbeat.active:
            logger.debug("Replacing running heartbeat")
            self._heartbeat.stop()
        self._heartbeat = heartbeat
        heartbeat.start()

    def stop_heartbeat(self) -> None:
        """Signal the keep-alive loop to stop without waiting for it."""
        if self._heartbeat is not None:
            self._heartbeat.stop()

    def close(self) -> None:
        """Stop the heartbeat and release the HTTP session."""
        if self._heartbeat is not None:
            self._heartbeat.stop()
            self._heartbeat.join(HTTP_TIMEOUT)
        self._client.close()


class SteelSeriesDisplay(DrawTarget):
    """A single panel as a draw target.

    Simplified entry point for applications that only target one panel.

    Example:
        display = SteelSeriesDisplay(PanelVariant.APEX, "HELLO_WORLD")
        display.developer("Max")
        display.register()
        display.bind()
        display.clear(False)
        draw_text(display, "Hello World!")
        display.flush()
    """

    def __init__(
        self,
        variant: PanelVariant,
        game: str,
        *,
        address: str | None = None,
        client: GameSenseClient | None = None,
    ) -> None:
        self._variant = variant
        self._session = DisplaySession(
            game, (variant,), address=address, client=client
        )
        self._framebuffer = self._session.framebuffer_for(variant)

    def __enter__(self) -> Self:
        self._session.__enter__()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self._session.close()

    @property
    def variant(self) -> PanelVariant:
        return self._variant

    @property
    def session(self) -> DisplaySession:
        return self._session

    @property
    def framebuffer(self) -> Framebuffer:
        return self._framebuffer

    @property
    def size(self) -> Dimensions:
        return self._framebuffer.size

    def developer(self, name: str) -> None:
        """Set the developer name. Must be called before register()."""
        self._session.set_developer(name)

    def game_description(self, description: str) -> None:
        """Set the game description. Must be called before register()."""
        self._session.set_description(description)

    def register(self) -> None:
        self._session.register()

    def bind(self) -> None:
        self._session.bind()

    def clear(self, on: bool = False) -> None:
        self._framebuffer.clear(on)

    def draw_batch(self, pixels: Iterable[Pixel]) -> None:
        self._framebuffer.draw_batch(pixels)

    def flush(self) -> None:
        """Send the framebuffer to the device.

        Nothing reaches the panel until flush() is called.
        """
        self._session.update()

    def start_heartbeat(self, interval: float = DEFAULT_HEARTBEAT_INTERVAL) -> None:
        self._session.start_heartbeat(interval)

    def stop_heartbeat(self) -> None:
        self._session.stop_heartbeat()

    def close(self) -> None:
        self._session.close()
