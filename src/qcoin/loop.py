"""Single-threaded interaction loop.

The loop owns the current :class:`~qcoin.session.SessionState` and handles
one event at a time: completion events posted by flip workers first, then
keyboard input polled from the render surface. Each event goes through
:func:`~qcoin.session.reduce`, the resulting effects are carried out and
the new snapshot is rendered.

Flips run on daemon worker threads. A worker only talks back to the loop by
posting one frozen :class:`~qcoin.session.FlipCompleted` event to a
thread-safe queue, and the loop never joins on it, so quitting while a flip
is in flight returns immediately.
"""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Callable
from typing import Protocol

from qcoin.engine import FlipEngine
from qcoin.exceptions import QCoinError
from qcoin.layout import CARD_WIDTH, EDGE_MARGIN, View, build_view
from qcoin.session import (
    Effect,
    Event,
    FlipCompleted,
    SessionState,
    StartFlip,
    Transition,
    UIPhase,
    initial_state,
    reduce,
)

logger = logging.getLogger("qcoin")

Job = Callable[[], None]


class RenderSurface(Protocol):
    """Where views are drawn and key events come from."""

    @property
    def width(self) -> int: ...

    def draw(self, view: View) -> None: ...

    def poll(self, phase: UIPhase, timeout: float) -> Event | None:
        """Wait up to *timeout* seconds for input and translate it for *phase*."""
        ...


def spawn_daemon(job: Job) -> None:
    """Run *job* on a daemon thread that never blocks interpreter exit."""
    threading.Thread(target=job, daemon=True, name="qcoin-flip").start()


class InteractionLoop:
    """Event-driven controller for an interactive session.

    Args:
        engine: Runs the flips.
        surface: Render surface providing width, drawing and input.
        state: Starting snapshot; defaults to an idle empty session.
        spawn: Starts a flip job off the loop. Defaults to a daemon thread.
        poll_interval_s: Input poll timeout when no event is queued.
        card_width: Columns per result card for the layout.
        edge_margin: Columns reserved around the card row.
    """

    def __init__(
        self,
        engine: FlipEngine,
        surface: RenderSurface,
        state: SessionState | None = None,
        *,
        spawn: Callable[[Job], None] = spawn_daemon,
        poll_interval_s: float = 0.1,
        card_width: int = CARD_WIDTH,
        edge_margin: int = EDGE_MARGIN,
    ) -> None:
        self._engine = engine
        self._surface = surface
        self._state = state or initial_state()
        self._spawn = spawn
        self._poll_interval_s = poll_interval_s
        self._card_width = card_width
        self._edge_margin = edge_margin
        self._events: queue.Queue[Event] = queue.Queue()
        self._last_width: int | None = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def pending_events(self) -> int:
        return self._events.qsize()

    def post(self, event: Event) -> None:
        """Queue *event* for the loop. Safe to call from any thread."""
        self._events.put(event)

    def dispatch(self, event: Event) -> Transition:
        """Apply one event, run its effects and re-render."""
        transition = reduce(self._state, event)
        self._state = transition.state
        for effect in transition.effects:
            self._apply(effect)
        self.render()
        return transition

    def drain(self) -> int:
        """Dispatch every queued event without polling input.

        Returns:
            Number of events dispatched.
        """
        count = 0
        while True:
            try:
                event = self._events.get_nowait()
            except queue.Empty:
                return count
            self.dispatch(event)
            count += 1

    def render(self) -> None:
        width = self._surface.width
        self._last_width = width
        self._surface.draw(
            build_view(self._state, width, self._card_width, self._edge_margin)
        )

    def run(self) -> SessionState:
        """Process events until the session is quit.

        Returns:
            The final snapshot.
        """
        self.render()
        while self._state.running:
            event = self._next_event()
            if event is not None:
                self.dispatch(event)
            elif self._surface.width != self._last_width:
                self.render()
        logger.debug("Interaction loop stopped after %d flips", self._state.total_flips)
        return self._state

    def _next_event(self) -> Event | None:
        try:
            return self._events.get_nowait()
        except queue.Empty:
            return self._surface.poll(self._state.ui_phase, self._poll_interval_s)

    def _apply(self, effect: Effect) -> None:
        if isinstance(effect, StartFlip):
            logger.debug("Starting flip against %s", effect.source)
            self._spawn(self._flip_job(effect.source))
        # Stop needs no action: the snapshot is no longer running.

    def _flip_job(self, source: str) -> Job:
        def job() -> None:
            try:
                result = self._engine.flip(source)
            except QCoinError as exc:
                logger.warning("Flip against %s failed: %s", source, exc)
                self.post(FlipCompleted(error=str(exc)))
            except Exception as exc:  # Intentional: the session must leave LOADING
                logger.exception("Unexpected error during flip against %s", source)
                self.post(FlipCompleted(error=f"unexpected error: {exc}"))
            else:
                self.post(FlipCompleted(result=result))

        return job
