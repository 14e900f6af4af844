"""curses render surface for the interactive mode.

Takes over the full terminal, draws :class:`~qcoin.layout.View` frames and
turns key presses into session events. Key translation lives in the pure
function :func:`translate_key`, so the mapping can be checked without a
terminal.
"""

from __future__ import annotations

import curses
import logging
from collections.abc import Callable
from typing import Any, TypeVar

from qcoin.layout import Card, View
from qcoin.session import (
    Event,
    FlipRequested,
    FocusSwitch,
    LabelBackspace,
    LabelEditCancel,
    LabelEditConfirm,
    LabelEditRequested,
    LabelInput,
    QuitRequested,
    ResetRequested,
    SourceToggleRequested,
    UIPhase,
)
from qcoin.types import Verdict

logger = logging.getLogger("qcoin")

T = TypeVar("T")

CTRL_C = "\x03"
ESCAPE = "\x1b"
TAB = "\t"
ENTER_KEYS = frozenset({"\n", "\r", curses.KEY_ENTER})
BACKSPACE_KEYS = frozenset({"\x7f", "\x08", curses.KEY_BACKSPACE})

_IDLE_KEYS: dict[Any, Callable[[], Event]] = {
    "q": QuitRequested,
    "r": ResetRequested,
    "c": SourceToggleRequested,
    "l": LabelEditRequested,
}

# Card interior width; borders add two columns and the margin one more,
# matching layout.CARD_WIDTH.
CARD_INNER_WIDTH = 11
CARD_HEIGHT = 6

# Colour pair numbers.
_PAIR_ONES = 1
_PAIR_ZEROS = 2
_PAIR_TIE = 3
_PAIR_LATEST = 4
_PAIR_TITLE = 5
_PAIR_ERROR = 6

_VERDICT_PAIRS = {
    Verdict.ONES: _PAIR_ONES,
    Verdict.ZEROS: _PAIR_ZEROS,
    Verdict.TIE: _PAIR_TIE,
}


def translate_key(key: str | int, phase: UIPhase) -> Event | None:
    """Map a key press to a session event for the given phase.

    Args:
        key: A character as returned by ``get_wch()``, or a ``curses.KEY_*``
            code for special keys.
        phase: The session's current phase.

    Returns:
        The event, or ``None`` when the key means nothing in *phase*.
    """
    if key == CTRL_C:
        return QuitRequested()

    if phase is UIPhase.LABEL_EDITING:
        if key in ENTER_KEYS:
            return LabelEditConfirm()
        if key == ESCAPE:
            return LabelEditCancel()
        if key == TAB:
            return FocusSwitch()
        if key in BACKSPACE_KEYS:
            return LabelBackspace()
        if isinstance(key, str) and key.isprintable():
            return LabelInput(key)
        return None

    if phase is UIPhase.LOADING:
        return QuitRequested() if key == "q" else None

    if key in ENTER_KEYS:
        return FlipRequested()
    factory = _IDLE_KEYS.get(key)
    return factory() if factory is not None else None


def card_box(card: Card) -> list[str]:
    """Return the text rows of a bordered card."""
    inner = CARD_INNER_WIDTH
    rows = ["╭" + "─" * inner + "╮"]
    rows.extend("│" + line[:inner].center(inner) + "│" for line in card.lines)
    rows.append("╰" + "─" * inner + "╯")
    return rows


class CursesSurface:
    """Render surface backed by a curses window.

    Args:
        stdscr: The screen window handed out by ``curses.wrapper``.
    """

    def __init__(self, stdscr: Any) -> None:
        self._screen = stdscr
        self._init_terminal()

    def _init_terminal(self) -> None:
        curses.curs_set(0)
        # Raw mode delivers Ctrl-C as a key instead of a KeyboardInterrupt.
        curses.raw()
        curses.set_escdelay(25)
        self._screen.keypad(True)
        if curses.has_colors():
            curses.start_color()
            curses.use_default_colors()
            curses.init_pair(_PAIR_ONES, curses.COLOR_GREEN, -1)
            curses.init_pair(_PAIR_ZEROS, curses.COLOR_MAGENTA, -1)
            curses.init_pair(_PAIR_TIE, curses.COLOR_WHITE, -1)
            curses.init_pair(_PAIR_LATEST, curses.COLOR_YELLOW, -1)
            curses.init_pair(_PAIR_TITLE, curses.COLOR_WHITE, curses.COLOR_GREEN)
            curses.init_pair(_PAIR_ERROR, curses.COLOR_RED, -1)

    @property
    def width(self) -> int:
        return self._screen.getmaxyx()[1]

    def poll(self, phase: UIPhase, timeout: float) -> Event | None:
        self._screen.timeout(int(timeout * 1000))
        try:
            key = self._screen.get_wch()
        except curses.error:
            # No key within the timeout.
            return None
        if key == curses.KEY_RESIZE:
            curses.update_lines_cols()
            return None
        return translate_key(key, phase)

    def draw(self, view: View) -> None:
        screen = self._screen
        screen.erase()
        height, width = screen.getmaxyx()

        self._put(0, 0, f" {view.header} ", curses.color_pair(_PAIR_TITLE) | curses.A_BOLD)

        row = 2
        if view.placeholder is not None:
            self._put(row + CARD_HEIGHT // 2, max(0, (width - len(view.placeholder)) // 2),
                      view.placeholder, curses.A_DIM)
        else:
            self._draw_cards(row, view)
        row += CARD_HEIGHT
        if view.hidden_count:
            self._put(row, view.edge_margin // 2, f"+{view.hidden_count} earlier", curses.A_DIM)
        row += 2

        for field in view.editor:
            marker = ">" if field.focused else " "
            attr = curses.A_REVERSE if field.focused else curses.A_NORMAL
            self._put(row, 2, f"{marker} {field.name}: ")
            self._put(row, 18, f"{field.text}_" if field.focused else field.text or " ", attr)
            row += 1
        if view.editor:
            row += 1

        status_attr = curses.color_pair(_PAIR_ERROR) if view.status_is_error else curses.A_NORMAL
        self._put(row, 0, view.status, status_attr)
        self._put(min(row + 2, height - 1), 0, view.help, curses.A_DIM)
        screen.refresh()

    def _draw_cards(self, top: int, view: View) -> None:
        x = view.edge_margin // 2
        for card in view.cards:
            text_attr = curses.color_pair(_VERDICT_PAIRS[card.verdict])
            border_attr = curses.color_pair(_PAIR_LATEST) | curses.A_BOLD if card.is_latest else text_attr
            rows = card_box(card)
            for offset, text in enumerate(rows):
                if offset in (0, len(rows) - 1):
                    self._put(top + offset, x, text, border_attr)
                else:
                    self._put(top + offset, x, text[0], border_attr)
                    self._put(top + offset, x + 1, text[1:-1], text_attr)
                    self._put(top + offset, x + len(text) - 1, text[-1], border_attr)
            x += view.card_width

    def _put(self, y: int, x: int, text: str, attr: int = curses.A_NORMAL) -> None:
        height, width = self._screen.getmaxyx()
        if y >= height or x >= width:
            return
        try:
            self._screen.addnstr(y, x, text, width - x, attr)
        except curses.error:
            # Writing the bottom-right cell raises after the text was drawn.
            pass


def run_curses(main: Callable[[CursesSurface], T]) -> T:
    """Run *main* with a :class:`CursesSurface` inside ``curses.wrapper``.

    The terminal is restored even if *main* raises.
    """

    def _wrapped(stdscr: Any) -> T:
        return main(CursesSurface(stdscr))

    return curses.wrapper(_wrapped)
