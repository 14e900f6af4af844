"""Layout of a session snapshot into a backend-agnostic view.

:func:`build_view` is a pure function of the :class:`SessionState` and the
available width. It decides which result cards fit, which one is the most
recent, and what the status and help lines say. Colours, borders and
cursor handling belong to the render surface.
"""

from __future__ import annotations

from dataclasses import dataclass

from qcoin.session import LabelEditing, Loading, SessionState, UIPhase
from qcoin.types import FlipResult, LabelSet, Verdict

HEADER = "QCOIN - Quantum Flip"
EMPTY_PLACEHOLDER = "No flips yet. Spin the quantum coin!"
LOADING_STATUS = "Extracting entropy..."

# 11 columns of card text plus borders and the right margin.
CARD_WIDTH = 14
# Four columns of breathing room on each side of the card row.
EDGE_MARGIN = 8

HELP_LINES = {
    UIPhase.IDLE: (
        "Press [Enter] to Flip • [r] to Reset • [c] to Change Source • "
        "[l] to Edit Labels • [q] to Quit"
    ),
    UIPhase.LOADING: "Flipping... • [q] to Quit",
    UIPhase.LABEL_EDITING: "[Tab] Switch Field • [Enter] Save • [Esc] Cancel • [Ctrl+C] Quit",
}

EDITOR_FIELD_NAMES = ("Ones label", "Zeros label")


@dataclass(frozen=True, slots=True)
class Card:
    """One result card.

    Attributes:
        label: Verdict text after label substitution.
        ones: Number of set bits.
        zeros: Number of unset bits.
        verdict: Raw verdict, used by renderers for colouring.
        is_latest: ``True`` only for the most recent flip.
    """

    label: str
    ones: int
    zeros: int
    verdict: Verdict
    is_latest: bool = False

    @property
    def lines(self) -> tuple[str, ...]:
        return (self.label, "", f"1: {self.ones}", f"0: {self.zeros}")


@dataclass(frozen=True, slots=True)
class EditorField:
    name: str
    text: str
    focused: bool


@dataclass(frozen=True, slots=True)
class View:
    """Everything a render surface needs to draw one frame.

    ``placeholder`` is set instead of ``cards`` when the history is empty.
    ``editor`` is only populated while labels are being edited.
    """

    header: str
    cards: tuple[Card, ...]
    placeholder: str | None
    status: str
    status_is_error: bool
    help: str
    editor: tuple[EditorField, ...] = ()
    hidden_count: int = 0
    card_width: int = CARD_WIDTH
    edge_margin: int = EDGE_MARGIN


def card_capacity(width: int, card_width: int = CARD_WIDTH, edge_margin: int = EDGE_MARGIN) -> int:
    """Number of cards that fit in *width* columns, never less than one."""
    return max(1, (width - edge_margin) // card_width)


def visible_history(
    history: tuple[FlipResult, ...],
    capacity: int,
) -> tuple[FlipResult, ...]:
    """Return the most recent *capacity* results, oldest first."""
    if len(history) <= capacity:
        return history
    return history[len(history) - capacity :]


def build_cards(history: tuple[FlipResult, ...], labels: LabelSet, capacity: int) -> tuple[Card, ...]:
    visible = visible_history(history, capacity)
    last = len(visible) - 1
    return tuple(
        Card(
            label=labels.label_for(result.verdict),
            ones=result.ones,
            zeros=result.zeros,
            verdict=result.verdict,
            is_latest=index == last,
        )
        for index, result in enumerate(visible)
    )


def status_line(state: SessionState) -> tuple[str, bool]:
    """Return the status text and whether it reports an error."""
    if state.error is not None:
        return f"Error: {state.error}", True
    if isinstance(state.phase, Loading):
        return LOADING_STATUS, False
    return f"Source: {state.source.upper()} | Total Flips: {state.total_flips}", False


def build_view(
    state: SessionState,
    width: int,
    card_width: int = CARD_WIDTH,
    edge_margin: int = EDGE_MARGIN,
) -> View:
    """Lay out *state* for a display *width* columns wide."""
    capacity = card_capacity(width, card_width, edge_margin)
    cards = build_cards(state.history, state.labels, capacity)
    status, is_error = status_line(state)

    editor: tuple[EditorField, ...] = ()
    if isinstance(state.phase, LabelEditing):
        editor = tuple(
            EditorField(name=name, text=text, focused=index == state.phase.focus)
            for index, (name, text) in enumerate(zip(EDITOR_FIELD_NAMES, state.phase.buffers))
        )

    return View(
        header=HEADER,
        cards=cards,
        placeholder=None if state.history else EMPTY_PLACEHOLDER,
        status=status,
        status_is_error=is_error,
        help=HELP_LINES[state.ui_phase],
        editor=editor,
        hidden_count=len(state.history) - len(cards),
        card_width=card_width,
        edge_margin=edge_margin,
    )
