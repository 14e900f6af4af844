"""Interactive session state and its transition table.

The session is an immutable :class:`SessionState` snapshot. Every input or
completion event is fed through :func:`reduce`, which looks the event up in
:data:`TRANSITIONS`, checks the phase guard and returns the next snapshot
plus the side effects the loop has to carry out. The reducer itself never
performs I/O.

The phase is a tagged union (:class:`Idle`, :class:`Loading`,
:class:`LabelEditing`). Label edit buffers only exist inside
:class:`LabelEditing`, so a session cannot hold edit state while a flip is
loading.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum
from typing import ClassVar, Union

from qcoin.types import (
    DEFAULT_ONES_LABEL,
    DEFAULT_SOURCE,
    DEFAULT_ZEROS_LABEL,
    FlipResult,
    LabelSet,
    toggle_source,
)

logger = logging.getLogger("qcoin")

# Longest label that still fits inside the 11-column card interior.
MAX_LABEL_LENGTH = 10

LABEL_FIELD_COUNT = 2


class UIPhase(Enum):
    IDLE = "idle"
    LOADING = "loading"
    LABEL_EDITING = "label_editing"


# ---------------------------------------------------------------------------
# Phases
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Idle:
    """Waiting for input."""

    kind: ClassVar[UIPhase] = UIPhase.IDLE


@dataclass(frozen=True, slots=True)
class Loading:
    """A flip is in flight against *source*."""

    kind: ClassVar[UIPhase] = UIPhase.LOADING

    source: str


@dataclass(frozen=True, slots=True)
class LabelEditing:
    """The user is editing the ONES and ZEROS labels.

    Attributes:
        buffers: Edit text for the ONES label (index 0) and the ZEROS label
            (index 1).
        focus: Index of the buffer receiving keystrokes.
    """

    kind: ClassVar[UIPhase] = UIPhase.LABEL_EDITING

    buffers: tuple[str, str]
    focus: int = 0

    @property
    def focused_text(self) -> str:
        return self.buffers[self.focus]

    def with_focused_text(self, text: str) -> LabelEditing:
        buffers = list(self.buffers)
        buffers[self.focus] = text[:MAX_LABEL_LENGTH]
        return replace(self, buffers=(buffers[0], buffers[1]))


Phase = Union[Idle, Loading, LabelEditing]

IDLE = Idle()


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FlipRequested:
    pass


@dataclass(frozen=True, slots=True)
class FlipCompleted:
    """Outcome of an asynchronous flip: exactly one of *result* or *error*."""

    result: FlipResult | None = None
    error: str | None = None

    def __post_init__(self) -> None:
        if (self.result is None) == (self.error is None):
            raise ValueError("FlipCompleted needs exactly one of result or error")

    @property
    def ok(self) -> bool:
        return self.result is not None


@dataclass(frozen=True, slots=True)
class ResetRequested:
    pass


@dataclass(frozen=True, slots=True)
class SourceToggleRequested:
    pass


@dataclass(frozen=True, slots=True)
class LabelEditRequested:
    pass


@dataclass(frozen=True, slots=True)
class LabelEditConfirm:
    pass


@dataclass(frozen=True, slots=True)
class LabelEditCancel:
    pass


@dataclass(frozen=True, slots=True)
class FocusSwitch:
    pass


@dataclass(frozen=True, slots=True)
class LabelInput:
    """Printable text typed into the focused label buffer."""

    text: str


@dataclass(frozen=True, slots=True)
class LabelBackspace:
    pass


@dataclass(frozen=True, slots=True)
class QuitRequested:
    pass


Event = Union[
    FlipRequested,
    FlipCompleted,
    ResetRequested,
    SourceToggleRequested,
    LabelEditRequested,
    LabelEditConfirm,
    LabelEditCancel,
    FocusSwitch,
    LabelInput,
    LabelBackspace,
    QuitRequested,
]


# ---------------------------------------------------------------------------
# Effects
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class StartFlip:
    """Run a flip against *source* off the loop and report back."""

    source: str


@dataclass(frozen=True, slots=True)
class Stop:
    """Terminate the interaction loop."""


Effect = Union[StartFlip, Stop]


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SessionState:
    """Immutable snapshot of an interactive session.

    Attributes:
        history: Flip results in chronological order.
        source: Selector name of the source the next flip uses.
        labels: Text shown for ONES and ZEROS verdicts.
        phase: The single active phase.
        error: Message of the last failed flip, cleared by the next request.
        running: ``False`` once the session has been quit.
    """

    history: tuple[FlipResult, ...] = ()
    source: str = DEFAULT_SOURCE
    labels: LabelSet = LabelSet()
    phase: Phase = IDLE
    error: str | None = None
    running: bool = True

    @property
    def ui_phase(self) -> UIPhase:
        return self.phase.kind

    @property
    def total_flips(self) -> int:
        return len(self.history)


def initial_state(source: str = DEFAULT_SOURCE, labels: LabelSet | None = None) -> SessionState:
    """Return the starting snapshot: idle, empty history."""
    return SessionState(source=source, labels=labels or LabelSet())


@dataclass(frozen=True, slots=True)
class Transition:
    """Result of feeding one event to :func:`reduce`.

    Attributes:
        state: The next snapshot (the same object when the event was ignored).
        effects: Side effects for the loop to carry out, in order.
        accepted: ``False`` when the phase guard rejected the event.
    """

    state: SessionState
    effects: tuple[Effect, ...] = ()
    accepted: bool = True


# ---------------------------------------------------------------------------
# Transition effects
# ---------------------------------------------------------------------------


def _start_flip(state: SessionState, event: FlipRequested) -> Transition:
    return Transition(
        replace(state, phase=Loading(state.source), error=None),
        (StartFlip(state.source),),
    )


def _complete_flip(state: SessionState, event: FlipCompleted) -> Transition:
    if event.result is not None:
        return Transition(replace(state, history=(*state.history, event.result), phase=IDLE))
    return Transition(replace(state, error=event.error, phase=IDLE))


def _reset(state: SessionState, event: ResetRequested) -> Transition:
    return Transition(replace(state, history=()))


def _toggle_source(state: SessionState, event: SourceToggleRequested) -> Transition:
    return Transition(replace(state, source=toggle_source(state.source)))


def _begin_label_edit(state: SessionState, event: LabelEditRequested) -> Transition:
    buffers = (state.labels.ones_label, state.labels.zeros_label)
    return Transition(replace(state, phase=LabelEditing(buffers=buffers, focus=0)))


def _editing_phase(state: SessionState) -> LabelEditing:
    if not isinstance(state.phase, LabelEditing):
        raise TypeError(f"label edit effect applied in phase {state.ui_phase.value}")
    return state.phase


def _confirm_label_edit(state: SessionState, event: LabelEditConfirm) -> Transition:
    editing = _editing_phase(state)
    ones, zeros = (text.strip() for text in editing.buffers)
    labels = LabelSet(
        ones_label=ones or DEFAULT_ONES_LABEL,
        zeros_label=zeros or DEFAULT_ZEROS_LABEL,
    )
    return Transition(replace(state, labels=labels, phase=IDLE))


def _cancel_label_edit(state: SessionState, event: LabelEditCancel) -> Transition:
    return Transition(replace(state, phase=IDLE))


def _switch_focus(state: SessionState, event: FocusSwitch) -> Transition:
    editing = _editing_phase(state)
    focus = (editing.focus + 1) % LABEL_FIELD_COUNT
    return Transition(replace(state, phase=replace(editing, focus=focus)))


def _type_label(state: SessionState, event: LabelInput) -> Transition:
    editing = _editing_phase(state)
    text = "".join(ch for ch in event.text if ch.isprintable())
    return Transition(replace(state, phase=editing.with_focused_text(editing.focused_text + text)))


def _erase_label(state: SessionState, event: LabelBackspace) -> Transition:
    editing = _editing_phase(state)
    return Transition(replace(state, phase=editing.with_focused_text(editing.focused_text[:-1])))


def _quit(state: SessionState, event: QuitRequested) -> Transition:
    return Transition(replace(state, running=False), (Stop(),))


# ---------------------------------------------------------------------------
# Transition table
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Rule:
    """One row of the transition table.

    Attributes:
        guard: Phase classes in which the event is accepted; ``None`` accepts
            every phase.
        effect: Computes the transition for an accepted event.
    """

    guard: tuple[type, ...] | None
    effect: Callable[[SessionState, Event], Transition]


TRANSITIONS: dict[type, Rule] = {
    FlipRequested: Rule((Idle,), _start_flip),
    FlipCompleted: Rule((Loading,), _complete_flip),
    ResetRequested: Rule((Idle,), _reset),
    SourceToggleRequested: Rule((Idle,), _toggle_source),
    LabelEditRequested: Rule((Idle,), _begin_label_edit),
    LabelEditConfirm: Rule((LabelEditing,), _confirm_label_edit),
    LabelEditCancel: Rule((LabelEditing,), _cancel_label_edit),
    FocusSwitch: Rule((LabelEditing,), _switch_focus),
    LabelInput: Rule((LabelEditing,), _type_label),
    LabelBackspace: Rule((LabelEditing,), _erase_label),
    QuitRequested: Rule(None, _quit),
}


def accepts(state: SessionState, event: Event) -> bool:
    """Whether *event* passes its guard in the current snapshot."""
    if not state.running:
        return False
    rule = TRANSITIONS.get(type(event))
    if rule is None:
        return False
    return rule.guard is None or isinstance(state.phase, rule.guard)


def reduce(state: SessionState, event: Event) -> Transition:
    """Apply *event* to *state*.

    Events whose guard fails, unknown events, and anything arriving after the
    session was quit are ignored: the same snapshot comes back with no
    effects and ``accepted=False``.
    """
    if not accepts(state, event):
        logger.debug("Ignoring %s in phase %s", type(event).__name__, state.ui_phase.value)
        return Transition(state, accepted=False)
    return TRANSITIONS[type(event)].effect(state, event)
