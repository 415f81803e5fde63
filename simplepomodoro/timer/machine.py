"""Pure Pomodoro state machine.

Every transition takes the current ``TimerState`` and returns a
``Transition``: the next state plus the side effects the host has to
carry out.  Nothing in here touches a clock, a timer or a database,
so the whole phase/loop algorithm can be driven tick by tick in tests.

Status
------
IDLE       Waiting for the user.  Shows a preview of the first phase.
RUNNING    Counting down, one ``tick`` per second.
PAUSED     Frozen.  No ticks are scheduled.
FINISHED   Session over.  Holds the worked total until ``reset_to_idle``.

Transitions
-----------
IDLE → RUNNING                       (start)
RUNNING → PAUSED                     (pause)
PAUSED → RUNNING                     (resume)
RUNNING | PAUSED → next phase        (skip, or tick reaching zero)
RUNNING | PAUSED → FINISHED          (finish, or the last rest ending)
any → IDLE                           (reset_to_idle)

Mode
----
A session alternates WORK and REST phases.  One WORK + REST pair is a
loop.  With long rest enabled, the rest after every 4th loop uses
``long_rest_minutes`` instead of ``rest_minutes``.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from ..errors import InvalidStateTransition


# ── enums ─────────────────────────────────────────────────────────────────


class Status(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    FINISHED = "finished"


class Mode(Enum):
    WORK = "work"
    REST = "rest"


class IntentKind(Enum):
    SCHEDULE_TICK = "schedule_tick"
    CANCEL_TICK = "cancel_tick"
    EMIT_LOG = "emit_log"


# ── constants ─────────────────────────────────────────────────────────────

SETTING_MIN = 1
SETTING_MAX = 99
LONG_REST_EVERY = 4  # loops


def clamp_setting(value: object, default: int = SETTING_MIN) -> int:
    """Coerce user input to an int in ``[1, 99]``.

    Strings are parsed leniently (surrounding whitespace, a trailing
    fraction).  Anything unparseable becomes *default*.
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        if isinstance(value, (int, float)):
            number = int(value)
        else:
            number = int(float(str(value).strip()))
    except (TypeError, ValueError, OverflowError):
        return default
    return max(SETTING_MIN, min(SETTING_MAX, number))


# ── value types ───────────────────────────────────────────────────────────


@dataclass(frozen=True)
class SessionConfig:
    """User-supplied session shape.  Use ``clamped()`` before trusting it."""

    target_loops: int = 4
    work_minutes: int = 25
    rest_minutes: int = 5
    long_rest_minutes: int = 15
    supports_long_rest: bool = True

    @classmethod
    def from_raw(
        cls,
        *,
        target_loops: object = 4,
        work_minutes: object = 25,
        rest_minutes: object = 5,
        long_rest_minutes: object = 15,
        supports_long_rest: bool = True,
    ) -> SessionConfig:
        """Build a config from untrusted input (text fields, JSON)."""
        return cls(
            target_loops=clamp_setting(target_loops),
            work_minutes=clamp_setting(work_minutes),
            rest_minutes=clamp_setting(rest_minutes),
            long_rest_minutes=clamp_setting(long_rest_minutes),
            supports_long_rest=bool(supports_long_rest),
        )

    def clamped(self) -> SessionConfig:
        return SessionConfig.from_raw(
            target_loops=self.target_loops,
            work_minutes=self.work_minutes,
            rest_minutes=self.rest_minutes,
            long_rest_minutes=self.long_rest_minutes,
            supports_long_rest=self.supports_long_rest,
        )

    @property
    def work_seconds(self) -> int:
        return self.work_minutes * 60

    @property
    def rest_seconds(self) -> int:
        return self.rest_minutes * 60

    @property
    def long_rest_seconds(self) -> int:
        return self.long_rest_minutes * 60


@dataclass(frozen=True)
class TimerState:
    """Snapshot of one session.  Immutable; transitions build new ones.

    Build the first one with ``initial_state`` so the phase lengths
    match the config.
    """

    config: SessionConfig
    status: Status
    mode: Mode
    current_loop: int
    time_left_seconds: int
    total_phase_seconds: int
    accumulated_work_seconds: int

    @property
    def is_active(self) -> bool:
        """True while a session is under way (RUNNING or PAUSED)."""
        return self.status in (Status.RUNNING, Status.PAUSED)

    @property
    def is_long_rest(self) -> bool:
        return (
            self.mode == Mode.REST
            and self.config.supports_long_rest
            and self.current_loop % LONG_REST_EVERY == 0
        )

    @property
    def progress(self) -> float:
        """0.0 → 1.0 elapsed ratio of the current phase."""
        if self.status == Status.IDLE or self.total_phase_seconds <= 0:
            return 0.0
        if self.status == Status.FINISHED:
            return 1.0
        elapsed = self.total_phase_seconds - self.time_left_seconds
        return max(0.0, min(1.0, elapsed / self.total_phase_seconds))


@dataclass(frozen=True)
class Intent:
    kind: IntentKind
    seconds: int = 0  # EMIT_LOG payload


@dataclass(frozen=True)
class Transition:
    state: TimerState
    intents: tuple[Intent, ...] = ()

    def has(self, kind: IntentKind) -> bool:
        return any(i.kind == kind for i in self.intents)


SCHEDULE_TICK = Intent(IntentKind.SCHEDULE_TICK)
CANCEL_TICK = Intent(IntentKind.CANCEL_TICK)


# ── helpers ───────────────────────────────────────────────────────────────


def _require(state: TimerState, operation: str, *allowed: Status) -> None:
    if state.status not in allowed:
        raise InvalidStateTransition(operation, state.status)


def _preview_seconds(config: SessionConfig, mode: Mode) -> int:
    return config.work_seconds if mode == Mode.WORK else config.rest_seconds


def _with_phase(state: TimerState, mode: Mode, seconds: int, **changes) -> TimerState:
    return replace(
        state,
        mode=mode,
        time_left_seconds=seconds,
        total_phase_seconds=seconds,
        **changes,
    )


# ── transitions ───────────────────────────────────────────────────────────


def initial_state(config: SessionConfig | None = None) -> TimerState:
    """Fresh IDLE state previewing the first work phase."""
    config = (config or SessionConfig()).clamped()
    preview = _preview_seconds(config, Mode.WORK)
    return TimerState(
        config=config,
        status=Status.IDLE,
        mode=Mode.WORK,
        current_loop=1,
        time_left_seconds=preview,
        total_phase_seconds=preview,
        accumulated_work_seconds=0,
    )


def configure(state: TimerState, config: SessionConfig) -> Transition:
    _require(state, "configure", Status.IDLE)
    config = config.clamped()
    preview = _preview_seconds(config, state.mode)
    return Transition(_with_phase(state, state.mode, preview, config=config))


def start(state: TimerState) -> Transition:
    _require(state, "start", Status.IDLE)
    config = state.config.clamped()
    nxt = _with_phase(
        state,
        Mode.WORK,
        config.work_seconds,
        config=config,
        status=Status.RUNNING,
        current_loop=1,
        accumulated_work_seconds=0,
    )
    return Transition(nxt, (SCHEDULE_TICK,))


def pause(state: TimerState) -> Transition:
    _require(state, "pause", Status.RUNNING)
    return Transition(replace(state, status=Status.PAUSED), (CANCEL_TICK,))


def resume(state: TimerState) -> Transition:
    _require(state, "resume", Status.PAUSED)
    return Transition(replace(state, status=Status.RUNNING), (SCHEDULE_TICK,))


def tick(state: TimerState) -> Transition:
    """One logical second.  Hitting zero advances the phase in the same call."""
    _require(state, "tick", Status.RUNNING)
    worked = state.accumulated_work_seconds
    if state.mode == Mode.WORK:
        worked += 1
    nxt = replace(
        state,
        time_left_seconds=max(0, state.time_left_seconds - 1),
        accumulated_work_seconds=worked,
    )
    if nxt.time_left_seconds == 0:
        return advance_phase(nxt)
    return Transition(nxt)


def advance_phase(state: TimerState) -> Transition:
    """Move to the next phase, or finish after the final loop's rest.

    The status (RUNNING or PAUSED) carries over into the new phase.
    """
    _require(state, "advance phase", Status.RUNNING, Status.PAUSED)
    config = state.config

    if state.mode == Mode.WORK:
        long_rest = (
            config.supports_long_rest
            and state.current_loop % LONG_REST_EVERY == 0
        )
        seconds = config.long_rest_seconds if long_rest else config.rest_seconds
        return Transition(_with_phase(state, Mode.REST, seconds))

    if state.current_loop < config.target_loops:
        return Transition(_with_phase(
            state,
            Mode.WORK,
            config.work_seconds,
            current_loop=state.current_loop + 1,
        ))

    return finish(state)


def skip(state: TimerState) -> Transition:
    """Jump to the next phase.  The skipped remainder is never credited."""
    _require(state, "skip", Status.RUNNING, Status.PAUSED)
    return advance_phase(state)


def finish(state: TimerState) -> Transition:
    _require(state, "finish", Status.RUNNING, Status.PAUSED)
    nxt = replace(state, status=Status.FINISHED)
    intents = [CANCEL_TICK]
    if nxt.accumulated_work_seconds > 0:
        intents.append(Intent(IntentKind.EMIT_LOG, nxt.accumulated_work_seconds))
    return Transition(nxt, tuple(intents))


def reset_to_idle(state: TimerState) -> Transition:
    """Abandon whatever is going on and return to a fresh IDLE preview."""
    return Transition(initial_state(state.config), (CANCEL_TICK,))
