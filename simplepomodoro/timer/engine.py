"""Qt host for the Pomodoro state machine.

``TimerEngine`` owns the single ``TimerState`` of the running app and the
one ``QTimer`` that drives it.  Every control method runs the matching
pure transition from ``machine`` under a lock, commits the new state,
and then carries out the transition's intents:

SCHEDULE_TICK   start the 1 Hz QTimer (never a second one)
CANCEL_TICK     stop it
EMIT_LOG        append the worked seconds to the ``WorkLogStore``

Signals go out after the lock is released, so slots may call back into
the engine.  A failed append is logged and reported through
``log_failed``; the session still ends in FINISHED.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from datetime import datetime
from typing import Any

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from ..database.store import WorkLogStore
from ..errors import InvalidStateTransition, PomodoroError
from . import machine
from .machine import IntentKind, Mode, SessionConfig, Status, TimerState, Transition

logger = logging.getLogger(__name__)

TICK_INTERVAL_MS = 1000

# (signal, payload, state snapshot or None when always delivered)
_Pending = tuple[Any, Any, TimerState | None]


class TimerEngine(QObject):
    """Qt-based Pomodoro timer: loops of work and rest, worked-time logging.

    Signals
    -------
    tick(time_left_seconds: int)
        Emitted after every logical second while RUNNING.
    state_changed(state: TimerState)
        Emitted after every accepted operation, including ticks that
        cross a phase boundary.
    phase_changed(state: TimerState)
        Emitted when the mode or loop changes.
    session_finished(worked_seconds: int)
        Emitted once when a session reaches FINISHED.
    log_failed(message: str)
        Emitted when the worked duration could not be stored.
    """

    tick = pyqtSignal(int)
    state_changed = pyqtSignal(object)
    phase_changed = pyqtSignal(object)
    session_finished = pyqtSignal(int)
    log_failed = pyqtSignal(str)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        config: SessionConfig | None = None,
        store: WorkLogStore | None = None,
    ) -> None:
        super().__init__(parent)
        self._store = store
        self._lock = threading.RLock()
        self._state: TimerState = machine.initial_state(config)

        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(TICK_INTERVAL_MS)
        self._qt_timer.timeout.connect(self._on_tick)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def status(self) -> Status:
        return self._state.status

    @property
    def mode(self) -> Mode:
        return self._state.mode

    @property
    def config(self) -> SessionConfig:
        return self._state.config

    @property
    def current_loop(self) -> int:
        return self._state.current_loop

    @property
    def time_left(self) -> int:
        return self._state.time_left_seconds

    @property
    def total_phase_seconds(self) -> int:
        return self._state.total_phase_seconds

    @property
    def accumulated_work_seconds(self) -> int:
        return self._state.accumulated_work_seconds

    @property
    def progress(self) -> float:
        return self._state.progress

    @property
    def is_active(self) -> bool:
        return self._state.is_active

    @property
    def is_ticking(self) -> bool:
        """True when the 1 Hz tick source is scheduled."""
        return self._qt_timer.isActive()

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def configure(self, config: SessionConfig) -> None:
        """Change the session shape.  Only valid while IDLE."""
        self._apply("configure", machine.configure, config)

    def start(self) -> None:
        self._apply("start", machine.start)

    def pause(self) -> None:
        self._apply("pause", machine.pause)

    def resume(self) -> None:
        self._apply("resume", machine.resume)

    def skip(self) -> None:
        """Jump to the next phase; unworked time is not credited."""
        self._apply("skip", machine.skip)

    def finish(self) -> None:
        """End the session now and log what was worked so far."""
        self._apply("finish", machine.finish)

    def reset_to_idle(self) -> None:
        """Back to a fresh IDLE preview.  Valid from any state."""
        self._apply("reset", machine.reset_to_idle)

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — timer mechanics
    # ══════════════════════════════════════════════════════════════════

    def _on_tick(self) -> None:
        with self._lock:
            if self._state.status != Status.RUNNING:
                # Queued before the cancel went through.
                self._qt_timer.stop()
                return
            transition = machine.tick(self._state)
            pending = self._commit("tick", transition)
        self._dispatch(pending)

    def _apply(
        self, operation: str, fn: Callable[..., Transition], *args,
    ) -> None:
        with self._lock:
            try:
                transition = fn(self._state, *args)
            except InvalidStateTransition:
                logger.warning(
                    "Rejected %s while %s", operation, self._state.status.value,
                )
                raise
            pending = self._commit(operation, transition)
        self._dispatch(pending)

    def _commit(self, operation: str, transition: Transition) -> list[_Pending]:
        """Install *transition* and run its intents.

        Returns the signals to emit once the lock is released.
        """
        previous = self._state
        self._state = transition.state
        state = self._state
        pending: list[_Pending] = []

        if operation != "tick" or previous.mode != state.mode:
            logger.debug(
                "%s: %s/%s -> %s/%s loop=%d left=%ds",
                operation,
                previous.status.value, previous.mode.value,
                state.status.value, state.mode.value,
                state.current_loop, state.time_left_seconds,
            )

        for intent in transition.intents:
            if intent.kind == IntentKind.CANCEL_TICK:
                self._qt_timer.stop()
            elif intent.kind == IntentKind.SCHEDULE_TICK:
                if not self._qt_timer.isActive():
                    self._qt_timer.start()
            elif intent.kind == IntentKind.EMIT_LOG:
                error = self._emit_log(intent.seconds)
                if error is not None:
                    pending.append((self.log_failed, error, None))

        if operation == "tick":
            pending.append((self.tick, state.time_left_seconds, state))

        phase_moved = (
            previous.mode != state.mode
            or previous.current_loop != state.current_loop
        )
        if phase_moved and state.status != Status.IDLE:
            logger.info(
                "Phase -> %s (loop %d/%d, %ds)",
                state.mode.value, state.current_loop,
                state.config.target_loops, state.total_phase_seconds,
            )
            pending.append((self.phase_changed, state, state))

        if operation != "tick" or phase_moved or state.status != previous.status:
            pending.append((self.state_changed, state, state))

        if state.status == Status.FINISHED and previous.status != Status.FINISHED:
            logger.info(
                "Session finished: %ds worked", state.accumulated_work_seconds,
            )
            pending.append(
                (self.session_finished, state.accumulated_work_seconds, None),
            )
        return pending

    def _dispatch(self, pending: list[_Pending]) -> None:
        # A slot may run another operation; snapshots it superseded are dropped.
        for signal, payload, snapshot in pending:
            if snapshot is not None and snapshot is not self._state:
                continue
            signal.emit(payload)

    def _emit_log(self, seconds: int) -> str | None:
        """Append *seconds* to the store; return the error text on failure."""
        if self._store is None:
            return None
        try:
            self._store.append(seconds, datetime.now())
        except PomodoroError as exc:
            logger.exception("Could not record %ds of work", seconds)
            return str(exc)
        return None
