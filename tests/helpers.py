"""Shared test helpers for SimplePomodoro."""

from simplepomodoro.timer import machine
from simplepomodoro.timer.engine import TimerEngine
from simplepomodoro.timer.machine import TimerState


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


def run_ticks(engine: TimerEngine, count: int) -> None:
    """Fire the engine's tick slot *count* times, as the QTimer would."""
    for _ in range(count):
        engine._on_tick()


def finish_phase(engine: TimerEngine) -> None:
    """Tick through whatever is left of the current phase."""
    run_ticks(engine, engine.time_left)


def tick_state(state: TimerState, count: int) -> machine.Transition:
    """Apply ``machine.tick`` *count* times; return the last transition."""
    transition = machine.Transition(state)
    for _ in range(count):
        transition = machine.tick(transition.state)
    return transition
