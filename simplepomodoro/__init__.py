"""SimplePomodoro: a Pomodoro timer with a monthly log of worked time."""

__version__ = "0.1.0"
