"""Application settings with JSON persistence.

Settings are stored in the per-user data directory (see ``paths``)::

    settings = load_settings()
    settings.work_minutes = 50
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields

from .paths import APP_DATA_DIR
from .timer.machine import SessionConfig

logger = logging.getLogger(__name__)

SETTINGS_PATH = APP_DATA_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── session ───────────────────────────────────────────────────────
    target_loops: int = 4
    work_minutes: int = 25
    rest_minutes: int = 5
    long_rest_minutes: int = 15
    supports_long_rest: bool = True

    # ── window ────────────────────────────────────────────────────────
    window_width: int = 480
    window_height: int = 720

    def session_config(self) -> SessionConfig:
        """The session shape these settings describe, clamped to 1..99."""
        return SessionConfig.from_raw(
            target_loops=self.target_loops,
            work_minutes=self.work_minutes,
            rest_minutes=self.rest_minutes,
            long_rest_minutes=self.long_rest_minutes,
            supports_long_rest=self.supports_long_rest,
        )

    def update_from_config(self, config: SessionConfig) -> None:
        self.target_loops = config.target_loops
        self.work_minutes = config.work_minutes
        self.rest_minutes = config.rest_minutes
        self.long_rest_minutes = config.long_rest_minutes
        self.supports_long_rest = config.supports_long_rest


_TRUE_WORDS = {"true", "yes", "on", "1"}
_FALSE_WORDS = {"false", "no", "off", "0"}


def _coerce(name: str, value, default):
    """Convert a hand-edited JSON value to the type of *default*.

    Values that cannot be read as that type fall back to *default*.
    """
    if isinstance(default, bool):
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        if isinstance(value, str):
            word = value.strip().lower()
            if word in _TRUE_WORDS:
                return True
            if word in _FALSE_WORDS:
                return False
    elif isinstance(default, int):
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                pass
    logger.warning(
        "Setting %s=%r is not a %s; using %r",
        name, value, type(default).__name__, default,
    )
    return default


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    try:
        if SETTINGS_PATH.exists():
            data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
            # Only use keys that exist in the dataclass
            defaults = {f.name: f.default for f in fields(Settings)}
            filtered = {
                k: _coerce(k, v, defaults[k])
                for k, v in data.items() if k in defaults
            }
            return Settings(**filtered)
    except (OSError, ValueError, TypeError, AttributeError):
        logger.warning(
            "Ignoring unreadable settings file %s", SETTINGS_PATH, exc_info=True,
        )
    return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
