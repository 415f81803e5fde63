"""Per-user data directory shared by the database and settings files."""

import os
import sys
from pathlib import Path


def _default_data_dir() -> Path:
    override = os.environ.get("SIMPLEPOMODORO_HOME")
    if override:
        return Path(override)
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "SimplePomodoro"
    if sys.platform == "win32":
        return Path(os.environ.get("APPDATA", Path.home())) / "SimplePomodoro"
    base = os.environ.get("XDG_DATA_HOME") or Path.home() / ".local" / "share"
    return Path(base) / "simplepomodoro"


APP_DATA_DIR = _default_data_dir()
