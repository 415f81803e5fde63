"""QSS stylesheet and ring colours for SimplePomodoro."""

from __future__ import annotations

from ..timer.machine import Mode, Status

# ── ring colours ─────────────────────────────────────────────────────────
#    (primary, secondary) pairs for the conical arc gradient.

WORK_COLORS = ("#22D3EE", "#06B6D4")        # cyan
REST_COLORS = ("#34D399", "#10B981")        # green
LONG_REST_COLORS = ("#A78BFA", "#8B5CF6")   # violet
PAUSED_COLORS = ("#94A3B8", "#64748B")      # slate
IDLE_COLORS = ("#CBD5E1", "#94A3B8")


def ring_colors(status: Status, mode: Mode, long_rest: bool = False) -> tuple[str, str]:
    if status == Status.IDLE:
        return IDLE_COLORS
    if status == Status.PAUSED:
        return PAUSED_COLORS
    if mode == Mode.WORK or status == Status.FINISHED:
        return WORK_COLORS
    return LONG_REST_COLORS if long_rest else REST_COLORS


PALETTE: dict[str, str] = {
    "bg":          "#F1F5F9",
    "surface":     "#FFFFFF",
    "accent":      "#06B6D4",
    "text":        "#334155",
    "text_muted":  "#94A3B8",
    "border":      "#E2E8F0",
    "today":       "#ECFEFF",
    "sunday":      "#F472B6",
    "saturday":    "#60A5FA",
}


def build_stylesheet(palette: dict[str, str] | None = None) -> str:
    p = palette or PALETTE
    return f"""
    QWidget {{
        background: {p['bg']};
        color: {p['text']};
        font-size: 13px;
    }}
    QFrame#card {{
        background: {p['surface']};
        border: 1px solid {p['border']};
        border-radius: 18px;
    }}
    QPushButton {{
        border-radius: 16px;
        padding: 8px 18px;
        background: {p['surface']};
        border: 1px solid {p['border']};
    }}
    QPushButton#primaryButton {{
        background: #1E293B;
        color: white;
        font-weight: bold;
        border: none;
    }}
    QPushButton#primaryButton:hover {{
        background: #334155;
    }}
    QPushButton:disabled {{
        color: {p['text_muted']};
    }}
    QLineEdit#numberInput {{
        font-size: 22px;
        font-weight: bold;
        border: none;
        background: transparent;
    }}
    QLabel#muted {{
        color: {p['text_muted']};
    }}
    QLabel#headline {{
        font-size: 28px;
        font-weight: bold;
    }}
    """
