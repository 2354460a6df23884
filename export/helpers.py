"""Gemeinsame Hilfsfunktionen für die Terminal-Ausgabe.

Reine Präsentation; die Planungs-Engine nutzt nichts davon.
"""

from models.lecture import LectureStatus

# ─── Farbpalette für Lehrkräfte ───────────────────────────────────────────────

TEACHER_COLORS: list[str] = [
    "blue",
    "green",
    "purple",
    "orange",
    "pink",
    "indigo",
    "teal",
]

# Rich kennt nicht alle Palettennamen
_RICH_COLORS: dict[str, str] = {
    "blue":   "blue",
    "green":  "green",
    "purple": "magenta",
    "orange": "dark_orange",
    "pink":   "hot_pink",
    "indigo": "slate_blue1",
    "teal":   "dark_cyan",
}

# ─── Status-Darstellung ───────────────────────────────────────────────────────

STATUS_STYLES: dict[LectureStatus, str] = {
    LectureStatus.COMPLETED: "green",
    LectureStatus.CURRENT:   "dark_orange",
    LectureStatus.NEXT:      "blue",
    LectureStatus.UPCOMING:  "grey58",
    LectureStatus.SCHEDULED: "magenta",
    LectureStatus.DISMISSED: "red",
}


def get_teacher_color(teacher_id: str) -> str:
    """Feste Palettenfarbe je Lehrer-ID (Summe der Zeichencodes modulo Palette)."""
    code_sum = sum(ord(ch) for ch in teacher_id)
    return TEACHER_COLORS[code_sum % len(TEACHER_COLORS)]


def rich_teacher_style(teacher_id: str) -> str:
    """Rich-Stil zur Palettenfarbe einer Lehrkraft."""
    return _RICH_COLORS[get_teacher_color(teacher_id)]


def status_markup(status: LectureStatus) -> str:
    """Status als Rich-Markup, z.B. "[green]completed[/green]"."""
    style = STATUS_STYLES.get(status, "white")
    return f"[{style}]{status.value}[/{style}]"
