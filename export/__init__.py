"""Export-Modul: Terminal-Darstellung (Rich) für Gruppen und Zuweisungen."""

from export.helpers import get_teacher_color, status_markup
from export.tui_renderer import render_assignment_rows, render_session_rows

__all__ = [
    "get_teacher_color",
    "status_markup",
    "render_assignment_rows",
    "render_session_rows",
]
