"""Gemeinsamer Renderer für die Terminal-Anzeige einer Gruppe.

Wird von den CLI-Befehlen ``groups`` und ``assign show`` verwendet.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from config.schema import EngineConfig
    from models.group import Group
    from models.group_data import GroupData


def render_session_rows(
    group: "Group",
    config: Optional["EngineConfig"] = None,
) -> list[list[str]]:
    """Tabellenzeilen der Termine in Anzeige-Reihenfolge.

    Jede Zeile: [Tag, Beginn, Ende, Dauer]
    """
    from scheduling.session_formatter import format_time, sort_sessions

    rows: list[list[str]] = []
    for s in sort_sessions(group.sessions, config):
        rows.append([
            s.day,
            format_time(s.start_time),
            format_time(s.end_time),
            f"{s.duration_minutes} min",
        ])
    return rows


def render_assignment_rows(
    group: "Group",
    data: "GroupData",
    config: Optional["EngineConfig"] = None,
) -> list[list[str]]:
    """Tabellenzeilen aller Vorlesungen 1..total_lectures.

    Jede Zeile: [Nr., Lehrkraft, Status, Notizen]. Vorlesungen ohne
    Zuweisung erscheinen mit "—" und abgeleitetem Status.
    """
    from export.helpers import rich_teacher_style, status_markup
    from scheduling.lecture_state import derive_lecture_state, index_assignments

    unknown = config.unknown_teacher_label if config else "Unknown Teacher"
    by_number = index_assignments(group.teacher_assignments)
    rows: list[list[str]] = []

    for n in range(1, group.total_lectures + 1):
        assignment = by_number.get(n)
        status = derive_lecture_state(n, assignment, group.context)
        if assignment is None:
            teacher_cell = "—"
            notes = ""
        else:
            style = rich_teacher_style(assignment.teacher_id)
            name = data.teacher_name(assignment.teacher_id, default=unknown)
            teacher_cell = f"[{style}]{name}[/{style}]"
            notes = assignment.notes or ""
        rows.append([str(n), teacher_cell, status_markup(status), notes])

    return rows
