"""Ableitung des Vorlesungs-Status.

Totale Funktion (Position, Kontext, optionale Zuweisung) → LectureStatus.
Kein Übergangsprotokoll, keine verbotenen Übergänge: jeder Status darf
jederzeit manuell gesetzt werden.
"""

from typing import Iterable, Optional

from models.lecture import LectureContext, LectureStatus, TeacherLectureAssignment


def derive_lecture_state(
    lecture_number: int,
    explicit_assignment: Optional[TeacherLectureAssignment],
    context: LectureContext,
) -> LectureStatus:
    """Status einer Vorlesung.

    Eine explizite Zuweisung gewinnt immer. Ohne Zuweisung:
    vor der aktuellen → completed, aktuelle → current,
    angekündigte → next, sonst upcoming. ``dismissed`` und ``scheduled``
    entstehen nie durch Ableitung.
    """
    if lecture_number < 1:
        raise ValueError(f"Vorlesungsnummer muss >= 1 sein, nicht {lecture_number}")
    if explicit_assignment is not None:
        return explicit_assignment.status

    if lecture_number < context.current_lecture_number:
        return LectureStatus.COMPLETED
    if lecture_number == context.current_lecture_number:
        return LectureStatus.CURRENT
    if lecture_number == context.upcoming_lecture_number:
        return LectureStatus.NEXT
    return LectureStatus.UPCOMING


def index_assignments(
    assignments: Iterable[TeacherLectureAssignment],
) -> dict[int, TeacherLectureAssignment]:
    """Vorlesungsnummer → Zuweisung. Bei Duplikaten gilt der letzte Eintrag."""
    return {a.lecture_number: a for a in assignments}


def resolve_lecture_states(
    total_lectures: int,
    assignments: Iterable[TeacherLectureAssignment],
    context: LectureContext,
) -> dict[int, LectureStatus]:
    """Status aller Vorlesungen 1..total_lectures."""
    if total_lectures < 0:
        raise ValueError(f"total_lectures darf nicht negativ sein: {total_lectures}")
    by_number = index_assignments(assignments)
    return {
        n: derive_lecture_state(n, by_number.get(n), context)
        for n in range(1, total_lectures + 1)
    }
