"""Lehrer-Rotation über die Vorlesungsfolge einer Gruppe.

Round-Robin: Vorlesung i geht an teacher_ids[(i - 1) % n]. Damit bekommt
jede Lehrkraft floor(L/n) oder ceil(L/n) Vorlesungen.

Neu-Generieren ersetzt die komplette Liste. Manuelle Änderungen (andere
Lehrkraft, Status, Notizen) gehen dabei verloren, außer der Aufrufer sichert
sie mit collect_overrides() und spielt sie mit reapply_overrides() zurück.
"""

import logging
from typing import Any, Iterable, Mapping, Optional

from pydantic import BaseModel

from models.lecture import (
    OPERATOR_STATUSES,
    LectureContext,
    LectureStatus,
    TeacherLectureAssignment,
)
from scheduling.lecture_state import derive_lecture_state, index_assignments

logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = frozenset({"teacher_id", "status", "notes"})


class LectureOverride(BaseModel):
    """Gesicherte manuelle Änderung an einer Vorlesung."""

    lecture_number: int
    teacher_id: Optional[str] = None     # Nur gesetzt wenn abweichend von der Rotation
    status: Optional[LectureStatus] = None
    notes: Optional[str] = None


class TeacherStats(BaseModel):
    """Zuweisungs-Statistik einer Lehrkraft innerhalb einer Gruppe."""

    teacher_id: str
    total_assigned: int
    completed: int
    upcoming: int       # total_assigned - completed


# ─── Rotation ─────────────────────────────────────────────────────────────────

def rotation_teacher(lecture_number: int, teacher_ids: list[str]) -> str:
    """Lehrkraft für eine Vorlesungsnummer laut Round-Robin."""
    if lecture_number < 1:
        raise ValueError(f"Vorlesungsnummer muss >= 1 sein, nicht {lecture_number}")
    return teacher_ids[(lecture_number - 1) % len(teacher_ids)]


def generate_assignments(
    teacher_ids: list[str],
    total_lectures: int,
    current_lecture_number: int,
    upcoming_lecture_number: int,
) -> list[TeacherLectureAssignment]:
    """Erzeugt die vollständige Zuweisungsliste einer Gruppe neu.

    Leere Lehrerliste → leere Liste (gültiger "nicht zugewiesen"-Zustand,
    kein Fehler). Der Status stammt aus der Ableitung ohne Zuweisung.
    """
    if total_lectures < 0:
        raise ValueError(f"total_lectures darf nicht negativ sein: {total_lectures}")
    if not teacher_ids:
        logger.warning("Keine Lehrkräfte ausgewählt – Rotation nicht möglich, Liste bleibt leer")
        return []

    context = LectureContext(
        current_lecture_number=current_lecture_number,
        upcoming_lecture_number=upcoming_lecture_number,
    )
    assignments = [
        TeacherLectureAssignment(
            lecture_number=n,
            teacher_id=rotation_teacher(n, teacher_ids),
            status=derive_lecture_state(n, None, context),
        )
        for n in range(1, total_lectures + 1)
    ]
    logger.info(
        f"Rotation erzeugt: {total_lectures} Vorlesungen auf "
        f"{len(teacher_ids)} Lehrkräfte verteilt"
    )
    return assignments


# ─── Manuelle Änderungen ──────────────────────────────────────────────────────

def _merge(
    assignment: TeacherLectureAssignment, fields: Mapping[str, Any]
) -> TeacherLectureAssignment:
    unknown = set(fields) - _EDITABLE_FIELDS
    if unknown:
        raise ValueError(f"Nicht änderbare Felder: {sorted(unknown)}")
    data = assignment.model_dump()
    data.update(fields)
    return TeacherLectureAssignment.model_validate(data)


def set_assignment(
    assignments: list[TeacherLectureAssignment],
    lecture_number: int,
    /,
    **fields: Any,
) -> list[TeacherLectureAssignment]:
    """Ersetzt genau einen Eintrag; alle anderen bleiben unverändert.

    Erlaubte Felder: teacher_id, status, notes.

    Raises:
        KeyError: Für diese Vorlesungsnummer existiert keine Zuweisung.
        ValueError: Unbekanntes Feld.
    """
    found = False
    updated: list[TeacherLectureAssignment] = []
    for a in assignments:
        if a.lecture_number == lecture_number:
            updated.append(_merge(a, fields))
            found = True
        else:
            updated.append(a)
    if not found:
        raise KeyError(f"Keine Zuweisung für Vorlesung {lecture_number}")
    return updated


def bulk_update(
    assignments: list[TeacherLectureAssignment],
    updates: Iterable[Mapping[str, Any]],
) -> list[TeacherLectureAssignment]:
    """Mehrere Änderungen auf einmal: bestehende Einträge ändern, fehlende anhängen.

    Neue Einträge brauchen eine teacher_id und bekommen ohne Angabe den
    Status ``scheduled``. Updates ohne lecture_number werden übersprungen.
    """
    by_number = index_assignments(assignments)
    if len(by_number) < len(assignments):
        logger.warning(
            f"bulk_update: {len(assignments) - len(by_number)} doppelte Zuweisung(en) "
            f"zusammengeführt, letzter Eintrag je Vorlesung gilt"
        )
    skipped = 0
    for update in updates:
        fields = dict(update)
        number = fields.pop("lecture_number", None)
        if number is None:
            skipped += 1
            continue
        if number in by_number:
            by_number[number] = _merge(by_number[number], fields)
        elif fields.get("teacher_id"):
            fields.setdefault("status", LectureStatus.SCHEDULED)
            seed = TeacherLectureAssignment(
                lecture_number=number,
                teacher_id=fields["teacher_id"],
                status=fields["status"],
            )
            by_number[number] = _merge(seed, fields)
        else:
            skipped += 1
    if skipped:
        logger.warning(f"bulk_update: {skipped} Änderung(en) ohne Vorlesung/Lehrkraft übersprungen")
    return [by_number[n] for n in sorted(by_number)]


# ─── Ergänzen & Neu-Verteilen ─────────────────────────────────────────────────

def fill_missing_assignments(
    existing: list[TeacherLectureAssignment],
    teacher_ids: list[str],
    total_lectures: int,
    context: LectureContext,
) -> list[TeacherLectureAssignment]:
    """Ergänzt fehlende Vorlesungsnummern 1..total_lectures.

    Neue Einträge gehen an die erste Lehrkraft, der Status wird abgeleitet.
    Bestehende Einträge bleiben unangetastet.
    """
    by_number = index_assignments(existing)
    missing = [n for n in range(1, total_lectures + 1) if n not in by_number]
    if missing and not teacher_ids:
        logger.warning(f"{len(missing)} Vorlesungen ohne Zuweisung, aber keine Lehrkräfte ausgewählt")
        return [by_number[n] for n in sorted(by_number)]
    for n in missing:
        by_number[n] = TeacherLectureAssignment(
            lecture_number=n,
            teacher_id=teacher_ids[0],
            status=derive_lecture_state(n, None, context),
        )
    return [by_number[n] for n in sorted(by_number)]


def auto_assign(
    assignments: list[TeacherLectureAssignment],
    teacher_ids: list[str],
) -> list[TeacherLectureAssignment]:
    """Verteilt die Lehrkräfte per Rotation neu; Status und Notizen bleiben."""
    if not teacher_ids:
        return list(assignments)
    return [
        a.model_copy(update={"teacher_id": rotation_teacher(a.lecture_number, teacher_ids)})
        for a in assignments
    ]


# ─── Überschreibungen sichern / zurückspielen ─────────────────────────────────

def collect_overrides(
    assignments: list[TeacherLectureAssignment],
    teacher_ids: Optional[list[str]] = None,
    context: Optional[LectureContext] = None,
) -> list[LectureOverride]:
    """Sichert manuelle Änderungen gegenüber dem Stand, der die Liste erzeugt hat.

    teacher_ids und context beschreiben Lehrerliste und Fortschritt zum
    Zeitpunkt der letzten Rotation, nicht die neuen Werte. Ohne teacher_ids
    werden keine Lehrer-Abweichungen erkannt. Ohne context gelten nur
    ``dismissed`` und ``scheduled`` als manueller Status. Notizen werden
    immer gesichert.
    """
    overrides: list[LectureOverride] = []
    for a in assignments:
        teacher = None
        if teacher_ids is not None and (
            not teacher_ids or a.teacher_id != rotation_teacher(a.lecture_number, teacher_ids)
        ):
            teacher = a.teacher_id
        status = None
        if a.status in OPERATOR_STATUSES:
            status = a.status
        elif context is not None and a.status != derive_lecture_state(a.lecture_number, None, context):
            status = a.status
        if teacher is None and status is None and a.notes is None:
            continue
        overrides.append(LectureOverride(
            lecture_number=a.lecture_number,
            teacher_id=teacher,
            status=status,
            notes=a.notes,
        ))
    return overrides


def reapply_overrides(
    assignments: list[TeacherLectureAssignment],
    overrides: Iterable[LectureOverride],
    teacher_ids: Optional[list[str]] = None,
) -> list[TeacherLectureAssignment]:
    """Spielt gesicherte Änderungen auf eine neu erzeugte Liste zurück.

    Vorlesungen, die es nicht mehr gibt, werden verworfen. Ist teacher_ids
    angegeben, werden Lehrkräfte außerhalb dieser Liste nicht übernommen.
    """
    by_number = index_assignments(assignments)
    dropped = 0
    for o in overrides:
        current = by_number.get(o.lecture_number)
        if current is None:
            dropped += 1
            continue
        fields: dict[str, Any] = {}
        if o.teacher_id is not None:
            if teacher_ids is None or o.teacher_id in teacher_ids:
                fields["teacher_id"] = o.teacher_id
            else:
                logger.warning(
                    f"Vorlesung {o.lecture_number}: Lehrkraft {o.teacher_id} "
                    f"nicht mehr in der Gruppe – Rotation bleibt"
                )
        if o.status is not None:
            fields["status"] = o.status
        if o.notes is not None:
            fields["notes"] = o.notes
        if fields:
            by_number[o.lecture_number] = _merge(current, fields)
    if dropped:
        logger.warning(f"{dropped} Überschreibung(en) für entfallene Vorlesungen verworfen")
    return [by_number[n] for n in sorted(by_number)]


# ─── Auswertung ───────────────────────────────────────────────────────────────

def assignments_for_teacher(
    assignments: Iterable[TeacherLectureAssignment], teacher_id: str
) -> list[TeacherLectureAssignment]:
    """Alle Zuweisungen einer Lehrkraft."""
    return [a for a in assignments if a.teacher_id == teacher_id]


def teacher_statistics(
    assignments: list[TeacherLectureAssignment], teacher_ids: list[str]
) -> list[TeacherStats]:
    """Anzahl zugewiesener und abgeschlossener Vorlesungen je Lehrkraft."""
    stats = []
    for teacher_id in teacher_ids:
        own = assignments_for_teacher(assignments, teacher_id)
        completed = sum(1 for a in own if a.status == LectureStatus.COMPLETED)
        stats.append(TeacherStats(
            teacher_id=teacher_id,
            total_assigned=len(own),
            completed=completed,
            upcoming=len(own) - completed,
        ))
    return stats


# ─── Manager ──────────────────────────────────────────────────────────────────

class AssignmentManager:
    """Verwaltet die Zuweisungsliste einer Gruppe während einer Bearbeitung.

    Hält den gespeicherten Stand, damit reset() Änderungen verwerfen kann.
    Nicht thread-sicher; ein Manager gehört genau einem Bearbeiter.
    """

    def __init__(self, assignments: Optional[list[TeacherLectureAssignment]] = None) -> None:
        self._saved: list[TeacherLectureAssignment] = list(assignments or [])
        self._assignments: list[TeacherLectureAssignment] = list(self._saved)

    @property
    def has_changes(self) -> bool:
        return self._assignments != self._saved

    def get_assignments(self) -> list[TeacherLectureAssignment]:
        """Aktuelle (ggf. ungespeicherte) Liste."""
        return list(self._assignments)

    def generate(
        self,
        teacher_ids: list[str],
        total_lectures: int,
        context: LectureContext,
        keep_overrides: bool = False,
        previous_teacher_ids: Optional[list[str]] = None,
        previous_context: Optional[LectureContext] = None,
    ) -> list[TeacherLectureAssignment]:
        """Erzeugt die Liste neu; mit keep_overrides bleiben manuelle Änderungen.

        Abweichungen werden gegen Lehrerliste und Fortschritt erkannt, unter
        denen die bisherige Liste entstanden ist (previous_teacher_ids,
        previous_context). Fehlen diese Angaben, bleiben nur Notizen sowie
        ``dismissed``/``scheduled`` erhalten.
        """
        overrides = []
        if keep_overrides:
            overrides = collect_overrides(self._assignments, previous_teacher_ids, previous_context)
        fresh = generate_assignments(
            teacher_ids, total_lectures,
            context.current_lecture_number, context.upcoming_lecture_number,
        )
        if overrides:
            fresh = reapply_overrides(fresh, overrides, teacher_ids)
        self._assignments = fresh
        return self.get_assignments()

    def set(self, lecture_number: int, /, **fields: Any) -> list[TeacherLectureAssignment]:
        self._assignments = set_assignment(self._assignments, lecture_number, **fields)
        return self.get_assignments()

    def bulk_update(self, updates: Iterable[Mapping[str, Any]]) -> list[TeacherLectureAssignment]:
        self._assignments = bulk_update(self._assignments, updates)
        return self.get_assignments()

    def auto_assign(self, teacher_ids: list[str]) -> list[TeacherLectureAssignment]:
        self._assignments = auto_assign(self._assignments, teacher_ids)
        return self.get_assignments()

    def fill_missing(
        self, teacher_ids: list[str], total_lectures: int, context: LectureContext
    ) -> list[TeacherLectureAssignment]:
        self._assignments = fill_missing_assignments(
            self._assignments, teacher_ids, total_lectures, context
        )
        return self.get_assignments()

    def save(self) -> list[TeacherLectureAssignment]:
        """Markiert den aktuellen Stand als gespeichert."""
        self._saved = list(self._assignments)
        return self.get_assignments()

    def reset(self) -> list[TeacherLectureAssignment]:
        """Verwirft alle ungespeicherten Änderungen."""
        self._assignments = list(self._saved)
        return self.get_assignments()

    def __len__(self) -> int:
        return len(self._assignments)

    def __repr__(self) -> str:
        return f"AssignmentManager({len(self._assignments)} assignments)"
