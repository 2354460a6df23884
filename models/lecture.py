"""Datenmodell für Vorlesungs-Status und Lehrer-Zuweisungen (Pydantic v2)."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LectureStatus(str, Enum):
    """Geschlossene Menge der Vorlesungs-Zustände."""

    COMPLETED = "completed"
    CURRENT = "current"
    NEXT = "next"
    UPCOMING = "upcoming"
    DISMISSED = "dismissed"
    SCHEDULED = "scheduled"


# Zustände, die aus der Position abgeleitet werden können
DERIVED_STATUSES: frozenset[LectureStatus] = frozenset({
    LectureStatus.COMPLETED,
    LectureStatus.CURRENT,
    LectureStatus.NEXT,
    LectureStatus.UPCOMING,
})

# Nur durch manuelle Zuweisung erreichbar (Entscheidungen des Personals)
OPERATOR_STATUSES: frozenset[LectureStatus] = frozenset({
    LectureStatus.DISMISSED,
    LectureStatus.SCHEDULED,
})


class LectureContext(BaseModel):
    """Fortschritt einer Gruppe: aktuelle und nächste Vorlesung."""

    model_config = ConfigDict(frozen=True)

    current_lecture_number: int = Field(0, ge=0)
    upcoming_lecture_number: int = Field(0, ge=0)


class TeacherLectureAssignment(BaseModel):
    """Bindet eine Vorlesungsnummer an eine Lehrkraft und einen Status.

    Pro Gruppe höchstens ein Eintrag je Vorlesungsnummer.
    """

    model_config = ConfigDict(frozen=True)

    lecture_number: int = Field(ge=1)
    teacher_id: str
    status: LectureStatus
    notes: Optional[str] = None

    @field_validator("notes")
    @classmethod
    def _empty_notes_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v
