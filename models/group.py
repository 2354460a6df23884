"""Datenmodell für eine Lerngruppe (Pydantic v2)."""

from typing import Optional

from pydantic import BaseModel, Field

from models.lecture import LectureContext, TeacherLectureAssignment
from models.session import SessionTime


class Group(BaseModel):
    """Planungs-Kontext einer Gruppe.

    Die Engine liest diese Werte nur; geschrieben werden sie von der
    umgebenden CRUD-Schicht.
    """

    id: str
    name: Optional[str] = None                 # Wird aus den Terminen abgeleitet
    total_lectures: int = Field(1, ge=0)
    current_lecture_number: int = Field(0, ge=0)
    upcoming_lecture_number: int = Field(1, ge=0)
    teachers: list[str] = []                   # Ausgewählte Lehrer-IDs (Reihenfolge = Rotation)
    sessions: list[SessionTime] = []
    teacher_assignments: list[TeacherLectureAssignment] = []

    @property
    def context(self) -> LectureContext:
        """Fortschritts-Kontext für die Status-Ableitung."""
        return LectureContext(
            current_lecture_number=self.current_lecture_number,
            upcoming_lecture_number=self.upcoming_lecture_number,
        )

    def session_by_id(self, session_id: str) -> Optional[SessionTime]:
        """Sucht einen Termin über seine Kennung."""
        return next((s for s in self.sessions if s.id == session_id), None)
