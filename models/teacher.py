"""Datenmodell für eine Lehrkraft im Lehrer-Verzeichnis (Pydantic v2)."""

from pydantic import BaseModel, field_validator


class Teacher(BaseModel):
    """Eintrag im Lehrer-Verzeichnis.

    Der Name dient nur der Anzeige, nie der Validierungslogik.
    """

    id: str      # Opake Kennung ("t-01")
    name: str    # "Sara Ahmed"

    @field_validator("id")
    @classmethod
    def normalize_id(cls, v: str) -> str:
        return v.strip()
