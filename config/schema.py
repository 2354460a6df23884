from pydantic import BaseModel, Field, model_validator

from models.session import ALLOWED_DAYS, DAY_ORDER, Weekday


# ─── ENGINE-KONFIGURATION ───

class EngineConfig(BaseModel):
    """Regeln und Anzeige-Optionen der Gruppenplanung.

    Die Defaults entsprechen der akademischen Woche (So-Do) des Dashboards.
    """
    # Tage, an denen Termine stattfinden dürfen
    allowed_days: list[str] = Field(
        default_factory=lambda: list(ALLOWED_DAYS),
        description="Erlaubte Unterrichtstage")
    # Rang je Tag für die Anzeige-Sortierung (unbekannte Tage zuletzt)
    day_order: dict[str, int] = Field(
        default_factory=lambda: dict(DAY_ORDER),
        description="Sortier-Rang je Tag")
    # Explizite Tages-Abkürzungen; sonst die ersten drei Buchstaben
    day_abbreviations: dict[str, str] = Field(
        default_factory=lambda: {
            "Sunday": "Sun",
            "Monday": "Mon",
            "Tuesday": "Tue",
            "Wednesday": "Wed",
            "Thursday": "Thu",
        },
        description="Abkürzungen der Tagesnamen")
    # Anzeige für Gruppen ohne Termine
    placeholder_label: str = Field("New Group",
        description="Anzeigename einer Gruppe ohne Termine")
    # Mindestdauer eines Termins in Minuten (0 = keine Prüfung)
    min_session_minutes: int = Field(0, ge=0, le=600,
        description="Mindestdauer eines Termins (0 = deaktiviert)")
    # Maximale Termine pro Gruppe und Woche
    max_sessions_per_group: int = Field(7, ge=1, le=35,
        description="Max. Termine pro Woche")
    # Maximale Lehrkräfte pro Gruppe
    max_teachers_per_group: int = Field(5, ge=1, le=50,
        description="Max. Lehrkräfte pro Gruppe")
    # Obergrenze für die Vorlesungsanzahl einer Gruppe
    max_total_lectures: int = Field(100, ge=1, le=1000,
        description="Max. Vorlesungen pro Gruppe")
    # Anzeige für Lehrer-IDs ohne Verzeichnis-Eintrag
    unknown_teacher_label: str = Field("Unknown Teacher",
        description="Anzeigename für unbekannte Lehrkräfte")

    @model_validator(mode='after')
    def validate_days(self):
        """Jeder erlaubte Tag muss ein echter Wochentag mit Sortier-Rang sein."""
        known = {d.value for d in Weekday}
        if not self.allowed_days:
            raise ValueError("allowed_days darf nicht leer sein")
        for day in self.allowed_days:
            if day not in known:
                raise ValueError(f"Unbekannter Wochentag in allowed_days: {day!r}")
            if day not in self.day_order:
                raise ValueError(f"Kein Sortier-Rang für erlaubten Tag {day!r}")
        for day in self.day_abbreviations:
            if day not in known:
                raise ValueError(f"Abkürzung für unbekannten Tag: {day!r}")
        return self
