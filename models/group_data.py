"""GroupData: Gruppen + Lehrer-Verzeichnis als JSON-Datensatz (Pydantic v2).

Stellt die Schnittstellen bereit, die die Planungs-Engine von außen braucht:
Termine, Zuweisungen und Vorlesungszähler je Gruppe sowie Lehrer-Namen.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from models.group import Group
from models.teacher import Teacher


class GroupData(BaseModel):
    """Vollständiger Datensatz: Gruppen und Lehrer-Verzeichnis."""

    groups: list[Group]
    teachers: list[Teacher]
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None
    data_version: str = "1.0"

    # ─── Zugriff ───

    def get_group(self, group_id: str) -> Group:
        """Gruppe über ihre Kennung; KeyError wenn unbekannt."""
        for g in self.groups:
            if g.id == group_id:
                return g
        raise KeyError(f"Gruppe nicht gefunden: {group_id}")

    def teacher_name(self, teacher_id: str, default: str = "Unknown Teacher") -> str:
        """Anzeigename einer Lehrkraft (nur für Ausgaben)."""
        for t in self.teachers:
            if t.id == teacher_id:
                return t.name
        return default

    def replace_group(self, group: Group) -> "GroupData":
        """Neuer Datensatz mit ersetzter Gruppe (gleiche Kennung)."""
        self.get_group(group.id)
        groups = [group if g.id == group.id else g for g in self.groups]
        return self.model_copy(update={"groups": groups})

    # ─── Übersicht ───

    def summary(self) -> str:
        """Kurze Übersicht über den Datensatz."""
        total_sessions = sum(len(g.sessions) for g in self.groups)
        total_lectures = sum(g.total_lectures for g in self.groups)
        unassigned = sum(1 for g in self.groups if not g.teachers)
        lines = [
            f"Gruppen: {len(self.groups)}"
            + (f" ({unassigned} ohne Lehrkraft)" if unassigned else ""),
            f"Lehrkräfte: {len(self.teachers)}",
            f"Termine/Woche: {total_sessions}",
            f"Vorlesungen gesamt: {total_lectures}",
        ]
        return "\n".join(lines)

    # ─── Persistenz ────────────────────────────────────────────────────────

    def save_json(self, path: Path) -> None:
        """Speichert den kompletten Datensatz als JSON-Datei."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        now = datetime.now(timezone.utc)
        updated = self.model_copy(update={
            "modified_at": now,
            "created_at": self.created_at or now,
        })
        with open(path, "w", encoding="utf-8") as f:
            f.write(updated.model_dump_json(indent=2))

    @classmethod
    def load_json(cls, path: Path) -> "GroupData":
        """Lädt einen Datensatz aus einer JSON-Datei."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"JSON-Datei nicht gefunden: {path}")
        with open(path, "r", encoding="utf-8") as f:
            return cls.model_validate_json(f.read())
