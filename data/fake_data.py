"""Testdaten-Generator für die Gruppenplanung.

Erzeugt einen reproduzierbaren Demo-Datensatz (Seed) mit Lehrkräften und
Gruppen. Alle erzeugten Termine sind gültig und überschneidungsfrei.

Absichtliche Sonderfälle:
  1. Eine Gruppe ohne Lehrkräfte (leere Rotation, "nicht zugewiesen")
  2. Eine Gruppe ohne Termine (Anzeigename "New Group")
  3. Einzelne Vorlesungen manuell auf "dismissed" / "scheduled" gesetzt
"""

import random
from typing import Optional

from config.defaults import default_engine_config
from config.schema import EngineConfig
from models.group import Group
from models.group_data import GroupData
from models.lecture import LectureStatus
from models.session import SessionTime, parse_clock
from models.teacher import Teacher
from scheduling.rotation import generate_assignments, set_assignment
from scheduling.session_formatter import display_label
from scheduling.session_validator import validate_session

# ─── Namens-Listen ────────────────────────────────────────────────────────────

_FIRST_NAMES = [
    "Ahmed", "Mona", "Omar", "Sara", "Youssef", "Laila", "Karim", "Nour",
    "Hassan", "Dina", "Tarek", "Salma", "Mostafa", "Hana", "Ali", "Rana",
]

_LAST_NAMES = [
    "Hassan", "Ibrahim", "Mahmoud", "Mostafa", "Saleh", "Fathy", "Kamal",
    "Nasser", "Farouk", "Adel", "Sami", "Gamal", "Rashad", "Zaki",
]

# Mögliche Startzeiten (Termine dauern 60 oder 90 Minuten)
_START_TIMES = ["09:00", "10:30", "12:00", "14:00", "15:30", "17:00", "17:40", "19:00"]
_DURATIONS = [60, 90]


class FakeDataGenerator:
    """Erzeugt einen Demo-Datensatz aus Lehrkräften und Gruppen."""

    def __init__(self, config: Optional[EngineConfig] = None, seed: int = 42,
                 num_teachers: int = 8, num_groups: int = 6) -> None:
        self.config = config or default_engine_config()
        self.rng = random.Random(seed)
        self.num_teachers = num_teachers
        self.num_groups = num_groups

    def generate(self) -> GroupData:
        teachers = self._generate_teachers()
        groups = [self._generate_group(i, teachers) for i in range(1, self.num_groups + 1)]
        return GroupData(groups=groups, teachers=teachers)

    # ─── Lehrkräfte ───

    def _generate_teachers(self) -> list[Teacher]:
        teachers = []
        used: set[str] = set()
        for i in range(1, self.num_teachers + 1):
            while True:
                name = f"{self.rng.choice(_FIRST_NAMES)} {self.rng.choice(_LAST_NAMES)}"
                if name not in used:
                    used.add(name)
                    break
            teachers.append(Teacher(id=f"T{i:02d}", name=name))
        return teachers

    # ─── Gruppen ───

    def _generate_group(self, index: int, teachers: list[Teacher]) -> Group:
        group_id = f"G{index:02d}"
        total = self.rng.randint(8, 24)
        current = self.rng.randint(0, total - 1)
        upcoming = current + 1

        # Sonderfall 1: letzte Gruppe ohne Lehrkräfte
        if index == self.num_groups:
            roster: list[str] = []
        else:
            max_teachers = min(3, self.config.max_teachers_per_group, len(teachers))
            roster = [t.id for t in self.rng.sample(teachers, self.rng.randint(1, max_teachers))]

        # Sonderfall 2: vorletzte Gruppe ohne Termine
        sessions = [] if index == self.num_groups - 1 else self._generate_sessions()

        assignments = generate_assignments(roster, total, current, upcoming)
        # Sonderfall 3: manuelle Entscheidungen auf einzelnen Vorlesungen
        if assignments and total > upcoming + 1:
            assignments = set_assignment(
                assignments, upcoming + 1,
                status=self.rng.choice([LectureStatus.DISMISSED, LectureStatus.SCHEDULED]),
                notes="Manuell angepasst",
            )

        group = Group(
            id=group_id,
            total_lectures=total,
            current_lecture_number=current,
            upcoming_lecture_number=upcoming,
            teachers=roster,
            sessions=sessions,
            teacher_assignments=assignments,
        )
        return group.model_copy(update={"name": display_label(group, self.config)})

    def _generate_sessions(self) -> list[SessionTime]:
        """1–3 Termine an verschiedenen erlaubten Tagen, jeweils gegen die Liste geprüft."""
        count = self.rng.randint(1, 3)
        days = self.rng.sample(self.config.allowed_days, min(count, len(self.config.allowed_days)))
        sessions: list[SessionTime] = []
        for day in days:
            start = parse_clock(self.rng.choice(_START_TIMES))
            minutes = start.hour * 60 + start.minute + self.rng.choice(_DURATIONS)
            candidate = SessionTime(
                id=f"S{self.rng.randrange(16**6):06x}",
                day=day,
                start_time=start,
                end_time=f"{minutes // 60:02d}:{minutes % 60:02d}",
            )
            if validate_session(candidate, sessions, config=self.config).is_valid:
                sessions.append(candidate)
        return sessions
