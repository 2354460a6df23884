"""Datenmodell für wöchentliche Termine einer Gruppe (Pydantic v2)."""

from datetime import datetime, time
from enum import Enum
from typing import Union
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Weekday(str, Enum):
    """Alle sieben Wochentage.

    Freitag und Samstag sind hier bewusst enthalten: ein Termin an diesen
    Tagen muss darstellbar sein, damit der Validator ihn als ``invalid_day``
    melden kann, statt schon beim Parsen abzubrechen.
    """

    SUNDAY = "Sunday"
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"


# Akademische Woche: Sonntag bis Donnerstag
ALLOWED_DAYS: tuple[str, ...] = (
    Weekday.SUNDAY.value,
    Weekday.MONDAY.value,
    Weekday.TUESDAY.value,
    Weekday.WEDNESDAY.value,
    Weekday.THURSDAY.value,
)

# Kanonische Sortierung für die Anzeige
DAY_ORDER: dict[str, int] = {day: rank for rank, day in enumerate(ALLOWED_DAYS)}

# Rang für unbekannte Tage (sortieren ans Ende)
UNKNOWN_DAY_RANK = 999

_CLOCK_FORMATS = ("%H:%M", "%H:%M:%S", "%I:%M %p", "%I:%M%p")


def parse_clock(raw: str) -> time:
    """Parst eine Uhrzeit ("09:00", "9:00", "17:40:00", "5:40 PM") → time."""
    text = raw.strip().upper()
    for fmt in _CLOCK_FORMATS:
        try:
            return datetime.strptime(text, fmt).time()
        except ValueError:
            continue
    raise ValueError(f"Ungültige Uhrzeit: {raw!r} (erwartet HH:MM)")


class SessionDraft(BaseModel):
    """Ein noch nicht gespeicherter Termin: Tag + Zeitfenster.

    Nur die Uhrzeit zählt. Ein ``datetime`` wird auf seine Uhrzeit reduziert,
    Datum und Zeitzone werden verworfen.
    """

    model_config = ConfigDict(frozen=True)

    day: str           # "Sunday" .. "Thursday" (andere Tage → invalid_day)
    start_time: time
    end_time: time

    @field_validator("day", mode="before")
    @classmethod
    def _normalize_day(cls, v):
        if isinstance(v, Weekday):
            return v.value
        if isinstance(v, str):
            return v.strip().title()
        return v

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def _coerce_time(cls, v: Union[str, time, datetime]):
        if isinstance(v, datetime):
            return v.time()
        if isinstance(v, time):
            return v.replace(tzinfo=None)
        if isinstance(v, str):
            return parse_clock(v)
        return v

    @property
    def duration_minutes(self) -> int:
        """Dauer in Minuten (negativ bei vertauschten Zeiten)."""
        start = self.start_time.hour * 60 + self.start_time.minute
        end = self.end_time.hour * 60 + self.end_time.minute
        return end - start

    @property
    def day_rank(self) -> int:
        """Position in der Anzeige-Reihenfolge; unbekannte Tage zuletzt."""
        return DAY_ORDER.get(self.day, UNKNOWN_DAY_RANK)


class SessionTime(SessionDraft):
    """Ein gespeicherter Wochentermin, gehört genau einer Gruppe."""

    id: str = Field(default_factory=lambda: uuid4().hex)

    def to_draft(self) -> SessionDraft:
        """Gibt die Termin-Daten ohne Kennung zurück."""
        return SessionDraft(day=self.day, start_time=self.start_time,
                            end_time=self.end_time)

    def __str__(self) -> str:
        return (f"{self.day} {self.start_time:%H:%M}-{self.end_time:%H:%M}"
                f" ({self.id})")
