"""Anzeigenamen aus der Termin-Liste einer Gruppe.

Beispiele:
  []                                    → "New Group"
  [So 09:00-10:00]                      → "Sun [ 9:00 AM - 10:00 AM ]"
  [So 09:00-10:00, Do 17:40-18:40]      → "Sun [ 9:00 AM - 10:00 AM ] ~ Thu [ 5:40 PM - 6:40 PM ]"
  drei oder mehr Termine                → "Multiple (3 Sessions)"
"""

from datetime import time
from typing import Iterable, Optional, TYPE_CHECKING

from config.defaults import default_engine_config
from config.schema import EngineConfig
from models.session import UNKNOWN_DAY_RANK, SessionDraft

if TYPE_CHECKING:
    from models.group import Group


def sort_sessions(
    sessions: Iterable[SessionDraft], config: Optional[EngineConfig] = None
) -> list[SessionDraft]:
    """Sortiert stabil nach Tages-Rang; unbekannte Tage ans Ende."""
    config = config or default_engine_config()
    return sorted(
        sessions,
        key=lambda s: config.day_order.get(s.day, UNKNOWN_DAY_RANK),
    )


def abbreviate_day(day: str, config: Optional[EngineConfig] = None) -> str:
    """Tabelle zuerst, sonst die ersten drei Buchstaben."""
    config = config or default_engine_config()
    return config.day_abbreviations.get(day) or day[:3]


def format_time(value: time) -> str:
    """12-Stunden-Format: 0:05 → "12:05 AM", 17:40 → "5:40 PM"."""
    suffix = "PM" if value.hour >= 12 else "AM"
    hour = value.hour % 12 or 12
    return f"{hour}:{value.minute:02d} {suffix}"


def format_session(session: SessionDraft, config: Optional[EngineConfig] = None) -> str:
    """Einzeltermin: "Sun [ 9:00 AM - 10:00 AM ]"."""
    day = abbreviate_day(session.day, config)
    return f"{day} [ {format_time(session.start_time)} - {format_time(session.end_time)} ]"


def describe_session(session: SessionDraft) -> str:
    """Langform für Detailansichten: "Sunday - 09:00 → 10:00"."""
    return f"{session.day} - {session.start_time:%H:%M} → {session.end_time:%H:%M}"


def summarize_sessions(
    sessions: Iterable[SessionDraft], config: Optional[EngineConfig] = None
) -> str:
    """Kanonische Zusammenfassung einer Termin-Liste (abhängig von der Anzahl)."""
    config = config or default_engine_config()
    ordered = sort_sessions(sessions, config)

    if not ordered:
        return config.placeholder_label
    if len(ordered) == 1:
        return format_session(ordered[0], config)
    if len(ordered) == 2:
        return " ~ ".join(format_session(s, config) for s in ordered)
    return f"Multiple ({len(ordered)} Sessions)"


def display_label(group: "Group", config: Optional[EngineConfig] = None) -> str:
    """Anzeigename einer Gruppe, abgeleitet aus ihren Terminen."""
    return summarize_sessions(group.sessions, config)
