"""Validierung von Wochenterminen einer Gruppe.

Prüft erlaubte Tage, Zeit-Reihenfolge und Überschneidungen. Alle Verstöße
werden gesammelt, damit die Oberfläche sie in einem Durchgang anzeigen kann.
Reine Funktionen ohne Seiteneffekte.
"""

import logging
from itertools import combinations
from typing import Iterable, Literal, Optional

from pydantic import BaseModel

from config.defaults import default_engine_config
from config.schema import EngineConfig
from models.session import SessionDraft, SessionTime

logger = logging.getLogger(__name__)

ViolationCode = Literal[
    "invalid_day",
    "invalid_time_range",
    "too_short",
    "overlap_conflict",
    "too_many_sessions",
]


class SessionViolation(BaseModel):
    """Ein einzelner Regelverstoß."""

    code: ViolationCode
    message: str
    session_id: Optional[str] = None               # Geprüfter Termin (bei Listen-Audit)
    conflicting_session_id: Optional[str] = None   # Nur bei overlap_conflict


class SessionValidationError(Exception):
    """Termin verletzt eine oder mehrere Regeln."""

    def __init__(self, violations: list[SessionViolation]):
        self.violations = violations
        super().__init__("; ".join(v.message for v in violations))


class SessionValidationResult(BaseModel):
    """Ergebnis einer Termin-Prüfung."""

    violations: list[SessionViolation] = []

    @property
    def is_valid(self) -> bool:
        return not self.violations

    @property
    def codes(self) -> list[str]:
        return [v.code for v in self.violations]

    @property
    def messages(self) -> list[str]:
        return [v.message for v in self.violations]

    def raise_for_violations(self) -> None:
        """Wirft SessionValidationError mit allen Verstößen, falls vorhanden."""
        if self.violations:
            raise SessionValidationError(list(self.violations))

    def print_rich(self) -> None:
        """Gibt das Ergebnis formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel

        console = Console()
        if self.is_valid:
            lines = ["[bold green]✓ TERMIN GÜLTIG[/bold green]"]
        else:
            lines = ["[bold red]✗ TERMIN ABGELEHNT[/bold red]"]
            for v in self.violations:
                lines.append(f"  [red]• {v.message}[/red]")
        console.print(Panel("\n".join(lines), title="Termin-Prüfung", border_style="cyan"))


# ─── Überschneidung ───────────────────────────────────────────────────────────

def sessions_overlap(a: SessionDraft, b: SessionDraft) -> bool:
    """Halboffene Intervalle [start, end) am selben Tag überschneiden sich.

    Berührende Endpunkte (10:00 Ende, 10:00 Beginn) zählen nicht.
    Symmetrisch: sessions_overlap(a, b) == sessions_overlap(b, a).
    """
    if a.day != b.day:
        return False
    return a.start_time < b.end_time and b.start_time < a.end_time


def find_overlaps(sessions: Iterable[SessionTime]) -> list[tuple[SessionTime, SessionTime]]:
    """Alle sich überschneidenden Paare innerhalb einer Termin-Liste."""
    return [
        (a, b) for a, b in combinations(list(sessions), 2)
        if sessions_overlap(a, b)
    ]


# ─── Einzelregeln ─────────────────────────────────────────────────────────────

def _check_day(candidate: SessionDraft, config: EngineConfig) -> list[SessionViolation]:
    if candidate.day in config.allowed_days:
        return []
    allowed = ", ".join(config.allowed_days)
    return [SessionViolation(
        code="invalid_day",
        message=f"Sessions can only be scheduled on {allowed} (got {candidate.day})",
    )]


def _check_time_range(candidate: SessionDraft, config: EngineConfig) -> list[SessionViolation]:
    if candidate.start_time >= candidate.end_time:
        return [SessionViolation(
            code="invalid_time_range",
            message=(
                f"Start time must be before end time "
                f"({candidate.start_time:%H:%M} >= {candidate.end_time:%H:%M})"
            ),
        )]
    # Mindestdauer nur bei gültigem Zeitfenster prüfen
    minimum = config.min_session_minutes
    if minimum and candidate.duration_minutes < minimum:
        return [SessionViolation(
            code="too_short",
            message=(
                f"Session must be at least {minimum} minutes long "
                f"(got {candidate.duration_minutes})"
            ),
        )]
    return []


def _check_overlaps(
    candidate: SessionDraft,
    existing: Iterable[SessionTime],
    exclude_id: Optional[str],
) -> list[SessionViolation]:
    violations: list[SessionViolation] = []
    for other in existing:
        if exclude_id is not None and other.id == exclude_id:
            continue
        if sessions_overlap(candidate, other):
            violations.append(SessionViolation(
                code="overlap_conflict",
                message=(
                    f"Overlaps with session {other.id} on {other.day} "
                    f"({other.start_time:%H:%M}-{other.end_time:%H:%M})"
                ),
                conflicting_session_id=other.id,
            ))
    return violations


# ─── Öffentliche Schnittstelle ────────────────────────────────────────────────

def validate_session(
    candidate: SessionDraft,
    existing: Iterable[SessionTime] = (),
    exclude_id: Optional[str] = None,
    config: Optional[EngineConfig] = None,
) -> SessionValidationResult:
    """Prüft einen neuen oder bearbeiteten Termin gegen die bestehende Liste.

    Args:
        candidate: Zu prüfender Termin (SessionDraft oder SessionTime).
        existing: Aktuelle Termine derselben Gruppe.
        exclude_id: Kennung des gerade bearbeiteten Termins; er wird nicht
            gegen sich selbst geprüft.
        config: Regeln; ohne Angabe die Standard-Regeln.

    Returns:
        SessionValidationResult mit allen Verstößen (leer = gültig).
    """
    config = config or default_engine_config()
    violations: list[SessionViolation] = []
    violations.extend(_check_day(candidate, config))
    violations.extend(_check_time_range(candidate, config))
    violations.extend(_check_overlaps(candidate, existing, exclude_id))

    if violations:
        logger.debug(
            f"Termin {candidate.day} {candidate.start_time:%H:%M}-"
            f"{candidate.end_time:%H:%M} abgelehnt: {[v.code for v in violations]}"
        )
    return SessionValidationResult(violations=violations)


def validate_session_list(
    sessions: list[SessionTime],
    config: Optional[EngineConfig] = None,
) -> SessionValidationResult:
    """Prüft eine bereits gespeicherte Termin-Liste vollständig.

    Jede Überschneidung wird einmal pro Paar gemeldet.
    """
    config = config or default_engine_config()
    violations: list[SessionViolation] = []

    if len(sessions) > config.max_sessions_per_group:
        violations.append(SessionViolation(
            code="too_many_sessions",
            message=(
                f"Cannot have more than {config.max_sessions_per_group} "
                f"sessions per week (got {len(sessions)})"
            ),
        ))

    for session in sessions:
        for v in _check_day(session, config) + _check_time_range(session, config):
            violations.append(v.model_copy(update={"session_id": session.id}))

    for a, b in find_overlaps(sessions):
        violations.append(SessionViolation(
            code="overlap_conflict",
            message=(
                f"Session {a.id} overlaps with session {b.id} on {a.day}"
            ),
            session_id=a.id,
            conflicting_session_id=b.id,
        ))

    return SessionValidationResult(violations=violations)
