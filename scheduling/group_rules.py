"""Konsistenz-Check einer Gruppe: Lehrerliste, Vorlesungszähler, Termine, Zuweisungen."""

from collections import Counter
from typing import Optional

from pydantic import BaseModel

from config.defaults import default_engine_config
from config.schema import EngineConfig
from models.group import Group
from scheduling.session_validator import validate_session_list


class GroupReport(BaseModel):
    """Ergebnis des Gruppen-Checks."""

    group_id: str
    is_valid: bool
    errors: list[str]      # Gruppe in diesem Zustand nicht speicherbar
    warnings: list[str]    # Gültig, aber unvollständig

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel

        console = Console()
        if self.is_valid:
            status = "[bold green]✓ GÜLTIG[/bold green]"
        else:
            status = "[bold red]✗ UNGÜLTIG[/bold red]"

        lines = [status]
        if self.errors:
            lines.append("\n[red bold]Fehler:[/red bold]")
            for e in self.errors:
                lines.append(f"  [red]• {e}[/red]")
        if self.warnings:
            lines.append("\n[yellow bold]Warnungen:[/yellow bold]")
            for w in self.warnings:
                lines.append(f"  [yellow]• {w}[/yellow]")
        if not self.errors and not self.warnings:
            lines.append("[dim]Keine Probleme gefunden.[/dim]")

        console.print(Panel("\n".join(lines), title=f"Gruppe {self.group_id}", border_style="cyan"))


def validate_group(group: Group, config: Optional[EngineConfig] = None) -> GroupReport:
    """Prüft alle gruppenweiten Regeln.

    Prüfungen:
    1. Lehrerliste: höchstens max_teachers_per_group, keine Duplikate
    2. Vorlesungszähler: 1 ≤ total ≤ max, current ≤ total, current < upcoming ≤ total
    3. Termine: erlaubte Tage, Zeitfenster, Überschneidungen, Anzahl
    4. Zuweisungen: Nummern in 1..total, eindeutig, Lehrkraft in der Gruppe
    """
    config = config or default_engine_config()
    errors: list[str] = []
    warnings: list[str] = []

    # ── 1. Lehrerliste ───────────────────────────────────────────────────
    if not group.teachers:
        warnings.append("No teachers selected – lectures stay unassigned.")
    elif len(group.teachers) > config.max_teachers_per_group:
        errors.append(
            f"Cannot assign more than {config.max_teachers_per_group} teachers "
            f"(got {len(group.teachers)})."
        )
    duplicates = sorted(t for t, n in Counter(group.teachers).items() if n > 1)
    if duplicates:
        errors.append(f"Teacher selected more than once: {', '.join(duplicates)}.")

    # ── 2. Vorlesungszähler ──────────────────────────────────────────────
    total = group.total_lectures
    if not 1 <= total <= config.max_total_lectures:
        errors.append(
            f"Total lectures must be between 1 and {config.max_total_lectures} (got {total})."
        )
    if group.current_lecture_number > total:
        errors.append("Current lecture cannot exceed total lectures.")
    if group.upcoming_lecture_number > total:
        errors.append("Upcoming lecture cannot exceed total lectures.")
    if group.upcoming_lecture_number <= group.current_lecture_number:
        errors.append("Upcoming lecture must be after current lecture.")

    # ── 3. Termine ───────────────────────────────────────────────────────
    if not group.sessions:
        warnings.append("No sessions scheduled.")
    session_result = validate_session_list(group.sessions, config)
    errors.extend(session_result.messages)

    # ── 4. Zuweisungen ───────────────────────────────────────────────────
    numbers = [a.lecture_number for a in group.teacher_assignments]
    for n, count in sorted(Counter(numbers).items()):
        if count > 1:
            errors.append(f"Lecture {n} has {count} assignments (at most one allowed).")
    out_of_range = sorted({n for n in numbers if n > total})
    if out_of_range:
        errors.append(
            f"Assignments for lectures beyond total ({total}): "
            f"{', '.join(str(n) for n in out_of_range)}."
        )
    roster = set(group.teachers)
    foreign = sorted({a.teacher_id for a in group.teacher_assignments} - roster)
    if foreign:
        errors.append(f"Assignments reference teachers outside the group: {', '.join(foreign)}.")

    if group.teacher_assignments and total >= 1:
        missing = set(range(1, total + 1)) - set(numbers)
        if missing:
            warnings.append(f"{len(missing)} lecture(s) without assignment.")

    return GroupReport(
        group_id=group.id,
        is_valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )
