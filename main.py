"""Gruppenplanung: Haupt-CLI.

Verwendung:
  python main.py config init                       Standard-Konfiguration anlegen
  python main.py config show                       Konfiguration anzeigen
  python main.py generate                          Demo-Datensatz erzeugen
  python main.py groups                            Gruppen mit Anzeigenamen
  python main.py sessions check Sunday 09:00 10:00 Termin prüfen
  python main.py assign generate G01               Rotation neu erzeugen
  python main.py assign set G01 3 --status dismissed
  python main.py assign show G01                   Zuweisungen + Statistik
  python main.py validate                          Gruppen-Check (Exit 1 bei Fehlern)
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich import box

console = Console()

# Standard-Pfad für den gespeicherten Datensatz
DEFAULT_DATA_JSON = Path("output/group_data.json")

_STATUS_CHOICES = ["completed", "current", "next", "upcoming", "dismissed", "scheduled"]


def _load_config():
    """Konfiguration aus YAML, ohne Datei die Standard-Regeln."""
    from config.manager import ConfigError, ConfigManager
    try:
        return ConfigManager().load_or_default()
    except ConfigError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)


def _load_data_or_abort(json_path: str):
    """Lädt den Datensatz oder bricht mit Hinweis ab."""
    from models.group_data import GroupData
    try:
        return GroupData.load_json(Path(json_path))
    except FileNotFoundError as e:
        console.print(
            f"[red]{e}[/red]\n"
            "Führen Sie zunächst [bold]python main.py generate[/bold] aus."
        )
        sys.exit(1)


def _get_group_or_abort(data, group_id: str):
    try:
        return data.get_group(group_id)
    except KeyError:
        console.print(f"[red]Gruppe nicht gefunden: {group_id}[/red]")
        sys.exit(1)


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anzeigen oder anlegen."""


@cmd_config.command("show")
def config_show():
    """Zeigt die aktuell gültigen Regeln an."""
    config = _load_config()

    console.print(Panel(
        f"Erlaubte Tage: [bold]{', '.join(config.allowed_days)}[/bold]",
        title="Engine-Konfiguration",
        border_style="cyan",
    ))

    table = Table(title="Regeln", box=box.ROUNDED)
    table.add_column("Einstellung")
    table.add_column("Wert")
    table.add_row("Mindestdauer", f"{config.min_session_minutes} min"
                  if config.min_session_minutes else "deaktiviert")
    table.add_row("Max. Termine/Woche", str(config.max_sessions_per_group))
    table.add_row("Max. Lehrkräfte", str(config.max_teachers_per_group))
    table.add_row("Max. Vorlesungen", str(config.max_total_lectures))
    table.add_row("Platzhalter", config.placeholder_label)
    console.print(table)


@cmd_config.command("init")
@click.option("--force", is_flag=True, default=False,
              help="Bestehende Konfiguration überschreiben.")
def config_init(force: bool):
    """Legt die Standard-Konfiguration als YAML an."""
    from config.defaults import default_engine_config
    from config.manager import ConfigManager

    mgr = ConfigManager()
    if not mgr.first_run_check() and not force:
        console.print(
            "[yellow]Eine Konfiguration existiert bereits.[/yellow]\n"
            "Mit [bold]--force[/bold] überschreiben."
        )
        return
    mgr.save(default_engine_config())


# ─── GENERATE ─────────────────────────────────────────────────────────────────

@click.command("generate")
@click.option("--seed", default=42, help="Zufalls-Seed für reproduzierbare Daten.")
@click.option("--json-path", default=str(DEFAULT_DATA_JSON),
              help="Pfad für den JSON-Datensatz.")
def cmd_generate(seed: int, json_path: str):
    """Erzeugt einen Demo-Datensatz (Lehrkräfte, Gruppen, Termine, Zuweisungen)."""
    config = _load_config()
    from data.fake_data import FakeDataGenerator

    console.print("[bold]Demo-Daten werden generiert...[/bold]")
    data = FakeDataGenerator(config, seed=seed).generate()
    console.print(f"\n[dim]{data.summary()}[/dim]")

    out_path = Path(json_path)
    data.save_json(out_path)
    console.print(f"[green]✓[/green] JSON gespeichert: {out_path}")


# ─── GROUPS ───────────────────────────────────────────────────────────────────

@click.command("groups")
@click.option("--json-path", default=str(DEFAULT_DATA_JSON),
              help="Pfad zum JSON-Datensatz.")
def cmd_groups(json_path: str):
    """Listet alle Gruppen mit ihrem Anzeigenamen."""
    config = _load_config()
    data = _load_data_or_abort(json_path)
    from scheduling.session_formatter import display_label

    table = Table(title="Gruppen", box=box.ROUNDED)
    table.add_column("ID", style="bold")
    table.add_column("Anzeigename")
    table.add_column("Lehrkräfte")
    table.add_column("Fortschritt", justify="right")
    for g in data.groups:
        teachers = ", ".join(
            data.teacher_name(t, default=config.unknown_teacher_label) for t in g.teachers
        ) or "[dim]—[/dim]"
        table.add_row(
            g.id,
            display_label(g, config),
            teachers,
            f"{g.current_lecture_number}/{g.total_lectures}",
        )
    console.print(table)


# ─── SESSIONS ─────────────────────────────────────────────────────────────────

@click.group("sessions")
def cmd_sessions():
    """Termine prüfen."""


@cmd_sessions.command("check")
@click.argument("day")
@click.argument("start")
@click.argument("end")
@click.option("--group", "group_id", default=None,
              help="Gegen die Termine dieser Gruppe prüfen.")
@click.option("--exclude", "exclude_id", default=None,
              help="Kennung des bearbeiteten Termins (nicht gegen sich selbst prüfen).")
@click.option("--json-path", default=str(DEFAULT_DATA_JSON),
              help="Pfad zum JSON-Datensatz.")
def sessions_check(day: str, start: str, end: str, group_id: Optional[str],
                   exclude_id: Optional[str], json_path: str):
    """Prüft einen Termin DAY START END, optional gegen eine Gruppe."""
    from pydantic import ValidationError
    from models.session import SessionDraft
    from scheduling.session_validator import validate_session

    config = _load_config()
    try:
        candidate = SessionDraft(day=day, start_time=start, end_time=end)
    except ValidationError as e:
        console.print(f"[red]Ungültige Eingabe:[/red] {e.errors()[0]['msg']}")
        sys.exit(2)

    existing = []
    if group_id:
        data = _load_data_or_abort(json_path)
        existing = _get_group_or_abort(data, group_id).sessions

    result = validate_session(candidate, existing, exclude_id=exclude_id, config=config)
    result.print_rich()
    sys.exit(0 if result.is_valid else 1)


# ─── ASSIGN ───────────────────────────────────────────────────────────────────

@click.group("assign")
def cmd_assign():
    """Lehrer-Zuweisungen einer Gruppe bearbeiten."""


@cmd_assign.command("generate")
@click.argument("group_id")
@click.option("--keep-overrides", is_flag=True, default=False,
              help="Manuelle Änderungen (Lehrkraft, Status, Notizen) übernehmen.")
@click.option("--teachers", default=None,
              help="Neue Lehrerliste, kommagetrennt (Reihenfolge = Rotation).")
@click.option("--current", "current_number", type=int, default=None,
              help="Neue aktuelle Vorlesungsnummer.")
@click.option("--upcoming", "upcoming_number", type=int, default=None,
              help="Neue nächste Vorlesungsnummer (Standard: aktuelle + 1).")
@click.option("--json-path", default=str(DEFAULT_DATA_JSON),
              help="Pfad zum JSON-Datensatz.")
def assign_generate(group_id: str, keep_overrides: bool, teachers: Optional[str],
                    current_number: Optional[int], upcoming_number: Optional[int],
                    json_path: str):
    """Erzeugt die Rotation einer Gruppe neu und speichert sie.

    Mit --teachers/--current/--upcoming werden Lehrerliste und Fortschritt
    vorher geändert. Manuelle Änderungen werden dann gegen den gespeicherten
    Stand erkannt.
    """
    from models.group import Group
    from scheduling.rotation import AssignmentManager

    data = _load_data_or_abort(json_path)
    group = _get_group_or_abort(data, group_id)

    update: dict = {}
    if teachers is not None:
        update["teachers"] = [t.strip() for t in teachers.split(",") if t.strip()]
    if current_number is not None:
        update["current_lecture_number"] = current_number
        update["upcoming_lecture_number"] = (
            current_number + 1 if upcoming_number is None else upcoming_number
        )
    elif upcoming_number is not None:
        update["upcoming_lecture_number"] = upcoming_number
    try:
        updated = Group.model_validate({**group.model_dump(), **update})
        context = updated.context
    except ValueError as e:
        console.print(f"[red]Ungültige Eingabe:[/red] {e}")
        sys.exit(2)

    mgr = AssignmentManager(group.teacher_assignments)
    assignments = mgr.generate(
        updated.teachers, updated.total_lectures, context,
        keep_overrides=keep_overrides,
        previous_teacher_ids=group.teachers,
        previous_context=group.context,
    )
    data = data.replace_group(updated.model_copy(update={"teacher_assignments": assignments}))
    data.save_json(Path(json_path))

    if not assignments:
        console.print("[yellow]Keine Lehrkräfte ausgewählt – keine Zuweisungen erzeugt.[/yellow]")
    else:
        console.print(
            f"[green]✓[/green] {len(assignments)} Zuweisungen für {group_id} erzeugt"
            + (" (manuelle Änderungen übernommen)" if keep_overrides else "")
        )


@cmd_assign.command("set")
@click.argument("group_id")
@click.argument("lecture", type=int)
@click.option("--teacher", "teacher_id", default=None, help="Neue Lehrer-ID.")
@click.option("--status", type=click.Choice(_STATUS_CHOICES), default=None,
              help="Neuer Status.")
@click.option("--notes", default=None, help="Notiz zur Vorlesung.")
@click.option("--json-path", default=str(DEFAULT_DATA_JSON),
              help="Pfad zum JSON-Datensatz.")
def assign_set(group_id: str, lecture: int, teacher_id: Optional[str],
               status: Optional[str], notes: Optional[str], json_path: str):
    """Ändert genau eine Zuweisung (LECTURE = Vorlesungsnummer)."""
    from models.lecture import LectureStatus
    from scheduling.rotation import set_assignment

    fields = {}
    if teacher_id is not None:
        fields["teacher_id"] = teacher_id
    if status is not None:
        fields["status"] = LectureStatus(status)
    if notes is not None:
        fields["notes"] = notes
    if not fields:
        console.print("[yellow]Nichts zu ändern (--teacher, --status oder --notes angeben).[/yellow]")
        return

    data = _load_data_or_abort(json_path)
    group = _get_group_or_abort(data, group_id)
    try:
        assignments = set_assignment(group.teacher_assignments, lecture, **fields)
    except KeyError:
        console.print(f"[red]Keine Zuweisung für Vorlesung {lecture} in {group_id}.[/red]")
        sys.exit(1)

    data = data.replace_group(group.model_copy(update={"teacher_assignments": assignments}))
    data.save_json(Path(json_path))
    console.print(f"[green]✓[/green] Vorlesung {lecture} in {group_id} aktualisiert")


@cmd_assign.command("show")
@click.argument("group_id")
@click.option("--json-path", default=str(DEFAULT_DATA_JSON),
              help="Pfad zum JSON-Datensatz.")
def assign_show(group_id: str, json_path: str):
    """Zeigt Termine, Zuweisungen und Lehrer-Statistik einer Gruppe."""
    from export.tui_renderer import render_assignment_rows, render_session_rows
    from scheduling.rotation import teacher_statistics
    from scheduling.session_formatter import display_label

    config = _load_config()
    data = _load_data_or_abort(json_path)
    group = _get_group_or_abort(data, group_id)

    console.print(Panel(
        f"[bold]{display_label(group, config)}[/bold]  |  "
        f"aktuell: {group.current_lecture_number}  |  "
        f"nächste: {group.upcoming_lecture_number}",
        title=f"Gruppe {group.id}",
        border_style="cyan",
    ))

    sessions = Table(title="Termine", box=box.ROUNDED)
    for col in ("Tag", "Beginn", "Ende", "Dauer"):
        sessions.add_column(col)
    for row in render_session_rows(group, config):
        sessions.add_row(*row)
    console.print(sessions)

    lectures = Table(title="Vorlesungen", box=box.ROUNDED)
    lectures.add_column("Nr.", justify="right")
    lectures.add_column("Lehrkraft")
    lectures.add_column("Status")
    lectures.add_column("Notizen")
    for row in render_assignment_rows(group, data, config):
        lectures.add_row(*row)
    console.print(lectures)

    stats = Table(title="Lehrer-Statistik", box=box.ROUNDED)
    stats.add_column("Lehrkraft")
    stats.add_column("Zugewiesen", justify="right")
    stats.add_column("Abgeschlossen", justify="right")
    stats.add_column("Offen", justify="right")
    for s in teacher_statistics(group.teacher_assignments, group.teachers):
        stats.add_row(
            data.teacher_name(s.teacher_id, default=config.unknown_teacher_label),
            str(s.total_assigned), str(s.completed), str(s.upcoming),
        )
    console.print(stats)


# ─── VALIDATE ─────────────────────────────────────────────────────────────────

@click.command("validate")
@click.option("--json-path", default=str(DEFAULT_DATA_JSON),
              help="Pfad zum JSON-Datensatz.")
def cmd_validate(json_path: str):
    """Prüft alle Gruppen. Exit-Code 1 wenn eine Gruppe Fehler hat."""
    from scheduling.group_rules import validate_group

    config = _load_config()
    data = _load_data_or_abort(json_path)

    reports = [validate_group(g, config) for g in data.groups]
    for report in reports:
        report.print_rich()

    invalid = [r.group_id for r in reports if not r.is_valid]
    if invalid:
        console.print(f"[red]{len(invalid)} Gruppe(n) mit Fehlern: {', '.join(invalid)}[/red]")
    sys.exit(1 if invalid else 0)


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False,
              help="Ausführliche Log-Ausgabe.")
def cli(verbose: bool):
    """Gruppenplanung: Termine, Anzeigenamen und Lehrer-Rotation.

    Starten Sie mit: python main.py generate
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


# Befehle registrieren
cli.add_command(cmd_config)
cli.add_command(cmd_generate)
cli.add_command(cmd_groups)
cli.add_command(cmd_sessions)
cli.add_command(cmd_assign)
cli.add_command(cmd_validate)


if __name__ == "__main__":
    cli()
