"""Konfigurationsmanager: Laden, Speichern und Validieren der Engine-Regeln.

Nutzt ruamel.yaml für YAML-Serialisierung mit Kommentaren.
"""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Optional

from pydantic import ValidationError
from rich.console import Console
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from config.defaults import default_engine_config
from config.schema import EngineConfig

logger = logging.getLogger(__name__)

console = Console()
yaml = YAML()
yaml.default_flow_style = False
yaml.width = 120


class ConfigError(ValueError):
    """Konfigurationsdatei vorhanden, aber ungültig."""


# ─── YAML-KOMMENTAR-AUFBAU ───

_YAML_HEADER = f"""\
# ============================================
# Gruppenplanung: Engine-Konfiguration
# Erstellt: {date.today().isoformat()}
# ============================================
"""

_FIELD_COMMENTS = {
    "allowed_days": "Erlaubte Unterrichtstage (akademische Woche So-Do)",
    "day_order": "Sortier-Rang je Tag für Anzeigenamen",
    "day_abbreviations": "Tages-Abkürzungen; fehlende Tage → erste drei Buchstaben",
    "placeholder_label": "Anzeigename einer Gruppe ohne Termine",
    "min_session_minutes": "Mindestdauer eines Termins, 0 = deaktiviert",
    "max_sessions_per_group": None,
    "max_teachers_per_group": None,
    "max_total_lectures": None,
    "unknown_teacher_label": None,
}


class ConfigManager:
    CONFIG_DIR = Path("config")
    DEFAULT_CONFIG = CONFIG_DIR / "engine_config.yaml"

    def first_run_check(self) -> bool:
        """Gibt True zurück wenn noch keine Config existiert (Erstaufruf)."""
        return not self.DEFAULT_CONFIG.exists()

    # ─── Laden ───

    def load(self, path: Optional[Path] = None) -> EngineConfig:
        """Lade Config aus YAML. Validiert automatisch via Pydantic."""
        target = Path(path) if path else self.DEFAULT_CONFIG
        if not target.exists():
            raise FileNotFoundError(
                f"Konfigurationsdatei nicht gefunden: {target}\n"
                f"Führen Sie 'python main.py config init' aus."
            )
        with open(target, "r", encoding="utf-8") as f:
            raw = yaml.load(f)
        try:
            return EngineConfig.model_validate(dict(raw or {}))
        except ValidationError as e:
            raise ConfigError(
                f"Konfigurationsdatei ungültig: {target}\n"
                f"Pydantic-Fehler: {e}"
            ) from e
        except (TypeError, ValueError) as e:
            raise ConfigError(
                f"Konfigurationsdatei ungültig: {target}\n"
                f"Erwartet eine Zuordnung (Schlüssel: Wert), nicht {type(raw).__name__}"
            ) from e

    def load_or_default(self, path: Optional[Path] = None) -> EngineConfig:
        """Wie load(), aber ohne Datei gelten die Standard-Regeln."""
        target = Path(path) if path else self.DEFAULT_CONFIG
        if not target.exists():
            logger.info(f"Keine Konfiguration unter {target} – nutze Standard-Regeln")
            return default_engine_config()
        return self.load(target)

    # ─── Speichern ───

    def save(self, config: EngineConfig, path: Optional[Path] = None) -> None:
        """Speichere Config als YAML mit deutschen Kommentaren."""
        target = Path(path) if path else self.DEFAULT_CONFIG
        target.parent.mkdir(parents=True, exist_ok=True)

        data = self._build_commented_yaml(config)

        with open(target, "w", encoding="utf-8") as f:
            f.write(_YAML_HEADER + "\n")
            yaml.dump(data, f)

        console.print(f"[green]✓[/green] Konfiguration gespeichert: {target}")

    def _build_commented_yaml(self, config: EngineConfig) -> CommentedMap:
        """Baut die YAML-Struktur mit Kommentaren auf."""
        raw = json.loads(config.model_dump_json())
        cm = CommentedMap(raw)
        for field, comment in _FIELD_COMMENTS.items():
            if comment and field in cm:
                cm.yaml_set_comment_before_after_key(field, before=f"\n{comment}")
        return cm
