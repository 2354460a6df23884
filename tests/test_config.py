"""Tests für Engine-Konfiguration und ConfigManager."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from config.defaults import default_engine_config
from config.manager import ConfigError, ConfigManager
from config.schema import EngineConfig


# ─── DEFAULT-KONFIGURATION ────────────────────────────────────────────────────

class TestDefaultConfig:
    def test_academic_week(self):
        """Standard: Sonntag bis Donnerstag, in dieser Reihenfolge."""
        config = default_engine_config()
        assert config.allowed_days == ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday"]
        assert config.day_order["Sunday"] == 0
        assert config.day_order["Thursday"] == 4

    def test_limits(self):
        config = default_engine_config()
        assert config.min_session_minutes == 0
        assert config.max_sessions_per_group == 7
        assert config.max_teachers_per_group == 5
        assert config.max_total_lectures == 100
        assert config.placeholder_label == "New Group"
        assert config.unknown_teacher_label == "Unknown Teacher"


# ─── PYDANTIC-VALIDIERUNG ─────────────────────────────────────────────────────

class TestConfigValidation:
    def test_unknown_day_rejected(self):
        with pytest.raises(ValidationError):
            EngineConfig(allowed_days=["Sunday", "Funday"])

    def test_empty_days_rejected(self):
        with pytest.raises(ValidationError):
            EngineConfig(allowed_days=[])

    def test_allowed_day_needs_rank(self):
        """Friday erlauben ohne Sortier-Rang → Fehler."""
        with pytest.raises(ValidationError):
            EngineConfig(allowed_days=["Sunday", "Friday"])

    def test_allowed_day_with_rank(self):
        config = EngineConfig(
            allowed_days=["Sunday", "Friday"],
            day_order={"Sunday": 0, "Friday": 1},
        )
        assert "Friday" in config.allowed_days

    def test_abbreviation_for_unknown_day(self):
        with pytest.raises(ValidationError):
            EngineConfig(day_abbreviations={"Sonntag": "So"})

    def test_negative_min_duration(self):
        with pytest.raises(ValidationError):
            EngineConfig(min_session_minutes=-5)


# ─── CONFIG-MANAGER ───────────────────────────────────────────────────────────

class TestConfigManager:
    def test_save_and_load_roundtrip(self, tmp_path: Path):
        """Config speichern, laden und validieren, vollständiger Roundtrip."""
        config = default_engine_config().model_copy(update={
            "min_session_minutes": 60,
            "placeholder_label": "Neue Gruppe",
        })
        mgr = ConfigManager()
        mgr.CONFIG_DIR = tmp_path
        mgr.DEFAULT_CONFIG = tmp_path / "engine_config.yaml"

        mgr.save(config)
        assert mgr.DEFAULT_CONFIG.exists()
        text = mgr.DEFAULT_CONFIG.read_text(encoding="utf-8")
        assert "Mindestdauer" in text

        loaded = mgr.load(mgr.DEFAULT_CONFIG)
        assert loaded == config

    def test_first_run_check(self, tmp_path: Path):
        mgr = ConfigManager()
        mgr.DEFAULT_CONFIG = tmp_path / "engine_config.yaml"
        assert mgr.first_run_check() is True
        mgr.save(default_engine_config())
        assert mgr.first_run_check() is False

    def test_load_nonexistent_raises(self, tmp_path: Path):
        """Laden einer nicht-existenten Datei → FileNotFoundError."""
        mgr = ConfigManager()
        with pytest.raises(FileNotFoundError):
            mgr.load(tmp_path / "not_there.yaml")

    def test_load_invalid_raises_config_error(self, tmp_path: Path):
        path = tmp_path / "engine_config.yaml"
        path.write_text("max_sessions_per_group: 0\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            ConfigManager().load(path)

    @pytest.mark.parametrize("content", ["- Sunday\n- Monday\n", "42\n", "nur text\n"])
    def test_load_non_mapping_raises_config_error(self, tmp_path: Path, content: str):
        """Liste oder Skalar statt Zuordnung → ConfigError statt Traceback."""
        path = tmp_path / "engine_config.yaml"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(ConfigError):
            ConfigManager().load(path)

    def test_partial_file_uses_defaults(self, tmp_path: Path):
        path = tmp_path / "engine_config.yaml"
        path.write_text("min_session_minutes: 45\n", encoding="utf-8")
        config = ConfigManager().load(path)
        assert config.min_session_minutes == 45
        assert config.max_sessions_per_group == 7

    def test_load_or_default_without_file(self, tmp_path: Path):
        config = ConfigManager().load_or_default(tmp_path / "missing.yaml")
        assert config == default_engine_config()
