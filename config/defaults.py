from config.schema import EngineConfig


def default_engine_config() -> EngineConfig:
    """Standard-Regeln des Dashboards.

    Termine nur Sonntag bis Donnerstag, höchstens 7 Termine pro Woche,
    höchstens 5 Lehrkräfte und 100 Vorlesungen pro Gruppe.
    Die Mindestdauer ist deaktiviert; das alte Dashboard verlangte
    60 Minuten (min_session_minutes=60 in der YAML-Datei setzen).
    """
    return EngineConfig()
