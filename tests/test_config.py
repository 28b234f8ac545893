"""
Unit tests for config.py - environment-driven settings.
"""
from pathlib import Path

from config import Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("SQUADS_DB_PATH", "SQUADS_DEFAULT_SIZE", "SQUADS_MAX_SIZE", "SQUADS_LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)
        s = Settings(_env_file=None)
        assert s.default_squad_size == 6
        assert s.max_squad_size == 50
        assert s.log_level == "INFO"
        assert s.db_path.name == "signups.db"

    def test_reads_prefixed_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SQUADS_DB_PATH", str(tmp_path / "x.db"))
        monkeypatch.setenv("SQUADS_DEFAULT_SIZE", "4")
        monkeypatch.setenv("SQUADS_LOG_LEVEL", "debug")
        s = Settings(_env_file=None)
        assert s.db_path == Path(tmp_path / "x.db")
        assert s.default_squad_size == 4
        assert s.log_level == "DEBUG"

    def test_configured_through_model_config(self):
        assert "Config" not in vars(Settings)
        assert Settings.model_config["env_file"] == ".env"
        assert Settings.model_config["extra"] == "ignore"
