"""Unit tests for gate settings."""

from pathlib import Path

import pytest
from lighthouse_gate.config.config import GateSettings, MonitoringConfig, find_config_file, load_settings
from lighthouse_gate.errors import InvalidConfigurationError


class TestGateSettings:
    """Test defaults and environment overrides."""

    def test_defaults(self):
        """Test the default settings."""
        settings = GateSettings()

        assert settings.monitoring.log_level == "INFO"
        assert settings.monitoring.log_file is None
        assert settings.monitoring.json_logs is False
        assert settings.report.write_status_report is True
        assert settings.report.status_filename == "lighthouse-gate-status.json"
        assert settings.report.results_filename == "results.json"

    def test_environment_overrides(self, monkeypatch):
        """Test overriding settings from the environment."""
        monkeypatch.setenv("LIGHTHOUSE_GATE_MONITORING__LOG_LEVEL", "debug")
        monkeypatch.setenv("LIGHTHOUSE_GATE_REPORT__WRITE_STATUS_REPORT", "false")

        settings = GateSettings()

        assert settings.monitoring.log_level == "DEBUG"
        assert settings.report.write_status_report is False

    def test_log_file_parent_created(self, tmp_path):
        """Test that the log file directory is created."""
        log_file = tmp_path / "logs" / "gate.log"

        config = MonitoringConfig(log_file=str(log_file))

        assert config.log_file == str(log_file)
        assert log_file.parent.is_dir()


class TestFromYaml:
    """Test loading settings files."""

    def test_load_yaml(self, tmp_path):
        """Test loading settings from YAML."""
        path = tmp_path / "lighthouse-gate.yaml"
        path.write_text("monitoring:\n  log_level: WARNING\nreport:\n  status_filename: verdict.json\n")

        settings = GateSettings.from_yaml(path)

        assert settings.monitoring.log_level == "WARNING"
        assert settings.report.status_filename == "verdict.json"

    def test_empty_file_uses_defaults(self, tmp_path):
        """Test that an empty file gives the defaults."""
        path = tmp_path / "lighthouse-gate.yaml"
        path.write_text("")

        settings = GateSettings.from_yaml(path)

        assert settings == GateSettings()

    def test_missing_file(self, tmp_path):
        """Test loading a missing settings file."""
        with pytest.raises(FileNotFoundError):
            GateSettings.from_yaml(tmp_path / "nope.yaml")

    def test_invalid_value(self, tmp_path):
        """Test that an invalid value is a configuration error."""
        path = tmp_path / "lighthouse-gate.yaml"
        path.write_text("monitoring:\n  log_level: LOUD\n")

        with pytest.raises(InvalidConfigurationError, match="Invalid configuration"):
            GateSettings.from_yaml(path)

    def test_non_mapping(self, tmp_path):
        """Test that a non-mapping file is a configuration error."""
        path = tmp_path / "lighthouse-gate.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(InvalidConfigurationError, match="mapping"):
            GateSettings.from_yaml(path)


class TestLoadSettings:
    """Test settings discovery."""

    def test_finds_file_in_working_directory(self, tmp_path, monkeypatch):
        """Test discovery of a settings file in the working directory."""
        monkeypatch.chdir(tmp_path)
        (tmp_path / "lighthouse-gate.yml").write_text("report:\n  write_status_report: false\n")

        assert find_config_file() == tmp_path / "lighthouse-gate.yml"
        assert load_settings().report.write_status_report is False

    def test_without_file(self, tmp_path, monkeypatch):
        """Test the defaults when no settings file exists."""
        monkeypatch.chdir(tmp_path)

        assert find_config_file() is None
        assert load_settings() == GateSettings()

    def test_explicit_path(self, tmp_path):
        """Test loading an explicitly named settings file."""
        path = tmp_path / "custom.yaml"
        path.write_text("report:\n  results_filename: lh.json\n")

        assert load_settings(Path(path)).report.results_filename == "lh.json"
