"""Tests for Settings loading from defaults, YAML files and environment."""

from __future__ import annotations

from pathlib import Path

import pytest

from quantumsynth.core.config import Settings
from quantumsynth.core.exceptions import ConfigError

YAML_CONFIG = """
server:
  host: 127.0.0.1
  port: 9001
log:
  level: debug
quantum:
  default_mode: quantum-walk
  max_jobs: 8
security:
  enable_auth: true
  jwt_secret: from-file
  allowed_origins: "https://a.example, https://b.example"
"""


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(YAML_CONFIG, encoding="utf-8")
    return path


@pytest.fixture
def empty_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run in a directory with no config.yaml so defaults apply."""
    workdir = tmp_path / "empty"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    return workdir


class TestDefaults:

    def test_defaults_without_file_or_env(self, empty_cwd: Path) -> None:
        settings = Settings.load(environ={})
        assert settings.server.host == "0.0.0.0"
        assert settings.server.port == 8080
        assert settings.server.shutdown_timeout == 10
        assert settings.log.level == "info"
        assert settings.quantum.default_mode == "superposition"
        assert settings.quantum.max_jobs == 64
        assert settings.security.enable_auth is False
        assert settings.security.jwt_secret == ""
        assert settings.security.origins == ["*"]

    def test_constructor_defaults_match_loaded_defaults(self, empty_cwd: Path) -> None:
        loaded = Settings.load(environ={})
        built = Settings()
        assert loaded.server == built.server
        assert loaded.quantum == built.quantum

    def test_missing_explicit_file_falls_back(self, tmp_path: Path) -> None:
        settings = Settings.load(str(tmp_path / "nope.yaml"), environ={})
        assert settings.server.port == 8080

    def test_jwt_secret_from_dedicated_env(self, empty_cwd: Path) -> None:
        settings = Settings.load(environ={"QUANTUMSYNTH_JWT_SECRET": "s3cret"})
        assert settings.security.jwt_secret == "s3cret"

    def test_jwt_secret_not_in_repr(self, empty_cwd: Path) -> None:
        settings = Settings.load(environ={"QUANTUMSYNTH_JWT_SECRET": "s3cret"})
        assert "s3cret" not in repr(settings.security)


class TestFile:

    def test_values_from_file(self, config_file: Path) -> None:
        settings = Settings.load(str(config_file), environ={})
        assert settings.server.host == "127.0.0.1"
        assert settings.server.port == 9001
        assert settings.log.level == "debug"
        assert settings.quantum.default_mode == "quantum-walk"
        assert settings.quantum.max_jobs == 8
        assert settings.security.enable_auth is True
        assert settings.security.jwt_secret == "from-file"
        assert settings.security.origins == ["https://a.example", "https://b.example"]

    def test_default_location_is_searched(self, config_file: Path,
                                          monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(config_file.parent)
        assert Settings.load(environ={}).server.port == 9001

    def test_nested_config_directory_is_searched(self, tmp_path: Path,
                                                 monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "config.yaml").write_text("server:\n  port: 7000\n")
        monkeypatch.chdir(tmp_path)
        assert Settings.load(environ={}).server.port == 7000

    def test_malformed_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("server: [unclosed\n")
        with pytest.raises(ConfigError):
            Settings.load(str(path), environ={})

    def test_non_mapping_document(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError):
            Settings.load(str(path), environ={})

    def test_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert Settings.load(str(path), environ={}).quantum.max_jobs == 64


class TestEnvironment:

    def test_env_overrides_file(self, config_file: Path) -> None:
        env = {
            "SERVER_PORT": "9100",
            "LOG_LEVEL": "WARN",
            "QUANTUM_DEFAULT_MODE": "entanglement",
            "QUANTUM_MAX_JOBS": "2",
            "SECURITY_ENABLE_AUTH": "false",
            "SECURITY_ALLOWED_ORIGINS": "https://c.example",
        }
        settings = Settings.load(str(config_file), environ=env)
        assert settings.server.port == 9100
        assert settings.server.host == "127.0.0.1"
        assert settings.log.level == "warning"
        assert settings.quantum.default_mode == "entanglement"
        assert settings.quantum.max_jobs == 2
        assert settings.security.enable_auth is False
        assert settings.security.origins == ["https://c.example"]

    def test_cloud_port_variable(self, empty_cwd: Path) -> None:
        assert Settings.load(environ={"PORT": "5555"}).server.port == 5555

    def test_server_port_wins_over_cloud_port(self, empty_cwd: Path) -> None:
        env = {"PORT": "5555", "SERVER_PORT": "6666"}
        assert Settings.load(environ=env).server.port == 6666

    def test_empty_env_value_ignored(self, config_file: Path) -> None:
        settings = Settings.load(str(config_file), environ={"SERVER_PORT": ""})
        assert settings.server.port == 9001

    @pytest.mark.parametrize(
        "env",
        [
            {"SERVER_PORT": "eighty"},
            {"SERVER_PORT": "0"},
            {"SERVER_PORT": "70000"},
            {"QUANTUM_MAX_JOBS": "0"},
            {"QUANTUM_DEFAULT_MODE": "teleport"},
            {"LOG_LEVEL": "chatty"},
            {"SECURITY_ENABLE_AUTH": "maybe"},
            {"SERVER_SHUTDOWN_TIMEOUT": "-1"},
        ],
    )
    def test_invalid_values_rejected(self, empty_cwd: Path, env: dict) -> None:
        with pytest.raises(ConfigError):
            Settings.load(environ=env)


class TestApiMetadata:

    def test_identity(self) -> None:
        settings = Settings()
        assert settings.api_title == "QuantumSynth"
        assert settings.api_version == "1.0.0"
