"""Tests for the quantumsynth command line."""

from __future__ import annotations

from pathlib import Path

import pytest

from quantumsynth import cli


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """No config file and no config environment variables."""
    monkeypatch.chdir(tmp_path)
    for name in ("PORT", "SERVER_HOST", "SERVER_PORT", "LOG_LEVEL", "QUANTUM_DEFAULT_MODE",
                 "QUANTUM_MAX_JOBS", "SECURITY_ENABLE_AUTH", "SECURITY_ALLOWED_ORIGINS",
                 "SERVER_SHUTDOWN_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)


def test_no_command_prints_welcome(capsys: pytest.CaptureFixture) -> None:
    assert cli.main([]) == 0
    assert "Welcome to QuantumSynth" in capsys.readouterr().out


def test_command_line_overrides() -> None:
    args = cli.build_parser().parse_args(["--log", "debug", "serve", "--host", "127.0.0.1",
                                          "--port", "9999"])
    settings = cli.load_settings(args)
    assert settings.log.level == "debug"
    assert settings.server.host == "127.0.0.1"
    assert settings.server.port == 9999


def test_serve_runs_uvicorn(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = {}

    def fake_run(app, **kwargs):
        calls["app"] = app
        calls.update(kwargs)

    monkeypatch.setattr(cli.uvicorn, "run", fake_run)
    assert cli.main(["serve", "--port", "8123"]) == 0
    assert calls["port"] == 8123
    assert calls["host"] == "0.0.0.0"
    assert calls["timeout_graceful_shutdown"] == 10
    assert calls["app"].state.settings.server.port == 8123


def test_invalid_config_exits_with_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("QUANTUM_MAX_JOBS", "lots")
    monkeypatch.setattr(cli.uvicorn, "run", lambda *a, **kw: pytest.fail("server started"))
    assert cli.main(["serve"]) == 2
