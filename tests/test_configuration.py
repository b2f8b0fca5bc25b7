from __future__ import annotations

import logging
from pathlib import Path

import pytest

from stubwork.configuration import (
    StubworkSettings,
    build_settings,
    load_settings,
    settings_from_env,
)
from stubwork.engine import ResolutionEngine
from stubwork.exceptions import StubworkConfigError


def test_defaults() -> None:
    settings = build_settings(None)
    assert settings == StubworkSettings()
    assert settings.resolution_order == "most_recent"
    assert settings.record_calls is True
    assert settings.log_file is None


def test_build_settings_resolves_paths(tmp_path: Path) -> None:
    config = {
        "stubwork": {
            "resolution_order": "FIRST_REGISTERED",
            "record_calls": "no",
            "log_resolutions": True,
            "report_candidates": 0,
            "log_file": "logs/stubwork.log",
            "max_repr_length": "40",
        }
    }
    settings = build_settings(config, config_root=tmp_path)
    assert settings.resolution_order == "first_registered"
    assert settings.record_calls is False
    assert settings.log_resolutions is True
    assert settings.report_candidates is False
    assert settings.log_file == (tmp_path / "logs/stubwork.log").resolve()
    assert settings.max_repr_length == 40


@pytest.mark.parametrize(
    "config",
    [
        {"resolution_order": "random"},
        {"record_calls": "maybe"},
        {"max_repr_length": "long"},
        {"max_repr_length": 2},
    ],
)
def test_invalid_values_raise(config) -> None:
    with pytest.raises(StubworkConfigError):
        build_settings(config)


def test_load_settings_from_yaml(tmp_path: Path) -> None:
    config_path = tmp_path / "stubwork.yaml"
    config_path.write_text(
        "stubwork:\n"
        "  resolution_order: first_registered\n"
        "  log_file: out/stubs.log\n"
    )
    settings = load_settings(config_path)
    assert settings.resolution_order == "first_registered"
    assert settings.log_file == (tmp_path / "out/stubs.log").resolve()


def test_load_settings_errors(tmp_path: Path) -> None:
    with pytest.raises(StubworkConfigError, match="not found"):
        load_settings(tmp_path / "missing.yaml")
    bad = tmp_path / "bad.yaml"
    bad.write_text("- just\n- a list\n")
    with pytest.raises(StubworkConfigError, match="mapping"):
        load_settings(bad)
    broken = tmp_path / "broken.yaml"
    broken.write_text("stubwork: [unclosed\n")
    with pytest.raises(StubworkConfigError, match="Invalid YAML"):
        load_settings(broken)


def test_settings_from_env_overrides_file(tmp_path: Path) -> None:
    config_path = tmp_path / "stubwork.yaml"
    config_path.write_text("record_calls: false\n")
    env = {
        "STUBWORK_CONFIG": str(config_path),
        "STUBWORK_RESOLUTION_ORDER": "first_registered",
        "STUBWORK_LOG_FILE": str(tmp_path / "env.log"),
    }
    settings = settings_from_env(env)
    assert settings.record_calls is False
    assert settings.resolution_order == "first_registered"
    assert settings.log_file == tmp_path / "env.log"


def test_settings_from_env_without_variables() -> None:
    assert settings_from_env({}) == StubworkSettings()


def test_engine_attaches_file_logger(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "stubwork.log"
    settings = StubworkSettings(log_resolutions=True, log_file=log_file)
    engine = ResolutionEngine(settings=settings)
    engine.stub("fn").and_return(1)
    engine.resolve("fn", [])
    assert log_file.exists()
    engine.close()
    assert "resolve fn()" in log_file.read_text()


def test_closed_engine_stops_writing_to_its_log(tmp_path: Path) -> None:
    logger = logging.getLogger("stubwork")
    baseline = len(logger.handlers)
    first_log = tmp_path / "a.log"
    second_log = tmp_path / "b.log"

    first = ResolutionEngine(
        settings=StubworkSettings(log_resolutions=True, log_file=first_log)
    )
    first.stub("only_first").and_return(1)
    first.resolve("only_first", [])
    first.close()
    assert len(logger.handlers) == baseline

    second = ResolutionEngine(
        settings=StubworkSettings(log_resolutions=True, log_file=second_log)
    )
    second.stub("only_second").and_return(2)
    second.resolve("only_second", [])
    second.close()
    second.close()

    assert "only_first" in first_log.read_text()
    assert "only_second" not in first_log.read_text()
    assert "only_second" in second_log.read_text()
    assert len(logger.handlers) == baseline


def test_engines_sharing_a_log_file_share_one_handler(
    tmp_path: Path,
) -> None:
    logger = logging.getLogger("stubwork")
    baseline = len(logger.handlers)
    settings = StubworkSettings(log_file=tmp_path / "shared.log")
    first = ResolutionEngine(settings=settings)
    second = ResolutionEngine(settings=settings)
    assert len(logger.handlers) == baseline + 1

    first.close()
    assert len(logger.handlers) == baseline + 1
    second.close()
    assert len(logger.handlers) == baseline


def test_settings_from_env_reads_dotenv_in_working_directory(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    for name in (
        "STUBWORK_CONFIG",
        "STUBWORK_RESOLUTION_ORDER",
        "STUBWORK_LOG_FILE",
    ):
        # Registers the variable so values loaded from .env are undone.
        monkeypatch.setenv(name, "unset")
        monkeypatch.delenv(name)
    (tmp_path / ".env").write_text(
        "STUBWORK_RESOLUTION_ORDER=first_registered\n"
    )
    monkeypatch.chdir(tmp_path)

    settings = settings_from_env()
    assert settings.resolution_order == "first_registered"
    assert settings.log_file is None


def test_dotenv_does_not_override_explicit_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.delenv("STUBWORK_CONFIG", raising=False)
    monkeypatch.delenv("STUBWORK_LOG_FILE", raising=False)
    monkeypatch.setenv("STUBWORK_RESOLUTION_ORDER", "most_recent")
    (tmp_path / ".env").write_text(
        "STUBWORK_RESOLUTION_ORDER=first_registered\n"
    )
    monkeypatch.chdir(tmp_path)

    assert settings_from_env().resolution_order == "most_recent"
