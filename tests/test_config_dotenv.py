from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner

from lib_log_console import cli as cli_module
from lib_log_console import config as log_config


@pytest.fixture(autouse=True)
def _reset_dotenv_state() -> Iterator[None]:
    """Reset shared dotenv state around each test."""

    log_config._reset_dotenv_state_for_testing()
    yield
    log_config._reset_dotenv_state_for_testing()


def test_enable_dotenv_populates_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Loading the nearest .env injects values found in parent directories."""

    nested = tmp_path / "nested"
    nested.mkdir()
    env_file = tmp_path / ".env"
    env_file.write_text("LOG_CONSOLE_TEMPLATE={Message:l}\n")
    monkeypatch.chdir(nested)

    loaded = log_config.enable_dotenv()

    assert loaded == env_file.resolve()
    assert os.environ["LOG_CONSOLE_TEMPLATE"] == "{Message:l}"

    os.environ.pop("LOG_CONSOLE_TEMPLATE", None)


def test_enable_dotenv_respects_existing_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Existing environment variables keep precedence over .env entries."""

    (tmp_path / ".env").write_text("LOG_NO_COLOR=1\n")
    monkeypatch.setenv("LOG_NO_COLOR", "0")

    result = log_config.enable_dotenv(search_from=tmp_path)

    assert result is not None
    assert os.environ["LOG_NO_COLOR"] == "0"


def test_enable_dotenv_loads_only_once(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    first = tmp_path / "first"
    second = tmp_path / "second"
    first.mkdir()
    second.mkdir()
    (first / ".env").write_text("LOG_FORCE_COLOR=1\n")
    (second / ".env").write_text("LOG_FORCE_COLOR=0\n")

    assert log_config.enable_dotenv(search_from=first) == (first / ".env").resolve()
    assert log_config.enable_dotenv(search_from=second) == (first / ".env").resolve()
    assert os.environ["LOG_FORCE_COLOR"] == "1"

    os.environ.pop("LOG_FORCE_COLOR", None)


def test_enable_dotenv_without_file_returns_none(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(log_config, "_find_dotenv", lambda start: None)

    assert log_config.enable_dotenv(search_from=tmp_path) is None


@pytest.mark.parametrize(
    "explicit, env_value, expected",
    [
        (True, None, True),
        (False, "1", False),
        (None, "yes", True),
        (None, "0", False),
        (None, None, False),
    ],
)
def test_should_use_dotenv(explicit: bool | None, env_value: str | None, expected: bool) -> None:
    assert log_config.should_use_dotenv(explicit=explicit, env_value=env_value) is expected


def test_build_sink_settings_reads_colour_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_FORCE_COLOR", "yes")
    monkeypatch.setenv("LOG_NO_COLOR", "off")

    settings = log_config.build_sink_settings(no_color=True)

    assert settings.force_color is True
    assert settings.no_color is False


def test_build_sink_settings_blank_env_keeps_arguments(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_NO_COLOR", "  ")

    assert log_config.build_sink_settings(no_color=True).no_color is True


def test_build_sink_settings_env_template_only_without_mode(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_CONSOLE_TEMPLATE", "{Message}")

    assert log_config.build_sink_settings().default_template == "{Message}"
    assert log_config.build_sink_settings(output_template="{Level}").default_template is None
    assert log_config.build_sink_settings(template_selector=lambda e: "x").default_template is None
    assert log_config.build_sink_settings(formatter=object()).default_template is None


def test_cli_dotenv_toggle_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    """CLI flag wins over environment toggle when deciding whether to load .env."""

    runner = CliRunner()
    calls: list[tuple[tuple[object, ...], dict[str, object]]] = []

    def record_enable(*args: object, **kwargs: object) -> None:
        calls.append((args, kwargs))

    monkeypatch.setattr(cli_module, "enable_dotenv", record_enable)

    result = runner.invoke(cli_module.cli, ["--use-dotenv", "info"])
    assert result.exit_code == 0
    assert len(calls) == 1

    calls.clear()
    result = runner.invoke(cli_module.cli, ["info"], env={log_config.DOTENV_ENV_VAR: "1"})
    assert result.exit_code == 0
    assert len(calls) == 1

    calls.clear()
    result = runner.invoke(cli_module.cli, ["--no-use-dotenv", "info"], env={log_config.DOTENV_ENV_VAR: "1"})
    assert result.exit_code == 0
    assert calls == []

    result = runner.invoke(cli_module.cli, ["info"])
    assert result.exit_code == 0
    assert calls == []


def test_enable_dotenv_without_search_from_delegates_to_python_dotenv(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """The working-directory search goes through python-dotenv's own lookup."""

    env_file = tmp_path / ".env"
    env_file.write_text("LOG_NO_COLOR=1\n")
    calls: list[dict[str, object]] = []

    def fake_find_dotenv(**kwargs: object) -> str:
        calls.append(kwargs)
        return str(env_file)

    def refuse_manual_walk(start: Path) -> Path | None:
        raise AssertionError("manual walk used without search_from")

    monkeypatch.setattr(log_config, "find_dotenv", fake_find_dotenv)
    monkeypatch.setattr(log_config, "_find_dotenv", refuse_manual_walk)

    assert log_config.enable_dotenv() == env_file.resolve()
    assert calls == [{"usecwd": True}]
    assert os.environ["LOG_NO_COLOR"] == "1"

    os.environ.pop("LOG_NO_COLOR", None)


def test_enable_dotenv_without_search_from_and_no_file(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(log_config, "find_dotenv", lambda **kwargs: "")

    assert log_config.enable_dotenv() is None
