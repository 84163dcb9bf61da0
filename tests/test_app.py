from __future__ import annotations

import pytest

from rawedit.adapters.terminal import app
from rawedit.config import EditorConfig
from rawedit.runtime import telemetry


def test_parse_args_defaults() -> None:
    args = app._parse_args([])

    assert args.path is None
    assert args.strategy is None
    assert args.log_preset is None


def test_parse_args_path_and_strategy() -> None:
    args = app._parse_args(["notes.txt", "--strategy", "clear"])

    assert args.path == "notes.txt"
    assert args.strategy == "clear"


def test_parse_args_rejects_unknown_strategy() -> None:
    with pytest.raises(SystemExit):
        app._parse_args(["--strategy", "sparkle"])


def test_build_buffer_without_path_is_unbound() -> None:
    buffer = app.build_buffer(None, EditorConfig())

    assert list(buffer.lines) == [""]
    assert buffer.path is None


def test_build_buffer_loads_existing_file(tmp_path) -> None:
    path = tmp_path / "in.txt"
    path.write_bytes(b"x\ny\n")

    buffer = app.build_buffer(str(path), EditorConfig(tab_width=8))

    assert list(buffer.lines) == ["x", "y"]
    assert buffer.config.tab_width == 8


def test_main_reports_unreadable_path(tmp_path, capsys) -> None:
    status = app.main([str(tmp_path)])

    assert status == 1
    assert "rawedit:" in capsys.readouterr().err


def test_main_rejects_bad_environment(monkeypatch, capsys) -> None:
    monkeypatch.setenv("RAWEDIT_TAB_WIDTH", "0")

    assert app.main([]) == 2
    assert "tab_width" in capsys.readouterr().err


def test_config_from_env(monkeypatch) -> None:
    monkeypatch.setenv("RAWEDIT_TAB_WIDTH", "2")
    monkeypatch.setenv("RAWEDIT_PAGE_SIZE", "not-a-number")
    monkeypatch.setenv("RAWEDIT_RENDER_STRATEGY", "CLEAR")

    config = EditorConfig.from_env()

    assert config.tab_width == 2
    assert config.page_size == 10
    assert config.render_strategy == "clear"


def test_config_overrides_keep_other_fields() -> None:
    config = EditorConfig(tab_width=3).with_overrides(render_strategy="clear")

    assert config.tab_width == 3
    assert config.render_strategy == "clear"
    assert EditorConfig().with_overrides() == EditorConfig()


def test_config_rejects_unknown_strategy() -> None:
    with pytest.raises(ValueError):
        EditorConfig(render_strategy="fancy")


def test_telemetry_configure_rejects_config_and_preset() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="production")


def test_telemetry_rejects_unknown_preset() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="chatty")


def test_preset_settings_write_to_preset_file(monkeypatch) -> None:
    monkeypatch.delenv("RAWEDIT_LOG_FILE", raising=False)

    settings = telemetry.preset_settings("Production")

    assert settings.level == "INFO"
    assert settings.log_file == "rawedit.log"
    assert settings.console is False
    assert settings.buffer_size == 2048


def test_env_settings_keep_console_quiet_by_default(monkeypatch) -> None:
    for name in ("CONSOLE_LOG", "LOG_FILE", "LOG_LEVEL", "LOG_BUFFERED"):
        monkeypatch.delenv(f"RAWEDIT_{name}", raising=False)

    settings = telemetry.env_settings()

    assert settings.console is False
    assert settings.log_file is None
    assert settings.level == "INFO"
    assert settings.buffer_size is None


def test_env_settings_honour_overrides(monkeypatch) -> None:
    monkeypatch.setenv("RAWEDIT_CONSOLE_LOG", "yes")
    monkeypatch.setenv("RAWEDIT_LOG_LEVEL", "debug")
    monkeypatch.setenv("RAWEDIT_LOG_FILE", "trace.log")

    settings = telemetry.env_settings()

    assert settings.console is True
    assert settings.level == "DEBUG"
    assert settings.log_file == "trace.log"
