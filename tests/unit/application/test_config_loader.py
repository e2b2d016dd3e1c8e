from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from comterm.application.config_loader import load_settings, parse_config_lines
from comterm.settings import TerminalSettings


def test_missing_file_returns_defaults(tmp_path: Path) -> None:
    cfg = load_settings(str(tmp_path / "absent.cfg"), env={})
    assert isinstance(cfg, TerminalSettings)
    assert cfg.port is None
    assert cfg.baudrate == 9600
    assert cfg.read_timeout == pytest.approx(0.010)
    assert cfg.chunk_size == 1000
    assert cfg.buffer_capacity == 1000
    assert cfg.line_ending == "none"
    assert cfg.eol == ""


def test_load_settings_from_file(tmp_path: Path) -> None:
    cfg_path = tmp_path / "comterm.cfg"
    cfg_path.write_text(
        "# bench setup\n"
        "[port]=/dev/ttyUSB0\n"
        "[baudrate]=115200      // fast link\n"
        "[baudrates]=9600,115200,230400\n"
        "[buffersize]=4096\n"
        "[lineending]=CRLF\n"
        "[logpath]=log\n"
        "[unknown]=ignored\n"
        "not a pair\n",
        encoding="utf-8",
    )

    cfg = load_settings(str(cfg_path), env={})

    assert cfg.port == "/dev/ttyUSB0"
    assert cfg.baudrate == 115200
    assert cfg.baud_rates == [9600, 115200, 230400]
    assert cfg.buffer_capacity == 4096
    assert cfg.line_ending == "crlf"
    assert cfg.eol == "\r\n"
    # relative log path resolved against the cfg directory
    assert cfg.logdir == str(tmp_path / "log")


def test_env_overrides_file(tmp_path: Path) -> None:
    cfg_path = tmp_path / "comterm.cfg"
    cfg_path.write_text("[port]=/dev/ttyUSB0\n[baudrate]=115200\n", encoding="utf-8")

    cfg = load_settings(
        str(cfg_path),
        env={"COMTERM_BAUDRATE": "38400", "COMTERM_DEBUG": "yes", "OTHER": "x"},
    )

    assert cfg.port == "/dev/ttyUSB0"
    assert cfg.baudrate == 38400
    assert cfg.debug is True


def test_invalid_baud_rate_is_rejected(tmp_path: Path) -> None:
    cfg_path = tmp_path / "comterm.cfg"
    cfg_path.write_text("[baudrate]=0\n", encoding="utf-8")
    with pytest.raises(ValidationError):
        load_settings(str(cfg_path), env={})


def test_parse_config_lines_skips_comments_and_blanks() -> None:
    values = parse_config_lines(
        [
            "",
            "// comment",
            "# comment",
            "[ComPort] = COM4",
            "[debug]=0",
            "[readtimeout]=0.05",
        ]
    )
    assert values == {"port": "COM4", "debug": False, "read_timeout": "0.05"}


def test_session_config_from_settings() -> None:
    settings = TerminalSettings(port="loop://", baudrate=19200, read_timeout=0.02)
    config = settings.session_config()
    assert config.port == "loop://"
    assert config.baudrate == 19200
    assert config.read_timeout == pytest.approx(0.02)

    other = settings.session_config(port="COM9", baudrate=1200)
    assert (other.port, other.baudrate) == ("COM9", 1200)


def test_explicit_env_ignores_process_environment(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("COMTERM_PORT", "/dev/ttyREAL")
    monkeypatch.setenv("COMTERM_BAUDRATE", "38400")

    cfg = load_settings(str(tmp_path / "absent.cfg"), env={})

    assert (cfg.port, cfg.baudrate) == (None, 9600)


def test_dotenv_overrides_file(tmp_path: Path, monkeypatch) -> None:
    for name in ("COMTERM_BAUDRATE", "COMTERM_PORT"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text("COMTERM_BAUDRATE=38400\n", encoding="utf-8")
    cfg_path = tmp_path / "comterm.cfg"
    cfg_path.write_text("[baudrate]=115200\n[port]=COM5\n", encoding="utf-8")

    cfg = load_settings(str(cfg_path))

    assert cfg.baudrate == 38400
    assert cfg.port == "COM5"


def test_process_environment_overrides_dotenv(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.delenv("COMTERM_LINE_ENDING", raising=False)
    monkeypatch.setenv("COMTERM_BAUDRATE", "57600")
    env_file = tmp_path / "bench.env"
    env_file.write_text("COMTERM_BAUDRATE=38400\nCOMTERM_LINE_ENDING=lf\n", encoding="utf-8")

    cfg = load_settings(str(tmp_path / "absent.cfg"), env_file=str(env_file))

    assert cfg.baudrate == 57600
    assert cfg.line_ending == "lf"
