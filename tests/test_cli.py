from __future__ import annotations

from pathlib import Path

import pytest

from wfr import cli


def _write_config(tmp_path: Path, engine: Path | str, timeout: float = 5) -> str:
    path = tmp_path / "wfr.toml"
    path.write_text(
        f'[runner]\ntimeout_seconds = {timeout}\nruntime_candidates = ["{engine}"]\n',
        encoding="utf-8",
    )
    return str(path)


def test_call_prints_result(
    tmp_path: Path, fake_engine: Path, wasm_module: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    config = _write_config(tmp_path, fake_engine)

    code = cli.main(["--config", config, "call", str(wasm_module), "add", "2", "3"])

    assert code == 0
    assert capsys.readouterr().out.strip() == "5"


def test_call_accepts_negative_literals(
    tmp_path: Path, fake_engine: Path, wasm_module: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    config = _write_config(tmp_path, fake_engine)

    code = cli.main(["--config", config, "call", str(wasm_module), "add", "-2", "-3"])

    assert code == 0
    assert capsys.readouterr().out.strip() == "-5"


def test_call_reports_trap_with_stderr(
    tmp_path: Path, fake_engine: Path, wasm_module: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    config = _write_config(tmp_path, fake_engine)

    code = cli.main(["--config", config, "call", str(wasm_module), "div", "1", "0"])

    captured = capsys.readouterr()
    assert code == 1
    assert captured.out == ""
    assert "execution_error" in captured.err
    assert "integer divide by zero" in captured.err


def test_call_rejects_bad_literal(
    tmp_path: Path, fake_engine: Path, wasm_module: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    config = _write_config(tmp_path, fake_engine)

    code = cli.main(["--config", config, "call", str(wasm_module), "add", "1.5"])

    assert code == 1
    assert "invalid_argument" in capsys.readouterr().err


def test_locate_prints_engine_path(
    tmp_path: Path, fake_engine: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    config = _write_config(tmp_path, fake_engine)

    code = cli.main(["--config", config, "locate"])

    assert code == 0
    assert capsys.readouterr().out.strip() == str(fake_engine)


def test_locate_reports_missing_engine(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    config = _write_config(tmp_path, tmp_path / "no-such-engine")

    code = cli.main(["--config", config, "locate"])

    assert code == 1
    assert "runtime_not_found" in capsys.readouterr().err


def test_missing_config_file_is_config_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    code = cli.main(["--config", str(tmp_path / "nope.toml"), "locate"])

    assert code == 2
    assert "Config error" in capsys.readouterr().err


def test_non_positive_timeout_is_usage_error(tmp_path: Path, wasm_module: Path) -> None:
    with pytest.raises(SystemExit) as exc:
        cli.main(["call", str(wasm_module), "add", "1", "--timeout-seconds", "0"])

    assert exc.value.code == 2


def test_requires_a_command() -> None:
    with pytest.raises(SystemExit) as exc:
        cli.main([])

    assert exc.value.code == 2
