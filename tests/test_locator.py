import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from wasm_func_runner import RuntimeLocator, RuntimeNotFoundError

posix_only = pytest.mark.skipif(sys.platform.startswith("win"), reason="uses POSIX exec bits")


def _make_exe(directory: Path, name: str, mode: int = 0o755) -> Path:
    path = directory / name
    path.write_text("#!/bin/sh\nexit 0\n", encoding="utf-8")
    path.chmod(mode)
    return path


@posix_only
def test_first_candidate_on_path_wins(tmp_path: Path) -> None:
    wasmtime = _make_exe(tmp_path, "wasmtime")
    _make_exe(tmp_path, "wasmer")

    locator = RuntimeLocator(candidates=["wasmtime", "wasmer"], search_path=str(tmp_path))
    runtime = locator.locate().unwrap()

    assert runtime.path == str(wasmtime)


@posix_only
def test_non_executable_candidate_is_skipped(tmp_path: Path) -> None:
    _make_exe(tmp_path, "wasmtime", mode=0o644)
    wasmer = _make_exe(tmp_path, "wasmer")

    locator = RuntimeLocator(candidates=["wasmtime", "wasmer"], search_path=str(tmp_path))

    assert locator.locate().unwrap().path == str(wasmer)


def test_not_found_names_every_candidate(tmp_path: Path) -> None:
    locator = RuntimeLocator(
        candidates=["wasmtime", "wasmer"],
        search_path=str(tmp_path),
        platform="linux",
    )

    result = locator.locate()

    assert not result.ok
    assert isinstance(result.error, RuntimeNotFoundError)
    assert result.error.candidates == ("wasmtime", "wasmer")
    assert "wasmtime" in str(result.error) and "wasmer" in str(result.error)


def test_windows_falls_back_to_install_paths(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    empty = tmp_path / "empty"
    empty.mkdir()
    installed = tmp_path / "wasmtime.exe"
    installed.write_bytes(b"MZ")
    monkeypatch.setenv("WFR_TEST_HOME", str(tmp_path))

    locator = RuntimeLocator(
        candidates=["wasmtime"],
        windows_install_paths=[str(tmp_path / "missing.exe"), "${WFR_TEST_HOME}/wasmtime.exe"],
        search_path=str(empty),
        platform="win32",
    )

    assert locator.locate().unwrap().path == str(installed)


def test_install_paths_ignored_off_windows(tmp_path: Path) -> None:
    empty = tmp_path / "empty"
    empty.mkdir()
    installed = tmp_path / "wasmtime.exe"
    installed.write_bytes(b"MZ")

    locator = RuntimeLocator(
        candidates=["wasmtime"],
        windows_install_paths=[str(installed)],
        search_path=str(empty),
        platform="darwin",
    )
    result = locator.locate()

    assert isinstance(result.error, RuntimeNotFoundError)
    assert str(installed) not in result.error.candidates


@posix_only
def test_success_is_memoized(tmp_path: Path) -> None:
    exe = _make_exe(tmp_path, "wasmtime")
    locator = RuntimeLocator(candidates=["wasmtime"], search_path=str(tmp_path))

    first = locator.locate().unwrap()
    exe.unlink()
    second = locator.locate().unwrap()

    assert first is second


@posix_only
def test_failure_is_not_memoized(tmp_path: Path) -> None:
    locator = RuntimeLocator(candidates=["wasmtime"], search_path=str(tmp_path), platform="linux")

    assert not locator.locate().ok
    _make_exe(tmp_path, "wasmtime")
    assert locator.locate().ok


@posix_only
def test_concurrent_first_calls_converge(tmp_path: Path) -> None:
    _make_exe(tmp_path, "wasmtime")
    locator = RuntimeLocator(candidates=["wasmtime"], search_path=str(tmp_path))

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _: locator.locate().unwrap(), range(32)))

    assert len({r.path for r in results}) == 1
    assert locator.locate().unwrap() == results[0]


def test_requires_a_candidate() -> None:
    with pytest.raises(ValueError, match="candidate"):
        RuntimeLocator(candidates=["  "])
