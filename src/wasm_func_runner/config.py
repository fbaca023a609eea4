from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .execution.locator import DEFAULT_RUNTIME_CANDIDATES, DEFAULT_WINDOWS_INSTALL_PATHS
from .execution.process import DEFAULT_TIMEOUT_SECONDS


def _default_config_path() -> Path:
    """Return bundled default config TOML path.

    Example:
        ```python
        path = _default_config_path()
        ```
    """
    return Path(__file__).with_name("default_config.toml")


def _read_config_toml(path: Path) -> dict[str, Any]:
    """Read config TOML and return the `[runner]` table (or top-level keys).

    Example:
        ```python
        raw = _read_config_toml(Path("/tmp/wfr.toml"))
        ```
    """
    if not path.exists():
        return {
            "timeout_seconds": DEFAULT_TIMEOUT_SECONDS,
            "runtime_candidates": list(DEFAULT_RUNTIME_CANDIDATES),
            "windows_install_paths": list(DEFAULT_WINDOWS_INSTALL_PATHS),
        }
    raw = tomllib.loads(path.read_text(encoding="utf-8"))
    runner_obj = raw.get("runner", raw)
    if not isinstance(runner_obj, dict):
        raise ValueError("Runner config must be a TOML table")
    return runner_obj


def _list_of_str(value: Any, field_name: str) -> list[str]:
    """Validate and normalize a list-of-strings config field.

    Example:
        ```python
        names = _list_of_str(["wasmtime"], "runtime_candidates")
        ```
    """
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"'{field_name}' must be a list of strings")
    out: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ValueError(f"'{field_name}' must contain only strings")
        out.append(item)
    return out


_DEFAULT_CONFIG_RAW = _read_config_toml(_default_config_path())
DEFAULT_CONFIG_TIMEOUT_SECONDS = float(
    _DEFAULT_CONFIG_RAW.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS)
)
DEFAULT_CONFIG_CANDIDATES = _list_of_str(
    _DEFAULT_CONFIG_RAW.get("runtime_candidates", list(DEFAULT_RUNTIME_CANDIDATES)),
    "runtime_candidates",
)
DEFAULT_CONFIG_WINDOWS_PATHS = _list_of_str(
    _DEFAULT_CONFIG_RAW.get("windows_install_paths", list(DEFAULT_WINDOWS_INSTALL_PATHS)),
    "windows_install_paths",
)


@dataclass(slots=True)
class RunnerConfig:
    """Engine discovery and timeout settings for a `WasmLoader`.

    Example:
        ```python
        config = RunnerConfig(timeout_seconds=2, runtime_candidates=["wasmtime"])
        ```
    """

    timeout_seconds: float = DEFAULT_CONFIG_TIMEOUT_SECONDS
    runtime_candidates: list[str] = field(default_factory=lambda: DEFAULT_CONFIG_CANDIDATES.copy())
    windows_install_paths: list[str] = field(
        default_factory=lambda: DEFAULT_CONFIG_WINDOWS_PATHS.copy()
    )
    config_path: str | None = None

    def __post_init__(self) -> None:
        """Validate timeout and candidates after dataclass initialization.

        Example:
            ```python
            RunnerConfig(timeout_seconds=1)
            ```
        """
        if isinstance(self.timeout_seconds, bool) or not self.timeout_seconds > 0:
            raise ValueError("timeout_seconds must be a positive number")
        if not any(c.strip() for c in self.runtime_candidates):
            raise ValueError("runtime_candidates must name at least one engine")

    @classmethod
    def from_file(cls, config_path: str) -> "RunnerConfig":
        """Create a config instance from a TOML file.

        Example:
            ```python
            config = RunnerConfig.from_file("/tmp/wfr.toml")
            ```
        """
        path = Path(config_path)
        if not path.exists():
            raise ValueError(f"Config file not found: {config_path}")
        raw = _read_config_toml(path)
        return cls(
            timeout_seconds=float(raw.get("timeout_seconds", DEFAULT_CONFIG_TIMEOUT_SECONDS)),
            runtime_candidates=_list_of_str(
                raw.get("runtime_candidates", DEFAULT_CONFIG_CANDIDATES), "runtime_candidates"
            ),
            windows_install_paths=_list_of_str(
                raw.get("windows_install_paths", DEFAULT_CONFIG_WINDOWS_PATHS),
                "windows_install_paths",
            ),
            config_path=config_path,
        )
