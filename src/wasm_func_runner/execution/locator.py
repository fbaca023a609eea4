from __future__ import annotations

import logging
import os
import shutil
import sys
from typing import Sequence

from ..errors import RuntimeNotFoundError
from ..result import Result
from .types import RuntimeDescriptor

logger = logging.getLogger(__name__)

DEFAULT_RUNTIME_CANDIDATES = ("wasmtime", "wasmer")
DEFAULT_WINDOWS_INSTALL_PATHS = (
    r"%USERPROFILE%\.wasmtime\bin\wasmtime.exe",
    r"%LOCALAPPDATA%\Programs\wasmtime\bin\wasmtime.exe",
    r"C:\Program Files\Wasmtime\bin\wasmtime.exe",
    r"%USERPROFILE%\.wasmer\bin\wasmer.exe",
)


class RuntimeLocator:
    """Find an installed WebAssembly engine and remember it.

    Candidates are probed on PATH in order and the first executable match
    wins. On Windows a fixed list of install locations is checked next.
    A successful lookup is cached for the life of the instance; concurrent
    first calls may both probe, which only repeats read-only work.

    Example:
        ```python
        runtime = RuntimeLocator().locate().unwrap()
        ```
    """

    def __init__(
        self,
        *,
        candidates: Sequence[str] = DEFAULT_RUNTIME_CANDIDATES,
        windows_install_paths: Sequence[str] = DEFAULT_WINDOWS_INSTALL_PATHS,
        search_path: str | None = None,
        platform: str | None = None,
    ) -> None:
        """Configure probe order and the optional PATH override.

        Example:
            ```python
            locator = RuntimeLocator(candidates=["wasmtime"], search_path="/opt/bin")
            ```
        """
        cleaned = [c.strip() for c in candidates if c.strip()]
        if not cleaned:
            raise ValueError("RuntimeLocator requires at least one runtime candidate")
        self._candidates = tuple(cleaned)
        self._windows_install_paths = tuple(windows_install_paths)
        self._search_path = search_path
        self._platform = platform or sys.platform
        self._cached: RuntimeDescriptor | None = None

    def locate(self) -> Result[RuntimeDescriptor]:
        """Return the cached engine, probing for it on first use.

        Example:
            ```python
            res = locator.locate()
            ```
        """
        cached = self._cached
        if cached is not None:
            return Result.success(cached)
        found = self._probe()
        if found is None:
            tried = list(self._candidates)
            if self._is_windows():
                tried.extend(self._windows_install_paths)
            logger.debug("No WebAssembly runtime found after probing %s", tried)
            return Result.failure(RuntimeNotFoundError(tried))
        logger.info("Using WebAssembly runtime %s", found.path)
        self._cached = found
        return Result.success(found)

    def _probe(self) -> RuntimeDescriptor | None:
        """Run PATH lookups, then Windows install paths, stopping at first hit.

        Example:
            ```python
            runtime = locator._probe()
            ```
        """
        for name in self._candidates:
            resolved = shutil.which(name, path=self._search_path)
            logger.debug("Probed runtime candidate %s -> %s", name, resolved)
            if resolved is not None:
                return RuntimeDescriptor(path=os.path.abspath(resolved))
        if not self._is_windows():
            return None
        for raw in self._windows_install_paths:
            expanded = os.path.expandvars(raw)
            logger.debug("Probed install path %s", expanded)
            if os.path.isfile(expanded):
                return RuntimeDescriptor(path=os.path.abspath(expanded))
        return None

    def _is_windows(self) -> bool:
        """Return True when the target platform is Windows.

        Example:
            ```python
            RuntimeLocator(platform="win32")._is_windows()
            ```
        """
        return self._platform.startswith("win")
