from __future__ import annotations

import asyncio
import logging
import os
from typing import Iterable

from .config import RunnerConfig
from .execution.classify import classify_exit
from .execution.command import build_command
from .execution.locator import RuntimeLocator
from .execution.parse import parse_result
from .execution.process import ProcessExecutor
from .execution.types import InvocationRequest, RuntimeDescriptor
from .result import Result

logger = logging.getLogger(__name__)


def _resolve_config(config: RunnerConfig | None, config_file: str | None) -> RunnerConfig:
    """Resolve the effective config object for a loader.

    Example:
        ```python
        config = _resolve_config(None, "/tmp/wfr.toml")
        ```
    """
    if config is not None and config_file is not None:
        raise ValueError("Provide either 'config' or 'config_file', not both")
    if config is None and config_file is not None:
        return RunnerConfig.from_file(config_file)
    if config is None:
        return RunnerConfig()
    if config.config_path is not None:
        return RunnerConfig.from_file(config.config_path)
    return config


class WasmLoader:
    """Call exported WebAssembly functions through an installed engine CLI.

    The discovered engine is cached on the loader, so reuse one instance
    for many calls.

    Example:
        ```python
        loader = WasmLoader()
        result = await loader.execute_wasm_function("add.wasm", "add", ["2", "3"])
        ```
    """

    def __init__(
        self,
        *,
        config: RunnerConfig | None = None,
        config_file: str | None = None,
        locator: RuntimeLocator | None = None,
        executor: ProcessExecutor | None = None,
    ) -> None:
        """Build a loader from config, optionally injecting locator/executor.

        Example:
            ```python
            loader = WasmLoader(config=RunnerConfig(timeout_seconds=2))
            ```
        """
        self._config = _resolve_config(config, config_file)
        self._locator = locator or RuntimeLocator(
            candidates=self._config.runtime_candidates,
            windows_install_paths=self._config.windows_install_paths,
        )
        self._executor = executor or ProcessExecutor()

    @property
    def config(self) -> RunnerConfig:
        """Return the effective config.

        Example:
            ```python
            loader.config.timeout_seconds
            ```
        """
        return self._config

    def locate_runtime(self) -> Result[RuntimeDescriptor]:
        """Return the cached engine, discovering it on first use.

        Example:
            ```python
            path = WasmLoader().locate_runtime().unwrap().path
            ```
        """
        return self._locator.locate()

    async def execute_wasm_function(
        self,
        module_path: str | os.PathLike[str],
        function_name: str,
        args: Iterable[str | int] = (),
        *,
        timeout_seconds: float | None = None,
    ) -> Result[str]:
        """Run one exported function and return its integer result as text.

        Inputs are validated before the engine is looked up or spawned.
        Every failure comes back as a `Result` carrying one error; nothing
        is retried.

        Example:
            ```python
            res = await loader.execute_wasm_function("fib.wasm", "fib", [30], timeout_seconds=2)
            value = res.unwrap()
            ```
        """
        timeout = self._config.timeout_seconds if timeout_seconds is None else timeout_seconds
        if isinstance(timeout, bool) or not timeout > 0:
            raise ValueError("timeout_seconds must be a positive number")

        request_res = InvocationRequest.create(module_path, function_name, args)
        if request_res.error is not None:
            logger.debug("Rejected invocation: %s", request_res.error)
            return Result.failure(request_res.error)
        request = request_res.unwrap()

        runtime_res = await asyncio.to_thread(self._locator.locate)
        if runtime_res.error is not None:
            return Result.failure(runtime_res.error)

        argv_res = build_command(runtime_res.unwrap(), request)
        if argv_res.error is not None:
            return Result.failure(argv_res.error)

        outcome_res = await self._executor.execute(argv_res.unwrap(), timeout)
        if outcome_res.error is not None:
            return Result.failure(outcome_res.error)
        outcome = outcome_res.unwrap()

        error = classify_exit(outcome.returncode, outcome.stderr)
        if error is not None:
            logger.debug(
                "%s(%s) in %s failed: %s",
                request.function_name,
                ", ".join(request.args),
                request.module_path,
                error,
            )
            return Result.failure(error)
        return parse_result(outcome.stdout)


def run_wasm_function(
    module_path: str | os.PathLike[str],
    function_name: str,
    args: Iterable[str | int] = (),
    *,
    loader: WasmLoader | None = None,
    timeout_seconds: float | None = None,
) -> Result[str]:
    """Blocking wrapper around `WasmLoader.execute_wasm_function`.

    Runs on a fresh event loop, so call it only from code that is not
    already inside one.

    Example:
        ```python
        from wasm_func_runner import run_wasm_function
        result = run_wasm_function("add.wasm", "add", ["2", "3"])
        ```
    """
    active = loader or WasmLoader()
    return asyncio.run(
        active.execute_wasm_function(
            module_path, function_name, args, timeout_seconds=timeout_seconds
        )
    )
