import logging

from .config import RunnerConfig
from .errors import (
    ExecutionError,
    ExecutionErrorKind,
    ExecutionTimeoutError,
    InvalidArgumentError,
    InvalidFunctionNameError,
    LaunchError,
    MalformedResultError,
    NoResultError,
    RuntimeNotFoundError,
    WasmModuleNotFoundError,
    WasmModuleNotReadableError,
    WasmRunnerError,
)
from .execution.locator import RuntimeLocator
from .execution.process import ProcessExecutor
from .loader import WasmLoader, run_wasm_function
from .result import Result

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ExecutionError",
    "ExecutionErrorKind",
    "ExecutionTimeoutError",
    "InvalidArgumentError",
    "InvalidFunctionNameError",
    "LaunchError",
    "MalformedResultError",
    "NoResultError",
    "ProcessExecutor",
    "Result",
    "RunnerConfig",
    "RuntimeLocator",
    "RuntimeNotFoundError",
    "WasmLoader",
    "WasmModuleNotFoundError",
    "WasmModuleNotReadableError",
    "WasmRunnerError",
    "run_wasm_function",
]
