from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Iterable

from ..errors import (
    InvalidArgumentError,
    InvalidFunctionNameError,
    WasmModuleNotFoundError,
    WasmModuleNotReadableError,
)
from ..result import Result

INTEGER_LITERAL_PATTERN = re.compile(r"-?[0-9]+")


def is_integer_literal(text: str) -> bool:
    """Return True when text is exactly `-?[0-9]+` (ASCII digits only).

    Example:
        ```python
        assert is_integer_literal("-12") and not is_integer_literal("1.5")
        ```
    """
    return INTEGER_LITERAL_PATTERN.fullmatch(text) is not None


def _to_literal(arg: object) -> str:
    """Render one argument as text, leaving validation to the caller.

    Example:
        ```python
        _to_literal(7)  # "7"
        ```
    """
    if isinstance(arg, int) and not isinstance(arg, bool):
        return str(arg)
    if isinstance(arg, str):
        return arg
    return repr(arg)


@dataclass(frozen=True, slots=True)
class RuntimeDescriptor:
    """Absolute path of a discovered WebAssembly engine executable.

    Example:
        ```python
        runtime = RuntimeDescriptor(path="/usr/local/bin/wasmtime")
        ```
    """

    path: str


@dataclass(frozen=True, slots=True)
class InvocationRequest:
    """A validated call of one exported function with integer arguments.

    Build instances with `InvocationRequest.create`, which checks the module
    path and every argument before anything is spawned.

    Example:
        ```python
        req = InvocationRequest.create("add.wasm", "add", ["1", "2"]).unwrap()
        ```
    """

    module_path: str
    function_name: str
    args: tuple[str, ...] = ()

    @classmethod
    def create(
        cls,
        module_path: str | os.PathLike[str],
        function_name: str,
        args: Iterable[str | int] = (),
    ) -> Result["InvocationRequest"]:
        """Validate inputs eagerly and return a request or the first failure.

        Example:
            ```python
            res = InvocationRequest.create("/tmp/add.wasm", "add", [1, "-2"])
            ```
        """
        path = os.fspath(module_path)
        if not os.path.exists(path):
            return Result.failure(WasmModuleNotFoundError(path))
        if not os.path.isfile(path) or not os.access(path, os.R_OK):
            return Result.failure(WasmModuleNotReadableError(path))
        if not isinstance(function_name, str) or not function_name.strip():
            return Result.failure(InvalidFunctionNameError(str(function_name)))
        if isinstance(args, (str, bytes)):
            return Result.failure(
                InvalidArgumentError(args if isinstance(args, str) else repr(args))
            )
        literals: list[str] = []
        for arg in args:
            literal = _to_literal(arg)
            if not is_integer_literal(literal):
                return Result.failure(InvalidArgumentError(literal))
            literals.append(literal)
        return Result.success(
            cls(module_path=path, function_name=function_name, args=tuple(literals))
        )


@dataclass(frozen=True, slots=True)
class ExecutionOutcome:
    """Raw streams and exit status of one finished engine process.

    Example:
        ```python
        out = ExecutionOutcome(stdout="42\\n", stderr="", returncode=0)
        ```
    """

    stdout: str
    stderr: str
    returncode: int
