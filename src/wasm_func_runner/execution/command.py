from __future__ import annotations

from ..errors import InvalidArgumentError
from ..result import Result
from .types import InvocationRequest, RuntimeDescriptor, is_integer_literal


def build_command(runtime: RuntimeDescriptor, request: InvocationRequest) -> Result[list[str]]:
    """Build the engine argv: `<engine> run --invoke <fn> <module> <args...>`.

    Example:
        ```python
        argv = build_command(RuntimeDescriptor("/usr/bin/wasmtime"), req).unwrap()
        ```
    """
    for literal in request.args:
        if not isinstance(literal, str) or not is_integer_literal(literal):
            return Result.failure(InvalidArgumentError(str(literal)))
    return Result.success(
        [
            runtime.path,
            "run",
            "--invoke",
            request.function_name,
            request.module_path,
            *request.args,
        ]
    )
