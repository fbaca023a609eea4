from __future__ import annotations

from enum import Enum
from typing import Sequence


class WasmRunnerError(Exception):
    """Base class for every failure reported by wasm-func-runner.

    Example:
        ```python
        isinstance(NoResultError(""), WasmRunnerError)
        ```
    """

    code = "wasm_runner_error"


class RuntimeNotFoundError(WasmRunnerError):
    """No WebAssembly engine was found on PATH or in known install paths.

    Example:
        ```python
        err = RuntimeNotFoundError(["wasmtime", "wasmer"])
        ```
    """

    code = "runtime_not_found"

    def __init__(self, candidates: Sequence[str]) -> None:
        """Record every candidate that was probed.

        Example:
            ```python
            RuntimeNotFoundError(["wasmtime"]).candidates
            ```
        """
        self.candidates = tuple(candidates)
        super().__init__(
            "No WebAssembly runtime found. Tried: " + ", ".join(self.candidates)
        )


class WasmModuleNotFoundError(WasmRunnerError):
    """Module path does not exist.

    Example:
        ```python
        err = WasmModuleNotFoundError("/tmp/missing.wasm")
        ```
    """

    code = "module_not_found"

    def __init__(self, path: str) -> None:
        """Keep the missing path.

        Example:
            ```python
            WasmModuleNotFoundError("/tmp/missing.wasm").path
            ```
        """
        self.path = path
        super().__init__(f"WebAssembly module not found: {path}")


class WasmModuleNotReadableError(WasmRunnerError):
    """Module path exists but is not a readable file.

    Example:
        ```python
        err = WasmModuleNotReadableError("/root/secret.wasm")
        ```
    """

    code = "module_not_readable"

    def __init__(self, path: str) -> None:
        """Keep the unreadable path.

        Example:
            ```python
            WasmModuleNotReadableError("/root/secret.wasm").path
            ```
        """
        self.path = path
        super().__init__(f"WebAssembly module is not readable: {path}")


class InvalidFunctionNameError(WasmRunnerError):
    """Exported function name is empty.

    Example:
        ```python
        err = InvalidFunctionNameError("  ")
        ```
    """

    code = "invalid_function_name"

    def __init__(self, name: str) -> None:
        """Keep the rejected name.

        Example:
            ```python
            InvalidFunctionNameError("").name
            ```
        """
        self.name = name
        super().__init__(f"Function name must be a non-empty string, got {name!r}")


class InvalidArgumentError(WasmRunnerError):
    """An argument is not an integer literal.

    Example:
        ```python
        err = InvalidArgumentError("1.5")
        ```
    """

    code = "invalid_argument"

    def __init__(self, literal: str) -> None:
        """Keep the offending literal verbatim.

        Example:
            ```python
            InvalidArgumentError("abc").literal
            ```
        """
        self.literal = literal
        super().__init__(f"Argument is not an integer literal: {literal!r}")


class LaunchError(WasmRunnerError):
    """The engine process could not be started.

    Example:
        ```python
        err = LaunchError(["wasmtime"], PermissionError(13, "Permission denied"))
        ```
    """

    code = "launch_error"

    def __init__(self, argv: Sequence[str], os_error: OSError) -> None:
        """Wrap the underlying OS failure.

        Example:
            ```python
            LaunchError(["wasmtime"], FileNotFoundError(2, "No such file")).errno
            ```
        """
        self.argv = tuple(argv)
        self.os_error = os_error
        self.errno = os_error.errno
        program = self.argv[0] if self.argv else "<empty argv>"
        super().__init__(f"Failed to launch {program}: {os_error}")


class ExecutionTimeoutError(WasmRunnerError, TimeoutError):
    """The engine did not finish within the wall-clock budget.

    Example:
        ```python
        err = ExecutionTimeoutError(5)
        ```
    """

    code = "timeout"

    def __init__(self, timeout_seconds: float) -> None:
        """Keep the budget that was exceeded.

        Example:
            ```python
            ExecutionTimeoutError(0.5).timeout_seconds
            ```
        """
        self.timeout_seconds = timeout_seconds
        super().__init__(f"Execution timed out after {timeout_seconds}s")


class ExecutionErrorKind(str, Enum):
    """Category of a nonzero engine exit, keyed by exit status.

    Example:
        ```python
        assert ExecutionErrorKind("trap") is ExecutionErrorKind.TRAP
        ```
    """

    TRAP = "trap"
    INVALID_ARGUMENTS = "invalid_arguments"
    FUNCTION_NOT_FOUND = "function_not_found"
    UNKNOWN = "unknown"


class ExecutionError(WasmRunnerError):
    """The engine exited with a nonzero status.

    Example:
        ```python
        err = ExecutionError(ExecutionErrorKind.TRAP, 1, "wasm trap: integer divide by zero")
        ```
    """

    code = "execution_error"

    def __init__(self, kind: ExecutionErrorKind, exit_code: int, stderr: str) -> None:
        """Keep kind, raw exit code and raw stderr.

        Example:
            ```python
            ExecutionError(ExecutionErrorKind.UNKNOWN, 134, "").exit_code
            ```
        """
        self.kind = kind
        self.exit_code = exit_code
        self.stderr = stderr
        detail = stderr.strip() or "<no stderr>"
        super().__init__(f"Engine failed ({kind.value}, exit {exit_code}): {detail}")


class NoResultError(WasmRunnerError):
    """Engine stdout contained no numeric token.

    Example:
        ```python
        err = NoResultError("no numbers here")
        ```
    """

    code = "no_result"

    def __init__(self, stdout: str) -> None:
        """Keep raw stdout.

        Example:
            ```python
            NoResultError("").stdout
            ```
        """
        self.stdout = stdout
        super().__init__(f"Engine produced no integer result. stdout: {stdout!r}")


class MalformedResultError(WasmRunnerError):
    """The first numeric token is not a valid integer literal.

    Example:
        ```python
        err = MalformedResultError("1-2", "1-2")
        ```
    """

    code = "malformed_result"

    def __init__(self, candidate: str, stdout: str) -> None:
        """Keep the candidate token and raw stdout.

        Example:
            ```python
            MalformedResultError("1-2", "value 1-2").candidate
            ```
        """
        self.candidate = candidate
        self.stdout = stdout
        super().__init__(
            f"Engine result {candidate!r} is not an integer literal. stdout: {stdout!r}"
        )
