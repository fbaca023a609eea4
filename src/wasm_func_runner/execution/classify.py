from __future__ import annotations

from ..errors import ExecutionError, ExecutionErrorKind

_EXIT_CODE_KINDS = {
    1: ExecutionErrorKind.TRAP,
    2: ExecutionErrorKind.INVALID_ARGUMENTS,
    3: ExecutionErrorKind.FUNCTION_NOT_FOUND,
}


def classify_exit(returncode: int, stderr: str) -> ExecutionError | None:
    """Map an engine exit status to a structured error, or None on success.

    Example:
        ```python
        err = classify_exit(3, "export `mul` not found")
        assert err.kind is ExecutionErrorKind.FUNCTION_NOT_FOUND
        ```
    """
    if returncode == 0:
        return None
    kind = _EXIT_CODE_KINDS.get(returncode, ExecutionErrorKind.UNKNOWN)
    return ExecutionError(kind, returncode, stderr)
