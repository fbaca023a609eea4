from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from .errors import WasmRunnerError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Result(Generic[T]):
    """Either a success value or exactly one `WasmRunnerError`.

    Example:
        ```python
        res = Result.success("42")
        assert res.ok and res.unwrap() == "42"
        ```
    """

    value: T | None = None
    error: WasmRunnerError | None = None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        """Wrap a success value.

        Example:
            ```python
            Result.success(3).value
            ```
        """
        return cls(value=value)

    @classmethod
    def failure(cls, error: WasmRunnerError) -> "Result[T]":
        """Wrap a structured error.

        Example:
            ```python
            Result.failure(NoResultError("")).ok
            ```
        """
        return cls(error=error)

    @property
    def ok(self) -> bool:
        """Return True when no error is carried.

        Example:
            ```python
            Result.success("1").ok
            ```
        """
        return self.error is None

    def unwrap(self) -> T:
        """Return the value or raise the carried error.

        Example:
            ```python
            value = Result.success("7").unwrap()
            ```
        """
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]
