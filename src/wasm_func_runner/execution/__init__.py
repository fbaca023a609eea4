from .classify import classify_exit
from .command import build_command
from .locator import RuntimeLocator
from .parse import parse_result
from .process import DEFAULT_TIMEOUT_SECONDS, ProcessExecutor
from .types import (
    ExecutionOutcome,
    InvocationRequest,
    RuntimeDescriptor,
    is_integer_literal,
)

__all__ = [
    "DEFAULT_TIMEOUT_SECONDS",
    "ExecutionOutcome",
    "InvocationRequest",
    "ProcessExecutor",
    "RuntimeDescriptor",
    "RuntimeLocator",
    "build_command",
    "classify_exit",
    "is_integer_literal",
    "parse_result",
]
