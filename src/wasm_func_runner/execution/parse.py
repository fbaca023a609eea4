from __future__ import annotations

import re

from ..errors import MalformedResultError, NoResultError
from ..result import Result
from .types import is_integer_literal

# Anything that is not a digit, plus any minus sign that does not start a number.
_NON_NUMERIC = re.compile(r"[^0-9-]|-(?![0-9])")


def parse_result(stdout: str) -> Result[str]:
    """Extract the first integer literal from engine stdout.

    Every non-digit character becomes a space, then the first token wins.
    A dotted number such as `12.5` therefore yields `12`: this is token
    splitting, not float parsing. Engines that print diagnostics before the
    result will have the first number in those diagnostics returned.

    Example:
        ```python
        assert parse_result("result = 42 ok").unwrap() == "42"
        ```
    """
    scrubbed = _NON_NUMERIC.sub(" ", stdout.strip())
    tokens = scrubbed.split()
    if not tokens:
        return Result.failure(NoResultError(stdout))
    candidate = tokens[0]
    if not is_integer_literal(candidate):
        return Result.failure(MalformedResultError(candidate, stdout))
    return Result.success(candidate)
