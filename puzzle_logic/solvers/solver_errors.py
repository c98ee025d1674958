"""
Solver errors and limits.
"""

from __future__ import annotations

import os
from typing import Any

DEFAULT_SAFE_LIMIT = 2_000_000
DEFAULT_MAX_VALUE = 9
DEFAULT_TIMEOUT = 30.0
STATE_SPACE_EXPLOSION_MESSAGE = "Search budget exhausted before the grid was resolved."


class PuzzleError(Exception):
    """Base class for every error raised by the puzzle core."""


class InvalidSizeError(PuzzleError, ValueError):
    """
    Raised for malformed geometry: size below 2, a non-square matrix,
    or cell values that are not non-negative integers.
    """


class ImpossibleStateError(PuzzleError, RuntimeError):
    """
    Raised when the input grid already breaks a puzzle rule before any search,
    e.g. a region that is larger than its value.
    """

    def __init__(self, message: str, *, cell: Any = None, value: int | None = None) -> None:
        super().__init__(message)
        self.cell = cell
        self.value = value


class UnsolvableError(PuzzleError, RuntimeError):
    """Raised when the search exhausted every candidate without a solution."""


class ControlledStateExplosionError(PuzzleError, RuntimeError):
    """
    Raised when a solver crosses a configured safety bound
    (explored states, wall-clock time, or an external stop request).
    """

    def __init__(
        self,
        message: str = STATE_SPACE_EXPLOSION_MESSAGE,
        *,
        safe_limit: int | float | None = None,
        observed: int | float | None = None,
        context: str | None = None,
    ) -> None:
        super().__init__(message)
        self.safe_limit = safe_limit
        self.observed = observed
        self.context = context


def _positive_int(raw: Any) -> int | None:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return None
    return value if value > 0 else None


def _positive_float(raw: Any) -> float | None:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    return value if value > 0 else None


def resolve_safe_limit(explicit: Any = None) -> int:
    """
    Resolve the explored-state limit.

    Priority:
    1) explicit argument
    2) env PUZZLE_SAFE_LIMIT
    3) DEFAULT_SAFE_LIMIT
    """
    for raw in (explicit, os.getenv("PUZZLE_SAFE_LIMIT")):
        if raw is None:
            continue
        limit = _positive_int(raw)
        if limit is not None:
            return limit
    return DEFAULT_SAFE_LIMIT


def resolve_max_value(explicit: Any = None) -> int:
    """
    Resolve the largest value offered as a brand-new region candidate.

    Priority:
    1) explicit argument
    2) env PUZZLE_MAX_VALUE
    3) DEFAULT_MAX_VALUE

    Grids wider than 9 may need a higher cap to stay solvable.
    """
    for raw in (explicit, os.getenv("PUZZLE_MAX_VALUE")):
        if raw is None:
            continue
        cap = _positive_int(raw)
        if cap is not None:
            return cap
    return DEFAULT_MAX_VALUE


def resolve_timeout(explicit: Any = None) -> float:
    """
    Resolve the wall-clock budget (seconds) of one search.

    Priority:
    1) explicit argument
    2) env PUZZLE_SOLVER_TIMEOUT
    3) DEFAULT_TIMEOUT
    """
    for raw in (explicit, os.getenv("PUZZLE_SOLVER_TIMEOUT")):
        if raw is None:
            continue
        timeout = _positive_float(raw)
        if timeout is not None:
            return timeout
    return DEFAULT_TIMEOUT
