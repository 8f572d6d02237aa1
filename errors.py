"""
Exceptions raised by the solver and its readers.

Unsatisfiability is not an error: solve() returns None for it.
"""

from __future__ import annotations

from typing import Any, Optional


class SATBaseException(Exception):
    """Base class for all exceptions raised by this package."""

    def __init__(self, message: Optional[str] = None):
        self.message = message
        super().__init__(message)


class SolverTimeoutError(SATBaseException):
    """Raised inside the search when its deadline has passed."""

    def __init__(self, message: str = "Solver exceeded time limit", time_spent: Optional[float] = None):
        self.time_spent = time_spent
        if time_spent is not None:
            message = f"{message} (time_spent={time_spent:.2f}s)"
        super().__init__(message)


class InconsistentAssignmentError(SATBaseException):
    """A variable was re-bound to the opposite of its current value."""

    def __init__(self, message: str = "Inconsistent variable assignment detected", variable: Any = None):
        self.variable = variable
        if variable is not None:
            message = f"{message} for variable {variable!r}"
        super().__init__(message)


class ParseError(SATBaseException):
    """Malformed input file. `line` is 1-based when known."""

    def __init__(self, message: str, line: Optional[int] = None):
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class DimacsParseError(ParseError):
    pass


class SudokuParseError(ParseError):
    pass
