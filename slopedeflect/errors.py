# slopedeflect/errors.py
"""Exceptions raised by the analysis pipeline."""

from typing import List, Optional


class AnalysisError(RuntimeError):
    """Base class for every failure of an analysis run."""
    pass


class InputError(AnalysisError, ValueError):
    """Raised when a submitted structure fails compute-mode validation."""

    def __init__(self, issues: List[str], message: Optional[str] = None):
        self.issues = list(issues)
        if message is None:
            message = "Invalid input: " + "; ".join(self.issues)
        super().__init__(message)


class SingularSystemError(AnalysisError):
    """Raised when the joint equations have no unique solution."""
    pass


class EquationParseError(AnalysisError, ValueError):
    """Raised when an equation string contains a term outside the grammar."""

    def __init__(self, equation: str, term: str):
        self.equation = equation
        self.term = term
        super().__init__(f"Unrecognised term {term!r} in equation {equation!r}")
