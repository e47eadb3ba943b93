# slopedeflect/solve.py
"""Solve the joint equations for the EI-scaled rotations and sway."""

import logging
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Sequence

from .errors import SingularSystemError
from .expressions import UNKNOWN_ORDER, LinearExpression
from .kernel import UnknownIndex, assemble_system, gaussian_elimination
from .model import Unknown

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Solution:
    """
    Solved values of the unknowns.

    Unknowns that were not solved for (a fixed node, or δ for a beam) read
    as 0.0 through value() and the theta_*/delta properties, but are left
    out of as_dict().
    """
    values: Mapping[Unknown, float] = field(default_factory=dict)

    def value(self, unknown: Unknown) -> float:
        return self.values.get(unknown, 0.0)

    @property
    def theta_a(self) -> float:
        return self.value(Unknown.THETA_A)

    @property
    def theta_b(self) -> float:
        return self.value(Unknown.THETA_B)

    @property
    def theta_c(self) -> float:
        return self.value(Unknown.THETA_C)

    @property
    def theta_d(self) -> float:
        return self.value(Unknown.THETA_D)

    @property
    def delta(self) -> float:
        return self.value(Unknown.DELTA)

    def as_dict(self) -> Dict[str, float]:
        return {u.value: self.values[u] for u in UNKNOWN_ORDER if u in self.values}


def solve_equations(
    equations: Sequence[LinearExpression],
    unknowns: Sequence[Unknown],
    ei: float = 1.0,
    tol: Optional[float] = None,
) -> Solution:
    """
    Solve a square set of joint equations.

    Parameters:
    -----------
    equations : Sequence[LinearExpression]
        Equations, each equal to zero
    unknowns : Sequence[Unknown]
        Unknowns to solve for, one per equation
    ei : float
        Flexural rigidity (1.0 for frames)
    tol : float, optional
        Singularity threshold (default CONFIG.singular_tolerance)

    Returns:
    --------
    Solution

    Raises:
    -------
    SingularSystemError
        If the equations have no unique solution
    """
    index = UnknownIndex(tuple(unknowns))
    try:
        A, b = assemble_system(equations, index, ei)
    except ValueError as e:
        raise SingularSystemError(str(e)) from e

    x = gaussian_elimination(A, b, tol)
    solution = Solution(index.values(x))
    logger.info("Solved %d joint equations: %s", index.size, solution.as_dict())
    return solution


def solve_equation_strings(
    equations: Sequence[str],
    ei: float = 1.0,
    tol: Optional[float] = None,
) -> Solution:
    """
    Solve joint equations given as display text.

    The unknowns are the ones the equations mention, in θA..θD, δ order; there
    must be exactly as many of them as equations. Bare EI terms are folded in
    with the given EI, so a zero result is exact rather than "no solution".

    Raises:
    -------
    EquationParseError
        If an equation contains a term outside the grammar
    SingularSystemError
        If the equations do not determine their unknowns uniquely
    """
    expressions = [LinearExpression.parse(text) for text in equations]
    mentioned = set()
    for expr in expressions:
        mentioned.update(expr.unknowns)
    unknowns = [u for u in UNKNOWN_ORDER if u in mentioned]

    if len(unknowns) != len(expressions):
        raise SingularSystemError(
            f"{len(expressions)} equations mention {len(unknowns)} unknowns "
            f"({', '.join(u.value for u in unknowns) or 'none'})"
        )
    return solve_equations(expressions, unknowns, ei, tol)
