# slopedeflect/kernel/assemble.py
"""
ASSEMBLY: Joint Equations -> A·x = b
====================================

Each equation is a LinearExpression that must equal zero:

    constant + EI·(ei_constant + Σ c_u·u) = 0

Row r of the system is therefore

    A[r, idx(u)] = c_u·EI
    b[r]         = -(constant + EI·ei_constant)

With EI = 1 (frames, or when the unknowns are the EI-scaled rotations)
the solved x are EIθ and EIδ directly.
"""

import numpy as np
from typing import Sequence, Tuple

from ..expressions import LinearExpression
from .dof import UnknownIndex


def assemble_system(
    expressions: Sequence[LinearExpression],
    index: UnknownIndex,
    ei: float = 1.0,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Build the coefficient matrix and right-hand side of the joint equations.

    Parameters:
    -----------
    expressions : Sequence[LinearExpression]
        One expression per equation, each equal to zero
    index : UnknownIndex
        Column order of the unknowns
    ei : float
        Flexural rigidity multiplying every unknown and bare EI term

    Returns:
    --------
    A : np.ndarray
        Coefficient matrix, shape (n, n)
    b : np.ndarray
        Right-hand side, shape (n,)

    Raises:
    -------
    ValueError
        If the number of equations differs from the number of unknowns, or
        an equation references an unknown outside the index
    """
    n = index.size
    if len(expressions) != n:
        raise ValueError(
            f"{len(expressions)} equations for {n} unknowns; the system must be square"
        )

    A = np.zeros((n, n), dtype=float)
    b = np.zeros(n, dtype=float)

    for r, expr in enumerate(expressions):
        for u in expr.unknowns:
            if u not in index:
                raise ValueError(f"Equation {r} references {u.value}, which is not solved for")
            A[r, index.idx(u)] += expr.coefficient(u) * ei
        b[r] = -(expr.constant + ei * expr.ei_constant)

    return A, b
