# slopedeflect/kernel/solve.py
"""Dense linear solver with partial pivoting and singularity detection."""

import numpy as np
from typing import Optional, Tuple

from ..config import CONFIG
from ..errors import SingularSystemError


def _eliminate(A: np.ndarray, b: np.ndarray, tol: float) -> Tuple[np.ndarray, float]:
    """Gauss-Jordan elimination on [A | b]; returns (x, det(A))."""
    n = A.shape[0]
    M = np.column_stack([A, b]).astype(float)
    det = 1.0

    for i in range(n):
        # Partial pivoting: largest remaining entry of column i
        p = i + int(np.argmax(np.abs(M[i:, i])))
        if p != i:
            M[[i, p]] = M[[p, i]]
            det = -det

        pivot = M[i, i]
        det *= pivot
        if pivot == 0.0 or abs(pivot) < tol:
            raise SingularSystemError(
                f"Singular system (pivot {pivot:.2e} in column {i}). Check supports."
            )

        M[i] = M[i] / pivot
        for k in range(n):
            if k != i and M[k, i] != 0.0:
                M[k] = M[k] - M[k, i] * M[i]

    return M[:, n].copy(), det


def _check_square(A: np.ndarray, b: np.ndarray) -> None:
    if A.ndim != 2 or A.shape[0] != A.shape[1]:
        raise ValueError(f"Coefficient matrix must be square, got shape {A.shape}")
    if b.shape != (A.shape[0],):
        raise ValueError(f"Right-hand side shape {b.shape} doesn't match matrix {A.shape}")


def gaussian_elimination(
    A: np.ndarray,
    b: np.ndarray,
    tol: Optional[float] = None,
) -> np.ndarray:
    """
    Solve A·x = b by Gaussian elimination with partial pivoting.

    Args:
        A: Coefficient matrix (n x n)
        b: Right-hand side (n,)
        tol: Singularity threshold on |pivot| and |det(A)|
             (default CONFIG.singular_tolerance)

    Returns:
        x: Solution vector (n,); empty for n = 0

    Raises:
        SingularSystemError: If a pivot or the determinant falls below tol
    """
    if tol is None:
        tol = CONFIG.singular_tolerance
    A = np.asarray(A, dtype=float)
    b = np.asarray(b, dtype=float)
    _check_square(A, b)

    if A.shape[0] == 0:
        return np.zeros(0, dtype=float)

    x, det = _eliminate(A, b, tol)
    if not np.isfinite(det) or abs(det) < tol:
        raise SingularSystemError(
            f"Singular system (det={det:.2e}). Check supports. Need |det| >= {tol:.0e}."
        )
    return x


def determinant(A: np.ndarray) -> float:
    """Determinant of A by the same elimination (0.0 when a pivot vanishes)."""
    A = np.asarray(A, dtype=float)
    _check_square(A, np.zeros(A.shape[0]))
    if A.shape[0] == 0:
        return 1.0
    try:
        _, det = _eliminate(A, np.zeros(A.shape[0]), 0.0)
    except SingularSystemError:
        return 0.0
    return det
