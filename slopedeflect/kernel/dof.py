# slopedeflect/kernel/dof.py
"""
UNKNOWN INDEX: Unknown -> Matrix Column
=======================================

The joint equations have at most five unknowns (EIθA, EIθB, EIθC, EIθD,
EIδ), and a given structure only uses some of them:

    3-span beam, A and D fixed:      θB, θC
    3-span beam, D hinged:           θB, θC, θD
    portal frame, fixed bases:       θB, θC, δ
    portal frame, hinged bases:      θA, θB, θC, θD, δ

UnknownIndex fixes the column order once, so that assembly and result
extraction agree on which entry of x belongs to which unknown.

USAGE:
------
    index = UnknownIndex((Unknown.THETA_B, Unknown.THETA_C))
    index.idx(Unknown.THETA_C)  # → 1
    index.size                  # → 2
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Tuple

from ..model import Unknown


@dataclass(frozen=True)
class UnknownIndex:
    """
    Ordered set of the unknowns solved for.

    Attributes:
    -----------
    unknowns : Tuple[Unknown, ...]
        Unknowns in column order (θA, θB, θC, θD, δ order by convention)

    Examples:
    ---------
    >>> index = UnknownIndex((Unknown.THETA_B, Unknown.DELTA))
    >>> index.idx(Unknown.DELTA)
    1
    >>> Unknown.THETA_A in index
    False
    """
    unknowns: Tuple[Unknown, ...]

    def __post_init__(self):
        if len(set(self.unknowns)) != len(self.unknowns):
            raise ValueError(f"Duplicate unknowns in {self.unknowns}")

    @property
    def size(self) -> int:
        return len(self.unknowns)

    def idx(self, unknown: Unknown) -> int:
        """
        Column of `unknown` in the system matrix.

        Raises:
        -------
        KeyError
            If the unknown is not part of this system
        """
        try:
            return self.unknowns.index(unknown)
        except ValueError:
            raise KeyError(f"{unknown.value} is not an unknown of this system") from None

    def __contains__(self, unknown: object) -> bool:
        return unknown in self.unknowns

    def __iter__(self):
        return iter(self.unknowns)

    def values(self, x: Iterable[float]) -> Dict[Unknown, float]:
        """Pair a solution vector with its unknowns."""
        return {u: float(v) for u, v in zip(self.unknowns, x)}
