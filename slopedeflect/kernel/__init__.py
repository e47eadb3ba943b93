# slopedeflect/kernel - Linear-system core of the joint equations
"""
KERNEL: FROM EQUATIONS TO NUMBERS
=================================

This package turns a list of joint equations into a dense linear system
and solves it. It knows nothing about beams or frames:

- UnknownIndex maps each Unknown (θA..θD, δ) to a matrix column
- assemble_system scatters LinearExpression coefficients into A·x = b
- gaussian_elimination solves A·x = b with partial pivoting and raises
  SingularSystemError when the system has no unique solution

The structure-specific code (equations.py) decides WHICH equations exist;
the kernel plumbing is the same for a 2-span beam and a swaying frame.
"""

from .dof import UnknownIndex
from .assemble import assemble_system
from .solve import gaussian_elimination, determinant, SingularSystemError

__all__ = [
    'UnknownIndex',
    'assemble_system',
    'gaussian_elimination',
    'determinant',
    'SingularSystemError',
]
