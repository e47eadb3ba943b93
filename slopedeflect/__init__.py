# slopedeflect - Slope-deflection analysis of continuous beams and portal frames
"""
SLOPEDEFLECT: Classical Analysis by the Slope-Deflection Method
===============================================================

This package provides:
- Continuous beams of 2 or 3 spans (fixed / hinged / roller / overhanging
  ends, support settlement)
- Single-bay portal frames with sway (fixed or hinged bases, lateral column
  loads)
- Fixed-end moments, symbolic equations, final moments, reactions and
  bending moment / shear force diagrams for both

ARCHITECTURE:
-------------
    kernel/         Linear-system core (unknown indexing, assembly, elimination)
    model.py        Member and structure definitions (Span, Column, PortalFrame)
    fem.py          Fixed-end moments and load resultants
    expressions.py  LinearExpression, display text and its parser
    equations.py    Slope-deflection, joint and shear equations
    solve.py        Solve the joint equations
    post.py         Final moments and reactions
    diagrams.py     BMSF sampling and critical points
    validation.py   Domain checks before analysis
    schemas.py      pydantic input models (draft / compute modes)
    analysis.py     analyze_beam, analyze_frame
    results.py      Result bundles, transport dicts, pandas tables
"""

import logging

from .analysis import analyze_beam, analyze_frame
from .errors import AnalysisError, EquationParseError, InputError, SingularSystemError
from .expressions import LinearExpression, parse_equation
from .model import (
    Column,
    ContinuousBeam,
    FrameBeam,
    LoadType,
    MemberEnd,
    PointLoadDistances,
    PortalFrame,
    Span,
    SupportType,
    Unknown,
)
from .results import BeamAnalysis, FrameAnalysis

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    'analyze_beam',
    'analyze_frame',
    'BeamAnalysis',
    'FrameAnalysis',
    'AnalysisError',
    'EquationParseError',
    'InputError',
    'SingularSystemError',
    'LinearExpression',
    'parse_equation',
    'Column',
    'ContinuousBeam',
    'FrameBeam',
    'LoadType',
    'MemberEnd',
    'PointLoadDistances',
    'PortalFrame',
    'Span',
    'SupportType',
    'Unknown',
]
