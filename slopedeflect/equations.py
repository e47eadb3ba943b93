# slopedeflect/equations.py
"""
SLOPE-DEFLECTION EQUATIONS
==========================

For a member from node i to node j with length L and relative inertia I_k:

    M_ij = FEM_ij + (2/L)·I_k·(2·EIθ_i + EIθ_j) - (2/L)·I_k·3ψ·EI
    M_ji = FEM_ji + (2/L)·I_k·(EIθ_i + 2·EIθ_j) - (2/L)·I_k·3ψ·EI

ψ is the chord rotation (clockwise positive):
- beam spans: ψ = Δ/L from the relative settlement Δ of the two supports,
  giving the bare EI term ∓(2/L)(3Δ/L)·EI
- frame columns: ψ = δ/h from the sway δ of the beam level, giving the
  term -(2/h)(3/h)·I_k·EIδ

A node on a fixed support has θ = 0 and contributes no rotation term.
A span with an unsupported ("none") end is statically determinate: its
equations are the cantilever moments alone.

Equilibrium equations built on top:
- joint equation: Σ member end moments at a rotating node = 0
- frame shear equation: Σ_columns (M_base + M_top + W·x̄)/h = 0, i.e. the
  base shears H = (M_base + M_top - W·(h - x̄))/h balance the column loads
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from .fem import (
    FixedEndMoment,
    cantilever_root_moments,
    fixed_end_moments,
    frame_fixed_end_moments,
    load_resultant,
)
from .expressions import UNKNOWN_ORDER, LinearExpression
from .model import (
    B,
    C,
    NODE_LABELS,
    ContinuousBeam,
    MemberEnd,
    PortalFrame,
    SupportType,
    Unknown,
    node_label,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SlopeDeflectionEquation:
    """Start and end moment expressions of one member (start -> end)."""
    start_node: int
    end_node: int
    start: LinearExpression
    end: LinearExpression

    @property
    def label(self) -> str:
        return node_label(self.start_node) + node_label(self.end_node)

    @property
    def start_end(self) -> MemberEnd:
        return MemberEnd(self.start_node, self.end_node)

    @property
    def end_end(self) -> MemberEnd:
        return MemberEnd(self.end_node, self.start_node)

    @property
    def start_equation(self) -> str:
        return str(self.start)

    @property
    def end_equation(self) -> str:
        return str(self.end)


@dataclass(frozen=True)
class BoundaryEquation:
    """Moment equilibrium of one rotating node: expression = 0."""
    node: int
    expression: LinearExpression

    @property
    def unknown(self) -> Unknown:
        return Unknown.theta(self.node)

    def render(self, precision: Optional[int] = None) -> str:
        return self.expression.render(precision) + " = 0"

    def __str__(self) -> str:
        return f"{self.expression} = 0"


def slope_deflection_pair(
    fem: FixedEndMoment,
    length: float,
    inertia: float,
    theta_start: Optional[Unknown],
    theta_end: Optional[Unknown],
    chord: Optional[LinearExpression] = None,
) -> Tuple[LinearExpression, LinearExpression]:
    """
    Start and end moment expressions of one elastic member.

    Parameters:
    -----------
    fem : FixedEndMoment
        Fixed-end moments of the member
    length, inertia : float
        Member length and relative moment of inertia
    theta_start, theta_end : Unknown or None
        Rotation unknowns of the end nodes; None for a fixed node
    chord : LinearExpression, optional
        Chord rotation ψ of the member (settlement or sway)

    Returns:
    --------
    (start, end) : Tuple[LinearExpression, LinearExpression]
    """
    k = 2.0 * inertia / length

    start = LinearExpression(constant=fem.start)
    end = LinearExpression(constant=fem.end)

    if theta_start is not None:
        start = start + LinearExpression.term(theta_start, 2.0 * k)
        end = end + LinearExpression.term(theta_start, k)
    if theta_end is not None:
        start = start + LinearExpression.term(theta_end, k)
        end = end + LinearExpression.term(theta_end, 2.0 * k)

    if chord is not None:
        rotation = chord.scaled(-3.0 * k)
        start = start + rotation
        end = end + rotation

    return start, end


# =============================================================================
# Continuous beams
# =============================================================================

def beam_unknowns(beam: ContinuousBeam) -> Tuple[Unknown, ...]:
    """Rotation unknowns: every node on a hinged or roller support."""
    return tuple(
        Unknown.theta(node)
        for node in range(beam.n_nodes)
        if beam.node_support(node).is_released
    )


def beam_fixed_end_moments(beam: ContinuousBeam) -> List[FixedEndMoment]:
    return [fixed_end_moments(span) for span in beam.spans]


def beam_equations(
    beam: ContinuousBeam,
    fems: Optional[Sequence[FixedEndMoment]] = None,
) -> List[SlopeDeflectionEquation]:
    """
    Slope-deflection equations of every span of a continuous beam.

    Parameters:
    -----------
    beam : ContinuousBeam
        The beam, with per-node sinking_supports (downward positive)
    fems : Sequence[FixedEndMoment], optional
        Fixed-end moments per span; computed when omitted

    Returns:
    --------
    List[SlopeDeflectionEquation]
        One entry per span, labelled AB, BC, CD
    """
    if fems is None:
        fems = beam_fixed_end_moments(beam)
    unknowns = set(beam_unknowns(beam))

    equations = []
    for index, span in enumerate(beam.spans):
        i, j = index, index + 1

        if span.is_cantilever:
            root = cantilever_root_moments(span)
            start = LinearExpression(constant=root.start)
            end = LinearExpression(constant=root.end)
        else:
            theta_i = Unknown.theta(i) if Unknown.theta(i) in unknowns else None
            theta_j = Unknown.theta(j) if Unknown.theta(j) in unknowns else None

            chord = None
            settlement = beam.settlement(j) - beam.settlement(i)
            if settlement != 0.0:
                chord = LinearExpression(ei_constant=settlement / span.length)

            start, end = slope_deflection_pair(
                fems[index], span.length, span.moment_of_inertia,
                theta_i, theta_j, chord,
            )

        eq = SlopeDeflectionEquation(i, j, start, end)
        logger.debug("M%s = %s ; M%s = %s", eq.label, eq.start_equation,
                     eq.label[::-1], eq.end_equation)
        equations.append(eq)

    return equations


# =============================================================================
# Portal frames
# =============================================================================

def frame_unknowns(frame: PortalFrame) -> Tuple[Unknown, ...]:
    """θB, θC and δ always; θA / θD when a column base can rotate."""
    unknowns = {Unknown.THETA_B, Unknown.THETA_C, Unknown.DELTA}
    for index, column in enumerate(frame.columns):
        if column.support_type != SupportType.FIXED:
            base, _ = frame.column_nodes(index)
            unknowns.add(Unknown.theta(base))
    return tuple(u for u in UNKNOWN_ORDER if u in unknowns)


def frame_fixed_end_moments_all(frame: PortalFrame) -> Dict[str, FixedEndMoment]:
    """FEMs keyed by member label (AB, BC, DC)."""
    result = {}
    for index, column in enumerate(frame.columns):
        base, top = frame.column_nodes(index)
        result[node_label(base) + node_label(top)] = frame_fixed_end_moments(column)
    result["BC"] = frame_fixed_end_moments(frame.beam)
    return result


def frame_equations(
    frame: PortalFrame,
    fems: Optional[Dict[str, FixedEndMoment]] = None,
) -> List[SlopeDeflectionEquation]:
    """
    Slope-deflection equations of a portal frame: left column AB, beam BC,
    right column DC. Columns run from base to top and carry the sway term.
    """
    if fems is None:
        fems = frame_fixed_end_moments_all(frame)
    unknowns = set(frame_unknowns(frame))

    def theta(node: int) -> Optional[Unknown]:
        u = Unknown.theta(node)
        return u if u in unknowns else None

    equations = []
    for index, column in enumerate(frame.columns):
        base, top = frame.column_nodes(index)
        label = node_label(base) + node_label(top)
        chord = LinearExpression.term(Unknown.DELTA, 1.0 / column.length)
        start, end = slope_deflection_pair(
            fems[label], column.length, column.moment_of_inertia,
            theta(base), theta(top), chord,
        )
        equations.append(SlopeDeflectionEquation(base, top, start, end))

    start, end = slope_deflection_pair(
        fems["BC"], frame.beam.length, frame.beam.moment_of_inertia,
        theta(B), theta(C),
    )
    # beam between the two columns
    equations.insert(1, SlopeDeflectionEquation(B, C, start, end))

    for eq in equations:
        logger.debug("M%s = %s ; M%s = %s", eq.label, eq.start_equation,
                     eq.label[::-1], eq.end_equation)
    return equations


# =============================================================================
# Equilibrium equations
# =============================================================================

def member_end_expressions(
    equations: Sequence[SlopeDeflectionEquation],
) -> Dict[MemberEnd, LinearExpression]:
    result = {}
    for eq in equations:
        result[eq.start_end] = eq.start
        result[eq.end_end] = eq.end
    return result


def joint_equation(
    node: int,
    equations: Sequence[SlopeDeflectionEquation],
) -> BoundaryEquation:
    """Sum of every member end moment meeting at `node`."""
    total = LinearExpression()
    for member_end, expression in member_end_expressions(equations).items():
        if member_end.near == node:
            total = total + expression
    return BoundaryEquation(node, total)


def _boundary_equations(unknowns, equations) -> List[BoundaryEquation]:
    nodes = [NODE_LABELS.index(u.value[-1]) for u in unknowns if u != Unknown.DELTA]
    return [joint_equation(node, equations) for node in nodes]


def beam_boundary_equations(
    beam: ContinuousBeam,
    equations: Sequence[SlopeDeflectionEquation],
) -> List[BoundaryEquation]:
    """
    One equilibrium equation per rotating node of the beam.

    For the three-span model this is ΣM_B = 0 and ΣM_C = 0, plus M_DC = 0
    when D is hinged or roller (and M_AB = 0 when A is).
    """
    return _boundary_equations(beam_unknowns(beam), equations)


def frame_boundary_equations(
    frame: PortalFrame,
    equations: Sequence[SlopeDeflectionEquation],
) -> List[BoundaryEquation]:
    """ΣM_B = 0, ΣM_C = 0, and M = 0 at every released column base."""
    return _boundary_equations(frame_unknowns(frame), equations)


def frame_shear_equation(
    frame: PortalFrame,
    equations: Sequence[SlopeDeflectionEquation],
) -> LinearExpression:
    """
    Horizontal equilibrium of the frame, as an expression equal to zero.

    Σ_columns (M_base + M_top + W·x̄)/h = 0, with W the column load and x̄ its
    height above the base.
    """
    ends = member_end_expressions(equations)
    total = LinearExpression()
    for index, column in enumerate(frame.columns):
        base, top = frame.column_nodes(index)
        W, xbar = load_resultant(column)
        h = column.length
        column_sum = ends[MemberEnd(base, top)] + ends[MemberEnd(top, base)]
        column_sum = column_sum + LinearExpression(constant=W * xbar)
        total = total + column_sum.scaled(1.0 / h)
    logger.debug("shear equation: %s = 0", total)
    return total
