# final end moments, member end shears, support reactions

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

from .equations import SlopeDeflectionEquation
from .fem import load_resultant
from .model import B, C, ContinuousBeam, Member, MemberEnd, PortalFrame, SupportType
from .solve import Solution

logger = logging.getLogger(__name__)


def final_moments(
    equations: Sequence[SlopeDeflectionEquation],
    solution: Solution,
    ei: float = 1.0,
    frame: Optional[PortalFrame] = None,
) -> Dict[MemberEnd, float]:
    """
    Substitute the solved unknowns into every slope-deflection equation.

    Parameters:
    -----------
    equations : Sequence[SlopeDeflectionEquation]
        Equations of every member
    solution : Solution
        Solved EIθ / EIδ values
    ei : float
        Flexural rigidity (1.0 for frames)
    frame : PortalFrame, optional
        When given, the base moment of every column on a hinged or roller
        support is set to exactly zero

    Returns:
    --------
    Dict[MemberEnd, float]
        Final moment at each member end, clockwise positive (kN·m)
    """
    moments = {}
    for eq in equations:
        moments[eq.start_end] = eq.start.evaluate(solution.values, ei)
        moments[eq.end_end] = eq.end.evaluate(solution.values, ei)

    if frame is not None:
        for index, column in enumerate(frame.columns):
            if column.support_type != SupportType.FIXED:
                base, top = frame.column_nodes(index)
                moments[MemberEnd(base, top)] = 0.0

    for key, value in moments.items():
        logger.debug("%s = %.4f", key.label, value)
    return moments


def member_end_shears(
    member: Member,
    start_moment: float,
    end_moment: float,
) -> Tuple[float, float]:
    """
    Transverse end reactions of one member from its end moments and load.

    Taking moments about the start (clockwise end moments, load W at x̄):

        R_end   = (W·x̄ + M_start + M_end) / L
        R_start = W - R_end

    Both act against the load (upward on a beam, -x on a column).
    """
    W, xbar = load_resultant(member)
    L = member.length
    if L <= 0:
        return 0.0, 0.0
    r_end = (W * xbar + start_moment + end_moment) / L
    return W - r_end, r_end


def beam_reactions(
    beam: ContinuousBeam,
    moments: Dict[MemberEnd, float],
) -> Dict[int, float]:
    """
    Vertical support reactions of a continuous beam, keyed by node.

    The reaction at a node is the sum of the end shears of the spans meeting
    there. Unsupported ("none") nodes carry no reaction and are omitted.
    """
    totals = {node: 0.0 for node in range(beam.n_nodes)}
    for index, span in enumerate(beam.spans):
        i, j = index, index + 1
        r_start, r_end = member_end_shears(
            span, moments[MemberEnd(i, j)], moments[MemberEnd(j, i)]
        )
        totals[i] += r_start
        totals[j] += r_end

    return {
        node: value
        for node, value in totals.items()
        if beam.node_support(node) != SupportType.NONE
    }


@dataclass(frozen=True)
class FrameReactions:
    """
    Support reactions of a portal frame.

    horizontal : column index (0 = left, 1 = right) -> H at the base, +x positive
    vertical   : base node (A or D) -> upward reaction
    """
    horizontal: Dict[int, float]
    vertical: Dict[int, float]

    @property
    def horizontal_sum(self) -> float:
        return sum(self.horizontal.values())


def column_base_shear(member: Member, base_moment: float, top_moment: float) -> float:
    """H = (M_base + M_top - W·(h - x̄)) / h, positive in +x."""
    W, xbar = load_resultant(member)
    h = member.length
    return (base_moment + top_moment - W * (h - xbar)) / h


def frame_reactions(
    frame: PortalFrame,
    moments: Dict[MemberEnd, float],
) -> FrameReactions:
    """
    Base reactions of a portal frame from its final end moments.

    The columns carry no vertical load, so the vertical reactions at A and D
    equal the end shears of the beam at B and C.
    """
    horizontal = {}
    vertical = {}

    for index, column in enumerate(frame.columns):
        base, top = frame.column_nodes(index)
        horizontal[index] = column_base_shear(
            column, moments[MemberEnd(base, top)], moments[MemberEnd(top, base)]
        )

    r_b, r_c = member_end_shears(
        frame.beam, moments[MemberEnd(B, C)], moments[MemberEnd(C, B)]
    )
    vertical[frame.column_nodes(0)[0]] = r_b
    vertical[frame.column_nodes(1)[0]] = r_c

    reactions = FrameReactions(horizontal, vertical)
    logger.debug("frame reactions: H=%s V=%s", horizontal, vertical)
    return reactions
