# fem.py - Fixed-end moments and load resultants
"""
FIXED-END MOMENTS
=================

Closed-form fixed-end moments (FEM) for every supported load type, computed
for a member whose two ends are fully restrained against rotation.

SIGN CONVENTION:
----------------
Clockwise end moments acting on the member are positive. For a downward
load on a horizontal member the start FEM is negative (counterclockwise)
and the end FEM is positive:

    load type            start           end
    ------------------   -------------   -------------
    udl                  -wL²/12         +wL²/12
    center-point         -PL/8           +PL/8
    point-at-distance    -P·b²·a/L²      +P·b·a²/L²
    two-point-loads      -2PL/9          +2PL/9
    three-point-loads    -15PL/48        +15PL/48
    vdl-right            -wL²/30         +wL²/20
    vdl-left             -wL²/20         +wL²/30

The same table serves columns, whose horizontal (+x) load maps onto the
downward beam load when the column is read from base to top.
"""

import logging
from typing import List, NamedTuple, Tuple

from .model import Column, LoadType, Member, Span, SupportType

logger = logging.getLogger(__name__)


class FixedEndMoment(NamedTuple):
    start: float
    end: float


ZERO_FEM = FixedEndMoment(0.0, 0.0)


def _point_load_fem(P: float, L: float, a: float) -> FixedEndMoment:
    b = L - a
    L2 = L * L
    return FixedEndMoment(-(P * b * b * a) / L2, (P * b * a * a) / L2)


def member_fixed_end_moments(member: Member) -> FixedEndMoment:
    """
    Fixed-end moments of a member from its load alone.

    Support conditions are ignored here; see fixed_end_moments and
    frame_fixed_end_moments for the support-aware entry points.

    Parameters:
    -----------
    member : Member
        Any loaded member (Span, Column or FrameBeam)

    Returns:
    --------
    FixedEndMoment
        (start, end) pair, kN·m with kN and m inputs
    """
    L = member.length
    P = member.load_magnitude
    t = member.load_type

    if t == LoadType.NONE or L <= 0:
        return ZERO_FEM

    if t == LoadType.UDL:
        m = P * L * L / 12.0
        return FixedEndMoment(-m, m)

    if t == LoadType.CENTER_POINT:
        m = P * L / 8.0
        return FixedEndMoment(-m, m)

    if t == LoadType.POINT_AT_DISTANCE:
        a = member.load_distance()
        if a is None:
            logger.warning("point-at-distance load without distances; FEM taken as zero")
            return ZERO_FEM
        return _point_load_fem(P, L, a)

    if t == LoadType.TWO_POINT_LOADS:
        m = 2.0 * P * L / 9.0
        return FixedEndMoment(-m, m)

    if t == LoadType.THREE_POINT_LOADS:
        m = 15.0 * P * L / 48.0
        return FixedEndMoment(-m, m)

    if t == LoadType.VDL_RIGHT:
        return FixedEndMoment(-P * L * L / 30.0, P * L * L / 20.0)

    if t == LoadType.VDL_LEFT:
        return FixedEndMoment(-P * L * L / 20.0, P * L * L / 30.0)

    raise ValueError(f"Unknown load type {t!r}")


def fixed_end_moments(span: Span) -> FixedEndMoment:
    """FEMs of a beam span; zero when either end is unsupported."""
    if span.start_support == SupportType.NONE or span.end_support == SupportType.NONE:
        return ZERO_FEM
    return member_fixed_end_moments(span)


def frame_fixed_end_moments(member: Member) -> FixedEndMoment:
    """FEMs of a frame member; zero for a column on a hinged or roller base."""
    if isinstance(member, Column) and member.support_type.is_released:
        return ZERO_FEM
    return member_fixed_end_moments(member)


def point_load_positions(member: Member) -> List[float]:
    """Positions (from the member start) of the discrete point loads."""
    L = member.length
    t = member.load_type
    if t == LoadType.CENTER_POINT:
        return [L / 2.0]
    if t == LoadType.POINT_AT_DISTANCE:
        a = member.load_distance()
        return [] if a is None else [a]
    if t == LoadType.TWO_POINT_LOADS:
        return [L / 3.0, 2.0 * L / 3.0]
    if t == LoadType.THREE_POINT_LOADS:
        return [L / 4.0, L / 2.0, 3.0 * L / 4.0]
    return []


def load_resultant(member: Member) -> Tuple[float, float]:
    """
    Total load W and the position of its centroid measured from the start.

    Returns (0.0, 0.0) for an unloaded member.
    """
    L = member.length
    P = member.load_magnitude
    t = member.load_type

    if t == LoadType.UDL:
        return P * L, L / 2.0
    if t == LoadType.VDL_RIGHT:
        return 0.5 * P * L, 2.0 * L / 3.0
    if t == LoadType.VDL_LEFT:
        return 0.5 * P * L, L / 3.0

    positions = point_load_positions(member)
    if not positions:
        return 0.0, 0.0
    W = P * len(positions)
    return W, sum(positions) / len(positions)


def cantilever_root_moments(span: Span) -> FixedEndMoment:
    """
    End moments of a span with one unsupported end, by statics.

    The root carries the whole load: -W·x̄ when the root is the start,
    +W·(L - x̄) when the root is the end. The free tip carries none.
    """
    W, xbar = load_resultant(span)
    if span.end_support == SupportType.NONE and span.start_support != SupportType.NONE:
        return FixedEndMoment(-W * xbar, 0.0)
    if span.start_support == SupportType.NONE and span.end_support != SupportType.NONE:
        return FixedEndMoment(0.0, W * (span.length - xbar))
    return ZERO_FEM
