# slopedeflect/diagrams.py
"""
BENDING MOMENT AND SHEAR FORCE DIAGRAMS
=======================================

This module samples bending moment (M) and shear force (V) along each member
once the end moments and end shears are known, and picks out the critical
points a designer reads off the diagrams.

KEY CONCEPTS:
-------------
Cutting the member at x (measured from its start) and keeping the left part:

    V(x) = R_start - (load to the left of x)
    M(x) = M_start + R_start·x - (moment of that load about x)

with M_start the clockwise end moment at the start (so a hogging support
moment enters with its own sign) and R_start the end reaction acting
against the load. Load effects per type:

    udl                 V: w·x                 M: w·x²/2
    vdl-right (0 -> w)  V: w·x²/(2L)           M: w·x³/(6L)
    vdl-left  (w -> 0)  V: w·x - w·x²/(2L)     M: w·x²/2 - w·x³/(6L)
    point load P at p   V: P for x > p         M: P·(x - p) for x > p

Columns use the same expressions read from base to top, with their
horizontal (+x) load in place of the downward beam load.

SIGN CONVENTIONS:
-----------------
- Positive M: sagging (compression on top fiber)
- Positive V: upward resultant on the part to the left of the cut
- The maximum moment of a span sits where V changes sign
"""

import math
import numpy as np
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .config import CONFIG
from .fem import point_load_positions
from .model import LoadType, Member

_ORDINALS = ("First", "Second", "Third")


@dataclass
class DiagramPoint:
    """A single point on a force diagram."""
    x: float            # Position along the member (0 to L)
    V: float            # Shear force (kN)
    M: float            # Bending moment (kN·m)


@dataclass
class MemberDiagram:
    """
    Sampled diagrams of one member.

    x may repeat at a point load: the first sample carries the shear just
    before the load, the second the shear just after it.
    """
    label: str
    length: float
    x: np.ndarray
    shear_force: np.ndarray
    bending_moment: np.ndarray

    def points(self) -> List[DiagramPoint]:
        return [
            DiagramPoint(float(x), float(v), float(m))
            for x, v, m in zip(self.x, self.shear_force, self.bending_moment)
        ]

    @property
    def max_moment(self) -> float:
        return float(np.max(self.bending_moment))

    @property
    def min_moment(self) -> float:
        return float(np.min(self.bending_moment))

    def to_dict(self) -> Dict[str, list]:
        return {
            "x": [float(v) for v in self.x],
            "bendingMoment": [float(v) for v in self.bending_moment],
            "shearForce": [float(v) for v in self.shear_force],
        }


@dataclass
class CriticalPoint:
    """A labelled point of interest on a beam diagram."""
    location: str
    position: float        # measured from the left end of the whole beam
    bending_moment: float
    shear_force: float

    def to_dict(self) -> Dict[str, object]:
        return {
            "location": self.location,
            "position": self.position,
            "bendingMoment": self.bending_moment,
            "shearForce": self.shear_force,
        }


def load_effects(
    member: Member,
    x: np.ndarray,
    after_point: Optional[np.ndarray] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Shear and moment at x due to the load to the left of x.

    Parameters:
    -----------
    member : Member
        Loaded member
    x : np.ndarray
        Positions from the member start
    after_point : np.ndarray of bool, optional
        Where True, a point load sitting exactly at x counts as passed

    Returns:
    --------
    (V_load, M_load) : Tuple[np.ndarray, np.ndarray]
    """
    x = np.asarray(x, dtype=float)
    L = member.length
    w = member.load_magnitude
    t = member.load_type

    V = np.zeros_like(x)
    M = np.zeros_like(x)

    if t == LoadType.UDL:
        V = w * x
        M = w * x ** 2 / 2.0
    elif t == LoadType.VDL_RIGHT:
        V = w * x ** 2 / (2.0 * L)
        M = w * x ** 3 / (6.0 * L)
    elif t == LoadType.VDL_LEFT:
        V = w * x - w * x ** 2 / (2.0 * L)
        M = w * x ** 2 / 2.0 - w * x ** 3 / (6.0 * L)
    else:
        if after_point is None:
            after_point = np.zeros(x.shape, dtype=bool)
        for p in point_load_positions(member):
            passed = (x > p) | (after_point & (x >= p))
            V = V + np.where(passed, w, 0.0)
            M = M + np.where(passed, w * (x - p), 0.0)

    return V, M


def zero_shear_positions(member: Member, start_shear: float) -> List[float]:
    """
    Positions strictly inside the member where the shear changes sign.

    Distributed loads give the root of V(x) = 0 in closed form; point loads
    give the load position when the shear jumps across zero there.
    """
    L = member.length
    w = member.load_magnitude
    t = member.load_type
    R = start_shear
    found = []

    if L <= 0 or w == 0:
        return found

    if t == LoadType.UDL:
        found.append(R / w)
    elif t == LoadType.VDL_RIGHT:
        if R > 0:
            found.append(math.sqrt(2.0 * L * R / w))
    elif t == LoadType.VDL_LEFT:
        disc = L * L - 2.0 * L * R / w
        if disc >= 0:
            found.append(L - math.sqrt(disc))
    else:
        V = R
        for p in point_load_positions(member):
            after = V - w
            if (V > 0 >= after) or (V < 0 <= after):
                found.append(p)
            V = after

    return [x for x in found if 0.0 < x < L]


def sample_member(
    member: Member,
    start_moment: float,
    start_shear: float,
    n_points: Optional[int] = None,
    label: str = "",
) -> MemberDiagram:
    """
    Sample V and M along a member.

    Parameters:
    -----------
    member : Member
        Loaded member
    start_moment : float
        Clockwise end moment at the start (kN·m)
    start_shear : float
        End reaction at the start, acting against the load (kN)
    n_points : int, optional
        Equally spaced samples over [0, L]. When omitted only the exact
        breakpoints are sampled: the two ends, every point load and every
        zero-shear position.
    label : str
        Member label, e.g. "AB"

    Returns:
    --------
    MemberDiagram
        Samples sorted by x; every point load appears twice (before/after)
    """
    L = member.length
    loads = point_load_positions(member)

    base = [0.0, L]
    if n_points:
        base.extend(float(v) for v in np.linspace(0.0, L, n_points))
    base.extend(zero_shear_positions(member, start_shear))

    tol = CONFIG.distance_tolerance
    samples = [(x, False) for x in base if all(abs(x - p) > tol for p in loads)]
    for p in loads:
        samples.append((p, False))
        samples.append((p, True))
    samples = sorted(set(samples))

    x = np.array([s[0] for s in samples], dtype=float)
    after = np.array([s[1] for s in samples], dtype=bool)

    V_load, M_load = load_effects(member, x, after)
    shear = start_shear - V_load
    moment = start_moment + start_shear * x - M_load

    return MemberDiagram(label, L, x, shear, moment)


def _evaluate(member: Member, start_moment: float, start_shear: float, x: float) -> Tuple[float, float]:
    V_load, M_load = load_effects(member, np.array([x]))
    return (
        float(start_moment + start_shear * x - M_load[0]),
        float(start_shear - V_load[0]),
    )


def _point_load_names(member: Member, label: str) -> List[str]:
    t = member.load_type
    if t == LoadType.CENTER_POINT:
        return [f"Center point load in span {label}"]
    if t == LoadType.POINT_AT_DISTANCE:
        return [f"Point load in span {label}"]
    n = len(point_load_positions(member))
    return [f"{_ORDINALS[k]} point load in span {label}" for k in range(n)]


def critical_points(
    member: Member,
    start_moment: float,
    start_shear: float,
    label: str,
    offset: float = 0.0,
) -> List[CriticalPoint]:
    """
    Start, point loads, maximum moment and end of one span.

    Moments are exact at every point; the shear reported at a point load is
    the value just before it, and zero at a maximum-moment point.
    """
    L = member.length
    points = []

    M, V = _evaluate(member, start_moment, start_shear, 0.0)
    points.append(CriticalPoint(f"Start of span {label}", offset, M, V))

    loads = point_load_positions(member)
    for p, name in zip(loads, _point_load_names(member, label)):
        M, V = _evaluate(member, start_moment, start_shear, p)
        points.append(CriticalPoint(name, offset + p, M, V))

    for x in zero_shear_positions(member, start_shear):
        if x in loads:
            # already reported as a point load
            continue
        M, _ = _evaluate(member, start_moment, start_shear, x)
        points.append(CriticalPoint(f"Maximum moment in span {label}", offset + x, M, 0.0))

    M, V = _evaluate(member, start_moment, start_shear, L)
    points.append(CriticalPoint(f"End of span {label}", offset + L, M, V))

    points.sort(key=lambda cp: cp.position)
    return points
