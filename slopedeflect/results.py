# slopedeflect/results.py
"""
RESULT BUNDLES
==============

One analysis run produces one immutable bundle holding every stage output:

    fixed-end moments -> equations -> solution -> final moments
                      -> reactions -> diagrams / critical points

Inside the package everything is keyed by typed ids (MemberEnd, node ids,
Unknown). The string labels of the display layer (MAB, RA, H1, RD, thetaB)
appear only in to_dict() / to_json() and in the pandas tables.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import pandas as pd

from .diagrams import CriticalPoint, MemberDiagram
from .equations import BoundaryEquation, SlopeDeflectionEquation
from .expressions import LinearExpression
from .fem import FixedEndMoment
from .model import ContinuousBeam, MemberEnd, PortalFrame, node_label
from .post import FrameReactions
from .solve import Solution


def _equations_dict(equations: List[SlopeDeflectionEquation]) -> List[Dict[str, str]]:
    return [
        {
            "memberLabel": eq.label,
            "startEquation": eq.start_equation,
            "endEquation": eq.end_equation,
        }
        for eq in equations
    ]


def _boundary_dict(boundary: List[BoundaryEquation]) -> Dict[str, str]:
    return {f"eq{k + 1}": str(eq) for k, eq in enumerate(boundary)}


def _moments_dict(moments: Dict[MemberEnd, float]) -> Dict[str, float]:
    return {key.label: float(value) for key, value in moments.items()}


def _moments_rows(fems: Dict[str, FixedEndMoment], moments: Dict[MemberEnd, float]):
    rows = []
    for key, value in moments.items():
        member = node_label(min(key)) + node_label(max(key))
        # frame columns are labelled base -> top
        if member not in fems:
            member = member[::-1]
        fem = fems[member]
        at_start = key.label[1:] == member
        rows.append({
            "member": member,
            "end": key.label,
            "fem": fem.start if at_start else fem.end,
            "moment": float(value),
        })
    return rows


def _diagram_rows(diagrams: List[MemberDiagram]):
    rows = []
    for diagram in diagrams:
        for point in diagram.points():
            rows.append({
                "member": diagram.label,
                "x": point.x,
                "shear_force": point.V,
                "bending_moment": point.M,
            })
    return rows


@dataclass(frozen=True)
class BeamAnalysis:
    """Every stage output of one continuous-beam run."""
    beam: ContinuousBeam
    fixed_end_moments: List[FixedEndMoment]
    equations: List[SlopeDeflectionEquation]
    boundary_equations: List[BoundaryEquation]
    solution: Solution
    final_moments: Dict[MemberEnd, float]
    reactions: Dict[int, float]
    diagrams: List[MemberDiagram]
    critical_points: List[CriticalPoint]

    def moment(self, near: int, far: int) -> float:
        return self.final_moments[MemberEnd(near, far)]

    def reaction(self, node: int) -> float:
        return self.reactions[node]

    @property
    def total_reaction(self) -> float:
        return sum(self.reactions.values())

    def _fems_by_label(self) -> Dict[str, FixedEndMoment]:
        return {
            self.beam.span_label(index): fem
            for index, fem in enumerate(self.fixed_end_moments)
        }

    def to_dict(self) -> Dict[str, Any]:
        """JSON-safe transport dict with display labels."""
        return {
            "fixedEndMoments": {
                label: {"start": fem.start, "end": fem.end}
                for label, fem in self._fems_by_label().items()
            },
            "slopeDeflectionEquations": _equations_dict(self.equations),
            "boundaryEquations": _boundary_dict(self.boundary_equations),
            "solution": self.solution.as_dict(),
            "finalMoments": _moments_dict(self.final_moments),
            "reactions": {
                "R" + node_label(node): float(value)
                for node, value in self.reactions.items()
            },
            "bmsf": {d.label: d.to_dict() for d in self.diagrams},
            "criticalPoints": [cp.to_dict() for cp in self.critical_points],
        }

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def moments_table(self) -> pd.DataFrame:
        """Fixed-end and final moment of every member end."""
        return pd.DataFrame(_moments_rows(self._fems_by_label(), self.final_moments))

    def reactions_table(self) -> pd.DataFrame:
        return pd.DataFrame([
            {"support": node_label(node), "reaction": float(value)}
            for node, value in self.reactions.items()
        ])

    def diagram_table(self) -> pd.DataFrame:
        """Long-form BMSF samples of every span."""
        return pd.DataFrame(_diagram_rows(self.diagrams))


@dataclass(frozen=True)
class FrameAnalysis:
    """Every stage output of one portal-frame run."""
    frame: PortalFrame
    fixed_end_moments: Dict[str, FixedEndMoment]
    equations: List[SlopeDeflectionEquation]
    boundary_equations: List[BoundaryEquation]
    shear_equation: LinearExpression
    solution: Solution
    final_moments: Dict[MemberEnd, float]
    reactions: FrameReactions
    diagrams: List[MemberDiagram]

    def moment(self, near: int, far: int) -> float:
        return self.final_moments[MemberEnd(near, far)]

    def diagram(self, label: str) -> MemberDiagram:
        for d in self.diagrams:
            if d.label == label:
                return d
        raise KeyError(label)

    def _reactions_dict(self) -> Dict[str, float]:
        result = {
            f"H{index + 1}": float(value)
            for index, value in self.reactions.horizontal.items()
        }
        for node, value in self.reactions.vertical.items():
            result["R" + node_label(node)] = float(value)
        return result

    def to_dict(self) -> Dict[str, Any]:
        """JSON-safe transport dict with display labels."""
        return {
            "fixedEndMoments": {
                label: {"start": fem.start, "end": fem.end}
                for label, fem in self.fixed_end_moments.items()
            },
            "slopeDeflectionEquations": _equations_dict(self.equations),
            "boundaryEquations": _boundary_dict(self.boundary_equations),
            "shearEquation": f"{self.shear_equation} = 0",
            "solution": self.solution.as_dict(),
            "finalMoments": _moments_dict(self.final_moments),
            "reactions": self._reactions_dict(),
            "bmsf": {d.label: d.to_dict() for d in self.diagrams},
        }

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def moments_table(self) -> pd.DataFrame:
        return pd.DataFrame(_moments_rows(self.fixed_end_moments, self.final_moments))

    def reactions_table(self) -> pd.DataFrame:
        return pd.DataFrame([
            {"reaction": label, "value": value}
            for label, value in self._reactions_dict().items()
        ])

    def diagram_table(self) -> pd.DataFrame:
        return pd.DataFrame(_diagram_rows(self.diagrams))
