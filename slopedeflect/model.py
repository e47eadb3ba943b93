# Span, Column, FrameBeam, ContinuousBeam, PortalFrame (frozen dataclasses)

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional, Tuple

NODE_LABELS = "ABCD"


def node_label(node: int) -> str:
    return NODE_LABELS[node]


class SupportType(str, Enum):
    FIXED = "fixed"
    HINGED = "hinged"
    ROLLER = "roller"
    NONE = "none"

    @property
    def is_released(self) -> bool:
        """Hinged and roller supports restrain translation but not rotation."""
        return self in (SupportType.HINGED, SupportType.ROLLER)


class LoadType(str, Enum):
    NONE = "none"
    CENTER_POINT = "center-point"
    POINT_AT_DISTANCE = "point-at-distance"
    TWO_POINT_LOADS = "two-point-loads"
    THREE_POINT_LOADS = "three-point-loads"
    UDL = "udl"
    VDL_RIGHT = "vdl-right"
    VDL_LEFT = "vdl-left"


FRAME_COLUMN_LOADS = frozenset({
    LoadType.NONE, LoadType.CENTER_POINT, LoadType.POINT_AT_DISTANCE,
})
FRAME_BEAM_LOADS = frozenset({
    LoadType.NONE, LoadType.CENTER_POINT, LoadType.POINT_AT_DISTANCE, LoadType.UDL,
})


class Unknown(str, Enum):
    """Unknowns of the joint equations, named as they appear in results."""
    THETA_A = "thetaA"
    THETA_B = "thetaB"
    THETA_C = "thetaC"
    THETA_D = "thetaD"
    DELTA = "delta"

    @property
    def marker(self) -> str:
        if self is Unknown.DELTA:
            return "EIδ"
        return "EIθ" + self.value[-1]

    @classmethod
    def theta(cls, node: int) -> "Unknown":
        return cls("theta" + node_label(node))


class MemberEnd(NamedTuple):
    """End `near` of the member running between nodes `near` and `far`."""
    near: int
    far: int

    @property
    def label(self) -> str:
        return "M" + node_label(self.near) + node_label(self.far)


@dataclass(frozen=True)
class PointLoadDistances:
    a: Optional[float] = None  # from member start
    b: Optional[float] = None  # from member end


@dataclass(frozen=True)
class Member:
    """
    Common fields of every loaded member.

    moment_of_inertia is a multiplier of the reference I (beams) or the
    relative I baked into the coefficients (frames, where EI = 1).
    """
    length: float
    moment_of_inertia: float = 1.0
    load_type: LoadType = LoadType.NONE
    load_magnitude: float = 0.0
    point_load_distances: Optional[PointLoadDistances] = None

    def load_distance(self) -> Optional[float]:
        """Distance of a point-at-distance load from the member start."""
        d = self.point_load_distances
        if d is None:
            return None
        if d.a is not None:
            return d.a
        if d.b is not None:
            return self.length - d.b
        return None


@dataclass(frozen=True)
class Span(Member):
    start_support: SupportType = SupportType.FIXED
    end_support: SupportType = SupportType.FIXED

    @property
    def is_cantilever(self) -> bool:
        return SupportType.NONE in (self.start_support, self.end_support)


@dataclass(frozen=True)
class ContinuousBeam:
    modulus_of_elasticity: float
    moment_of_inertia: float
    spans: Tuple[Span, ...]
    sinking_supports: Tuple[float, ...] = ()

    @property
    def ei(self) -> float:
        """E·I, unrounded; rounding would turn E·I < 0.5 into a singular system."""
        return self.modulus_of_elasticity * self.moment_of_inertia

    @property
    def n_nodes(self) -> int:
        return len(self.spans) + 1

    def node_support(self, node: int) -> SupportType:
        # the left span's end support governs an interior node
        if node == 0:
            return self.spans[0].start_support
        return self.spans[node - 1].end_support

    def settlement(self, node: int) -> float:
        if node < len(self.sinking_supports):
            return float(self.sinking_supports[node])
        return 0.0

    def span_label(self, index: int) -> str:
        return node_label(index) + node_label(index + 1)


@dataclass(frozen=True)
class Column(Member):
    """Vertical member loaded horizontally (+x); a is measured from the base."""
    support_type: SupportType = SupportType.FIXED


@dataclass(frozen=True)
class FrameBeam(Member):
    """Horizontal member loaded downward."""
    pass


# Portal frame node ids
A, B, C, D = 0, 1, 2, 3


@dataclass(frozen=True)
class PortalFrame:
    """
    Single-bay portal frame.

    Left column A (base) -> B (top), beam B -> C, right column D (base) -> C (top).
    """
    columns: Tuple[Column, Column]
    beam: FrameBeam

    # (base, top) node ids per column
    COLUMN_NODES = ((A, B), (D, C))

    def column_nodes(self, index: int) -> Tuple[int, int]:
        return self.COLUMN_NODES[index]
