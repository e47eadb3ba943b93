# slopedeflect/validation.py
"""Domain checks a structure must pass before it is analysed."""

import math
from typing import List, Optional

from .config import CONFIG
from .errors import InputError
from .model import (
    FRAME_BEAM_LOADS,
    FRAME_COLUMN_LOADS,
    ContinuousBeam,
    LoadType,
    Member,
    PortalFrame,
    SupportType,
)


def _not_finite(value: Optional[float]) -> bool:
    return value is not None and not math.isfinite(value)


def member_issues(member: Member, name: str) -> List[str]:
    """Positivity and point-load placement checks shared by every member."""
    issues = []
    fields = (
        ("length", member.length),
        ("moment of inertia", member.moment_of_inertia),
        ("load magnitude", member.load_magnitude),
    )
    d = member.point_load_distances
    if d is not None:
        fields += (("distance a", d.a), ("distance b", d.b))
    bad = [label for label, value in fields if _not_finite(value)]
    if bad:
        # NaN slips through every comparison below
        return [f"{name}: {label} must be a finite number" for label in bad]

    L = member.length
    if L <= 0:
        issues.append(f"{name}: length must be positive")
    if member.moment_of_inertia <= 0:
        issues.append(f"{name}: moment of inertia must be positive")
    if member.load_magnitude < 0:
        issues.append(f"{name}: load magnitude must not be negative")

    if member.load_type == LoadType.POINT_AT_DISTANCE:
        d = member.point_load_distances
        if d is None or (d.a is None and d.b is None):
            issues.append(f"{name}: point-at-distance load needs distance a or b")
        else:
            a = member.load_distance()
            if L > 0 and not 0.0 <= a <= L:
                issues.append(f"{name}: load distance {a:g} lies outside the member")
            if d.a is not None and d.b is not None:
                if abs(d.a + d.b - L) > CONFIG.distance_tolerance:
                    issues.append(f"{name}: distances a + b must equal the length {L:g}")
    return issues


def beam_issues(beam: ContinuousBeam, number_of_spans: Optional[int] = None) -> List[str]:
    """
    Everything that stops a continuous beam from being analysed.

    An empty list means the beam is ready for analysis.
    """
    issues = []
    if _not_finite(beam.modulus_of_elasticity):
        issues.append("Modulus of elasticity must be a finite number")
    elif beam.modulus_of_elasticity <= 0:
        issues.append("Modulus of elasticity must be positive")
    if _not_finite(beam.moment_of_inertia):
        issues.append("Moment of inertia must be a finite number")
    elif beam.moment_of_inertia <= 0:
        issues.append("Moment of inertia must be positive")

    n = len(beam.spans)
    if not CONFIG.min_spans <= n <= CONFIG.max_spans:
        issues.append(
            f"Number of spans must be between {CONFIG.min_spans} and {CONFIG.max_spans}, got {n}"
        )
        return issues
    if number_of_spans is not None and number_of_spans != n:
        issues.append(f"numberOfSpans is {number_of_spans} but {n} spans were given")

    if beam.sinking_supports and len(beam.sinking_supports) != n + 1:
        issues.append(
            f"sinkingSupports needs one entry per support ({n + 1}), "
            f"got {len(beam.sinking_supports)}"
        )
    for node, value in enumerate(beam.sinking_supports):
        if _not_finite(value):
            issues.append(f"sinkingSupports[{node}] must be a finite number")

    for index, span in enumerate(beam.spans):
        name = f"Span {beam.span_label(index)}"
        issues.extend(member_issues(span, name))
        if span.start_support == SupportType.NONE and span.end_support == SupportType.NONE:
            issues.append(f"{name}: a span needs at least one support")

    for index in range(n - 1):
        left, right = beam.spans[index], beam.spans[index + 1]
        node = beam.span_label(index)[1]
        if left.end_support != right.start_support:
            issues.append(
                f"Support {node}: span {beam.span_label(index)} ends on "
                f"{left.end_support.value} but span {beam.span_label(index + 1)} "
                f"starts on {right.start_support.value}"
            )
        if SupportType.NONE in (left.end_support, right.start_support):
            issues.append(f"Support {node}: an interior support cannot be 'none'")

    return issues


def frame_issues(frame: PortalFrame) -> List[str]:
    """Everything that stops a portal frame from being analysed."""
    issues = []
    for index, column in enumerate(frame.columns):
        name = f"Column {index + 1}"
        issues.extend(member_issues(column, name))
        if column.load_type not in FRAME_COLUMN_LOADS:
            issues.append(f"{name}: load type {column.load_type.value} is not available for columns")
        if column.support_type == SupportType.NONE:
            issues.append(f"{name}: a column must be supported")
        elif column.support_type.is_released and column.load_type != LoadType.NONE \
                and column.load_magnitude != 0:
            issues.append(
                f"{name}: a {column.support_type.value} column cannot carry a lateral load"
            )

    issues.extend(member_issues(frame.beam, "Beam"))
    if frame.beam.load_type not in FRAME_BEAM_LOADS:
        issues.append(f"Beam: load type {frame.beam.load_type.value} is not available for beams")
    return issues


def require_valid_beam(beam: ContinuousBeam, number_of_spans: Optional[int] = None) -> None:
    issues = beam_issues(beam, number_of_spans)
    if issues:
        raise InputError(issues)


def require_valid_frame(frame: PortalFrame) -> None:
    issues = frame_issues(frame)
    if issues:
        raise InputError(issues)
