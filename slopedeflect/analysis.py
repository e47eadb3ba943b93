# slopedeflect/analysis.py
"""
ANALYSIS PIPELINE
=================

Runs every stage for one structure and returns the whole result bundle:

    1. fixed-end moments         (fem.py)
    2. slope-deflection eqs      (equations.py)
    3. joint / shear equations   (equations.py) solved by solve.py
    4. final end moments         (post.py)
    5. reactions                 (post.py)
    6. BMSF diagrams             (diagrams.py)

A run either returns a complete BeamAnalysis / FrameAnalysis or raises
(InputError before stage 1, SingularSystemError at stage 3). Nothing is
cached between runs.

USAGE:
------
    from slopedeflect import analyze_beam

    result = analyze_beam({
        "modulusOfElasticity": 200e6,
        "momentOfInertia": 1e-4,
        "numberOfSpans": 2,
        "spans": [...],
    })
    result.reactions      # {0: ..., 1: ..., 2: ...}
    result.to_dict()      # {"finalMoments": {"MAB": ...}, "reactions": {"RA": ...}, ...}
"""

import logging
from typing import Any, Mapping, Union

from .config import CONFIG
from .diagrams import critical_points, sample_member
from .equations import (
    beam_boundary_equations,
    beam_equations,
    beam_fixed_end_moments,
    beam_unknowns,
    frame_boundary_equations,
    frame_equations,
    frame_fixed_end_moments_all,
    frame_shear_equation,
    frame_unknowns,
)
from .model import B, C, ContinuousBeam, LoadType, MemberEnd, PortalFrame, node_label
from .post import beam_reactions, final_moments, frame_reactions, member_end_shears
from .results import BeamAnalysis, FrameAnalysis
from .schemas import parse_beam, parse_frame
from .solve import solve_equations
from .validation import require_valid_beam, require_valid_frame

logger = logging.getLogger(__name__)


def analyze_beam(beam: Union[ContinuousBeam, Mapping[str, Any]]) -> BeamAnalysis:
    """
    Analyse a continuous beam of 2 or 3 spans.

    Parameters:
    -----------
    beam : ContinuousBeam or mapping
        The beam, or a camelCase / snake_case submission dict

    Returns:
    --------
    BeamAnalysis

    Raises:
    -------
    InputError
        If the beam fails validation
    SingularSystemError
        If the supports leave the joint rotations undetermined
    """
    if isinstance(beam, ContinuousBeam):
        require_valid_beam(beam)
    else:
        beam = parse_beam(beam)

    logger.info("Analysing %d-span beam (EI=%g)", len(beam.spans), beam.ei)

    fems = beam_fixed_end_moments(beam)
    equations = beam_equations(beam, fems)
    boundary = beam_boundary_equations(beam, equations)
    solution = solve_equations(
        [eq.expression for eq in boundary], beam_unknowns(beam), beam.ei
    )

    moments = final_moments(equations, solution, beam.ei)
    reactions = beam_reactions(beam, moments)

    diagrams = []
    points = []
    offset = 0.0
    for index, span in enumerate(beam.spans):
        i, j = index, index + 1
        label = beam.span_label(index)
        m_start = moments[MemberEnd(i, j)]
        r_start, _ = member_end_shears(span, m_start, moments[MemberEnd(j, i)])

        diagrams.append(
            sample_member(span, m_start, r_start, CONFIG.beam_sample_points, label)
        )
        points.extend(critical_points(span, m_start, r_start, label, offset))
        offset += span.length

    return BeamAnalysis(
        beam=beam,
        fixed_end_moments=fems,
        equations=equations,
        boundary_equations=boundary,
        solution=solution,
        final_moments=moments,
        reactions=reactions,
        diagrams=diagrams,
        critical_points=points,
    )


def analyze_frame(frame: Union[PortalFrame, Mapping[str, Any]]) -> FrameAnalysis:
    """
    Analyse a single-bay portal frame with sway.

    EI is taken as 1: the solution holds EIθ and EIδ, and member moments of
    inertia enter only as relative stiffnesses.

    Raises:
    -------
    InputError
        If the frame fails validation
    SingularSystemError
        If the joint and shear equations have no unique solution
    """
    if isinstance(frame, PortalFrame):
        require_valid_frame(frame)
    else:
        frame = parse_frame(frame)

    logger.info(
        "Analysing portal frame (bases %s / %s, beam load %s)",
        frame.columns[0].support_type.value,
        frame.columns[1].support_type.value,
        frame.beam.load_type.value,
    )

    fems = frame_fixed_end_moments_all(frame)
    equations = frame_equations(frame, fems)
    boundary = frame_boundary_equations(frame, equations)
    shear = frame_shear_equation(frame, equations)

    system = [eq.expression for eq in boundary] + [shear]
    solution = solve_equations(system, frame_unknowns(frame), 1.0)

    moments = final_moments(equations, solution, 1.0, frame=frame)
    reactions = frame_reactions(frame, moments)

    diagrams = []
    for index, column in enumerate(frame.columns):
        base, top = frame.column_nodes(index)
        label = node_label(base) + node_label(top)
        # column "start shear" acts against the +x load
        diagrams.append(sample_member(
            column, moments[MemberEnd(base, top)], -reactions.horizontal[index],
            label=label,
        ))

    n_points = CONFIG.frame_udl_sample_points if frame.beam.load_type == LoadType.UDL else None
    diagrams.insert(1, sample_member(
        frame.beam, moments[MemberEnd(B, C)], reactions.vertical[frame.column_nodes(0)[0]],
        n_points, label="BC",
    ))

    return FrameAnalysis(
        frame=frame,
        fixed_end_moments=fems,
        equations=equations,
        boundary_equations=boundary,
        shear_equation=shear,
        solution=solution,
        final_moments=moments,
        reactions=reactions,
        diagrams=diagrams,
    )
