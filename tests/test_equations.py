# File: tests/test_equations.py
"""
Test the equations.py module: slope-deflection equations, joint equations and
the frame shear equation.
"""

import numpy as np
import pytest

from slopedeflect.equations import (
    beam_boundary_equations,
    beam_equations,
    beam_unknowns,
    frame_boundary_equations,
    frame_equations,
    frame_shear_equation,
    frame_unknowns,
    slope_deflection_pair,
)
from slopedeflect.expressions import LinearExpression
from slopedeflect.fem import FixedEndMoment
from slopedeflect.model import (
    Column,
    ContinuousBeam,
    FrameBeam,
    LoadType,
    MemberEnd,
    PortalFrame,
    Span,
    SupportType,
    Unknown,
)

F, H, N = SupportType.FIXED, SupportType.HINGED, SupportType.NONE


def _beam(supports, L=6.0, w=10.0, settlements=(), E=1.0, I=1.0):
    spans = tuple(
        Span(length=L, load_type=LoadType.UDL, load_magnitude=w,
             start_support=supports[k], end_support=supports[k + 1])
        for k in range(len(supports) - 1)
    )
    return ContinuousBeam(E, I, spans, tuple(settlements))


def _frame(base=F):
    return PortalFrame(
        columns=(Column(length=4.0, support_type=base), Column(length=4.0, support_type=base)),
        beam=FrameBeam(length=6.0, load_type=LoadType.UDL, load_magnitude=10.0),
    )


def test_slope_deflection_pair():
    start, end = slope_deflection_pair(
        FixedEndMoment(-30.0, 30.0), 6.0, 1.0, Unknown.THETA_B, Unknown.THETA_C
    )
    assert start.constant == -30.0
    assert start.coefficient(Unknown.THETA_B) == pytest.approx(2.0 / 3.0)
    assert start.coefficient(Unknown.THETA_C) == pytest.approx(1.0 / 3.0)
    assert end.coefficient(Unknown.THETA_B) == pytest.approx(1.0 / 3.0)
    assert end.coefficient(Unknown.THETA_C) == pytest.approx(2.0 / 3.0)


def test_relative_inertia_scales_stiffness():
    start, _ = slope_deflection_pair(FixedEndMoment(0.0, 0.0), 6.0, 3.0, Unknown.THETA_B, None)
    assert start.coefficient(Unknown.THETA_B) == pytest.approx(2.0)


def test_fixed_nodes_have_no_rotation_terms():
    beam = _beam([F, H, H, F])
    eqs = beam_equations(beam)
    assert [eq.label for eq in eqs] == ["AB", "BC", "CD"]
    assert eqs[0].start.unknowns == (Unknown.THETA_B,)
    assert eqs[1].start.unknowns == (Unknown.THETA_B, Unknown.THETA_C)
    assert eqs[2].end.unknowns == (Unknown.THETA_C,)
    assert eqs[0].start_equation == "-30.00 + 0.33EIθB"
    assert eqs[0].end_equation == "30.00 + 0.67EIθB"


def test_beam_unknowns():
    assert beam_unknowns(_beam([F, H, H, F])) == (Unknown.THETA_B, Unknown.THETA_C)
    assert beam_unknowns(_beam([F, H, H, H])) == (
        Unknown.THETA_B, Unknown.THETA_C, Unknown.THETA_D)
    assert beam_unknowns(_beam([H, H, H])) == (
        Unknown.THETA_A, Unknown.THETA_B, Unknown.THETA_C)
    assert beam_unknowns(_beam([F, SupportType.ROLLER, F])) == (Unknown.THETA_B,)


def test_boundary_equations_sum_member_ends():
    beam = _beam([F, H, H, H])
    eqs = beam_equations(beam)
    boundary = beam_boundary_equations(beam, eqs)
    assert [b.unknown for b in boundary] == [Unknown.THETA_B, Unknown.THETA_C, Unknown.THETA_D]

    # ΣM_B = M_BA + M_BC
    expected = eqs[0].end + eqs[1].start
    assert boundary[0].expression == expected
    # released end: M_DC = 0
    assert boundary[2].expression == eqs[2].end
    assert str(boundary[2]).endswith(" = 0")


def test_settlement_term():
    """Settlement Δ of B: -(2/L)(3Δ/L)·EI on span AB, opposite sign on BC."""
    beam = _beam([F, F, F], settlements=(0.0, 0.01, 0.0))
    ab, bc = beam_equations(beam)
    expected = -(2.0 / 6.0) * 3.0 * 0.01 / 6.0
    assert ab.start.ei_constant == pytest.approx(expected)
    assert ab.end.ei_constant == pytest.approx(expected)
    assert bc.start.ei_constant == pytest.approx(-expected)
    assert ab.start_equation == "-30.00 - 0.0017EI"


def test_cantilever_span_is_statically_determinate():
    beam = ContinuousBeam(1.0, 1.0, (
        Span(length=6.0, load_type=LoadType.UDL, load_magnitude=10.0,
             start_support=F, end_support=H),
        Span(length=2.0, load_type=LoadType.UDL, load_magnitude=10.0,
             start_support=H, end_support=N),
    ))
    _, overhang = beam_equations(beam)
    assert overhang.start == LinearExpression(constant=-20.0)
    assert overhang.end == LinearExpression(constant=0.0)
    assert beam_unknowns(beam) == (Unknown.THETA_B,)


def test_frame_unknowns():
    assert frame_unknowns(_frame()) == (Unknown.THETA_B, Unknown.THETA_C, Unknown.DELTA)
    assert frame_unknowns(_frame(H)) == (
        Unknown.THETA_A, Unknown.THETA_B, Unknown.THETA_C, Unknown.THETA_D, Unknown.DELTA)


def test_frame_equations_carry_sway_on_columns_only():
    eqs = frame_equations(_frame())
    assert [eq.label for eq in eqs] == ["AB", "BC", "DC"]
    left, beam, right = eqs

    sway = -(2.0 / 4.0) * (3.0 / 4.0)
    assert left.start.coefficient(Unknown.DELTA) == pytest.approx(sway)
    assert left.end.coefficient(Unknown.DELTA) == pytest.approx(sway)
    assert right.start.coefficient(Unknown.DELTA) == pytest.approx(sway)
    assert beam.start.coefficient(Unknown.DELTA) == 0.0
    assert beam.start.constant == -30.0

    # columns run base -> top
    assert left.start_end == MemberEnd(0, 1)
    assert right.start_end == MemberEnd(3, 2)


def test_frame_boundary_and_shear_equations():
    frame = _frame(H)
    eqs = frame_equations(frame)
    boundary = frame_boundary_equations(frame, eqs)
    assert [b.node for b in boundary] == [0, 1, 2, 3]

    shear = frame_shear_equation(frame, eqs)
    # (M_AB + M_BA)/h + (M_DC + M_CD)/h with no column loads
    expected = (eqs[0].start + eqs[0].end + eqs[2].start + eqs[2].end).scaled(0.25)
    for u in (Unknown.THETA_A, Unknown.THETA_B, Unknown.DELTA):
        assert shear.coefficient(u) == pytest.approx(expected.coefficient(u))
    assert shear.constant == pytest.approx(0.0)


def test_shear_equation_includes_column_load():
    frame = PortalFrame(
        columns=(Column(length=4.0, load_type=LoadType.CENTER_POINT, load_magnitude=20.0),
                 Column(length=4.0)),
        beam=FrameBeam(length=6.0),
    )
    eqs = frame_equations(frame)
    shear = frame_shear_equation(frame, eqs)
    # column FEMs cancel in M_AB + M_BA; the load adds W·x̄/h = 20·2/4
    assert shear.constant == pytest.approx(10.0)


def test_generated_equations_round_trip():
    """Full-precision text of every equation parses back to the same values."""
    beam = _beam([H, H, H, H], settlements=(0.0, 0.004, 0.01, 0.0), E=200.0, I=0.5)
    values = {Unknown.THETA_A: 0.3, Unknown.THETA_B: -1.2,
              Unknown.THETA_C: 2.5, Unknown.THETA_D: 0.7}
    for eq in beam_equations(beam):
        for expr in (eq.start, eq.end):
            parsed = LinearExpression.parse(expr.render())
            assert np.isclose(parsed.evaluate(values, beam.ei), expr.evaluate(values, beam.ei))
            assert parsed.constant == expr.constant
