"""
TEST: Bending Moment and Shear Force Diagrams
=============================================

Checks sample_member, zero_shear_positions and critical_points against
closed-form results, and the diagrams attached to full analyses.
"""

import math

import numpy as np
import pytest

from slopedeflect import analyze_beam, analyze_frame
from slopedeflect.diagrams import critical_points, sample_member, zero_shear_positions
from slopedeflect.model import (
    Column,
    ContinuousBeam,
    FrameBeam,
    LoadType,
    PortalFrame,
    Span,
    SupportType,
)
from slopedeflect.post import member_end_shears


def test_simply_supported_udl():
    """M_max = wL²/8 at midspan, V = ±wL/2 at the ends."""
    span = Span(length=6.0, load_type=LoadType.UDL, load_magnitude=10.0)
    diagram = sample_member(span, 0.0, 30.0, n_points=100, label="AB")

    assert diagram.x[0] == 0.0 and diagram.x[-1] == 6.0
    assert np.all(np.diff(diagram.x) >= 0)
    assert diagram.max_moment == pytest.approx(45.0)
    assert diagram.shear_force[0] == pytest.approx(30.0)
    assert diagram.shear_force[-1] == pytest.approx(-30.0)
    assert diagram.bending_moment[-1] == pytest.approx(0.0, abs=1e-9)
    assert 3.0 in diagram.x


def test_center_point_load_exact_breakpoints():
    span = Span(length=4.0, load_type=LoadType.CENTER_POINT, load_magnitude=10.0)
    diagram = sample_member(span, 0.0, 5.0)

    np.testing.assert_allclose(diagram.x, [0.0, 2.0, 2.0, 4.0])
    np.testing.assert_allclose(diagram.shear_force, [5.0, 5.0, -5.0, -5.0])
    np.testing.assert_allclose(diagram.bending_moment, [0.0, 10.0, 10.0, 0.0])


def test_dense_sampling_keeps_point_load_jump():
    span = Span(length=6.0, load_type=LoadType.TWO_POINT_LOADS, load_magnitude=9.0)
    diagram = sample_member(span, 0.0, 9.0, n_points=100)
    at_first_load = np.where(diagram.x == 2.0)[0]
    assert len(at_first_load) == 2
    np.testing.assert_allclose(diagram.shear_force[at_first_load], [9.0, 0.0])


def test_vdl_zero_shear_positions():
    """Simply supported triangular load: maximum at L/√3 from the zero end."""
    L, w = 6.0, 10.0
    right = Span(length=L, load_type=LoadType.VDL_RIGHT, load_magnitude=w)
    left = Span(length=L, load_type=LoadType.VDL_LEFT, load_magnitude=w)

    assert zero_shear_positions(right, 10.0) == [pytest.approx(L / math.sqrt(3.0))]
    assert zero_shear_positions(left, 20.0) == [pytest.approx(L - L / math.sqrt(3.0))]

    points = critical_points(right, 0.0, 10.0, "AB")
    peak = [cp for cp in points if cp.location.startswith("Maximum")][0]
    assert peak.bending_moment == pytest.approx(w * L * L / (9.0 * math.sqrt(3.0)))
    assert peak.shear_force == 0.0


def test_point_load_zero_shear_at_load():
    span = Span(length=6.0, load_type=LoadType.THREE_POINT_LOADS, load_magnitude=10.0)
    # symmetric: R = 15, shear changes sign at the middle load
    assert zero_shear_positions(span, 15.0) == [3.0]


def test_member_end_shears():
    span = Span(length=6.0, load_type=LoadType.UDL, load_magnitude=10.0)
    assert member_end_shears(span, -30.0, 30.0) == pytest.approx((30.0, 30.0))
    assert member_end_shears(span, 0.0, 45.0) == pytest.approx((22.5, 37.5))


def test_critical_points_of_two_span_beam():
    beam = ContinuousBeam(1.0, 1.0, tuple(
        Span(length=6.0, load_type=LoadType.UDL, load_magnitude=10.0,
             start_support=SupportType.HINGED, end_support=SupportType.HINGED)
        for _ in range(2)
    ))
    result = analyze_beam(beam)

    locations = [cp.location for cp in result.critical_points]
    assert locations[0] == "Start of span AB"
    assert "Maximum moment in span AB" in locations
    assert locations[-1] == "End of span BC"

    peak = result.critical_points[locations.index("Maximum moment in span AB")]
    assert peak.position == pytest.approx(2.25)
    assert peak.bending_moment == pytest.approx(9.0 * 10.0 * 36.0 / 128.0)

    # positions are measured along the whole beam
    second = result.critical_points[locations.index("Maximum moment in span BC")]
    assert second.position == pytest.approx(6.0 + 3.75)

    ab = result.diagrams[0]
    assert len(ab.x) >= 100
    # hogging support moment at B equals -M_BA
    assert ab.bending_moment[-1] == pytest.approx(-result.moment(1, 0))


def test_point_load_critical_points_named():
    span = Span(length=6.0, load_type=LoadType.TWO_POINT_LOADS, load_magnitude=9.0)
    names = [cp.location for cp in critical_points(span, 0.0, 9.0, "BC", offset=6.0)]
    assert names == [
        "Start of span BC",
        "First point load in span BC",
        "Second point load in span BC",
        "End of span BC",
    ]


def test_frame_diagrams():
    frame = PortalFrame(
        columns=(Column(length=4.0), Column(length=4.0)),
        beam=FrameBeam(length=6.0, load_type=LoadType.UDL, load_magnitude=10.0),
    )
    result = analyze_frame(frame)

    assert [d.label for d in result.diagrams] == ["AB", "BC", "DC"]
    column = result.diagram("AB")
    np.testing.assert_allclose(column.x, [0.0, 4.0])
    assert column.bending_moment[0] == pytest.approx(11.25)
    assert column.bending_moment[-1] == pytest.approx(-22.5)

    beam = result.diagram("BC")
    assert len(beam.x) >= 21
    # midspan moment: wL²/8 - 22.5
    assert beam.max_moment == pytest.approx(45.0 - 22.5)
