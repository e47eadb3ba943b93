"""
TEST: Input Models and Validation Modes
=======================================

Draft mode never raises on half-filled input; compute mode rejects every
input the engine cannot analyse.
"""

import pytest

from slopedeflect.errors import InputError
from slopedeflect.model import LoadType, SupportType
from slopedeflect.schemas import BeamInput, draft_issues, parse_beam, parse_frame


def _span(**overrides):
    span = {"length": 6, "momentOfInertia": 1, "loadType": "udl", "loadMagnitude": 10,
            "startSupport": "fixed", "endSupport": "fixed"}
    span.update(overrides)
    return span


def _beam(spans=None, **overrides):
    beam = {
        "modulusOfElasticity": 200e6,
        "momentOfInertia": 1e-4,
        "numberOfSpans": 2,
        "spans": spans if spans is not None else [_span(), _span()],
    }
    beam.update(overrides)
    return beam


def _frame(left=None, right=None, beam=None):
    column = {"length": 4, "momentOfInertia": 1, "supportType": "fixed", "loadType": "none"}
    return {
        "columns": [dict(column, **(left or {})), dict(column, **(right or {}))],
        "beams": [dict({"length": 6, "loadType": "udl", "loadMagnitude": 10}, **(beam or {}))],
    }


def test_parse_camel_case_beam():
    beam = parse_beam(_beam(sinkingSupports=[0, 0.01, 0]))
    assert beam.ei == pytest.approx(2e4)
    assert len(beam.spans) == 2
    assert beam.spans[0].load_type == LoadType.UDL
    assert beam.spans[1].end_support == SupportType.FIXED
    assert beam.settlement(1) == 0.01


def test_parse_snake_case_beam():
    beam = parse_beam({
        "modulus_of_elasticity": 1, "moment_of_inertia": 1,
        "spans": [
            {"length": 5, "load_type": "center-point", "load_magnitude": 8,
             "start_support": "hinged", "end_support": "roller"},
            {"length": 5, "start_support": "roller", "end_support": "fixed"},
        ],
    })
    assert beam.spans[0].load_type == LoadType.CENTER_POINT
    assert beam.spans[1].load_type == LoadType.NONE


def test_missing_b_is_completed():
    beam = parse_beam(_beam([
        _span(loadType="point-at-distance", pointLoadDistances={"a": 2}), _span(),
    ]))
    distances = beam.spans[0].point_load_distances
    assert distances.a == 2.0
    assert distances.b == pytest.approx(4.0)


def test_frame_accepts_uppercase_keys():
    frame = parse_frame(_frame(
        left={"loadType": "CENTER_POINT", "loadMagnitude": 5},
        right={"supportType": "HINGED"},
        beam={"loadType": "POINT_AT_DISTANCE", "pointLoadDistances": {"a": 2, "b": 4}},
    ))
    assert frame.columns[0].load_type == LoadType.CENTER_POINT
    assert frame.columns[1].support_type == SupportType.HINGED
    assert frame.beam.load_distance() == 2.0


@pytest.mark.parametrize("payload, fragment", [
    (_beam(modulusOfElasticity=0), "Modulus of elasticity"),
    (_beam([_span(length=0), _span()]), "length must be positive"),
    (_beam([_span(momentOfInertia=-1), _span()]), "moment of inertia must be positive"),
    (_beam([_span(loadMagnitude=-5), _span()]), "must not be negative"),
    (_beam(numberOfSpans=3), "numberOfSpans"),
    (_beam([_span()]), "Number of spans"),
    (_beam([_span(), _span(), _span(), _span()], numberOfSpans=4), "Number of spans"),
    (_beam(sinkingSupports=[0, 0]), "sinkingSupports"),
    (_beam([_span(endSupport="hinged"), _span()]), "starts on fixed"),
    (_beam([_span(endSupport="none"), _span(startSupport="none")]), "interior support"),
    (_beam([_span(startSupport="none", endSupport="none"), _span(startSupport="none")]),
     "at least one support"),
    (_beam([_span(loadType="point-at-distance"), _span()]), "needs distance"),
    (_beam([_span(loadType="point-at-distance", pointLoadDistances={"a": 2, "b": 3}), _span()]),
     "a + b"),
    (_beam([_span(loadType="point-at-distance", pointLoadDistances={"a": 9}), _span()]),
     "outside the member"),
])
def test_compute_mode_rejects(payload, fragment):
    with pytest.raises(InputError) as info:
        parse_beam(payload)
    assert any(fragment in issue for issue in info.value.issues), info.value.issues


@pytest.mark.parametrize("payload, fragment", [
    (_frame(left={"supportType": "none"}), "must be supported"),
    (_frame(left={"supportType": "hinged", "loadType": "center-point", "loadMagnitude": 5}),
     "cannot carry a lateral load"),
    (_frame(left={"loadType": "udl", "loadMagnitude": 5}), "not available for columns"),
    (_frame(beam={"loadType": "vdl-right"}), "not available for beams"),
    (_frame(beam={"length": 0}), "Beam: length must be positive"),
    ({"columns": [], "beams": []}, "exactly 2 columns"),
])
def test_compute_mode_rejects_frames(payload, fragment):
    with pytest.raises(InputError) as info:
        parse_frame(payload)
    assert any(fragment in issue for issue in info.value.issues), info.value.issues


@pytest.mark.parametrize("payload", [
    _beam(modulusOfElasticity="nan"),
    _beam(momentOfInertia=float("inf")),
    _beam([_span(length=float("nan")), _span()]),
    _beam([_span(loadMagnitude="nan"), _span()]),
    _beam([_span(momentOfInertia="-inf"), _span()]),
    _beam(sinkingSupports=[0, "nan", 0]),
    _beam([_span(loadType="point-at-distance", pointLoadDistances={"a": "nan"}), _span()]),
    _frame(left={"length": "inf"}),
    _frame(beam={"loadMagnitude": float("nan")}),
], ids=["E", "I", "length", "load", "span-I", "settlement", "distance", "column", "beam"])
def test_non_finite_numbers_rejected(payload):
    parse = parse_frame if "columns" in payload else parse_beam
    with pytest.raises(InputError) as info:
        parse(payload)
    assert any("finite number" in issue for issue in info.value.issues), info.value.issues


def test_structural_errors_are_reported():
    with pytest.raises(InputError) as info:
        parse_beam(_beam([_span(loadType="banana"), _span()]))
    assert any("loadType" in issue for issue in info.value.issues)


def test_draft_mode_accepts_partial_input():
    beam = parse_beam({"spans": [{"length": 0}, {}]}, mode="draft")
    assert len(beam.spans) == 2
    assert beam.modulus_of_elasticity == 0.0

    assert isinstance(BeamInput.model_validate({}, context={"mode": "draft"}), BeamInput)


def test_draft_issues_never_raise():
    assert draft_issues({}) != []
    assert draft_issues({"spans": [{"loadType": "banana"}]}) != []
    assert draft_issues({"columns": [{}]}, kind="frame") != []
    assert draft_issues(_beam()) == []
    assert draft_issues(_frame(), kind="frame") == []


def test_unknown_mode_rejected():
    with pytest.raises(ValueError):
        parse_beam(_beam(), mode="preview")
