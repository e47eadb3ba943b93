# slopedeflect/schemas.py
"""
Input models for beam and frame submissions.

Field names follow the camelCase transport (modulusOfElasticity, loadType,
pointLoadDistances, ...); snake_case names are accepted as well.

Two validation modes, selected through the pydantic validation context:

    draft   - structure and types only; zeros and half-filled forms pass
    compute - additionally every domain check in validation.py

    BeamInput.model_validate(payload, context={"mode": "draft"})
"""

from typing import Any, List, Mapping, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from .errors import InputError
from .model import (
    Column,
    ContinuousBeam,
    FrameBeam,
    LoadType,
    PointLoadDistances,
    PortalFrame,
    Span,
    SupportType,
)
from .validation import beam_issues, frame_issues

DRAFT = "draft"
COMPUTE = "compute"


def _mode(info: ValidationInfo) -> str:
    context = info.context or {}
    return context.get("mode", COMPUTE)


def _enum_key(value: Any) -> Any:
    # "CENTER_POINT" / "Center-Point" -> "center-point"
    if isinstance(value, str):
        return value.strip().lower().replace("_", "-")
    return value


class _TransportModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, allow_inf_nan=False
    )


class PointLoadDistancesInput(_TransportModel):
    a: Optional[float] = None
    b: Optional[float] = None


class _MemberInput(_TransportModel):
    length: float = 0.0
    moment_of_inertia: float = 1.0
    load_type: LoadType = LoadType.NONE
    load_magnitude: float = 0.0
    point_load_distances: Optional[PointLoadDistancesInput] = None

    @field_validator("load_type", mode="before")
    @classmethod
    def _normalise_load_type(cls, value):
        return _enum_key(value) or LoadType.NONE

    def _distances(self) -> Optional[PointLoadDistances]:
        d = self.point_load_distances
        if d is None:
            return None
        b = d.b
        if b is None and d.a is not None:
            b = self.length - d.a
        return PointLoadDistances(a=d.a, b=b)

    def _member_fields(self) -> dict:
        return dict(
            length=self.length,
            moment_of_inertia=self.moment_of_inertia,
            load_type=self.load_type,
            load_magnitude=self.load_magnitude,
            point_load_distances=self._distances(),
        )


class SpanInput(_MemberInput):
    start_support: SupportType = SupportType.FIXED
    end_support: SupportType = SupportType.FIXED

    @field_validator("start_support", "end_support", mode="before")
    @classmethod
    def _normalise_support(cls, value):
        return _enum_key(value)

    def to_model(self) -> Span:
        return Span(
            start_support=self.start_support,
            end_support=self.end_support,
            **self._member_fields(),
        )


class ColumnInput(_MemberInput):
    support_type: SupportType = SupportType.FIXED

    @field_validator("support_type", mode="before")
    @classmethod
    def _normalise_support(cls, value):
        return _enum_key(value)

    def to_model(self) -> Column:
        return Column(support_type=self.support_type, **self._member_fields())


class FrameBeamInput(_MemberInput):
    def to_model(self) -> FrameBeam:
        return FrameBeam(**self._member_fields())


class BeamInput(_TransportModel):
    """Continuous beam submission."""
    modulus_of_elasticity: float = 0.0
    moment_of_inertia: float = 0.0
    number_of_spans: Optional[int] = None
    spans: List[SpanInput] = Field(default_factory=list)
    sinking_supports: List[float] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_for_compute(self, info: ValidationInfo):
        if _mode(info) == COMPUTE:
            issues = self.issues()
            if issues:
                raise InputError(issues)
        return self

    def to_model(self) -> ContinuousBeam:
        return ContinuousBeam(
            modulus_of_elasticity=self.modulus_of_elasticity,
            moment_of_inertia=self.moment_of_inertia,
            spans=tuple(span.to_model() for span in self.spans),
            sinking_supports=tuple(self.sinking_supports),
        )

    def issues(self) -> List[str]:
        return beam_issues(self.to_model(), self.number_of_spans)


class FrameInput(_TransportModel):
    """Portal frame submission: two columns (left, right) and one beam."""
    columns: List[ColumnInput] = Field(default_factory=list)
    beams: List[FrameBeamInput] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_for_compute(self, info: ValidationInfo):
        if _mode(info) == COMPUTE:
            issues = self.issues()
            if issues:
                raise InputError(issues)
        return self

    def _count_issues(self) -> List[str]:
        issues = []
        if len(self.columns) != 2:
            issues.append(f"A portal frame needs exactly 2 columns, got {len(self.columns)}")
        if len(self.beams) != 1:
            issues.append(f"A portal frame needs exactly 1 beam, got {len(self.beams)}")
        return issues

    def to_model(self) -> PortalFrame:
        issues = self._count_issues()
        if issues:
            raise InputError(issues)
        return PortalFrame(
            columns=(self.columns[0].to_model(), self.columns[1].to_model()),
            beam=self.beams[0].to_model(),
        )

    def issues(self) -> List[str]:
        issues = self._count_issues()
        if issues:
            return issues
        return frame_issues(self.to_model())


def _issues_from(error: ValidationError) -> List[str]:
    issues = []
    for err in error.errors():
        cause = (err.get("ctx") or {}).get("error")
        if isinstance(cause, InputError):
            issues.extend(cause.issues)
            continue
        loc = ".".join(str(part) for part in err["loc"])
        issues.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return issues


def _validate(cls, payload, mode: str):
    if mode not in (DRAFT, COMPUTE):
        raise ValueError(f"mode must be {DRAFT!r} or {COMPUTE!r}, got {mode!r}")
    if isinstance(payload, cls):
        payload = payload.model_dump()
    try:
        return cls.model_validate(payload, context={"mode": mode})
    except ValidationError as e:
        raise InputError(_issues_from(e)) from e


def parse_beam(payload: Union[Mapping[str, Any], BeamInput], mode: str = COMPUTE) -> ContinuousBeam:
    """
    Validate a beam submission and build the ContinuousBeam.

    Raises:
    -------
    InputError
        On malformed input, and in compute mode on any domain issue
    """
    return _validate(BeamInput, payload, mode).to_model()


def parse_frame(payload: Union[Mapping[str, Any], FrameInput], mode: str = COMPUTE) -> PortalFrame:
    """Validate a frame submission and build the PortalFrame."""
    return _validate(FrameInput, payload, mode).to_model()


def draft_issues(payload: Union[Mapping[str, Any], BaseModel], kind: str = "beam") -> List[str]:
    """
    Issues that would block a compute-mode run, without raising.

    Safe to call on every keystroke of a half-filled form.
    """
    cls = {"beam": BeamInput, "frame": FrameInput}[kind]
    try:
        model = _validate(cls, payload, DRAFT)
    except InputError as e:
        return e.issues
    return model.issues()
