# slopedeflect/expressions.py
"""
LINEAR EXPRESSIONS OVER THE JOINT UNKNOWNS
==========================================

Every slope-deflection equation is a flat linear sum:

    constant + c_A·EIθA + c_B·EIθB + c_C·EIθC + c_D·EIθD + c_δ·EIδ + k·EI

The pipeline carries these as LinearExpression objects (a constant plus a
sparse coefficient mapping keyed by Unknown). Text is only a display
rendering, e.g.

    -30.00 + 0.67EIθB + 0.33EIθC - 0.0833EI

parse_equation reads such text back. The grammar is deliberately small:
signed terms separated by + or -, each term an optional number followed by
an optional marker (EIθA, EIθB, EIθC, EIθD, EIδ or a bare EI). No
parentheses, no products of unknowns. Anything else is an
EquationParseError, never a silently dropped coefficient.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, Mapping, NamedTuple, Optional, Tuple

from .config import CONFIG
from .errors import EquationParseError
from .model import Unknown

UNKNOWN_ORDER: Tuple[Unknown, ...] = (
    Unknown.THETA_A, Unknown.THETA_B, Unknown.THETA_C, Unknown.THETA_D, Unknown.DELTA,
)

_MARKERS = {u.marker: u for u in UNKNOWN_ORDER}

_NUMBER = r"(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?"
_TERM = re.compile(
    r"(?P<sign>[+-]?)(?P<number>" + _NUMBER + r")?(?P<marker>EIθ[ABCD]|EIδ|EI)?"
)


def _collapse_signs(text: str) -> str:
    # "a + -b" -> "a-b", "a - -b" -> "a+b"
    previous = None
    while previous != text:
        previous = text
        text = (text.replace("+-", "-").replace("-+", "-")
                    .replace("--", "+").replace("++", "+"))
    return text


def _format_number(value: float, precision: Optional[int]) -> str:
    if precision is None:
        return repr(float(value))
    return f"{value:.{precision}f}"


@dataclass(frozen=True)
class LinearExpression:
    """
    Sparse linear expression over the joint unknowns.

    Attributes:
    -----------
    constant : float
        Load-derived constant (kN·m)
    coefficients : Mapping[Unknown, float]
        Multiplier of EI·unknown for each unknown present
    ei_constant : float
        Multiplier of a bare EI term (support settlement)
    """
    constant: float = 0.0
    coefficients: Mapping[Unknown, float] = field(default_factory=dict)
    ei_constant: float = 0.0

    @classmethod
    def term(cls, unknown: Unknown, coefficient: float) -> "LinearExpression":
        return cls(coefficients={unknown: float(coefficient)})

    def coefficient(self, unknown: Unknown) -> float:
        return self.coefficients.get(unknown, 0.0)

    @property
    def unknowns(self) -> Tuple[Unknown, ...]:
        return tuple(u for u in UNKNOWN_ORDER if self.coefficient(u) != 0.0)

    def __add__(self, other: "LinearExpression") -> "LinearExpression":
        coeffs: Dict[Unknown, float] = dict(self.coefficients)
        for u, c in other.coefficients.items():
            coeffs[u] = coeffs.get(u, 0.0) + c
        return LinearExpression(
            constant=self.constant + other.constant,
            coefficients=coeffs,
            ei_constant=self.ei_constant + other.ei_constant,
        )

    def scaled(self, factor: float) -> "LinearExpression":
        return LinearExpression(
            constant=self.constant * factor,
            coefficients={u: c * factor for u, c in self.coefficients.items()},
            ei_constant=self.ei_constant * factor,
        )

    def evaluate(self, values: Mapping[Unknown, float], ei: float = 1.0) -> float:
        """constant + EI·(ei_constant + Σ coefficient·value)"""
        total = self.ei_constant
        for u, c in self.coefficients.items():
            total += c * values.get(u, 0.0)
        return self.constant + ei * total

    def render(self, precision: Optional[int] = None) -> str:
        """
        Display text of the expression.

        precision=None prints every number at full precision so that
        parse_equation recovers the coefficients exactly. With a precision the
        constant and θ/δ coefficients use that many decimals and the bare EI
        term uses CONFIG.settlement_precision.
        """
        ei_precision = None if precision is None else CONFIG.settlement_precision
        terms = []
        if self.constant != 0.0:
            terms.append((self.constant, _format_number(abs(self.constant), precision)))
        for u in self.unknowns:
            c = self.coefficient(u)
            if abs(c) == 1.0:
                text = u.marker
            else:
                text = _format_number(abs(c), precision) + u.marker
            terms.append((c, text))
        if self.ei_constant != 0.0:
            terms.append((self.ei_constant,
                          _format_number(abs(self.ei_constant), ei_precision) + "EI"))

        if not terms:
            return _format_number(0.0, precision)

        first_value, first_text = terms[0]
        parts = [("-" if first_value < 0 else "") + first_text]
        for value, text in terms[1:]:
            parts.append((" - " if value < 0 else " + ") + text)
        return "".join(parts)

    def __str__(self) -> str:
        return self.render(CONFIG.display_precision)

    @classmethod
    def parse(cls, text: str) -> "LinearExpression":
        """Rebuild an expression from its rendered text."""
        constant, coeffs, ei_constant = _parse_terms(text)
        return cls(constant=constant, coefficients=coeffs, ei_constant=ei_constant)


class ParsedEquation(NamedTuple):
    """Coefficients recovered from an equation string, scaled by EI."""
    constant: float
    theta_a: float
    theta_b: float
    theta_c: float
    theta_d: float
    delta: float


def _parse_terms(text: str) -> Tuple[float, Dict[Unknown, float], float]:
    equation = text
    body = re.sub(r"\s+", "", text)

    rhs = 0.0
    if "=" in body:
        body, _, right = body.partition("=")
        try:
            rhs = float(right) if right else 0.0
        except ValueError:
            raise EquationParseError(equation, right) from None

    body = _collapse_signs(body)
    constant = -rhs
    coeffs: Dict[Unknown, float] = {}
    ei_constant = 0.0

    pos = 0
    while pos < len(body):
        match = _TERM.match(body, pos)
        term = match.group(0)
        number = match.group("number")
        marker = match.group("marker")
        # a term needs content, and every term after the first needs a sign
        if (number is None and marker is None) or (pos > 0 and not match.group("sign")):
            raise EquationParseError(equation, body[pos:])

        sign = -1.0 if match.group("sign") == "-" else 1.0
        value = sign * (float(number) if number is not None else 1.0)

        if marker is None:
            constant += value
        elif marker == "EI":
            ei_constant += value
        else:
            u = _MARKERS[marker]
            coeffs[u] = coeffs.get(u, 0.0) + value

        pos += len(term)

    return constant, coeffs, ei_constant


def parse_equation(text: str, ei: float = 1.0) -> ParsedEquation:
    """
    Parse a rendered equation into its coefficients.

    Parameters:
    -----------
    text : str
        Flat signed sum, optionally followed by "= <number>"
    ei : float
        EI value; unknown coefficients are multiplied by it and bare EI
        terms are folded into the constant

    Returns:
    --------
    ParsedEquation

    Raises:
    -------
    EquationParseError
        If any term falls outside the grammar

    Examples:
    --------
    >>> parse_equation("-30.00 + 0.67EIθB + EIθC")
    ParsedEquation(constant=-30.0, theta_a=0.0, theta_b=0.67, theta_c=1.0, theta_d=0.0, delta=0.0)
    """
    constant, coeffs, ei_constant = _parse_terms(text)
    return ParsedEquation(
        constant=constant + ei_constant * ei,
        theta_a=coeffs.get(Unknown.THETA_A, 0.0) * ei,
        theta_b=coeffs.get(Unknown.THETA_B, 0.0) * ei,
        theta_c=coeffs.get(Unknown.THETA_C, 0.0) * ei,
        theta_d=coeffs.get(Unknown.THETA_D, 0.0) * ei,
        delta=coeffs.get(Unknown.DELTA, 0.0) * ei,
    )
