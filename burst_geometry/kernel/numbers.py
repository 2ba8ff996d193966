"""Exact scalar arithmetic backing every geometric predicate.

Coordinates are ``sympy`` expressions: rationals for input data and real
algebraic numbers (possibly nested square roots) for constructed points.
Signs are decided by a high-precision numeric filter first and by an exact
algebraic zero test only when the filter cannot certify the answer.
"""

from __future__ import annotations

import math
import numbers
from fractions import Fraction
from typing import Tuple, Union

import sympy
from sympy.polys.polyerrors import NotAlgebraic

from ..config import _current_config

Scalar = sympy.Expr
ScalarLike = Union[int, float, Fraction, str, sympy.Expr]

ZERO = sympy.Integer(0)
ONE = sympy.Integer(1)
TWO = sympy.Integer(2)

_ZERO_PROBE = sympy.Symbol("zero_probe")


def _rationalize_floats(expr: sympy.Expr) -> sympy.Expr:
    floats = expr.atoms(sympy.Float)
    if not floats:
        return expr
    return expr.xreplace({value: sympy.Rational(value) for value in floats})


def to_exact(value: ScalarLike) -> Scalar:
    """Return ``value`` as an exact real ``sympy`` scalar.

    Python floats are read through their shortest ``repr`` (``0.1`` becomes
    ``1/10``); ``sympy.Float`` atoms keep their exact binary value.
    """

    if isinstance(value, bool):
        raise ValueError("booleans are not scalars")
    if isinstance(value, sympy.Basic):
        expr = value
    elif isinstance(value, numbers.Integral):
        return sympy.Integer(int(value))
    elif isinstance(value, Fraction):
        return sympy.Rational(value.numerator, value.denominator)
    elif isinstance(value, numbers.Real):
        as_float = float(value)
        if not math.isfinite(as_float):
            raise ValueError(f"non-finite scalar {value!r}")
        return sympy.Rational(repr(as_float))
    elif isinstance(value, str):
        try:
            expr = sympy.sympify(value, rational=True)
        except (sympy.SympifyError, SyntaxError, TypeError) as exc:
            raise ValueError(f"cannot parse scalar {value!r}") from exc
    else:
        raise ValueError(f"unsupported scalar type {type(value).__name__}")

    if not isinstance(expr, sympy.Expr) or expr.free_symbols:
        raise ValueError(f"scalar must be a closed numeric expression, got {expr!r}")
    if expr.has(sympy.zoo, sympy.nan, sympy.oo, -sympy.oo):
        raise ValueError(f"non-finite scalar {expr!r}")
    if expr.is_real is False:
        raise ValueError(f"scalar must be real, got {expr!r}")
    return _rationalize_floats(expr)


def _certified(approx: sympy.Expr, digits: int) -> bool:
    if not approx.is_Number or approx == 0:
        return False
    return bool(abs(approx) > sympy.Rational(1, 10 ** (digits // 2)))


def is_exact_zero(value: Scalar) -> bool:
    """Decide ``value == 0`` exactly through its minimal polynomial."""

    try:
        poly = sympy.minimal_polynomial(value, _ZERO_PROBE)
    except (NotAlgebraic, NotImplementedError):
        return bool(value.equals(0))
    return poly == _ZERO_PROBE


def sign(value: ScalarLike) -> int:
    """Return the exact sign (-1, 0 or 1) of ``value``."""

    expr = simplify(value)
    if expr.is_Rational:
        return (expr.p > 0) - (expr.p < 0)

    config = _current_config()
    digits = config.filter_digits
    # Cheap escalation first: most non-zero values clear the filter here.
    for _ in range(3):
        approx = expr.evalf(digits)
        if _certified(approx, digits):
            return 1 if approx.is_positive else -1
        digits *= 2
    if is_exact_zero(expr):
        return 0
    while digits <= config.max_digits:
        approx = expr.evalf(digits)
        if _certified(approx, digits):
            return 1 if approx.is_positive else -1
        digits *= 2
    raise ArithmeticError(f"sign undecided at {config.max_digits} digits: {expr}")


def compare(lhs: ScalarLike, rhs: ScalarLike) -> int:
    """Three-way exact comparison, usable with ``functools.cmp_to_key``."""
    return sign(simplify(lhs) - simplify(rhs))


def simplify(value: ScalarLike) -> Scalar:
    """Canonical expanded form; sympy expressions skip input validation."""
    if isinstance(value, sympy.Expr) and not isinstance(value, sympy.Float):
        return value if value.is_Rational else sympy.expand(value)
    return sympy.expand(to_exact(value))


def divide(numerator: ScalarLike, denominator: ScalarLike) -> Scalar:
    """Exact quotient with the denominator rationalized when it carries radicals."""

    numer = simplify(numerator)
    denom = simplify(denominator)
    if sign(denom) == 0:
        raise ZeroDivisionError("exact division by zero")
    if denom.is_Rational:
        return sympy.expand(numer / denom)
    return sympy.expand(sympy.radsimp(numer / denom))


def exact_sqrt(value: ScalarLike) -> Scalar:
    expr = simplify(value)
    if sign(expr) < 0:
        raise ValueError(f"square root of negative scalar {expr}")
    return sympy.sqrt(expr)


def exact_abs(value: ScalarLike) -> Scalar:
    expr = simplify(value)
    return -expr if sign(expr) < 0 else expr


def embed(value: ScalarLike, digits: int) -> Scalar:
    """Re-embed a transcendental result into the exact representation.

    Rational and algebraic values are kept as they are; anything else is
    evaluated to ``digits`` significant digits and stored as the exact
    rational of that approximation.
    """

    expr = sympy.sympify(value)
    if expr.is_Rational:
        return expr
    if expr.is_Float:
        return sympy.Rational(expr)
    if expr.is_algebraic:
        return sympy.expand(expr)
    return sympy.Rational(expr.evalf(digits))


def heading_direction(heading: ScalarLike) -> Tuple[Scalar, Scalar]:
    """Return the exact (cos, sin) direction for ``heading`` in radians."""

    digits = _current_config().heading_digits
    if isinstance(heading, sympy.Basic):
        angle = heading
        if angle.free_symbols:
            raise ValueError(f"heading must be numeric, got {heading!r}")
    elif isinstance(heading, numbers.Real) and not isinstance(heading, bool):
        if not math.isfinite(float(heading)):
            raise ValueError(f"non-finite heading {heading!r}")
        angle = sympy.Float(heading, digits)
    else:
        raise ValueError(f"unsupported heading type {type(heading).__name__}")
    return embed(sympy.cos(angle), digits), embed(sympy.sin(angle), digits)


__all__ = [
    "Scalar",
    "ScalarLike",
    "ZERO",
    "ONE",
    "TWO",
    "to_exact",
    "sign",
    "compare",
    "simplify",
    "divide",
    "exact_sqrt",
    "exact_abs",
    "embed",
    "heading_direction",
    "is_exact_zero",
]
