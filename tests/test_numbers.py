import functools
import math
from fractions import Fraction

import pytest
import sympy

from burst_geometry import EngineConfig, get_engine_config, set_engine_config
from burst_geometry.kernel.numbers import (
    compare,
    divide,
    exact_sqrt,
    heading_direction,
    is_exact_zero,
    sign,
    to_exact,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (3, sympy.Integer(3)),
        (0.1, sympy.Rational(1, 10)),
        (-2.5, sympy.Rational(-5, 2)),
        (Fraction(2, 3), sympy.Rational(2, 3)),
        ("7/4", sympy.Rational(7, 4)),
        ("0.25", sympy.Rational(1, 4)),
    ],
)
def test_to_exact_reads_plain_numbers_as_rationals(value, expected):
    assert to_exact(value) == expected


def test_to_exact_keeps_algebraic_expressions():
    value = to_exact(sympy.sqrt(2) / 2)
    assert value == sympy.sqrt(2) / 2


@pytest.mark.parametrize("bad", [math.nan, math.inf, True, "x + 1", object(), sympy.I])
def test_to_exact_rejects_non_real_or_symbolic_values(bad):
    with pytest.raises(ValueError):
        to_exact(bad)


def test_sign_of_rationals():
    assert sign(sympy.Rational(-1, 3)) == -1
    assert sign(0) == 0
    assert sign(0.5) == 1


def test_sign_detects_exact_zero_hidden_in_radicals():
    # (1 + sqrt(2))^2 - 3 - 2*sqrt(2) is identically zero
    value = (1 + sympy.sqrt(2)) ** 2 - 3 - 2 * sympy.sqrt(2)
    assert sign(value) == 0
    nested = sympy.sqrt(3 + 2 * sympy.sqrt(2)) - 1 - sympy.sqrt(2)
    assert sign(nested) == 0
    assert is_exact_zero(sympy.expand(nested))


def test_sign_resolves_tiny_non_zero_values():
    tiny = sympy.sqrt(2) - sympy.Rational(14142135623730950488016887242097, 10**31)
    assert sign(tiny) == 1
    assert sign(-tiny) == -1


def test_sign_respects_configured_filter():
    original = get_engine_config()
    try:
        set_engine_config(EngineConfig(filter_digits=12, max_digits=48))
        assert sign(sympy.sqrt(5) - 2) == 1
    finally:
        set_engine_config(original)


def test_divide_rationalizes_radical_denominators():
    result = divide(1, sympy.sqrt(2))
    assert result == sympy.sqrt(2) / 2
    with pytest.raises(ZeroDivisionError):
        divide(1, sympy.sqrt(2) - sympy.sqrt(2))


def test_exact_sqrt_rejects_negative_values():
    assert exact_sqrt(4) == 2
    with pytest.raises(ValueError):
        exact_sqrt(-1)


def test_heading_direction_keeps_exact_angles_exact():
    cos_v, sin_v = heading_direction(sympy.pi / 4)
    assert cos_v == sympy.sqrt(2) / 2
    assert sin_v == sympy.sqrt(2) / 2
    assert heading_direction(0) == (1, 0)


def test_heading_direction_embeds_float_angles_as_rationals():
    cos_v, sin_v = heading_direction(math.pi / 3)
    assert cos_v.is_Rational and sin_v.is_Rational
    assert math.isclose(float(cos_v), 0.5, abs_tol=1e-15)
    assert math.isclose(float(sin_v), math.sqrt(3) / 2, abs_tol=1e-15)
    # unit length to far beyond double precision
    assert abs(float((cos_v**2 + sin_v**2 - 1) * 10**80)) < 1.0


def test_heading_direction_rejects_non_finite():
    with pytest.raises(ValueError):
        heading_direction(math.inf)


def test_compare_orders_exact_values():
    values = [sympy.sqrt(2), 1, sympy.Rational(7, 5), sympy.sqrt(8) / 2, 0.5]
    ordered = sorted(values, key=functools.cmp_to_key(compare))

    assert [float(v) for v in ordered] == pytest.approx([0.5, 1.0, 1.4, 2**0.5, 2**0.5])
    assert compare(sympy.sqrt(8) / 2, sympy.sqrt(2)) == 0
    assert compare(sympy.Rational(7, 5), sympy.sqrt(2)) == -1
    assert compare(3, 2.5) == 1
