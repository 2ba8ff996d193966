import logging

import numpy as np
import pytest
import sympy

from burst_geometry import Point
from burst_geometry.logging_utils import _safe_repr, apply_debug_logging, debug_log_call


def test_safe_repr_shortens_exact_values():
    long_value = sympy.sqrt(2) + sympy.Rational(10**40 + 1, 10**40)

    assert _safe_repr(sympy.Rational(1, 3)) == "1/3"
    assert _safe_repr(long_value).startswith("~2.414")
    assert _safe_repr(Point(1, sympy.Rational(1, 2))) == "Point(1, 1/2)"


def test_safe_repr_summarizes_arrays():
    rendered = _safe_repr(np.zeros((10, 2)))
    assert "shape=(10, 2)" in rendered
    assert "min=0" in rendered


def test_debug_log_call_records_entry_and_exit(caplog):
    logger = logging.getLogger("tests.debug_log_call")

    @debug_log_call(logger)
    def add(a, b=1):
        return a + b

    with caplog.at_level(logging.DEBUG, logger="tests.debug_log_call"):
        assert add(2, b=3) == 5

    assert "Entering" in caplog.text
    assert "kwargs={b=3}" in caplog.text
    assert "-> 5" in caplog.text


def test_debug_log_call_logs_and_reraises(caplog):
    logger = logging.getLogger("tests.debug_log_call.errors")

    @debug_log_call(logger)
    def fail():
        raise RuntimeError("boom")

    with caplog.at_level(logging.DEBUG, logger="tests.debug_log_call.errors"):
        with pytest.raises(RuntimeError):
            fail()
    assert "Exception in" in caplog.text


def test_apply_debug_logging_wraps_only_named_callables():
    def helper():
        return 1

    class Walker:
        def step(self):
            return 2

        @staticmethod
        def scale(value):
            return value * 3

        def untouched(self):
            return 4

    namespace = {"__name__": "tests.fake_module", "helper": helper, "other": helper, "Walker": Walker}

    apply_debug_logging(namespace, "helper", "Walker.step", "Walker.scale")

    assert getattr(namespace["helper"], "_debug_logging_wrapped", False)
    assert namespace["other"] is helper
    assert getattr(Walker.__dict__["step"], "_debug_logging_wrapped", False)
    assert isinstance(Walker.__dict__["scale"], staticmethod)
    assert not getattr(Walker.__dict__["untouched"], "_debug_logging_wrapped", False)
    assert namespace["helper"]() == 1
    assert Walker().step() == 2
    assert Walker.scale(2) == 6


def test_apply_debug_logging_rejects_unknown_or_non_callable_names():
    class Holder:
        value = 3

        @property
        def size(self):
            return 1

    namespace = {"__name__": "tests.fake_module", "Holder": Holder, "number": 5}

    with pytest.raises(KeyError):
        apply_debug_logging(namespace, "missing")
    with pytest.raises(KeyError):
        apply_debug_logging(namespace, "Holder.missing")
    with pytest.raises(TypeError):
        apply_debug_logging(namespace, "number")
    with pytest.raises(TypeError):
        apply_debug_logging(namespace, "Holder.size")


def test_boundary_queries_emit_debug_records(caplog):
    from burst_geometry import Enclosure, Ray, construct_boundary

    boundary = construct_boundary(Enclosure.create([(0, 0), (10, 0), (10, 10), (0, 10)]), 1)
    with caplog.at_level(logging.DEBUG, logger="burst_geometry.cspace.boundary"):
        boundary.count_crossings(Ray((5, 5), (1, 0)))
    assert "Boundary.count_crossings" in caplog.text
    assert "Boundary(pieces=4)" in caplog.text
