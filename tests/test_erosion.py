import logging

import numpy as np
import pytest
import sympy

from burst_geometry import (
    BoundaryArc,
    BoundarySegment,
    Enclosure,
    Orientation,
    Point,
    construct_boundary,
)
from burst_geometry.kernel import sign

SQUARE = [(0, 0), (10, 0), (10, 10), (0, 10)]
ARROWHEAD = [(0, 20), (-20, -20), (0, 0), (20, -20)]
EROSION_LOGGER = "burst_geometry.cspace.erosion"


def _build(points, radius=1):
    return construct_boundary(Enclosure.create(points), radius)


def test_square_erodes_to_inner_square():
    boundary = _build(SQUARE)

    assert boundary is not None
    assert len(boundary) == 4
    assert all(isinstance(piece, BoundarySegment) for piece in boundary)
    assert [piece.edge_index for piece in boundary] == [0, 1, 2, 3]
    expected = [Point(1, 1), Point(9, 1), Point(9, 9), Point(1, 9)]
    assert all(a == b for a, b in zip(boundary.vertices, expected))
    assert boundary.orientation is Orientation.COUNTERCLOCKWISE
    assert boundary.bbox.to_float() == (1.0, 1.0, 9.0, 9.0)


def test_clockwise_input_gives_the_same_boundary():
    boundary = _build(list(reversed(SQUARE)))

    assert boundary is not None
    assert boundary.orientation is Orientation.COUNTERCLOCKWISE
    corners = [vertex.to_float() for vertex in boundary.vertices]
    assert sorted(corners) == [(1.0, 1.0), (1.0, 9.0), (9.0, 1.0), (9.0, 9.0)]


def test_arrowhead_has_one_arc_at_the_reflex_vertex():
    boundary = _build(ARROWHEAD)

    assert boundary is not None
    assert len(boundary.segments) == 4
    assert len(boundary.arcs) == 1
    arc = boundary.arcs[0]
    assert isinstance(arc, BoundaryArc)
    assert arc.center == Point(0, 0)
    assert arc.radius == 1
    assert arc.vertex_index == 2
    assert arc.orientation is Orientation.CLOCKWISE
    half = sympy.sqrt(2) / 2
    assert arc.source == Point(-half, half)
    assert arc.target == Point(half, half)

    apex = Point(0, 20 - sympy.sqrt(5))
    assert any(vertex == apex for vertex in boundary.vertices)
    assert sign(boundary.bbox.ymax - apex.y) == 0


def test_consecutive_pieces_never_share_a_source_feature():
    boundary = _build(ARROWHEAD)
    pieces = list(boundary)

    for previous, current in zip(pieces[-1:] + pieces[:-1], pieces):
        assert previous.target == current.source
        assert previous.feature != current.feature


def test_enclosure_smaller_than_robot_is_degenerate(caplog):
    caplog.set_level(logging.INFO, logger=EROSION_LOGGER)

    boundary = _build([(0, 0), (0.5, 0), (0.5, 0.5), (0, 0.5)])

    assert boundary is None
    assert "too small" in caplog.text


def test_tight_corridor_is_degenerate(caplog):
    caplog.set_level(logging.INFO, logger=EROSION_LOGGER)

    boundary = _build([(0, 0), (10, 0), (10, 2), (0, 2)])

    assert boundary is None
    assert "coincide" in caplog.text


def test_radius_equal_to_half_width_leaves_nothing():
    assert _build([(0, 0), (2, 0), (2, 2), (0, 2)]) is None


def test_short_edge_vanishes_from_the_boundary():
    # the chamfer at the top-right corner is too short to survive erosion
    boundary = _build([(0, 0), (10, 0), (10, 9.5), (9.5, 10), (0, 10)])

    assert boundary is not None
    assert [piece.edge_index for piece in boundary] == [0, 1, 3, 4]
    assert boundary.vertices[2] == Point(9, 9)


def test_narrow_corridor_splits_free_space(caplog):
    caplog.set_level(logging.INFO, logger=EROSION_LOGGER)
    dumbbell = [
        (0, 0),
        (10, 0),
        (10, 4),
        (20, 4),
        (20, 0),
        (30, 0),
        (30, 10),
        (20, 10),
        (20, 5.5),
        (10, 5.5),
        (10, 10),
        (0, 10),
    ]

    assert _build(dumbbell) is None
    assert "2 components" in caplog.text


def test_wide_corridor_keeps_one_component():
    dumbbell = [
        (0, 0),
        (10, 0),
        (10, 4),
        (20, 4),
        (20, 0),
        (30, 0),
        (30, 10),
        (20, 10),
        (20, 7),
        (10, 7),
        (10, 10),
        (0, 10),
    ]

    boundary = _build(dumbbell)

    assert boundary is not None
    assert len(boundary.arcs) == 4
    assert boundary.orientation is Orientation.COUNTERCLOCKWISE


@pytest.mark.parametrize("radius", [0, -1, -0.5])
def test_non_positive_radius_is_rejected(radius):
    with pytest.raises(ValueError):
        _build(SQUARE, radius)


def test_successful_construction_is_logged(caplog):
    caplog.set_level(logging.INFO, logger=EROSION_LOGGER)

    _build(ARROWHEAD)

    assert "4 segments, 1 arcs" in caplog.text


def test_polyline_approximation_is_closed():
    boundary = _build(ARROWHEAD)
    polyline = boundary.to_polyline(arc_steps=8)

    assert polyline.shape == (4 + 8 + 1, 2)
    assert np.allclose(polyline[0], polyline[-1])
    # arc samples stay on the unit circle around the reflex vertex
    radii = np.hypot(polyline[:, 0], polyline[:, 1])
    assert np.isclose(radii, 1.0).sum() >= 8


L_SHAPE = [(0, 0), (10, 0), (10, 4), (4, 4), (4, 10), (0, 10)]
SAWTOOTH = [(0, 0), (6, -6), (12, 0), (18, -6), (18, 12), (0, 12)]
STAR = [(0, -12), (3, -3), (12, 0), (3, 3), (0, 12), (-3, 3), (-12, 0), (-3, -3)]
SLANTED_PENTAGON = [(0, 0), (8, 1), (10, 7), (4, 11), (-2, 6)]


@pytest.mark.parametrize(
    "points, radius, arcs",
    [
        (L_SHAPE, 1, 1),
        (SAWTOOTH, 1, 1),
        (STAR, 1, 4),
        (SLANTED_PENTAGON, 1, 0),
        (SLANTED_PENTAGON, sympy.Rational(1, 2), 0),
        (ARROWHEAD, sympy.Rational(3, 2), 1),
    ],
)
def test_every_piece_keeps_exactly_the_robot_radius_from_its_source(points, radius, arcs):
    enclosure = Enclosure.create(points)
    boundary = construct_boundary(enclosure, radius)
    vertices = enclosure.counterclockwise()
    squared_radius = sympy.Rational(radius) ** 2

    assert boundary is not None
    assert boundary.orientation is Orientation.COUNTERCLOCKWISE
    assert len(boundary.arcs) == arcs
    for piece in boundary:
        if isinstance(piece, BoundaryArc):
            center = vertices[piece.vertex_index]
            assert piece.center == center
            assert sign(piece.radius - radius) == 0
            for end in (piece.source, piece.target):
                assert sign((end - center).squared_length() - squared_radius) == 0
            continue
        start = vertices[piece.edge_index]
        edge = vertices[(piece.edge_index + 1) % len(vertices)] - start
        for end in (piece.source, piece.target):
            offset = edge.cross(end - start)
            assert sign(offset) > 0
            assert sign(offset * offset - squared_radius * edge.squared_length()) == 0
