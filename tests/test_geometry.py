"""Tests for the geometry kernel: vectors, edges and polygons."""

import math

import pytest

from nav2d import Edge, InvalidOperationError, MalformedInputError, Polygon, Vector, as_vector, clip, cross, dot, isclose

SAMPLE_VECTORS = [
    Vector(5, 6),
    Vector(-3.5, 2.25),
    Vector(1e-3, -7),
    Vector(123.456, 0.5),
]


@pytest.fixture
def edge():
    return Edge([0, 0], [3, 4])


@pytest.fixture
def triangle():
    return Polygon([[0, 0], [0, 12], [12, 0]])


class TestScalarHelpers:
    def test_isclose(self):
        assert isclose(5.456, 5.45600000001)
        assert isclose(-0.0, 0)
        assert not isclose(5.456, 5.4561)

    def test_clip(self):
        assert clip(2, 3, 2.5) == 2.5
        assert clip(2, 3, 4) == 3
        assert clip(2, 3, 1) == 2

    def test_dot_and_cross(self):
        v = Vector(5, 6)
        assert isclose(dot(v, v), 25 + 36)
        assert isclose(cross(v, v), 0)


class TestVector:
    def test_rejects_non_numeric_components(self):
        with pytest.raises(MalformedInputError):
            Vector("a", None)
        with pytest.raises(MalformedInputError):
            Vector(True, 1)

    def test_arithmetic_with_vectors_and_scalars(self):
        v = Vector(5, 6)
        assert v.add(v) == Vector(10, 12)
        assert v.add(4) == Vector(9, 10)
        assert v.sub(v) == Vector(0, 0)
        assert v.sub(4) == Vector(1, 2)
        assert v.mul(v) == Vector(25, 36)
        assert v.mul(4) == Vector(20, 24)
        assert v.div(v) == Vector(1, 1)
        assert v.div(2) == Vector(2.5, 3)
        assert v + 1 == Vector(6, 7)
        assert v - Vector(5, 6) == Vector(0, 0)

    def test_length_and_equals(self):
        v = Vector(5, 6)
        assert isclose(v.length(), math.sqrt(61))
        assert v.equals(Vector(5, 6 + 1e-10))
        assert not v.equals(Vector(100, 100))

    @pytest.mark.parametrize("a", SAMPLE_VECTORS)
    @pytest.mark.parametrize("b", SAMPLE_VECTORS)
    def test_add_sub_inverse_and_cross_antisymmetry(self, a, b):
        assert a.add(b).sub(b).equals(a)
        assert isclose(cross(a, b), -cross(b, a))
        assert isclose(dot(a, b), dot(b, a))

    def test_angle(self):
        assert isclose(Vector(1, 0).angle(Vector(0, 1)), math.pi / 2)
        assert isclose(Vector(1, 0).angle(Vector(-1, 0)), math.pi)
        assert isclose(Vector(1, 0).angle(Vector(1, 1)), math.pi / 4)
        assert isclose(Vector(1, 0).angle(Vector(0, -1)), math.pi / 2)
        assert isclose(Vector(0, -1).angle(Vector(1, 0)), math.pi / 2)

    def test_angle_stays_in_range_when_cosine_rounds_past_one(self):
        v = Vector(0.1, 0.7)
        assert Vector(0.3, 2.1).angle(v) == pytest.approx(0.0, abs=1e-7)

    def test_counterclockwise_angle(self):
        assert isclose(Vector(1, 0).counterclockwise_angle(Vector(0, 1)), math.pi / 2)
        assert isclose(Vector(1, 0).counterclockwise_angle(Vector(-1, 0)), math.pi)
        assert isclose(Vector(1, 0).counterclockwise_angle(Vector(1, 1)), math.pi / 4)
        assert isclose(Vector(1, 0).counterclockwise_angle(Vector(0, -1)), math.pi * 1.5)
        assert isclose(Vector(0, -1).counterclockwise_angle(Vector(1, 0)), math.pi / 2)

    @pytest.mark.parametrize("a", SAMPLE_VECTORS)
    @pytest.mark.parametrize("b", SAMPLE_VECTORS)
    def test_angle_ranges(self, a, b):
        assert 0 <= a.angle(b) <= math.pi
        ccw = a.counterclockwise_angle(b)
        assert 0 <= ccw < 2 * math.pi
        if not isclose(cross(a, b), 0):
            assert ccw + b.counterclockwise_angle(a) == pytest.approx(2 * math.pi)

    def test_angle_of_zero_vector_fails(self):
        with pytest.raises(InvalidOperationError):
            Vector(0, 0).angle(Vector(1, 0))
        with pytest.raises(InvalidOperationError):
            Vector(1, 0).counterclockwise_angle(Vector(0, 0))

    def test_as_vector_accepts_point_forms(self):
        class P:
            x = 1
            y = 2

        assert as_vector([1, 2]) == Vector(1, 2)
        assert as_vector((1, 2)) == Vector(1, 2)
        assert as_vector({"x": 1, "y": 2}) == Vector(1, 2)
        assert as_vector(P()) == Vector(1, 2)
        v = Vector(1, 2)
        assert as_vector(v) is v

    @pytest.mark.parametrize("bad", [[1], [1, 2, 3], {"x": 1}, "ab", None, [1, "2"]])
    def test_as_vector_rejects_malformed_points(self, bad):
        with pytest.raises(MalformedInputError):
            as_vector(bad)


class TestEdge:
    def test_length_and_direction(self, edge):
        assert edge.length() == 5
        assert edge.direction() == Vector(-3, -4)

    def test_on_edge(self, edge):
        assert edge.on_edge([1.5, 2])
        assert Edge([0, 0], [0, 2]).on_edge([0.000000001, 1])
        assert not edge.on_edge([1, 2])
        assert not edge.on_edge([6, 8])

    def test_parallel(self, edge):
        assert edge.parallel(edge)
        assert edge.parallel(Edge([0, 0], [-3, -4]))
        assert edge.parallel(Edge([1, 0], [4, 4]))
        assert not edge.parallel(Edge([0, 0], [1, 0]))

    def test_collinear(self, edge):
        assert edge.collinear(edge)
        assert edge.collinear(Edge([0, 0], [-3, -4]))
        assert not edge.collinear(Edge([1, 0], [4, 4]))
        assert not edge.collinear(Edge([0, 0], [1, 0]))

    def test_overlap_partial(self, edge):
        assert edge.overlap(Edge([1.5, 2], [6, 8])).equals(Edge([1.5, 2], [3, 4]))

    def test_overlap_identical_returns_same_segment(self, edge):
        assert edge.overlap(Edge([0, 0], [3, 4])).equals(edge)
        assert edge.overlap(Edge([3, 4], [0, 0])).equals(edge)

    def test_overlap_disjoint_is_none(self, edge):
        assert edge.overlap(Edge([-6, -8], [-3, -4])) is None

    def test_overlap_touching_end_to_end_is_degenerate(self, edge):
        touch = edge.overlap(Edge([3, 4], [6, 8]))
        assert touch is not None
        assert touch.length() == 0
        assert touch.p1.equals(Vector(3, 4))

    def test_overlap_requires_collinear_edges(self, edge):
        with pytest.raises(InvalidOperationError):
            edge.overlap(Edge([0, 0], [1, 0]))

    def test_equals_is_undirected(self, edge):
        assert edge.equals(Edge([3, 4], [0, 0]))
        assert not edge.equals(Edge([0, 0], [3, 5]))

    def test_identity_hashing(self):
        a = Edge([0, 0], [1, 1])
        b = Edge([0, 0], [1, 1])
        assert a != b
        assert len({a: 1, b: 2}) == 2


class TestPolygon:
    def test_construct_from_point_forms(self):
        Polygon([[0, 0], [0, 12], [12, 0]])
        Polygon([{"x": 0, "y": 0}, {"x": 0, "y": 12}, {"x": 12, "y": 0}])
        Polygon([Vector(0, 0), Vector(0, 12), Vector(12, 0)])

    def test_needs_three_points(self):
        with pytest.raises(MalformedInputError):
            Polygon([[0, 0], [1, 1]])

    def test_bounds(self, triangle):
        assert triangle.bounds == (0, 0, 12, 12)

    def test_bounds_size(self):
        assert Polygon([[10, 10], [10, 20], [15, 10]]).bounds_size() == (10, 10, 5, 10)

    def test_edges_wrap_from_last_point(self, triangle):
        assert [(e.p1, e.p2) for e in triangle.edges()] == [
            (Vector(12, 0), Vector(0, 0)),
            (Vector(0, 0), Vector(0, 12)),
            (Vector(0, 12), Vector(12, 0)),
        ]

    def test_edges_keep_identity(self, triangle):
        assert triangle.edges()[0] is triangle.edges()[0]

    def test_centroid_is_vertex_mean(self, triangle):
        assert triangle.centroid == Vector(4, 4)

    def test_centroid_distance(self, triangle):
        assert isclose(triangle.centroid_distance(triangle), 0)
        square = Polygon([[0, 0], [0, 10], [10, 10], [10, 0]])
        diamond = Polygon([[25, 15], [30, 20], [25, 25], [20, 20]])
        assert isclose(square.centroid_distance(diamond), 25)

    def test_on_edge(self, triangle):
        hit = triangle.on_edge([6, 6])
        assert hit is not None
        assert hit.equals(Edge([0, 12], [12, 0]))
        assert triangle.on_edge([7, 7]) is None
        assert triangle.on_edge([3, 3]) is None

    def test_contains(self, triangle):
        assert triangle.contains([0, 0])
        assert triangle.contains([1, 0])
        assert triangle.contains([1, 1])
        assert triangle.contains([6, 6])
        assert triangle.contains([0, 12])
        assert Polygon([[0, 0], [0, 12], [1, 0]]).contains([0, 12])

        assert not triangle.contains([-1, 0])
        assert not triangle.contains([6.1, 6])
        assert not triangle.contains([0, 12.001])
        assert not triangle.contains([500, 500])

    def test_contains_concave(self):
        u_shape = Polygon([[0, 0], [30, 0], [30, 30], [20, 30], [20, 10], [10, 10], [10, 30], [0, 30]])
        assert u_shape.contains([5, 25])
        assert u_shape.contains([25, 25])
        assert not u_shape.contains([15, 25])
        assert u_shape.contains([15, 10])

    def test_touches(self, triangle):
        touching = triangle.touches(Edge([6, 6], [3, 9]))
        assert touching is not None
        assert touching.equals(Edge([0, 12], [12, 0]))
        assert triangle.touches(Edge([6, 6], [9, 9])) is None
        assert triangle.touches(Edge([20, -8], [30, -18])) is None
