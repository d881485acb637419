"""Pytest fixtures for nav2d tests."""

import pytest

from nav2d import NavMesh

# Two triangles sharing an edge with a third one, plus a far-away island.
SMALL_MESH = [
    [(0, 0), (0, 12), (12, 0)],
    [(12, 8), (12, 4), (16, 6)],
    [(12, 0), (6, 6), (12, 6)],
    [(100, 100), (110, 100), (100, 110)],
]

# Three unit squares of side 10 forming an L: A (0,0)-(10,10), B east of A,
# C north of B.
L_SHAPE = [
    [(0, 0), (0, 10), (10, 10), (10, 0)],
    [(10, 0), (10, 10), (20, 10), (20, 0)],
    [(10, 10), (10, 20), (20, 20), (20, 10)],
]


def grid_squares(n, size=10):
    """Return ``n * n`` axis-aligned squares tiling ``[0, n*size]^2``."""

    squares = []
    for x in range(n):
        for y in range(n):
            squares.append(
                [
                    (x * size, y * size),
                    (x * size, y * size + size),
                    (x * size + size, y * size + size),
                    (x * size + size, y * size),
                ]
            )
    return squares


@pytest.fixture
def small_mesh():
    return NavMesh(SMALL_MESH, triangulate=False)


@pytest.fixture
def l_mesh():
    return NavMesh(L_SHAPE, triangulate=False)


@pytest.fixture
def small_mesh_polygons():
    return [list(poly) for poly in SMALL_MESH]


@pytest.fixture
def make_grid():
    return grid_squares
