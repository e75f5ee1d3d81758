import math

import pytest

from sphfluid.boundary import Boundary, combined_positions
from sphfluid.vector import Vector2f


def _on_segment(p, a, b, tol=1e-9):
    ab = b - a
    ap = p - a
    cross = ab.x * ap.y - ab.y * ap.x
    if abs(cross) > tol:
        return False
    t = ap.dot(ab) / ab.dot(ab)
    return -tol <= t <= 1 + tol


def test_default_boundary_is_static_and_empty():
    b = Boundary(8.0)
    assert b.is_static is True
    assert b.mass == math.inf
    assert b.num_particles == 0
    assert b.positions == ()
    assert b.volumes == ()


def test_boundary_with_mass_is_dynamic():
    b = Boundary(8.0, 2.0, Vector2f(1.0, -1.0))
    assert b.is_static is False
    assert b.mass == 2.0
    assert b.velocity == Vector2f(1.0, -1.0)


def test_box_particle_count_and_center():
    b = Boundary(1.0)
    b.create_box(Vector2f(0.0, 0.0), Vector2f(2.0, 1.0))
    assert b.num_particles == 10
    assert b.num_particles == len(b.positions)
    assert b.center == Vector2f(1.0, 0.5)


def test_box_particles_lie_on_edges():
    c1, c2 = Vector2f(3.0, 4.0), Vector2f(-1.0, 1.0)
    b = Boundary(1.0)
    b.create_box(c1, c2, 0.5)
    for p in b.positions:
        on_vertical = p.x in (c1.x, c2.x) and min(c1.y, c2.y) <= p.y <= max(c1.y, c2.y)
        on_horizontal = p.y in (c1.y, c2.y) and min(c1.x, c2.x) <= p.x <= max(c1.x, c2.x)
        assert on_vertical or on_horizontal


def test_box_starts_at_first_corner():
    c1, c2 = Vector2f(5.0, 5.0), Vector2f(0.0, 0.0)
    b = Boundary(1.0)
    b.create_box(c1, c2)
    assert b.positions[0] == c1


def test_square_polygon_count_and_center():
    square = [
        Vector2f(0.0, 0.0),
        Vector2f(2.0, 0.0),
        Vector2f(2.0, 2.0),
        Vector2f(0.0, 2.0),
    ]
    b = Boundary(1.0)
    b.create_polygon(square)
    assert b.num_particles == 12
    assert b.center == Vector2f(1.0, 1.0)


def test_polygon_particles_lie_on_edges():
    tri = [Vector2f(0.0, 0.0), Vector2f(4.0, 0.0), Vector2f(0.0, 3.0)]
    b = Boundary(1.0)
    b.create_polygon(tri, 0.5)
    edges = list(zip(tri, tri[1:] + tri[:1]))
    assert b.num_particles > 0
    for p in b.positions:
        assert any(_on_segment(p, a, e) for a, e in edges)


def test_polygon_compression_is_clamped_to_one():
    tri = [Vector2f(0.0, 0.0), Vector2f(4.0, 0.0), Vector2f(0.0, 3.0)]
    capped = Boundary(1.0)
    capped.create_polygon(tri, 5.0)
    unit = Boundary(1.0)
    unit.create_polygon(tri, 1.0)
    assert capped.positions == unit.positions


def test_polygon_first_particle_is_first_vertex():
    verts = [Vector2f(1.0, 2.0), Vector2f(6.0, 2.0), Vector2f(6.0, 7.0)]
    b = Boundary(1.0)
    b.create_polygon(verts)
    assert b.positions[0] == verts[0]


def test_empty_polygon_has_nan_center():
    b = Boundary(1.0)
    b.create_polygon([])
    assert b.num_particles == 0
    assert math.isnan(b.center.x) and math.isnan(b.center.y)


def test_circle_particles_on_circle():
    origin = Vector2f(10.0, -5.0)
    b = Boundary(2.0)
    b.create_circle(origin, 10.0)
    assert b.num_particles > 0
    assert b.center == origin
    for p in b.positions:
        assert (p - origin).magnitude() == pytest.approx(10.0)
    assert b.positions[0] == Vector2f(20.0, -5.0)


def test_circle_denser_with_higher_compression():
    loose = Boundary(2.0)
    loose.create_circle(Vector2f(0.0, 0.0), 10.0, 0.5)
    dense = Boundary(2.0)
    dense.create_circle(Vector2f(0.0, 0.0), 10.0, 1.0)
    assert dense.num_particles > loose.num_particles


def test_shapes_accumulate():
    b = Boundary(1.0)
    b.create_box(Vector2f(0.0, 0.0), Vector2f(2.0, 1.0))
    first = b.num_particles
    b.create_box(Vector2f(0.0, 0.0), Vector2f(2.0, 1.0))
    assert b.num_particles == 2 * first


def test_activate_isolated_particles_volume():
    h = 2.0
    b = Boundary(h)
    # Two particles far apart: each only sees itself.
    b.create_polygon([Vector2f(0.0, 0.0), Vector2f(100.0, 0.0)], 0.01)
    b.activate()
    assert len(b.volumes) == b.num_particles
    isolated = math.pi * h * h / 4.0
    assert b.volumes[0] == pytest.approx(isolated)


def test_activate_volumes_positive_and_smaller_when_crowded():
    h = 4.0
    b = Boundary(h)
    b.create_circle(Vector2f(50.0, 50.0), 20.0)
    b.activate()
    assert len(b.volumes) == b.num_particles
    isolated = math.pi * h * h / 4.0
    for v in b.volumes:
        assert 0.0 < v < isolated


def test_static_boundary_ignores_force():
    b = Boundary(1.0)
    b.create_box(Vector2f(0.0, 0.0), Vector2f(2.0, 1.0))
    before = b.positions
    b.apply_force(Vector2f(100.0, 100.0), 0.1)
    assert b.positions == before
    assert b.velocity == Vector2f(0.0, 0.0)


def test_dynamic_boundary_moves_under_force():
    b = Boundary(1.0, 2.0)
    b.create_box(Vector2f(0.0, 0.0), Vector2f(2.0, 1.0))
    before = b.positions
    b.apply_force(Vector2f(4.0, 0.0), 0.5)
    assert b.velocity.x == pytest.approx(1.0)
    assert b.velocity.y == pytest.approx(0.0)
    for old, new in zip(before, b.positions):
        assert new.x == pytest.approx(old.x + 0.5)
        assert new.y == pytest.approx(old.y)


def test_dynamic_boundary_keeps_initial_velocity():
    b = Boundary(1.0, 1.0, Vector2f(0.0, 2.0))
    b.create_circle(Vector2f(0.0, 0.0), 3.0)
    before = b.positions
    b.apply_force(Vector2f(0.0, 0.0), 0.25)
    for old, new in zip(before, b.positions):
        assert new.y == pytest.approx(old.y + 0.5)


def test_combined_positions_concatenates():
    a = Boundary(1.0)
    a.create_box(Vector2f(0.0, 0.0), Vector2f(2.0, 1.0))
    c = Boundary(1.0)
    c.create_circle(Vector2f(5.0, 5.0), 2.0)
    combined = combined_positions([a, c])
    assert combined == list(a.positions) + list(c.positions)