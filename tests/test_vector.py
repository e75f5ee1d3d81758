import dataclasses
import math

import pytest

from sphfluid.vector import Vector2f


A = Vector2f(1.5, -2.0)
B = Vector2f(0.25, 4.0)


def test_add_then_subtract_round_trip():
    assert (A + B) - B == A


def test_negation_cancels():
    assert -A + A == Vector2f()


def test_scalar_multiplication_commutes():
    assert 3 * A == A * 3


def test_division_inverts_multiplication():
    assert (A * 2.0) / 2.0 == A


def test_magnitude_of_worked_example():
    assert Vector2f(3.0, 4.0).magnitude() == pytest.approx(5.0)


def test_dot_with_self_is_squared_magnitude():
    assert A.dot(A) == pytest.approx(A.magnitude() ** 2)


def test_dot_of_perpendicular_vectors_is_zero():
    assert Vector2f(1.0, 0.0).dot(Vector2f(0.0, 1.0)) == 0.0


def test_normalize_has_unit_length_and_same_direction():
    unit = B.normalize()
    assert unit.magnitude() == pytest.approx(1.0)
    restored = unit * B.magnitude()
    assert restored.x == pytest.approx(B.x)
    assert restored.y == pytest.approx(B.y)


def test_normalize_zero_vector_gives_nan():
    unit = Vector2f().normalize()
    assert [math.isnan(component) for component in unit] == [True, True]


def test_division_by_zero_raises():
    assert A / 4.0 == Vector2f(0.375, -0.5)
    with pytest.raises(ZeroDivisionError):
        A / 0.0
    assert A == Vector2f(1.5, -2.0)


def test_vector_times_vector_is_rejected():
    assert A * 2.0 == Vector2f(3.0, -4.0)
    with pytest.raises(TypeError):
        A * B
    assert B == Vector2f(0.25, 4.0)


def test_ordering_by_magnitude():
    assert not Vector2f(-10.0, 0.0) < Vector2f(1.0, 1.0)
    assert Vector2f(1.0, 1.0) < Vector2f(0.0, -5.0)
    longest = Vector2f(0.0, -7.0)
    assert max([A, longest, B]) == longest


def test_iteration_yields_components():
    assert tuple(A) == (A.x, A.y)


def test_vector_is_immutable():
    vector = Vector2f(1.5, -2.0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        vector.x = 0.0  # type: ignore[misc]
    assert (vector.x, vector.y) == (1.5, -2.0)