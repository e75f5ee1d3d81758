import dataclasses

import pytest

from sphfluid.parameters import FluidParameters


def _params(**overrides):
    values = dict(
        gravity=9.8,
        damping=0.95,
        rest_density=1000.0,
        stiffness=1e3,
        viscosity=1e6,
        smoothing_radius=8.0,
    )
    values.update(overrides)
    return FluidParameters(**values)


def test_fields_are_stored():
    params = _params()
    assert params.gravity == 9.8
    assert params.damping == 0.95
    assert params.rest_density == 1000.0
    assert params.stiffness == 1e3
    assert params.viscosity == 1e6
    assert params.smoothing_radius == 8.0


@pytest.mark.parametrize("radius", [0.5, 1.0, 8.0, 32.0])
def test_squared_radius_follows_radius(radius):
    params = _params(smoothing_radius=radius)
    assert params.sq_smoothing_radius == pytest.approx(radius * radius)


def test_positional_order_matches_fields():
    params = FluidParameters(1.0, 2.0, 3.0, 4.0, 5.0, 6.0)
    assert (
        params.gravity,
        params.damping,
        params.rest_density,
        params.stiffness,
        params.viscosity,
        params.smoothing_radius,
    ) == (1.0, 2.0, 3.0, 4.0, 5.0, 6.0)


def test_parameters_are_immutable():
    params = _params()
    with pytest.raises(dataclasses.FrozenInstanceError):
        params.gravity = 1.0  # type: ignore[misc]
    assert params.gravity == 9.8


def test_equal_parameters_compare_equal():
    assert _params() == _params()
    assert _params() != _params(viscosity=1.0)