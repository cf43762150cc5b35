import math

import pytest

from relviz.errors import DomainError, InvalidArgument, InvalidConfig
from relviz.metric import (
    FieldConfig, einstein_ring_radius, ergosphere_radius, escape_velocity,
    kerr_horizon_radii, observer_effects, photon_sphere_radius, potential,
    redshift, schwarzschild_radius, space_contraction, time_dilation,
)


def test_potential_positive_and_decreasing():
    radii = [0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 100.0]
    values = [potential(10, r) for r in radii]
    assert all(v > 0 for v in values)
    assert all(a > b for a, b in zip(values, values[1:]))


def test_potential_rejects_singular_radius():
    with pytest.raises(DomainError):
        potential(10, 0.0)
    with pytest.raises(DomainError):
        potential(10, -3.0)


def test_potential_rejects_non_positive_mass():
    with pytest.raises(InvalidArgument):
        potential(0, 10)


def test_time_dilation_at_least_one():
    assert time_dilation(0.0) == 1.0
    for p in (0.01, 0.5, 1.0, 2.5, 4.9):
        assert time_dilation(p, 0.1) > 1.0


def test_time_dilation_outside_domain_raises():
    with pytest.raises(DomainError):
        time_dilation(5.0, 0.1)
    with pytest.raises(DomainError):
        time_dilation(8.0, 0.1)
    with pytest.raises(DomainError):
        space_contraction(5.0, 0.1)


@pytest.mark.parametrize("p1,p2", [(0.333, 0.5), (0.1, 2.0), (1.0, 1.0), (4.0, 0.0)])
def test_redshift_swap_is_inverse(p1, p2):
    forward = redshift(p1, p2, 0.1)
    backward = redshift(p2, p1, 0.1)
    assert (1 + forward) * (1 + backward) == pytest.approx(1.0)


def test_redshift_positive_when_emitter_is_deeper():
    assert redshift(0.5, 0.1) > 0
    assert redshift(0.1, 0.5) < 0


def test_escape_velocity_below_light_speed():
    assert escape_velocity(0.5, 0.1) == pytest.approx(math.sqrt(0.1))
    assert escape_velocity(4.99, 0.1) < 1.0
    with pytest.raises(DomainError):
        escape_velocity(5.0, 0.1)
    with pytest.raises(DomainError):
        escape_velocity(-1.0, 0.1)


@pytest.mark.parametrize("func", [time_dilation, space_contraction])
def test_negative_potential_is_rejected(func):
    with pytest.raises(DomainError):
        func(-0.5, 0.1)


def test_redshift_rejects_negative_potential_on_either_side():
    with pytest.raises(DomainError):
        redshift(-0.5, 0.1)
    with pytest.raises(DomainError):
        redshift(0.1, -0.5)


def test_schwarzschild_radius_example():
    assert schwarzschild_radius(10, 0.1) == 2.0


def test_kerr_horizon_sub_extremal():
    outer, inner = kerr_horizon_radii(10, 0.5, 0.1)
    assert outer == pytest.approx((10 + math.sqrt(99.75)) * 0.1)
    assert outer == pytest.approx(1.99875, abs=1e-5)
    assert inner == pytest.approx((10 - math.sqrt(99.75)) * 0.1)


def test_kerr_horizon_extremal():
    outer, inner = kerr_horizon_radii(10, 10, 0.1)
    assert outer == 1.0
    assert inner == 1.0


def test_kerr_horizon_non_rotating_matches_schwarzschild():
    outer, inner = kerr_horizon_radii(10, 0, 0.1)
    assert outer == pytest.approx(schwarzschild_radius(10, 0.1))
    assert inner == 0.0


def test_kerr_naked_singularity_rejected():
    with pytest.raises(InvalidConfig):
        kerr_horizon_radii(10, 10.5, 0.1)
    with pytest.raises(DomainError):
        kerr_horizon_radii(1, 2, 0.1)


def test_derived_radii():
    assert photon_sphere_radius(10) == pytest.approx(3.0)
    assert einstein_ring_radius(10) == pytest.approx(4.0)
    assert ergosphere_radius(10, 0.0) == pytest.approx(4.0)
    assert ergosphere_radius(10, 1.0) == pytest.approx(2.0)
    with pytest.raises(InvalidConfig):
        ergosphere_radius(10, 1.5)


def test_field_config_validation():
    assert FieldConfig(10).spin == 0.0
    with pytest.raises(InvalidArgument):
        FieldConfig(0)
    with pytest.raises(InvalidArgument):
        FieldConfig(-5, 0.2)
    with pytest.raises(InvalidConfig):
        FieldConfig(10, 1.5)


def test_observer_effects_example():
    effects = observer_effects(30, 20, 120, FieldConfig(10), 0.1)

    assert effects.observer1.potential == pytest.approx(1 / 3)
    assert effects.observer2.potential == pytest.approx(0.5)
    assert effects.observer1.time_dilation == pytest.approx(math.sqrt(15 / 14))
    assert effects.observer2.time_dilation == pytest.approx(1.0541, abs=1e-4)
    assert effects.relative_time_dilation == pytest.approx(1.01835, abs=1e-5)
    # observer 2 sits deeper, so its clock is the slow one
    assert effects.relative_time_dilation > 1

    assert effects.observer2.x == pytest.approx(-10.0)
    assert effects.observer2.y == pytest.approx(20 * math.sin(math.radians(120)))
    assert effects.distance == pytest.approx(math.sqrt(1900))

    delay = (1 / 3 + 0.5) / 2 * 0.1
    assert effects.light_travel_time == pytest.approx(math.sqrt(1900) * (1 + delay))
    assert effects.proper_distance == pytest.approx(math.sqrt(1900) / (1 + delay))
    assert effects.redshift == pytest.approx(redshift(1 / 3, 0.5))
    assert effects.observer1.space_contraction == pytest.approx(1 / effects.observer1.time_dilation)


def test_observer_effects_inside_horizon_raises():
    with pytest.raises(DomainError):
        observer_effects(30, 5, 90, FieldConfig(50), 0.1)
