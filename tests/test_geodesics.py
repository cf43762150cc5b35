import math

import pytest

from relviz.constants import RAY_HORIZON_CUTOFF, RAY_STEPS
from relviz.errors import DomainError, InvalidArgument
from relviz.geodesics import (
    apparent_circles, apparent_position, curvature_grid, curved_radial_lines,
    observer_xy, trace_ray, trace_rays,
)
from relviz.metric import FieldConfig


def test_curvature_grid_omits_centre():
    grid = curvature_grid(FieldConfig(10))
    # 21 x 21 lattice with spacing 3; only the origin is inside r = 2
    assert len(grid) == 21 * 21 - 1
    assert all(math.hypot(p.x, p.y) >= 2.0 for p in grid)


def test_curvature_grid_depth_is_negative_potential():
    grid = curvature_grid(FieldConfig(10))
    point = next(p for p in grid if p.x == pytest.approx(3.0) and p.y == pytest.approx(0.0))
    assert point.z == pytest.approx(-10 / 3)


def test_curvature_grid_spin_tilt():
    flat = {(round(p.x, 6), round(p.y, 6)): p.z for p in curvature_grid(FieldConfig(10))}
    spun = {(round(p.x, 6), round(p.y, 6)): p.z for p in curvature_grid(FieldConfig(10, 1.0))}
    assert spun[(0.0, 3.0)] == pytest.approx(flat[(0.0, 3.0)] + 10 / 9)
    assert spun[(0.0, -3.0)] == pytest.approx(flat[(0.0, -3.0)] - 10 / 9)
    assert spun[(3.0, 0.0)] == pytest.approx(flat[(3.0, 0.0)])


def test_curvature_grid_is_reproducible():
    config = FieldConfig(7, 0.4)
    assert curvature_grid(config) == curvature_grid(config)


def test_curvature_grid_rejects_bad_resolution():
    with pytest.raises(InvalidArgument):
        curvature_grid(FieldConfig(10), resolution=0)


def test_ray_from_thirty_is_truncated_at_cutoff():
    path = trace_ray(10, 0.0, 30, 0.0)
    assert len(path) < RAY_STEPS + 1
    assert path[0].x == pytest.approx(30.0)
    for point in path:
        assert math.isfinite(point.x) and math.isfinite(point.y) and math.isfinite(point.z)
    for point in path[1:]:
        assert math.hypot(point.x, point.y) >= RAY_HORIZON_CUTOFF
    # one more step of 0.5 would have crossed the cutoff
    last = path[-1]
    assert math.hypot(last.x, last.y) < RAY_HORIZON_CUTOFF + 0.5 + 1e-9


def test_all_rays_finite_and_deterministic():
    first = trace_rays(10, 0.6, 30)
    second = trace_rays(10, 0.6, 30)
    assert first == second
    assert len(first) == 8
    for path in first:
        assert all(math.isfinite(p.x) and math.isfinite(p.y) for p in path)


def test_ray_steps_keep_light_speed():
    path = trace_ray(10, 0.5, 30, 1.0)
    for a, b in zip(path, path[1:]):
        assert math.hypot(b.x - a.x, b.y - a.y) == pytest.approx(0.5)


def test_spin_deflects_ray_sideways():
    straight = trace_ray(10, 0.0, 30, 0.0)
    dragged = trace_ray(10, 1.0, 30, 0.0)
    assert all(p.y == pytest.approx(0.0) for p in straight)
    assert any(abs(p.y) > 1e-6 for p in dragged)


def test_trace_ray_validation():
    with pytest.raises(InvalidArgument):
        trace_ray(0, 0.0, 30, 0.0)
    with pytest.raises(InvalidArgument):
        trace_ray(10, 0.0, 30, 0.0, steps=0)
    with pytest.raises(InvalidArgument):
        trace_rays(10, 0.0, 30, count=0)


def test_apparent_circles_shrink():
    circles = apparent_circles(10)
    assert circles[0] == (5, pytest.approx(4.0))
    assert all(apparent < radius for radius, apparent in circles)
    with pytest.raises(DomainError):
        apparent_circles(10, radii=(0,))


def test_curved_radial_lines_shape():
    lines = curved_radial_lines(10)
    assert len(lines) == 8
    assert all(len(line) == 99 for line in lines)
    # the 0 degree line has no sin component to bend it
    assert all(y == pytest.approx(0.0) for _, y in lines[0])
    x, y = lines[2][-1]
    assert math.hypot(x, y) == pytest.approx(50.0)


def test_apparent_position_of_other_observer():
    me = observer_xy(30, 0)
    other = observer_xy(20, 120)
    seen = apparent_position(me, other, 10)
    assert seen.distance == pytest.approx(math.sqrt(1900))
    assert seen.actual_x == pytest.approx(other[0] - 30)
    assert math.hypot(seen.x, seen.y) == pytest.approx(seen.distance - 1.0)


def test_apparent_position_rejects_coincident_observers():
    with pytest.raises(DomainError):
        apparent_position((5.0, 5.0), (5.0, 5.0), 10)
