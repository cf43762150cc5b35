import math
import random

import pytest

from relviz.constants import SPAWN_RADIUS_MAX, SPAWN_RADIUS_MIN, TRAIL_CAPACITY
from relviz.errors import InvalidArgument
from relviz.particles import Particle, acceleration, respawn, spawn_particles, step_particles


def test_spawn_particles_in_band_with_tangential_velocity():
    particles = spawn_particles(40, 0.3, random.Random(3))
    assert len(particles) == 40
    for p in particles:
        assert SPAWN_RADIUS_MIN <= p.radius() <= SPAWN_RADIUS_MAX
        assert p.x * p.vx + p.y * p.vy == pytest.approx(0.0, abs=1e-9)
        assert 0.3 * 0.8 - 1e-9 <= math.hypot(p.vx, p.vy) <= 0.3 * 1.2 + 1e-9
        assert len(p.trail) == 0


def test_spawn_particles_rejects_empty_population():
    with pytest.raises(InvalidArgument):
        spawn_particles(0)


def test_population_is_invariant():
    rng = random.Random(11)
    particles = spawn_particles(60, 0.3, rng)
    for _ in range(500):
        result = step_particles(particles, 0.1, 10, 0.5, rng=rng)
        assert result is particles
        assert len(particles) == 60


def test_trail_never_exceeds_capacity():
    rng = random.Random(5)
    particles = spawn_particles(30, 0.3, rng)
    for _ in range(TRAIL_CAPACITY + 15):
        step_particles(particles, 0.1, 10, rng=rng)
        assert all(len(p.trail) <= TRAIL_CAPACITY for p in particles)


def test_trail_drops_oldest_position():
    p = Particle(20.0, 0.0, 0.0, 0.7)
    positions = []
    for _ in range(TRAIL_CAPACITY + 5):
        positions.append(p.pos())
        step_particles([p], 0.1, 10)
    assert len(p.trail) == TRAIL_CAPACITY
    assert list(p.trail) == positions[-TRAIL_CAPACITY:]


def test_single_euler_step():
    p = Particle(10.0, 0.0, 0.0, 1.0)
    step_particles([p], 0.1, 10)
    assert p.vx == pytest.approx(-0.01)
    assert p.vy == pytest.approx(1.0)
    assert p.x == pytest.approx(9.999)
    assert p.y == pytest.approx(0.1)
    assert list(p.trail) == [(10.0, 0.0)]


def test_frame_dragging_pushes_counter_clockwise():
    ax, ay = acceleration(10.0, 0.0, 10, 0.0)
    assert (ax, ay) == (pytest.approx(-0.1), pytest.approx(0.0))
    ax, ay = acceleration(10.0, 0.0, 10, 1.0)
    assert ax == pytest.approx(-0.1)
    assert ay == pytest.approx(10.0 * 0.01 * 0.2)


def test_particle_inside_horizon_is_respawned():
    p = Particle(0.5, 0.5, 0.0, 0.0, color=(1, 2, 3), size=2.5)
    p.trail.extend([(1.0, 1.0), (0.7, 0.7)])
    step_particles([p], 0.1, 10, rng=random.Random(1))
    assert SPAWN_RADIUS_MIN <= p.radius() <= SPAWN_RADIUS_MAX
    assert len(p.trail) == 0
    assert p.color == (1, 2, 3)
    assert p.size == 2.5
    assert p.x * p.vx + p.y * p.vy == pytest.approx(0.0, abs=1e-9)


def test_respawn_is_deterministic_with_seeded_rng():
    a = respawn(Particle(0.0, 0.0, 0.0, 0.0), 0.3, random.Random(42))
    b = respawn(Particle(0.0, 0.0, 0.0, 0.0), 0.3, random.Random(42))
    assert (a.x, a.y, a.vx, a.vy) == (b.x, b.y, b.vx, b.vy)


def test_particle_at_origin_is_respawned_not_divided_by_zero():
    p = Particle(0.0, 0.0, 0.0, 0.0)
    step_particles([p], 0.1, 0.001, rng=random.Random(2))
    assert p.radius() >= SPAWN_RADIUS_MIN


@pytest.mark.parametrize("dt", [0.0, -0.1])
def test_step_rejects_non_positive_dt(dt):
    particles = spawn_particles(5, rng=random.Random(0))
    before = [(p.x, p.y) for p in particles]
    with pytest.raises(InvalidArgument):
        step_particles(particles, dt, 10)
    assert [(p.x, p.y) for p in particles] == before


def test_step_rejects_non_positive_mass():
    with pytest.raises(InvalidArgument):
        step_particles(spawn_particles(5, rng=random.Random(0)), 0.1, 0)
