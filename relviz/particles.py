"""
Test particles orbiting a central mass.

Each step applies a Newtonian-style pull (-position * mass / r^3), an optional
frame-dragging push perpendicular to the radius, and an explicit Euler update.
A particle that falls inside the horizon is respawned on a fresh quasi-circular
orbit in the same step, so the population never shrinks.
"""

import colorsys
import logging
import math
import random
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Tuple

from .constants import (
    DEFAULT_PARTICLE_SPEED, DRAG_COEFFICIENT, RADIUS_EPSILON, SCALE_FACTOR,
    SPAWN_RADIUS_MAX, SPAWN_RADIUS_MIN, TRAIL_CAPACITY,
)
from .errors import InvalidArgument
from .metric import schwarzschild_radius

logger = logging.getLogger(__name__)


@dataclass
class Particle:
    x: float
    y: float
    vx: float
    vy: float
    color: Tuple[int, int, int] = (200, 220, 255)
    size: float = 2.0
    # oldest positions fall off the left end
    trail: Deque[Tuple[float, float]] = field(
        default_factory=lambda: deque(maxlen=TRAIL_CAPACITY))

    def pos(self):
        return (self.x, self.y)

    def radius(self):
        return math.hypot(self.x, self.y)


def rainbow(fraction):
    r, g, b = colorsys.hsv_to_rgb(fraction % 1.0, 0.75, 1.0)
    return (int(r * 255), int(g * 255), int(b * 255))


def _orbit_sample(speed, rng):
    # random point in the spawn band moving tangentially (counter-clockwise)
    angle = rng.random() * 2.0 * math.pi
    distance = SPAWN_RADIUS_MIN + rng.random() * (SPAWN_RADIUS_MAX - SPAWN_RADIUS_MIN)
    x = distance * math.cos(angle)
    y = distance * math.sin(angle)
    v = speed * (0.8 + 0.4 * rng.random())
    return x, y, -y * v / distance, x * v / distance


def spawn_particles(count, speed=DEFAULT_PARTICLE_SPEED, rng=None):
    if count <= 0:
        raise InvalidArgument(f"particle count must be positive, got {count}")
    rng = rng or random
    particles = []
    for i in range(count):
        x, y, vx, vy = _orbit_sample(speed, rng)
        particles.append(Particle(x, y, vx, vy,
                                  color=rainbow(i / count),
                                  size=1.0 + rng.random() * 2.0))
    return particles


def respawn(particle, speed=DEFAULT_PARTICLE_SPEED, rng=None):
    """Put a swallowed particle back on a new orbit, keeping its look."""
    particle.x, particle.y, particle.vx, particle.vy = _orbit_sample(speed, rng or random)
    particle.trail.clear()
    return particle


def acceleration(x, y, mass, spin):
    r = math.hypot(x, y)
    inv_r3 = mass / (r * r * r)
    ax = -x * inv_r3
    ay = -y * inv_r3
    if spin > 0:
        drag = spin * inv_r3 * DRAG_COEFFICIENT
        ax += -y * drag
        ay += x * drag
    return ax, ay


def step_particles(particles, dt, mass, spin=0.0, speed=DEFAULT_PARTICLE_SPEED,
                   rng=None, scale_factor=SCALE_FACTOR):
    """Advance every particle by dt in place and return the same list."""
    if not dt > 0:
        raise InvalidArgument(f"dt must be positive, got {dt}")
    if not mass > 0:
        raise InvalidArgument(f"mass must be positive, got {mass}")

    horizon = schwarzschild_radius(mass, scale_factor)
    rng = rng or random
    absorbed = 0

    for p in particles:
        r = p.radius()
        if r < horizon or r <= RADIUS_EPSILON:
            respawn(p, speed, rng)
            absorbed += 1
            continue

        ax, ay = acceleration(p.x, p.y, mass, spin)
        p.trail.append((p.x, p.y))
        # explicit Euler
        p.vx += ax * dt
        p.vy += ay * dt
        p.x += p.vx * dt
        p.y += p.vy * dt

    if absorbed:
        logger.debug("Respawned %d particle(s) that crossed r=%.3f", absorbed, horizon)
    return particles
