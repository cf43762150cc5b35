"""
Decaying binary orbit, the wave "ripple" field around it and the merger rings.

The orbit is not integrated step by step. Separation shrinks as
max(min_separation, d0 * exp(-k t)) and the angular velocity speeds up as
(separation / d0) ** -1.5. The orbital angle is the exact integral of that
angular velocity, so every OrbitState is a closed-form function of the elapsed
time alone: resetting or scrubbing to any t is well defined. This is a
Kepler-flavoured illustration, not real inspiral dynamics.
"""

import logging
import math
import random
from dataclasses import dataclass

from .constants import (
    MERGER_DECAY_RATE, MERGER_INITIAL_SEPARATION, MERGER_MASS_FRACTION,
    MERGER_MIN_SEPARATION, MERGER_ORBIT_FREQUENCY, SCALE_FACTOR,
    WAVE_DECAY_RATE, WAVE_INITIAL_SEPARATION, WAVE_MIN_SEPARATION,
    WAVE_ORBIT_FREQUENCY, WAVE_POINT_COUNT, WAVE_RING_ROTATION,
    WAVE_RING_SPACING, WAVE_RING_START,
)
from .errors import InvalidArgument

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrbitLaw:
    initial_separation: float
    decay_rate: float
    base_frequency: float
    min_separation: float
    mass_fraction: float = 0.5  # share of the total mass carried by body 1

    def __post_init__(self):
        if not self.initial_separation > 0 or not self.min_separation > 0:
            raise InvalidArgument("separations must be positive")
        if self.decay_rate < 0:
            raise InvalidArgument(f"decay rate must be non-negative, got {self.decay_rate}")
        if not 0.0 < self.mass_fraction < 1.0:
            raise InvalidArgument(f"mass fraction must lie in (0, 1), got {self.mass_fraction}")

    @property
    def merge_time(self):
        """Elapsed time at which the separation reaches its floor."""
        if self.initial_separation <= self.min_separation:
            return 0.0
        if self.decay_rate == 0:
            return math.inf
        return math.log(self.initial_separation / self.min_separation) / self.decay_rate

    def separation(self, t):
        if t >= self.merge_time:
            return self.min_separation
        return max(self.min_separation,
                   self.initial_separation * math.exp(-self.decay_rate * t))

    def angular_velocity(self, t):
        return self.base_frequency * (self.separation(t) / self.initial_separation) ** -1.5

    def orbital_angle(self, t):
        # integral of angular_velocity from 0 to t, piecewise around merge_time
        t_merge = self.merge_time
        if self.decay_rate == 0:
            return self.angular_velocity(0.0) * t
        rate = 1.5 * self.decay_rate
        if t <= t_merge:
            return self.base_frequency / rate * math.expm1(rate * t)
        swept = self.base_frequency / rate * math.expm1(rate * t_merge)
        return swept + self.angular_velocity(t_merge) * (t - t_merge)

    def is_merged(self, t):
        return self.separation(t) <= self.min_separation


WAVE_ORBIT = OrbitLaw(
    initial_separation=WAVE_INITIAL_SEPARATION,
    decay_rate=WAVE_DECAY_RATE,
    base_frequency=WAVE_ORBIT_FREQUENCY,
    min_separation=WAVE_MIN_SEPARATION,
)

MERGER_ORBIT = OrbitLaw(
    initial_separation=MERGER_INITIAL_SEPARATION,
    decay_rate=MERGER_DECAY_RATE,
    base_frequency=MERGER_ORBIT_FREQUENCY,
    min_separation=MERGER_MIN_SEPARATION,
    mass_fraction=MERGER_MASS_FRACTION,
)


@dataclass(frozen=True)
class OrbitState:
    separation: float
    orbital_angle: float
    elapsed_time: float
    merged: bool


def orbit_state(t, law=MERGER_ORBIT):
    if t < 0:
        raise InvalidArgument(f"elapsed time must be non-negative, got {t}")
    return OrbitState(
        separation=law.separation(t),
        orbital_angle=law.orbital_angle(t),
        elapsed_time=t,
        merged=law.is_merged(t),
    )


def advance_orbit(state, dt, law=MERGER_ORBIT):
    if not dt > 0:
        raise InvalidArgument(f"dt must be positive, got {dt}")
    new_state = orbit_state(state.elapsed_time + dt, law)
    if new_state.merged and not state.merged:
        logger.debug("Binary merged at t=%.2f", new_state.elapsed_time)
    return new_state


def body_masses(total_mass, law=MERGER_ORBIT):
    return total_mass * law.mass_fraction, total_mass * (1.0 - law.mass_fraction)


def body_positions(state, law=MERGER_ORBIT):
    """Positions of both bodies about a centre of mass fixed at the origin.

    Each body's lever arm is the other body's share of the mass.
    """
    c = math.cos(state.orbital_angle)
    s = math.sin(state.orbital_angle)
    arm1 = state.separation * (1.0 - law.mass_fraction)
    arm2 = state.separation * law.mass_fraction
    return (-arm1 * c, -arm1 * s), (arm2 * c, arm2 * s)


# Wave ripple field ----------------------------------------------------------

@dataclass(frozen=True)
class WavePoint:
    source_index: int  # 1 or 2
    orbital_radius: float
    orbital_angle: float
    phase: float


@dataclass(frozen=True)
class WaveSample:
    source_index: int
    x: float
    y: float
    angle: float
    displacement: float
    source_x: float
    source_y: float


def generate_wave_points(count=WAVE_POINT_COUNT, rng=None):
    """A spiral of samples shared by both sources, each with a random phase."""
    if count <= 0:
        raise InvalidArgument(f"wave point count must be positive, got {count}")
    rng = rng or random
    points = []
    for i in range(count):
        angle = i / count * 2.0 * math.pi
        radius = WAVE_RING_START + i * WAVE_RING_SPACING
        for source in (1, 2):
            points.append(WavePoint(source, radius, angle, rng.random() * 2.0 * math.pi))
    return points


def wave_amplitude(t, amplitude, law=WAVE_ORBIT):
    # grows as the sources close in
    return amplitude * law.initial_separation / law.separation(t)


def wave_field(points, t, amplitude, frequency, law=WAVE_ORBIT):
    state = orbit_state(t, law)
    sources = body_positions(state, law)
    amp = wave_amplitude(t, amplitude, law)
    spin = t * WAVE_RING_ROTATION

    samples = []
    for point in points:
        sx, sy = sources[point.source_index - 1]
        angle = point.orbital_angle + spin
        samples.append(WaveSample(
            source_index=point.source_index,
            x=sx + point.orbital_radius * math.cos(angle),
            y=sy + point.orbital_radius * math.sin(angle),
            angle=angle,
            displacement=amp * math.sin(frequency * t + point.phase),
            source_x=sx,
            source_y=sy,
        ))
    return samples


# Merger wavefronts ----------------------------------------------------------

def merger_wavefronts(t, law=MERGER_ORBIT, spacing=5.0, max_radius=100.0,
                      angle_step=0.1, scale_factor=SCALE_FACTOR):
    """Closed rings of outgoing radiation with a quadrupole (cos 2 theta) pattern."""
    if not spacing > 0 or not angle_step > 0:
        raise InvalidArgument("spacing and angle_step must be positive")
    separation = law.separation(t)
    peak = 5.0 * scale_factor * (law.initial_separation / separation)
    samples = int(2.0 * math.pi / angle_step) + 1

    rings = []
    radius = spacing
    while radius < max_radius:
        phase = t * 5.0 - radius * 0.3
        amplitude = peak * math.exp(-radius * 0.02) * math.sin(phase)
        ring = []
        for k in range(samples):
            angle = k * angle_step
            r = radius + amplitude * (1.0 + 0.5 * math.cos(2.0 * angle))
            ring.append((r * math.cos(angle), r * math.sin(angle)))
        rings.append(ring)
        radius += spacing
    return rings


def merger_phase(separation):
    if separation < 7:
        return "Merger"
    if separation < 10:
        return "Merger imminent"
    if separation < 15:
        return "Late inspiral"
    return "Early inspiral"
