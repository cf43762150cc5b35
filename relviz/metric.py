"""
Closed-form field model: potential, time dilation, redshift and horizon radii.

Everything here is a pure function of (mass, radius, spin, scale factor).
The potential is the simplified proxy mass / r (G = c = 1) and the scale factor
keeps the dimensionless term 2 * p * s below 1 so the square roots stay real.
Out-of-range input raises DomainError instead of leaking NaN into the facts.
"""

import math
from dataclasses import dataclass

from .constants import RADIUS_EPSILON, SCALE_FACTOR
from .errors import DomainError, InvalidArgument, InvalidConfig


@dataclass(frozen=True)
class FieldConfig:
    mass: float
    spin: float = 0.0

    def __post_init__(self):
        if not self.mass > 0:
            raise InvalidArgument(f"mass must be positive, got {self.mass}")
        if not 0.0 <= self.spin <= 1.0:
            raise InvalidConfig(f"spin must lie in [0, 1], got {self.spin}")


@dataclass(frozen=True)
class ObserverState:
    x: float
    y: float
    r: float
    potential: float
    time_dilation: float
    escape_velocity: float
    space_contraction: float


@dataclass(frozen=True)
class ObserverEffects:
    observer1: ObserverState
    observer2: ObserverState
    relative_time_dilation: float  # observer 2 relative to observer 1
    distance: float
    light_travel_time: float
    redshift: float                # light from observer 1 received by observer 2
    proper_distance: float


def _metric_term(potential, scale_factor):
    # 1 - 2 p s, the quantity under every square root below
    if potential < 0:
        raise DomainError(f"potential must be non-negative, got {potential}")
    term = 1.0 - 2.0 * potential * scale_factor
    if not term > 0.0:
        raise DomainError(
            f"2 * potential * scale_factor must be < 1 "
            f"(potential={potential}, scale_factor={scale_factor})"
        )
    return term


def potential(mass, r):
    if not mass > 0:
        raise InvalidArgument(f"mass must be positive, got {mass}")
    if not r > RADIUS_EPSILON:
        raise DomainError(f"radius {r} is at or inside the singular floor")
    return mass / r


def time_dilation(potential, scale_factor=SCALE_FACTOR):
    return 1.0 / math.sqrt(_metric_term(potential, scale_factor))


def space_contraction(potential, scale_factor=SCALE_FACTOR):
    return math.sqrt(_metric_term(potential, scale_factor))


def redshift(potential_a, potential_b, scale_factor=SCALE_FACTOR):
    """Fractional wavelength shift of light emitted at A and received at B.

    Positive when A sits deeper in the well than B. Swapping the arguments
    gives the inverse shift: (1 + z_ab) * (1 + z_ba) == 1.
    """
    return math.sqrt(_metric_term(potential_b, scale_factor) /
                     _metric_term(potential_a, scale_factor)) - 1.0


def escape_velocity(potential, scale_factor=SCALE_FACTOR):
    """Escape velocity as a fraction of c.

    Anything at or above c means the parameters left the range the picture
    was tuned for, so it is flagged rather than clamped.
    """
    _metric_term(potential, scale_factor)
    return math.sqrt(2.0 * potential * scale_factor)


def schwarzschild_radius(mass, scale_factor=SCALE_FACTOR):
    if not mass > 0:
        raise InvalidArgument(f"mass must be positive, got {mass}")
    return 2.0 * mass * scale_factor


def kerr_horizon_radii(mass, spin, scale_factor=SCALE_FACTOR):
    """Return (outer, inner) horizon radii; spin is in the same units as mass."""
    if not mass > 0:
        raise InvalidArgument(f"mass must be positive, got {mass}")
    if spin < 0:
        raise InvalidConfig(f"spin must be non-negative, got {spin}")
    if spin > mass:
        # naked singularity
        raise InvalidConfig(f"spin {spin} exceeds mass {mass}")
    root = math.sqrt(mass * mass - spin * spin)
    return (mass + root) * scale_factor, (mass - root) * scale_factor


def ergosphere_radius(mass, spin, scale_factor=SCALE_FACTOR):
    # Marker drawn around the particle view when the mass rotates
    if not 0.0 <= spin <= 1.0:
        raise InvalidConfig(f"spin must lie in [0, 1], got {spin}")
    return schwarzschild_radius(mass, scale_factor) * (1.0 + math.sqrt(1.0 - spin * spin))


def photon_sphere_radius(mass, scale_factor=SCALE_FACTOR):
    return 1.5 * schwarzschild_radius(mass, scale_factor)


def einstein_ring_radius(mass, scale_factor=SCALE_FACTOR):
    # Rough size of the ring a source directly behind the mass would form
    if not mass > 0:
        raise InvalidArgument(f"mass must be positive, got {mass}")
    return 4.0 * mass * scale_factor


def _observer(x, y, r, mass, scale_factor):
    p = potential(mass, r)
    return ObserverState(
        x=x,
        y=y,
        r=r,
        potential=p,
        time_dilation=time_dilation(p, scale_factor),
        escape_velocity=escape_velocity(p, scale_factor),
        space_contraction=space_contraction(p, scale_factor),
    )


def observer_effects(r1, r2, angle_deg, config, scale_factor=SCALE_FACTOR):
    """Compare two static observers.

    Observer 1 sits on the +x axis at radius r1, observer 2 at radius r2 and
    angle_deg measured from the +x axis.
    """
    angle = math.radians(angle_deg)
    obs1 = _observer(r1, 0.0, r1, config.mass, scale_factor)
    obs2 = _observer(r2 * math.cos(angle), r2 * math.sin(angle), r2,
                     config.mass, scale_factor)

    # Straight-line separation; the real path would follow a geodesic
    distance = math.sqrt(max(0.0, r1 * r1 + r2 * r2 - 2.0 * r1 * r2 * math.cos(angle)))
    mean_delay = (obs1.potential + obs2.potential) / 2.0 * scale_factor

    return ObserverEffects(
        observer1=obs1,
        observer2=obs2,
        relative_time_dilation=obs2.time_dilation / obs1.time_dilation,
        distance=distance,
        light_travel_time=distance * (1.0 + mean_delay),
        redshift=redshift(obs1.potential, obs2.potential, scale_factor),
        proper_distance=distance / (1.0 + mean_delay),
    )
