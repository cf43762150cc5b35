"""
Geometry for the extreme-objects view: a plain black hole, a pulsar-like
neutron star and a spinning (Kerr) black hole. The merger case lives in
waves.py. Shapes are returned as lists of (x, y) in world units; `t` is the
animation clock and only moves things that visibly rotate.
"""

import math
import random
from dataclasses import dataclass
from typing import List, Tuple

from .constants import (
    DISC_RING_COUNT, FIELD_LINE_COUNT, JET_ANGLE, JET_LENGTH_FACTOR,
    NEUTRON_RADIUS_FACTOR, SCALE_FACTOR,
)
from .errors import InvalidArgument
from .metric import kerr_horizon_radii, photon_sphere_radius, schwarzschild_radius

Outline = List[Tuple[float, float]]

OBJECT_TYPES = ("blackhole", "neutron", "kerr", "merger")


@dataclass
class BlackHoleFeatures:
    horizon: float
    photon_sphere: float
    disc_inner: float
    disc_outer: float
    disc_rings: List[float]


@dataclass
class JetSample:
    x: float
    y: float
    width: float


@dataclass
class NeutronStarFeatures:
    radius: float
    field_lines: List[Outline]
    north_jet: List[JetSample]
    south_jet: List[JetSample]
    jet_length: float


@dataclass
class KerrFeatures:
    outer_horizon: float
    inner_horizon: float
    ergosphere_radius: float
    ergosphere: Outline
    horizon: Outline
    frame_dragging: Outline
    frame_dragging_radius: float


def _closed_angles(step=0.1):
    # 0, step, ... up to and including the last sample not past 2 pi
    return [k * step for k in range(int(2.0 * math.pi / step) + 1)]


def black_hole(mass, rng=None, scale_factor=SCALE_FACTOR):
    horizon = schwarzschild_radius(mass, scale_factor)
    inner = 3.0 * horizon
    outer = 8.0 * horizon
    rng = rng or random
    rings = []
    for i in range(DISC_RING_COUNT):
        jitter = 0.8 + rng.random() * 0.4
        rings.append(jitter * (inner + (i / DISC_RING_COUNT) * (outer - inner)))
    return BlackHoleFeatures(
        horizon=horizon,
        photon_sphere=photon_sphere_radius(mass, scale_factor),
        disc_inner=inner,
        disc_outer=outer,
        disc_rings=rings,
    )


def neutron_star(mass, t=0.0):
    if not mass > 0:
        raise InvalidArgument(f"mass must be positive, got {mass}")
    radius = mass * NEUTRON_RADIUS_FACTOR

    field_lines = []
    for i in range(FIELD_LINE_COUNT):
        angle = i / FIELD_LINE_COUNT * 2.0 * math.pi
        line = []
        # radius .. 5 * radius in steps of 0.2 * radius
        for k in range(21):
            r = radius * (1.0 + 0.2 * k)
            bend = 0.2 * (1.0 - radius / r)
            line.append((r * math.cos(angle) + bend * radius * math.sin(angle + t),
                         r * math.sin(angle) - bend * radius * math.cos(angle + t)))
        field_lines.append(line)

    jet_length = radius * JET_LENGTH_FACTOR
    north = []
    samples = int(round((JET_LENGTH_FACTOR - 1.0) / 0.1)) + 1
    for k in range(samples):
        r = radius * (1.0 + 0.1 * k)
        north.append(JetSample(r * math.cos(JET_ANGLE), r * math.sin(JET_ANGLE),
                               radius * 0.3 * (1.0 - r / jet_length)))
    south = [JetSample(-j.x, -j.y, j.width) for j in north]

    return NeutronStarFeatures(radius, field_lines, north, south, jet_length)


def kerr_black_hole(mass, spin, t=0.0, scale_factor=SCALE_FACTOR):
    """Oblate ergosphere and horizon outlines plus a frame-dragging ring.

    The ring turns at a rate proportional to spin.
    """
    outer, inner = kerr_horizon_radii(mass, spin, scale_factor)
    ergo_radius = 2.0 * mass * scale_factor
    angles = _closed_angles()

    ergosphere = []
    horizon = []
    for angle in angles:
        # flattened toward the poles
        ergo_flat = 1.0 - 0.3 * spin * abs(math.sin(angle))
        ergosphere.append((ergo_radius * math.cos(angle),
                           ergo_radius * ergo_flat * math.sin(angle)))
        horizon_flat = 1.0 - 0.1 * spin * abs(math.sin(angle))
        horizon.append((outer * math.cos(angle), outer * horizon_flat * math.sin(angle)))

    drag_radius = outer * 3.0
    start = t * spin
    dragging = []
    for degrees in range(0, 360, 10):
        angle = degrees / 180.0 * math.pi + start
        distance = drag_radius * (1.0 + 0.1 * math.sin(angle * 5.0))
        dragging.append((distance * math.cos(angle), distance * math.sin(angle)))

    return KerrFeatures(
        outer_horizon=outer,
        inner_horizon=inner,
        ergosphere_radius=ergo_radius,
        ergosphere=ergosphere,
        horizon=horizon,
        frame_dragging=dragging,
        frame_dragging_radius=drag_radius,
    )
