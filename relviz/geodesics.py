"""
Curvature grid, light rays and the observer's distorted view.

Rays are traced with a deliberately crude scheme: an explicit Euler step with
a mass / r^3 pull toward the origin, followed by re-normalising the velocity to
a fixed "speed of light". That keeps every ray null-like and stable without
solving the real null-geodesic equation. Each ray is independent and fully
determined by (mass, spin, source radius, angle).
"""

import math
from dataclasses import dataclass
from typing import List

from .constants import (
    GRID_MIN_RADIUS, GRID_RESOLUTION, GRID_SIZE, LIGHT_SPEED_STEP,
    OBSERVER_ANGLES, OBSERVER_CIRCLES, OBSERVER_LINE_RADIUS, RADIUS_EPSILON,
    RAY_COUNT, RAY_DRAG_COEFFICIENT, RAY_HORIZON_CUTOFF, RAY_STEPS, SCALE_FACTOR,
)
from .errors import DomainError, InvalidArgument
from .metric import potential


@dataclass(frozen=True)
class GridPoint:
    x: float
    y: float
    z: float  # depth of the well, -potential


RayPath = List[GridPoint]


def curvature_grid(config, size=GRID_SIZE, resolution=GRID_RESOLUTION,
                   min_radius=GRID_MIN_RADIUS):
    """Sample the embedding depth z = -mass / r on a square lattice.

    Points closer than min_radius are left out. A spinning mass adds a
    sin(theta) / r^2 tilt to hint at frame dragging.
    """
    if resolution <= 0:
        raise InvalidArgument(f"resolution must be positive, got {resolution}")
    if size <= 0:
        raise InvalidArgument(f"size must be positive, got {size}")

    step = size / resolution
    half = size / 2.0
    grid = []
    # index-based so the lattice does not drift with float accumulation
    for i in range(resolution + 1):
        x = -half + i * step
        for j in range(resolution + 1):
            y = -half + j * step
            r = math.hypot(x, y)
            if r < min_radius or r <= RADIUS_EPSILON:
                continue
            z = -potential(config.mass, r)
            if config.spin > 0:
                theta = math.atan2(y, x)
                z += config.spin * config.mass * math.sin(theta) / (r * r)
            grid.append(GridPoint(x, y, z))
    return grid


def trace_ray(mass, spin, source_radius, angle, steps=RAY_STEPS,
              speed=LIGHT_SPEED_STEP, cutoff=RAY_HORIZON_CUTOFF):
    """Trace one ray launched from source_radius toward the origin.

    The path stops early, without recording the offending sample, once the
    ray drops below the cutoff radius.
    """
    if not mass > 0:
        raise InvalidArgument(f"mass must be positive, got {mass}")
    if steps <= 0:
        raise InvalidArgument(f"steps must be positive, got {steps}")
    if not speed > 0:
        raise InvalidArgument(f"speed must be positive, got {speed}")

    x = source_radius * math.cos(angle)
    y = source_radius * math.sin(angle)
    path = [GridPoint(x, y, -potential(mass, math.hypot(x, y)))]

    vx = -math.cos(angle) * speed
    vy = -math.sin(angle) * speed

    for _ in range(steps):
        x += vx
        y += vy

        r = math.hypot(x, y)
        if r < cutoff or r <= RADIUS_EPSILON:
            break

        pull = mass / (r * r * r)
        nvx = vx - x * pull
        nvy = vy - y * pull

        if spin > 0:
            drag = spin * mass / (r * r * r) * RAY_DRAG_COEFFICIENT
            nvx += -y * drag
            nvy += x * drag

        v_mag = math.hypot(nvx, nvy)
        if v_mag > 0:
            vx = nvx / v_mag * speed
            vy = nvy / v_mag * speed
        # a zero velocity keeps the previous heading

        path.append(GridPoint(x, y, -potential(mass, r)))

    return path


def trace_rays(mass, spin, source_radius, count=RAY_COUNT, **kwargs):
    if count <= 0:
        raise InvalidArgument(f"ray count must be positive, got {count}")
    return [
        trace_ray(mass, spin, source_radius, i * 2.0 * math.pi / count, **kwargs)
        for i in range(count)
    ]


# Observer view -------------------------------------------------------------

@dataclass(frozen=True)
class ApparentPosition:
    x: float
    y: float
    actual_x: float
    actual_y: float
    distance: float


def observer_xy(radius, angle_deg):
    angle = math.radians(angle_deg)
    return radius * math.cos(angle), radius * math.sin(angle)


def apparent_circles(mass, radii=OBSERVER_CIRCLES, scale_factor=SCALE_FACTOR):
    """Map each coordinate distance to the shrunken radius an observer sees."""
    circles = []
    for radius in radii:
        if not radius > RADIUS_EPSILON:
            raise DomainError(f"circle radius must be positive, got {radius}")
        circles.append((radius, radius * (1.0 - mass * scale_factor / radius)))
    return circles


def curved_radial_lines(mass, angles_deg=OBSERVER_ANGLES,
                        r_min=OBSERVER_LINE_RADIUS[0], r_max=OBSERVER_LINE_RADIUS[1],
                        r_step=OBSERVER_LINE_RADIUS[2], scale_factor=SCALE_FACTOR):
    """Bend a fan of radial lines by an angle offset that grows near the mass."""
    if not r_min > RADIUS_EPSILON:
        raise DomainError(f"r_min must be positive, got {r_min}")
    if not r_step > 0:
        raise InvalidArgument(f"r_step must be positive, got {r_step}")

    samples = int(math.floor((r_max - r_min) / r_step + 1e-9)) + 1
    lines = []
    for angle_deg in angles_deg:
        radians = math.radians(angle_deg)
        line = []
        for k in range(samples):
            r = r_min + k * r_step
            bend = mass * scale_factor / r
            curved = radians + bend * math.sin(radians)
            line.append((r * math.cos(curved), r * math.sin(curved)))
        lines.append(line)
    return lines


def apparent_position(observer, other, mass, scale_factor=SCALE_FACTOR):
    """Where `other` appears to be, relative to `observer`, through the lens."""
    rel_x = other[0] - observer[0]
    rel_y = other[1] - observer[1]
    distance = math.hypot(rel_x, rel_y)
    if not distance > RADIUS_EPSILON:
        raise DomainError("observers coincide")

    angle = math.atan2(rel_y, rel_x)
    visual_distance = distance * (1.0 - mass * scale_factor / distance)
    visual_angle = angle + (mass / (distance * 15.0)) * math.sin(angle * 2.0)

    return ApparentPosition(
        x=visual_distance * math.cos(visual_angle),
        y=visual_distance * math.sin(visual_angle),
        actual_x=rel_x,
        actual_y=rel_y,
        distance=distance,
    )
