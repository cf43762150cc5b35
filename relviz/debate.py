"""
Singularity debate explainer.

Two pictures of the inside of a rotating black hole, in units of the view
radius (the outer horizon sits at 0.8, the inner one at 0.5):

 - "penrose": every geodesic runs into the central singularity
 - "kerr":    geodesics swing around a non-singular core and leave again
"""

import math
from dataclasses import dataclass, field
from typing import List, Tuple

from .errors import InvalidArgument

MODES = ("penrose", "kerr")

OUTER_HORIZON = 0.8
INNER_HORIZON = 0.5
RING_RADIUS = (0.2, 0.1)  # ellipse semi-axes, drawn in perspective
GEODESIC_START = 0.7

CONSENSUS = (
    ("Traditional View (~95% of publications)", 0.95),
    ("Alternative (~5%)", 0.05),
)


@dataclass
class DebateView:
    mode: str
    title: str
    core_label: str
    caption: List[str]
    ring: List[Tuple[float, float]]
    geodesics: List[List[Tuple[float, float]]] = field(default_factory=list)


def _ring():
    return [(math.cos(k * 0.1) * RING_RADIUS[0], math.sin(k * 0.1) * RING_RADIUS[1])
            for k in range(int(2.0 * math.pi / 0.1) + 1)]


def _converging(angle):
    sx = math.cos(angle) * GEODESIC_START
    sy = math.sin(angle) * GEODESIC_START
    path = []
    for k in range(11):
        t = k / 10.0
        shrink = (1.0 - t) * (1.0 - t)
        path.append((sx * shrink, sy * shrink))
    return path


def _swirling(angle):
    path = []
    for k in range(21):
        t = k / 20.0
        a = angle + t * 2.0 * math.pi
        # dips inward then climbs back out
        radius = GEODESIC_START - 0.4 * t + 0.4 * t * t
        path.append((math.cos(a) * radius, math.sin(a) * radius))
    return path


def debate_view(mode="penrose", count=8):
    if mode not in MODES:
        raise InvalidArgument(f"unknown debate mode {mode!r}, expected one of {MODES}")
    if count <= 0:
        raise InvalidArgument(f"geodesic count must be positive, got {count}")

    angles = [i / count * 2.0 * math.pi for i in range(count)]
    if mode == "penrose":
        return DebateView(
            mode=mode,
            title="Penrose-Hawking Model: Inevitable Singularity",
            core_label="Ring Singularity",
            caption=[
                "All geodesics (paths through spacetime) inevitably terminate at the singularity,",
                "where spacetime curvature becomes infinite and physics breaks down.",
            ],
            ring=_ring(),
            geodesics=[_converging(a) for a in angles],
        )
    return DebateView(
        mode=mode,
        title="Kerr's Alternative: No True Singularity",
        core_label="Non-singular Matter",
        caption=[
            "Geodesics may have finite affine length but don't necessarily encounter",
            "infinite curvature. Physics might remain valid throughout the black hole.",
        ],
        ring=_ring(),
        geodesics=[_swirling(a) for a in angles],
    )
