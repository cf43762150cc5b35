"""
General-relativity visualization core.

Modules:
    - metric:     potential, time dilation, redshift, horizon radii
    - geodesics:  curvature grid, light rays, observer distortion
    - particles:  test particles with horizon absorption and respawn
    - waves:      decaying binary orbit, ripple field, merger wavefronts
    - extreme:    black hole, neutron star and Kerr geometry
    - debate:     singularity debate explainer
    - facts:      narrative statements from observer effects
    - session:    per-session state and the frame clock
    - viewer:     pygame front-end
"""

from .errors import DomainError, InvalidArgument, InvalidConfig, RelativityError
from .metric import FieldConfig, ObserverEffects, observer_effects
from .session import EXTENDED, MINIMAL, FrameClock, Session, SimulationParams

__version__ = "0.1.0"

__all__ = [
    "DomainError", "InvalidArgument", "InvalidConfig", "RelativityError",
    "FieldConfig", "ObserverEffects", "observer_effects",
    "EXTENDED", "MINIMAL", "FrameClock", "Session", "SimulationParams",
]
