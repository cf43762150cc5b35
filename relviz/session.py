"""
Session state and the frame clock that drives it.

A Session owns everything that used to be component state in the visualizer:
the control values, the active tab, the particle population, the wave samples
and the animation clock. The physics modules stay stateless; the session calls
them with its current values, keeps the results, and hands snapshots to
whatever draws them.

Bad input never stops the animation: a tick or snapshot that raises a
RelativityError is logged and the previous valid state is kept.
"""

import logging
import random
from dataclasses import dataclass, replace

from . import debate, extreme, waves
from .constants import (
    DEFAULT_PARTICLE_COUNT, DEFAULT_PARTICLE_SPEED, MASS_RANGE, OBSERVER1_RANGE,
    OBSERVER2_RANGE, OBSERVER_HORIZON_MARGIN, PARTICLE_COUNT_RANGE, PARTICLE_DT,
    PARTICLE_SPEED_RANGE, SCALE_FACTOR, SPIN_RANGE, WAVE_AMPLITUDE_RANGE,
    WAVE_FREQUENCY_RANGE,
)
from .errors import InvalidArgument, RelativityError
from .facts import generate_facts
from .geodesics import (
    apparent_circles, apparent_position, curvature_grid, curved_radial_lines,
    observer_xy, trace_rays,
)
from .metric import (
    FieldConfig, ergosphere_radius, observer_effects, schwarzschild_radius,
)
from .particles import spawn_particles, step_particles

logger = logging.getLogger(__name__)

TABS = ("spacetime", "particles", "waves", "observer", "extreme", "singularity")


@dataclass(frozen=True)
class FeatureSet:
    name: str
    tabs: tuple


# The small visualizer only had the curvature view and the debate explainer
MINIMAL = FeatureSet("minimal", ("spacetime", "singularity"))
EXTENDED = FeatureSet("extended", TABS)


def _clamp(value, bounds):
    low, high = bounds
    return max(low, min(high, value))


@dataclass(frozen=True)
class SimulationParams:
    mass: float = 10.0
    spin: float = 0.0
    observer1_radius: float = 30.0
    observer2_radius: float = 20.0
    observer2_angle: float = 120.0
    active_observer: int = 1
    view_angle: float = 30.0
    show_light_paths: bool = True
    particle_count: int = DEFAULT_PARTICLE_COUNT
    particle_speed: float = DEFAULT_PARTICLE_SPEED
    wave_amplitude: float = 0.5
    wave_frequency: float = 0.05
    extreme_object: str = "blackhole"
    debate_mode: str = "penrose"
    show_consensus: bool = False

    @property
    def field_config(self):
        return FieldConfig(self.mass, self.spin)

    def clamped(self, scale_factor=SCALE_FACTOR):
        """Bring every value into the range the model is valid for.

        Observers are also pushed out past the horizon so 2 * p * s stays < 1.
        """
        mass = _clamp(self.mass, MASS_RANGE)
        floor = schwarzschild_radius(mass, scale_factor) * OBSERVER_HORIZON_MARGIN
        return replace(
            self,
            mass=mass,
            spin=_clamp(self.spin, SPIN_RANGE),
            observer1_radius=max(floor, _clamp(self.observer1_radius, OBSERVER1_RANGE)),
            observer2_radius=max(floor, _clamp(self.observer2_radius, OBSERVER2_RANGE)),
            observer2_angle=self.observer2_angle % 360.0,
            active_observer=1 if self.active_observer != 2 else 2,
            particle_count=int(_clamp(self.particle_count, PARTICLE_COUNT_RANGE)),
            particle_speed=_clamp(self.particle_speed, PARTICLE_SPEED_RANGE),
            wave_amplitude=_clamp(self.wave_amplitude, WAVE_AMPLITUDE_RANGE),
            wave_frequency=_clamp(self.wave_frequency, WAVE_FREQUENCY_RANGE),
            extreme_object=(self.extreme_object if self.extreme_object in extreme.OBJECT_TYPES
                            else "blackhole"),
            debate_mode=self.debate_mode if self.debate_mode in debate.MODES else "penrose",
        )


class Session:
    def __init__(self, params=None, features=EXTENDED, rng=None, loop_merger=True):
        self.params = params or SimulationParams()
        self.features = features
        self.rng = rng or random.Random()
        self.loop_merger = loop_merger
        self.active_tab = features.tabs[0]
        self.elapsed = 0.0
        self.particles = []
        self.wave_points = []
        self._last_snapshot = None

    # controls ---------------------------------------------------------------

    def set_tab(self, tab):
        if tab not in self.features.tabs:
            raise InvalidArgument(f"tab {tab!r} is not part of the {self.features.name} feature set")
        if tab != self.active_tab:
            self.active_tab = tab
            self.elapsed = 0.0
            self._last_snapshot = None

    def update(self, **changes):
        old = self.params
        self.params = replace(old, **changes)
        if self.params.particle_count != old.particle_count or \
                self.params.particle_speed != old.particle_speed:
            self.particles = []
        if self.params.extreme_object != old.extreme_object:
            # a new object starts its animation from the beginning
            self.elapsed = 0.0
            self._last_snapshot = None
        return self.params

    def reset(self):
        self.elapsed = 0.0
        self.particles = []
        self.wave_points = []
        self._last_snapshot = None

    def ensure_particles(self):
        if not self.particles:
            self.particles = spawn_particles(self.params.particle_count,
                                             self.params.particle_speed, self.rng)
        return self.particles

    def ensure_wave_points(self):
        if not self.wave_points:
            self.wave_points = waves.generate_wave_points(rng=self.rng)
        return self.wave_points

    # time -------------------------------------------------------------------

    def tick(self, dt=PARTICLE_DT):
        """Advance the active model by dt. Returns False if the frame was skipped."""
        try:
            if not dt > 0:
                raise InvalidArgument(f"dt must be positive, got {dt}")
            if self.active_tab == "particles":
                p = self.params
                step_particles(self.ensure_particles(), dt, p.mass, p.spin,
                               speed=p.particle_speed, rng=self.rng)
            elapsed = self.elapsed + dt
            # the merged frame is shown once before the inspiral restarts
            if self._merger_active() and self.loop_merger and \
                    waves.orbit_state(self.elapsed, waves.MERGER_ORBIT).merged:
                logger.info("Merger complete at t=%.1f, restarting inspiral", self.elapsed)
                elapsed = 0.0
            self.elapsed = elapsed
        except RelativityError as exc:
            logger.warning("Skipping frame on %s tab: %s", self.active_tab, exc)
            return False
        return True

    def _merger_active(self):
        return self.active_tab == "extreme" and self.params.extreme_object == "merger"

    # snapshots --------------------------------------------------------------

    def snapshot(self):
        """Render data for the active tab, or the last good one if this fails."""
        try:
            data = getattr(self, "_snapshot_" + self.active_tab)()
        except RelativityError as exc:
            logger.warning("Keeping previous %s snapshot: %s", self.active_tab, exc)
            return self._last_snapshot
        data["tab"] = self.active_tab
        data["elapsed"] = self.elapsed
        self._last_snapshot = data
        return data

    def effects(self):
        p = self.params
        return observer_effects(p.observer1_radius, p.observer2_radius,
                                p.observer2_angle, p.field_config)

    def facts(self):
        return generate_facts(self.effects(), self.params.mass)

    def _snapshot_spacetime(self):
        p = self.params
        field = p.field_config
        effects = self.effects()
        rays = trace_rays(p.mass, p.spin, p.observer1_radius) if p.show_light_paths else []
        return {
            "grid": curvature_grid(field),
            "rays": rays,
            "effects": effects,
            "facts": generate_facts(effects, p.mass),
        }

    def _snapshot_particles(self):
        p = self.params
        return {
            "particles": self.ensure_particles(),
            "horizon": schwarzschild_radius(p.mass),
            "ergosphere": ergosphere_radius(p.mass, p.spin) if p.spin > 0 else None,
        }

    def _snapshot_waves(self):
        p = self.params
        state = waves.orbit_state(self.elapsed, waves.WAVE_ORBIT)
        return {
            "state": state,
            "sources": waves.body_positions(state, waves.WAVE_ORBIT),
            "samples": waves.wave_field(self.ensure_wave_points(), self.elapsed,
                                        p.wave_amplitude, p.wave_frequency),
        }

    def _snapshot_observer(self):
        p = self.params
        positions = {1: observer_xy(p.observer1_radius, 0.0),
                     2: observer_xy(p.observer2_radius, p.observer2_angle)}
        me = positions[p.active_observer]
        other = positions[2 if p.active_observer == 1 else 1]
        return {
            "observer": p.active_observer,
            "circles": apparent_circles(p.mass),
            "lines": curved_radial_lines(p.mass),
            "apparent": apparent_position(me, other, p.mass),
            "effects": self.effects(),
        }

    def _snapshot_extreme(self):
        p = self.params
        kind = p.extreme_object
        data = {"object": kind}
        if kind == "blackhole":
            data["features"] = extreme.black_hole(p.mass, self.rng)
        elif kind == "neutron":
            data["features"] = extreme.neutron_star(p.mass, self.elapsed)
        elif kind == "kerr":
            data["features"] = extreme.kerr_black_hole(p.mass, p.spin, self.elapsed)
        elif kind == "merger":
            law = waves.MERGER_ORBIT
            state = waves.orbit_state(self.elapsed, law)
            m1, m2 = waves.body_masses(p.mass, law)
            data.update(
                state=state,
                bodies=waves.body_positions(state, law),
                masses=(m1, m2),
                horizons=(schwarzschild_radius(m1), schwarzschild_radius(m2)),
                wavefronts=waves.merger_wavefronts(self.elapsed, law),
                phase=waves.merger_phase(state.separation),
            )
        else:
            raise InvalidArgument(f"unknown extreme object {kind!r}")
        return data

    def _snapshot_singularity(self):
        p = self.params
        return {
            "view": debate.debate_view(p.debate_mode),
            "consensus": debate.CONSENSUS if p.show_consensus else None,
        }


class FrameClock:
    """Schedules ticks for a session; stopping the clock is the only cancellation."""

    def __init__(self, session, base_dt=PARTICLE_DT):
        if not base_dt > 0:
            raise InvalidArgument(f"base_dt must be positive, got {base_dt}")
        self.session = session
        self.base_dt = base_dt
        self.speed_mult = 1.0
        self.running = False
        self.frames = 0

    @property
    def dt(self):
        return self.base_dt * self.speed_mult

    def start(self):
        self.running = True

    def stop(self):
        self.running = False

    def toggle(self):
        self.running = not self.running

    def faster(self):
        self.speed_mult = min(8.0, self.speed_mult * 2.0)

    def slower(self):
        self.speed_mult = max(0.125, self.speed_mult / 2.0)

    def reset(self):
        self.frames = 0
        self.session.reset()

    def step_once(self):
        self.session.tick(self.dt)
        self.frames += 1
        return self.session.snapshot()

    def tick(self):
        """Called once per display frame."""
        if self.running:
            return self.step_once()
        return self.session.snapshot()
