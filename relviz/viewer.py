"""
Interactive pygame front-end for the relativity core.

Controls:
 - 1..6: switch tab (spacetime, particles, waves, observer, extreme, singularity)
 - Up / Down: increase / decrease mass (Shift changes faster)
 - Left / Right: decrease / increase spin
 - Space: pause / resume      N: step once while paused
 - [ / ]: slow down / speed up the clock
 - R: reset the simulation    T: toggle trails and light paths
 - O: swap active observer    E: cycle extreme object
 - M: switch debate model     C: toggle consensus overlay
 - Esc / Close window: quit
Notes:
 - Units are arbitrary and scaled for visualization (G = c = 1).
"""

import argparse
import logging
import random

import pygame

from . import debate, extreme
from .logging_config import setup_logging
from .projection import ExtentViewport, Viewport, depth_factor, project
from .session import EXTENDED, MINIMAL, TABS, FrameClock, Session, SimulationParams

logger = logging.getLogger(__name__)

# Constants and configuration
WIDTH, HEIGHT = 1000, 700
BG_COLOR = (10, 12, 20)
HUD_COLOR = (220, 220, 220)
GRID_COLOR = (85, 85, 85)
RAY_COLOR = (255, 235, 60)
HORIZON_COLOR = (200, 40, 40)
ERGO_COLOR = (150, 60, 200)
MASS_COLOR = (255, 165, 0)
SOURCE_COLORS = {1: (255, 87, 34), 2: (33, 150, 243)}
FAINT_SOURCE_COLORS = {1: (255, 204, 188), 2: (187, 222, 251)}
FPS = 60

# dark purple -> teal -> yellow, roughly viridis
DEPTH_RAMP = ((68, 1, 84), (59, 82, 139), (33, 145, 140), (94, 201, 98), (253, 231, 37))


def ramp_color(t):
    t = max(0.0, min(1.0, t))
    pos = t * (len(DEPTH_RAMP) - 1)
    i = min(int(pos), len(DEPTH_RAMP) - 2)
    frac = pos - i
    a, b = DEPTH_RAMP[i], DEPTH_RAMP[i + 1]
    return tuple(int(a[k] + (b[k] - a[k]) * frac) for k in range(3))


def _ipt(p):
    return int(p[0]), int(p[1])


class RelativityViewer:
    def __init__(self, session, width=WIDTH, height=HEIGHT):
        pygame.init()
        self.screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption("Relativity Visualizer")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, 20)
        self.width = width
        self.height = height

        self.session = session
        self.frame_clock = FrameClock(session)
        self.running = True
        self.show_trails = True

    # input ------------------------------------------------------------------

    def change_params(self, **changes):
        s = self.session
        s.update(**changes)
        s.params = s.params.clamped()

    def handle_key(self, event):
        s = self.session
        p = s.params
        mods = pygame.key.get_mods()
        tab_keys = [pygame.K_1, pygame.K_2, pygame.K_3, pygame.K_4, pygame.K_5, pygame.K_6]

        if event.key == pygame.K_ESCAPE:
            self.running = False
        elif event.key in tab_keys:
            tab = TABS[tab_keys.index(event.key)]
            if tab in s.features.tabs:
                s.set_tab(tab)
        elif event.key == pygame.K_SPACE:
            self.frame_clock.toggle()
        elif event.key == pygame.K_n:  # single-step when paused
            if not self.frame_clock.running:
                self.frame_clock.step_once()
        elif event.key == pygame.K_UP:
            self.change_params(mass=p.mass * (1.5 if mods & pygame.KMOD_SHIFT else 1.1))
        elif event.key == pygame.K_DOWN:
            self.change_params(mass=p.mass / (1.5 if mods & pygame.KMOD_SHIFT else 1.1))
        elif event.key == pygame.K_RIGHT:
            self.change_params(spin=round(p.spin + 0.1, 2))
        elif event.key == pygame.K_LEFT:
            self.change_params(spin=round(p.spin - 0.1, 2))
        elif event.key == pygame.K_RIGHTBRACKET:
            self.frame_clock.faster()
        elif event.key == pygame.K_LEFTBRACKET:
            self.frame_clock.slower()
        elif event.key == pygame.K_r:
            self.frame_clock.reset()
        elif event.key == pygame.K_t:
            self.show_trails = not self.show_trails
            self.change_params(show_light_paths=self.show_trails)
        elif event.key == pygame.K_o:
            self.change_params(active_observer=2 if p.active_observer == 1 else 1)
        elif event.key == pygame.K_e:
            kinds = extreme.OBJECT_TYPES
            self.change_params(extreme_object=kinds[(kinds.index(p.extreme_object) + 1) % len(kinds)])
        elif event.key == pygame.K_m:
            modes = debate.MODES
            self.change_params(debate_mode=modes[(modes.index(p.debate_mode) + 1) % len(modes)])
        elif event.key == pygame.K_c:
            self.change_params(show_consensus=not p.show_consensus)

    # drawing ----------------------------------------------------------------

    def draw_hud(self, snapshot):
        p = self.session.params
        lines = [
            f"Tab: {self.session.active_tab}   Mass: {p.mass:.1f}   Spin: {p.spin:.1f}   "
            f"t={self.session.elapsed:.1f}   Speed x{self.frame_clock.speed_mult:.2f}"
            f"{'' if self.frame_clock.running else '   [paused]'}",
        ]
        if snapshot and "facts" in snapshot:
            lines.extend(snapshot["facts"].lines())
        if snapshot and snapshot.get("tab") == "extreme" and snapshot["object"] == "merger":
            lines.append(f"Merger state: {snapshot['phase']}   "
                         f"Separation: {snapshot['state'].separation:.1f} units")
        x, y = 8, 8
        for line in lines:
            surf = self.font.render(line, True, HUD_COLOR)
            self.screen.blit(surf, (x, y))
            y += 18

    def draw_outline(self, view, points, color, closed=False, width=1):
        if len(points) > 1:
            pts = [_ipt(view.to_screen(x, y)) for (x, y) in points]
            pygame.draw.lines(self.screen, color, closed, pts, width)

    def draw_ring(self, view, radius, color, width=1, center=(0.0, 0.0)):
        r = int(view.length(radius))
        if r >= 1:
            pygame.draw.circle(self.screen, color, _ipt(view.to_screen(*center)), r, width)

    def draw_spacetime(self, snap):
        angle = self.session.params.view_angle
        projected = [(project(g.x, g.y, g.z, angle), g.z) for g in snap["grid"]]
        if not projected:
            return
        view = ExtentViewport([q[0] for q, _ in projected], [q[1] for q, _ in projected],
                              self.width, self.height)
        depths = [q[2] for q, _ in projected]
        zs = [z for _, z in projected]
        d_min, d_max = min(depths), max(depths)
        z_min, z_max = min(zs), max(zs)
        for q, z in projected:
            near = 1.0 - depth_factor(q[2], d_min, d_max)
            color = ramp_color(1.0 - depth_factor(z, z_min, z_max))
            pygame.draw.circle(self.screen, color, _ipt(view.to_screen(q[0], q[1])),
                               int(2 + 3 * near))
        for ray in snap["rays"]:
            pts = [project(g.x, g.y, g.z, angle) for g in ray]
            self.draw_outline(view, [(q[0], q[1]) for q in pts], RAY_COLOR, width=2)

    def draw_particles(self, snap):
        view = Viewport(self.width, self.height)
        mass = self.session.params.mass
        pygame.draw.circle(self.screen, MASS_COLOR, _ipt(view.to_screen(0, 0)),
                           int(max(5, min(20, mass / 2))))
        self.draw_ring(view, snap["horizon"], HORIZON_COLOR)
        if snap["ergosphere"]:
            self.draw_ring(view, snap["ergosphere"], ERGO_COLOR)
        for p in snap["particles"]:
            if self.show_trails and len(p.trail) > 1:
                self.draw_outline(view, list(p.trail), p.color)
            pygame.draw.circle(self.screen, p.color, _ipt(view.to_screen(p.x, p.y)),
                               max(1, int(p.size)))

    def draw_waves(self, snap):
        view = Viewport(self.width, self.height)
        for w in snap["samples"]:
            end = _ipt(view.to_screen(w.x, w.y))
            pygame.draw.line(self.screen, GRID_COLOR, _ipt(view.to_screen(w.source_x, w.source_y)), end)
            palette = SOURCE_COLORS if w.displacement > 0 else FAINT_SOURCE_COLORS
            pygame.draw.circle(self.screen, palette[w.source_index], end,
                               int(abs(w.displacement) * 3 + 1))
        (x1, y1), (x2, y2) = snap["sources"]
        pygame.draw.line(self.screen, (170, 170, 170), _ipt(view.to_screen(x1, y1)),
                         _ipt(view.to_screen(x2, y2)))
        pygame.draw.circle(self.screen, SOURCE_COLORS[1], _ipt(view.to_screen(x1, y1)), 6)
        pygame.draw.circle(self.screen, SOURCE_COLORS[2], _ipt(view.to_screen(x2, y2)), 6)

    def draw_observer(self, snap):
        view = Viewport(self.width, self.height)
        for radius, apparent in snap["circles"]:
            self.draw_ring(view, apparent, GRID_COLOR)
        for line in snap["lines"]:
            self.draw_outline(view, line, GRID_COLOR)
        pygame.draw.circle(self.screen, MASS_COLOR, _ipt(view.to_screen(0, 0)),
                           int(max(2, self.session.params.mass * 0.5)))
        pygame.draw.circle(self.screen, (76, 175, 80), _ipt(view.to_screen(0, 0)), 6)
        a = snap["apparent"]
        pygame.draw.line(self.screen, (170, 170, 170), _ipt(view.to_screen(a.x, a.y)),
                         _ipt(view.to_screen(a.actual_x, a.actual_y)))
        pygame.draw.circle(self.screen, (153, 153, 153), _ipt(view.to_screen(a.actual_x, a.actual_y)), 3)
        pygame.draw.circle(self.screen, SOURCE_COLORS[2], _ipt(view.to_screen(a.x, a.y)), 6)

    def draw_extreme(self, snap):
        view = Viewport(self.width, self.height)
        kind = snap["object"]
        if kind == "blackhole":
            f = snap["features"]
            for r in f.disc_rings:
                self.draw_ring(view, r, (255, 120, 30))
            self.draw_ring(view, f.horizon, (0, 0, 0), width=0)
            self.draw_ring(view, f.horizon, HORIZON_COLOR)
            self.draw_ring(view, f.photon_sphere, RAY_COLOR)
        elif kind == "neutron":
            f = snap["features"]
            for line in f.field_lines:
                self.draw_outline(view, line, (100, 181, 246))
            for j in f.north_jet + f.south_jet:
                self.draw_ring(view, max(j.width, 0.05), (200, 230, 255), width=0, center=(j.x, j.y))
            self.draw_ring(view, f.radius, (255, 255, 255), width=0)
        elif kind == "kerr":
            f = snap["features"]
            self.draw_outline(view, f.ergosphere, ERGO_COLOR, closed=True)
            self.draw_outline(view, f.horizon, HORIZON_COLOR, closed=True)
            for x, y in f.frame_dragging:
                pygame.draw.circle(self.screen, (120, 200, 255), _ipt(view.to_screen(x, y)), 2)
        elif kind == "merger":
            for ring in snap["wavefronts"]:
                self.draw_outline(view, ring, (60, 90, 160), closed=True)
            self.draw_ring(view, snap["state"].separation, GRID_COLOR)
            for body, horizon, color in zip(snap["bodies"], snap["horizons"],
                                            (SOURCE_COLORS[1], SOURCE_COLORS[2])):
                pygame.draw.circle(self.screen, color, _ipt(view.to_screen(*body)),
                                   max(3, int(view.length(horizon))))

    def draw_singularity(self, snap):
        max_radius = min(self.width, self.height) / 2.5
        # debate geometry is in units of max_radius
        view = Viewport(self.width, self.height, world_span=min(self.width, self.height) / max_radius)
        v = snap["view"]
        self.draw_ring(view, debate.OUTER_HORIZON, HORIZON_COLOR)
        self.draw_ring(view, debate.INNER_HORIZON, ERGO_COLOR)
        self.draw_outline(view, v.ring, (255, 120, 30), closed=True, width=2)
        for path in v.geodesics:
            self.draw_outline(view, path, RAY_COLOR)
        y = self.height - 70
        for line in [v.title] + v.caption:
            self.screen.blit(self.font.render(line, True, HUD_COLOR), (20, y))
            y += 18
        if snap["consensus"]:
            x = self.width * 0.15
            for label, share in snap["consensus"]:
                w = int(self.width * 0.7 * share)
                pygame.draw.rect(self.screen, (70, 110, 200), (int(x), 100, max(w, 1), 30))
                self.screen.blit(self.font.render(label, True, HUD_COLOR), (int(x), 135))
                x += w

    def draw(self, snapshot):
        self.screen.fill(BG_COLOR)
        if snapshot:
            getattr(self, "draw_" + snapshot["tab"])(snapshot)
        self.draw_hud(snapshot)
        pygame.display.flip()

    def run(self, max_frames=None):
        frames = 0
        while self.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                elif event.type == pygame.KEYDOWN:
                    self.handle_key(event)

            self.draw(self.frame_clock.tick())
            self.clock.tick(FPS)

            frames += 1
            if max_frames is not None and frames >= max_frames:
                break

        pygame.quit()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Interactive general-relativity visualizer")
    parser.add_argument("--tab", choices=TABS, default="spacetime")
    parser.add_argument("--minimal", action="store_true",
                        help="only the spacetime and singularity tabs")
    parser.add_argument("--mass", type=float, default=10.0)
    parser.add_argument("--spin", type=float, default=0.0)
    parser.add_argument("--particles", type=int, default=50)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--frames", type=int, default=None,
                        help="quit after this many frames")
    parser.add_argument("--paused", action="store_true")
    parser.add_argument("--log-level", default="INFO")
    parser.add_argument("--log-file", default=None)
    args = parser.parse_args(argv)

    setup_logging(getattr(logging, args.log_level.upper(), logging.INFO), args.log_file)

    features = MINIMAL if args.minimal else EXTENDED
    params = SimulationParams(mass=args.mass, spin=args.spin,
                              particle_count=args.particles).clamped()
    session = Session(params, features, rng=random.Random(args.seed))
    if args.tab in features.tabs:
        session.set_tab(args.tab)
    else:
        logger.warning("Tab %s is not available in the minimal feature set", args.tab)

    viewer = RelativityViewer(session)
    if not args.paused:
        viewer.frame_clock.start()
    logger.info("Starting viewer on %s tab", session.active_tab)
    viewer.run(max_frames=args.frames)
