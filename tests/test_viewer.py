import logging
import os
import random

import pytest

pygame = pytest.importorskip("pygame")

from relviz.session import TABS, Session, SimulationParams  # noqa: E402
from relviz.viewer import RelativityViewer, main, ramp_color  # noqa: E402


@pytest.fixture(autouse=True)
def headless(monkeypatch):
    monkeypatch.setitem(os.environ, "SDL_VIDEODRIVER", "dummy")
    monkeypatch.setitem(os.environ, "SDL_AUDIODRIVER", "dummy")
    yield
    pygame.quit()


def test_ramp_color_endpoints():
    assert ramp_color(0.0) == (68, 1, 84)
    assert ramp_color(1.0) == (253, 231, 37)
    assert ramp_color(-3.0) == ramp_color(0.0)


def test_viewer_draws_every_tab():
    session = Session(SimulationParams(spin=0.4), rng=random.Random(1))
    viewer = RelativityViewer(session, width=400, height=300)
    viewer.frame_clock.start()
    for tab in TABS:
        session.set_tab(tab)
        viewer.draw(viewer.frame_clock.tick())
    for kind in ("neutron", "kerr", "merger"):
        viewer.change_params(extreme_object=kind)
        session.set_tab("extreme")
        viewer.draw(viewer.frame_clock.tick())
    viewer.change_params(show_consensus=True)
    session.set_tab("singularity")
    viewer.draw(viewer.frame_clock.tick())


def test_key_controls_clamp_parameters():
    session = Session(rng=random.Random(1))
    viewer = RelativityViewer(session, width=400, height=300)
    for _ in range(60):
        viewer.handle_key(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_UP))
        viewer.handle_key(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_RIGHT))
    assert session.params.mass == 50
    assert session.params.spin == 1.0
    viewer.handle_key(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_2))
    assert session.active_tab == "particles"
    viewer.handle_key(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE))
    assert viewer.running is False


def test_main_runs_a_few_frames():
    main(["--tab", "particles", "--frames", "3", "--seed", "4", "--log-level", "WARNING"])


def test_main_writes_log_file(tmp_path):
    log_file = tmp_path / "viewer.log"
    main(["--frames", "1", "--seed", "2", "--log-file", str(log_file)])
    logger = logging.getLogger("relviz")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    assert "Starting viewer on spacetime tab" in log_file.read_text(encoding="utf-8")
