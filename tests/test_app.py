import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest

from config.settings import ServiceConfig, TrialConfig, WindowConfig
from data.scoring_client import ServiceResponse
from fakes import FakeClient
from game.app import ReactionApp
from game.runtime.auth import AuthService
from game.runtime.models import Identity, NotFound, Phase
from game.session_reporter import SessionReporter


@pytest.fixture
def app():
    app = ReactionApp(WindowConfig(width=960, height=720), TrialConfig(), ServiceConfig(), seed=3)
    yield app
    app.worker.shutdown(wait=True)
    pygame.quit()


def drain(app):
    for future, _ in list(app.worker._jobs):
        future.result(timeout=5)
    app.worker.poll()


def play_session(app, reactions):
    now = 0
    for reaction in reactions:
        app.trigger(now)
        fire = app.machine.pending_timer.due_ms
        app.timers.poll(fire)
        app.trigger(fire + reaction)
        now = fire + reaction + 1000


def test_space_press_arms_a_trial(app):
    app.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_SPACE, unicode=" "), 100)
    assert app.machine.phase == Phase.WAITING


def test_restart_saves_score_for_logged_in_user(app):
    client = FakeClient()
    app.reporter = SessionReporter(client)
    app.identity = Identity("ann", best_time_ms=300)

    play_session(app, (250, 300, 275))
    assert app.machine.phase == Phase.GAME_OVER

    click = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=app.renderer.restart_rect.center)
    app.handle_event(click, 50_000)
    assert app.machine.phase == Phase.IDLE
    assert app.machine.completed_times == []

    drain(app)
    assert client.calls == [("update", "ann", 275.0)]
    assert app.identity.best_time_ms == 275.0


def test_restart_without_login_sends_nothing(app):
    client = FakeClient()
    app.reporter = SessionReporter(client)
    play_session(app, (200, 200, 200))
    app.restart()
    drain(app)
    assert client.calls == []
    assert app.machine.phase == Phase.IDLE


def test_login_flow_updates_identity(app):
    app.auth = AuthService(FakeClient(response=ServiceResponse(200, {"reactionTime": 310})))
    app.username = "ann"
    app.submit_login()
    drain(app)
    assert app.identity == Identity("ann", best_time_ms=310.0)
    assert "Logged in" in app.notice


def test_login_unknown_user(app):
    app.auth = AuthService(FakeClient(response=ServiceResponse(404, {})))
    app.username = "ghost"
    app.submit_login()
    drain(app)
    assert app.identity is None
    assert app.notice == NotFound().message


def test_empty_username_is_rejected_locally(app):
    client = FakeClient()
    app.auth = AuthService(client)
    app.submit_register()
    assert app.notice == "Enter username first"
    assert not app.worker.busy()
    assert client.calls == []
