import logging
import random
from dataclasses import replace
from typing import Optional

import pygame

from config.settings import ServiceConfig, TrialConfig, WindowConfig
from data.scoring_client import ScoringClient
from game.display import best_time_text, build_display, format_ms
from game.input import InputManager
from game.input_handlers import handle_mouse, handle_username_event
from game.renderer import Renderer
from game.reporting import ReportingWorker
from game.runtime.auth import AuthService
from game.runtime.models import (
    AuthError,
    Conflict,
    Failed,
    Identity,
    LoggedIn,
    NewBest,
    NotFound,
    Phase,
    Registered,
    SessionFinished,
    SessionResult,
)
from game.session_reporter import SessionReporter
from game.state_machine import TrialStateMachine
from game.timers import TimerQueue

logger = logging.getLogger(__name__)


class ReactionApp:
    def __init__(
        self,
        window: WindowConfig,
        trials: TrialConfig,
        service: ServiceConfig,
        seed: Optional[int] = None,
    ) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode((window.width, window.height))
        pygame.display.set_caption(window.title)
        self.clock = pygame.time.Clock()
        self.window = window

        self.renderer = Renderer(self.screen)
        self.input = InputManager(self.renderer.game_area, self.screen.get_size())
        self.timers = TimerQueue()
        self.machine = TrialStateMachine(self.timers, trials, rng=random.Random(seed))

        client = ScoringClient(service.base_url, service.timeout_sec)
        self.auth = AuthService(client)
        self.reporter = SessionReporter(client)
        self.worker = ReportingWorker()

        self.identity: Optional[Identity] = None
        self.username: str = ""
        self.username_focused: bool = False
        self.notice: str = ""
        self.last_outcome = None
        self.last_result: Optional[SessionResult] = None
        self.running = True

    def run(self) -> None:
        try:
            while self.running:
                self.clock.tick(self.window.fps)
                now_ms = pygame.time.get_ticks()

                for event in pygame.event.get():
                    self.handle_event(event, now_ms)

                # триггеры этого кадра уже обработаны: фальстарт отменяет таймер раньше, чем он сработает
                self.timers.poll(now_ms)
                self.worker.poll()
                self._render()
        finally:
            self.machine.shutdown()
            self.worker.shutdown()
            pygame.quit()

    def handle_event(self, event, now_ms: int) -> None:
        if event.type == pygame.QUIT:
            self.running = False
            return
        if handle_username_event(self, event):
            return
        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            self.running = False
            return
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if handle_mouse(self, event.pos):
                return
        if self.input.is_activate(event):
            self.trigger(now_ms)

    def trigger(self, now_ms: int) -> None:
        outcome = self.machine.handle_trigger(now_ms)
        if isinstance(outcome, SessionFinished):
            self.last_result = outcome.result
        self.last_outcome = outcome

    def machine_finished(self) -> bool:
        return self.machine.phase == Phase.GAME_OVER

    def restart(self) -> None:
        if self.last_result is None:
            return
        result = self.last_result
        if self.identity is not None:
            self.worker.submit(self.reporter.submit, result, self.identity, on_done=self._on_submitted)
        self.last_result = None
        self.last_outcome = None
        self.machine.reset()

    def submit_login(self) -> None:
        if not self.username.strip():
            self.notice = "Enter username first"
            return
        self.worker.submit(self.auth.login, self.username, on_done=self._on_login)

    def submit_register(self) -> None:
        if not self.username.strip():
            self.notice = "Enter username first"
            return
        self.worker.submit(self.auth.register, self.username, on_done=self._on_register)

    def _on_login(self, outcome) -> None:
        if isinstance(outcome, LoggedIn):
            self.identity = outcome.identity
            self.username_focused = False
            best = outcome.identity.best_time_ms
            self.notice = f"Logged in! Your best time: {format_ms(best)}"
        elif isinstance(outcome, (NotFound, AuthError)):
            self.notice = outcome.message

    def _on_register(self, outcome) -> None:
        if isinstance(outcome, (Registered, Conflict, AuthError)):
            self.notice = outcome.message

    def _on_submitted(self, outcome) -> None:
        if isinstance(outcome, NewBest) and self.identity is not None:
            self.identity = replace(self.identity, best_time_ms=outcome.best_time_ms)
        elif isinstance(outcome, Failed):
            self.notice = "Failed to save score"

    def _render(self) -> None:
        self.renderer.clear()
        self.renderer.draw_auth_panel(
            username=self.username,
            focused=self.username_focused,
            logged_in=self.identity is not None,
            best_time=best_time_text(self.identity),
            notice=self.notice,
        )
        self.renderer.draw_game_area(build_display(self.machine, self.last_outcome))
        self.renderer.present()
