import logging
import random
from typing import List, Optional

from config.settings import TrialConfig
from game.runtime.models import (
    Armed,
    FalseStart,
    Ignored,
    Phase,
    SessionFinished,
    SessionResult,
    TrialRecorded,
    TriggerOutcome,
)

logger = logging.getLogger(__name__)


class InvariantViolation(RuntimeError):
    """Внутренний инвариант машины нарушен — это ошибка в коде, а не ввод игрока."""


class TrialStateMachine:
    """
    "Мозг" игры на время реакции.

    Идея:
    - игра идёт по фазам IDLE -> WAITING -> READY -> IDLE ... -> GAME_OVER
    - handle_trigger(now_ms) вызывается на каждое нажатие (пробел / клик / тап)
    - on_stimulus_fire(now_ms) вызывает таймер, когда экран становится зелёным
    - после трёх попыток handle_trigger возвращает SessionFinished

    scheduler — любой объект с методами schedule(now_ms, delay_ms, callback)
    и cancel(handle), например game.timers.TimerQueue.
    """

    def __init__(self, scheduler, config: Optional[TrialConfig] = None, rng: Optional[random.Random] = None):
        self.scheduler = scheduler
        self.config = config or TrialConfig()
        self.rng = rng or random.Random()

        # какая сейчас фаза
        self.phase: Phase = Phase.IDLE

        # когда экран стал зелёным (только в READY)
        self.stimulus_at_ms: Optional[int] = None

        # handle запланированного стимула (только в WAITING)
        self.pending_timer = None

        # номер "поколения" таймера: callback старого таймера видит чужой номер и ничего не делает
        self._timer_generation: int = 0

        # времена реакции завершённых попыток, по порядку
        self.completed_times: List[float] = []

    @property
    def trials_per_session(self) -> int:
        return self.config.trials_per_session

    def draw_delay_ms(self) -> int:
        return int(self.rng.random() * self.config.delay_span_ms) + self.config.min_delay_ms

    def handle_trigger(self, now_ms: int) -> TriggerOutcome:
        if self.phase == Phase.GAME_OVER:
            return Ignored()

        if self.phase == Phase.IDLE:
            return self._arm(now_ms)

        if self.phase == Phase.WAITING:
            return self._false_start()

        if self.phase == Phase.READY:
            return self._record(now_ms)

        # Если фаза вдруг неизвестная — это ошибка в коде
        raise InvariantViolation(f"Unknown phase: {self.phase}")

    def on_stimulus_fire(self, now_ms: int) -> None:
        # таймер мог сработать уже после фальстарта
        if self.phase != Phase.WAITING:
            return
        self.pending_timer = None
        self.stimulus_at_ms = now_ms
        self.phase = Phase.READY
        logger.debug("stimulus shown at %s ms", now_ms)

    def reset(self) -> None:
        if self.phase != Phase.GAME_OVER:
            logger.warning("reset() called in phase %s; ignored", self.phase.value)
            return
        self.completed_times = []
        self.stimulus_at_ms = None
        self.phase = Phase.IDLE
        logger.info("session reset")

    def shutdown(self) -> None:
        """Отменить таймер (например, при закрытии окна)."""
        if self.phase == Phase.WAITING:
            self._cancel_pending()
            self.phase = Phase.IDLE

    # --------------------------
    # Обработчики фаз
    # --------------------------

    def _arm(self, now_ms: int) -> Armed:
        delay_ms = self.draw_delay_ms()
        self._timer_generation += 1
        generation = self._timer_generation

        def fire(fire_ms: int) -> None:
            if generation != self._timer_generation:
                return
            self.on_stimulus_fire(fire_ms)

        self.phase = Phase.WAITING
        self.pending_timer = self.scheduler.schedule(now_ms, delay_ms, fire)
        logger.info("trial %d armed, stimulus in %d ms", len(self.completed_times) + 1, delay_ms)
        return Armed(delay_ms=delay_ms)

    def _false_start(self) -> FalseStart:
        self._cancel_pending()
        self.phase = Phase.IDLE
        logger.info("false start on trial %d", len(self.completed_times) + 1)
        return FalseStart()

    def _record(self, now_ms: int) -> TriggerOutcome:
        if self.stimulus_at_ms is None:
            raise InvariantViolation("READY phase without a stimulus timestamp")
        reaction_ms = now_ms - self.stimulus_at_ms
        if reaction_ms < 0:
            raise InvariantViolation(
                f"negative reaction time: trigger at {now_ms} before stimulus at {self.stimulus_at_ms}"
            )

        self.completed_times.append(reaction_ms)
        self.stimulus_at_ms = None
        trial_index = len(self.completed_times)
        logger.info("trial %d recorded: %s ms", trial_index, reaction_ms)

        if trial_index == self.trials_per_session:
            result = SessionResult.from_times(self.completed_times)
            self.phase = Phase.GAME_OVER
            logger.info("session finished, average %.2f ms", result.average)
            return SessionFinished(result=result)

        self.phase = Phase.IDLE
        return TrialRecorded(reaction_ms=reaction_ms, trial_index=trial_index)

    def _cancel_pending(self) -> None:
        # сначала делаем старый callback "мёртвым", потом отменяем сам таймер
        self._timer_generation += 1
        if self.pending_timer is not None:
            self.scheduler.cancel(self.pending_timer)
            self.pending_timer = None
