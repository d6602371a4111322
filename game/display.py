from dataclasses import dataclass
from typing import Optional

from game.runtime.models import (
    FalseStart,
    Identity,
    Phase,
    SessionFinished,
    TrialRecorded,
)
from game.state_machine import TrialStateMachine

MSG_START = "Press SPACE or TAP to start"
MSG_WAIT = "Wait for green..."
MSG_GO = "GO!"
MSG_TOO_SOON = "Too soon! Press SPACE or TAP to try again"

COLOR_NEUTRAL = "neutral"
COLOR_ALERT = "alert"
COLOR_GO = "go"

PHASE_COLORS = {
    Phase.IDLE: COLOR_NEUTRAL,
    Phase.WAITING: COLOR_ALERT,
    Phase.READY: COLOR_GO,
    Phase.GAME_OVER: COLOR_NEUTRAL,
}


@dataclass(frozen=True)
class DisplayState:
    message: str
    color: str
    reaction_time_ms: Optional[float]
    trial_count: str
    final_average: Optional[float]
    show_restart: bool


def build_display(machine: TrialStateMachine, last_outcome=None) -> DisplayState:
    phase = machine.phase
    total = machine.trials_per_session
    done = len(machine.completed_times)

    reaction_time = None
    if phase == Phase.IDLE and isinstance(last_outcome, TrialRecorded):
        reaction_time = last_outcome.reaction_ms
    elif phase == Phase.GAME_OVER and done:
        reaction_time = machine.completed_times[-1]

    final_average = None
    if phase == Phase.WAITING:
        message = MSG_WAIT
    elif phase == Phase.READY:
        message = MSG_GO
    elif phase == Phase.GAME_OVER:
        if isinstance(last_outcome, SessionFinished):
            final_average = last_outcome.result.average
        else:
            final_average = sum(machine.completed_times) / done
        message = f"Average: {final_average:.2f} ms"
    elif isinstance(last_outcome, FalseStart):
        message = MSG_TOO_SOON
    elif isinstance(last_outcome, TrialRecorded):
        message = f"Run {last_outcome.trial_index}/{total} done. Press SPACE or TAP for next."
    else:
        message = MSG_START

    return DisplayState(
        message=message,
        color=PHASE_COLORS[phase],
        reaction_time_ms=reaction_time,
        trial_count=f"{done}/{total}",
        final_average=final_average,
        show_restart=phase == Phase.GAME_OVER,
    )


def format_ms(value: Optional[float]) -> str:
    if value is None:
        return "N/A"
    if float(value).is_integer():
        return f"{int(value)} ms"
    return f"{value:.2f} ms"


def best_time_text(identity: Optional[Identity]) -> str:
    if identity is None:
        return ""
    return f"Best Time: {format_ms(identity.best_time_ms)}"
