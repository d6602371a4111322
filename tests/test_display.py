from config.settings import TrialConfig
from game.display import (
    COLOR_ALERT,
    COLOR_GO,
    COLOR_NEUTRAL,
    MSG_GO,
    MSG_START,
    MSG_TOO_SOON,
    MSG_WAIT,
    best_time_text,
    build_display,
    format_ms,
)
from game.runtime.models import Identity
from game.state_machine import TrialStateMachine
from game.timers import TimerQueue


class ZeroRandom:
    def random(self):
        return 0.0


def new_machine():
    timers = TimerQueue()
    return TrialStateMachine(timers, TrialConfig(), rng=ZeroRandom()), timers


def test_initial_screen():
    sm, _ = new_machine()
    state = build_display(sm)
    assert state.message == MSG_START
    assert state.color == COLOR_NEUTRAL
    assert state.trial_count == "0/3"
    assert state.reaction_time_ms is None
    assert not state.show_restart


def test_waiting_then_go():
    sm, timers = new_machine()
    outcome = sm.handle_trigger(0)
    state = build_display(sm, outcome)
    assert (state.message, state.color) == (MSG_WAIT, COLOR_ALERT)

    timers.poll(3500)
    state = build_display(sm, outcome)
    assert (state.message, state.color) == (MSG_GO, COLOR_GO)


def test_too_soon_message():
    sm, _ = new_machine()
    sm.handle_trigger(0)
    outcome = sm.handle_trigger(100)
    state = build_display(sm, outcome)
    assert state.message == MSG_TOO_SOON
    assert state.color == COLOR_NEUTRAL


def test_trial_done_shows_reaction_time_and_count():
    sm, timers = new_machine()
    sm.handle_trigger(0)
    timers.poll(3500)
    outcome = sm.handle_trigger(3742)
    state = build_display(sm, outcome)
    assert state.message == "Run 1/3 done. Press SPACE or TAP for next."
    assert state.reaction_time_ms == 242
    assert state.trial_count == "1/3"


def test_game_over_shows_average_and_restart():
    sm, timers = new_machine()
    outcome = None
    for i, reaction in enumerate((250, 300, 276)):
        start = i * 10_000
        sm.handle_trigger(start)
        timers.poll(start + 3500)
        outcome = sm.handle_trigger(start + 3500 + reaction)
    state = build_display(sm, outcome)
    assert state.message == "Average: 275.33 ms"
    assert state.final_average == (250 + 300 + 276) / 3
    assert state.show_restart
    assert state.color == COLOR_NEUTRAL
    assert state.trial_count == "3/3"
    assert state.reaction_time_ms == 276


def test_best_time_text():
    assert best_time_text(None) == ""
    assert best_time_text(Identity("ann", None)) == "Best Time: N/A"
    assert best_time_text(Identity("ann", 275.0)) == "Best Time: 275 ms"
    assert format_ms(275.3333) == "275.33 ms"
