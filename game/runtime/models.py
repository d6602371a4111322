from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union


class Phase(Enum):
    IDLE = "idle"
    WAITING = "waiting"
    READY = "ready"
    GAME_OVER = "gameover"


@dataclass(frozen=True)
class SessionResult:
    times: Tuple[float, ...]
    average: float

    @classmethod
    def from_times(cls, times) -> "SessionResult":
        times = tuple(times)
        return cls(times=times, average=sum(times) / len(times))


@dataclass(frozen=True)
class Identity:
    username: str
    best_time_ms: Optional[float] = None
    authenticated: bool = True


# --- результаты handle_trigger ---

@dataclass(frozen=True)
class Ignored:
    pass


@dataclass(frozen=True)
class Armed:
    delay_ms: int


@dataclass(frozen=True)
class FalseStart:
    pass


@dataclass(frozen=True)
class TrialRecorded:
    reaction_ms: float
    trial_index: int


@dataclass(frozen=True)
class SessionFinished:
    result: SessionResult


TriggerOutcome = Union[Ignored, Armed, FalseStart, TrialRecorded, SessionFinished]


# --- результаты submit ---

@dataclass(frozen=True)
class Skipped:
    pass


@dataclass(frozen=True)
class NewBest:
    best_time_ms: float


@dataclass(frozen=True)
class NoImprovement:
    pass


@dataclass(frozen=True)
class Failed:
    reason: str


SubmitOutcome = Union[Skipped, NewBest, NoImprovement, Failed]


# --- результаты login / register ---

@dataclass(frozen=True)
class LoggedIn:
    identity: Identity


@dataclass(frozen=True)
class NotFound:
    message: str = "User not found. Please register first."


@dataclass(frozen=True)
class Registered:
    message: str = "User registered! Now log in."


@dataclass(frozen=True)
class Conflict:
    message: str


@dataclass(frozen=True)
class AuthError:
    message: str


LoginOutcome = Union[LoggedIn, NotFound, AuthError]
RegisterOutcome = Union[Registered, Conflict, AuthError]
