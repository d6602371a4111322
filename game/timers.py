from dataclasses import dataclass
from typing import Callable, List


@dataclass(eq=False)
class TimerHandle:
    due_ms: int
    callback: Callable[[int], None]
    cancelled: bool = False
    fired: bool = False
    seq: int = 0


class TimerQueue:
    """
    One-shot таймеры, которые "тикают" от игрового цикла.

    Игровой цикл каждый кадр вызывает poll(now_ms) — все таймеры,
    у которых наступил срок, срабатывают (callback получает now_ms).
    Отменённый таймер никогда не срабатывает.
    """

    def __init__(self) -> None:
        self._timers: List[TimerHandle] = []
        self._seq = 0

    def schedule(self, now_ms: int, delay_ms: int, callback: Callable[[int], None]) -> TimerHandle:
        self._seq += 1
        handle = TimerHandle(due_ms=now_ms + delay_ms, callback=callback, seq=self._seq)
        self._timers.append(handle)
        return handle

    def cancel(self, handle: TimerHandle) -> None:
        handle.cancelled = True
        if handle in self._timers:
            self._timers.remove(handle)

    def poll(self, now_ms: int) -> int:
        due = [t for t in self._timers if t.due_ms <= now_ms]
        if not due:
            return 0
        due.sort(key=lambda t: (t.due_ms, t.seq))
        fired = 0
        for handle in due:
            # callback предыдущего таймера мог отменить этот
            if handle.cancelled:
                continue
            self._timers.remove(handle)
            handle.fired = True
            handle.callback(now_ms)
            fired += 1
        return fired

    def pending(self) -> int:
        return len(self._timers)

    def clear(self) -> None:
        for handle in self._timers:
            handle.cancelled = True
        self._timers = []
