import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, List, Tuple

logger = logging.getLogger(__name__)


class ReportingWorker:
    """
    Runs blocking service calls off the game loop.

    Jobs execute on a single background thread; their callbacks run on the
    caller's thread from poll(), so game state is only touched by the loop.
    """

    def __init__(self) -> None:
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="reporting")
        self._jobs: List[Tuple[Future, Callable[[Any], None]]] = []

    def submit(self, fn: Callable[..., Any], *args, on_done: Callable[[Any], None]) -> Future:
        future = self._executor.submit(fn, *args)
        self._jobs.append((future, on_done))
        return future

    def poll(self) -> int:
        finished = [(f, cb) for f, cb in self._jobs if f.done()]
        if not finished:
            return 0
        done_ids = {id(f) for f, _ in finished}
        self._jobs = [(f, cb) for f, cb in self._jobs if id(f) not in done_ids]
        for future, on_done in finished:
            exc = future.exception()
            if exc is not None:
                logger.error("background job failed: %r", exc)
                continue
            on_done(future.result())
        return len(finished)

    def busy(self) -> bool:
        return any(not f.done() for f, _ in self._jobs)

    def shutdown(self, wait: bool = False) -> None:
        self._executor.shutdown(wait=wait)
