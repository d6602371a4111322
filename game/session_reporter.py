import logging
from typing import Optional

from data.scoring_client import ScoringClient, ServiceUnavailable
from game.runtime.models import (
    Failed,
    Identity,
    NewBest,
    NoImprovement,
    SessionResult,
    Skipped,
    SubmitOutcome,
)

logger = logging.getLogger(__name__)


class SessionReporter:
    """
    Sends a finished session's average to the scoring service.

    Anonymous play is never reported. A failed submission is final: nothing
    is queued or retried, and the caller may start a new session right away.
    """

    def __init__(self, client: ScoringClient) -> None:
        self.client = client

    def submit(self, result: SessionResult, identity: Optional[Identity]) -> SubmitOutcome:
        if identity is None or not identity.authenticated or not identity.username:
            logger.debug("submit skipped: no logged-in identity")
            return Skipped()

        try:
            resp = self.client.update(identity.username, result.average)
        except ServiceUnavailable as exc:
            logger.error("failed to send average for %r: %s", identity.username, exc)
            return Failed(f"connection error: {exc}")
        if not resp.ok:
            logger.error("failed to send average for %r: status %s", identity.username, resp.status)
            return Failed(f"server responded with status {resp.status}")

        logger.info("server: %s", resp.payload)
        if identity.best_time_ms is None or result.average < identity.best_time_ms:
            return NewBest(result.average)
        return NoImprovement()
