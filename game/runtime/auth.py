import logging
from typing import Optional

from data.scoring_client import ScoringClient, ServiceUnavailable
from game.runtime.models import (
    AuthError,
    Conflict,
    Identity,
    LoggedIn,
    LoginOutcome,
    NotFound,
    RegisterOutcome,
    Registered,
)

logger = logging.getLogger(__name__)

EMPTY_USERNAME = "Enter username first"


class AuthService:
    def __init__(self, client: ScoringClient) -> None:
        self.client = client

    def register(self, username: str) -> RegisterOutcome:
        username = (username or "").strip()
        if not username:
            return AuthError(EMPTY_USERNAME)
        try:
            resp = self.client.register(username)
        except ServiceUnavailable as exc:
            logger.error("register failed: %s", exc)
            return AuthError("Registration failed")
        if not resp.ok:
            message = str(resp.payload.get("message") or "Registration failed")
            logger.info("register %r rejected (%s): %s", username, resp.status, message)
            return Conflict(message)
        logger.info("registered %r", username)
        return Registered()

    def login(self, username: str) -> LoginOutcome:
        username = (username or "").strip()
        if not username:
            return AuthError(EMPTY_USERNAME)
        try:
            resp = self.client.login(username)
        except ServiceUnavailable as exc:
            logger.error("login failed: %s", exc)
            return AuthError("Login failed")
        if resp.status == 404:
            logger.info("login %r: user not found", username)
            return NotFound()
        if not resp.ok:
            logger.warning("login %r failed with status %s", username, resp.status)
            return AuthError("Login failed")
        best = _parse_best_time(resp.payload.get("reactionTime"))
        logger.info("logged in %r, best time %s", username, best)
        return LoggedIn(Identity(username=username, best_time_ms=best))


def _parse_best_time(value) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None
