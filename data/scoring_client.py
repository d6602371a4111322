import json
import logging
from http.client import HTTPException
from dataclasses import dataclass, field
from typing import Any
from urllib import error, request
from urllib.parse import urlparse

logger = logging.getLogger(__name__)


class ServiceUnavailable(Exception):
    """Transport-level failure: no HTTP response was received."""


@dataclass(frozen=True)
class ServiceResponse:
    status: int
    payload: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class ScoringClient:
    def __init__(self, base_url: str, timeout_sec: float = 5.0) -> None:
        self.base_url = base_url.strip().rstrip("/")
        self.timeout_sec = max(0.5, timeout_sec)
        self.last_error: str = ""

    @staticmethod
    def is_valid_url(url: str) -> bool:
        parsed = urlparse((url or "").strip())
        return parsed.scheme in ("http", "https") and bool(parsed.netloc)

    def register(self, username: str) -> ServiceResponse:
        return self._post("/register", {"username": username})

    def login(self, username: str) -> ServiceResponse:
        return self._post("/login", {"username": username})

    def update(self, username: str, reaction_time_ms: float) -> ServiceResponse:
        return self._post("/update", {"username": username, "reactionTime": reaction_time_ms})

    def _post(self, path: str, body: dict[str, Any]) -> ServiceResponse:
        url = f"{self.base_url}{path}"
        if not self.is_valid_url(url):
            self.last_error = "invalid_url"
            raise ServiceUnavailable(f"invalid service url: {self.base_url!r}")

        payload = json.dumps(body, ensure_ascii=False).encode("utf-8")
        req = request.Request(
            url,
            data=payload,
            headers={"Content-Type": "application/json"},
            method="POST",
        )
        try:
            with request.urlopen(req, timeout=self.timeout_sec) as resp:
                status = resp.status
                raw = resp.read()
        except error.HTTPError as exc:
            # non-2xx: the body still carries the service's {message}
            status = exc.code
            try:
                raw = exc.read()
            except (OSError, HTTPException):
                raw = b""
        except (error.URLError, TimeoutError, OSError, HTTPException) as exc:
            self.last_error = "connection_error"
            logger.warning("POST %s failed: %s", url, exc)
            raise ServiceUnavailable(str(exc)) from exc

        self.last_error = ""
        logger.debug("POST %s -> %s", url, status)
        return ServiceResponse(status=status, payload=_decode(raw))


def _decode(raw: bytes) -> dict[str, Any]:
    try:
        data = json.loads((raw or b"").decode("utf-8") or "{}")
    except (UnicodeDecodeError, json.JSONDecodeError):
        return {}
    if isinstance(data, dict):
        return data
    return {}
